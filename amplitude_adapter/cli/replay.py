# ==============================================================================
# Replay Command
# ==============================================================================
"""
Replays a file of analytics events through the adapter without sending
anything to Amplitude.

Events run through the same path as in production: the session id middleware
first, then the translator, driving a RecordingClient. The resulting vendor
calls are printed per event.
"""

import json
from pathlib import Path
from typing import Annotated, Optional

import typer

from amplitude_adapter.cli.config import resolve_config
from amplitude_adapter.cli.shared import C, I, format_call
from amplitude_adapter.core.pipeline import AnalyticsPipeline
from amplitude_adapter.core.session import SESSION_KEY, SessionCorrelator
from amplitude_adapter.core.translator import AMPLITUDE_KEY, AmplitudeTranslator
from amplitude_adapter.infrastructure import RecordingClient
from amplitude_adapter.utils.config import get_settings
from amplitude_adapter.utils.events import parse_event_lines


def replay(
    events_file: Annotated[
        Path,
        typer.Argument(
            help="Newline-delimited JSON events",
            exists=True,
            dir_okay=False,
            readable=True,
        ),
    ],
    settings_file: Annotated[
        Optional[Path],
        typer.Option("--settings", "-s", help="JSON settings bag overriding the environment"),
    ] = None,
    json_output: Annotated[
        bool, typer.Option("--json", "-j", help="Output vendor calls as JSON")
    ] = False,
) -> None:
    """Replay events through the adapter and show the resulting Amplitude calls."""
    config = resolve_config(settings_file)
    settings = get_settings()

    translator = AmplitudeTranslator(RecordingClient(), config)
    pipeline = AnalyticsPipeline(
        middlewares=[SessionCorrelator(idle_window_ms=settings.session.idle_timeout_ms)],
        destinations=[translator],
    )

    results = []
    with events_file.open() as f:
        for event in parse_event_lines(f):
            resolved = pipeline.resolve(event)
            calls = pipeline.deliver(resolved).get(AMPLITUDE_KEY, [])
            results.append(
                {
                    "type": event.type,
                    "session_id": resolved.integration_options(SESSION_KEY).get("session_id"),
                    "calls": calls,
                }
            )
    flush_calls = translator.flush()

    if json_output:
        output = {
            "events": [
                {**result, "calls": [call.to_dict() for call in result["calls"]]}
                for result in results
            ],
            "flush": [call.to_dict() for call in flush_calls],
        }
        print(json.dumps(output, indent=2, default=str))
        return

    print()
    for result in results:
        print(f"{C.CYAN}{result['type']}{C.RESET}  {C.DIM}session={result['session_id']}{C.RESET}")
        if not result["calls"]:
            print(f"  {C.DIM}(no calls){C.RESET}")
        for call in result["calls"]:
            print(f"  {I.ARROW} {format_call(call)}")
    print()
    total = sum(len(result["calls"]) for result in results)
    print(f"{C.GREEN}{I.CHECK}{C.RESET} {len(results)} events replayed, {total} calls issued")
