# ==============================================================================
# Config Commands
# ==============================================================================
"""
Configuration commands for the amplitude-adapter CLI.
"""

import json
from pathlib import Path
from typing import Annotated, Optional

import typer
from pydantic import ValidationError

from amplitude_adapter.cli.shared import C, I
from amplitude_adapter.core.config import AmplitudeConfig
from amplitude_adapter.utils.config import get_settings
from amplitude_adapter.utils.events import load_settings_bag


def resolve_config(settings_file: Optional[Path]) -> AmplitudeConfig:
    """
    Build the translator configuration.

    A settings bag file, when given, replaces the environment settings.

    Raises:
        typer.Exit: If the settings file cannot be read or validated
    """
    if settings_file is None:
        return get_settings().amplitude.to_config()

    try:
        return AmplitudeConfig.from_settings(load_settings_bag(settings_file))
    except (OSError, ValueError, ValidationError) as e:
        print(f"{C.RED}{I.CROSS} Invalid settings file {settings_file}: {e}{C.RESET}")
        raise typer.Exit(1)


def config_show(
    settings_file: Annotated[
        Optional[Path],
        typer.Option("--settings", "-s", help="JSON settings bag overriding the environment"),
    ] = None,
    json_output: Annotated[
        bool, typer.Option("--json", "-j", help="Output configuration as JSON")
    ] = False,
) -> None:
    """Display the effective adapter configuration."""
    config = resolve_config(settings_file)
    settings = get_settings()

    if json_output:
        data = config.model_dump(mode="json")
        data["traits_to_increment"] = sorted(config.traits_to_increment)
        data["traits_to_set_once"] = sorted(config.traits_to_set_once)
        output = {
            "amplitude": data,
            "session": {"idle_timeout_ms": settings.session.idle_timeout_ms},
            "log_level": settings.log_level,
        }
        print(json.dumps(output, indent=2))
        return

    def flag(value: bool) -> str:
        return f"{C.GREEN}enabled{C.RESET}" if value else f"{C.DIM}disabled{C.RESET}"

    print()
    print(f"{C.BOLD}Configuration{C.RESET}")
    print()

    print(f"{C.CYAN}Amplitude{C.RESET}")
    api_key = "set" if config.api_key else "not set"
    print(f"  API key:          {C.WHITE}{api_key}{C.RESET}")
    print(f"  Revenue v2:       {flag(config.use_log_revenue_v2)}")
    print(f"  Session events:   {flag(config.track_session_events)}")
    print()

    print(f"{C.CYAN}Screens{C.RESET}")
    print(f"  All pages (v2):   {flag(config.track_all_pages_v2)}")
    print(f"  All pages:        {flag(config.track_all_pages)}")
    print(f"  Categorized:      {flag(config.track_categorized_pages)}")
    print(f"  Named:            {flag(config.track_named_pages)}")
    print()

    print(f"{C.CYAN}Traits{C.RESET}")
    print(f"  Group type:       {C.WHITE}{config.group_type_trait or '-'}{C.RESET}")
    print(f"  Group value:      {C.WHITE}{config.group_value_trait or '-'}{C.RESET}")
    increment = ", ".join(sorted(config.traits_to_increment)) or "-"
    set_once = ", ".join(sorted(config.traits_to_set_once)) or "-"
    print(f"  Increment:        {C.WHITE}{increment}{C.RESET}")
    print(f"  Set once:         {C.WHITE}{set_once}{C.RESET}")
    print()

    print(f"{C.CYAN}Session{C.RESET}")
    print(f"  Idle timeout:     {C.WHITE}{settings.session.idle_timeout_ms:,} ms{C.RESET}")
    print()
