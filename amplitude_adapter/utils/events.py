# ==============================================================================
# Event Input Utilities
# ==============================================================================
"""
Parsing of newline-delimited JSON event streams.

Handles multiple line formats:
- A bare event object
- An event nested in a 'message' key (pipeline envelope)

Lines that are blank, not JSON, or not a valid event are logged and skipped.
"""

import json
import logging
from collections.abc import Generator, Iterable
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from amplitude_adapter.core.models import BaseEvent, parse_event

logger = logging.getLogger(__name__)


def parse_event_lines(lines: Iterable[str]) -> Generator[BaseEvent, None, None]:
    """
    Parse JSON lines and yield valid events.

    Args:
        lines: Iterable of text lines, one JSON object per line

    Yields:
        Validated analytics events, in input order
    """
    for line_number, line in enumerate(lines, start=1):
        line = line.strip()
        if not line:
            continue

        try:
            data = json.loads(line)
        except json.JSONDecodeError as e:
            logger.warning("Skipping line %d: invalid JSON (%s)", line_number, e)
            continue

        if isinstance(data, dict) and isinstance(data.get("message"), dict):
            data = data["message"]

        if not isinstance(data, dict):
            logger.warning("Skipping line %d: expected a JSON object", line_number)
            continue

        try:
            yield parse_event(data)
        except ValidationError as e:
            logger.warning(
                "Skipping line %d: invalid %s event (%d errors)",
                line_number,
                data.get("type", "unknown"),
                e.error_count(),
            )


def load_settings_bag(path: Path) -> dict[str, Any]:
    """
    Load a flat destination settings bag from a JSON file.

    Raises:
        ValueError: If the file does not hold a JSON object
    """
    data = json.loads(path.read_text())
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a JSON object")
    return data
