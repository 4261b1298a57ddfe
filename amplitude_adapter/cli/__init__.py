# ==============================================================================
# CLI Commands Module
# ==============================================================================
"""
CLI commands for the amplitude adapter.

Commands are organized into separate modules:
- shared.py: Colors, icons and logging setup
- config.py: Configuration display
- replay.py: Dry-run replay of an event file
"""

from amplitude_adapter.cli.shared import C, I, Colors, Icons, configure_logging, format_call

__all__ = [
    "C",
    "Colors",
    "I",
    "Icons",
    "configure_logging",
    "format_call",
]
