# ==============================================================================
# Shared Utilities for CLI Commands
# ==============================================================================
"""
Shared constants and output helpers used across CLI command modules.

This module provides:
- ANSI color codes and status icons
- Logging setup for CLI invocations
- Formatting of vendor calls for terminal output
"""

import logging

from amplitude_adapter.core.models import VendorCall

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


# ==============================================================================
# ANSI Colors and Icons
# ==============================================================================


class Colors:
    """ANSI color codes for terminal output."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    # Colors
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    CYAN = "\033[36m"
    WHITE = "\033[37m"


class Icons:
    """Status icons using Unicode symbols."""

    CHECK = "✓"
    CROSS = "✗"
    BULLET = "•"
    ARROW = "→"


# Module-level aliases for convenience
C, I = Colors, Icons


# ==============================================================================
# Helpers
# ==============================================================================


def configure_logging(level: str) -> None:
    """Configure root logging for a CLI invocation (stderr)."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


def format_call(call: VendorCall) -> str:
    """Render a vendor call as ``method(arg, ...)``."""
    args = ", ".join(repr(arg) for arg in call.args)
    return f"{call.method}({args})"
