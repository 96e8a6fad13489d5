"""
redwall console utilities

This module provides application-wide access to Rich Console objects for writing to stdout and
stderr. Debug detail goes through the standard logging module under the 'redwall' logger, rendered
by Rich's logging handler on the error console.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

redwall_theme = Theme(
    {"warning": "orange_red1", "fail": "bold red", "confirm": "", "describe": ""}
)

console = Console(theme=redwall_theme)
error_console = Console(theme=redwall_theme, stderr=True)

logger = logging.getLogger("redwall")
logger.addHandler(RichHandler(console=error_console, show_path=False))
logger.setLevel(logging.WARNING)


"""
Formatting helpers
"""


def warn(msg: str):
    """
    Format msg and print to stderr.
    """

    error_console.print(
        f":exclamation_mark-emoji: [bold]warning: [/] {msg}", style="warning"
    )


def describe(msg: str, **kwargs):
    """
    Format descriptive msg and print to stdout.
    """

    console.print(f"{msg}", style="describe", **kwargs)


def confirm_success(msg: str, **kwargs):
    """
    Format confirmation msg and print to stdout. Accept any additional kwargs that console.print from
    rich module exposes.
    """

    console.print(f"{msg}", style="confirm", **kwargs)


def fail(msg: str):
    """
    Format failure msg and print to stderr.
    """

    error_console.print(f":x-emoji: failed. {msg}", style="fail")


def log(msg: str, *args):
    """
    Record a debug message. Shown only when the 'redwall' logger is set to DEBUG (--debug).
    """

    logger.debug(msg, *args)


def set_debug(enabled: bool):
    logger.setLevel(logging.DEBUG if enabled else logging.WARNING)
