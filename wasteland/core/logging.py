"""
Engine logging for the combat resolver.

Resolution steps are logged at DEBUG and session milestones at INFO on the
"wasteland" logger, each message followed by its context as key=value pairs.
Rejected actions are reported separately through catchery.
"""

import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

logger = logging.getLogger("wasteland")


def setup_logging(level: int = logging.INFO) -> None:
    """
    Route engine logs to the console through rich.

    The demo passes DEBUG with --debug to trace every resolved action and
    round wrap, WARNING otherwise.

    Args:
        level (int): The root logging level.

    """
    console = Console(width=120, force_terminal=True, force_jupyter=False)
    rich_handler = RichHandler(
        console=console,
        show_time=True,
        show_level=True,
        show_path=False,
        markup=True,
        rich_tracebacks=True,
    )
    rich_handler.setFormatter(logging.Formatter("%(name)s - %(message)s"))
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[rich_handler],
    )


def _with_context(message: str, context: dict[str, Any] | None) -> str:
    if not context:
        return message
    context_str = " ".join(f"{k}={v}" for k, v in context.items())
    return f"{message} [{context_str}]"


def log_info(message: str, context: dict[str, Any] | None = None) -> None:
    """Log a session milestone (combat begins, combat ends)."""
    logger.info(_with_context(message, context))


def log_debug(message: str, context: dict[str, Any] | None = None) -> None:
    """Log one resolution step, e.g. an attack or an effect merge."""
    logger.debug(_with_context(message, context))
