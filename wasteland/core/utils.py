"""
Console and numeric helpers shared by the combat resolver.

All demo output goes through one rich console, so narration, menus and the
final report share the same width and markup rules.
"""

from __future__ import annotations

from typing import Any, Generic

from rich.console import Console
from rich.rule import Rule
from typing_extensions import TypeVar

_console = Console(markup=True, width=120, force_terminal=True, force_jupyter=False)


def cprint(*args: Any, **kwargs: Any) -> None:
    """Print rich markup (narration lines, status lines, reports)."""
    _console.print(*args, **kwargs)


def crule(*args: Any, **kwargs: Any) -> None:
    """Print a horizontal banner, e.g. between combat phases."""
    _console.print(Rule(*args, **kwargs))


def ccapture(content: Any) -> str:
    """
    Render a rich renderable to an ANSI string.

    Used to feed rich tables to prompt_toolkit prompts.

    Args:
        content (Any): The renderable, a table or a markup string.

    Returns:
        str: The rendered text, with ANSI escape codes.

    """
    with _console.capture() as capture:
        _console.print(content, markup=True, end="")
    return capture.get()


_T = TypeVar("_T")


class Singleton(type, Generic[_T]):
    """
    Metaclass for process-wide registries such as the content repository.

    Calling the class again with arguments re-runs __init__ on the existing
    instance, which is how the repository reloads from another directory.
    """

    _instances: dict[Singleton[_T], _T] = {}

    def __call__(cls, *args: Any, **kwargs: Any) -> _T:
        if cls not in cls._instances:
            cls._instances[cls] = super().__call__(*args, **kwargs)
        elif args or kwargs:
            cls._instances[cls].__init__(*args, **kwargs)  # type: ignore[misc]
        return cls._instances[cls]


def clamp(value: int, minimum: int, maximum: int) -> int:
    """Keep a health or energy value inside [minimum, maximum]."""
    return max(minimum, min(value, maximum))


def make_bar(current: int, maximum: int, length: int = 10, color: str = "white") -> str:
    """
    Draw a health or energy gauge for a combatant's status line.

    Args:
        current (int): Current health or energy.
        maximum (int): Its maximum; an empty gauge is drawn when it is 0.
        length (int): Number of cells of the gauge.
        color (str): Rich color of the filled cells.

    Returns:
        str: The gauge, as rich markup.

    """
    filled = int((current / maximum) * length) if maximum > 0 else 0
    empty = length - filled
    bar = f"[{color}]" + "▮" * filled
    if empty > 0:
        bar += "[dim white]" + "▯" * empty + "[/]"
    bar += "[/]"
    return bar
