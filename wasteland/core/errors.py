"""
Error types raised by the combat resolver.

All of them are local and recoverable: a rejected action leaves the combat
state untouched and is surfaced to the caller for correction.
"""

from typing import Any


class CombatError(Exception):
    """Base class for every error raised by the combat engine."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context: dict[str, Any] = context or {}

    def __str__(self) -> str:
        if not self.context:
            return self.message
        context_str = " ".join(f"{k}={v}" for k, v in self.context.items())
        return f"{self.message} [{context_str}]"


class InvalidAction(CombatError):
    """The requested action cannot be resolved.

    Raised for insufficient energy, a skill still on cooldown, an empty
    consumable pool, an unknown skill or item id, or an illegal target.
    """


class InvalidActorState(CombatError):
    """The acting combatant cannot act right now.

    Raised when the actor is not the current actor, is already defeated, or
    the session has already ended.
    """


class DegenerateEncounter(CombatError):
    """The encounter cannot start because one side has no participants."""


class EmptyTurnOrder(DegenerateEncounter):
    """The encounter cannot start because there are no participants at all."""


class SessionBusy(CombatError):
    """An action was submitted while another one was still being resolved."""
