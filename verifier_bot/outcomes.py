"""Typed results of handling one interaction."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final

import discord

from .errors import error_code_name

PANEL_FAILURE: Final[str] = "Unable to send verify panel"
GRANT_FAILURE: Final[str] = "Try verifying again later"


class FailureKind(Enum):
    UNSUPPORTED_GUILD = "UNSUPPORTED_GUILD"
    UNKNOWN_COMMAND = "UNKNOWN_COMMAND"
    MISSING_SUBCOMMAND = "MISSING_SUBCOMMAND"
    UNKNOWN_SUBCOMMAND = "UNKNOWN_SUBCOMMAND"
    UNKNOWN_CONTROL = "UNKNOWN_CONTROL"
    INSUFFICIENT_PERMISSION = "INSUFFICIENT_PERMISSION"
    HIERARCHY = "HIERARCHY"
    UNKNOWN_ROLE = "UNKNOWN_ROLE"
    PLATFORM_ERROR = "PLATFORM_ERROR"
    UNKNOWN = "UNKNOWN"


@dataclass(frozen=True, slots=True)
class Success:
    message: str
    # info-level log line emitted once the outcome is reported
    record: str | None = None


@dataclass(frozen=True, slots=True)
class Failure:
    kind: FailureKind
    detail: str
    code: str | None = None
    cause: BaseException | None = None

    @property
    def tag(self) -> str:
        if self.kind is FailureKind.PLATFORM_ERROR and self.code:
            return self.code
        return self.kind.value

    @classmethod
    def from_platform(cls, detail: str, exc: discord.HTTPException) -> "Failure":
        return cls(
            FailureKind.PLATFORM_ERROR, detail, code=error_code_name(exc), cause=exc
        )


Outcome = Success | Failure


def render(outcome: Outcome) -> str:
    """Return the user-facing text for ``outcome``.

    Failures never expose their cause; only the taxonomy tag (or Discord's
    error code name) is shown.
    """
    if isinstance(outcome, Success):
        return outcome.message
    return f"Error: {outcome.detail} ({outcome.tag})"


__all__ = [
    "GRANT_FAILURE",
    "PANEL_FAILURE",
    "Failure",
    "FailureKind",
    "Outcome",
    "Success",
    "render",
]
