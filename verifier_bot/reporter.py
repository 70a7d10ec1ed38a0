"""Reply channel and outcome reporting."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Final

import discord

from .errors import ReplyChannelError
from .outcomes import Failure, FailureKind, Outcome, Success, render

log = logging.getLogger("discord-verifier")

# Failures whose cause is worth keeping in the logs; the rest explain themselves.
_LOGGED_KINDS: Final = frozenset({FailureKind.UNKNOWN, FailureKind.PLATFORM_ERROR})


class ReplyState(Enum):
    PENDING = "pending"
    DEFERRED = "deferred"
    SENT = "sent"


class ReplyChannel:
    """Single-use ephemeral reply for one interaction.

    The channel must be deferred (acknowledged) before its one reply can be
    sent. Any other order raises :class:`ReplyChannelError`.
    """

    def __init__(self, interaction: discord.Interaction) -> None:
        self._interaction = interaction
        self._state = ReplyState.PENDING

    @property
    def state(self) -> ReplyState:
        return self._state

    async def defer(self) -> None:
        if self._state is not ReplyState.PENDING:
            raise ReplyChannelError("Interaction was already acknowledged")
        await self._interaction.response.defer(ephemeral=True, thinking=True)
        self._state = ReplyState.DEFERRED

    async def send(self, content: str) -> None:
        if self._state is ReplyState.PENDING:
            raise ReplyChannelError("Reply sent before the interaction was deferred")
        if self._state is ReplyState.SENT:
            raise ReplyChannelError("Reply was already sent")
        # flip first so a concurrent second send fails instead of racing
        self._state = ReplyState.SENT
        await self._interaction.followup.send(content, ephemeral=True)


class OutcomeReporter:
    """Turn an :class:`Outcome` into the interaction's one reply."""

    async def report(self, outcome: Outcome, reply: ReplyChannel) -> bool:
        if isinstance(outcome, Failure) and outcome.kind in _LOGGED_KINDS:
            log.warning(
                "%s (%s): %s",
                outcome.detail,
                outcome.tag,
                outcome.cause,
                exc_info=outcome.cause,
            )

        delivered = True
        try:
            await reply.send(render(outcome))
        except discord.HTTPException as exc:
            # most likely the interaction token expired; a retry cannot succeed
            log.warning("Failed to reply to interaction: %s", exc)
            delivered = False

        if isinstance(outcome, Success) and outcome.record:
            log.info("%s", outcome.record)
        return delivered


__all__ = ["OutcomeReporter", "ReplyChannel", "ReplyState"]
