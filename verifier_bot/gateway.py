"""Routing of raw gateway interactions to typed handlers."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Final

import discord

from .events import CommandInvocation, ControlActivation, EventType, InteractionEvent

log = logging.getLogger("discord-verifier")

Handler = Callable[[InteractionEvent], Awaitable[None]]

_EVENT_BUILDERS: Final = {
    EventType.COMMAND_INVOCATION: CommandInvocation.from_interaction,
    EventType.CONTROL_ACTIVATION: ControlActivation.from_interaction,
}


def classify(interaction: discord.Interaction) -> EventType | None:
    """Map an interaction to the event type it is handled as, if any."""
    if interaction.type is discord.InteractionType.application_command:
        return EventType.COMMAND_INVOCATION
    if interaction.type is discord.InteractionType.component:
        return EventType.CONTROL_ACTIVATION
    return None


class EventRouter:
    """Holds exactly one handler per :class:`EventType`."""

    def __init__(self) -> None:
        self._handlers: dict[EventType, Handler] = {}

    def register(self, event_type: EventType, handler: Handler) -> None:
        if event_type in self._handlers:
            raise ValueError(f"A handler for {event_type.name} is already registered")
        self._handlers[event_type] = handler

    def handler_for(self, event_type: EventType) -> Handler | None:
        return self._handlers.get(event_type)

    async def dispatch(self, interaction: discord.Interaction) -> bool:
        """Build the typed event for ``interaction`` and run its handler.

        Returns False when the interaction is not one the bot handles.
        """
        event_type = classify(interaction)
        if event_type is None:
            return False

        handler = self._handlers.get(event_type)
        if handler is None:
            log.debug("No handler registered for %s", event_type.name)
            return False

        await handler(_EVENT_BUILDERS[event_type](interaction))
        return True


__all__ = ["EventRouter", "Handler", "classify"]
