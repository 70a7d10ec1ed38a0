"""Typed views over the Discord interactions the bot reacts to."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

import discord

from .reporter import ReplyChannel

_SUBCOMMAND_TYPES = {
    discord.AppCommandOptionType.subcommand.value,
    discord.AppCommandOptionType.subcommand_group.value,
}


class EventType(Enum):
    COMMAND_INVOCATION = "command_invocation"
    CONTROL_ACTIVATION = "control_activation"


def _member_role_ids(user: discord.User | discord.Member) -> frozenset[int]:
    """Role ids of the interacting member, resolved through the guild role cache.

    ``Member.roles`` drops ids the cache does not know and adds ``@everyone``
    (whose id is the guild id). The grant role is looked up in the same cache
    before any grant, so a role missing from it is reported as unknown rather
    than granted twice.
    """
    if not isinstance(user, discord.Member):
        return frozenset()
    return frozenset(role.id for role in user.roles)


def _subcommand_name(data: dict[str, Any]) -> str | None:
    for option in data.get("options") or ():
        if option.get("type") in _SUBCOMMAND_TYPES:
            return option.get("name")
    return None


@dataclass(frozen=True, slots=True)
class InteractionEvent:
    community_id: int | None
    invoker_id: int
    invoker_name: str
    invoker_role_ids: frozenset[int]
    channel_id: int | None
    reply: ReplyChannel


@dataclass(frozen=True, slots=True)
class CommandInvocation(InteractionEvent):
    command_name: str
    subcommand_name: str | None = None

    @classmethod
    def from_interaction(cls, interaction: discord.Interaction) -> "CommandInvocation":
        data = interaction.data or {}
        return cls(
            community_id=interaction.guild_id,
            invoker_id=interaction.user.id,
            invoker_name=interaction.user.name,
            invoker_role_ids=_member_role_ids(interaction.user),
            channel_id=interaction.channel_id,
            reply=ReplyChannel(interaction),
            command_name=str(data.get("name", "")),
            subcommand_name=_subcommand_name(data),
        )


@dataclass(frozen=True, slots=True)
class ControlActivation(InteractionEvent):
    control_id: str | None = None

    @classmethod
    def from_interaction(cls, interaction: discord.Interaction) -> "ControlActivation":
        data = interaction.data or {}
        return cls(
            community_id=interaction.guild_id,
            invoker_id=interaction.user.id,
            invoker_name=interaction.user.name,
            invoker_role_ids=_member_role_ids(interaction.user),
            channel_id=interaction.channel_id,
            reply=ReplyChannel(interaction),
            control_id=data.get("custom_id"),
        )


__all__ = [
    "CommandInvocation",
    "ControlActivation",
    "EventType",
    "InteractionEvent",
]
