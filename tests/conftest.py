"""Shared fixtures for the verifier bot tests."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import discord
import pytest

from verifier_bot.config import BotConfig
from verifier_bot.events import CommandInvocation, ControlActivation
from verifier_bot.platform import DiscordPlatform
from verifier_bot.reporter import ReplyChannel

GUILD_ID = 1000
OTHER_GUILD_ID = 2000
GRANT_ROLE_ID = 42
INVOKER_ID = 555
CHANNEL_ID = 777


def make_interaction() -> MagicMock:
    """Interaction double whose response and followup can be awaited."""
    interaction = MagicMock()
    interaction.response.defer = AsyncMock()
    interaction.followup.send = AsyncMock()
    return interaction


def http_error(
    cls: type[discord.HTTPException] = discord.HTTPException,
    *,
    status: int = 400,
    code: int = 0,
    message: str = "error",
) -> discord.HTTPException:
    response = MagicMock()
    response.status = status
    response.reason = "Reason"
    return cls(response, {"code": code, "message": message})


@pytest.fixture
def config() -> BotConfig:
    return BotConfig(bot_token="token", guild_id=GUILD_ID, grant_role_id=GRANT_ROLE_ID)


@pytest.fixture
def role() -> MagicMock:
    role = MagicMock()
    role.id = GRANT_ROLE_ID
    role.guild.id = GUILD_ID
    role.guild.name = "Test Guild"
    return role


@pytest.fixture
def platform(role) -> MagicMock:
    platform = MagicMock(spec=DiscordPlatform)
    platform.get_role = MagicMock(return_value=role)
    platform.send_panel = AsyncMock()
    platform.grant_role = AsyncMock()
    return platform


@pytest.fixture
def command_event():
    """Factory returning ``(CommandInvocation, interaction)`` pairs."""

    def factory(
        *,
        community_id: int | None = GUILD_ID,
        command_name: str = "admin",
        subcommand_name: str | None = "verify-panel",
        role_ids=(),
    ):
        interaction = make_interaction()
        event = CommandInvocation(
            community_id=community_id,
            invoker_id=INVOKER_ID,
            invoker_name="tester",
            invoker_role_ids=frozenset(role_ids),
            channel_id=CHANNEL_ID,
            reply=ReplyChannel(interaction),
            command_name=command_name,
            subcommand_name=subcommand_name,
        )
        return event, interaction

    return factory


@pytest.fixture
def control_event():
    """Factory returning ``(ControlActivation, interaction)`` pairs."""

    def factory(
        *,
        community_id: int | None = GUILD_ID,
        control_id: str | None = "verify_me",
        role_ids=(7, 9),
    ):
        interaction = make_interaction()
        event = ControlActivation(
            community_id=community_id,
            invoker_id=INVOKER_ID,
            invoker_name="tester",
            invoker_role_ids=frozenset(role_ids),
            channel_id=CHANNEL_ID,
            reply=ReplyChannel(interaction),
            control_id=control_id,
        )
        return event, interaction

    return factory
