"""Outbound Discord mutations used by the verification controller."""

from __future__ import annotations

import logging
from typing import Final

import discord

from .errors import HierarchyError, InsufficientPermissionError

log = logging.getLogger("discord-verifier")

VERIFY_CONTROL_ID: Final[str] = "verify_me"
PANEL_DESCRIPTION: Final[str] = (
    "To get full access to our server click the button below to verify yourself!"
)
PANEL_COLOUR: Final[int] = 0x5865F2
GRANT_REASON: Final[str] = "Clicked the verify button"

_PANEL_PERMISSIONS: Final = ("view_channel", "send_messages", "embed_links")


def build_panel() -> tuple[discord.Embed, discord.ui.View]:
    """Return the verify panel embed and its single-button view.

    Must be called from a running event loop (discord.py views need one).
    """
    embed = discord.Embed(description=PANEL_DESCRIPTION, color=PANEL_COLOUR)
    view = discord.ui.View(timeout=None)
    view.add_item(
        discord.ui.Button(
            label="Verify",
            style=discord.ButtonStyle.primary,
            custom_id=VERIFY_CONTROL_ID,
        )
    )
    # components only; clicks reach the bot through on_interaction
    view.stop()
    return embed, view


class DiscordPlatform:
    """Thin wrapper over the Discord client for panel and role mutations.

    Permission and hierarchy problems detectable from the cache are raised
    before any request is made; everything else surfaces as the
    ``discord.HTTPException`` the request produced.
    """

    def __init__(self, client: discord.Client) -> None:
        self._client = client

    def get_role(self, guild_id: int, role_id: int) -> discord.Role | None:
        guild = self._client.get_guild(guild_id)
        if guild is None:
            return None
        return guild.get_role(role_id)

    async def _resolve_channel(self, channel_id: int):
        channel = self._client.get_channel(channel_id)
        if channel is None:
            channel = await self._client.fetch_channel(channel_id)
        return channel

    async def send_panel(self, channel_id: int | None) -> discord.Message:
        if channel_id is None:
            raise ValueError("Interaction has no origin channel")

        channel = await self._resolve_channel(channel_id)
        if not isinstance(channel, discord.abc.Messageable):
            raise TypeError(f"Channel {channel_id} cannot receive messages")

        guild = getattr(channel, "guild", None)
        if guild is not None and guild.me is not None:
            permissions = channel.permissions_for(guild.me)
            for name in _PANEL_PERMISSIONS:
                if not getattr(permissions, name):
                    raise InsufficientPermissionError(name)

        embed, view = build_panel()
        message = await channel.send(embed=embed, view=view)
        log.debug("Sent verify panel to channel %s", channel_id)
        return message

    async def grant_role(self, guild_id: int, user_id: int, role: discord.Role) -> None:
        guild = self._client.get_guild(guild_id)
        if guild is None:
            raise ValueError(f"Guild {guild_id} is not available")

        me = guild.me
        if me is not None:
            if not me.guild_permissions.manage_roles:
                raise InsufficientPermissionError("manage_roles")
            if guild.owner_id != me.id and role >= me.top_role:
                raise HierarchyError(role.id)

        member = guild.get_member(user_id) or await guild.fetch_member(user_id)
        await member.add_roles(role, reason=GRANT_REASON)


__all__ = [
    "DiscordPlatform",
    "GRANT_REASON",
    "PANEL_COLOUR",
    "PANEL_DESCRIPTION",
    "VERIFY_CONTROL_ID",
    "build_panel",
]
