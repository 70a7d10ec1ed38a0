"""Registration of the /admin slash command."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import discord

from .controller import ADMIN_COMMAND, VERIFY_PANEL_SUBCOMMAND
from .errors import error_code_name

log = logging.getLogger("discord-verifier")


def build_admin_command() -> dict[str, Any]:
    """Return the application-command payload for ``/admin verify-panel``."""
    return {
        "name": ADMIN_COMMAND,
        "description": "Admin command for verification.",
        "type": discord.AppCommandType.chat_input.value,
        # administrators only until server staff override it
        "default_member_permissions": str(discord.Permissions(administrator=True).value),
        "dm_permission": False,
        "options": [
            {
                "type": discord.AppCommandOptionType.subcommand.value,
                "name": VERIFY_PANEL_SUBCOMMAND,
                "description": "Sends a verify panel message",
            }
        ],
    }


class CommandRegistrar:
    """Upserts the admin command into the configured guild without blocking."""

    def __init__(self, client: discord.Client) -> None:
        self._client = client
        self._tasks: set[asyncio.Task] = set()

    async def register(self, guild_id: int) -> bool:
        guild = self._client.get_guild(guild_id)
        if guild is None:
            log.warning("Could not update commands: guild %s is not available", guild_id)
            return False

        application_id = self._client.application_id
        if application_id is None:
            log.warning("Could not update commands: application id is unknown")
            return False

        try:
            await self._client.http.upsert_guild_command(
                application_id, guild.id, build_admin_command()
            )
        except discord.HTTPException as exc:
            log.warning(
                "Failed to update command (%s): %s", error_code_name(exc), exc, exc_info=exc
            )
            return False
        except Exception as exc:  # pylint: disable=broad-except
            log.warning("Failed to update command: %s", exc, exc_info=exc)
            return False

        log.info("Command /%s updated in guild %s", ADMIN_COMMAND, guild.id)
        return True

    def schedule(self, guild_id: int) -> asyncio.Task:
        """Run :meth:`register` in the background, holding the task until done."""
        task = asyncio.create_task(
            self.register(guild_id), name=f"register-commands-{guild_id}"
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task


__all__ = ["CommandRegistrar", "build_admin_command"]
