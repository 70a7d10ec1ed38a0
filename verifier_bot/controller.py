"""Verification interaction controller.

Every interaction goes through the same steps: acknowledge it, check that it
comes from the configured guild, run the command or button flow, and hand the
resulting outcome to the reporter, which sends the one ephemeral reply.

The controller keeps no state between interactions. Whether a member is
already verified is read from the interaction's own role snapshot, so a role
removed or re-added by hand on Discord is always seen as it is now.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Final

import discord

from .config import BotConfig
from .errors import HierarchyError, InsufficientPermissionError
from .events import CommandInvocation, ControlActivation, EventType, InteractionEvent
from .gateway import EventRouter
from .outcomes import (
    GRANT_FAILURE,
    PANEL_FAILURE,
    Failure,
    FailureKind,
    Outcome,
    Success,
)
from .platform import VERIFY_CONTROL_ID, DiscordPlatform
from .reporter import OutcomeReporter

log = logging.getLogger("discord-verifier")

ADMIN_COMMAND: Final[str] = "admin"
VERIFY_PANEL_SUBCOMMAND: Final[str] = "verify-panel"

PANEL_CREATED: Final[str] = "Verify panel created!"
ALREADY_VERIFIED: Final[str] = "Already verified!"
VERIFIED: Final[str] = "Verified!"


class VerificationController:
    def __init__(
        self,
        config: BotConfig,
        platform: DiscordPlatform,
        reporter: OutcomeReporter | None = None,
    ) -> None:
        self.config = config
        self.platform = platform
        self.reporter = reporter or OutcomeReporter()

    def register(self, router: EventRouter) -> None:
        router.register(EventType.COMMAND_INVOCATION, self.handle_command)
        router.register(EventType.CONTROL_ACTIVATION, self.handle_control)

    # ---------- Entry points ----------
    async def handle_command(self, event: CommandInvocation) -> None:
        await self._handle(event, self.dispatch_command)

    async def handle_control(self, event: ControlActivation) -> None:
        await self._handle(event, self.activate_control)

    async def _handle(
        self,
        event: InteractionEvent,
        flow: Callable[..., Awaitable[Outcome]],
    ) -> None:
        try:
            await event.reply.defer()
        except discord.HTTPException as exc:
            log.warning(
                "Could not acknowledge interaction from %s: %s", event.invoker_id, exc
            )
            return

        outcome = self.check_scope(event) or await flow(event)
        await self.reporter.report(outcome, event.reply)

    # ---------- Scoping ----------
    def check_scope(self, event: InteractionEvent) -> Failure | None:
        if event.community_id is None or event.community_id != self.config.guild_id:
            return Failure(
                FailureKind.UNSUPPORTED_GUILD, "Unsupported guild, try again later"
            )
        return None

    # ---------- /admin ----------
    async def dispatch_command(self, event: CommandInvocation) -> Outcome:
        if event.command_name.lower() != ADMIN_COMMAND:
            return Failure(
                FailureKind.UNKNOWN_COMMAND,
                "Unknown command, are the commands up-to-date?",
            )

        if event.subcommand_name is None:
            return Failure(FailureKind.MISSING_SUBCOMMAND, "Missing subcommand")

        if event.subcommand_name != VERIFY_PANEL_SUBCOMMAND:
            return Failure(FailureKind.UNKNOWN_SUBCOMMAND, "Invalid subcommand")

        return await self.create_panel(event)

    async def create_panel(self, event: CommandInvocation) -> Outcome:
        try:
            await self.platform.send_panel(event.channel_id)
        except (InsufficientPermissionError, discord.Forbidden):
            return Failure(FailureKind.INSUFFICIENT_PERMISSION, PANEL_FAILURE)
        except discord.HTTPException as exc:
            return Failure.from_platform(PANEL_FAILURE, exc)
        except Exception as exc:  # pylint: disable=broad-except
            return Failure(FailureKind.UNKNOWN, PANEL_FAILURE, cause=exc)
        return Success(PANEL_CREATED)

    # ---------- Verify button ----------
    async def activate_control(self, event: ControlActivation) -> Outcome:
        if event.control_id is None or event.control_id.lower() != VERIFY_CONTROL_ID:
            return Failure(FailureKind.UNKNOWN_CONTROL, "Invalid button")

        if self.config.grant_role_id in event.invoker_role_ids:
            return Success(ALREADY_VERIFIED)

        role = self.platform.get_role(self.config.guild_id, self.config.grant_role_id)
        if role is None:
            return Failure(FailureKind.UNKNOWN_ROLE, GRANT_FAILURE)

        return await self.grant(event, role)

    async def grant(self, event: ControlActivation, role: discord.Role) -> Outcome:
        try:
            await self.platform.grant_role(self.config.guild_id, event.invoker_id, role)
        except (InsufficientPermissionError, discord.Forbidden):
            return Failure(FailureKind.INSUFFICIENT_PERMISSION, GRANT_FAILURE)
        except HierarchyError:
            return Failure(FailureKind.HIERARCHY, GRANT_FAILURE)
        except discord.HTTPException as exc:
            return Failure.from_platform(GRANT_FAILURE, exc)
        except Exception as exc:  # pylint: disable=broad-except
            return Failure(FailureKind.UNKNOWN, GRANT_FAILURE, cause=exc)

        return Success(
            VERIFIED,
            record=(
                f"Verified {event.invoker_name}/{event.invoker_id} "
                f"in guild {role.guild.name}/{role.guild.id}"
            ),
        )


__all__ = [
    "ADMIN_COMMAND",
    "ALREADY_VERIFIED",
    "PANEL_CREATED",
    "VERIFIED",
    "VERIFY_PANEL_SUBCOMMAND",
    "VerificationController",
]
