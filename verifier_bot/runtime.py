"""Discord client wiring for the verifier bot."""

from __future__ import annotations

import logging

import discord

from .commands import CommandRegistrar
from .config import BotConfig
from .controller import VerificationController
from .gateway import EventRouter
from .platform import DiscordPlatform
from .reporter import OutcomeReporter

log = logging.getLogger("discord-verifier")


class VerifierRuntime:
    def __init__(
        self,
        config: BotConfig,
        *,
        update_command: bool = False,
        client: discord.Client | None = None,
    ) -> None:
        intents = discord.Intents.default()
        intents.guilds = True
        intents.members = True

        self.config = config
        self.update_command = update_command
        self.bot = client or discord.Client(intents=intents)
        self.router = EventRouter()
        self.platform = DiscordPlatform(self.bot)
        self.controller = VerificationController(config, self.platform, OutcomeReporter())
        self.controller.register(self.router)
        self.registrar = CommandRegistrar(self.bot)
        self._commands_scheduled = False

        self.bot.event(self.on_ready)
        self.bot.event(self.on_interaction)

    async def on_ready(self) -> None:
        log.info("Bot ready as %s (%s)", self.bot.user, self.bot.user.id)
        # on_ready fires again after reconnects; register once per launch
        if self.update_command and not self._commands_scheduled:
            self._commands_scheduled = True
            self.registrar.schedule(self.config.guild_id)

    async def on_interaction(self, interaction: discord.Interaction) -> None:
        await self.router.dispatch(interaction)

    async def run(self) -> None:
        async with self.bot:
            await self.bot.start(self.config.bot_token)


__all__ = ["VerifierRuntime"]
