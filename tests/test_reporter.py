"""Tests for the reply channel and outcome reporter."""

import logging
from unittest.mock import AsyncMock, MagicMock

import discord
import pytest

from verifier_bot.errors import ReplyChannelError
from verifier_bot.outcomes import Failure, FailureKind, Success
from verifier_bot.reporter import OutcomeReporter, ReplyChannel, ReplyState


def http_error(cls=discord.HTTPException, *, status=400, code=0):
    response = MagicMock()
    response.status = status
    response.reason = "Reason"
    return cls(response, {"code": code, "message": "error"})


def make_interaction() -> MagicMock:
    interaction = MagicMock()
    interaction.response.defer = AsyncMock()
    interaction.followup.send = AsyncMock()
    return interaction


class TestReplyChannel:
    """Test the one-shot reply capability."""

    @pytest.mark.asyncio
    async def test_defer_then_send(self):
        interaction = make_interaction()
        reply = ReplyChannel(interaction)

        await reply.defer()
        await reply.send("hello")

        interaction.response.defer.assert_awaited_once_with(ephemeral=True, thinking=True)
        interaction.followup.send.assert_awaited_once_with("hello", ephemeral=True)
        assert reply.state is ReplyState.SENT

    @pytest.mark.asyncio
    async def test_send_before_defer(self):
        """Should refuse to send before the interaction is acknowledged."""
        interaction = make_interaction()
        reply = ReplyChannel(interaction)

        with pytest.raises(ReplyChannelError):
            await reply.send("hello")
        interaction.followup.send.assert_not_awaited()
        assert reply.state is ReplyState.PENDING

    @pytest.mark.asyncio
    async def test_second_send(self):
        """Should refuse a second reply."""
        interaction = make_interaction()
        reply = ReplyChannel(interaction)
        await reply.defer()
        await reply.send("first")

        with pytest.raises(ReplyChannelError):
            await reply.send("second")
        assert interaction.followup.send.await_count == 1

    @pytest.mark.asyncio
    async def test_second_defer(self):
        interaction = make_interaction()
        reply = ReplyChannel(interaction)
        await reply.defer()

        with pytest.raises(ReplyChannelError):
            await reply.defer()

    @pytest.mark.asyncio
    async def test_failed_defer_stays_pending(self):
        interaction = make_interaction()
        interaction.response.defer.side_effect = http_error(discord.NotFound, status=404, code=10062)
        reply = ReplyChannel(interaction)

        with pytest.raises(discord.NotFound):
            await reply.defer()
        assert reply.state is ReplyState.PENDING

    @pytest.mark.asyncio
    async def test_failed_send_is_consumed(self):
        """A failed send still uses up the channel; replies are not retried."""
        interaction = make_interaction()
        interaction.followup.send.side_effect = http_error(status=500)
        reply = ReplyChannel(interaction)
        await reply.defer()

        with pytest.raises(discord.HTTPException):
            await reply.send("first")
        with pytest.raises(ReplyChannelError):
            await reply.send("again")


class TestOutcomeReporter:
    """Test rendering and logging of outcomes."""

    @staticmethod
    async def deferred_reply():
        interaction = make_interaction()
        reply = ReplyChannel(interaction)
        await reply.defer()
        return reply, interaction

    @pytest.mark.asyncio
    async def test_success_reply(self):
        reply, interaction = await self.deferred_reply()

        delivered = await OutcomeReporter().report(Success("Verified!"), reply)

        assert delivered is True
        interaction.followup.send.assert_awaited_once_with("Verified!", ephemeral=True)

    @pytest.mark.asyncio
    async def test_success_record_logged(self, caplog):
        reply, _ = await self.deferred_reply()

        with caplog.at_level(logging.INFO, logger="discord-verifier"):
            await OutcomeReporter().report(Success("Verified!", record="Verified a/1"), reply)

        assert [r.getMessage() for r in caplog.records] == ["Verified a/1"]

    @pytest.mark.asyncio
    async def test_self_explanatory_failures_not_logged(self, caplog):
        reply, interaction = await self.deferred_reply()

        with caplog.at_level(logging.INFO, logger="discord-verifier"):
            await OutcomeReporter().report(
                Failure(FailureKind.UNKNOWN_CONTROL, "Invalid button"), reply
            )

        assert caplog.records == []
        interaction.followup.send.assert_awaited_once_with(
            "Error: Invalid button (UNKNOWN_CONTROL)", ephemeral=True
        )

    @pytest.mark.parametrize(
        "outcome",
        [
            Failure(FailureKind.UNKNOWN, "Try verifying again later", cause=ValueError("x")),
            Failure.from_platform("Try verifying again later", http_error(code=10011)),
        ],
    )
    @pytest.mark.asyncio
    async def test_unknown_and_platform_failures_logged(self, outcome, caplog):
        reply, _ = await self.deferred_reply()

        with caplog.at_level(logging.WARNING, logger="discord-verifier"):
            await OutcomeReporter().report(outcome, reply)

        assert len(caplog.records) == 1
        assert caplog.records[0].levelno == logging.WARNING
        assert caplog.records[0].exc_info is not None

    @pytest.mark.asyncio
    async def test_failed_reply_logged_not_raised(self, caplog):
        """An expired token is logged and the reply is not retried."""
        reply, interaction = await self.deferred_reply()
        interaction.followup.send.side_effect = http_error(discord.NotFound, status=404, code=10062)

        with caplog.at_level(logging.WARNING, logger="discord-verifier"):
            delivered = await OutcomeReporter().report(Success("Verified!"), reply)

        assert delivered is False
        assert interaction.followup.send.await_count == 1
        assert "Failed to reply" in caplog.records[0].getMessage()
