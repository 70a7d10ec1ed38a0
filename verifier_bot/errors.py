"""Exception types and Discord error-code naming for the verifier bot."""

from __future__ import annotations

from enum import IntEnum

import discord


class VerifierError(Exception):
    """Base class for errors raised by the verifier bot."""


class ConfigError(VerifierError):
    """Configuration could not be seeded, read or validated."""


class InsufficientPermissionError(VerifierError):
    """The bot lacks a guild or channel permission required for an action."""

    def __init__(self, permission: str) -> None:
        super().__init__(f"Missing permission: {permission}")
        self.permission = permission


class HierarchyError(VerifierError):
    """The target role is not below the bot's highest role."""

    def __init__(self, role_id: int) -> None:
        super().__init__(f"Role {role_id} is not below the bot's top role")
        self.role_id = role_id


class ReplyChannelError(RuntimeError):
    """A reply channel was used out of order or more than once."""


class PlatformErrorCode(IntEnum):
    """JSON error codes returned by the Discord API."""

    UNKNOWN_ACCOUNT = 10001
    UNKNOWN_APPLICATION = 10002
    UNKNOWN_CHANNEL = 10003
    UNKNOWN_GUILD = 10004
    UNKNOWN_MEMBER = 10007
    UNKNOWN_MESSAGE = 10008
    UNKNOWN_ROLE = 10011
    UNKNOWN_USER = 10013
    UNKNOWN_INTERACTION = 10062
    MAX_ROLES_PER_GUILD = 30005
    MISSING_ACCESS = 50001
    CANNOT_SEND_TO_THIS_USER = 50007
    MISSING_PERMISSIONS = 50013
    INVALID_FORM_BODY = 50035
    INTERACTION_ALREADY_ACKNOWLEDGED = 40060


def error_code_name(exc: discord.HTTPException) -> str:
    """Return a stable display name for the error code carried by ``exc``."""
    if not exc.code:
        return f"HTTP_{exc.status}"
    try:
        return PlatformErrorCode(exc.code).name
    except ValueError:
        return f"ERROR_{exc.code}"
