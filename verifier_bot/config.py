"""Configuration loading for the verifier bot.

The bot reads a small JSON document (``config.json`` by default). When the
file is missing it is seeded from the bundled default so operators have a
template to fill in; the placeholder values fail validation until they do.
"""

from __future__ import annotations

import json
import logging
import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final

from .errors import ConfigError

log = logging.getLogger("discord-verifier")

CONFIG_FILE_NAME: Final[str] = "config.json"
CONFIG_PATH_ENV: Final[str] = "VERIFIER_CONFIG"
DEFAULT_CONFIG: Final[Path] = Path(__file__).parent / "resources" / CONFIG_FILE_NAME

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def env_bool(name: str, *, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    lowered = raw.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    return default


@dataclass(frozen=True, slots=True)
class BotConfig:
    bot_token: str
    guild_id: int
    grant_role_id: int

    def __repr__(self) -> str:
        return (
            f"BotConfig(bot_token='***', guild_id={self.guild_id}, "
            f"grant_role_id={self.grant_role_id})"
        )


def config_path() -> Path:
    return Path(os.getenv(CONFIG_PATH_ENV) or CONFIG_FILE_NAME)


def seed_config(path: Path, *, default: Path = DEFAULT_CONFIG) -> bool:
    """Copy the bundled default to ``path`` if nothing exists there yet.

    Returns True when a new file was written.
    """
    if path.exists():
        return False
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(default, path)
    except OSError as exc:
        raise ConfigError(f"Could not save {default.name} to {path}: {exc}") from exc
    log.info("Wrote default configuration to %s", path)
    return True


def _require_str(document: dict[str, Any], key: str) -> str:
    value = document.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f'key/value "{key}" not found in the config')
    return value.strip()


def _require_id(document: dict[str, Any], key: str) -> int:
    value = document.get(key)
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool):
        raise ConfigError(f'key/value "{key}" must be a numeric id')
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError as exc:
            raise ConfigError(f'key/value "{key}" must be a numeric id') from exc
    if not isinstance(value, int) or value <= 0:
        raise ConfigError(f'key/value "{key}" not found in the config')
    return value


def load_config(path: Path | None = None) -> BotConfig:
    """Seed (if needed), read and validate the configuration document."""
    path = path or config_path()
    seed_config(path)

    try:
        document = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Could not read {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"{path} is not valid JSON: {exc}") from exc

    if not isinstance(document, dict):
        raise ConfigError(f"{path} must contain a JSON object")

    return BotConfig(
        bot_token=_require_str(document, "bot-token"),
        guild_id=_require_id(document, "guild-id"),
        grant_role_id=_require_id(document, "grant-role-id"),
    )


__all__ = [
    "BotConfig",
    "CONFIG_FILE_NAME",
    "CONFIG_PATH_ENV",
    "DEFAULT_CONFIG",
    "config_path",
    "env_bool",
    "load_config",
    "seed_config",
]
