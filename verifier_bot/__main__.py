"""Entry point for running the bot via ``python -m verifier_bot``."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Sequence

from .config import env_bool, load_config
from .errors import ConfigError
from .runtime import VerifierRuntime

log = logging.getLogger("discord-verifier")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="verifier_bot", description="Discord button verification bot"
    )
    parser.add_argument(
        "--update-command",
        action="store_true",
        help="Upsert the /admin command into the configured guild after login",
    )
    args = sys.argv[1:] if argv is None else list(argv)
    # the flag is accepted in any case, e.g. --UPDATE-COMMAND
    return parser.parse_args([a.lower() if a.startswith("--") else a for a in args])


def main(argv: Sequence[str] | None = None) -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    args = parse_args(argv)

    try:
        config = load_config()
    except ConfigError as exc:
        log.error("Invalid configuration: %s", exc)
        return 1

    runtime = VerifierRuntime(
        config,
        update_command=args.update_command or env_bool("UPDATE_COMMAND"),
    )
    asyncio.run(runtime.run())
    return 0


if __name__ == "__main__":
    sys.exit(main())
