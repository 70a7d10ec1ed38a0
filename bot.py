"""Launcher for the verification bot: ``python bot.py [--update-command]``."""

import sys

from verifier_bot.__main__ import main

if __name__ == "__main__":
    sys.exit(main())
