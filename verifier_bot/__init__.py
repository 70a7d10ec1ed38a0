"""Discord button verification bot.

An administrator posts a panel with ``/admin verify-panel``; members click its
"Verify" button to receive the configured role once.
"""

__all__ = [
    "commands",
    "config",
    "controller",
    "events",
    "gateway",
    "outcomes",
    "platform",
    "reporter",
    "runtime",
]
