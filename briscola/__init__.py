"""Core rules engine for Briscola."""

__all__ = [
    "cards",
    "deck",
    "errors",
    "trick",
    "swap",
    "state",
    "modes",
    "scoring",
    "game",
    "snapshot",
    "host",
    "rules_schema",
]
