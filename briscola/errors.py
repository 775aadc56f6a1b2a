"""Exception hierarchy for the Briscola engine."""

from __future__ import annotations


class BriscolaError(Exception):
    """Base class for engine errors."""

    code = "BRISCOLA_ERROR"

    def __init__(self, message: str, *, code: str | None = None) -> None:
        if code is not None:
            self.code = code
        self.message = message
        super().__init__(f"[{self.code}] {message}")


class ConfigurationError(BriscolaError, ValueError):
    """Raised when a game cannot be set up (player count, teams)."""

    code = "CONFIGURATION"


class IllegalCommand(BriscolaError):
    """Raised when a player command is not legal against the current snapshot."""

    code = "ILLEGAL_COMMAND"


class WrongPhase(IllegalCommand):
    code = "WRONG_PHASE"


class InvalidPlay(IllegalCommand):
    """Raised for wrong-turn or unowned-card plays."""

    code = "INVALID_PLAY"


class InvalidSwap(IllegalCommand):
    """Raised when the trump-swap preconditions are not met."""

    code = "INVALID_SWAP"


NOT_YOUR_TURN = "NOT_YOUR_TURN"
CARD_NOT_IN_HAND = "CARD_NOT_IN_HAND"
UNKNOWN_PLAYER = "UNKNOWN_PLAYER"
DECK_EXHAUSTED = "DECK_EXHAUSTED"
NOT_TRUMP_SUIT = "NOT_TRUMP_SUIT"
RANK_NOT_SWAPPABLE = "RANK_NOT_SWAPPABLE"
