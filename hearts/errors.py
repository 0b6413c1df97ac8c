"""
Exception hierarchy for the Hearts client.

Decoding problems and server faults are recoverable and belong to the
outer polling layer. NoValidCardError is the one condition the engine
itself raises: it means the snapshot is impossible (a turn without cards)
and must not be papered over with a guessed card.
"""


class HeartsError(Exception):
    """Base exception for Hearts errors."""

    pass


class ParsingError(HeartsError):
    """Raised when a wire token or document cannot be decoded."""

    def __init__(self, source: str, token: object):
        self.source = source
        self.token = token
        super().__init__(f"Not a valid {source}: {token}")


class GameServerError(HeartsError):
    """Raised when the server answers with hasError set."""

    def __init__(self, fault: str = "Unknown server error"):
        self.fault = fault
        super().__init__(f"Server reported an error: {fault}")


class IllegalPlayError(HeartsError):
    """Raised by the simulator when a participant breaks the rules."""

    def __init__(self, player_name: str, card: object, reason: str):
        self.player_name = player_name
        self.card = card
        self.reason = reason
        super().__init__(f"{player_name} played {card} illegally: {reason}")


class NoValidCardError(HeartsError):
    """Raised when a strategy is asked to play with an empty hand."""

    pass
