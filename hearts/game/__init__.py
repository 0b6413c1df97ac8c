"""
Hearts game model package.

Card, trick and snapshot value types, the server wire codec and a local
round simulator used to exercise strategies end to end.
"""

from hearts.game.cards import (
    ALL_CARDS,
    OPENING_CARD,
    QUEEN_OF_SPADES,
    Card,
    Rank,
    Suit,
    is_shooting_card,
)
from hearts.game.deal import Deal, DealCard, DealPhase
from hearts.game.simulator import HeartsRound, standard_round_parameters
from hearts.game.status import (
    GameInstanceState,
    GameParticipant,
    GameStatus,
    HeartsGameInstanceState,
    PlayerAction,
    RoundParameters,
    RoundState,
)

__all__ = [
    "ALL_CARDS",
    "OPENING_CARD",
    "QUEEN_OF_SPADES",
    "Card",
    "Rank",
    "Suit",
    "is_shooting_card",
    "Deal",
    "DealCard",
    "DealPhase",
    "HeartsRound",
    "standard_round_parameters",
    "GameInstanceState",
    "GameParticipant",
    "GameStatus",
    "HeartsGameInstanceState",
    "PlayerAction",
    "RoundParameters",
    "RoundState",
]
