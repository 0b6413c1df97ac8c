"""
Card passing and card play strategies.

- CardStrategy: abstract contract (pass_cards / play_card)
- DefensiveCardStrategy: point-avoiding engine with moon-shot detection
- SimpleCardStrategy: canonical-order baseline

Example:
    >>> from hearts.strategy import DefensiveCardStrategy
    >>> from hearts.game.wire import load_game_status
    >>>
    >>> strategy = DefensiveCardStrategy("FlyingBirds")
    >>> status = load_game_status("game_log/1234/01-03.json")
    >>> card = strategy.play_card(status)
"""

from hearts.strategy.base import CardStrategy
from hearts.strategy.defensive import DefensiveCardStrategy
from hearts.strategy.evaluation import CardScore
from hearts.strategy.inference import SuitInference
from hearts.strategy.simple import SimpleCardStrategy

__all__ = [
    "CardStrategy",
    "DefensiveCardStrategy",
    "CardScore",
    "SuitInference",
    "SimpleCardStrategy",
]
