"""Baseline strategy: no estimation at all, only canonical card order."""

from typing import List

from hearts.game.cards import Card
from hearts.game.status import GameStatus
from hearts.strategy.base import CardStrategy


class SimpleCardStrategy(CardStrategy):
    """
    Passes the lowest cards of the initial hand and plays the lowest legal
    card, except when unable to follow suit, where it dumps its highest card.
    """

    def pass_cards(self, status: GameStatus) -> List[Card]:
        count = status.round_parameters.number_of_cards_to_be_passed
        return sorted(status.my_initial_hand)[:count]

    def play_card(self, status: GameStatus) -> Card:
        legal = self.legal_cards(status)
        deal = status.in_progress_deal
        led_suit = deal.suit if deal is not None else None
        if led_suit is not None and legal[0].suit != led_suit:
            return legal[-1]
        return legal[0]
