"""
Strategy contract.

A strategy is handed a GameStatus and returns a decision; it performs no
I/O. The only state a strategy may keep between calls is its own.
"""

from abc import ABC, abstractmethod
from typing import List

from hearts.errors import NoValidCardError
from hearts.game.cards import Card
from hearts.game.status import GameStatus


class CardStrategy(ABC):
    """
    Base class for card passing and card play strategies.

    Attributes:
        player_name: The participant this strategy plays for
    """

    def __init__(self, player_name: str):
        self.player_name = player_name

    @abstractmethod
    def pass_cards(self, status: GameStatus) -> List[Card]:
        """
        Choose the cards to pass at the start of a round.

        Args:
            status: Snapshot during the passing phase

        Returns:
            round_parameters.number_of_cards_to_be_passed distinct cards
            from status.my_initial_hand
        """

    @abstractmethod
    def play_card(self, status: GameStatus) -> Card:
        """
        Choose the card to play into the current deal.

        Args:
            status: Snapshot on this participant's turn

        Returns:
            A card from status.my_current_hand

        Raises:
            NoValidCardError: If the hand is empty
        """

    @staticmethod
    def legal_cards(status: GameStatus) -> List[Card]:
        """
        Cards that may be played under follow-suit rules, in canonical order.

        Raises:
            NoValidCardError: If the hand is empty
        """
        if not status.my_current_hand:
            raise NoValidCardError("No valid cards to play!")

        deal = status.in_progress_deal
        led_suit = deal.suit if deal is not None else None
        following = sorted(card for card in status.my_current_hand if card.suit == led_suit)
        return following or sorted(status.my_current_hand)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.player_name!r})"
