"""
Trick model ("Deal") for Hearts.

A deal moves through three phases: NOT_STARTED (no card yet, no led suit),
IN_PROGRESS (led suit known, cards accumulating) and RESOLVED (winner
recorded). Deal values are immutable; with_card() and resolve() return
new values.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Tuple, List

from hearts.game.cards import Card, Suit


class DealPhase(Enum):
    """Lifecycle of a single trick."""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"


@dataclass(frozen=True)
class DealCard:
    """A card played into a deal by a participant."""

    player_name: str
    card: Card

    def __str__(self) -> str:
        return f"{self.player_name}:{self.card}"


@dataclass(frozen=True)
class Deal:
    """
    A single trick.

    Attributes:
        deal_number: Trick number within the round (1-indexed)
        initiator: Participant who led (None until known)
        suit: Led suit; None iff no card has been played
        deal_cards: Cards played so far, in play order
        deal_winner: Winner once the trick is resolved
    """

    deal_number: int = 0
    initiator: Optional[str] = None
    suit: Optional[Suit] = None
    deal_cards: Tuple[DealCard, ...] = field(default_factory=tuple)
    deal_winner: Optional[str] = None

    def __post_init__(self):
        """Normalise the led suit so it is present iff a card was played."""
        cards = tuple(self.deal_cards)
        object.__setattr__(self, "deal_cards", cards)
        if not cards:
            object.__setattr__(self, "suit", None)
        elif self.suit is None:
            object.__setattr__(self, "suit", cards[0].card.suit)

    @property
    def phase(self) -> DealPhase:
        if self.deal_winner is not None:
            return DealPhase.RESOLVED
        if self.deal_cards:
            return DealPhase.IN_PROGRESS
        return DealPhase.NOT_STARTED

    @property
    def cards(self) -> List[Card]:
        """Cards played so far, in play order."""
        return [deal_card.card for deal_card in self.deal_cards]

    @property
    def players(self) -> List[str]:
        """Participants who have played, in play order."""
        return [deal_card.player_name for deal_card in self.deal_cards]

    def is_empty(self) -> bool:
        return not self.deal_cards

    def has_played(self, player_name: str) -> bool:
        return any(dc.player_name == player_name for dc in self.deal_cards)

    def card_of(self, player_name: str) -> Optional[Card]:
        """Card played by a participant in this deal, if any."""
        for deal_card in self.deal_cards:
            if deal_card.player_name == player_name:
                return deal_card.card
        return None

    def winning_card(self) -> Optional[DealCard]:
        """Highest card of the led suit played so far (None when empty)."""
        led = [dc for dc in self.deal_cards if dc.card.suit == self.suit]
        if not led:
            return None
        return max(led, key=lambda dc: dc.card.rank)

    def with_card(self, player_name: str, card: Card) -> "Deal":
        """Return a new deal with one more card played."""
        initiator = self.initiator if self.deal_cards else player_name
        return replace(
            self,
            initiator=initiator,
            suit=self.suit,
            deal_cards=self.deal_cards + (DealCard(player_name, card),),
        )

    def resolve(self) -> "Deal":
        """Return a new deal with the winner recorded."""
        winner = self.winning_card()
        if winner is None:
            raise ValueError("Cannot resolve a deal with no cards played")
        return replace(self, deal_winner=winner.player_name)

    def __str__(self) -> str:
        cards_str = ", ".join(str(dc) for dc in self.deal_cards)
        return f"Deal({self.deal_number}, led={self.suit}, [{cards_str}])"
