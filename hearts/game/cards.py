"""
Card domain model for Hearts.

Suit and Rank are closed integer enumerations so that their declared order
is the canonical order: Card compares suit first, then rank, and that order
is the final tie-break whenever two candidate cards score the same.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import FrozenSet

from hearts.errors import ParsingError
from hearts.game.constants import (
    SUIT_NAMES,
    SUIT_SYMBOLS,
    SUIT_LETTERS,
    RANK_SYMBOLS,
    RANK_DISPLAY,
)


# ============================================================================
# Suit / Rank
# ============================================================================


class Suit(IntEnum):
    """Card suit. Values double as indexes into per-suit arrays."""

    CLUB = 0
    DIAMOND = 1
    HEART = 2
    SPADE = 3

    @property
    def wire_name(self) -> str:
        """Name used on the wire: 'Club', 'Diamond', 'Heart', 'Spade'."""
        return SUIT_NAMES[self.value]

    @property
    def symbol(self) -> str:
        return SUIT_SYMBOLS[self.value]

    @classmethod
    def from_name(cls, name: str) -> "Suit":
        """
        Decode a wire suit name.

        Raises:
            ParsingError: If the name is not one of the four suit names
        """
        if name not in SUIT_NAMES:
            raise ParsingError("Suit", name)
        return cls(SUIT_NAMES.index(name))

    @classmethod
    def from_symbol(cls, symbol: str) -> "Suit":
        """Decode a one-character suit, either a letter (C/D/H/S) or ♣♦♥♠."""
        if symbol.upper() in SUIT_LETTERS:
            return cls(SUIT_LETTERS.index(symbol.upper()))
        if symbol in SUIT_SYMBOLS:
            return cls(SUIT_SYMBOLS.index(symbol))
        raise ParsingError("Suit", symbol)

    def __str__(self) -> str:
        return self.symbol


class Rank(IntEnum):
    """Card rank. The value is the numeric rank used in scoring (Ace = 14)."""

    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14

    @property
    def symbol(self) -> str:
        """Wire symbol: '2'..'10', 'J', 'Q', 'K', 'A'."""
        return RANK_SYMBOLS[self.value]

    @property
    def display(self) -> str:
        """Single-character display symbol ('T' for ten)."""
        return RANK_DISPLAY[self.value]

    @classmethod
    def from_number(cls, number: int) -> "Rank":
        """
        Decode a numeric rank (2..14).

        Raises:
            ParsingError: If the number is outside 2..14
        """
        if isinstance(number, bool) or number not in RANK_SYMBOLS:
            raise ParsingError("Rank", number)
        return cls(number)

    @classmethod
    def from_symbol(cls, symbol: str) -> "Rank":
        """
        Decode a rank symbol ('2'..'10', 'T', 'J', 'Q', 'K', 'A').

        Raises:
            ParsingError: If the symbol is not a rank
        """
        token = symbol.upper()
        for value, rank_symbol in RANK_SYMBOLS.items():
            if token == rank_symbol or token == RANK_DISPLAY[value]:
                return cls(value)
        raise ParsingError("Rank", symbol)

    def __str__(self) -> str:
        return self.display


# ============================================================================
# Card
# ============================================================================


@dataclass(frozen=True, order=True)
class Card:
    """
    Immutable playing card.

    Field order defines the canonical ordering: suit first, then rank.

    Attributes:
        suit: Card suit
        rank: Card rank
    """

    suit: Suit
    rank: Rank

    @property
    def value(self) -> int:
        """Numeric rank value (2..14)."""
        return int(self.rank)

    @classmethod
    def parse(cls, text: str) -> "Card":
        """
        Build a card from short text such as 'QS', 'Q♠', '10H' or 'TH'.

        Args:
            text: Rank symbol followed by a one-character suit

        Returns:
            The parsed card

        Raises:
            ParsingError: If either part cannot be decoded
        """
        token = text.strip()
        if len(token) < 2:
            raise ParsingError("Card", text)
        return cls(Suit.from_symbol(token[-1]), Rank.from_symbol(token[:-1]))

    def __str__(self) -> str:
        """String representation: 'Q♠'"""
        return f"{self.rank.display}{self.suit.symbol}"

    def __repr__(self) -> str:
        """Developer representation: Card(SPADE, QUEEN)"""
        return f"Card({self.suit.name}, {self.rank.name})"


ALL_CARDS: FrozenSet[Card] = frozenset(
    Card(suit, rank) for suit in Suit for rank in Rank
)

OPENING_CARD = Card(Suit.CLUB, Rank.TWO)
QUEEN_OF_SPADES = Card(Suit.SPADE, Rank.QUEEN)


def is_shooting_card(card: Card) -> bool:
    """Hearts and the queen of spades: the cards a moon shot must capture."""
    return card.suit == Suit.HEART or card == QUEEN_OF_SPADES


def format_cards(cards) -> str:
    """Space-separated cards in canonical order, for log lines."""
    return " ".join(str(card) for card in sorted(cards))
