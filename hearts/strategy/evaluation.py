"""
Closed-form win estimates and card scores.

All estimates are counts over the set of cards still unseen; there is no
search or sampling. Probabilities are plain fractions of unseen same-suit
cards ranking below the candidate.

Score layout (compared lexicographically, smaller is preferred):
    definite_points: potential points when the card is sure to win the deal
    potential_points: expected points from winning the deal with this card
    later_potential_points: negated cost of keeping the card for later
    rank: negated rank, flipped again for bonus (negative point) cards
"""

from dataclasses import dataclass
from typing import AbstractSet, Iterable, Optional, Sequence

from hearts.game.cards import Card
from hearts.game.deal import Deal
from hearts.game.status import GameParticipant, RoundParameters
from hearts.strategy.inference import plays_left


@dataclass(frozen=True, order=True)
class CardScore:
    """
    Score of one candidate card, in thousandths of a point.

    Attributes:
        definite_points: Points taken for sure by playing the card
        potential_points: Expected points taken in the current deal
        later_potential_points: Negated expected cost of holding the card
        rank: Rank tie-break
    """

    definite_points: int
    potential_points: int
    later_potential_points: int
    rank: int

    def invert(self) -> "CardScore":
        """Turn 'avoid points' into 'capture points'; rank is kept."""
        return CardScore(
            definite_points=-abs(self.definite_points),
            potential_points=-abs(self.potential_points),
            later_potential_points=abs(self.later_potential_points),
            rank=self.rank,
        )

    def __str__(self) -> str:
        return (
            f"{self.definite_points / 1000:>7.3f}, "
            f"{self.potential_points / 1000:>7.3f}, "
            f"{self.later_potential_points / 1000:>7.3f}, "
            f"{self.rank:>3}"
        )


def _fraction_below(card: Card, cards: Iterable[Card]) -> float:
    """Share of same-suit cards ranking below card; 1.0 when there are none."""
    suit_cards = [other for other in cards if other.suit == card.suit]
    if not suit_cards:
        return 1.0
    below = sum(1 for other in suit_cards if other.rank < card.rank)
    return below / len(suit_cards)


def can_win_deal(card: Card, deal: Optional[Deal]) -> bool:
    """
    Whether card would currently top the deal.

    True with no deal or no card of the deal's suit played; otherwise card
    must follow the led suit and beat its highest card.
    """
    if deal is None:
        return True
    suit = deal.suit if deal.suit is not None else card.suit
    led_cards = [other for other in deal.cards if other.suit == suit]
    if not led_cards:
        return True
    return card.suit == suit and card.rank > max(led_cards).rank


def will_win_deal(
    card: Card,
    players: Sequence[GameParticipant],
    deal: Optional[Deal],
    remaining_cards: AbstractSet[Card],
) -> bool:
    """
    Whether card is guaranteed to win the deal.

    It must top the deal now, and either nobody is left to play or no
    remaining card of the deal's suit outranks it.
    """
    if not can_win_deal(card, deal):
        return False
    if not plays_left(players, deal):
        return True
    suit = deal.suit if deal is not None and deal.suit is not None else card.suit
    higher = [other for other in remaining_cards if other.suit == suit]
    return not higher or card.rank > max(higher).rank


def chance_of_win(
    card: Card,
    players: Sequence[GameParticipant],
    deal: Optional[Deal],
    remaining_cards: AbstractSet[Card],
) -> float:
    """
    Estimated probability that card ends up winning the deal.

    1.0 when guaranteed. When following (or leading) with players still to
    act, the share of unseen and played same-suit cards ranking below it.
    0.0 for an off-suit discard or when nobody is left to act.
    """
    if will_win_deal(card, players, deal, remaining_cards):
        return 1.0
    follows = deal is None or deal.suit is None or deal.suit == card.suit
    if follows and plays_left(players, deal):
        dealt = deal.cards if deal is not None else []
        return _fraction_below(card, list(remaining_cards) + dealt)
    return 0.0


def chance_of_later_win(card: Card, remaining_cards: Iterable[Card]) -> float:
    """Probability of card winning a later deal in its own suit."""
    return _fraction_below(card, remaining_cards)


def later_potential_points(
    card: Card,
    remaining_cards: AbstractSet[Card],
    round_parameters: RoundParameters,
) -> float:
    """
    Expected points collected if card is kept and wins a later deal.

    Its own points, the points of lower unseen cards of its suit, and the
    chance of winning times the positive points of unseen off-suit cards
    that could be discarded onto it.
    """
    card_points = round_parameters.points(card)
    suit_points = sum(
        round_parameters.points(other)
        for other in remaining_cards
        if other.suit == card.suit and other.rank < card.rank
    )
    other_points = sum(
        points
        for points in (
            round_parameters.points(other)
            for other in remaining_cards
            if other.suit != card.suit
        )
        if points > 0
    )
    return card_points + suit_points + chance_of_later_win(card, remaining_cards) * other_points
