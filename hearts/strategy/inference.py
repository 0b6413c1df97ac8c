"""
Suit-void and moon-shooter inference.

Everything here is derived from the public record of the round (completed
deals and the in-progress deal); nothing depends on hidden hands.

Void inference:
    A participant who played off-suit in a completed deal cannot hold the
    led suit. Voids are kept in a boolean matrix (participants x suits) and
    only ever gain entries as more deals complete.

Shooter inference:
    A participant is a plausible moon shooter when they are the only one to
    have captured shooting cards (hearts, queen of spades), their captured
    total exceeds a target that drops by one per completed deal, and they
    can still win the in-progress deal.
"""

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

import numpy as np

from hearts.game.cards import Card, Suit, is_shooting_card
from hearts.game.deal import Deal
from hearts.game.status import GameParticipant, GameStatus, RoundParameters

logger = logging.getLogger(__name__)


class SuitInference:
    """
    Per-participant void suits inferred from completed deals.

    Attributes:
        player_names: Participants in seating order (matrix rows)
        void_matrix: Boolean array, void_matrix[i, suit] is True when
            participant i is known to hold no card of suit
    """

    def __init__(self, status: GameStatus):
        """
        Build the void matrix from a snapshot.

        Args:
            status: Snapshot whose completed deals are scanned
        """
        self.player_names: List[str] = status.player_names
        self._index: Dict[str, int] = {
            name: i for i, name in enumerate(self.player_names)
        }
        self.void_matrix = np.zeros((len(self.player_names), len(Suit)), dtype=bool)

        for deal in status.game_deals:
            if deal.suit is None:
                continue
            for deal_card in deal.deal_cards:
                row = self._index.get(deal_card.player_name)
                if row is not None and deal_card.card.suit != deal.suit:
                    self.void_matrix[row, int(deal.suit)] = True

    def void_suits(self, player_name: str) -> Set[Suit]:
        row = self._index.get(player_name)
        if row is None:
            return set()
        return {Suit(int(i)) for i in np.flatnonzero(self.void_matrix[row])}

    def void_suits_by_player(self) -> Dict[str, Set[Suit]]:
        return {name: self.void_suits(name) for name in self.player_names}

    def trick_void_suits(self, plays_left: Iterable[str]) -> Set[Suit]:
        """
        Suits that no remaining player in the deal can follow.

        Args:
            plays_left: Participants still to play in the current deal

        Returns:
            Intersection of their void suits; empty when nobody is left
        """
        rows = [self._index[name] for name in plays_left if name in self._index]
        if not rows:
            return set()
        voids = np.logical_and.reduce(self.void_matrix[rows], axis=0)
        return {Suit(int(i)) for i in np.flatnonzero(voids)}

    def any_void(self, players: Iterable[str], suit: Suit) -> bool:
        """Whether any of the given participants is void in suit."""
        rows = [self._index[name] for name in players if name in self._index]
        return bool(rows) and bool(self.void_matrix[rows, int(suit)].any())

    def describe(self) -> str:
        """Log line such as 'North[♦] East[] ...'."""
        return " ".join(
            f"{name}[{''.join(str(s) for s in sorted(suits))}]"
            for name, suits in self.void_suits_by_player().items()
        )


# ============================================================================
# Deal position helpers
# ============================================================================


def plays_left(players: Sequence[GameParticipant], deal: Optional[Deal]) -> Set[str]:
    """
    Participants still to act in the current deal.

    Everyone except the participant holding the turn, minus whoever has
    already played into the deal.
    """
    remaining = {player.team_name for player in players if not player.has_turn}
    if deal is not None:
        remaining.difference_update(deal.players)
    return remaining


def cards_won(deals: Iterable[Deal], player_name: str) -> Set[Card]:
    """All cards in the completed deals a participant won."""
    return {
        card
        for deal in deals
        if deal.deal_winner == player_name
        for card in deal.cards
    }


def player_might_win_deal(player_name: str, deal: Deal) -> bool:
    """
    Whether a participant can still end up winning the deal.

    True when the deal has no led suit yet or the participant has not
    played; otherwise their card must be of the led suit and unbeaten.
    """
    if deal.suit is None or not deal.has_played(player_name):
        return True
    card = deal.card_of(player_name)
    return card.suit == deal.suit and not any(
        other.suit == deal.suit and other.rank > card.rank for other in deal.cards
    )


# ============================================================================
# Shooter detection
# ============================================================================


def possible_shooters(
    players: Sequence[GameParticipant],
    deals: Sequence[Deal],
    round_parameters: RoundParameters,
) -> List[Tuple[GameParticipant, int]]:
    """
    Participants holding a positive total of captured shooting cards.

    Returns:
        (participant, captured points) pairs in seating order
    """
    shooters = []
    for player in players:
        score = sum(
            round_parameters.points(card)
            for card in cards_won(deals, player.team_name)
            if is_shooting_card(card)
        )
        if score > 0:
            shooters.append((player, score))
    return shooters


def possible_shooter(
    players: Sequence[GameParticipant],
    in_progress_deal: Optional[Deal],
    deals: Sequence[Deal],
    round_parameters: RoundParameters,
    shoot_target_base: int = 20,
) -> Optional[GameParticipant]:
    """
    The participant plausibly attempting to shoot the moon, if any.

    Args:
        players: All participants
        in_progress_deal: Current deal (None between deals)
        deals: Completed deals this round
        round_parameters: Card points
        shoot_target_base: Target before any deal completes

    Returns:
        The single candidate above the target who can still win the
        current deal, or None
    """
    shooters = possible_shooters(players, deals, round_parameters)
    if len(shooters) != 1:
        return None

    shoot_target = shoot_target_base - len(deals)
    player, score = shooters[0]
    if score <= shoot_target:
        return None
    if in_progress_deal is not None and not player_might_win_deal(
        player.team_name, in_progress_deal
    ):
        return None

    logger.debug(f"{player.team_name} holds {score} points (target {shoot_target})")
    return player
