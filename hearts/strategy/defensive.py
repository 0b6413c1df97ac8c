"""
Defensive strategy for Hearts.

Plays to avoid penalty points, switching to capturing them when it looks
able to shoot the moon itself, and when another participant looks like a
shooter (capturing their points is the only way to break the shot).

Card play:
    1. The opening card (2♣) is played as soon as it is held.
    2. Every legal card gets a CardScore (see hearts.strategy.evaluation).
    3. If shooting, or a possible shooter is detected, every score is
       inverted so the same machinery prefers taking points.
    4. The smallest (score, card) pair wins; Card order breaks ties.

Card passing:
    Cards are picked one at a time, most expensive to keep first. Each
    pick is added back to the unseen pool so the next pick accounts for
    the card now sitting in an opponent's hand.
"""

import logging
from typing import AbstractSet, Iterable, List, Optional, Sequence, Set, Tuple

from hearts.config import StrategyConfig
from hearts.errors import NoValidCardError
from hearts.game.cards import OPENING_CARD, Card, Rank, Suit, format_cards
from hearts.game.deal import Deal
from hearts.game.status import GameParticipant, GameStatus, RoundParameters
from hearts.strategy.base import CardStrategy
from hearts.strategy.evaluation import (
    CardScore,
    can_win_deal,
    chance_of_later_win,
    chance_of_win,
    later_potential_points,
    will_win_deal,
)
from hearts.strategy.inference import (
    SuitInference,
    plays_left,
    possible_shooter,
    possible_shooters,
)

logger = logging.getLogger(__name__)


class DefensiveCardStrategy(CardStrategy):
    """
    Point-avoiding strategy with moon-shot detection.

    Attributes:
        player_name: The participant this strategy plays for
        config: Tunable constants
        shooting_the_moon: Whether the last decision was made while trying
            to capture every shooting card; reset when passing starts a round
    """

    def __init__(self, player_name: str, config: Optional[StrategyConfig] = None):
        super().__init__(player_name)
        self.config = config or StrategyConfig()
        self.config.validate()
        self.shooting_the_moon = False

    # ========================================================================
    # Passing
    # ========================================================================

    def pass_cards(self, status: GameStatus) -> List[Card]:
        self.shooting_the_moon = False
        logger.info(f"My Hand : {format_cards(status.my_current_hand)}")

        self.shooting_the_moon = self.am_i_shooter(
            status, self.config.pass_shoot_multiplier
        )
        if self.shooting_the_moon:
            logger.info("Passing to shoot the moon")

        hand = status.my_initial_hand
        remaining_cards = status.unplayed_cards() - hand
        count = status.round_parameters.number_of_cards_to_be_passed

        chosen: List[Card] = []
        for _ in range(count):
            card = self.pass_card(
                hand, remaining_cards, status.round_parameters, self.shooting_the_moon
            )
            if card is None:
                break
            chosen.append(card)
            remaining_cards.add(card)

        if len(chosen) < count:
            logger.warning(f"Only {len(chosen)} of {count} cards available to pass")
        logger.info(f"Passing: {' '.join(str(card) for card in chosen)}")
        return chosen

    def pass_card(
        self,
        hand: Iterable[Card],
        remaining_cards: AbstractSet[Card],
        round_parameters: RoundParameters,
        shooting: bool,
    ) -> Optional[Card]:
        """
        Pick the next card to pass.

        Args:
            hand: Initial hand
            remaining_cards: Unseen cards, including cards already chosen
            round_parameters: Card points
            shooting: Pass safe low cards instead of dangerous ones

        Returns:
            The card with the smallest pass key, or None if every card of
            the hand is already chosen
        """
        candidates = [card for card in hand if card not in remaining_cards]
        if not candidates:
            return None

        def pass_key(card: Card) -> Tuple[int, int, Card]:
            cost = later_potential_points(card, remaining_cards, round_parameters)
            points = -int(cost * self.config.score_scale)
            if card.suit == Suit.HEART:
                points -= self.config.pass_priority_penalty
            if card.suit == Suit.SPADE and card.rank > Rank.JACK:
                points -= self.config.pass_priority_penalty
            if shooting:
                return (abs(points), card.value, card)
            return (points, -card.value, card)

        return min(candidates, key=pass_key)

    # ========================================================================
    # Card play
    # ========================================================================

    def play_card(self, status: GameStatus) -> Card:
        if not status.my_current_hand:
            raise NoValidCardError("No valid cards to play!")

        if OPENING_CARD in status.my_current_hand:
            logger.info(f"Opening with {OPENING_CARD}")
            return OPENING_CARD

        evaluation = self.evaluate_play(status)
        score, card = evaluation[0]
        logger.info(f"Playing {card} ({score})")
        return card

    def evaluate_play(self, status: GameStatus) -> List[Tuple[CardScore, Card]]:
        """
        Score every legal card, best first.

        Recomputes the shooting flag, then inverts all scores when this
        participant is shooting or someone is a possible shooter.

        Args:
            status: Snapshot on this participant's turn

        Returns:
            (score, card) pairs sorted ascending; the first is the choice

        Raises:
            NoValidCardError: If the hand is empty
        """
        legal = self.legal_cards(status)

        self.shooting_the_moon = self.am_i_shooter(
            status, self.config.play_shoot_multiplier
        )
        shooter = possible_shooter(
            status.game_players,
            status.in_progress_deal,
            status.game_deals,
            status.round_parameters,
            self.config.shoot_target_base,
        )

        if self.shooting_the_moon:
            logger.info("Shooting the moon!")
        elif shooter is not None:
            logger.info(f"Possible shooter detected: {shooter.team_name}")

        inference = SuitInference(status)
        evaluation = [(self.score_card(card, status, inference), card) for card in legal]
        if self.shooting_the_moon or shooter is not None:
            evaluation = [(score.invert(), card) for score, card in evaluation]
        evaluation.sort()

        logger.info(f"Unplayed: {format_cards(status.unplayed_cards())}")
        logger.info(f"Void: {inference.describe()}")
        logger.info(f"My Hand:  {format_cards(status.my_current_hand)}")
        for score, card in evaluation:
            logger.debug(f"{card}: {score}")

        return evaluation

    def score_card(
        self,
        card: Card,
        status: GameStatus,
        inference: Optional[SuitInference] = None,
    ) -> CardScore:
        """
        Score a single candidate card.

        Args:
            card: Candidate from the current hand
            status: Snapshot on this participant's turn
            inference: Void inference for the snapshot (built if omitted)

        Returns:
            Uninverted CardScore
        """
        if inference is None:
            inference = SuitInference(status)

        round_parameters = status.round_parameters
        players = status.game_players
        deal = status.in_progress_deal
        remaining_cards = status.unplayed_cards()

        trick_voids = inference.trick_void_suits(plays_left(players, deal))
        safe_remaining_cards = {
            other for other in remaining_cards if other.suit not in trick_voids
        }
        if deal is not None and not deal.is_empty():
            safe_remaining_cards -= status.cards_passed_by_me

        potential = self.potential_points(
            card, players, deal, safe_remaining_cards, inference, round_parameters
        )
        if will_win_deal(card, players, deal, safe_remaining_cards):
            definite = potential
        else:
            definite = 0.0

        later = -later_potential_points(card, remaining_cards, round_parameters)

        rank_modifier = -1 if round_parameters.points(card) < 0 else 1
        scale = self.config.score_scale
        return CardScore(
            definite_points=int(definite * scale),
            potential_points=int(potential * scale),
            later_potential_points=int(later * scale),
            rank=-card.value * rank_modifier,
        )

    def potential_points(
        self,
        card: Card,
        players: Sequence[GameParticipant],
        deal: Optional[Deal],
        remaining_cards: Set[Card],
        inference: SuitInference,
        round_parameters: RoundParameters,
    ) -> float:
        """
        Expected points taken by winning the current deal with card.

        Points already in the deal, plus the chance of winning in suit times
        the points of lower unseen cards of the suit, plus (when the suit is
        short, a remaining player is void in it, or we are shooting) the
        chance of a later win times the unseen off-suit points.
        """
        if not can_win_deal(card, deal):
            return 0.0

        dealt_cards = deal.cards if deal is not None else []
        card_points = round_parameters.points(card)
        dealt_points = round_parameters.total_points(dealt_cards)

        suit_points = sum(
            round_parameters.points(other)
            for other in list(remaining_cards) + [card]
            if other.suit == card.suit and other.rank <= card.rank
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
        number_of_suit = sum(1 for other in remaining_cards if other.suit == card.suit)
        number_dealt = len(dealt_cards)
        crowded = number_dealt >= self.config.crowded_trick_size

        safe_target = (
            self.config.safe_target_base + card_points + dealt_points - number_dealt
        )

        if (
            suit_points < 0
            and dealt_points > self.config.negative_trick_points
            and not crowded
        ):
            suit_win_modifier = self.config.negative_suit_modifier
        else:
            suit_win_modifier = 1.0

        if crowded:
            suit_win_points = 0.0
        else:
            suit_win_points = (
                chance_of_win(card, players, deal, remaining_cards)
                * suit_points
                * suit_win_modifier
            )

        voider = inference.any_void(plays_left(players, deal), card.suit)

        if self.shooting_the_moon or voider or (number_of_suit < safe_target and not crowded):
            other_cards = set(remaining_cards) | set(dealt_cards)
            other_win_points = chance_of_later_win(card, other_cards) * other_points
        else:
            other_win_points = 0.0

        return dealt_points + suit_win_points + other_win_points

    # ========================================================================
    # Shooting the moon
    # ========================================================================

    def am_i_shooter(self, status: GameStatus, multiplier: float) -> bool:
        """
        Whether this participant should try to shoot the moon.

        Nobody else may have captured shooting cards. Then either we are
        already committed, or enough of the hand wins outright:
        winners * multiplier > hand size.
        """
        shooters = possible_shooters(
            status.game_players, status.game_deals, status.round_parameters
        )
        if len(shooters) > 1:
            return False
        if shooters and shooters[0][0].team_name != self.player_name:
            return False
        if self.shooting_the_moon:
            return True

        remaining_cards = status.unplayed_cards()
        hand = status.my_current_hand
        winners = [
            card
            for card in hand
            if will_win_deal(
                card, status.game_players, status.in_progress_deal, remaining_cards
            )
        ]
        return len(winners) * multiplier > len(hand)
