"""
Local Hearts round simulator.

Plays one round between four strategies the way the game server does:
deal, pass to the left, 2♣ leads the first deal, follow suit, highest card
of the led suit wins and leads next. Every decision is taken from a
GameStatus snapshot built for the acting participant, so strategies see
exactly what they would see from the server.

Example:
    >>> from hearts.game.simulator import HeartsRound
    >>> from hearts.strategy import DefensiveCardStrategy, SimpleCardStrategy
    >>>
    >>> names = ["North", "East", "South", "West"]
    >>> game = HeartsRound(names, seed=7)
    >>> strategies = {name: SimpleCardStrategy(name) for name in names}
    >>> strategies["North"] = DefensiveCardStrategy("North")
    >>> points = game.run(strategies)
"""

import logging
import random
from typing import TYPE_CHECKING, Dict, List, Mapping, Optional, Sequence, Set

from hearts.errors import IllegalPlayError
from hearts.game.cards import (
    ALL_CARDS,
    OPENING_CARD,
    QUEEN_OF_SPADES,
    Card,
    Suit,
    is_shooting_card,
)
from hearts.game.constants import (
    CARDS_PER_HAND,
    DEFAULT_CARDS_TO_PASS,
    HEART_POINTS,
    NUM_PLAYERS,
    QUEEN_OF_SPADES_POINTS,
)
from hearts.game.deal import Deal
from hearts.game.status import (
    GameInstanceState,
    GameParticipant,
    GameStatus,
    HeartsGameInstanceState,
    RoundParameters,
    RoundState,
)

if TYPE_CHECKING:
    from hearts.strategy.base import CardStrategy

logger = logging.getLogger(__name__)


def standard_round_parameters(
    round_id: int = 1, number_of_cards_to_be_passed: int = DEFAULT_CARDS_TO_PASS
) -> RoundParameters:
    """Hearts score one point each, the queen of spades thirteen."""
    card_points = {
        card: HEART_POINTS for card in ALL_CARDS if card.suit == Suit.HEART
    }
    card_points[QUEEN_OF_SPADES] = QUEEN_OF_SPADES_POINTS
    return RoundParameters(
        round_id=round_id,
        number_of_cards_to_be_passed=number_of_cards_to_be_passed,
        card_points=card_points,
    )


class HeartsRound:
    """
    A single round of Hearts between four participants.

    Attributes:
        player_names: Participants in seating order; each passes to and is
            followed by the next one (wrapping around)
        round_parameters: Card points and pass count
        phase: NOT_STARTED, PASSING, DEALING or FINISHED
        initial_hands: Hands as dealt
        final_hands: Hands after passing
        hands: Cards still held
        passed_by: Cards each participant passed away
        passed_to: Cards each participant received
        deals: Completed deals
        current_deal: Deal being played (None outside the dealing phase)
        turn: Participant to act (None outside the dealing phase)
    """

    def __init__(
        self,
        player_names: Sequence[str],
        round_parameters: Optional[RoundParameters] = None,
        seed: Optional[int] = None,
        game_id: str = "local",
        scores: Optional[Mapping[str, int]] = None,
    ):
        """
        Args:
            player_names: Exactly four distinct names, in seating order
            round_parameters: Defaults to standard Hearts points, pass 3
            seed: Seed for the shuffle
            game_id: Identifier reported in snapshots
            scores: Scores carried in from earlier rounds

        Raises:
            ValueError: On a wrong number of players or duplicate names
        """
        if len(player_names) != NUM_PLAYERS:
            raise ValueError(f"Hearts requires exactly {NUM_PLAYERS} players")
        if len(set(player_names)) != len(player_names):
            raise ValueError(f"Player names must be distinct: {player_names}")

        self.player_names: List[str] = list(player_names)
        self.round_parameters = round_parameters or standard_round_parameters()
        self.rng = random.Random(seed)
        self.game_id = game_id
        self.scores: Dict[str, int] = dict(scores or {name: 0 for name in player_names})

        self.phase = HeartsGameInstanceState.NOT_STARTED
        self.initial_hands: Dict[str, Set[Card]] = {}
        self.final_hands: Dict[str, Set[Card]] = {}
        self.hands: Dict[str, Set[Card]] = {}
        self.passed_by: Dict[str, List[Card]] = {}
        self.passed_to: Dict[str, List[Card]] = {}
        self.deals: List[Deal] = []
        self.current_deal: Optional[Deal] = None
        self.turn: Optional[str] = None

    # ========================================================================
    # Setup and passing
    # ========================================================================

    def left_of(self, player_name: str) -> str:
        index = self.player_names.index(player_name)
        return self.player_names[(index + 1) % NUM_PLAYERS]

    def deal_cards(self) -> None:
        """Shuffle and deal thirteen cards each, then open passing."""
        deck = sorted(ALL_CARDS)
        self.rng.shuffle(deck)

        for seat, name in enumerate(self.player_names):
            hand = set(deck[seat * CARDS_PER_HAND:(seat + 1) * CARDS_PER_HAND])
            self.initial_hands[name] = hand
            self.hands[name] = set(hand)

        if self.round_parameters.number_of_cards_to_be_passed > 0:
            self.phase = HeartsGameInstanceState.PASSING
        else:
            self._start_dealing()

    def pass_cards(self, player_name: str, cards: Sequence[Card]) -> None:
        """
        Record one participant's pass.

        Once everybody has passed, the cards move to the left and trick
        play begins.

        Raises:
            IllegalPlayError: If the pass is malformed or out of phase
        """
        if self.phase != HeartsGameInstanceState.PASSING:
            raise IllegalPlayError(player_name, cards, "not in the passing phase")
        if player_name in self.passed_by:
            raise IllegalPlayError(player_name, cards, "already passed")

        count = self.round_parameters.number_of_cards_to_be_passed
        if len(cards) != count or len(set(cards)) != count:
            raise IllegalPlayError(player_name, cards, f"must pass {count} distinct cards")
        for card in cards:
            if card not in self.initial_hands[player_name]:
                raise IllegalPlayError(player_name, card, "card not in hand")

        self.passed_by[player_name] = list(cards)
        logger.debug(f"{player_name} passes {' '.join(str(c) for c in cards)}")

        if len(self.passed_by) == NUM_PLAYERS:
            for name, passed in self.passed_by.items():
                self.passed_to[self.left_of(name)] = passed
            for name in self.player_names:
                self.hands[name] = (
                    self.initial_hands[name] - set(self.passed_by[name])
                ) | set(self.passed_to[name])
            self._start_dealing()

    def _start_dealing(self) -> None:
        for name in self.player_names:
            self.final_hands[name] = set(self.hands[name])
        self.phase = HeartsGameInstanceState.DEALING
        self.turn = self.holder_of(OPENING_CARD)
        self.current_deal = Deal(deal_number=1)

    def holder_of(self, card: Card) -> str:
        for name, hand in self.hands.items():
            if card in hand:
                return name
        raise ValueError(f"Nobody holds {card}")

    # ========================================================================
    # Trick play
    # ========================================================================

    def legal_cards(self, player_name: str) -> List[Card]:
        """Cards the participant may play now, in canonical order."""
        hand = self.hands[player_name]
        if not self.deals and self.current_deal is not None and self.current_deal.is_empty():
            if OPENING_CARD in hand:
                return [OPENING_CARD]
        led_suit = self.current_deal.suit if self.current_deal is not None else None
        following = sorted(card for card in hand if card.suit == led_suit)
        return following or sorted(hand)

    def play_card(self, player_name: str, card: Card) -> None:
        """
        Play a card into the current deal.

        Raises:
            IllegalPlayError: Out of turn, card not held, or suit not followed
        """
        if self.phase != HeartsGameInstanceState.DEALING:
            raise IllegalPlayError(player_name, card, "not in the dealing phase")
        if player_name != self.turn:
            raise IllegalPlayError(player_name, card, f"it is {self.turn}'s turn")
        if card not in self.hands[player_name]:
            raise IllegalPlayError(player_name, card, "card not in hand")
        if card not in self.legal_cards(player_name):
            raise IllegalPlayError(player_name, card, "must follow suit or lead the opening card")

        self.hands[player_name].remove(card)
        self.current_deal = self.current_deal.with_card(player_name, card)

        if len(self.current_deal.deal_cards) < NUM_PLAYERS:
            self.turn = self.left_of(player_name)
            return

        resolved = self.current_deal.resolve()
        self.deals.append(resolved)
        logger.debug(f"{resolved} won by {resolved.deal_winner}")

        if any(self.hands.values()):
            self.current_deal = Deal(deal_number=len(self.deals) + 1)
            self.turn = resolved.deal_winner
        else:
            self.current_deal = None
            self.turn = None
            self.phase = HeartsGameInstanceState.FINISHED
            for name, points in self.round_points().items():
                self.scores[name] += points

    # ========================================================================
    # Scoring and snapshots
    # ========================================================================

    def captured_points(self, player_name: str) -> int:
        return sum(
            self.round_parameters.total_points(deal.cards)
            for deal in self.deals
            if deal.deal_winner == player_name
        )

    def round_points(self) -> Dict[str, int]:
        """
        Points scored this round.

        A participant who captured every shooting card scores nothing and
        everyone else scores the value of those cards instead.
        """
        points = {name: self.captured_points(name) for name in self.player_names}
        shooting_cards = {card for card in ALL_CARDS if is_shooting_card(card)}
        for name in self.player_names:
            won = {
                card
                for deal in self.deals
                if deal.deal_winner == name
                for card in deal.cards
            }
            if shooting_cards <= won:
                moon = self.round_parameters.total_points(shooting_cards)
                logger.info(f"{name} shot the moon")
                return {
                    other: (points[other] - moon if other == name else points[other] + moon)
                    for other in self.player_names
                }
        return points

    def status_for(self, player_name: str) -> GameStatus:
        """Build the snapshot the server would send to player_name."""
        if self.phase == HeartsGameInstanceState.FINISHED:
            round_state = RoundState.FINISHED
        else:
            round_state = RoundState.RUNNING

        participants = tuple(
            GameParticipant(
                team_name=name,
                left_participant=self.left_of(name),
                number_of_cards_in_hand=len(self.hands.get(name, ())),
                has_turn=(name == self.turn),
                current_score=self.scores[name] + self.captured_points(name),
            )
            for name in self.player_names
        )
        return GameStatus(
            current_game_id=self.game_id,
            current_game_state=GameInstanceState.RUNNING,
            current_round_id=self.round_parameters.round_id,
            current_round_state=round_state,
            round_parameters=self.round_parameters,
            game_state=self.phase,
            game_players=participants,
            my_initial_hand=frozenset(self.initial_hands.get(player_name, ())),
            cards_passed_by_me=frozenset(self.passed_by.get(player_name, ())),
            cards_passed_to_me=frozenset(self.passed_to.get(player_name, ())),
            my_final_hand=frozenset(self.final_hands.get(player_name, ())),
            my_current_hand=frozenset(self.hands.get(player_name, ())),
            game_deals=tuple(self.deals),
            in_progress_deal=self.current_deal,
            is_my_turn=(player_name == self.turn),
        )

    def run(self, strategies: Mapping[str, "CardStrategy"]) -> Dict[str, int]:
        """
        Play the whole round.

        Args:
            strategies: One strategy per participant name

        Returns:
            Round points per participant
        """
        if self.phase == HeartsGameInstanceState.NOT_STARTED:
            self.deal_cards()

        if self.phase == HeartsGameInstanceState.PASSING:
            for name in self.player_names:
                cards = strategies[name].pass_cards(self.status_for(name))
                self.pass_cards(name, cards)

        while self.phase == HeartsGameInstanceState.DEALING:
            name = self.turn
            card = strategies[name].play_card(self.status_for(name))
            self.play_card(name, card)

        return self.round_points()
