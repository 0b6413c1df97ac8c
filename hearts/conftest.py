"""
Shared pytest fixtures: snapshot and deal builders.

Cards are written as short text ("QS", "10H", "A♦") and parsed with
Card.parse, so scenarios read like game logs.
"""

from typing import Iterable, Optional, Sequence, Tuple, Union

import pytest

from hearts.game.cards import Card
from hearts.game.deal import Deal
from hearts.game.simulator import standard_round_parameters
from hearts.game.status import (
    GameParticipant,
    GameStatus,
    HeartsGameInstanceState,
    RoundParameters,
)

PLAYERS = ("Derek", "A", "B", "C")

CardsLike = Union[str, Iterable[Card]]


def parse_cards(cards: CardsLike) -> frozenset:
    """'QS 10H A♦' -> frozenset of Card; card iterables pass through."""
    if isinstance(cards, str):
        return frozenset(Card.parse(token) for token in cards.split())
    return frozenset(cards)


@pytest.fixture
def round_parameters() -> RoundParameters:
    """Standard Hearts points: one per heart, thirteen for the queen of spades."""
    return standard_round_parameters()


@pytest.fixture
def make_deal():
    """
    Build a deal from (player, card text) plays.

    Completed deals are resolved so the winner follows from the cards.
    """

    def _make(
        plays: Sequence[Tuple[str, str]],
        deal_number: int = 1,
        resolved: bool = True,
    ) -> Deal:
        deal = Deal(deal_number=deal_number)
        for player_name, text in plays:
            deal = deal.with_card(player_name, Card.parse(text))
        return deal.resolve() if resolved else deal

    return _make


@pytest.fixture
def make_status(round_parameters):
    """
    Build a GameStatus for one participant.

    Defaults describe Derek's turn in the dealing phase with no cards
    passed; every participant except the one holding the turn has
    has_turn False.
    """

    def _make(
        hand: CardsLike,
        me: str = "Derek",
        players: Sequence[str] = PLAYERS,
        turn: Optional[str] = "Derek",
        deals: Sequence[Deal] = (),
        in_progress: Optional[Deal] = None,
        initial_hand: Optional[CardsLike] = None,
        passed_by_me: CardsLike = (),
        game_state: HeartsGameInstanceState = HeartsGameInstanceState.DEALING,
        parameters: Optional[RoundParameters] = None,
    ) -> GameStatus:
        current = parse_cards(hand)
        participants = tuple(
            GameParticipant(
                team_name=name,
                left_participant=players[(i + 1) % len(players)],
                number_of_cards_in_hand=len(current) if name == me else 0,
                has_turn=(name == turn),
            )
            for i, name in enumerate(players)
        )
        return GameStatus(
            current_game_id="test-game",
            round_parameters=parameters or round_parameters,
            game_state=game_state,
            game_players=participants,
            my_initial_hand=parse_cards(initial_hand) if initial_hand is not None else current,
            cards_passed_by_me=parse_cards(passed_by_me),
            my_final_hand=current,
            my_current_hand=current,
            game_deals=tuple(deals),
            in_progress_deal=in_progress,
            is_my_turn=(turn == me),
        )

    return _make
