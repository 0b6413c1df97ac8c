"""
Unit tests for the local round simulator.

Tests dealing, passing, rule enforcement and scoring, including the
moon-shot adjustment.
"""

import pytest

from hearts.errors import IllegalPlayError
from hearts.game.cards import ALL_CARDS, OPENING_CARD, QUEEN_OF_SPADES, Card, Rank, Suit
from hearts.game.deal import Deal, DealCard
from hearts.game.simulator import HeartsRound, standard_round_parameters
from hearts.game.status import HeartsGameInstanceState, PlayerAction
from hearts.strategy.simple import SimpleCardStrategy

NAMES = ["North", "East", "South", "West"]


def passed_round(seed=0):
    """A round dealt and passed with the simple strategy, ready for play."""
    game = HeartsRound(NAMES, seed=seed)
    game.deal_cards()
    for name in NAMES:
        game.pass_cards(name, SimpleCardStrategy(name).pass_cards(game.status_for(name)))
    return game


class TestSetup:
    """Test construction and dealing."""

    def test_requires_four_players(self):
        """Test the wrong number of players raises ValueError."""
        with pytest.raises(ValueError):
            HeartsRound(["North", "East", "South"])

    def test_requires_distinct_names(self):
        """Test duplicate names raise ValueError."""
        with pytest.raises(ValueError):
            HeartsRound(["North", "North", "South", "West"])

    def test_standard_round_parameters(self):
        """Test hearts score 1 and the queen of spades 13."""
        parameters = standard_round_parameters()
        assert parameters.total_points(ALL_CARDS) == 26
        assert parameters.points(QUEEN_OF_SPADES) == 13
        assert parameters.number_of_cards_to_be_passed == 3

    def test_deal_partitions_deck(self):
        """Test every participant gets 13 cards and no card is dealt twice."""
        game = HeartsRound(NAMES, seed=1)
        game.deal_cards()

        assert game.phase == HeartsGameInstanceState.PASSING
        dealt = set()
        for name in NAMES:
            assert len(game.initial_hands[name]) == 13
            dealt |= game.initial_hands[name]
        assert dealt == set(ALL_CARDS)

    def test_seed_is_reproducible(self):
        """Test the same seed deals the same hands."""
        first = HeartsRound(NAMES, seed=42)
        second = HeartsRound(NAMES, seed=42)
        first.deal_cards()
        second.deal_cards()
        assert first.initial_hands == second.initial_hands

    def test_left_of_wraps(self):
        """Test seating wraps around the table."""
        game = HeartsRound(NAMES)
        assert game.left_of("North") == "East"
        assert game.left_of("West") == "North"


class TestPassing:
    """Test the passing phase."""

    def test_cards_move_left(self):
        """Test each pass lands in the left participant's hand."""
        game = passed_round(seed=3)

        assert game.phase == HeartsGameInstanceState.DEALING
        for name in NAMES:
            left = game.left_of(name)
            assert game.passed_to[left] == game.passed_by[name]
            for card in game.passed_by[name]:
                assert card in game.hands[left]
                assert card not in game.hands[name]
            assert len(game.hands[name]) == 13

    def test_pending_action_during_passing(self):
        """Test snapshots ask for a pass until the participant has passed."""
        game = HeartsRound(NAMES, seed=3)
        game.deal_cards()
        assert game.status_for("North").pending_action("North") == PlayerAction.PASS

        game.pass_cards("North", sorted(game.initial_hands["North"])[:3])
        assert game.status_for("North").pending_action("North") == PlayerAction.WAIT
        assert game.status_for("East").pending_action("East") == PlayerAction.PASS

    def test_wrong_pass_count(self):
        """Test passing the wrong number of cards is rejected."""
        game = HeartsRound(NAMES, seed=3)
        game.deal_cards()
        with pytest.raises(IllegalPlayError):
            game.pass_cards("North", sorted(game.initial_hands["North"])[:2])

    def test_pass_card_not_held(self):
        """Test passing a card from another hand is rejected."""
        game = HeartsRound(NAMES, seed=3)
        game.deal_cards()
        foreign = sorted(game.initial_hands["East"])[:3]
        with pytest.raises(IllegalPlayError, match="not in hand"):
            game.pass_cards("North", foreign)

    def test_double_pass(self):
        """Test a participant cannot pass twice."""
        game = HeartsRound(NAMES, seed=3)
        game.deal_cards()
        cards = sorted(game.initial_hands["North"])[:3]
        game.pass_cards("North", cards)
        with pytest.raises(IllegalPlayError, match="already passed"):
            game.pass_cards("North", cards)

    def test_no_passing_round(self):
        """Test a zero pass count goes straight to dealing."""
        game = HeartsRound(NAMES, standard_round_parameters(number_of_cards_to_be_passed=0), seed=3)
        game.deal_cards()
        assert game.phase == HeartsGameInstanceState.DEALING


class TestPlay:
    """Test rule enforcement during trick play."""

    def test_opening_card_leads(self):
        """Test the 2♣ holder leads and may only play 2♣."""
        game = passed_round(seed=5)
        leader = game.turn
        assert OPENING_CARD in game.hands[leader]
        assert game.legal_cards(leader) == [OPENING_CARD]

        other = next(card for card in game.hands[leader] if card != OPENING_CARD)
        with pytest.raises(IllegalPlayError):
            game.play_card(leader, other)

    def test_out_of_turn(self):
        """Test playing out of turn is rejected."""
        game = passed_round(seed=5)
        other = game.left_of(game.turn)
        with pytest.raises(IllegalPlayError, match="turn"):
            game.play_card(other, sorted(game.hands[other])[0])

    def test_must_follow_suit(self):
        """Test a held led-suit card forces following."""
        game = passed_round(seed=5)
        game.play_card(game.turn, OPENING_CARD)
        player = game.turn
        clubs = [card for card in game.hands[player] if card.suit == Suit.CLUB]
        others = [card for card in game.hands[player] if card.suit != Suit.CLUB]
        if clubs and others:
            with pytest.raises(IllegalPlayError, match="follow suit"):
                game.play_card(player, others[0])
        assert game.legal_cards(player) == (sorted(clubs) or sorted(game.hands[player]))

    def test_trick_winner_leads_next(self):
        """Test the winner of a deal holds the next turn."""
        game = passed_round(seed=5)
        strategies = {name: SimpleCardStrategy(name) for name in NAMES}
        for _ in range(4):
            name = game.turn
            game.play_card(name, strategies[name].play_card(game.status_for(name)))

        assert len(game.deals) == 1
        assert game.turn == game.deals[0].deal_winner
        assert game.current_deal.is_empty()
        assert game.current_deal.deal_number == 2

    def test_snapshot_sees_own_turn(self):
        """Test the snapshot of the acting participant asks for a play."""
        game = passed_round(seed=5)
        status = game.status_for(game.turn)
        assert status.is_my_turn
        assert status.pending_action(game.turn) == PlayerAction.PLAY
        assert len(status.my_current_hand) == 13
        assert status.unplayed_cards().isdisjoint(status.my_current_hand)


class TestScoring:
    """Test round points."""

    def _won_by(self, winner, cards):
        deals = []
        for i in range(0, len(cards), 4):
            deals.append(
                Deal(
                    deal_number=i // 4 + 1,
                    deal_cards=[DealCard(winner, card) for card in cards[i:i + 4]],
                    deal_winner=winner,
                )
            )
        return deals

    def test_points_go_to_winner(self):
        """Test captured points are credited to the deal winner."""
        game = HeartsRound(NAMES)
        game.deals = self._won_by("East", [QUEEN_OF_SPADES, Card.parse("2H"), Card.parse("3C"), Card.parse("4C")])
        assert game.round_points() == {"North": 0, "East": 14, "South": 0, "West": 0}

    def test_shooting_the_moon(self):
        """Test capturing every shooting card gives everyone else the points."""
        game = HeartsRound(NAMES)
        hearts = [Card(Suit.HEART, rank) for rank in Rank]
        cards = hearts + [QUEEN_OF_SPADES, Card.parse("2C"), Card.parse("3C")]
        game.deals = self._won_by("South", cards)
        assert game.round_points() == {"North": 26, "East": 26, "South": 0, "West": 26}

    def test_full_round(self):
        """Test a complete round deals out every card and scores 26 points."""
        game = HeartsRound(NAMES, seed=11)
        points = game.run({name: SimpleCardStrategy(name) for name in NAMES})

        assert game.phase == HeartsGameInstanceState.FINISHED
        assert len(game.deals) == 13
        assert all(not hand for hand in game.hands.values())
        assert sum(points.values()) in (26, 78)
        assert game.scores == points
