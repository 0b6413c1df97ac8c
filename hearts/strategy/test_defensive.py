"""
Unit tests for DefensiveCardStrategy.

Whole-decision scenarios live in hearts/tests/test_scenarios.py; these
tests pin down the individual scoring pieces.
"""

from dataclasses import replace

import pytest

from hearts.config import StrategyConfig
from hearts.errors import NoValidCardError
from hearts.game.cards import OPENING_CARD, Card
from hearts.game.status import HeartsGameInstanceState
from hearts.strategy.defensive import DefensiveCardStrategy
from hearts.strategy.evaluation import CardScore


@pytest.fixture
def strategy():
    return DefensiveCardStrategy("Derek")


@pytest.fixture
def bonus_parameters(round_parameters):
    """Standard points plus a ten-point bonus for the jack of diamonds."""
    card_points = dict(round_parameters.card_points)
    card_points[Card.parse("JD")] = -10
    return replace(round_parameters, card_points=card_points)


@pytest.fixture
def last_to_play(make_status, make_deal):
    """Derek plays last into A:4♦ B:K♦ C:7♥."""
    deal = make_deal([("A", "4D"), ("B", "KD"), ("C", "7H")], resolved=False)
    return make_status("8D JD AD 3S 5C", in_progress=deal)


class TestConstruction:
    """Test configuration handling."""

    def test_default_config(self, strategy):
        """Test a default config is created and shooting starts off."""
        assert strategy.config == StrategyConfig()
        assert not strategy.shooting_the_moon
        assert repr(strategy) == "DefensiveCardStrategy('Derek')"

    def test_invalid_config(self):
        """Test an invalid config is rejected up front."""
        with pytest.raises(ValueError):
            DefensiveCardStrategy("Derek", StrategyConfig(score_scale=0))


class TestPlayCard:
    """Test card play entry points."""

    def test_empty_hand(self, strategy, make_status):
        """Test an empty hand raises NoValidCardError."""
        with pytest.raises(NoValidCardError):
            strategy.play_card(make_status(""))

    def test_empty_hand_evaluation(self, strategy, make_status):
        """Test evaluation also refuses an empty hand."""
        with pytest.raises(NoValidCardError):
            strategy.evaluate_play(make_status(""))

    def test_opening_card(self, strategy, make_status):
        """Test 2♣ is played whenever it is held."""
        assert strategy.play_card(make_status("2C 5C AH")) == OPENING_CARD

    def test_evaluation_covers_legal_cards(self, strategy, last_to_play):
        """Test only led-suit cards are scored when following."""
        evaluation = strategy.evaluate_play(last_to_play)
        assert sorted(card for _, card in evaluation) == [
            Card.parse("8D"),
            Card.parse("JD"),
            Card.parse("AD"),
        ]
        assert evaluation == sorted(evaluation)


class TestScoreCard:
    """Test the four score components."""

    def test_losing_cards(self, strategy, last_to_play):
        """Test a card that cannot win scores only its holding cost."""
        # 5 of 8 unseen diamonds below 8♦, 25 unseen penalty points
        assert strategy.score_card(Card.parse("8D"), last_to_play) == CardScore(0, 0, -15625, -8)
        # 7 of 8 below J♦
        assert strategy.score_card(Card.parse("JD"), last_to_play) == CardScore(0, 0, -21875, -11)

    def test_sure_winner(self, strategy, last_to_play):
        """Test the last card to a deal takes exactly the points in it."""
        assert strategy.score_card(Card.parse("AD"), last_to_play) == CardScore(1000, 1000, -25000, -14)

    def test_potential_without_certainty(self, strategy, make_status, make_deal):
        """Test a card that may be beaten has potential but no definite points."""
        deal = make_deal([("A", "8H")], resolved=False)
        status = make_status("4H 7H JH KH 3S 9D", in_progress=deal)

        score = strategy.score_card(Card.parse("JH"), status)
        assert score.definite_points == 0
        # 1 in the deal + 7/9 * 7 in suit + 7/9 * 13 off suit
        assert score.potential_points == 16555

    def test_bonus_card_rank(self, strategy, make_status, make_deal, bonus_parameters):
        """Test a negative-point card keeps a positive rank tie-break."""
        deal = make_deal([("A", "2D")], resolved=False)
        status = make_status("JD 5D 3S", in_progress=deal, parameters=bonus_parameters)

        jack = strategy.score_card(Card.parse("JD"), status)
        assert jack.rank == 11
        # 8 of 11 diamonds below J♦ times its -10
        assert jack.potential_points == -7272
        assert jack.definite_points == 0
        assert strategy.score_card(Card.parse("5D"), status).rank == -5

    def test_passed_card_is_ignored_when_following(self, strategy, make_status, make_deal):
        """Test a card we passed away cannot beat us in a started deal."""
        deal = make_deal([("A", "5S")], resolved=False)
        unknown = make_status("KS 2H 3C", in_progress=deal)
        passed = make_status("KS 2H 3C", in_progress=deal, passed_by_me="AS")

        # A♠ may still come: 11 of 12 spades below K♠ times Q♠'s 13
        score = strategy.score_card(Card.parse("KS"), unknown)
        assert (score.definite_points, score.potential_points) == (0, 11916)

        # A♠ sits with the left participant, who must keep it: K♠ wins Q♠
        score = strategy.score_card(Card.parse("KS"), passed)
        assert (score.definite_points, score.potential_points) == (13000, 13000)

    def test_negative_suit_modifier(self, make_status, make_deal, bonus_parameters):
        """Test net-negative suit points are damped when the deal carries points."""
        deal = make_deal([("A", "9D"), ("B", "QS")], resolved=False)
        status = make_status("JD 5S 3C", in_progress=deal, parameters=bonus_parameters)
        jack = Card.parse("JD")

        # 13 in the deal + 9/12 * -10 * -0.5
        default = DefensiveCardStrategy("Derek")
        assert default.score_card(jack, status).potential_points == 16750

        # Same deal with the modifier neutralised: 13 + 9/12 * -10
        plain = DefensiveCardStrategy("Derek", StrategyConfig(negative_suit_modifier=1.0))
        assert plain.score_card(jack, status).potential_points == 5500

    def test_void_player_exposes_off_suit_points(self, strategy, make_status, make_deal):
        """Test a remaining player void in the suit prices in off-suit discards."""
        void_in_clubs = make_deal([("Derek", "2C"), ("A", "3C"), ("B", "4C"), ("C", "5D")], 1)
        status = make_status("9C 2D 3S", deals=[void_in_clubs])

        # 9 unseen clubs is not short, so only C's club void adds
        # 4/9 * 26 unseen penalty points
        score = strategy.score_card(Card.parse("9C"), status)
        assert score.definite_points == 0
        assert score.potential_points == 11555

        # Same cards, but the void is in diamonds: nothing off suit
        void_in_diamonds = make_deal([("Derek", "5D"), ("A", "3C"), ("B", "4C"), ("C", "2C")], 1)
        status = make_status("9C 2D 3S", deals=[void_in_diamonds])
        assert strategy.score_card(Card.parse("9C"), status).potential_points == 0


class TestShooting:
    """Test the shooting-the-moon decision."""

    def test_not_shooting_with_few_winners(self, strategy, last_to_play):
        """Test one sure winner out of five cards is not enough."""
        assert not strategy.am_i_shooter(last_to_play, 2.0)

    def test_shooting_with_all_winners(self, strategy, make_status):
        """Test a hand of every spade wants to shoot."""
        hand = "2S 3S 4S 5S 6S 7S 8S 9S 10S JS QS KS AS"
        status = make_status(hand, turn=None, game_state=HeartsGameInstanceState.PASSING)
        assert strategy.am_i_shooter(status, 2.5)

    def test_committed_shooter_stays(self, strategy, last_to_play):
        """Test an existing commitment holds while nobody else scores."""
        strategy.shooting_the_moon = True
        assert strategy.am_i_shooter(last_to_play, 2.0)

    def test_other_scorer_blocks_shooting(self, strategy, make_status, make_deal):
        """Test points captured by someone else end the attempt."""
        deal = make_deal([("Derek", "2H"), ("A", "AH"), ("B", "3H"), ("C", "4H")])
        status = make_status("2S 3S", deals=[deal])
        strategy.shooting_the_moon = True
        assert not strategy.am_i_shooter(status, 2.0)


class TestPassCard:
    """Test single pass picks."""

    def test_pass_card_skips_chosen(self, strategy, round_parameters):
        """Test cards already in the unseen pool are not picked again."""
        hand = {Card.parse("QS"), Card.parse("2C")}
        assert strategy.pass_card(hand, {Card.parse("QS")}, round_parameters, False) == Card.parse("2C")
        assert strategy.pass_card(hand, set(hand), round_parameters, False) is None
