"""
Game snapshot model for Hearts.

GameStatus is the read-only view the polling layer assembles once per poll
cycle. Strategies consume it; nothing in the engine mutates it.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, List, Optional, Set, Tuple

from hearts.errors import ParsingError
from hearts.game.cards import ALL_CARDS, Card
from hearts.game.constants import DEFAULT_CARDS_TO_PASS
from hearts.game.deal import Deal


# ============================================================================
# Lifecycle states
# ============================================================================


class _WireEnum(Enum):
    """Enum whose values are the wire tokens."""

    @classmethod
    def from_wire(cls, token: str):
        try:
            return cls(token)
        except ValueError:
            raise ParsingError(cls.__name__, token) from None


class GameInstanceState(_WireEnum):
    NOT_STARTED = "NotStarted"
    INITIATED = "Initiated"
    OPEN = "Open"
    RUNNING = "Running"
    FINISHED = "Finished"
    CANCELLED = "Cancelled"


class RoundState(_WireEnum):
    NOT_STARTED = "NotStarted"
    INITIATED = "Initiated"
    RUNNING = "Running"
    FINISHED = "Finished"
    CANCELLED = "Cancelled"


class HeartsGameInstanceState(_WireEnum):
    """Round-scoped sub-state: passing or dealing (trick play)."""

    NOT_STARTED = "NotStarted"
    INITIATED = "Initiated"
    PASSING = "Passing"
    DEALING = "Dealing"
    FINISHED = "Finished"
    CANCELLED = "Cancelled"


class PlayerAction(Enum):
    """What the polling layer should do with a snapshot."""

    WAIT = "wait"
    JOIN = "join"
    PASS = "pass"
    PLAY = "play"


# ============================================================================
# Participants and round parameters
# ============================================================================


@dataclass(frozen=True)
class GameParticipant:
    """One seat at the table, as reported by the server."""

    team_name: str
    left_participant: str = ""
    number_of_cards_in_hand: int = 0
    has_turn: bool = False
    current_score: int = 0


@dataclass(frozen=True)
class RoundParameters:
    """
    Per-round configuration.

    Attributes:
        round_id: Round number
        initiation_phase_in_seconds: Server phase duration
        passing_phase_in_seconds: Server phase duration
        dealing_phase_in_seconds: Server phase duration
        finishing_phase_in_seconds: Server phase duration
        number_of_cards_to_be_passed: Cards each participant passes
        card_points: Penalty points per card; missing cards score 0
    """

    round_id: int = 0
    initiation_phase_in_seconds: int = 0
    passing_phase_in_seconds: int = 0
    dealing_phase_in_seconds: int = 0
    finishing_phase_in_seconds: int = 0
    number_of_cards_to_be_passed: int = DEFAULT_CARDS_TO_PASS
    card_points: Dict[Card, int] = field(default_factory=dict)

    def points(self, card: Card) -> int:
        return self.card_points.get(card, 0)

    def total_points(self, cards) -> int:
        return sum(self.points(card) for card in cards)

    def __hash__(self) -> int:
        return hash((self.round_id, self.number_of_cards_to_be_passed))


# ============================================================================
# GameStatus
# ============================================================================


@dataclass(frozen=True)
class GameStatus:
    """
    Snapshot of the game from one participant's point of view.

    Attributes:
        current_game_id: Server game identifier
        current_game_state: Top-level game lifecycle state
        current_round_id: Round number (0 before the first round)
        current_round_state: Round lifecycle state
        round_parameters: Scoring and passing parameters for this round
        game_state: Round sub-state (passing or dealing)
        game_state_description: Free-text description from the server
        game_players: All participants, in seating order
        my_initial_hand: Hand as dealt
        cards_passed_by_me: Cards this participant passed away
        cards_passed_to_me: Cards received in the passing phase
        my_final_hand: Hand after passing
        my_current_hand: Cards still held
        game_deals: Completed deals this round
        in_progress_deal: Current deal, None between deals
        is_my_turn: Whether this participant must act
    """

    current_game_id: str = ""
    current_game_state: GameInstanceState = GameInstanceState.RUNNING
    current_round_id: int = 1
    current_round_state: RoundState = RoundState.RUNNING
    round_parameters: RoundParameters = field(default_factory=RoundParameters)
    game_state: HeartsGameInstanceState = HeartsGameInstanceState.DEALING
    game_state_description: str = ""
    game_players: Tuple[GameParticipant, ...] = field(default_factory=tuple)
    my_initial_hand: FrozenSet[Card] = frozenset()
    cards_passed_by_me: FrozenSet[Card] = frozenset()
    cards_passed_to_me: FrozenSet[Card] = frozenset()
    my_final_hand: FrozenSet[Card] = frozenset()
    my_current_hand: FrozenSet[Card] = frozenset()
    game_deals: Tuple[Deal, ...] = field(default_factory=tuple)
    in_progress_deal: Optional[Deal] = None
    is_my_turn: bool = False

    def __post_init__(self):
        """Freeze collection fields so callers may pass lists and sets."""
        for name in ("my_initial_hand", "cards_passed_by_me", "cards_passed_to_me",
                     "my_final_hand", "my_current_hand"):
            object.__setattr__(self, name, frozenset(getattr(self, name)))
        object.__setattr__(self, "game_players", tuple(self.game_players))
        object.__setattr__(self, "game_deals", tuple(self.game_deals))

    def played_cards(self) -> Set[Card]:
        """Cards visible on the table: completed deals plus the current one."""
        played = {card for deal in self.game_deals for card in deal.cards}
        if self.in_progress_deal is not None:
            played.update(self.in_progress_deal.cards)
        return played

    def unplayed_cards(self) -> Set[Card]:
        """
        Cards whose location among the other participants is unknown.

        All 52 cards minus those played in completed deals, the in-progress
        deal and this participant's current hand.
        """
        return set(ALL_CARDS) - self.played_cards() - self.my_current_hand

    def participant(self, team_name: str) -> Optional[GameParticipant]:
        for player in self.game_players:
            if player.team_name == team_name:
                return player
        return None

    @property
    def player_names(self) -> List[str]:
        return [player.team_name for player in self.game_players]

    def pending_action(self, player_name: str) -> PlayerAction:
        """
        Decide what the polling layer should do with this snapshot.

        Args:
            player_name: The participant the snapshot belongs to

        Returns:
            JOIN while the game is open and we are not seated, PASS during
            the passing sub-state, PLAY during dealing on our turn, else WAIT
        """
        if self.current_game_state == GameInstanceState.OPEN:
            if self.participant(player_name) is None:
                return PlayerAction.JOIN
            return PlayerAction.WAIT

        if self.current_game_state != GameInstanceState.RUNNING:
            return PlayerAction.WAIT
        if self.current_round_id <= 0 or self.current_round_state != RoundState.RUNNING:
            return PlayerAction.WAIT

        if self.game_state == HeartsGameInstanceState.PASSING:
            if self.cards_passed_by_me:
                return PlayerAction.WAIT
            return PlayerAction.PASS
        if self.game_state == HeartsGameInstanceState.DEALING and self.is_my_turn:
            return PlayerAction.PLAY
        return PlayerAction.WAIT
