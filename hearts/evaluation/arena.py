"""
Arena for strategy vs strategy evaluation.

Plays simulated rounds between strategies and records the points each one
collects. Seats rotate every round so no strategy keeps the advantage (or
handicap) of a seat, and each round is dealt from its own seed so matches
are reproducible.
"""

import logging
from collections import defaultdict
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

import numpy as np

from hearts.game.constants import NUM_PLAYERS
from hearts.game.simulator import HeartsRound
from hearts.game.status import RoundParameters
from hearts.strategy.base import CardStrategy

logger = logging.getLogger(__name__)

StrategyFactory = Callable[[str], CardStrategy]

DEFAULT_SEAT_NAMES = ("North", "East", "South", "West")


class Arena:
    """
    Tournament system for strategy evaluation.

    Each round, seat i is controlled by strategy (i + round) mod k of the k
    competing strategies. Lower points are better.
    """

    def __init__(
        self,
        seat_names: Sequence[str] = DEFAULT_SEAT_NAMES,
        round_parameters: Optional[RoundParameters] = None,
    ):
        """
        Args:
            seat_names: Four participant names, in seating order
            round_parameters: Points and pass count (standard Hearts if None)

        Raises:
            ValueError: If there are not exactly four seat names
        """
        if len(seat_names) != NUM_PLAYERS:
            raise ValueError(f"Arena needs {NUM_PLAYERS} seat names, got {len(seat_names)}")
        self.seat_names = list(seat_names)
        self.round_parameters = round_parameters

    def seat_assignments(self, labels: Sequence[str], round_index: int) -> Dict[str, str]:
        """Map each seat name to the strategy label controlling it this round."""
        return {
            seat: labels[(i + round_index) % len(labels)]
            for i, seat in enumerate(self.seat_names)
        }

    def play_match(
        self,
        factories: Mapping[str, StrategyFactory],
        num_rounds: int = 100,
        seed: Optional[int] = None,
    ) -> Dict[str, Any]:
        """
        Play a match between strategies.

        Args:
            factories: Strategy label -> callable building the strategy for
                a participant name
            num_rounds: Rounds to play
            seed: Base seed; round r is dealt with seed + r

        Returns:
            Match results:
            - rounds_played: Number of rounds
            - strategies: label -> {mean, std, total, seats, wins}, where
              seats counts the seat-rounds played and wins counts rounds in
              which one of the strategy's seats scored strictly the fewest
              points
        """
        labels = list(factories)
        if not labels:
            raise ValueError("Need at least one strategy")
        if num_rounds < 0:
            raise ValueError(f"num_rounds must be non-negative, got {num_rounds}")

        logger.info(f"Starting match: {num_rounds} rounds between {', '.join(labels)}")

        points: Dict[str, List[int]] = defaultdict(list)
        wins: Dict[str, int] = defaultdict(int)

        for round_index in range(num_rounds):
            assignments = self.seat_assignments(labels, round_index)
            round_seed = None if seed is None else seed + round_index
            round_points = self.play_round(factories, assignments, round_seed)

            for seat, label in assignments.items():
                points[label].append(round_points[seat])

            best = min(round_points.values())
            winners = {label for seat, label in assignments.items() if round_points[seat] == best}
            if len(winners) == 1:
                wins[winners.pop()] += 1

            if (round_index + 1) % 50 == 0:
                logger.info(f"  Progress: {round_index + 1}/{num_rounds} rounds")

        results: Dict[str, Any] = {'rounds_played': num_rounds, 'strategies': {}}
        for label in labels:
            scores = np.array(points[label], dtype=float)
            results['strategies'][label] = {
                'mean': float(scores.mean()) if scores.size else 0.0,
                'std': float(scores.std()) if scores.size else 0.0,
                'total': int(scores.sum()),
                'seats': int(scores.size),
                'wins': wins[label],
            }
            logger.info(
                f"  {label}: avg {results['strategies'][label]['mean']:.2f} "
                f"points over {scores.size} seats, {wins[label]} round wins"
            )

        return results

    def play_round(
        self,
        factories: Mapping[str, StrategyFactory],
        assignments: Mapping[str, str],
        seed: Optional[int],
    ) -> Dict[str, int]:
        """
        Play a single round with the given seat assignments.

        Returns:
            Round points per seat name
        """
        game = HeartsRound(self.seat_names, self.round_parameters, seed=seed)
        strategies = {
            seat: factories[label](seat) for seat, label in assignments.items()
        }
        return game.run(strategies)
