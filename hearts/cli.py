"""
Command line entry point.

Usage:
    # Replay a logged snapshot and show how each legal card scores
    hearts analyze snapshots/round3_deal7.json --player Derek

    # Force the passing decision, with debug logging
    hearts analyze snapshot.json --player Derek --mode pass --log-level DEBUG

    # Defensive vs simple strategy over 200 simulated rounds
    hearts arena --rounds 200 --seed 42
"""

import argparse
import logging
import sys
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from hearts.config import StrategyConfig
from hearts.errors import GameServerError, ParsingError
from hearts.evaluation.arena import Arena
from hearts.game.cards import OPENING_CARD, format_cards
from hearts.game.status import GameStatus, PlayerAction
from hearts.game.wire import load_game_status
from hearts.strategy.defensive import DefensiveCardStrategy
from hearts.strategy.simple import SimpleCardStrategy

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command line arguments.

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        prog='hearts',
        description="Hearts decision engine: snapshot analysis and strategy arena",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        '--log-level',
        type=str,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        default='WARNING',
        help='Logging level',
    )
    parser.add_argument(
        '--config',
        type=str,
        default=None,
        help='Path to JSON strategy config file (overrides defaults)',
    )

    subparsers = parser.add_subparsers(dest='command', required=True)

    analyze = subparsers.add_parser(
        'analyze',
        help='Score the legal cards of a logged game status snapshot',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    analyze.add_argument('snapshot', type=str, help='Path to game status JSON')
    analyze.add_argument(
        '--player',
        type=str,
        required=True,
        help='Participant the snapshot was taken for',
    )
    analyze.add_argument(
        '--mode',
        type=str,
        choices=['auto', 'play', 'pass'],
        default='auto',
        help='Decision to analyze (auto follows the snapshot state)',
    )

    arena = subparsers.add_parser(
        'arena',
        help='Play the defensive strategy against the simple one',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    arena.add_argument('--rounds', type=int, default=100, help='Rounds to play')
    arena.add_argument('--seed', type=int, default=None, help='Base shuffle seed')

    return parser.parse_args(argv)


def setup_logging(log_level: str = 'INFO'):
    """
    Setup console logging.

    Args:
        log_level: Logging level
    """
    log_format = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    date_format = '%Y-%m-%d %H:%M:%S'

    logging.basicConfig(
        level=getattr(logging, log_level),
        format=log_format,
        datefmt=date_format,
        handlers=[logging.StreamHandler(sys.stderr)],
    )


# ============================================================================
# Commands
# ============================================================================


def analyze_snapshot(
    status: GameStatus,
    strategy: DefensiveCardStrategy,
    mode: str,
    console: Console,
) -> int:
    """Print the decision (and the scored candidates when playing)."""
    if mode == 'auto':
        action = status.pending_action(strategy.player_name)
        if action not in (PlayerAction.PASS, PlayerAction.PLAY):
            console.print(f"[yellow]Nothing to decide: pending action is {action.value}[/yellow]")
            return 0
        mode = action.value

    console.print(f"Hand: {format_cards(status.my_current_hand)}")

    if mode == 'pass':
        chosen = strategy.pass_cards(status)
        console.print(f"[green]Pass:[/green] {' '.join(str(card) for card in chosen)}")
        if strategy.shooting_the_moon:
            console.print("[magenta]Shooting the moon[/magenta]")
        return 0

    card = strategy.play_card(status)
    if card == OPENING_CARD:
        console.print(f"[green]Play:[/green] {card} (opening card)")
        return 0

    evaluation = strategy.evaluate_play(status)

    table = Table(title=f"{strategy.player_name}: candidate cards")
    table.add_column("Card", style="cyan", no_wrap=True)
    table.add_column("Definite", justify="right")
    table.add_column("Potential", justify="right")
    table.add_column("Later", justify="right")
    table.add_column("Rank", justify="right")
    for score, card in evaluation:
        table.add_row(
            str(card),
            f"{score.definite_points / 1000:.3f}",
            f"{score.potential_points / 1000:.3f}",
            f"{score.later_potential_points / 1000:.3f}",
            str(score.rank),
        )
    console.print(table)

    if strategy.shooting_the_moon:
        console.print("[magenta]Shooting the moon[/magenta]")
    console.print(f"[green]Play:[/green] {card}")
    return 0


def run_arena(rounds: int, seed: Optional[int], config: StrategyConfig, console: Console) -> int:
    """Play defensive vs simple and print the summary table."""
    arena = Arena()
    results = arena.play_match(
        {
            'defensive': lambda name: DefensiveCardStrategy(name, config),
            'simple': SimpleCardStrategy,
        },
        num_rounds=rounds,
        seed=seed,
    )

    table = Table(title=f"Arena: {results['rounds_played']} rounds")
    table.add_column("Strategy", style="cyan", no_wrap=True)
    table.add_column("Avg points", justify="right")
    table.add_column("Std", justify="right")
    table.add_column("Total", justify="right")
    table.add_column("Round wins", justify="right")
    for label, stats in results['strategies'].items():
        table.add_row(
            label,
            f"{stats['mean']:.2f}",
            f"{stats['std']:.2f}",
            str(stats['total']),
            str(stats['wins']),
        )
    console.print(table)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    setup_logging(args.log_level)
    console = Console()

    try:
        config = StrategyConfig.from_file(args.config) if args.config else StrategyConfig()
        config.validate()

        if args.command == 'analyze':
            status = load_game_status(args.snapshot)
            strategy = DefensiveCardStrategy(args.player, config)
            return analyze_snapshot(status, strategy, args.mode, console)

        return run_arena(args.rounds, args.seed, config, console)
    except (ParsingError, GameServerError, OSError, ValueError) as e:
        logger.error(f"{type(e).__name__}: {e}")
        console.print(f"[red]✗ {e}[/red]")
        return 1


if __name__ == '__main__':
    sys.exit(main())
