"""
Strategy Configuration

Tunable constants of the defensive strategy, kept in one dataclass so that
they can be saved next to game logs and reloaded for replay.
"""

import json
from dataclasses import dataclass, asdict
from typing import Dict, Any


@dataclass
class StrategyConfig:
    """Configuration for DefensiveCardStrategy."""

    # Shooting the moon: am I winning enough of my hand outright?
    # (guaranteed winners * multiplier must exceed hand size)
    pass_shoot_multiplier: float = 2.5
    play_shoot_multiplier: float = 2.0

    # Opponent shooter threshold: captured points must exceed
    # shoot_target_base - completed deals
    shoot_target_base: int = 20

    # Off-suit exposure is priced when fewer unseen cards of the suit remain
    # than safe_target_base + card points + trick points - cards in trick
    safe_target_base: float = 9.0

    # No in-suit or off-suit exposure once this many cards are in the trick
    crowded_trick_size: int = 3

    # In-suit win points are scaled by this when they are net negative and
    # the trick already carries more than negative_trick_points
    negative_suit_modifier: float = -0.5
    negative_trick_points: float = 2.0

    # Scores are compared as integers in 1/score_scale points
    score_scale: int = 1000

    # Extra pass priority for hearts and spades above the jack
    pass_priority_penalty: int = 2

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert config to dictionary.

        Returns:
            Dictionary representation of config
        """
        return asdict(self)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'StrategyConfig':
        """
        Create config from dictionary.

        Args:
            config_dict: Dictionary of configuration values

        Returns:
            StrategyConfig instance
        """
        # Filter out keys that aren't valid config fields
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}
        filtered_dict = {k: v for k, v in config_dict.items() if k in valid_keys}
        return cls(**filtered_dict)

    @classmethod
    def from_file(cls, filepath: str) -> 'StrategyConfig':
        """
        Load config from JSON file.

        Args:
            filepath: Path to JSON config file

        Returns:
            StrategyConfig instance
        """
        with open(filepath, 'r') as f:
            config_dict = json.load(f)
        return cls.from_dict(config_dict)

    def save(self, filepath: str):
        """
        Save config to JSON file.

        Args:
            filepath: Path to save config to
        """
        with open(filepath, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    def validate(self) -> bool:
        """
        Validate configuration values.

        Returns:
            True if config is valid

        Raises:
            ValueError: If config values are invalid
        """
        if self.pass_shoot_multiplier <= 0:
            raise ValueError(
                f"pass_shoot_multiplier must be positive, got {self.pass_shoot_multiplier}"
            )

        if self.play_shoot_multiplier <= 0:
            raise ValueError(
                f"play_shoot_multiplier must be positive, got {self.play_shoot_multiplier}"
            )

        if self.score_scale <= 0:
            raise ValueError(f"score_scale must be positive, got {self.score_scale}")

        if self.crowded_trick_size < 1:
            raise ValueError(
                f"crowded_trick_size must be at least 1, got {self.crowded_trick_size}"
            )

        if self.pass_priority_penalty < 0:
            raise ValueError(
                f"pass_priority_penalty must be non-negative, got {self.pass_priority_penalty}"
            )

        return True

    def __str__(self) -> str:
        """String representation of config."""
        lines = ["Strategy Configuration:"]
        lines.append(f"  Shooting: pass x{self.pass_shoot_multiplier}, play x{self.play_shoot_multiplier}, target {self.shoot_target_base}")
        lines.append(f"  Exposure: safe target {self.safe_target_base}, crowded at {self.crowded_trick_size} cards")
        lines.append(f"  Scoring: scale {self.score_scale}, pass penalty {self.pass_priority_penalty}")
        return "\n".join(lines)
