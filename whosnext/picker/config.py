# -*- Mode: Python; coding: utf-8; indent-tabs-mode: nil; tab-width: 4 -*-
"""Configuration for the picker engine.

Defines the spin timing, pool size cap and celebration parameters.
"""

from dataclasses import dataclass, fields as dataclass_fields, asdict
from typing import Dict, Any


@dataclass
class PickerConfig:
    """Configuration for the name picker.

    Attributes:
        spin_duration: Seconds a spin lasts before the winner is committed.
            Must lie within [min_spin_duration, max_spin_duration]. Default: 7.
        min_spin_duration: Shortest allowed spin in seconds. Default: 3.
        max_spin_duration: Longest allowed spin in seconds. Default: 7.
        max_pool_size: Maximum number of entries in the pool. Default: 1000.
        tick_interval: Seconds between spin ticks. Default: 0.1.
        countdown_interval: Seconds between countdown decrements. Default: 1.0.
        highlight_seconds: How long a renderer should highlight the most
            recent winner. Display hint only. Default: 1.2.
        initial_source: Source loaded when the picker starts. Default: 'work'.
        celebration_particles: Particle count for the win celebration.
        celebration_spread: Spread angle in degrees for the celebration.
        celebration_origin_y: Vertical origin (0=top, 1=bottom) of the burst.
    """
    spin_duration: int = 7
    min_spin_duration: int = 3
    max_spin_duration: int = 7
    max_pool_size: int = 1000
    tick_interval: float = 0.1
    countdown_interval: float = 1.0
    highlight_seconds: float = 1.2
    initial_source: str = 'work'
    celebration_particles: int = 100
    celebration_spread: int = 70
    celebration_origin_y: float = 0.6

    def validate(self) -> 'PickerConfig':
        """Check the values are usable.

        Returns:
            self, so calls can be chained.

        Raises:
            ValueError: If any value is out of range.
        """
        if not 0 < self.min_spin_duration <= self.max_spin_duration:
            raise ValueError(
                f"Invalid spin duration bounds: "
                f"[{self.min_spin_duration}, {self.max_spin_duration}]"
            )
        if not is_valid_duration(self.spin_duration,
                                 self.min_spin_duration,
                                 self.max_spin_duration):
            raise ValueError(
                f"spin_duration {self.spin_duration!r} out of range "
                f"[{self.min_spin_duration}, {self.max_spin_duration}]"
            )
        if self.max_pool_size < 1:
            raise ValueError(f"max_pool_size must be positive, got {self.max_pool_size}")
        if self.tick_interval <= 0 or self.countdown_interval <= 0:
            raise ValueError("Timer intervals must be positive")
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to a dictionary.

        Returns:
            Dictionary representation of the config.
        """
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PickerConfig':
        """Create a PickerConfig from a dictionary.

        Unknown keys are ignored. Missing keys use defaults.

        Args:
            data: Dictionary with config values.

        Returns:
            New PickerConfig instance.
        """
        valid_fields = {f.name for f in dataclass_fields(cls)}
        filtered_data = {k: v for k, v in data.items() if k in valid_fields}
        return cls(**filtered_data)


def is_valid_duration(value: Any, minimum: int, maximum: int) -> bool:
    """Whether value is an integer number of seconds within [minimum, maximum]."""
    # bool is an int subclass but never a duration
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return minimum <= value <= maximum
