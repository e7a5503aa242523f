"""Lightweight simulation configuration helpers."""

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from core.config.actors import (
    DEFAULT_NOISE_SPEED,
    DEFAULT_SPEED_SCALE,
    DEFAULT_TURN_SPEED,
)
from core.config.world import (
    BROADCAST_HZ,
    MAX_CATCH_UP_STEPS,
    TICK_HZ,
    WORLD_HEIGHT,
    WORLD_WIDTH,
)
from core.exceptions import ConfigurationError


@dataclass
class ActorTuning:
    """Per-actor steering constants applied at spawn time."""

    noise_speed: float = DEFAULT_NOISE_SPEED
    speed_scale: float = DEFAULT_SPEED_SCALE
    turn_speed: float = DEFAULT_TURN_SPEED


@dataclass
class SimulationConfig:
    """Runtime settings for the simulation and its broadcast cadence.

    Attributes:
        world_width: Width of the wrap rectangle in pixels.
        world_height: Height of the wrap rectangle in pixels.
        tick_hz: Fixed simulation steps per second.
        broadcast_hz: Snapshot broadcasts per second (<= tick_hz).
        max_catch_up_steps: Most steps one driver batch may execute.
        actor_tuning: Steering defaults for newly spawned actors.
    """

    world_width: float = WORLD_WIDTH
    world_height: float = WORLD_HEIGHT
    tick_hz: float = TICK_HZ
    broadcast_hz: float = BROADCAST_HZ
    max_catch_up_steps: int = MAX_CATCH_UP_STEPS
    actor_tuning: ActorTuning = field(default_factory=ActorTuning)

    def __post_init__(self) -> None:
        self.validate()

    @property
    def dt(self) -> float:
        """Fixed timestep in seconds."""
        return 1.0 / self.tick_hz

    @property
    def broadcast_interval(self) -> float:
        """Minimum seconds between two periodic snapshots."""
        return 1.0 / self.broadcast_hz

    def validate(self) -> None:
        if self.world_width <= 0 or self.world_height <= 0:
            raise ConfigurationError(
                f"World dimensions must be positive, got {self.world_width}x{self.world_height}"
            )
        if self.tick_hz <= 0:
            raise ConfigurationError(f"tick_hz must be positive, got {self.tick_hz}")
        if self.broadcast_hz <= 0:
            raise ConfigurationError(f"broadcast_hz must be positive, got {self.broadcast_hz}")
        if self.broadcast_hz > self.tick_hz:
            raise ConfigurationError(
                f"broadcast_hz ({self.broadcast_hz}) may not exceed tick_hz ({self.tick_hz})"
            )
        if self.max_catch_up_steps < 1:
            raise ConfigurationError(
                f"max_catch_up_steps must be at least 1, got {self.max_catch_up_steps}"
            )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SimulationConfig":
        """Build a config from ``FISHFIGHT_*`` environment variables.

        Unset variables fall back to the module defaults.

        Raises:
            ConfigurationError: If a variable is set but not a valid number.
        """
        env = os.environ if environ is None else environ
        return cls(
            world_width=_read_float(env, "FISHFIGHT_WORLD_WIDTH", WORLD_WIDTH),
            world_height=_read_float(env, "FISHFIGHT_WORLD_HEIGHT", WORLD_HEIGHT),
            tick_hz=_read_float(env, "FISHFIGHT_TICK_HZ", TICK_HZ),
            broadcast_hz=_read_float(env, "FISHFIGHT_BROADCAST_HZ", BROADCAST_HZ),
        )


def _read_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from e
