# mini_spine/build/instances.py
"""
SIMULATION INSTANCES: Rods and Spring Cables
============================================

These are the concrete objects handed to the physics engine. They carry the
geometry they were built from, their material record and the tag words of
the edge that produced them (used by the actuator index).

The engine owns rigid-body dynamics. A Rod therefore has nothing to advance
on its own; a SpringCable only tracks its commanded rest length, which is
what a controller changes from step to step.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, List, Tuple

import numpy as np

from ..config import CableConfig, RodConfig
from ..kernel.errors import InvalidTimeStep
from ..kernel.tags import TagLike, tags_match


def _segment_length(start: np.ndarray, end: np.ndarray) -> float:
    return float(np.linalg.norm(end - start))


@dataclass(eq=False)
class Rod:
    """
    A rigid cylinder between two nodes.

    Attributes:
    -----------
    edge_id : int
        Id of the graph edge this rod was realized from
    tags : frozenset of str
        Edge tag words plus the owning module's tags
    start, end : np.ndarray
        End points in the global frame
    config : RodConfig
        Radius, density and contact parameters
    """
    edge_id: int
    tags: FrozenSet[str]
    start: np.ndarray
    end: np.ndarray
    config: RodConfig

    @property
    def length(self) -> float:
        return _segment_length(self.start, self.end)

    @property
    def center(self) -> np.ndarray:
        return (self.start + self.end) / 2.0

    @property
    def volume(self) -> float:
        return np.pi * self.config.radius ** 2 * self.length

    @property
    def mass(self) -> float:
        return self.config.density * self.volume

    @property
    def is_fixed(self) -> bool:
        """Massless bodies are held fixed by the engine."""
        return self.mass == 0.0

    def has_tags(self, pattern: TagLike) -> bool:
        return tags_match(self.tags, pattern)

    def step(self, dt: float) -> None:
        pass

    def __repr__(self) -> str:
        return (f"Rod(edge={self.edge_id}, tags={sorted(self.tags)}, "
                f"length={self.length:.3f}, mass={self.mass:.4f})")


@dataclass(eq=False)
class SpringCable:
    """
    A linear spring cable with a commanded rest length.

    The initial rest length is shortened so that the cable starts at its
    configured pretension. Controllers call set_control_input() with a
    target rest length; step() moves toward it at no more than
    target_velocity * dt.
    """
    edge_id: int
    tags: FrozenSet[str]
    start: np.ndarray
    end: np.ndarray
    config: CableConfig
    rest_length: float = field(init=False)
    target_length: float = field(init=False)
    rest_velocity: float = field(init=False, default=0.0)
    time: float = field(init=False, default=0.0)
    history: List[Tuple[float, float, float]] = field(init=False, default_factory=list)

    def __post_init__(self):
        self.rest_length = max(
            self.length - self.config.pretension / self.config.stiffness, 0.0
        )
        self.target_length = self.rest_length

    @property
    def length(self) -> float:
        return _segment_length(self.start, self.end)

    @property
    def tension(self) -> float:
        stretch = self.length - self.rest_length
        # Endpoints are static here, so the stretch rate is -rest_velocity.
        force = self.config.stiffness * stretch - self.config.damping * self.rest_velocity
        return float(np.clip(force, 0.0, self.config.max_tension))

    def has_tags(self, pattern: TagLike) -> bool:
        return tags_match(self.tags, pattern)

    def set_control_input(self, target_length: float) -> None:
        """Command a new rest length (>= 0)."""
        if not target_length >= 0:
            raise ValueError(f"Target rest length must be >= 0, got {target_length}")
        self.target_length = float(target_length)

    def step(self, dt: float) -> None:
        if not dt > 0:
            raise InvalidTimeStep(f"dt must be positive, got {dt}")
        max_change = self.config.target_velocity * dt
        change = float(np.clip(self.target_length - self.rest_length, -max_change, max_change))
        self.rest_length += change
        self.rest_velocity = change / dt
        self.time += dt
        if self.config.history:
            self.history.append((self.time, self.rest_length, self.tension))

    def __repr__(self) -> str:
        return (f"SpringCable(edge={self.edge_id}, tags={sorted(self.tags)}, "
                f"rest_length={self.rest_length:.3f}, tension={self.tension:.1f})")
