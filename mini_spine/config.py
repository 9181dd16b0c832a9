# mini_spine/config.py
"""
Configuration records for spine generation and realization.

Every component takes its record as an argument; nothing here is read
implicitly. The defaults reproduce the two-segment ULTRA Spine setup:
20 cm tetrahedral vertebrae, a fixed (massless) base, and spring cables at
1000 N/m with 2452 N of pretension.
"""

from dataclasses import dataclass, field, replace
from typing import Tuple


@dataclass(frozen=True)
class VertebraParams:
    """
    Geometry of one tetrahedral vertebra.

    edge : float
        Distance between the two bottom nodes, and between the two top nodes
    height : float
        Total height from the bottom nodes to the top nodes.
        height == edge / sqrt(2) gives a symmetric tetrahedron.
    """
    edge: float = 20.0
    height: float = 14.14


@dataclass(frozen=True)
class RodConfig:
    """
    Physical parameters handed to the engine for one rigid member.

    A density of 0 makes the body massless, which the engine treats as
    fixed in space.
    """
    radius: float = 0.5
    density: float = 0.026  # kg / length^3
    friction: float = 0.99
    roll_friction: float = 0.01
    restitution: float = 0.0


@dataclass(frozen=True)
class CableConfig:
    """Parameters of one spring-cable actuator."""
    stiffness: float = 1000.0  # kg / s^2
    damping: float = 10.0  # kg / s
    pretension: float = 2452.0
    history: bool = False
    max_tension: float = 100000.0
    target_velocity: float = 10000.0  # length / s


@dataclass(frozen=True)
class SpineParams:
    """
    Layout of the whole spine.

    segments : int
        Number of moving vertebrae stacked on the fixed base
    vertebra : VertebraParams
        Geometry shared by all vertebrae
    vertebra_separation : float
        Vertical spacing between consecutive moving vertebrae
    base_offset : (x, y, z)
        Translation applied to the fixed base vertebra
    template_offset : (x, y, z)
        Translation applied to the moving template before replication
    """
    segments: int = 2
    vertebra: VertebraParams = field(default_factory=VertebraParams)
    vertebra_separation: float = 7.5
    base_offset: Tuple[float, float, float] = (0.0, 2.0, 0.0)
    template_offset: Tuple[float, float, float] = (0.0, -6.0, 0.0)

    def with_segments(self, segments: int) -> "SpineParams":
        return replace(self, segments=segments)


BASE_ROD = RodConfig(density=0.0)
MOVING_ROD = RodConfig()
DEFAULT_CABLE = CableConfig()


@dataclass(frozen=True)
class SpineConfig:
    """Material records per builder tag class."""
    moving_rod: RodConfig = MOVING_ROD
    base_rod: RodConfig = BASE_ROD
    cable: CableConfig = DEFAULT_CABLE
