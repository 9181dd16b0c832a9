# mini_spine/generative/vertebra.py
"""
VERTEBRA GENERATOR: One Tetrahedral Spine Module
================================================

A vertebra is four rigid legs meeting at a central node:

            2 (top, rear)   3 (top, front)
                  \\       /
                   \\     /
                    4 (middle, height/2)
                   /     \\
                  /       \\
            1 (left)        0 (right)

The two bottom nodes lie on the lateral (x) axis, the two top nodes lie on
the depth (z) axis at the full height, so consecutive vertebrae form the
familiar "X over +" tensegrity spine. Node numbering is part of the
connector contract in spine.py and must not change.
"""

import math
from typing import Tuple

import numpy as np

from ..config import VertebraParams
from ..kernel.errors import InvalidParameter
from ..kernel.graph import ModuleSpec

# Rigid member classes
ROD = "rod"
ROD_B = "rodB"

# Local node indices
RIGHT, LEFT, TOP, FRONT, MIDDLE = range(5)

LEG_PAIRS: Tuple[Tuple[int, int], ...] = (
    (RIGHT, MIDDLE),
    (LEFT, MIDDLE),
    (TOP, MIDDLE),
    (FRONT, MIDDLE),
)


def _check_positive(name: str, value: float) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise InvalidParameter(f"{name} must be a number, got {value!r}") from None
    if not math.isfinite(value) or value <= 0:
        raise InvalidParameter(f"{name} must be > 0, got {value}")
    return value


def vertebra_positions(edge: float, height: float) -> np.ndarray:
    """
    Node positions of one vertebra, shape (5, 3).

    Raises:
        InvalidParameter: if edge or height is not positive
    """
    edge = _check_positive("edge", edge)
    height = _check_positive("height", height)
    half = edge / 2.0
    return np.array([
        [half, 0.0, 0.0],            # right
        [-half, 0.0, 0.0],           # left
        [0.0, height, -half],        # top
        [0.0, height, half],         # front
        [0.0, height / 2.0, 0.0],    # middle
    ])


def build_vertebra(edge: float, height: float, rod_tag: str = ROD) -> ModuleSpec:
    """
    Build the vertebra template with its four legs tagged ``rod_tag``.

    Use ROD for moving vertebrae and ROD_B for the fixed base, so the two
    can be realized with different rigid-member configs.
    """
    positions = vertebra_positions(edge, height)
    pairs = tuple((i, j, rod_tag) for i, j in LEG_PAIRS)
    return ModuleSpec(positions=positions, pairs=pairs)


def vertebra_from_params(params: VertebraParams, rod_tag: str = ROD) -> ModuleSpec:
    return build_vertebra(params.edge, params.height, rod_tag)
