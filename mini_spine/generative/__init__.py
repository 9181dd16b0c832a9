# mini_spine/generative - Parametric structure generators
"""
GENERATIVE: Spine Generators
============================

Turn a handful of parameters into a structure graph.

- vertebra: the 5-node tetrahedral module
- spine: replication along the spine axis and the cable pattern

USAGE:
------
    from mini_spine.generative import assemble_spine
    from mini_spine.config import SpineParams

    layout = assemble_spine(SpineParams(segments=3))
    print(len(layout.graph.modules))  # 4 (base + 3 moving)
"""

from .vertebra import build_vertebra, vertebra_positions, ROD, ROD_B
from .spine import (
    replicate_module,
    synthesize_connectors,
    assemble_spine,
    SpineLayout,
    VERTICAL_CONNECTORS,
    SADDLE_CONNECTORS,
)

__all__ = [
    'build_vertebra', 'vertebra_positions', 'ROD', 'ROD_B',
    'replicate_module', 'synthesize_connectors', 'assemble_spine', 'SpineLayout',
    'VERTICAL_CONNECTORS', 'SADDLE_CONNECTORS',
]
