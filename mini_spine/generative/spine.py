# mini_spine/generative/spine.py
"""
SPINE GENERATOR: Replicated Vertebrae Joined by Cables
======================================================

PURPOSE:
--------
Turn one vertebra template into a full spine graph:
1. Place a fixed base vertebra (rodB legs)
2. Replicate the moving template N times along the spine axis
3. Synthesize the cable pattern between every adjacent pair

CABLE PATTERN:
--------------
For an adjacent pair (lower, upper) of vertebrae:

    vertical muscle a   lower[0] -> upper[0]
    vertical muscle b   lower[1] -> upper[1]
    vertical muscle c   lower[2] -> upper[2]
    vertical muscle d   lower[3] -> upper[3]

    saddle muscle seg-k lower[2] -> upper[1]
                        lower[3] -> upper[1]
                        lower[2] -> upper[0]
                        lower[3] -> upper[0]

where k is the index of the pair (0 for base -> first moving vertebra).
The vertical classes are shared by all pairs; the saddle class is per pair.
The index pairing is a fixed mechanical choice, not derived from geometry.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

import numpy as np

from ..config import SpineParams
from ..kernel.errors import InsufficientModules, InvalidParameter
from ..kernel.graph import Edge, Module, ModuleSpec, StructureGraph
from .vertebra import ROD, ROD_B, vertebra_from_params

logger = logging.getLogger(__name__)

VERTICAL_CONNECTORS: Tuple[Tuple[str, int, int], ...] = (
    ("vertical muscle a", 0, 0),
    ("vertical muscle b", 1, 1),
    ("vertical muscle c", 2, 2),
    ("vertical muscle d", 3, 3),
)

SADDLE_CONNECTORS: Tuple[Tuple[int, int], ...] = (
    (2, 1),
    (3, 1),
    (2, 0),
    (3, 0),
)


def segment_tag(number: int) -> str:
    return f"segment-{number}"


def saddle_tag(pair_index: int) -> str:
    return f"saddle muscle seg-{pair_index}"


def replicate_module(
    graph: StructureGraph,
    template: ModuleSpec,
    offset: Sequence[float],
    count: int,
    first_segment: int = 2,
) -> List[Module]:
    """
    Place ``count`` clones of ``template`` into ``graph``.

    Clone i (1-indexed) is translated by i * offset and tagged
    "segment-{first_segment + i - 1}". Each clone gets new arena nodes.

    Raises:
        InvalidParameter: if count is negative
    """
    if isinstance(count, bool) or int(count) != count or count < 0:
        raise InvalidParameter(f"Clone count must be an integer >= 0, got {count!r}")
    offset = np.asarray(offset, dtype=float).reshape(3)

    clones = []
    for i in range(1, int(count) + 1):
        clone = graph.add_module(
            template.moved(i * offset),
            tags=[segment_tag(first_segment + i - 1)],
        )
        clones.append(clone)
    return clones


def synthesize_connectors(graph: StructureGraph, modules: Sequence[Module]) -> List[Edge]:
    """
    Add the cable pattern between every adjacent pair of ``modules``.

    Raises:
        InsufficientModules: if fewer than two modules are given
    """
    if len(modules) < 2:
        raise InsufficientModules(
            f"Connector synthesis needs at least 2 modules, got {len(modules)}"
        )

    connectors = []
    for k in range(1, len(modules)):
        lower, upper = modules[k - 1], modules[k]

        for tag, i, j in VERTICAL_CONNECTORS:
            connectors.append(graph.add_edge(lower.node_id(i), upper.node_id(j), tag))

        for i, j in SADDLE_CONNECTORS:
            connectors.append(
                graph.add_edge(lower.node_id(i), upper.node_id(j), saddle_tag(k - 1))
            )
    return connectors


@dataclass
class SpineLayout:
    """Result of assembling a spine: the graph plus handles into it."""
    graph: StructureGraph
    base: Module
    segments: List[Module] = field(default_factory=list)
    connectors: List[Edge] = field(default_factory=list)

    @property
    def modules(self) -> List[Module]:
        return [self.base] + list(self.segments)


def assemble_spine(params: SpineParams) -> SpineLayout:
    """
    Generate the complete spine graph from parameters.

    The base vertebra is tagged "segment-1"; the moving vertebrae follow as
    "segment-2" onwards. A fresh graph is built on every call, so equal
    params always give equal graphs.

    Raises:
        InvalidParameter: bad geometry, separation or segment count
    """
    if isinstance(params.segments, bool) or int(params.segments) != params.segments \
            or params.segments < 1:
        raise InvalidParameter(
            f"A spine needs at least 1 moving segment, got {params.segments!r}"
        )
    if not params.vertebra_separation > 0:
        raise InvalidParameter(
            f"vertebra_separation must be > 0, got {params.vertebra_separation}"
        )

    base_spec = vertebra_from_params(params.vertebra, ROD_B).moved(params.base_offset)
    template = vertebra_from_params(params.vertebra, ROD).moved(params.template_offset)
    offset = (0.0, params.vertebra_separation, 0.0)

    graph = StructureGraph()
    base = graph.add_module(base_spec, tags=[segment_tag(1)])
    segments = replicate_module(graph, template, offset, params.segments)
    connectors = synthesize_connectors(graph, [base] + segments)
    graph.validate()

    logger.debug(
        "Assembled spine: %d modules, %d nodes, %d edges (%d connectors)",
        len(graph.modules), len(graph.nodes), len(graph.edges), len(connectors),
    )
    return SpineLayout(graph=graph, base=base, segments=segments, connectors=connectors)
