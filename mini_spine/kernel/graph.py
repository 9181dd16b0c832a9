# mini_spine/kernel/graph.py
"""
STRUCTURE GRAPH: Node/Edge Arena with Module Views
===================================================

PURPOSE:
--------
This module defines the data structures that describe a structure before it
is turned into simulation objects:
- Node: a placed 3D point, addressed by its index in the arena
- ModuleSpec: a detached template (positions + intra-module pairs)
- Module: a view over a contiguous range of arena nodes
- Edge: a tagged connection between two arena nodes
- StructureGraph: the arena that owns all of the above

WHY AN ARENA?
-------------
Placing a template never copies nested objects. The template's positions
are translated and appended as NEW arena entries, so a clone can never
alias the template or another clone. A Module is just (start, stop), and
"node k of module m" is the integer start + k.

    spec = build_vertebra(20.0, 14.14)
    graph = StructureGraph()
    base = graph.add_module(spec, tags=["segment-1"])
    graph.add_edge(base.node_id(0), base.node_id(4), "rod")
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, List, Sequence, Tuple

import numpy as np

from .errors import DanglingReference, InvalidParameter
from .tags import TagLike, check_tag, parse_tags, tags_match

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Node:
    """
    A node placed in the arena.

    Parameters:
    -----------
    id : int
        Global arena index (unique across the whole graph)
    x, y, z : float
        Position in the global frame (y is up)
    module : int
        Id of the owning module
    local : int
        Index of the node inside its module (0..len(module)-1)
    """
    id: int
    x: float
    y: float
    z: float
    module: int
    local: int

    @property
    def position(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=float)


@dataclass(frozen=True, eq=False)
class ModuleSpec:
    """
    A detached module template: node positions plus intra-module pairs.

    positions : np.ndarray
        (n, 3) array of local node positions
    pairs : tuple of (i, j, tag)
        Intra-module edges between local node indices
    tags : tuple of str
        Tags applied to the module when it is placed
    """
    positions: np.ndarray
    pairs: Tuple[Tuple[int, int, str], ...] = ()
    tags: Tuple[str, ...] = ()

    def __post_init__(self):
        positions = np.array(self.positions, dtype=float)
        if positions.ndim != 2 or positions.shape[1] != 3:
            raise InvalidParameter(
                f"Module positions must have shape (n, 3), got {positions.shape}"
            )
        positions.setflags(write=False)
        n = positions.shape[0]
        pairs = []
        for i, j, tag in self.pairs:
            if not (0 <= i < n and 0 <= j < n):
                raise DanglingReference(
                    f"Pair ({i}, {j}) references a node outside 0..{n - 1}"
                )
            pairs.append((int(i), int(j), check_tag(tag)))
        object.__setattr__(self, "positions", positions)
        object.__setattr__(self, "pairs", tuple(pairs))
        object.__setattr__(self, "tags", tuple(check_tag(t) for t in self.tags))

    def __len__(self) -> int:
        return self.positions.shape[0]

    def moved(self, offset: Sequence[float]) -> "ModuleSpec":
        """Return a copy translated by ``offset``."""
        offset = np.asarray(offset, dtype=float).reshape(3)
        return ModuleSpec(self.positions + offset, self.pairs, self.tags)

    def tagged(self, *tags: str) -> "ModuleSpec":
        """Return a copy carrying additional module tags."""
        return ModuleSpec(self.positions, self.pairs, self.tags + tuple(tags))


@dataclass(frozen=True)
class Module:
    """A view over the arena node range [start, stop)."""
    id: int
    start: int
    stop: int
    tags: Tuple[str, ...] = ()

    def __len__(self) -> int:
        return self.stop - self.start

    @property
    def node_ids(self) -> range:
        return range(self.start, self.stop)

    def node_id(self, local: int) -> int:
        """Arena index of the module's ``local``-th node."""
        if not 0 <= local < len(self):
            raise DanglingReference(
                f"Module {self.id} has no node {local} (size {len(self)})"
            )
        return self.start + local


@dataclass(frozen=True)
class Edge:
    """An unordered, tagged connection between two arena nodes."""
    id: int
    ni: int
    nj: int
    tag: str


@dataclass
class StructureGraph:
    """
    The arena owning every node, module view and edge of a structure.

    Invariants:
    -----------
    - every node belongs to exactly one module (by construction)
    - every edge references nodes already present when it is added
    """
    nodes: List[Node] = field(default_factory=list)
    modules: List[Module] = field(default_factory=list)
    edges: List[Edge] = field(default_factory=list)

    # ------------------------------------------------------------------
    # Growth
    # ------------------------------------------------------------------

    def add_module(self, spec: ModuleSpec, tags: Iterable[str] = ()) -> Module:
        """
        Place a template: append its nodes and intra-module edges.

        The new module gets fresh node ids, so placing the same spec twice
        gives two independent modules.
        """
        module_id = len(self.modules)
        start = len(self.nodes)
        for local, (x, y, z) in enumerate(spec.positions):
            self.nodes.append(Node(
                id=start + local, x=float(x), y=float(y), z=float(z),
                module=module_id, local=local,
            ))
        module_tags = spec.tags + tuple(check_tag(t) for t in tags)
        module = Module(id=module_id, start=start, stop=len(self.nodes), tags=module_tags)
        self.modules.append(module)

        for i, j, tag in spec.pairs:
            self.add_edge(start + i, start + j, tag)

        logger.debug("Placed module %d (%d nodes, tags=%s)", module_id, len(module), module_tags)
        return module

    def add_edge(self, ni: int, nj: int, tag: str) -> Edge:
        """Connect two existing nodes. Fails on dangling ids or self-loops."""
        tag = check_tag(tag)
        for node_id in (ni, nj):
            if not 0 <= node_id < len(self.nodes):
                raise DanglingReference(
                    f"Edge '{tag}' references node {node_id}, "
                    f"graph has {len(self.nodes)} nodes"
                )
        if ni == nj:
            raise InvalidParameter(f"Edge '{tag}' connects node {ni} to itself")
        edge = Edge(id=len(self.edges), ni=int(ni), nj=int(nj), tag=tag)
        self.edges.append(edge)
        return edge

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def node(self, node_id: int) -> Node:
        if not 0 <= node_id < len(self.nodes):
            raise DanglingReference(f"Node {node_id} is not in the graph")
        return self.nodes[node_id]

    def module_of(self, node_id: int) -> Module:
        return self.modules[self.node(node_id).module]

    def module_nodes(self, module: Module) -> List[Node]:
        return [self.nodes[i] for i in module.node_ids]

    def is_connector(self, edge: Edge) -> bool:
        """True for edges joining two different modules."""
        return self.nodes[edge.ni].module != self.nodes[edge.nj].module

    def edge_tags(self, edge: Edge) -> FrozenSet[str]:
        """
        Tag words an instance realized from ``edge`` should carry.

        Intra-module edges inherit their module's tags (e.g. "segment-2").
        """
        words = set(parse_tags(edge.tag))
        if not self.is_connector(edge):
            words.update(parse_tags(self.module_of(edge.ni).tags))
        return frozenset(words)

    def edges_with(self, pattern: TagLike) -> List[Edge]:
        """Edges whose tags match ``pattern``, in insertion order."""
        return [e for e in self.edges if tags_match(self.edge_tags(e), pattern)]

    def tag_counts(self) -> Counter:
        """Multiset of edge tags."""
        return Counter(e.tag for e in self.edges)

    def positions(self) -> np.ndarray:
        """(n_nodes, 3) array of node positions."""
        if not self.nodes:
            return np.zeros((0, 3))
        return np.array([[n.x, n.y, n.z] for n in self.nodes], dtype=float)

    def edge_length(self, edge: Edge) -> float:
        return float(np.linalg.norm(
            self.nodes[edge.nj].position - self.nodes[edge.ni].position
        ))

    def validate(self) -> None:
        """
        Re-check the arena invariants.

        Raises:
            DanglingReference: if an edge endpoint is missing or a node is
                outside its owning module's range
        """
        n = len(self.nodes)
        for edge in self.edges:
            if not (0 <= edge.ni < n and 0 <= edge.nj < n):
                raise DanglingReference(
                    f"Edge {edge.id} ('{edge.tag}') references a missing node"
                )
        for node in self.nodes:
            if not 0 <= node.module < len(self.modules):
                raise DanglingReference(f"Node {node.id} has no owning module")
            module = self.modules[node.module]
            if node.id not in module.node_ids:
                raise DanglingReference(
                    f"Node {node.id} is outside module {module.id}'s range"
                )
