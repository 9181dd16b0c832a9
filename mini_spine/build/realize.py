# mini_spine/build/realize.py
"""Turn a structure graph into simulation instances, all or nothing."""

import logging
from typing import Iterable, List, Type, TypeVar

from ..kernel.errors import UnregisteredTag
from ..kernel.graph import StructureGraph
from .registry import BuilderRegistry

logger = logging.getLogger(__name__)

T = TypeVar("T")


def realize(graph: StructureGraph, registry: BuilderRegistry) -> List[object]:
    """
    Build one instance per edge, in edge order.

    Every edge tag is resolved before the first instance is created. If any
    tag is unresolved, a single UnregisteredTag lists all of them and no
    instance exists.

    Returns:
    --------
    List of instances; instance k comes from graph.edges[k]
    """
    resolved = []
    missing = []
    for edge in graph.edges:
        try:
            resolved.append((edge, registry.resolve(edge.tag)))
        except UnregisteredTag:
            if edge.tag not in missing:
                missing.append(edge.tag)
    if missing:
        raise UnregisteredTag(missing)

    instances = []
    for edge, (builder, config) in resolved:
        instances.append(builder.build(
            edge,
            graph.nodes[edge.ni],
            graph.nodes[edge.nj],
            graph.edge_tags(edge),
            config,
        ))

    logger.debug("Realized %d instances from %d edges", len(instances), len(graph.edges))
    return instances


def filter_instances(instances: Iterable[object], cls: Type[T]) -> List[T]:
    """Instances of ``cls``, in their original order."""
    return [inst for inst in instances if isinstance(inst, cls)]
