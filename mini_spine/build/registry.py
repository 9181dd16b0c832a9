# mini_spine/build/registry.py
"""
BUILDER REGISTRY: Tag -> Construction Strategy
==============================================

Each registered tag maps to a (builder, config) pair. A builder is any
object with:

    check(config)                               validate the record
    build(edge, ni, nj, tags, config) -> obj    one instance per edge

Resolution matches a registered tag against an edge's tag words, so the
single registration "muscle" covers "vertical muscle a" as well as
"saddle muscle seg-3". Exactly one registration must match each edge.

USAGE:
------
    registry = BuilderRegistry()
    registry.add_builder("rod", RodBuilder(), MOVING_ROD)
    registry.add_builder("rodB", RodBuilder(), BASE_ROD)
    registry.add_builder("muscle", CableBuilder(), DEFAULT_CABLE)
"""

from typing import Any, Dict, FrozenSet, List, Tuple

from ..config import CableConfig, RodConfig
from ..kernel.errors import AmbiguousTag, InvalidParameter, UnregisteredTag
from ..kernel.graph import Edge, Node
from ..kernel.tags import check_tag, tags_match
from .instances import Rod, SpringCable


class RodBuilder:
    """Builds a Rod from a rigid-member edge."""

    def check(self, config: RodConfig) -> None:
        if not isinstance(config, RodConfig):
            raise InvalidParameter(f"RodBuilder needs a RodConfig, got {type(config).__name__}")
        if not config.radius > 0:
            raise InvalidParameter(f"Rod radius must be > 0, got {config.radius}")
        if not config.density >= 0:
            raise InvalidParameter(f"Rod density must be >= 0, got {config.density}")

    def build(self, edge: Edge, ni: Node, nj: Node, tags: FrozenSet[str],
              config: RodConfig) -> Rod:
        return Rod(edge_id=edge.id, tags=tags, start=ni.position, end=nj.position,
                   config=config)


class CableBuilder:
    """Builds a SpringCable from a connector edge."""

    def check(self, config: CableConfig) -> None:
        if not isinstance(config, CableConfig):
            raise InvalidParameter(
                f"CableBuilder needs a CableConfig, got {type(config).__name__}"
            )
        if not config.stiffness > 0:
            raise InvalidParameter(f"Cable stiffness must be > 0, got {config.stiffness}")
        for name in ("damping", "pretension", "max_tension", "target_velocity"):
            if not getattr(config, name) >= 0:
                raise InvalidParameter(
                    f"Cable {name} must be >= 0, got {getattr(config, name)}"
                )

    def build(self, edge: Edge, ni: Node, nj: Node, tags: FrozenSet[str],
              config: CableConfig) -> SpringCable:
        return SpringCable(edge_id=edge.id, tags=tags, start=ni.position,
                           end=nj.position, config=config)


class BuilderRegistry:
    """Mapping from tag to (builder, config)."""

    def __init__(self):
        self._entries: Dict[str, Tuple[Any, Any]] = {}

    def add_builder(self, tag: str, builder, config) -> "BuilderRegistry":
        tag = check_tag(tag)
        if tag in self._entries:
            raise InvalidParameter(f"A builder is already registered for '{tag}'")
        check = getattr(builder, "check", None)
        if check is not None:
            check(config)
        self._entries[tag] = (builder, config)
        return self

    def resolve(self, edge_tag: str) -> Tuple[Any, Any]:
        """
        Return the (builder, config) registered for ``edge_tag``.

        Raises:
            UnregisteredTag: no registration matches
            AmbiguousTag: more than one registration matches
        """
        matches = [t for t in self._entries if tags_match(edge_tag, t)]
        if not matches:
            raise UnregisteredTag([edge_tag])
        if len(matches) > 1:
            raise AmbiguousTag(
                f"Tag '{edge_tag}' matches several builders: {', '.join(matches)}"
            )
        return self._entries[matches[0]]

    def tags(self) -> List[str]:
        return list(self._entries)

    def __contains__(self, tag: str) -> bool:
        return tag in self._entries

    def __len__(self) -> int:
        return len(self._entries)
