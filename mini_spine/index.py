# mini_spine/index.py
"""
ACTUATOR INDEX: Semantic Keys -> Instance Groups
================================================

Controllers address cables by meaning ("vertical a", "saddle 0") instead of
by position in the realized list. The index is built once from a curated
key -> tag-pattern mapping and is read-only afterwards, so any number of
readers can share it.

    index = SymbolicIndex.build(cables, {"vertical a": "vertical muscle a"})
    index.get_instances("vertical a")   # tuple of SpringCable
"""

from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Sequence, Tuple

from .kernel.errors import KeyNotFound
from .kernel.tags import tags_match

VERTICAL_KEYS = ("a", "b", "c", "d")


def spine_index_keys(segments: int, all_pairs: bool = False) -> Dict[str, str]:
    """
    Default curated keys for a spine with ``segments`` moving vertebrae.

    One key per vertical class plus "saddle k" for k < segments - 1. With
    ``all_pairs`` every adjacent pair gets a saddle key (k < segments),
    including the pair that ends at the top vertebra.
    """
    keys = {f"vertical {c}": f"vertical muscle {c}" for c in VERTICAL_KEYS}
    for k in range(segments if all_pairs else segments - 1):
        keys[f"saddle {k}"] = f"saddle muscle seg-{k}"
    return keys


class SymbolicIndex:
    """Read-only mapping from key to the ordered instances matching it."""

    def __init__(self, groups: Mapping[str, Tuple[object, ...]], instances: Sequence[object]):
        self._groups = MappingProxyType(dict(groups))
        self._all = tuple(instances)

    @classmethod
    def build(cls, instances: Iterable[object], keys: Mapping[str, str]) -> "SymbolicIndex":
        """
        Group ``instances`` under each key whose tag pattern they match.

        Instances must expose a ``tags`` word set. Order within a group
        follows the order of ``instances``.
        """
        instances = tuple(instances)
        groups = {}
        for key, pattern in keys.items():
            groups[key] = tuple(i for i in instances if tags_match(i.tags, pattern))
        return cls(groups, instances)

    def get_instances(self, key: str) -> Tuple[object, ...]:
        try:
            return self._groups[key]
        except KeyError:
            raise KeyNotFound(key) from None

    def get_all_instances(self) -> Tuple[object, ...]:
        return self._all

    def keys(self):
        return self._groups.keys()

    def __contains__(self, key: str) -> bool:
        return key in self._groups

    def __len__(self) -> int:
        return len(self._groups)
