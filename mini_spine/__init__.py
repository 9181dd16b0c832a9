# mini_spine - Procedural tensegrity spine generation
"""
MINI-SPINE: A Tensegrity Spine Generator
========================================

This package turns a few parameters into a multi-segment tensegrity spine:
tetrahedral vertebrae joined by spring cables, ready to hand to a physics
engine, with cables addressable by name.

ARCHITECTURE:
-------------
    kernel/         Structure graph arena, tags, error kinds
    generative/     Vertebra template, replication, cable pattern
    build/          Builder registry, Rod/SpringCable, atomic realization
    index.py        Semantic key -> cable group index
    model.py        SpineModel: setup, step hook, named cable access
    config.py       Configuration records (geometry, rods, cables)
    post.py         DataFrame summaries
    viz/            Plotly 3D view
"""

from .config import (
    VertebraParams, RodConfig, CableConfig, SpineParams, SpineConfig,
    BASE_ROD, MOVING_ROD, DEFAULT_CABLE,
)
from .kernel import (
    SpineBuildError, InvalidParameter, InsufficientModules, DanglingReference,
    UnregisteredTag, AmbiguousTag, KeyNotFound, InvalidTimeStep, SpineNotBuiltError,
    StructureGraph,
)
from .generative import assemble_spine
from .index import SymbolicIndex, spine_index_keys
from .model import SpineModel, SpineObserver

__version__ = "0.1.0"
