# mini_spine/kernel - Structure graph core
"""
KERNEL: THE GRAPH FOUNDATION
============================

Everything the generators and the realizer share:
- errors.py   Error kinds for construction and runtime failures
- tags.py     Word-set tag parsing and pattern matching
- graph.py    Node/Edge arena with Module views

Nothing in here knows what a vertebra or a cable is.
"""

from .errors import (
    SpineBuildError,
    InvalidParameter,
    InsufficientModules,
    DanglingReference,
    UnregisteredTag,
    AmbiguousTag,
    KeyNotFound,
    InvalidTimeStep,
    SpineNotBuiltError,
)
from .tags import parse_tags, tags_match
from .graph import Node, ModuleSpec, Module, Edge, StructureGraph

__all__ = [
    'SpineBuildError', 'InvalidParameter', 'InsufficientModules',
    'DanglingReference', 'UnregisteredTag', 'AmbiguousTag', 'KeyNotFound',
    'InvalidTimeStep', 'SpineNotBuiltError',
    'parse_tags', 'tags_match',
    'Node', 'ModuleSpec', 'Module', 'Edge', 'StructureGraph',
]
