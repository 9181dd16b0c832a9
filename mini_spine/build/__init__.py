# mini_spine/build - Realization of structure graphs
"""
BUILD: From Graph to Simulation Objects
=======================================

- instances.py  Rod and SpringCable
- registry.py   Tag -> (builder, config) registry and the two builders
- realize.py    Atomic realization of every edge in a graph
"""

from .instances import Rod, SpringCable
from .registry import BuilderRegistry, RodBuilder, CableBuilder
from .realize import realize, filter_instances

__all__ = [
    'Rod', 'SpringCable',
    'BuilderRegistry', 'RodBuilder', 'CableBuilder',
    'realize', 'filter_instances',
]
