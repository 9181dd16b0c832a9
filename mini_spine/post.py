# mini_spine/post.py
"""
Tabular summaries of a generated spine.

These replace dumping every rigid body to stdout: each function returns a
DataFrame (one row per graph edge, rod or cable) that can be printed,
filtered or exported.
"""

from typing import Dict, Iterable

import pandas as pd

from .build.instances import Rod, SpringCable
from .kernel.graph import StructureGraph


def _segment_of(tags) -> str:
    for tag in sorted(tags):
        if tag.startswith("segment-"):
            return tag
    return ""


def graph_table(graph: StructureGraph) -> pd.DataFrame:
    """One row per edge: endpoints, modules, tag, length, connector flag."""
    rows = []
    for edge in graph.edges:
        ni, nj = graph.nodes[edge.ni], graph.nodes[edge.nj]
        rows.append({
            'edge': edge.id,
            'tag': edge.tag,
            'ni': edge.ni,
            'nj': edge.nj,
            'module_i': ni.module,
            'module_j': nj.module,
            'connector': graph.is_connector(edge),
            'length': graph.edge_length(edge),
        })
    return pd.DataFrame(rows, columns=[
        'edge', 'tag', 'ni', 'nj', 'module_i', 'module_j', 'connector', 'length',
    ])


def rod_table(rods: Iterable[Rod]) -> pd.DataFrame:
    """One row per rod with its segment, geometry and mass."""
    rows = []
    for rod in rods:
        rows.append({
            'edge': rod.edge_id,
            'segment': _segment_of(rod.tags),
            'length': rod.length,
            'radius': rod.config.radius,
            'volume': rod.volume,
            'mass': rod.mass,
            'fixed': rod.is_fixed,
        })
    return pd.DataFrame(rows, columns=[
        'edge', 'segment', 'length', 'radius', 'volume', 'mass', 'fixed',
    ])


def cable_table(cables: Iterable[SpringCable]) -> pd.DataFrame:
    """One row per cable with its current rest length and tension."""
    rows = []
    for cable in cables:
        rows.append({
            'edge': cable.edge_id,
            'tags': " ".join(sorted(cable.tags)),
            'length': cable.length,
            'rest_length': cable.rest_length,
            'target_length': cable.target_length,
            'tension': cable.tension,
        })
    return pd.DataFrame(rows, columns=[
        'edge', 'tags', 'length', 'rest_length', 'target_length', 'tension',
    ])


def structure_summary(model) -> Dict[str, float]:
    """Headline numbers for a built SpineModel."""
    rods = rod_table(model.rods)
    graph = model.graph
    return {
        'n_modules': len(graph.modules),
        'n_nodes': len(graph.nodes),
        'n_edges': len(graph.edges),
        'n_rods': len(rods),
        'n_cables': len(model.get_all_instances()),
        'n_fixed_rods': int(rods['fixed'].sum()) if len(rods) else 0,
        'total_mass': float(rods['mass'].sum()) if len(rods) else 0.0,
        'n_index_keys': len(model.index_keys()),
    }
