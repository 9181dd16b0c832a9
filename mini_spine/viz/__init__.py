# mini_spine/viz - Visualization Tools
"""
VIZ: Visualization for Spine Structures
=======================================

- viz3d: interactive 3D view of a structure graph (Plotly)
"""

from .viz3d import plot_spine_3d, create_spine_figure

__all__ = ['plot_spine_3d', 'create_spine_figure']
