# mini_spine/viz/viz3d.py
"""
3D VISUALIZATION: Interactive Spine Viewer
==========================================

Plot a structure graph with Plotly: rigid members, vertical cables and
saddle cables each get their own trace so they can be toggled from the
legend. Works in notebooks and as standalone HTML.
"""

import os
from typing import Dict, List, Optional

import plotly.graph_objects as go

from ..kernel.graph import Edge, StructureGraph
from ..kernel.tags import tags_match

# (legend name, tag pattern, color); first match wins, connectors only
CONNECTOR_STYLES = (
    ('Vertical cables', 'vertical', 'firebrick'),
    ('Saddle cables', 'saddle', 'darkorange'),
)


def _classify(graph: StructureGraph, edge: Edge) -> str:
    if not graph.is_connector(edge):
        return 'Rigid members'
    for name, pattern, _ in CONNECTOR_STYLES:
        if tags_match(edge.tag, pattern):
            return name
    return 'Other cables'


def _line_trace(graph: StructureGraph, edges: List[Edge], name: str,
                color: str, width: int) -> go.Scatter3d:
    xs, ys, zs, texts = [], [], [], []
    for edge in edges:
        ni, nj = graph.nodes[edge.ni], graph.nodes[edge.nj]
        # y is up in the graph, z is up in the plot; None breaks the polyline
        xs.extend([ni.x, nj.x, None])
        ys.extend([ni.z, nj.z, None])
        zs.extend([ni.y, nj.y, None])
        label = f"Edge {edge.id}: {edge.tag} (L={graph.edge_length(edge):.2f})"
        texts.extend([label, label, None])
    return go.Scatter3d(
        x=xs, y=ys, z=zs,
        mode='lines',
        line=dict(color=color, width=width),
        name=name,
        text=texts,
        hoverinfo='text',
    )


def create_spine_figure(
    graph: StructureGraph,
    title: str = "Tensegrity Spine",
    show_nodes: bool = True,
) -> go.Figure:
    """
    Build a Plotly figure of ``graph``.

    The y axis of the graph is "up"; it is drawn as the plot's z axis.
    """
    groups: Dict[str, List[Edge]] = {}
    for edge in graph.edges:
        groups.setdefault(_classify(graph, edge), []).append(edge)

    colors = {name: color for name, _, color in CONNECTOR_STYLES}
    colors['Rigid members'] = 'steelblue'
    colors['Other cables'] = 'gray'

    fig = go.Figure()
    for name, edges in groups.items():
        width = 8 if name == 'Rigid members' else 3
        fig.add_trace(_line_trace(graph, edges, name, colors[name], width))

    if show_nodes and graph.nodes:
        fig.add_trace(go.Scatter3d(
            x=[n.x for n in graph.nodes],
            y=[n.z for n in graph.nodes],
            z=[n.y for n in graph.nodes],
            mode='markers',
            marker=dict(size=4, color='darkgray', line=dict(width=1, color='black')),
            name='Nodes',
            text=[f"Node {n.id} (module {n.module}, local {n.local})" for n in graph.nodes],
            hoverinfo='text',
        ))

    fig.update_layout(
        title=dict(text=title, font=dict(size=16)),
        scene=dict(
            xaxis=dict(title='X (lateral)'),
            yaxis=dict(title='Z (depth)'),
            zaxis=dict(title='Y (up)'),
            aspectmode='data',
            camera=dict(eye=dict(x=1.5, y=1.5, z=1.0)),
        ),
        showlegend=True,
        legend=dict(x=0.02, y=0.98),
        margin=dict(l=0, r=0, t=40, b=0),
    )
    return fig


def plot_spine_3d(
    graph: StructureGraph,
    title: str = "Tensegrity Spine",
    outpath: Optional[str] = None,
    show: bool = True,
    **kwargs
) -> go.Figure:
    """Create the figure, optionally save it as HTML and/or show it."""
    fig = create_spine_figure(graph, title=title, **kwargs)

    if outpath:
        os.makedirs(os.path.dirname(outpath) if os.path.dirname(outpath) else '.', exist_ok=True)
        fig.write_html(outpath)
        print(f"3D visualization saved to: {outpath}")

    if show:
        fig.show()

    return fig
