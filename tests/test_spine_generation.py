# File: tests/test_spine_generation.py
"""
Test replication, the cable pattern and full spine assembly.

TEST PHILOSOPHY:
---------------
- Generation must be deterministic (same input = same graph)
- Topology must not depend on geometry
- The cable index pattern is a fixed contract
"""

import numpy as np
import pytest

from mini_spine.config import SpineParams, VertebraParams
from mini_spine.generative.spine import (
    SADDLE_CONNECTORS, VERTICAL_CONNECTORS,
    assemble_spine, replicate_module, synthesize_connectors,
)
from mini_spine.generative.vertebra import build_vertebra
from mini_spine.kernel.errors import InsufficientModules, InvalidParameter
from mini_spine.kernel.graph import StructureGraph


EXPECTED_PATTERN = [
    (0, 0, "vertical muscle a"),
    (1, 1, "vertical muscle b"),
    (2, 2, "vertical muscle c"),
    (3, 3, "vertical muscle d"),
    (2, 1, "saddle muscle seg-0"),
    (3, 1, "saddle muscle seg-0"),
    (2, 0, "saddle muscle seg-0"),
    (3, 0, "saddle muscle seg-0"),
]


def local_pattern(graph, edges):
    return [(graph.nodes[e.ni].local, graph.nodes[e.nj].local, e.tag) for e in edges]


class TestReplicator:

    @pytest.mark.parametrize("count", [0, 1, 2, 5])
    def test_clone_count_and_offsets(self, count):
        template = build_vertebra(20.0, 14.14)
        offset = np.array([1.0, 7.5, -2.0])
        graph = StructureGraph()

        clones = replicate_module(graph, template, offset, count)

        assert len(clones) == count
        assert len(graph.modules) == count
        for i, clone in enumerate(clones, start=1):
            placed = graph.positions()[clone.start:clone.stop]
            np.testing.assert_allclose(placed, template.positions + i * offset)

    def test_clones_do_not_share_nodes(self):
        graph = StructureGraph()
        clones = replicate_module(graph, build_vertebra(20.0, 14.14), (0, 7.5, 0), 4)

        seen = set()
        for clone in clones:
            ids = set(clone.node_ids)
            assert not ids & seen
            seen |= ids
        assert len(seen) == 20

    def test_segment_tags(self):
        graph = StructureGraph()
        clones = replicate_module(graph, build_vertebra(20.0, 14.14), (0, 7.5, 0), 3)
        assert [c.tags for c in clones] == [("segment-2",), ("segment-3",), ("segment-4",)]

    def test_first_segment_number(self):
        graph = StructureGraph()
        clones = replicate_module(graph, build_vertebra(20.0, 14.14), (0, 1, 0), 2,
                                  first_segment=7)
        assert [c.tags for c in clones] == [("segment-7",), ("segment-8",)]

    @pytest.mark.parametrize("count", [-1, 1.5, True])
    def test_bad_count(self, count):
        with pytest.raises(InvalidParameter):
            replicate_module(StructureGraph(), build_vertebra(20.0, 14.14), (0, 1, 0), count)

    def test_template_untouched(self):
        template = build_vertebra(20.0, 14.14)
        before = template.positions.copy()
        replicate_module(StructureGraph(), template, (0, 7.5, 0), 3)
        np.testing.assert_allclose(template.positions, before)


class TestConnectorSynthesis:

    def test_needs_two_modules(self):
        graph = StructureGraph()
        only = graph.add_module(build_vertebra(20.0, 14.14))
        n_edges = len(graph.edges)

        with pytest.raises(InsufficientModules):
            synthesize_connectors(graph, [only])
        with pytest.raises(InsufficientModules):
            synthesize_connectors(graph, [])
        assert len(graph.edges) == n_edges

    def test_pattern_for_one_pair(self):
        graph = StructureGraph()
        spec = build_vertebra(20.0, 14.14)
        lower = graph.add_module(spec)
        upper = graph.add_module(spec.moved((0, 7.5, 0)))

        connectors = synthesize_connectors(graph, [lower, upper])

        assert local_pattern(graph, connectors) == EXPECTED_PATTERN
        for edge in connectors:
            assert graph.nodes[edge.ni].module == lower.id
            assert graph.nodes[edge.nj].module == upper.id
            assert graph.is_connector(edge)

    def test_pattern_constants(self):
        assert len(VERTICAL_CONNECTORS) == 4
        assert all(i == j for _, i, j in VERTICAL_CONNECTORS)
        assert SADDLE_CONNECTORS == ((2, 1), (3, 1), (2, 0), (3, 0))

    @pytest.mark.parametrize("edge,height", [(20.0, 14.14), (2.0, 9.0), (50.0, 0.5)])
    def test_pattern_is_geometry_invariant(self, edge, height):
        graph = StructureGraph()
        spec = build_vertebra(edge, height)
        modules = [graph.add_module(spec.moved((0, k * 3.0, 0))) for k in range(2)]

        connectors = synthesize_connectors(graph, modules)
        assert local_pattern(graph, connectors) == EXPECTED_PATTERN

    def test_saddle_tags_are_per_pair(self):
        graph = StructureGraph()
        spec = build_vertebra(20.0, 14.14)
        modules = [graph.add_module(spec.moved((0, k * 7.5, 0))) for k in range(4)]

        connectors = synthesize_connectors(graph, modules)

        assert len(connectors) == 3 * 8
        saddle_tags = sorted({e.tag for e in connectors if e.tag.startswith("saddle")})
        assert saddle_tags == [f"saddle muscle seg-{k}" for k in range(3)]
        assert sum(1 for e in connectors if e.tag == "vertical muscle a") == 3


class TestAssembleSpine:

    def test_reference_scenario_counts(self):
        """edge=20, height=14.14, 2 segments -> base + 2 moving vertebrae."""
        layout = assemble_spine(SpineParams(segments=2))
        graph = layout.graph

        assert len(graph.modules) == 3
        assert len(graph.nodes) == 15
        assert len(layout.connectors) == 16
        assert len(graph.edges) == 12 + 16
        assert graph.tag_counts()["rodB"] == 4
        assert graph.tag_counts()["rod"] == 8

    def test_base_and_segments(self):
        layout = assemble_spine(SpineParams(segments=3))

        assert layout.base.tags == ("segment-1",)
        assert [m.tags for m in layout.segments] == [
            ("segment-2",), ("segment-3",), ("segment-4",),
        ]
        assert layout.modules[0] is layout.base

    def test_positions(self):
        params = SpineParams(segments=2)
        layout = assemble_spine(params)
        positions = layout.graph.positions()

        # base raised by 2, template lowered by 6, then 7.5 per clone
        np.testing.assert_allclose(positions[0], [10.0, 2.0, 0.0])
        np.testing.assert_allclose(positions[5], [10.0, 1.5, 0.0])
        np.testing.assert_allclose(positions[10], [10.0, 9.0, 0.0])

    def test_base_participates_in_pattern(self):
        layout = assemble_spine(SpineParams(segments=1))
        graph = layout.graph
        assert local_pattern(graph, layout.connectors) == EXPECTED_PATTERN
        assert all(graph.nodes[e.ni].module == layout.base.id for e in layout.connectors)

    def test_deterministic(self):
        params = SpineParams(segments=4, vertebra=VertebraParams(edge=12.0, height=8.0))
        g1 = assemble_spine(params).graph
        g2 = assemble_spine(params).graph

        assert len(g1.nodes) == len(g2.nodes)
        assert len(g1.edges) == len(g2.edges)
        assert g1.tag_counts() == g2.tag_counts()
        np.testing.assert_array_equal(g1.positions(), g2.positions())
        assert [(e.ni, e.nj, e.tag) for e in g1.edges] == [(e.ni, e.nj, e.tag) for e in g2.edges]

    @pytest.mark.parametrize("segments", [0, -3, 2.5])
    def test_bad_segment_count(self, segments):
        with pytest.raises(InvalidParameter):
            assemble_spine(SpineParams(segments=segments))

    def test_bad_separation(self):
        with pytest.raises(InvalidParameter):
            assemble_spine(SpineParams(vertebra_separation=0.0))

    def test_bad_geometry(self):
        with pytest.raises(InvalidParameter):
            assemble_spine(SpineParams(vertebra=VertebraParams(edge=-1.0)))
