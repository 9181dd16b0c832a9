# File: tests/test_postprocessing.py
"""
Test the DataFrame summaries, the Plotly figure and logging setup.
"""

import logging

import numpy as np

from mini_spine import SpineModel, SpineParams
from mini_spine.logging_config import setup_logging
from mini_spine.post import cable_table, graph_table, rod_table, structure_summary
from mini_spine.viz import create_spine_figure, plot_spine_3d


def built_model(segments=2):
    model = SpineModel(SpineParams(segments=segments))
    model.setup()
    return model


class TestTables:

    def test_graph_table(self):
        model = built_model(2)
        df = graph_table(model.graph)

        assert len(df) == 28
        assert df['connector'].sum() == 16
        assert (df.loc[~df['connector'], 'module_i'] == df.loc[~df['connector'], 'module_j']).all()
        assert (df['length'] > 0).all()

    def test_rod_table(self):
        model = built_model(2)
        df = rod_table(model.rods)

        assert len(df) == 12
        assert df['fixed'].sum() == 4
        assert set(df['segment']) == {"segment-1", "segment-2", "segment-3"}
        assert np.isclose(df['mass'].sum(), sum(r.mass for r in model.rods))

    def test_cable_table(self):
        model = built_model(2)
        df = cable_table(model.cables)

        assert len(df) == 16
        assert (df['tension'] >= 0).all()
        assert (df['rest_length'] <= df['length']).all()

    def test_empty_tables_keep_columns(self):
        assert list(rod_table([]).columns) == [
            'edge', 'segment', 'length', 'radius', 'volume', 'mass', 'fixed',
        ]
        assert len(cable_table([])) == 0

    def test_summary(self):
        model = built_model(3)
        summary = structure_summary(model)

        assert summary['n_modules'] == 4
        assert summary['n_nodes'] == 20
        assert summary['n_rods'] == 16
        assert summary['n_cables'] == 24
        assert summary['n_fixed_rods'] == 4
        assert summary['n_index_keys'] == 6
        assert summary['total_mass'] > 0


class TestFigure:

    def test_traces(self):
        model = built_model(2)
        fig = create_spine_figure(model.graph)

        names = [trace.name for trace in fig.data]
        assert names == ['Rigid members', 'Vertical cables', 'Saddle cables', 'Nodes']
        assert len(fig.data[-1].x) == 15

    def test_without_nodes(self):
        model = built_model(1)
        fig = create_spine_figure(model.graph, show_nodes=False)
        assert 'Nodes' not in [trace.name for trace in fig.data]

    def test_write_html(self, tmp_path):
        model = built_model(1)
        out = tmp_path / "viz" / "spine.html"
        plot_spine_3d(model.graph, outpath=str(out), show=False)
        assert out.exists()


class TestLogging:

    def test_setup_logging(self, tmp_path):
        log_file = tmp_path / "spine.log"
        logger = setup_logging(logging.DEBUG, log_file=str(log_file))
        try:
            assert logger.name == "mini_spine"
            assert len(logger.handlers) == 2

            # calling again must not stack handlers
            logger = setup_logging(logging.INFO)
            assert len(logger.handlers) == 1
        finally:
            for handler in list(logger.handlers):
                handler.close()
                logger.removeHandler(handler)
            logger.setLevel(logging.NOTSET)
