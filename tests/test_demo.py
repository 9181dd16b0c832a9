# File: tests/test_demo.py
"""
Test the vertical spine demo runs end to end and reports through logging.
"""

import importlib.util
import logging
from pathlib import Path

import pytest

DEMO = Path(__file__).parent.parent / "demos" / "run_vertical_spine.py"


@pytest.fixture
def demo(monkeypatch):
    spec = importlib.util.spec_from_file_location("run_vertical_spine", DEMO)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    monkeypatch.setattr(module, "plot_spine_3d", lambda *args, **kwargs: None)
    yield module
    logger = logging.getLogger("mini_spine")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


class TestVerticalSpineDemo:

    def test_main_logs_build(self, demo, capsys):
        demo.main()
        out = capsys.readouterr().out

        assert "TENSEGRITY SPINE GENERATION" in out
        assert "Spine ready" in out
        assert logging.getLogger("mini_spine").handlers
