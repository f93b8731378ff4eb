"""Pytest configuration"""

import pytest

import goldenpane
from goldenpane import ConfigStore, PaneData
from goldenpane.providers import GenericProvider


@pytest.fixture
def side_by_side():
    """Two full-height panes splitting a 50x200 canvas, left one focused."""
    return [
        PaneData(id="1", width=100, height=50, row=0, col=0, buffer="b1",
                 buffer_name="/src/main.py", filetype="python", active=True),
        PaneData(id="2", width=100, height=50, row=0, col=100, buffer="b2",
                 buffer_name="/src/util.py", filetype="python"),
    ]


@pytest.fixture
def stacked():
    """Two full-width panes stacked on a 50x200 canvas, top one focused."""
    return [
        PaneData(id="1", width=200, height=25, row=0, col=0, buffer="b1",
                 buffer_name="/src/main.py", filetype="python", active=True),
        PaneData(id="2", width=200, height=25, row=25, col=0, buffer="b2",
                 buffer_name="/src/util.py", filetype="python"),
    ]


@pytest.fixture
def provider(side_by_side):
    return GenericProvider(panes=side_by_side, lines=50, columns=200)


@pytest.fixture
def config():
    return ConfigStore()


@pytest.fixture(autouse=True)
def reset_default_session():
    """Drop the process-wide session after each test"""
    yield
    goldenpane.teardown()
