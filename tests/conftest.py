"""
Shared fixtures for the visualizer tests.
"""

import sys
from pathlib import Path

import pytest

# Ensure the project root is importable without installing
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from graph import Graph  # noqa: E402


@pytest.fixture
def default_graph():
    """A–G with edges A-B, A-C, B-D, B-E, C-F, C-G."""
    return Graph.generate_default()


@pytest.fixture
def client():
    import config
    from main import app

    app.config.from_object(config.TestingConfig)
    with app.test_client() as c:
        yield c
