"""Pytest configuration for tests.

No sys.path hacks - tests should import from installed graphview package.
"""

import pytest

from graphview.kernel.model import Dataset
from graphview.scheduling import ManualScheduler
from graphview.surface import DisplaySurface


def make_dataset(nodes, edges=()):
    """Build a Dataset from plain node/edge dicts."""
    return Dataset(nodes=list(nodes), edges=list(edges))


@pytest.fixture
def people_graph():
    """Small typed graph in node-link form (edges under `links`)."""
    return {
        "directed": True,
        "nodes": [
            {"id": "alice", "label": "Alice", "type": "Person"},
            {"id": "bob", "type": "Person"},
            {"id": "acme", "label": "ACME", "type": "Organization"},
            {"id": "paris", "source_type": "Location"},
            {"id": "orphan"},
        ],
        "links": [
            {"source": "alice", "target": "bob", "label": "knows"},
            {"source": "alice", "target": "acme", "label": "works_at"},
            {"source": "acme", "target": "paris"},
        ],
    }


@pytest.fixture
def dataset(people_graph):
    return Dataset.model_validate(people_graph)


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def surface():
    return DisplaySurface(800, 600, surface_id="test-surface")
