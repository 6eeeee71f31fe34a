"""
Shared fixtures for depmesh tests.
"""

import pytest

from depmesh.core.demo import DemoManager
from depmesh.core.types import GraphData


@pytest.fixture
def two_group_graph() -> GraphData:
    """A(X) -> B(Y)."""
    return GraphData.model_validate({
        "nodes": [
            {"id": "A", "group": "X", "label": "A"},
            {"id": "B", "group": "Y", "label": "B", "level": 1},
        ],
        "links": [{"source": "A", "target": "B", "type": "process_step"}],
    })


@pytest.fixture
def star_graph() -> GraphData:
    """Hub linked to three leaves plus one unrelated node."""
    return GraphData.model_validate({
        "nodes": [
            {"id": "hub", "group": "Object", "label": "Hub"},
            {"id": "a", "group": "Field", "label": "Alpha"},
            {"id": "b", "group": "Field", "label": "Beta"},
            {"id": "c", "group": "Flow", "label": "Gamma", "metadata": {"apiName": "Gamma_Flow__c"}},
            {"id": "lonely", "group": "Trigger", "label": "Lonely"},
        ],
        "links": [
            {"source": "hub", "target": "a", "type": "reference"},
            {"source": "b", "target": "hub", "type": "update"},
            {"source": "hub", "target": "c", "type": "trigger"},
        ],
    })


@pytest.fixture
def demo_graph() -> GraphData:
    return DemoManager.dependency_graph()


@pytest.fixture
def process_graph() -> GraphData:
    return DemoManager.process_graph()
