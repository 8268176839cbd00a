import pytest
from loguru import logger

from tabview import TabCollectionController, TabRecord


@pytest.fixture
def make_tabs():
    """Factory producing detached tabs labeled by the given names."""
    def _make(*labels):
        return [TabRecord(label) for label in labels]
    return _make


@pytest.fixture
def abcd(make_tabs):
    return make_tabs("A", "B", "C", "D")


@pytest.fixture
def log_messages():
    """Collect loguru output emitted during the test."""
    messages = []
    handler_id = logger.add(lambda msg: messages.append(str(msg)), level="DEBUG")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def labels_of():
    """Labels of the controller tabs, in order."""
    return _labels


@pytest.fixture
def check_invariants():
    return _assert_consistent


def _labels(controller: TabCollectionController):
    return [tab.label for tab in controller.tabs]


def _assert_consistent(controller: TabCollectionController):
    """Structural invariants that must hold after every operation."""
    tabs = controller.tabs
    assert len(set(map(id, tabs))) == len(tabs)
    for i, tab in enumerate(tabs):
        assert tab.position == i
        assert tab.owner is controller
    selected = controller.selected_index
    assert selected is None or 0 <= selected < len(tabs)
    if not tabs:
        assert selected is None
    if controller.capacity is not None:
        assert len(tabs) <= controller.capacity
