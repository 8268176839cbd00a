"""
Tabview - observable tab collection.

An ordered collection of tab records with a selection cursor, an optional
capacity and drag reordering, notifying observers after every change.

Usage:
    from tabview import TabCollectionController, TabRecord

    controller = TabCollectionController([TabRecord("Home")], capacity=8)
    controller.subscribe(view.refresh)
    controller.append(TabRecord("Settings", closable=False))

The Qt bridge lives in `tabview.qt` and is imported separately.
"""
from tabview.core import (
    Connection,
    ControllerOptions,
    InvalidStateError,
    Signal,
    TabIndexError,
    TabviewError,
    setup_logging,
    teardown_logging,
)
from tabview.models import (
    LOADING_LABEL,
    TabButton,
    TabKey,
    TabMenuItem,
    TabRecord,
    TabStatus,
)
from tabview.controllers import KeepSide, TabCollectionController

__version__ = "0.1.0"

__all__ = [
    # Core
    "Connection",
    "ControllerOptions",
    "Signal",
    "setup_logging",
    "teardown_logging",

    # Errors
    "TabviewError",
    "TabIndexError",
    "InvalidStateError",

    # Tabs
    "LOADING_LABEL",
    "TabButton",
    "TabKey",
    "TabMenuItem",
    "TabRecord",
    "TabStatus",

    # Controller
    "KeepSide",
    "TabCollectionController",
]
