"""
Tabview Core - shared infrastructure.

Provides:
- Signal / Connection: synchronous observer primitive
- ControllerOptions: validated controller configuration
- TabviewError, TabIndexError, InvalidStateError: error taxonomy
- setup_logging: Loguru configuration
"""
from .events import Signal, Connection
from .errors import TabviewError, TabIndexError, InvalidStateError
from .config import ControllerOptions
from .logging import setup_logging, teardown_logging

__all__ = [
    "Signal",
    "Connection",
    "TabviewError",
    "TabIndexError",
    "InvalidStateError",
    "ControllerOptions",
    "setup_logging",
    "teardown_logging",
]
