"""
Loguru handlers for tabview records.

tabview is a library: it never removes handlers the host application
installed. `setup_logging` only adds handlers filtered to tabview's own
records and returns their ids so the host can remove them again.
"""
import sys
from typing import Any, List, Optional
from loguru import logger

TABVIEW_FORMAT = "{time:HH:mm:ss} | {level: <8} | {name}:{function} - {message}"


def setup_logging(debug_mode: bool = False, sink: Any = None, log_file: Optional[str] = None) -> List[int]:
    """
    Route tabview log records to ``sink`` (stderr by default) and, when
    given, to a rotating ``log_file`` that always records DEBUG.

    Structural mutations log at DEBUG, so pass ``debug_mode=True`` to see them
    on the console.
    """
    level = "DEBUG" if debug_mode else "INFO"
    handler_ids = [
        logger.add(sink if sink is not None else sys.stderr, level=level, format=TABVIEW_FORMAT, filter="tabview")
    ]
    if log_file:
        handler_ids.append(
            logger.add(log_file, level="DEBUG", format=TABVIEW_FORMAT, filter="tabview", rotation="5 MB", retention=3)
        )
    return handler_ids


def teardown_logging(handler_ids: List[int]) -> None:
    for handler_id in handler_ids:
        logger.remove(handler_id)
