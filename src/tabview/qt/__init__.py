"""Qt bridge for tabview controllers (requires PySide6)."""
from .tab_list_model import TabListModel

__all__ = ["TabListModel"]
