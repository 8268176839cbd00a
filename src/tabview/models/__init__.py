from .observable import ObservableBase, ObservableProperty
from .tab_record import (
    DETACHED,
    LOADING_LABEL,
    TabButton,
    TabKey,
    TabMenuItem,
    TabRecord,
    TabStatus,
)

__all__ = [
    "ObservableBase",
    "ObservableProperty",
    "DETACHED",
    "LOADING_LABEL",
    "TabButton",
    "TabKey",
    "TabMenuItem",
    "TabRecord",
    "TabStatus",
]
