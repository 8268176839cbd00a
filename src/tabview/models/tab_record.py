"""
TabRecord - observable attributes of a single tab.

A record is created by the caller and becomes owned once it is handed to a
TabCollectionController. Only the owning controller writes its position.
"""
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, List, Optional, TYPE_CHECKING

from tabview.models.observable import ObservableBase, ObservableProperty

if TYPE_CHECKING:
    from tabview.controllers.collection_controller import TabCollectionController

LOADING_LABEL = "Loading..."
DETACHED = -1


class TabStatus(Enum):
    """Visual state handed to leading builders."""
    SELECTED = "selected"
    HIGHLIGHTED = "highlighted"
    NORMAL = "normal"


@dataclass(frozen=True)
class TabKey:
    """
    Identity token used by the rendering layer to match records to widgets.

    Persistent keys belong to keep-alive records: the renderer must keep
    their off-screen content alive for the lifetime of the record.
    """
    value: str = field(default_factory=lambda: uuid.uuid4().hex)
    persistent: bool = False


@dataclass
class TabMenuItem:
    text: str
    on_selected: Optional[Callable[[], Any]] = None

    def trigger(self) -> None:
        if self.on_selected is not None:
            self.on_selected()


@dataclass
class TabButton:
    """Extra tab button: an icon plus either a press handler or a menu builder."""
    icon: Any
    on_pressed: Optional[Callable[[int], Any]] = None
    menu_builder: Optional[Callable[[int], List[TabMenuItem]]] = None
    tooltip: Optional[str] = None

    def build_menu(self, tab_index: int) -> List[TabMenuItem]:
        if self.menu_builder is None:
            return []
        return list(self.menu_builder(tab_index))


def _clamp_size(value: Optional[float]) -> Optional[float]:
    if value is None:
        return None
    return max(0, value)


class TabRecord(ObservableBase):
    """
    The tab data.

    The raw text is held in ``label``; ``display_label`` is what a renderer
    shows and reads "Loading..." while ``is_loading`` is set.

    ``payload`` associates the tab with any caller value and ``content`` holds
    an opaque render handle. Neither is ever inspected here.

    ``keep_alive`` asks the renderer to keep the content alive while the tab
    is not visible; such records get a persistent ``key``.

    Example:
        tab = TabRecord("README.md", payload=doc, closable=False)
        tab.is_loading = True
        tab.display_label   # "Loading..."
    """

    label = ObservableProperty(default="")
    is_loading = ObservableProperty(default=False)
    label_color = ObservableProperty(default=None)
    label_size = ObservableProperty(default=None, coerce=_clamp_size)
    closable = ObservableProperty(default=True)
    payload = ObservableProperty(default=None, identity=True)
    content = ObservableProperty(default=None, identity=True)
    buttons = ObservableProperty(default=None, always_notify=True)
    leading = ObservableProperty(default=None, identity=True)

    def __init__(
        self,
        label: str,
        *,
        is_loading: bool = False,
        label_color: Any = None,
        label_size: Optional[float] = None,
        closable: bool = True,
        draggable: bool = True,
        keep_alive: bool = False,
        payload: Any = None,
        content: Any = None,
        buttons: Optional[List[TabButton]] = None,
        leading: Optional[Callable[["TabRecord", TabStatus], Any]] = None,
    ):
        super().__init__()
        self.label = label
        self.is_loading = is_loading
        self.label_color = label_color
        self.label_size = label_size
        self.closable = closable
        self.payload = payload
        self.content = content
        self.buttons = buttons
        self.leading = leading

        self._draggable = draggable
        self._keep_alive = keep_alive
        self._key = TabKey(persistent=keep_alive)
        self._unique_key = TabKey()

        self._owner: Optional["TabCollectionController"] = None
        self._position = DETACHED

    @property
    def display_label(self) -> str:
        return LOADING_LABEL if self.is_loading else self.label

    @property
    def draggable(self) -> bool:
        return self._draggable

    @property
    def keep_alive(self) -> bool:
        return self._keep_alive

    @property
    def key(self) -> TabKey:
        """Identifies the content of the tab in the rendered tree."""
        return self._key

    @property
    def unique_key(self) -> TabKey:
        return self._unique_key

    @property
    def position(self) -> int:
        """Current index in the owning controller, -1 when detached."""
        return self._position

    @property
    def owner(self) -> Optional["TabCollectionController"]:
        return self._owner

    @property
    def is_attached(self) -> bool:
        return self._owner is not None

    def build_leading(self, status: TabStatus) -> Any:
        if self.leading is None:
            return None
        return self.leading(self, status)

    # Controller-only mutators

    def _attach(self, owner: "TabCollectionController", position: int) -> None:
        self._owner = owner
        self._position = position

    def _detach(self) -> None:
        self._owner = None
        self._position = DETACHED

    def _set_position(self, position: int) -> None:
        self._position = position

    def __repr__(self):
        return f"<TabRecord {self.label!r} position={self._position}>"
