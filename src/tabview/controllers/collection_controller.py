"""
TabCollectionController - ordered tab collection with a selection cursor.

Owns the TabRecord instances handed to it, keeps their cached positions in
sync with their slots and re-publishes their change notifications together
with its own structural changes on a single `changed` signal.
"""
from enum import Enum
from typing import Callable, Iterable, Iterator, List, Optional, Tuple, Union
from loguru import logger

from tabview.core.config import ControllerOptions, OnCapacityExceeded, OnReorder
from tabview.core.errors import InvalidStateError, TabIndexError
from tabview.core.events import Connection, Signal
from tabview.models.tab_record import TabRecord


class KeepSide(Enum):
    """Which slice `split_at` keeps. Both slices contain the pivot."""
    HEAD = "head"
    TAIL = "tail"


class TabCollectionController:
    """
    The tabbed view controller.

    Stores tabs and the selected tab index. Every structural change and every
    attribute change of an owned tab is announced on `changed`.

    Remember to call `dispose()` when the controller is no longer needed;
    a disposed controller rejects every further mutation.

    Usage:
        controller = TabCollectionController([TabRecord("a"), TabRecord("b")], capacity=5)
        controller.subscribe(view.refresh)
        controller.append(TabRecord("c"))
        controller.reorder(0, 3)        # "a" moves after "c"
        controller.split_at(1)          # keep tabs from index 1 onwards
    """

    def __init__(
        self,
        tabs: Iterable[TabRecord] = (),
        *,
        reorder_enabled: bool = True,
        capacity: Optional[int] = None,
        on_reorder: Optional[OnReorder] = None,
        on_capacity_exceeded: Optional[OnCapacityExceeded] = None,
        payload=None,
        options: Optional[ControllerOptions] = None,
    ):
        """
        Initialize the controller.

        Args:
            tabs: Initial tabs, in order. Index 0 is selected when non-empty.
            reorder_enabled: Whether `reorder` has any effect.
            capacity: Maximum number of tabs, or None for unbounded.
            on_reorder: Called with (old_index, new_index) after a move.
            on_capacity_exceeded: Called with the capacity when tabs are rejected.
            payload: Arbitrary caller value.
            options: Pre-built ControllerOptions; takes precedence over the
                individual keyword arguments.
        """
        if options is None:
            options = ControllerOptions(
                reorder_enabled=reorder_enabled,
                capacity=capacity,
                on_reorder=on_reorder,
                on_capacity_exceeded=on_capacity_exceeded,
                payload=payload,
            )

        self._capacity = options.capacity
        self._reorder_enabled = options.reorder_enabled
        self.on_reorder = options.on_reorder
        self.on_capacity_exceeded = options.on_capacity_exceeded
        self.payload = options.payload

        self.changed = Signal("TabCollectionController.changed")
        self._tabs: List[TabRecord] = []
        self._selected_index: Optional[int] = None
        self._disposed = False

        self._append_many(list(tabs))
        logger.debug(f"TabCollectionController created with {len(self._tabs)} tabs (capacity={self._capacity})")

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def subscribe(self, callback: Callable[[], None]) -> Connection:
        """Register a zero-argument callback fired after every change."""
        return self.changed.connect(callback)

    def unsubscribe(self, handle: Union[Callable[[], None], Connection]) -> None:
        self.changed.disconnect(handle)

    def _notify(self) -> None:
        self.changed.emit()

    def _on_tab_changed(self) -> None:
        self.changed.emit()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def tabs(self) -> Tuple[TabRecord, ...]:
        """Read-only snapshot of the tabs, in order."""
        return tuple(self._tabs)

    @property
    def length(self) -> int:
        return len(self._tabs)

    def __len__(self) -> int:
        return len(self._tabs)

    def __iter__(self) -> Iterator[TabRecord]:
        return iter(tuple(self._tabs))

    def __contains__(self, tab: object) -> bool:
        return isinstance(tab, TabRecord) and tab.owner is self

    @property
    def capacity(self) -> Optional[int]:
        return self._capacity

    @property
    def is_full(self) -> bool:
        return self._capacity is not None and len(self._tabs) >= self._capacity

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    @property
    def reorder_enabled(self) -> bool:
        return self._reorder_enabled

    @reorder_enabled.setter
    def reorder_enabled(self, value: bool):
        if self._reorder_enabled != value:
            self._reorder_enabled = value
            self._notify()

    @property
    def selected_index(self) -> Optional[int]:
        return self._selected_index

    @selected_index.setter
    def selected_index(self, index: Optional[int]):
        self.select(index)

    @property
    def selected_tab(self) -> Optional[TabRecord]:
        if self._selected_index is None:
            return None
        return self._tabs[self._selected_index]

    def get_at(self, index: int) -> TabRecord:
        """Gets a tab given an index."""
        self._ensure_alive("get_at")
        self._validate_index(index)
        return self._tabs[index]

    def index_of(self, tab: TabRecord) -> int:
        """Index of an owned tab. Raises ValueError if the tab is not owned here."""
        if tab.owner is not self:
            raise ValueError(f"{tab!r} is not in this controller")
        return tab.position

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def select(self, index: Optional[int]) -> None:
        """
        Changes the selected index and notifies.

        ``None`` clears the selection. Observers are notified even when the
        index does not change.
        """
        self._ensure_alive("select")
        if index is not None:
            self._validate_index(index)
        self._selected_index = index
        self._notify()

    # ------------------------------------------------------------------
    # Adding
    # ------------------------------------------------------------------

    def insert_at(self, index: int, tab: TabRecord) -> bool:
        """
        Inserts a tab at ``index``.

        Returns:
            True if the tab was added, False if the capacity is reached.

        Raises:
            TabIndexError: If ``index`` is not in ``[0, length]``.
            InvalidStateError: If the tab is already owned.
        """
        self._ensure_alive("insert_at")
        if self.is_full:
            self._capacity_exceeded()
            return False
        if index < 0 or index > len(self._tabs):
            raise TabIndexError(index, len(self._tabs), "index")
        self._check_incoming([tab])

        self._tabs.insert(index, tab)
        self._attach(tab, index)
        self._update_positions()
        self._after_grow()
        logger.debug(f"Inserted {tab!r} at {index}")
        return True

    def append(self, tab: TabRecord) -> bool:
        """
        Adds a tab at the end.

        Returns:
            True if the tab was added, False if the capacity is reached.
        """
        self._ensure_alive("append")
        if self.is_full:
            self._capacity_exceeded()
            return False
        self._check_incoming([tab])

        self._tabs.append(tab)
        self._attach(tab, len(self._tabs) - 1)
        self._after_grow()
        logger.debug(f"Appended {tab!r}")
        return True

    def append_many(self, tabs: Iterable[TabRecord]) -> bool:
        """
        Adds multiple tabs at the end.

        Tabs beyond the remaining capacity are dropped and the capacity
        callback fires once.

        Returns:
            True if one or more tabs were added, False otherwise.
        """
        self._ensure_alive("append_many")
        added = self._append_many(list(tabs))
        if added:
            self._notify()
        return added

    def replace_all(self, tabs: Iterable[TabRecord]) -> None:
        """
        Replaces all tabs.

        Every incoming tab is (re-)owned, even one detached earlier in the
        same operation. Input beyond the capacity is dropped after the
        capacity callback fires.
        """
        self._ensure_alive("replace_all")
        self._replace(list(tabs))
        self._notify()

    # ------------------------------------------------------------------
    # Removing
    # ------------------------------------------------------------------

    def remove_at(self, index: int) -> TabRecord:
        """
        Removes a tab and returns it detached.

        If the removed tab was selected, or the selection falls out of
        range, the selection resets to 0. Otherwise the selected index is
        left as it is.
        """
        self._ensure_alive("remove_at")
        self._validate_index(index)

        tab = self._tabs.pop(index)
        self._detach(tab)
        self._update_positions()
        if not self._tabs:
            self._selected_index = None
        elif self._selected_index is not None and (
            self._selected_index == index or self._selected_index >= len(self._tabs)
        ):
            self._selected_index = 0
        logger.debug(f"Removed {tab!r} from {index}")
        self._notify()
        return tab

    def remove_all(self) -> None:
        """Removes all tabs."""
        self._ensure_alive("remove_all")
        self._clear()
        logger.debug("Removed all tabs")
        self._notify()

    def split_at(self, pivot_index: int, keep: KeepSide = KeepSide.TAIL) -> None:
        """
        Discards one side of the collection relative to a pivot.

        The head slice is ``[0, pivot]`` and the tail slice is
        ``[pivot, length)``; both include the pivot tab. The discarded slice
        is detached, then the kept slice replaces the collection, which
        re-owns the pivot.
        """
        self._ensure_alive("split_at")
        self._validate_index(pivot_index, "pivot_index")

        head = self._tabs[:pivot_index + 1]
        tail = self._tabs[pivot_index:]
        if keep is KeepSide.TAIL:
            discarded, kept = head, tail
        else:
            discarded, kept = tail, head

        for tab in discarded:
            self._detach(tab)
        self._replace(kept)

        self._selected_index = 0 if self._tabs else None
        logger.debug(f"Split at {pivot_index}, kept {keep.value} ({len(self._tabs)} tabs)")
        self._notify()

    # ------------------------------------------------------------------
    # Reordering
    # ------------------------------------------------------------------

    def reorder(self, old_index: int, new_index: int) -> None:
        """
        Moves the tab at ``old_index`` so it lands before ``new_index``.

        A ``new_index`` at or past the end appends. Moving a tab onto its own
        slot or onto the slot right after it does nothing. The selection
        follows the selected tab.

        Raises:
            InvalidStateError: If there are no tabs.
            TabIndexError: If ``old_index`` is out of range.
        """
        self._ensure_alive("reorder")
        if not self._reorder_enabled:
            return
        if not self._tabs:
            raise InvalidStateError("There are no tabs.", "reorder")
        self._validate_index(old_index, "old_index")

        requested = (old_index, new_index)
        if new_index < 0:
            new_index = 0
        append = new_index >= len(self._tabs)

        if old_index == new_index or old_index == new_index - 1:
            return

        selected_tab = self.selected_tab

        tab = self._tabs.pop(old_index)
        if append:
            self._tabs.append(tab)
        elif old_index > new_index:
            self._tabs.insert(new_index, tab)
        else:
            self._tabs.insert(new_index - 1, tab)
        self._update_positions()
        if selected_tab is not None:
            self._selected_index = selected_tab.position

        logger.debug(f"Reordered {tab!r}: {old_index} -> {tab.position}")
        self._notify()
        if self.on_reorder is not None:
            self.on_reorder(*requested)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def dispose(self) -> None:
        """Detach every tab and drop all observers. Terminal."""
        if self._disposed:
            return
        self._clear()
        self.changed.disconnect_all()
        self._disposed = True
        logger.debug("TabCollectionController disposed")

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _ensure_alive(self, operation: str) -> None:
        if self._disposed:
            raise InvalidStateError(f"Cannot {operation}: controller has been disposed", operation)

    def _validate_index(self, index: int, name: str = "index") -> None:
        if index < 0 or index >= len(self._tabs):
            raise TabIndexError(index, len(self._tabs), name)

    def _check_incoming(self, tabs: List[TabRecord], releasing: bool = False) -> None:
        """
        Reject tabs owned elsewhere, already present, or repeated.

        With ``releasing`` set, tabs owned by this controller are accepted
        because the caller is about to detach them.
        """
        seen = set()
        for tab in tabs:
            if tab in seen:
                raise InvalidStateError(f"{tab!r} appears more than once")
            seen.add(tab)
            if tab.owner is not None and not (releasing and tab.owner is self):
                raise InvalidStateError(f"{tab!r} is already owned by a controller")

    def _attach(self, tab: TabRecord, position: int) -> None:
        tab.changed.connect(self._on_tab_changed)
        tab._attach(self, position)

    def _detach(self, tab: TabRecord) -> None:
        tab.changed.disconnect(self._on_tab_changed)
        tab._detach()

    def _update_positions(self) -> None:
        for i, tab in enumerate(self._tabs):
            tab._set_position(i)

    def _after_grow(self) -> None:
        """Updates the selection after a single tab was added, then notifies."""
        if len(self._tabs) == 1:
            self._selected_index = 0
        self._notify()

    def _capacity_exceeded(self) -> None:
        logger.info(f"Tab capacity of {self._capacity} exceeded")
        if self.on_capacity_exceeded is not None and self._capacity is not None:
            self.on_capacity_exceeded(self._capacity)

    def _append_many(self, tabs: List[TabRecord]) -> bool:
        """Appends without notifying. Returns True if anything was added."""
        if self._capacity is not None:
            available = self._capacity - len(self._tabs)
            if available <= 0:
                self._capacity_exceeded()
                return False
            batch = tabs[:available]
        else:
            batch = tabs
        self._check_incoming(batch)

        if len(batch) < len(tabs):
            self._capacity_exceeded()
        if not batch:
            return False

        was_empty = not self._tabs
        for tab in batch:
            self._tabs.append(tab)
            self._attach(tab, len(self._tabs) - 1)
        if was_empty:
            self._selected_index = 0
        logger.debug(f"Appended {len(batch)} tabs")
        return True

    def _replace(self, tabs: List[TabRecord]) -> None:
        """Replaces the collection without notifying."""
        if self._capacity is not None and len(tabs) > self._capacity:
            tabs = tabs[:self._capacity]
            self._check_incoming(tabs, releasing=True)
            self._capacity_exceeded()
        else:
            self._check_incoming(tabs, releasing=True)

        self._clear()
        self._append_many(tabs)

    def _clear(self) -> None:
        for tab in self._tabs:
            self._detach(tab)
        self._tabs.clear()
        self._selected_index = None
