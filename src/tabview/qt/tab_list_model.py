from PySide6.QtCore import QAbstractListModel, Qt, QModelIndex, Signal, Slot
from PySide6.QtGui import QColor
from typing import Optional
from loguru import logger

from tabview.controllers.collection_controller import TabCollectionController
from tabview.models.tab_record import TabRecord


class TabListModel(QAbstractListModel):
    """
    Qt item model over a TabCollectionController.

    Views read tab state through the roles below and drive the controller
    through the standard editing hooks:
    - drag-move (moveRows) -> controller.reorder
    - removeRows / close_tab -> controller.remove_at
    - setData(EditRole) -> tab.label

    The model resets whenever the controller notifies.
    """

    # Roles
    KeyRole = Qt.UserRole + 1
    ClosableRole = Qt.UserRole + 2
    LoadingRole = Qt.UserRole + 3
    SelectedRole = Qt.UserRole + 4
    PositionRole = Qt.UserRole + 5
    PayloadRole = Qt.UserRole + 6

    countChanged = Signal()
    selectionChanged = Signal(int)

    def __init__(self, controller: TabCollectionController, parent=None):
        super().__init__(parent)
        self._controller = controller
        self._last_count = len(controller)
        self._last_selected = self._selected_row()
        self._connection = controller.subscribe(self._on_controller_changed)

    @property
    def controller(self) -> TabCollectionController:
        return self._controller

    def detach(self):
        """Stop following the controller."""
        self._controller.unsubscribe(self._connection)

    def _selected_row(self) -> int:
        selected = self._controller.selected_index
        return -1 if selected is None else selected

    def _on_controller_changed(self):
        self.beginResetModel()
        self.endResetModel()

        count = len(self._controller)
        if count != self._last_count:
            self._last_count = count
            self.countChanged.emit()

        selected = self._selected_row()
        if selected != self._last_selected:
            self._last_selected = selected
            self.selectionChanged.emit(selected)

    def tab_at(self, row: int) -> Optional[TabRecord]:
        if 0 <= row < len(self._controller):
            return self._controller.tabs[row]
        return None

    def rowCount(self, parent=QModelIndex()):
        if parent.isValid():
            return 0
        return len(self._controller)

    def data(self, index, role=Qt.DisplayRole):
        if not index.isValid():
            return None

        tab = self.tab_at(index.row())
        if tab is None:
            return None

        if role == Qt.DisplayRole:
            return tab.display_label
        if role == Qt.EditRole or role == Qt.ToolTipRole:
            return tab.label
        if role == Qt.ForegroundRole:
            # label_color may be a color name, "#rrggbb" or a QColor
            if tab.label_color is None:
                return None
            return QColor(tab.label_color)

        if role == self.KeyRole:
            return tab.key.value
        elif role == self.ClosableRole:
            return tab.closable
        elif role == self.LoadingRole:
            return tab.is_loading
        elif role == self.SelectedRole:
            return index.row() == self._controller.selected_index
        elif role == self.PositionRole:
            return tab.position
        elif role == self.PayloadRole:
            return tab.payload

        return None

    def setData(self, index, value, role=Qt.EditRole):
        if not index.isValid() or role != Qt.EditRole:
            return False
        tab = self.tab_at(index.row())
        if tab is None:
            return False
        tab.label = str(value)
        return True

    def flags(self, index):
        if not index.isValid():
            if self._controller.reorder_enabled:
                return Qt.ItemIsDropEnabled
            return Qt.NoItemFlags

        flags = Qt.ItemIsEnabled | Qt.ItemIsSelectable | Qt.ItemIsEditable
        tab = self.tab_at(index.row())
        if tab is not None and tab.draggable and self._controller.reorder_enabled:
            flags |= Qt.ItemIsDragEnabled
        return flags

    def supportedDropActions(self):
        return Qt.MoveAction

    def moveRows(self, sourceParent, sourceRow, count, destinationParent, destinationChild):
        # Qt's destinationChild is "insert before", matching controller.reorder.
        if count != 1 or sourceParent.isValid() or destinationParent.isValid():
            return False
        tab = self.tab_at(sourceRow)
        if tab is None or not tab.draggable or not self._controller.reorder_enabled:
            return False

        self._controller.reorder(sourceRow, destinationChild)
        return tab.position != sourceRow

    def removeRows(self, row, count, parent=QModelIndex()):
        if parent.isValid() or count <= 0 or row < 0 or row + count > len(self._controller):
            return False
        for r in reversed(range(row, row + count)):
            self._controller.remove_at(r)
        return True

    def roleNames(self):
        return {
            Qt.DisplayRole: b"display",
            self.KeyRole: b"tabKey",
            self.ClosableRole: b"closable",
            self.LoadingRole: b"loading",
            self.SelectedRole: b"selected",
            self.PositionRole: b"position",
            self.PayloadRole: b"payload",
        }

    @Slot(int, result=bool)
    def close_tab(self, row: int) -> bool:
        """Close affordance: removes the tab unless it is not closable."""
        tab = self.tab_at(row)
        if tab is None:
            return False
        if not tab.closable:
            logger.debug(f"Ignoring close request for non-closable {tab!r}")
            return False
        self._controller.remove_at(row)
        return True

    @Slot(int)
    def select_row(self, row: int):
        self._controller.select(row if row >= 0 else None)
