import pytest
from unittest.mock import MagicMock
from PySide6.QtCore import QCoreApplication, Qt, QModelIndex
from PySide6.QtGui import QColor

from tabview import TabCollectionController, TabRecord
from tabview.qt import TabListModel


# Ensure a Qt application exists for signal delivery
@pytest.fixture(scope="module", autouse=True)
def qapp():
    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    yield app


@pytest.fixture
def controller(abcd):
    return TabCollectionController(abcd)


@pytest.fixture
def model(controller):
    model = TabListModel(controller)
    yield model
    model.detach()


def test_model_rows(model, controller):
    assert model.rowCount() == 4
    assert model.controller is controller


def test_display_roles(model, abcd):
    abcd[1].is_loading = True
    abcd[2].label_color = "#00ff00"

    assert model.data(model.index(0, 0), Qt.DisplayRole) == "A"
    assert model.data(model.index(1, 0), Qt.DisplayRole) == "Loading..."
    assert model.data(model.index(1, 0), Qt.EditRole) == "B"
    assert model.data(model.index(2, 0), Qt.ForegroundRole) == QColor("#00ff00")
    assert model.data(model.index(0, 0), Qt.ForegroundRole) is None


def test_custom_roles(model, controller, abcd):
    abcd[3].closable = False
    abcd[3].payload = {"path": "/tmp/d"}
    controller.select(3)
    idx = model.index(3, 0)

    assert model.data(idx, TabListModel.KeyRole) == abcd[3].key.value
    assert model.data(idx, TabListModel.ClosableRole) is False
    assert model.data(idx, TabListModel.LoadingRole) is False
    assert model.data(idx, TabListModel.SelectedRole) is True
    assert model.data(model.index(0, 0), TabListModel.SelectedRole) is False
    assert model.data(idx, TabListModel.PositionRole) == 3
    assert model.data(idx, TabListModel.PayloadRole) == {"path": "/tmp/d"}


def test_invalid_index_returns_none(model):
    assert model.data(QModelIndex(), Qt.DisplayRole) is None


def test_role_names(model):
    names = model.roleNames()
    assert names[TabListModel.KeyRole] == b"tabKey"
    assert names[TabListModel.SelectedRole] == b"selected"


def test_set_data_renames_tab(model, abcd):
    assert model.setData(model.index(0, 0), "Home", Qt.EditRole) is True

    assert abcd[0].label == "Home"
    assert model.data(model.index(0, 0), Qt.DisplayRole) == "Home"


def test_set_data_rejects_other_roles(model, abcd):
    assert model.setData(model.index(0, 0), "x", Qt.DisplayRole) is False
    assert abcd[0].label == "A"


def test_drag_flags(abcd):
    tabs = abcd[:2] + [TabRecord("pinned", draggable=False)]
    controller = TabCollectionController(tabs)
    model = TabListModel(controller)

    assert model.flags(model.index(0, 0)) & Qt.ItemIsDragEnabled
    assert not model.flags(model.index(2, 0)) & Qt.ItemIsDragEnabled

    controller.reorder_enabled = False
    assert not model.flags(model.index(0, 0)) & Qt.ItemIsDragEnabled


def test_move_rows_reorders(model, controller, labels_of):
    on_reorder = MagicMock()
    controller.on_reorder = on_reorder

    assert model.moveRows(QModelIndex(), 0, 1, QModelIndex(), 3) is True

    assert labels_of(controller) == ["B", "C", "A", "D"]
    on_reorder.assert_called_once_with(0, 3)
    assert model.data(model.index(2, 0), Qt.DisplayRole) == "A"


def test_move_rows_onto_next_slot_is_noop(model, controller, abcd):
    assert model.moveRows(QModelIndex(), 1, 1, QModelIndex(), 2) is False
    assert controller.tabs == tuple(abcd)


def test_move_rows_multiple_unsupported(model, controller, abcd):
    assert model.moveRows(QModelIndex(), 0, 2, QModelIndex(), 3) is False
    assert controller.tabs == tuple(abcd)


def test_remove_rows(model, controller, labels_of):
    assert model.removeRows(1, 2) is True

    assert labels_of(controller) == ["A", "D"]
    assert model.rowCount() == 2


def test_remove_rows_out_of_range(model, controller):
    assert model.removeRows(3, 2) is False
    assert len(controller) == 4


def test_close_tab_respects_closable(model, controller, abcd):
    abcd[0].closable = False

    assert model.close_tab(0) is False
    assert model.close_tab(1) is True

    assert controller.tabs == (abcd[0], abcd[2], abcd[3])


def test_signals(model, controller):
    counts, selections = [], []
    model.countChanged.connect(lambda: counts.append(model.rowCount()))
    model.selectionChanged.connect(selections.append)

    model.select_row(2)
    controller.append(TabRecord("E"))
    model.select_row(-1)

    assert counts == [5]
    assert selections == [2, -1]


def test_detach(controller, abcd):
    model = TabListModel(controller)
    counts = []
    model.countChanged.connect(lambda: counts.append(1))

    model.detach()
    controller.remove_at(0)

    assert counts == []


def test_foreground_accepts_qcolor(model, abcd):
    abcd[1].label_color = QColor(Qt.red)

    color = model.data(model.index(1, 0), Qt.ForegroundRole)

    assert isinstance(color, QColor)
    assert color == QColor(Qt.red)
