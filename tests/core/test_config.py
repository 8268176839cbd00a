import json
import pytest
from unittest.mock import MagicMock
from pydantic import ValidationError

from tabview.core.config import ControllerOptions


def test_config_defaults():
    options = ControllerOptions()
    assert options.reorder_enabled is True
    assert options.capacity is None
    assert options.on_reorder is None
    assert options.on_capacity_exceeded is None
    assert options.payload is None


@pytest.mark.parametrize("capacity", [0, -3])
def test_capacity_must_be_positive(capacity):
    with pytest.raises(ValidationError):
        ControllerOptions(capacity=capacity)


def test_callbacks_and_payload_kept_as_is():
    callback = MagicMock()
    payload = object()
    options = ControllerOptions(on_reorder=callback, payload=payload)

    assert options.on_reorder is callback
    assert options.payload is payload


def test_callback_must_be_callable():
    with pytest.raises(ValidationError):
        ControllerOptions(on_capacity_exceeded="not callable")


def test_from_json_file(tmp_path):
    path = tmp_path / "tabs.json"
    path.write_text(json.dumps({"reorder_enabled": False, "capacity": 4}), encoding="utf-8")

    options = ControllerOptions.from_file(str(path))

    assert options.reorder_enabled is False
    assert options.capacity == 4


def test_from_toml_section(tmp_path):
    path = tmp_path / "app.toml"
    path.write_text("[tabs]\ncapacity = 7\nreorder_enabled = true\n", encoding="utf-8")

    options = ControllerOptions.from_file(str(path))

    assert options.capacity == 7
    assert options.reorder_enabled is True


def test_from_missing_file_uses_defaults(tmp_path):
    options = ControllerOptions.from_file(str(tmp_path / "missing.json"))
    assert options == ControllerOptions()


def test_from_file_overrides(tmp_path):
    path = tmp_path / "tabs.json"
    path.write_text(json.dumps({"capacity": 2}), encoding="utf-8")
    callback = MagicMock()

    options = ControllerOptions.from_file(str(path), on_capacity_exceeded=callback, capacity=3)

    assert options.capacity == 3
    assert options.on_capacity_exceeded is callback


def test_from_file_invalid_value(tmp_path):
    path = tmp_path / "tabs.json"
    path.write_text(json.dumps({"capacity": 0}), encoding="utf-8")

    with pytest.raises(ValidationError):
        ControllerOptions.from_file(str(path))
