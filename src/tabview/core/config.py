from typing import Any, Callable, Dict, Optional
import json
import os
from pydantic import BaseModel, ConfigDict, PositiveInt
from loguru import logger

OnReorder = Callable[[int, int], None]
OnCapacityExceeded = Callable[[int], None]


class ControllerOptions(BaseModel):
    """
    Construction options for a TabCollectionController.

    ``capacity`` must be a positive integer when given; ``None`` means the
    collection is unbounded.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True, validate_assignment=True)

    reorder_enabled: bool = True
    capacity: Optional[PositiveInt] = None
    on_reorder: Optional[OnReorder] = None
    on_capacity_exceeded: Optional[OnCapacityExceeded] = None
    payload: Any = None

    @classmethod
    def from_file(cls, filepath: str, **overrides) -> "ControllerOptions":
        """
        Load options from a JSON or TOML file.

        Keys are read from a ``tabs`` section when present, otherwise from the
        top level. Callbacks and payload cannot be stored in a file and are
        passed through ``overrides``. A missing file yields defaults.
        """
        raw: Dict[str, Any] = {}
        if os.path.isfile(filepath):
            if filepath.endswith('.toml'):
                import tomllib
                with open(filepath, "rb") as f:
                    raw = tomllib.load(f)
            else:
                with open(filepath, "r", encoding="utf-8") as f:
                    raw = json.load(f)
            raw = raw.get("tabs", raw)
            logger.debug(f"Loaded controller options from {filepath}")
        else:
            logger.debug(f"No options file at {filepath}, using defaults")

        data = {k: raw[k] for k in ("reorder_enabled", "capacity") if k in raw}
        data.update(overrides)
        return cls.model_validate(data)
