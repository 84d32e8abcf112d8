# app/config.py
from __future__ import annotations
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict
import json
import logging

from app.errors import ConfigError
from app.validation import validate_metric, validate_tab_width

log = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = Path("codetype.json")


@dataclass(frozen=True)
class SessionConfig:
    tab_width: int = 4
    line_height: float = 1.5   # in lines (em)
    padding_x: float = 1.0     # in character cells
    padding_y: float = 1.0     # in lines

    def __post_init__(self):
        validate_tab_width(self.tab_width)
        for name in ("line_height", "padding_x", "padding_y"):
            validate_metric(name, getattr(self, name))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def config_from_dict(d: Dict[str, Any]) -> SessionConfig:
    known = set(SessionConfig.__dataclass_fields__)
    unknown = set(d) - known
    if unknown:
        raise ConfigError(f"Unknown config keys: {', '.join(sorted(unknown))}")
    return SessionConfig(**d)


def load_config(path: Path = DEFAULT_CONFIG_FILE) -> SessionConfig:
    """Load session settings from a JSON file.

    A missing file gives the defaults. A file that cannot be read or parsed is
    logged and also falls back to the defaults; values that parse but are
    invalid raise ConfigError.
    """
    path = Path(path)
    if not path.exists():
        return SessionConfig()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        log.warning("Failed to read config %s: %s", path, e)
        return SessionConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a JSON object")
    return config_from_dict(data)
