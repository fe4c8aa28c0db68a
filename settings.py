"""
settings.py — Application Settings
===================================
Immutable configuration for the web host and the default screen contents.

    cfg = load_config()                     # ALGOPLAY_CONFIG or defaults
    cfg = load_config("algoplay.json")

Missing or corrupt files fall back to defaults; out-of-range numbers are
clamped rather than rejected.
"""

import json
import logging
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

logger = logging.getLogger(__name__)

CONFIG_ENV = "ALGOPLAY_CONFIG"


@dataclass(frozen=True)
class AppConfig:
    default_speed:     int              = 50
    sort_array_size:   int              = 15
    search_array_size: int              = 15
    graph_vertices:    int              = 6
    edge_probability:  float            = 0.4
    grid_rows:         int              = 15
    grid_cols:         int              = 25
    grid_start:        Tuple[int, int]  = (5, 5)
    grid_end:          Tuple[int, int]  = (5, 15)
    host:              str              = "127.0.0.1"
    port:              int              = 5000
    debug:             bool             = False
    log_dir:           Optional[str]    = None

    def to_dict(self) -> dict:
        data = asdict(self)
        data["grid_start"] = list(self.grid_start)
        data["grid_end"] = list(self.grid_end)
        return data


def load_config(path: Union[str, Path, None] = None) -> AppConfig:
    """Load configuration from `path` (or $ALGOPLAY_CONFIG), falling back to defaults."""
    if path is None:
        path = os.environ.get(CONFIG_ENV)
    if not path:
        return AppConfig()

    config_path = Path(path)
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        logger.exception("Failed to load config from %s", config_path)
        return AppConfig()
    if not isinstance(raw, dict):
        logger.warning("Ignoring config %s: top level is not an object", config_path)
        return AppConfig()
    return config_from_mapping(raw)


def config_from_mapping(raw: Dict[str, Any]) -> AppConfig:
    """Normalize raw JSON data into an AppConfig."""
    defaults = AppConfig()
    rows = _get_int(raw, "grid_rows", defaults.grid_rows, min_value=2, max_value=60)
    cols = _get_int(raw, "grid_cols", defaults.grid_cols, min_value=2, max_value=80)
    start = _get_cell(raw, "grid_start", defaults.grid_start, rows, cols)
    end = _get_cell(raw, "grid_end", defaults.grid_end, rows, cols)
    if start == end:
        start, end = (0, 0), (rows - 1, cols - 1)

    log_dir = raw.get("log_dir")
    if log_dir is not None and not isinstance(log_dir, str):
        log_dir = None

    return AppConfig(
        default_speed=_get_int(raw, "default_speed", defaults.default_speed, min_value=1, max_value=100),
        sort_array_size=_get_int(raw, "sort_array_size", defaults.sort_array_size, min_value=1, max_value=100),
        search_array_size=_get_int(raw, "search_array_size", defaults.search_array_size, min_value=1, max_value=100),
        graph_vertices=_get_int(raw, "graph_vertices", defaults.graph_vertices, min_value=1, max_value=26),
        edge_probability=_get_float(raw, "edge_probability", defaults.edge_probability, 0.0, 1.0),
        grid_rows=rows,
        grid_cols=cols,
        grid_start=start,
        grid_end=end,
        host=_get_str(raw, "host", defaults.host),
        port=_get_int(raw, "port", defaults.port, min_value=1, max_value=65535),
        debug=_get_bool(raw, "debug", defaults.debug),
        log_dir=log_dir,
    )


# ---------------------------------------------------------------------------
# Field readers
# ---------------------------------------------------------------------------
def _get_bool(raw: Dict[str, Any], key: str, default: bool) -> bool:
    value = raw.get(key, default)
    return value if isinstance(value, bool) else default


def _get_int(
    raw: Dict[str, Any],
    key: str,
    default: int,
    *,
    min_value: Optional[int] = None,
    max_value: Optional[int] = None,
) -> int:
    """Fetch an integer value with optional clamping."""
    value = raw.get(key, default)
    if not isinstance(value, int) or isinstance(value, bool):
        value = default
    if min_value is not None:
        value = max(min_value, value)
    if max_value is not None:
        value = min(max_value, value)
    return value


def _get_float(raw: Dict[str, Any], key: str, default: float, low: float, high: float) -> float:
    value = raw.get(key, default)
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        value = default
    return max(low, min(high, float(value)))


def _get_str(raw: Dict[str, Any], key: str, default: str) -> str:
    value = raw.get(key, default)
    if not isinstance(value, str) or not value:
        return default
    return value


def _get_cell(
    raw: Dict[str, Any], key: str, default: Tuple[int, int], rows: int, cols: int
) -> Tuple[int, int]:
    value = raw.get(key, default)
    if (
        not isinstance(value, (list, tuple))
        or len(value) != 2
        or not all(isinstance(v, int) and not isinstance(v, bool) for v in value)
    ):
        value = default
    row, col = value
    return (max(0, min(rows - 1, row)), max(0, min(cols - 1, col)))
