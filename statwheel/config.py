"""
Single source of truth for chart settings.
Loads config/statwheel.yaml and overrides with env vars so the host page can be
pointed at another stats file or variant without code changes.
"""

import logging
import os
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent

# Defaults (paths relative to ROOT)
_DEFAULTS = {
    "data_path": "statwheel/data/sample_match_stats.json",
    "variant": "doughnut",
    "search_result_limit": 20,
    "log_level": "INFO",
    "env": "dev",
}

_ENV_VARS = {
    "data_path": "STATWHEEL_DATA_PATH",
    "variant": "STATWHEEL_VARIANT",
    "search_result_limit": "STATWHEEL_SEARCH_LIMIT",
    "log_level": "STATWHEEL_LOG_LEVEL",
    "env": "ENV",
}

CONFIG_PATH = ROOT / "config" / "statwheel.yaml"

_log = logging.getLogger("statwheel")


def _load_yaml(yaml_path: Path = CONFIG_PATH) -> dict:
    out = _DEFAULTS.copy()
    if yaml_path.exists():
        try:
            import yaml
            with open(yaml_path) as f:
                data = yaml.safe_load(f) or {}
            for k, v in data.items():
                if k in out and v is not None:
                    out[k] = v
        except Exception as e:
            _log.warning(f"Ignoring unreadable config file {yaml_path}: {e}")
    return out


def _resolve_path(value: str) -> Path:
    p = Path(value)
    if not p.is_absolute():
        p = ROOT / value
    return p


def _as_int(value, default: int) -> int:
    try:
        return max(1, int(value))
    except (TypeError, ValueError):
        _log.warning(f"Invalid integer setting {value!r}, using {default}")
        return default


def get_config(yaml_path: Path = CONFIG_PATH) -> dict:
    cfg = _load_yaml(yaml_path)
    for key, env_key in _ENV_VARS.items():
        val = os.environ.get(env_key)
        if val is not None and val != "":
            cfg[key] = val
    cfg["search_result_limit"] = _as_int(cfg["search_result_limit"], _DEFAULTS["search_result_limit"])
    return cfg


_cfg = get_config()

DATA_PATH = _resolve_path(_cfg["data_path"])
DEFAULT_VARIANT = _cfg["variant"]
SEARCH_RESULT_LIMIT = _cfg["search_result_limit"]
LOG_LEVEL = _cfg["log_level"]
ENV = _cfg.get("env", "dev")
