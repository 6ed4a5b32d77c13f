# src/resas/config_loader.py

from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, Optional
import yaml


class ConfigError(ValueError):
    pass


_NUMBER = (int, float)

# dotted key -> accepted types; every key is optional
_SCHEMA = {
    "api.base_url": (str,),
    "api.timeout": _NUMBER,
    "retry.retriable_codes": (list,),
    "retry.interval": _NUMBER,
    "retry.attempts": (int,),
    "downloader.interval_millis": (int,),
}

_SECTIONS = ("api", "retry", "downloader")


def _lookup(d: Dict[str, Any], dotted: str) -> Optional[Any]:
    cur: Any = d
    for k in dotted.split("."):
        if not isinstance(cur, dict) or k not in cur:
            return None
        cur = cur[k]
    return cur


def _check(d: Dict[str, Any], dotted: str, types: tuple) -> None:
    val = _lookup(d, dotted)
    if val is None:
        return
    # bool is an int subclass; never accept it for numbers
    if isinstance(val, bool) or not isinstance(val, types):
        names = " or ".join(t.__name__ for t in types)
        raise ConfigError(f"'{dotted}' must be {names}")


def load_config(path: Optional[Path]) -> Dict[str, Any]:
    """
    Load the optional YAML config. No path -> empty sections (callers apply
    their own defaults).
    """
    if path is None:
        return {s: {} for s in _SECTIONS}
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config is not a mapping: {path}")

    for section in _SECTIONS:
        val = raw.get(section)
        if val is None:
            raw[section] = {}
        elif not isinstance(val, dict):
            raise ConfigError(f"'{section}' must be a mapping")

    for dotted, types in _SCHEMA.items():
        _check(raw, dotted, types)

    codes = raw["retry"].get("retriable_codes")
    if codes is not None and not all(isinstance(c, (int, str)) and not isinstance(c, bool) for c in codes):
        raise ConfigError("'retry.retriable_codes' must be a list of ints or strings")
    if raw["retry"].get("attempts") is not None and raw["retry"]["attempts"] < 1:
        raise ConfigError("'retry.attempts' must be >= 1")
    if raw["retry"].get("interval") is not None and raw["retry"]["interval"] < 0:
        raise ConfigError("'retry.interval' must be >= 0")
    if raw["downloader"].get("interval_millis") is not None and raw["downloader"]["interval_millis"] < 0:
        raise ConfigError("'downloader.interval_millis' must be >= 0")

    return raw
