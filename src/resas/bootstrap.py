from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, Optional

from .api.client import RESAS_ENDPOINT, ResasClient
from .config_loader import load_config
from .downloader import INTERVAL_MILLIS
from .resilience.retry_policy import RetryPolicy


def build_app(api_key: str, config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Composition root: load YAML (if any), build the retry policy and the client.
    Returns: dict with cfg, client, interval_millis.
    """
    cfg = load_config(config_path)

    api = cfg["api"]
    policy = RetryPolicy.from_config(cfg["retry"])
    client = ResasClient(
        api_key,
        policy,
        base_url=api.get("base_url") or RESAS_ENDPOINT,
        timeout=api.get("timeout"),
    )

    interval = cfg["downloader"].get("interval_millis")
    return {
        "cfg": cfg,
        "client": client,
        "interval_millis": INTERVAL_MILLIS if interval is None else interval,
    }
