from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    "data_root": "~/.local/share/typepractice",
    "window": {
        "title": "Typing Practice",
        "width": 1024,
        "height": 640,
        "fullscreen": False,
        "fps": 60,
    },
    "font": {
        "name": "dejavusansmono",
        "size": 24,
        "line_gap": 6,
        "tab_width": 4,
    },
    "margin": 40,
    "background": [24, 24, 28],
    "practice": {
        "strip_trailing_newline": True,
        "join_lines": False,
    },
    "styles": {
        "typed": {"fg": [128, 128, 128]},
        "mistyped": {"fg": [220, 20, 60], "bg": [245, 245, 245], "bold": True},
        "current": {"fg": [0, 0, 0], "bg": [245, 245, 245], "bold": True},
        "untyped": {"fg": [230, 230, 230]},
        "plain": {"fg": [0, 191, 255]},
    },
    "logging": {
        "level": "INFO",
        "file": True,
    },
}


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if (
            key in merged
            and isinstance(merged[key], dict)
            and isinstance(value, dict)
        ):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _candidate_config_paths(explicit: Optional[Path] = None) -> list[Path]:
    paths = []
    if explicit is not None:
        paths.append(Path(explicit))
    env_path = os.environ.get("TYPEPRACTICE_CONFIG")
    if env_path:
        paths.append(Path(env_path))
    paths.extend([
        Path("config.yaml"),
        Path("~/.config/typepractice/config.yaml").expanduser(),
    ])
    return paths


def load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    config = dict(DEFAULT_CONFIG)
    for candidate in _candidate_config_paths(path):
        if candidate.exists():
            try:
                with candidate.open("r", encoding="utf-8") as handle:
                    data = yaml.safe_load(handle) or {}
            except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
                logger.warning("Ignoring config file %s: %s", candidate, exc)
                break
            if isinstance(data, dict):
                config = _deep_merge(config, data)
            break
    return config
