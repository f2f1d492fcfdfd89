from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from hnefatafl.core import STANDARD_BOARD, Player

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

NAMED_LAYOUTS: Dict[str, List[str]] = {
    "standard": list(STANDARD_BOARD),
}


@dataclass
class EngineConfig:
    layout: List[str] = field(default_factory=lambda: list(STANDARD_BOARD))
    first_player: Player = Player.ATTACKER
    max_ply: int = 400
    log_level: str = "INFO"

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "EngineConfig":
        config = EngineConfig()
        layout = data.get("layout")
        if isinstance(layout, str):
            if layout not in NAMED_LAYOUTS:
                raise ValueError(f"Unknown layout name {layout!r}; expected one of {sorted(NAMED_LAYOUTS)}.")
            config.layout = list(NAMED_LAYOUTS[layout])
        elif layout is not None:
            config.layout = [str(row) for row in layout]
        if "first_player" in data:
            config.first_player = Player(str(data["first_player"]).lower())
        if "max_ply" in data:
            config.max_ply = int(data["max_ply"])
        if "log_level" in data:
            config.log_level = str(data["log_level"]).upper()
        return config


def load_config(path: Optional[Union[str, Path]]) -> EngineConfig:
    """Read an ``EngineConfig`` from YAML; a missing or empty file yields the defaults."""
    if path is None:
        return EngineConfig()
    cfg_path = Path(path)
    if not cfg_path.exists():
        return EngineConfig()
    data = yaml.safe_load(cfg_path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {cfg_path} must contain a mapping.")
    return EngineConfig.from_dict(data)


def configure_logging(level: Union[str, int] = "INFO") -> None:
    root = logging.getLogger()
    root.setLevel(level)
    has_stream = any(isinstance(h, logging.StreamHandler) for h in root.handlers)
    if not has_stream:
        handler = logging.StreamHandler()
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
