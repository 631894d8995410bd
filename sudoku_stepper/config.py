"""Engine configuration with optional JSON overrides."""

from __future__ import annotations
from dataclasses import dataclass, asdict, fields
from typing import Any, Dict, Optional
import json
import logging
import os

logger = logging.getLogger(__name__)


@dataclass
class EngineConfig:
    """Tunable settings for the stepping engine and the session around it."""
    steps_per_frame: float = 1.0
    min_rate: float = 0.005
    max_rate: float = 100000.0
    lookahead: bool = True
    unbounded: bool = False
    load_attempts: int = 3
    seed: Optional[int] = None

    def __post_init__(self):
        if self.min_rate <= 0:
            raise ValueError(f"min_rate must be positive, got {self.min_rate}")
        if self.max_rate < self.min_rate:
            raise ValueError(
                f"max_rate ({self.max_rate}) must not be below min_rate ({self.min_rate})"
            )
        if self.load_attempts < 1:
            raise ValueError(f"load_attempts must be at least 1, got {self.load_attempts}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> EngineConfig:
        """Build a config from a mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            logger.warning("Ignoring unknown config keys: %s", ", ".join(sorted(unknown)))
        return cls(**{k: v for k, v in data.items() if k in known})

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def load_config(path: Optional[str] = None) -> EngineConfig:
    """
    Load an EngineConfig from a JSON file.

    Args:
        path: JSON file path. If None or missing, defaults are returned.
    """
    if path is None or not os.path.exists(path):
        return EngineConfig()
    with open(path, "r") as f:
        data = json.load(f)
    logger.info("Loaded engine config from %s", path)
    return EngineConfig.from_dict(data)
