from __future__ import annotations
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Iterable, List, Mapping
import json
import logging
import os

import yaml

logger = logging.getLogger(__name__)

ENV_PREFIX = "ZEUS_RULES__"
# Config files for hosted games, separated by os.pathsep.
CONFIG_PATHS_ENV = "ZEUS_RULES_CONFIG"

DEFAULT_RULES: Dict[str, Any] = {
    "rules": {
        "base_range": 3,
        "max_god_level": 3,
        "dice_per_turn": 3,
        "item_capacity": 2,
        "starting_favor": 3,
        "player_count": 2,
        "cards_per_color": 5,
        "map_radius": 6,
        "max_recolor": 5,
    },
}


@dataclass
class RulesConfig:
    """Tunable rule constants shared by setup, generators and the engine."""

    base_range: int = 3
    max_god_level: int = 3
    dice_per_turn: int = 3
    item_capacity: int = 2
    starting_favor: int = 3
    player_count: int = 2
    cards_per_color: int = 5
    map_radius: int = 6
    max_recolor: int = 5

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "RulesConfig":
        known = {f.name for f in fields(cls)}
        values = {k: int(v) for k, v in (data or {}).items() if k in known}
        unknown = sorted(set(data or {}) - known)
        if unknown:
            logger.warning("ignoring unknown rules settings: %s", ", ".join(unknown))
        return cls(**values)


def _deep_merge(a: Dict[str, Any], b: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(a)
    for k, v in (b or {}).items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def _load_one(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        text = f.read()
    if path.endswith(".json"):
        d = json.loads(text)
    else:
        # YAML is a superset of JSON, so anything else goes through it
        d = yaml.safe_load(text)
    if d is None:
        return {}
    if not isinstance(d, dict):
        raise ValueError(f"config file {path} must contain a mapping, got {type(d).__name__}")
    return d


def load_configs(paths: Iterable[str] | None) -> Dict[str, Any]:
    cfg: Dict[str, Any] = {}
    for p in (paths or []):
        cfg = _deep_merge(cfg, _load_one(p))
    return cfg


def env_overrides(prefix: str = ENV_PREFIX) -> Dict[str, Any]:
    # Nested via double underscores: ZEUS_RULES__RULES__MAX_GOD_LEVEL=4
    out: Dict[str, Any] = {}
    for k, v in os.environ.items():
        if not k.startswith(prefix):
            continue
        parts = k[len(prefix):].split("__")
        cur = out
        for i, part in enumerate(parts):
            key = part.lower()
            if i == len(parts) - 1:
                cur[key] = _coerce(v)
            else:
                cur = cur.setdefault(key, {})
    return out


def _coerce(s: str) -> Any:
    t = s.strip().lower()
    if t in ("true", "false"):
        return t == "true"
    try:
        if "." in t:
            return float(t)
        return int(t)
    except ValueError:
        return s


def load_rules(paths: Iterable[str] | None = None, *, use_env: bool = True) -> RulesConfig:
    """Defaults, then each config file in order, then environment overrides."""

    merged = _deep_merge(DEFAULT_RULES, load_configs(paths))
    if use_env:
        merged = _deep_merge(merged, env_overrides())
    return RulesConfig.from_dict(merged.get("rules"))


def config_paths_from_env(name: str = CONFIG_PATHS_ENV) -> List[str]:
    value = os.environ.get(name, "")
    return [p for p in value.split(os.pathsep) if p]


__all__ = [
    "CONFIG_PATHS_ENV",
    "DEFAULT_RULES",
    "RulesConfig",
    "load_configs",
    "env_overrides",
    "load_rules",
    "config_paths_from_env",
    "_deep_merge",
]
