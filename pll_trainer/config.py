import json
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from pll_trainer.cases import GROUPS
from pll_trainer.practice import LEVELS, MODES, PracticeConfig


class ConfigError(ValueError):
    pass


@dataclass
class Settings:
    """Everything a practice session reads from the config file"""
    practice: PracticeConfig = field(default_factory=PracticeConfig)
    proficiency: Dict[str, int] = field(default_factory=dict)
    preferred_algs: Dict[str, str] = field(default_factory=dict)
    seed: Optional[int] = None


def _list_of(cfg: Dict, key: str, default: List) -> List:
    value = cfg.get(key, default)
    if not isinstance(value, list):
        raise ConfigError(f"{key} must be a list, got {value!r}")
    return list(value)


def _mapping_of(cfg: Dict, key: str) -> Dict:
    value = cfg.get(key, {})
    if not isinstance(value, dict):
        raise ConfigError(f"{key} must be an object, got {value!r}")
    return dict(value)


def settings_from_dict(cfg: Dict) -> Settings:
    defaults = PracticeConfig()
    groups = _list_of(cfg, 'enabled_groups', defaults.enabled_groups)
    for group in groups:
        if group not in GROUPS:
            raise ConfigError(f"Unknown group {group!r}, expected one of {', '.join(GROUPS)}")
    mode = cfg.get('mode', defaults.mode)
    if mode not in MODES:
        raise ConfigError(f"Unknown mode {mode!r}, expected one of {', '.join(MODES)}")
    proficiency = _mapping_of(cfg, 'proficiency')
    for case_id, level in proficiency.items():
        if not isinstance(level, int) or isinstance(level, bool) or level not in LEVELS:
            raise ConfigError(f"Invalid proficiency {level!r} for {case_id}, expected 1, 2 or 3")
    return Settings(
        practice=PracticeConfig(
            enabled_groups=groups,
            excluded_case_ids=_list_of(cfg, 'excluded_case_ids', []),
            mode=mode,
        ),
        proficiency=proficiency,
        preferred_algs=_mapping_of(cfg, 'preferred_algs'),
        seed=cfg.get('seed'),
    )


def load_settings(path: Optional[str]) -> Settings:
    """Read settings from a JSON file; no path means defaults"""
    if path is None:
        return Settings()
    try:
        with open(path) as f:
            cfg = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Cannot read config {path}: {e}") from e
    if not isinstance(cfg, dict):
        raise ConfigError(f"Config {path} must contain a JSON object")
    return settings_from_dict(cfg)
