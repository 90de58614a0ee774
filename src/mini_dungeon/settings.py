from __future__ import annotations

import dataclasses
import logging
import os
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import Optional

import yaml

logger = logging.getLogger(__name__)

ENV_DIFFICULTY = "MINI_DUNGEON_DIFFICULTY"
ENV_STEP_BUDGET = "MINI_DUNGEON_STEP_BUDGET"

MIN_MAP_SIZE = 5
MIN_DIFFICULTY = 0
MAX_DIFFICULTY = 10


def clamp_difficulty(value: int) -> int:
    return max(MIN_DIFFICULTY, min(MAX_DIFFICULTY, int(value)))


@dataclass
class MapSettings:
    rows: int = 20
    cols: int = 20


@dataclass
class RuleSettings:
    max_hp: int = 10
    initial_hp: int = 10
    step_budget: int = 100
    default_difficulty: int = 3
    message_log_size: int = 10
    leaderboard_size: int = 5
    ranged_attack_range: int = 2
    ranged_hit_chance: float = 0.5


@dataclass
class SpawnSettings:
    gold: int = 10
    trap: int = 8
    melee_mutant: int = 6
    health_potion: int = 4
    bomb: int = 3
    ranged_per_difficulty: int = 2


@dataclass
class GameSettings:
    """Tunable game rules.

    Defaults: a 20x20 map, 10 HP, a 100-step budget, difficulty 3, a
    10-line message log and a top-5 leaderboard.
    """

    map: MapSettings = field(default_factory=MapSettings)
    rules: RuleSettings = field(default_factory=RuleSettings)
    spawns: SpawnSettings = field(default_factory=SpawnSettings)

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        if self.map.rows < MIN_MAP_SIZE or self.map.cols < MIN_MAP_SIZE:
            logger.warning(
                "Invalid map size %dx%d; resetting to defaults", self.map.rows, self.map.cols
            )
            self.map = MapSettings()
        if self.rules.step_budget <= 0:
            logger.warning("Invalid step budget %d; resetting to default", self.rules.step_budget)
            self.rules.step_budget = RuleSettings.step_budget
        if self.rules.max_hp <= 0 or not 0 < self.rules.initial_hp <= self.rules.max_hp:
            logger.warning(
                "Invalid hp settings initial=%d max=%d; resetting to defaults",
                self.rules.initial_hp,
                self.rules.max_hp,
            )
            self.rules.max_hp = RuleSettings.max_hp
            self.rules.initial_hp = RuleSettings.initial_hp
        if not 0.0 <= self.rules.ranged_hit_chance <= 1.0:
            logger.warning("Ranged hit chance %s out of [0,1]; clamping", self.rules.ranged_hit_chance)
            self.rules.ranged_hit_chance = max(0.0, min(1.0, self.rules.ranged_hit_chance))
        for name in ("message_log_size", "leaderboard_size"):
            if getattr(self.rules, name) <= 0:
                logger.warning("Invalid %s; resetting to default", name)
                setattr(self.rules, name, getattr(RuleSettings, name))
        self.rules.default_difficulty = clamp_difficulty(self.rules.default_difficulty)
        for spawn in dataclasses.fields(SpawnSettings):
            if getattr(self.spawns, spawn.name) < 0:
                logger.warning("Negative spawn count for %s; using 0", spawn.name)
                setattr(self.spawns, spawn.name, 0)

    @staticmethod
    def _load_yaml(path: Path) -> dict:
        with path.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}

    @classmethod
    def _deep_merge(cls, base: dict, overlay: dict) -> dict:
        merged = dict(base)
        for k, v in (overlay or {}).items():
            if isinstance(v, dict) and isinstance(base.get(k), dict):
                merged[k] = cls._deep_merge(base[k], v)
            else:
                merged[k] = v
        return merged

    @staticmethod
    def _section(data: dict, name: str, section_cls: type):
        raw = data.get(name)
        if raw is None:
            return section_cls()
        if not isinstance(raw, dict):
            logger.warning("Settings section %r is not a mapping; using defaults", name)
            return section_cls()
        known = {f.name for f in dataclasses.fields(section_cls)}
        for key in raw.keys() - known:
            logger.warning("Ignoring unknown setting %s.%s", name, key)
        return section_cls(**{k: v for k, v in raw.items() if k in known})

    @classmethod
    def _from_dict(cls, data: dict) -> "GameSettings":
        return GameSettings(
            map=cls._section(data, "map", MapSettings),
            rules=cls._section(data, "rules", RuleSettings),
            spawns=cls._section(data, "spawns", SpawnSettings),
        )

    @staticmethod
    def _env_overrides() -> dict:
        rules = {}
        for env_name, key in ((ENV_DIFFICULTY, "default_difficulty"), (ENV_STEP_BUDGET, "step_budget")):
            raw = os.getenv(env_name)
            if raw is None:
                continue
            try:
                rules[key] = int(raw)
            except ValueError:
                logger.warning("Ignoring non-integer %s=%r", env_name, raw)
        return {"rules": rules} if rules else {}

    @classmethod
    def load(cls, user_path: Optional[Path] = None) -> "GameSettings":
        """Load settings from built-in defaults, an optional user file and the environment.

        Later sources win: packaged YAML, then ``user_path``, then env vars.
        """
        try:
            with resources.files("mini_dungeon.data").joinpath("default_settings.yaml").open(
                "r", encoding="utf-8"
            ) as f:
                default_data = yaml.safe_load(f) or {}
        except FileNotFoundError:
            logger.warning("Default settings not found; falling back to dataclass defaults.")
            default_data = dataclasses.asdict(GameSettings())

        user_data = {}
        if user_path is not None:
            if user_path.exists():
                user_data = cls._load_yaml(user_path)
                logger.info("Loaded user settings from %s", user_path)
            else:
                logger.warning("User settings file not found: %s", user_path)

        merged = cls._deep_merge(default_data, user_data)
        merged = cls._deep_merge(merged, cls._env_overrides())
        settings = cls._from_dict(merged)
        logger.debug("Settings merged: %s", settings)
        return settings

    def save(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.safe_dump(dataclasses.asdict(self), f, sort_keys=False)
        logger.info("Saved settings to %s", path)
