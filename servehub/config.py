"""Rule sets and configuration loading (YAML or JSON)."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .constants import Ministry


@dataclass(frozen=True)
class ScheduleRules:
    singers_per_month: int = 1
    tech_per_month: int = 2
    scripture_readers_per_month: int = 2
    min_gap_days: int = 7
    singers_per_service: int = 4
    require_scripture_reader: bool = True
    require_tech: bool = True
    respect_exemptions: bool = True

    def quota_for(self, ministry: Ministry) -> Optional[int]:
        """Monthly cap for a tracked ministry; ``None`` for untracked ones."""
        if ministry == Ministry.SINGER:
            return self.singers_per_month
        if ministry == Ministry.MULTIMEDIA:
            return self.tech_per_month
        if ministry == Ministry.SCRIPTURE_READER:
            return self.scripture_readers_per_month
        return None

    def replace(self, **overrides) -> "ScheduleRules":
        return replace(self, **overrides)


@dataclass(frozen=True)
class LineupRules:
    min_songs: int = 4
    max_songs: int = 6
    require_adoration: bool = True
    require_thanksgiving: bool = True
    require_confession: bool = True
    require_supplication: bool = True
    slow_moderate_count: int = 2
    fast_count: int = 2
    avoid_recently_played: bool = True

    def replace(self, **overrides) -> "LineupRules":
        return replace(self, **overrides)


DEFAULT_SCHEDULE_RULES = ScheduleRules()
DEFAULT_LINEUP_RULES = LineupRules()

# Defaults shown on the church settings page; they disagree with the generator
# on singers_per_service and scripture_readers_per_month (see DESIGN.md).
SETTINGS_PAGE_SCHEDULE_RULES = ScheduleRules(
    scripture_readers_per_month=1,
    singers_per_service=3,
)

# camelCase names used by the settings UI and older exports
_SCHEDULE_ALIASES = {
    "singersPerMonth": "singers_per_month",
    "techPerMonth": "tech_per_month",
    "scriptureReadersPerMonth": "scripture_readers_per_month",
    "minGapDays": "min_gap_days",
    "singersPerService": "singers_per_service",
    "requireScriptureReader": "require_scripture_reader",
    "alwaysAssignScriptureReader": "require_scripture_reader",
    "requireTech": "require_tech",
    "alwaysAssignTechPerson": "require_tech",
    "respectExemptions": "respect_exemptions",
}

_LINEUP_ALIASES = {
    "minSongs": "min_songs",
    "maxSongs": "max_songs",
    "requireAdoration": "require_adoration",
    "requireThanksgiving": "require_thanksgiving",
    "requireConfession": "require_confession",
    "requireSupplication": "require_supplication",
    "slowModerateCount": "slow_moderate_count",
    "fastCount": "fast_count",
    "avoidRecentlyPlayed": "avoid_recently_played",
}


@dataclass
class SchedulerConfig:
    db_url: str = "sqlite:///servehub.db"
    schedule_rules: ScheduleRules = field(default_factory=ScheduleRules)
    lineup_rules: LineupRules = field(default_factory=LineupRules)
    schedule_title: str = "MUSIC TEAM SCHEDULE"
    lineup_title: str = "WORSHIP SONG LINEUP"
    seed: Optional[int] = None


def _normalize_keys(raw: Dict[str, Any], aliases: Dict[str, str]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for key, value in raw.items():
        out[aliases.get(key, key)] = value
    return out


def _build_rules(cls, raw: Optional[Dict[str, Any]], aliases: Dict[str, str], section: str):
    if not raw:
        return cls()
    if not isinstance(raw, dict):
        raise ValueError(f"Config section '{section}' must be a mapping")
    values = _normalize_keys(raw, aliases)
    known = {f.name: f for f in fields(cls)}
    unknown = sorted(set(values) - set(known))
    if unknown:
        raise ValueError(f"Unknown keys in '{section}': {', '.join(unknown)}")
    coerced = {}
    for name, value in values.items():
        if known[name].type in ("bool", bool):
            if not isinstance(value, bool):
                raise ValueError(f"'{section}.{name}' must be true or false, got {value!r}")
            coerced[name] = value
        else:
            coerced[name] = int(value)
    return cls(**coerced)


def rules_from_dict(raw: Optional[Dict[str, Any]]) -> ScheduleRules:
    """Build ScheduleRules from a (possibly partial, possibly camelCase) mapping."""
    return _build_rules(ScheduleRules, raw, _SCHEDULE_ALIASES, "schedule_rules")


def lineup_rules_from_dict(raw: Optional[Dict[str, Any]]) -> LineupRules:
    return _build_rules(LineupRules, raw, _LINEUP_ALIASES, "lineup_rules")


def load_config(path: str | Path | None = None) -> SchedulerConfig:
    """
    Load configuration from a YAML or JSON file.

    Args:
        path: Path to ``.yaml``/``.yml`` or ``.json`` file. ``None`` returns defaults.

    Returns:
        SchedulerConfig with omitted fields left at their defaults

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file has unknown keys or badly typed values
    """
    if path is None:
        return SchedulerConfig()

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        data = json.loads(text) if text.strip() else {}
    else:
        data = yaml.safe_load(text) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Config root must be a mapping: {path}")

    allowed = {"db_url", "schedule_rules", "lineup_rules", "schedule_title", "lineup_title", "seed"}
    unknown = sorted(set(data) - allowed)
    if unknown:
        raise ValueError(f"Unknown config keys: {', '.join(unknown)}")

    defaults = SchedulerConfig()
    seed = data.get("seed")
    return SchedulerConfig(
        db_url=str(data.get("db_url", defaults.db_url)),
        schedule_rules=rules_from_dict(data.get("schedule_rules")),
        lineup_rules=lineup_rules_from_dict(data.get("lineup_rules")),
        schedule_title=str(data.get("schedule_title", defaults.schedule_title)),
        lineup_title=str(data.get("lineup_title", defaults.lineup_title)),
        seed=int(seed) if seed is not None else None,
    )
