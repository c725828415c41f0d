# utils/skills.py
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, Mapping, Optional, Tuple

from utils.timestamps import Timestamp, TimestampParseError, parse_timestamp

# (display name / API key, SkillSnapshot field). Index 0 must stay Overall.
SKILL_CATALOG: Tuple[Tuple[str, str], ...] = (
    ("Overall", "overall"),
    ("Attack", "attack"),
    ("Defence", "defence"),
    ("Strength", "strength"),
    ("Hitpoints", "hitpoints"),
    ("Ranged", "ranged"),
    ("Prayer", "prayer"),
    ("Magic", "magic"),
    ("Cooking", "cooking"),
    ("Woodcutting", "woodcutting"),
    ("Fletching", "fletching"),
    ("Fishing", "fishing"),
    ("Firemaking", "firemaking"),
    ("Crafting", "crafting"),
    ("Smithing", "smithing"),
    ("Mining", "mining"),
    ("Herblore", "herblore"),
    ("Agility", "agility"),
    ("Thieving", "thieving"),
    ("Slayer", "slayer"),
    ("Farming", "farming"),
    ("Runecraft", "runecraft"),
    ("Hunter", "hunter"),
    ("Construction", "construction"),
)

SKILL_NAMES: Tuple[str, ...] = tuple(name for name, _ in SKILL_CATALOG)
EHP_KEY = "Ehp"


class MalformedSnapshot(ValueError):
    """A raw API record is missing a mandatory field or carries a bad value."""

    def __init__(self, field: str, reason: str, *, timestamp: Optional[str] = None):
        self.field = field
        self.reason = reason
        self.timestamp = timestamp
        where = f" at {timestamp}" if timestamp else ""
        super().__init__(f"malformed record{where}: {field!r} {reason}")


@dataclass(frozen=True)
class SkillSnapshot:
    overall: int
    attack: int
    defence: int
    strength: int
    hitpoints: int
    ranged: int
    prayer: int
    magic: int
    cooking: int
    woodcutting: int
    fletching: int
    fishing: int
    firemaking: int
    crafting: int
    smithing: int
    mining: int
    herblore: int
    agility: int
    thieving: int
    slayer: int
    farming: int
    runecraft: int
    hunter: int
    construction: int
    ehp: float


def skill_index(name: str) -> int:
    """Catalog index for a skill name (case-insensitive)."""
    wanted = (name or "").strip().lower()
    for i, skill in enumerate(SKILL_NAMES):
        if skill.lower() == wanted:
            return i
    raise KeyError(f"unknown skill {name!r}")


def skill_value(snapshot: SkillSnapshot, index: int) -> int:
    """Value of the catalog entry at `index`. Callers validate the index."""
    return getattr(snapshot, SKILL_CATALOG[index][1])


# --------- Decoding ---------


def _require(raw: Mapping[str, Any], key: str, timestamp: Optional[str]) -> Any:
    if key not in raw or raw[key] is None:
        raise MalformedSnapshot(key, "is missing", timestamp=timestamp)
    return raw[key]


def _as_count(value: Any, key: str, timestamp: Optional[str]) -> int:
    # bool is an int subclass; the API never sends true/false for skills
    if isinstance(value, bool):
        raise MalformedSnapshot(key, f"must be a number, got {value!r}", timestamp=timestamp)
    if isinstance(value, float):
        if not value.is_integer():
            raise MalformedSnapshot(key, f"must be a whole number, got {value!r}", timestamp=timestamp)
        value = int(value)
    if not isinstance(value, int):
        raise MalformedSnapshot(key, f"must be a number, got {value!r}", timestamp=timestamp)
    if value < 0:
        raise MalformedSnapshot(key, f"must be non-negative, got {value}", timestamp=timestamp)
    return value


def _as_score(value: Any, key: str, timestamp: Optional[str]) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedSnapshot(key, f"must be a number, got {value!r}", timestamp=timestamp)
    out = float(value)
    if math.isnan(out) or math.isinf(out) or out < 0:
        raise MalformedSnapshot(key, f"must be a finite non-negative number, got {value!r}", timestamp=timestamp)
    return out


def decode_snapshot(raw: Any, *, timestamp: Optional[str] = None) -> SkillSnapshot:
    """
    Build a SkillSnapshot from one raw datapoint record.

    Every skill key plus "Ehp" is mandatory. Nothing is zero-filled: the first
    missing or invalid field raises MalformedSnapshot. Unknown keys are ignored.
    """
    if not isinstance(raw, dict):
        raise MalformedSnapshot("<record>", f"must be an object, got {type(raw).__name__}", timestamp=timestamp)

    values: Dict[str, Any] = {}
    for key, field in SKILL_CATALOG:
        values[field] = _as_count(_require(raw, key, timestamp), key, timestamp)
    values["ehp"] = _as_score(_require(raw, EHP_KEY, timestamp), EHP_KEY, timestamp)
    return SkillSnapshot(**values)


# --------- Player information (player_info.php) ---------


class GameMode(IntEnum):
    NORMAL = 0
    IRONMAN = 1
    ULTIMATE_IRONMAN = 2
    HARDCORE_IRONMAN = 3

    @property
    def label(self) -> str:
        return self.name.replace("_", " ").title()


@dataclass(frozen=True)
class PlayerInformation:
    username: str
    country: str
    game_mode: GameMode
    fresh_start_account: bool
    combat_level_3: bool
    f2p: bool
    banned: bool
    disqualified: bool
    clan_preference: Optional[int]
    last_checked: Optional[Timestamp]
    last_changed: Optional[Timestamp]
    last_changed_kc: Optional[Timestamp]
    datapoint_cooldown: str


def _flag(raw: Mapping[str, Any], key: str) -> bool:
    value = _require(raw, key, None)
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    raise MalformedSnapshot(key, f"must be 0 or 1, got {value!r}")


def _optional_timestamp(raw: Mapping[str, Any], key: str) -> Optional[Timestamp]:
    value = raw.get(key)
    if value is None:
        return None
    try:
        return parse_timestamp(value)
    except TimestampParseError as exc:
        raise MalformedSnapshot(key, str(exc)) from exc


def decode_player_info(raw: Any) -> PlayerInformation:
    """Decode the `data` object of player_info.php."""
    if not isinstance(raw, dict):
        raise MalformedSnapshot("<player info>", f"must be an object, got {type(raw).__name__}")

    mode_raw = _require(raw, "Game mode", None)
    try:
        game_mode = GameMode(int(mode_raw))
    except (TypeError, ValueError) as exc:
        raise MalformedSnapshot("Game mode", f"unknown value {mode_raw!r}") from exc

    clan = raw.get("Clan preference")
    if clan is not None:
        if isinstance(clan, bool) or not isinstance(clan, int):
            raise MalformedSnapshot("Clan preference", f"must be an integer, got {clan!r}")

    return PlayerInformation(
        username=str(_require(raw, "Username", None)),
        country=str(raw.get("Country") or ""),
        game_mode=game_mode,
        fresh_start_account=_flag(raw, "fresh_start_account"),
        combat_level_3=_flag(raw, "Cb-3"),
        f2p=_flag(raw, "F2p"),
        banned=_flag(raw, "Banned"),
        disqualified=_flag(raw, "Disqualified"),
        clan_preference=clan,
        last_checked=_optional_timestamp(raw, "Last checked"),
        last_changed=_optional_timestamp(raw, "Last changed"),
        last_changed_kc=_optional_timestamp(raw, "Last changed KC"),
        datapoint_cooldown=str(raw.get("Datapoint Cooldown") or ""),
    )
