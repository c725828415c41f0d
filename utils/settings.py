# utils/settings.py
import os
from dataclasses import dataclass

from utils.skills import SKILL_NAMES, skill_index

DEFAULT_API_BASE_URL = "https://templeosrs.com/api"
# effectively "all history"; the API clamps it server-side
DEFAULT_DATAPOINTS_WINDOW = 1_000_000_000


def env_int(name: str, default: int = 0) -> int:
    try:
        return int((os.getenv(name) or "").strip())
    except Exception:
        return default


def env_bool(name: str, default: bool = False) -> bool:
    raw = (os.getenv(name) or "").strip().lower()
    if raw in ("1", "true", "yes", "y", "on"):
        return True
    if raw in ("0", "false", "no", "n", "off"):
        return False
    return default


def env_str(name: str, default: str = "") -> str:
    return (os.getenv(name) or "").strip() or default


@dataclass(frozen=True)
class TrackerConfig:
    api_base_url: str
    datapoints_window: int
    secondary_skill: int  # catalog index of the fixed comparison series
    default_player: str

    log_file: str
    log_level: str
    log_color: bool


def load_tracker_config() -> TrackerConfig:
    secondary_raw = env_str("TRACKER_SECONDARY_SKILL", "Hunter")
    try:
        secondary = skill_index(secondary_raw)
    except KeyError:
        print(f"[settings] Unknown TRACKER_SECONDARY_SKILL {secondary_raw!r}, using Hunter "
              f"(choices: {', '.join(SKILL_NAMES)})")
        secondary = skill_index("Hunter")

    return TrackerConfig(
        api_base_url=env_str("TEMPLE_API_BASE_URL", DEFAULT_API_BASE_URL).rstrip("/"),
        datapoints_window=max(1, env_int("TEMPLE_DATAPOINTS_WINDOW", DEFAULT_DATAPOINTS_WINDOW)),
        secondary_skill=secondary,
        default_player=env_str("TRACKER_DEFAULT_PLAYER", ""),

        log_file=env_str("TRACKER_LOG_FILE", ""),
        log_level=env_str("TRACKER_LOG_LEVEL", "info").lower(),
        log_color=env_bool("TRACKER_LOG_COLOR", True),
    )


TRACKER = load_tracker_config()
