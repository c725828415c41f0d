# skill_dataset.py
from __future__ import annotations

from typing import Any, Iterable, Iterator, Optional, Tuple

from utils.skills import MalformedSnapshot, SkillSnapshot, decode_snapshot
from utils.timestamps import Timestamp, TimestampParseError, parse_timestamp

Entry = Tuple[Timestamp, SkillSnapshot]


class SkillDataset:
    """Chronological history of snapshots for one player.

    Entries are kept as an immutable tuple sorted by timestamp, so replace()
    is a single reference swap and readers never see a half-updated history.
    """

    def __init__(self, entries: Iterable[Entry] = ()) -> None:
        self._entries: Tuple[Entry, ...] = _sorted_unique(entries)

    @classmethod
    def empty(cls) -> "SkillDataset":
        return cls()

    @classmethod
    def from_pairs(cls, pairs: Iterable[Entry]) -> "SkillDataset":
        return cls(pairs)

    def replace(self, new_data: "SkillDataset") -> None:
        """Swap in new_data's entries wholesale; nothing of the old history survives."""
        self._entries = new_data._entries

    def clear(self) -> None:
        self._entries = ()

    def is_empty(self) -> bool:
        return not self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def iter_ordered(self) -> Iterator[Entry]:
        return iter(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return self.iter_ordered()

    def first(self) -> Optional[Entry]:
        return self._entries[0] if self._entries else None

    def last(self) -> Optional[Entry]:
        return self._entries[-1] if self._entries else None

    def timestamps(self) -> Tuple[Timestamp, ...]:
        return tuple(ts for ts, _ in self._entries)

    def __repr__(self) -> str:
        if not self._entries:
            return "SkillDataset(empty)"
        return f"SkillDataset({len(self._entries)} entries, {self._entries[0][0]} .. {self._entries[-1][0]})"


def _sorted_unique(entries: Iterable[Entry]) -> Tuple[Entry, ...]:
    ordered = sorted(entries, key=lambda e: e[0])
    for (prev, _), (cur, _) in zip(ordered, ordered[1:]):
        if prev == cur:
            raise ValueError(f"duplicate snapshot for {cur}")
    return tuple(ordered)


def decode_datapoints(data: Any) -> SkillDataset:
    """
    Build a dataset from the `data` object of player_datapoints.php.

    The API sends an empty JSON array instead of {} when a player has no
    datapoints. Any bad timestamp key or record fails the whole decode.
    """
    if isinstance(data, list) and not data:
        return SkillDataset.empty()
    if not isinstance(data, dict):
        raise MalformedSnapshot("data", f"must be an object, got {type(data).__name__}")

    entries = []
    for key, record in data.items():
        try:
            ts = parse_timestamp(key)
        except TimestampParseError as exc:
            raise MalformedSnapshot("<timestamp>", str(exc), timestamp=str(key)) from exc
        entries.append((ts, decode_snapshot(record, timestamp=key)))
    return SkillDataset(entries)
