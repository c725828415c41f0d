# chart_state.py
"""
Data-side state of the tracker: the loaded dataset, the skill selection and
the fetch lifecycle.

    UNINITIALIZED --refresh ok--> LOADED --refresh ok--> LOADED (replaced)
          |                         |
          +----refresh fails------> FAILED <--refresh fails--+

A failed fetch clears the previous dataset so the screen shows "no data"
for the name that failed instead of a stale chart for someone else. The
selection is kept across fetches.
"""

from __future__ import annotations

import asyncio
from enum import Enum
from typing import Optional, Protocol

from skill_dataset import SkillDataset
from templeosrs_fetch import TransportError
from utils.logger import log_ok, log_sync, log_warn
from utils.series import DEFAULT_SECONDARY_INDEX, ChartView, build_chart, check_index
from utils.skills import SKILL_NAMES, MalformedSnapshot
from utils.timestamps import TimestampParseError

# everything that collapses into FAILED; anything else is a bug and propagates
FETCH_ERRORS = (TransportError, MalformedSnapshot, TimestampParseError)


class DatapointSource(Protocol):
    async def player_datapoints(self, player: str) -> SkillDataset: ...


class FetchInProgress(RuntimeError):
    """refresh() was called while another fetch was still outstanding."""


class ChartStatus(Enum):
    UNINITIALIZED = "uninitialized"
    LOADED = "loaded"
    FAILED = "failed"


class SkillSelection:
    """Highlighted catalog row, or None. next()/previous() wrap around."""

    def __init__(self, size: int = len(SKILL_NAMES), selected: Optional[int] = None) -> None:
        self.size = int(size)
        self._selected: Optional[int] = None
        if selected is not None:
            self.select(selected)

    @property
    def selected(self) -> Optional[int]:
        return self._selected

    def select(self, index: int) -> None:
        self._selected = check_index(index)

    def next(self) -> None:
        if self._selected is None:
            self._selected = 0
        else:
            self._selected = (self._selected + 1) % self.size

    def previous(self) -> None:
        if self._selected is None:
            self._selected = 0
        else:
            self._selected = (self._selected - 1) % self.size

    def unselect(self) -> None:
        self._selected = None


class ChartState:
    """Owns the dataset and selection; mutated only through its methods."""

    def __init__(
        self,
        client: DatapointSource,
        *,
        secondary_index: int = DEFAULT_SECONDARY_INDEX,
    ) -> None:
        self.client = client
        self.secondary_index = check_index(secondary_index)
        self.dataset = SkillDataset.empty()
        self.selection = SkillSelection()
        self.status = ChartStatus.UNINITIALIZED
        self.username: Optional[str] = None          # player whose data is loaded
        self.failed_username: Optional[str] = None   # last attempted name, FAILED only
        self.error: Optional[str] = None             # one-line diagnostic, FAILED only
        self._fetching = False

    @property
    def fetching(self) -> bool:
        return self._fetching

    async def refresh(self, username: str) -> ChartStatus:
        """
        Fetch `username`'s history and move to LOADED or FAILED.

        One request, no retries. Raises FetchInProgress if a fetch is already
        running and ValueError for a blank name; neither touches the state.
        """
        name = (username or "").strip()
        if not name:
            raise ValueError("username must not be empty")
        if self._fetching:
            raise FetchInProgress(f"already fetching; cannot start {name!r}")

        self._fetching = True
        try:
            log_sync(f"[state] fetching datapoints for {name!r}")
            new_data = await self.client.player_datapoints(name)
        except FETCH_ERRORS as e:
            self._fail(name, e)
        else:
            self.dataset.replace(new_data)
            self.status = ChartStatus.LOADED
            self.username = name
            self.failed_username = None
            self.error = None
            log_ok(f"[state] loaded {name!r} ({len(new_data)} snapshots)")
        finally:
            self._fetching = False
        return self.status

    def _fail(self, name: str, exc: BaseException) -> None:
        self.dataset.clear()
        self.status = ChartStatus.FAILED
        self.username = None
        self.failed_username = name
        self.error = f"{type(exc).__name__}: {exc}".splitlines()[0]
        log_warn(f"[state] fetch for {name!r} failed: {self.error}")

    def chart(self) -> Optional[ChartView]:
        """Chart for the current selection, or None when there is nothing to draw."""
        return build_chart(self.dataset, self.selection.selected, self.secondary_index)

    def status_line(self) -> str:
        if self._fetching:
            return "Fetching..."
        if self.status is ChartStatus.LOADED:
            return f"{self.username}: {len(self.dataset)} datapoints"
        if self.status is ChartStatus.FAILED:
            return f"Could not load {self.failed_username}: {self.error}"
        return "No player loaded. Press / to search."


async def create_chart_state(
    client: DatapointSource,
    username: Optional[str] = None,
    *,
    secondary_index: int = DEFAULT_SECONDARY_INDEX,
) -> ChartState:
    """Build a ChartState and, if a name is given, run the initial fetch."""
    state = ChartState(client, secondary_index=secondary_index)
    if username and username.strip():
        await state.refresh(username)
    return state
