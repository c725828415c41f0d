"""Shared test factories.

Builds raw API records, typed snapshots and datasets with sensible defaults
and easy overrides, plus fake datapoint sources for the state machine.
"""

from skill_dataset import SkillDataset
from utils.skills import SKILL_CATALOG, decode_snapshot
from utils.timestamps import parse_timestamp

T1 = "2023-01-01 00:00:00"
T2 = "2023-02-01 12:30:00"
T3 = "2023-03-15 23:59:59"


# ─── Raw record factory ────────────────────────────────────────────

def make_raw_record(**overrides):
    """A valid player_datapoints record. Every skill gets 1000 xp, Ehp 12.5.

    Pass a key with value `...` to drop it from the record.
    """
    record = {name: 1000 for name, _ in SKILL_CATALOG}
    record["Overall"] = 23000
    record["Ehp"] = 12.5
    for key, value in overrides.items():
        if value is ...:
            record.pop(key, None)
        else:
            record[key] = value
    return record


def make_snapshot(**overrides):
    return decode_snapshot(make_raw_record(**overrides))


def make_dataset(points):
    """points: iterable of (timestamp string, {raw overrides})."""
    return SkillDataset.from_pairs(
        (parse_timestamp(ts), make_snapshot(**ovr)) for ts, ovr in points
    )


def overall_dataset(values, stamps=(T1, T2, T3)):
    return make_dataset((ts, {"Overall": v}) for ts, v in zip(stamps, values))


# ─── Fake datapoint sources ────────────────────────────────────────

class FakeClient:
    """Returns queued results in order; exceptions in the queue are raised."""

    def __init__(self, *results):
        self.results = list(results)
        self.calls = []

    async def player_datapoints(self, player):
        self.calls.append(player)
        result = self.results.pop(0)
        if isinstance(result, BaseException):
            raise result
        return result


# ─── Fake aiohttp pieces ───────────────────────────────────────────

class FakeResponse:
    """Async context manager with the bits of aiohttp.ClientResponse the client reads."""

    def __init__(self, status=200, body=b"", reason="OK"):
        self.status = status
        self.reason = reason
        self._body = body.encode("utf-8") if isinstance(body, str) else body

    async def read(self):
        return self._body

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False


class FakeSession:
    """Stands in for aiohttp.ClientSession.get(); records requests."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests = []

    def get(self, url, params=None):
        self.requests.append((url, dict(params or {})))
        if self.error is not None:
            raise self.error
        return self.response
