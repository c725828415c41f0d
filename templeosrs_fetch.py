# templeosrs_fetch.py
import asyncio
import json
from typing import Any, Dict, Optional

import aiohttp

from skill_dataset import SkillDataset, decode_datapoints
from utils.logger import log_debug, log_sync
from utils.settings import TRACKER
from utils.skills import MalformedSnapshot, PlayerInformation, decode_player_info


class TransportError(RuntimeError):
    """Network failure, non-200 status, non-JSON body or an API error envelope."""

    def __init__(self, message: str, *, status: Optional[int] = None, url: str = ""):
        self.status = status
        self.url = url
        super().__init__(message)


# --------- HTTP helpers ---------


async def _fetch_json(
    session: aiohttp.ClientSession,
    url: str,
    params: Dict[str, str],
) -> Any:
    try:
        async with session.get(url, params=params) as res:
            body = await res.read()
            if res.status != 200:
                snippet = body[:200].decode("utf-8", "replace").strip()
                raise TransportError(f"{res.status} {res.reason} for {url}: {snippet}", status=res.status, url=url)
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        raise TransportError(f"{type(e).__name__} for {url}: {e}", url=url) from e

    # UnicodeDecodeError is a ValueError too
    try:
        return json.loads(body.decode("utf-8"))
    except ValueError as e:
        raise TransportError(f"undecodable or invalid JSON body from {url}: {body[:120]!r}", status=200, url=url) from e


def _unwrap(payload: Any, url: str) -> Any:
    """Return payload['data'], turning the API's {'error': {...}} envelope into TransportError."""
    if not isinstance(payload, dict):
        raise MalformedSnapshot("<response>", f"must be an object, got {type(payload).__name__}")

    err = payload.get("error")
    if err:
        if isinstance(err, dict):
            code = err.get("Code")
            message = err.get("Message") or "unknown error"
        else:
            code, message = None, str(err)
        raise TransportError(f"API error {code}: {message}", status=code if isinstance(code, int) else None, url=url)

    if "data" not in payload:
        raise MalformedSnapshot("data", "is missing from the response")
    return payload["data"]


# --------- Client ---------


class TempleClient:
    """
    Thin async client for the TempleOSRS player endpoints.

    Every call opens one request and returns decoded, typed data. No retries:
    callers decide what a failure means.
    """

    def __init__(
        self,
        *,
        base_url: Optional[str] = None,
        window: Optional[int] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ) -> None:
        self.base_url = (base_url or TRACKER.api_base_url).rstrip("/")
        self.window = int(TRACKER.datapoints_window if window is None else window)
        self._session = session

    async def _get(self, endpoint: str, params: Dict[str, str]) -> Any:
        url = f"{self.base_url}/{endpoint}"
        log_debug(f"[temple] GET {url} {params}")
        if self._session is not None:
            payload = await _fetch_json(self._session, url, params)
        else:
            async with aiohttp.ClientSession() as session:
                payload = await _fetch_json(session, url, params)
        return _unwrap(payload, url)

    async def player_information(self, player: str) -> PlayerInformation:
        data = await self._get("player_info.php", {"player": player})
        return decode_player_info(data)

    async def player_datapoints(self, player: str, time: Optional[int] = None) -> SkillDataset:
        data = await self._get(
            "player_datapoints.php",
            {"player": player, "time": str(int(self.window if time is None else time))},
        )
        dataset = decode_datapoints(data)
        log_sync(f"[temple] {player!r}: {len(dataset)} datapoints")
        return dataset


async def get_player_datapoints(player: str, time: Optional[int] = None) -> SkillDataset:
    return await TempleClient().player_datapoints(player, time)


async def get_player_information(player: str) -> PlayerInformation:
    return await TempleClient().player_information(player)
