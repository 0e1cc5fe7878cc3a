"""Shared fixtures: an in-memory transport and upstream payload builders."""

from __future__ import annotations

import itertools
from typing import Any, Optional

import httpx
import pytest

_counter = itertools.count(1)


class FakeTransport:
    """
    Replays queued responses in order and records every request.

    Queue entries are ``httpx.Response`` objects or exceptions to raise.
    """

    def __init__(self) -> None:
        self.queue: list[Any] = []
        self.calls: list[dict[str, Any]] = []

    def respond(self, status_code: int = 200, json: Any = None, **kwargs: Any) -> None:
        self.queue.append(httpx.Response(status_code, json=json, **kwargs))

    def fail(self, exc: Exception) -> None:
        self.queue.append(exc)

    async def fetch(
        self,
        url: str,
        headers: Optional[dict[str, str]] = None,
        params: Optional[dict] = None,
    ) -> httpx.Response:
        self.calls.append({"url": url, "headers": headers, "params": params})
        if not self.queue:
            raise AssertionError(f"unexpected request to {url}")
        item = self.queue.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


def curse_file(
    game_version: str = "1.19.2",
    loader: str = "Forge",
    **overrides: Any,
) -> dict[str, Any]:
    """A released, available CurseForge file for ``game_version`` / ``loader``."""
    n = next(_counter)
    data = {
        "id": 4000000 + n,
        "modId": 238222,
        "displayName": f"mod-{n}",
        "fileName": f"mod-{n}.jar",
        "fileDate": "2022-08-24T14:15:22Z",
        "releaseType": 1,
        "fileStatus": 10,
        "isAvailable": True,
        "hashes": [
            {"value": f"{n:040x}", "algo": 1},
            {"value": f"{n:032x}", "algo": 2},
        ],
        "sortableGameVersions": [
            {"gameVersionName": loader, "gameVersion": ""},
            {"gameVersionName": game_version, "gameVersion": game_version},
        ],
        "downloadUrl": f"https://edge.forgecdn.net/files/4000/{n}/mod-{n}.jar",
    }
    data.update(overrides)
    return data


def modrinth_version(
    game_version: str = "1.19.2",
    loader: str = "fabric",
    **overrides: Any,
) -> dict[str, Any]:
    """A Modrinth release version with a single file."""
    n = next(_counter)
    data = {
        "id": f"ver{n}",
        "name": f"Version {n}",
        "version_number": f"1.0.{n}",
        "version_type": "release",
        "loaders": [loader],
        "game_versions": [game_version],
        "date_published": "2022-01-01T00:00:00Z",
        "files": [
            {
                "url": f"https://cdn.modrinth.com/data/abc/versions/ver{n}/mod-{n}.jar",
                "filename": f"mod-{n}.jar",
                "primary": True,
                "size": 1024,
                "hashes": {"sha1": f"{n:040x}", "sha512": f"{n:0128x}"},
            }
        ],
    }
    data.update(overrides)
    return data
