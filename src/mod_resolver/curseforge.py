"""
CurseForge v1 API adapter.

Reference: https://docs.curseforge.com/

Two requests per mod: ``GET /v1/mods/{modId}`` for the display name and
``GET /v1/mods/{modId}/files`` for the file list. Both carry the
``x-api-key`` header.
"""

from __future__ import annotations

import logging
from typing import Optional

from pydantic import ValidationError

from mod_resolver import config
from mod_resolver.adapters import CandidateRejected, PlatformAdapter, register_adapter
from mod_resolver.errors import CouldNotFindModException
from mod_resolver.models import (
    CanonicalCandidate,
    CurseFile,
    CurseMod,
    Platform,
    ReleaseType,
)
from mod_resolver.transport import Transport

logger = logging.getLogger(__name__)

HASH_SHA1 = 1

RELEASE_TYPES = {
    1: ReleaseType.RELEASE,
    2: ReleaseType.BETA,
    3: ReleaseType.ALPHA,
}

# FileStatus values that mean the file is publicly downloadable:
#   4 = Approved, 10 = Released
AVAILABLE_FILE_STATUSES = frozenset({4, 10})

FILES_PAGE_SIZE = 10000


def release_type_from_code(code: int) -> ReleaseType:
    try:
        return RELEASE_TYPES[code]
    except KeyError:
        raise CandidateRejected(f"unknown release type code {code}") from None


def sha1_of(curse_file: CurseFile) -> str:
    for file_hash in curse_file.hashes:
        if file_hash.algo == HASH_SHA1 and file_hash.value:
            return file_hash.value
    raise CandidateRejected(f"no sha1 hash for {curse_file.file_name!r}")


def curse_file_to_candidate(curse_file: CurseFile, mod_name: str) -> CanonicalCandidate:
    """Normalize one CurseForge file. Raises :class:`CandidateRejected` if unusable."""
    loader_tags = frozenset(
        v.game_version_name.lower()
        for v in curse_file.sortable_game_versions
        if v.game_version_name
    )
    game_versions = frozenset(
        v.game_version for v in curse_file.sortable_game_versions if v.game_version
    )
    try:
        return CanonicalCandidate(
            name=mod_name,
            file_name=curse_file.file_name,
            version_label=curse_file.file_name,
            release_date=curse_file.file_date,
            hash=sha1_of(curse_file),
            download_url=curse_file.download_url or None,
            release_type=release_type_from_code(curse_file.release_type),
            loader_tags=loader_tags,
            game_versions=game_versions,
            available=(
                curse_file.is_available
                and curse_file.file_status in AVAILABLE_FILE_STATUSES
            ),
        )
    except ValidationError as e:
        raise CandidateRejected(str(e)) from e


@register_adapter
class CurseForgeAdapter(PlatformAdapter):
    platform = Platform.CURSEFORGE

    def __init__(
        self,
        transport: Transport,
        api_key: Optional[str] = None,
        api_base: Optional[str] = None,
    ):
        super().__init__(transport)
        self.api_key = api_key or config.curseforge_api_key()
        self.api_base = (api_base or config.CURSEFORGE_API_BASE).rstrip("/")
        if not self.api_key:
            logger.warning("No CurseForge API key configured; requests will be rejected")

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["x-api-key"] = self.api_key
        return headers

    async def fetch_project_name(self, mod_id: str) -> str:
        data = await self._get_json(
            mod_id, f"{self.api_base}/v1/mods/{mod_id}", headers=self._headers()
        )
        try:
            mod = CurseMod.model_validate(data["data"])
        except (KeyError, TypeError, ValidationError) as e:
            raise CouldNotFindModException(mod_id, str(self.platform)) from e
        if not mod.name:
            raise CouldNotFindModException(mod_id, str(self.platform))
        return mod.name

    async def fetch_candidates(
        self, mod_id: str, mod_name: Optional[str] = None
    ) -> list[CanonicalCandidate]:
        if mod_name is None:
            mod_name = await self.fetch_project_name(mod_id)

        data = await self._get_json(
            mod_id,
            f"{self.api_base}/v1/mods/{mod_id}/files",
            headers=self._headers(),
            params={"pageSize": FILES_PAGE_SIZE},
        )
        try:
            entries = list(data["data"])
        except (KeyError, TypeError) as e:
            raise CouldNotFindModException(mod_id, str(self.platform)) from e

        def convert(entry) -> CanonicalCandidate:
            try:
                curse_file = CurseFile.model_validate(entry)
            except ValidationError as e:
                raise CandidateRejected(f"malformed file entry: {e}") from e
            return curse_file_to_candidate(curse_file, mod_name)

        return self._normalize_all(mod_id, entries, convert)
