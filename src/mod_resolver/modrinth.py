"""
Modrinth v2 API adapter.

Reference: https://docs.modrinth.com/api/

``GET /v2/project/{id}`` gives the title, ``GET /v2/project/{id}/version``
the version list. Each Modrinth version can hold several files; the first
listed file is the artifact.
"""

from __future__ import annotations

from typing import Optional

from pydantic import ValidationError

from mod_resolver import config
from mod_resolver.adapters import CandidateRejected, PlatformAdapter, register_adapter
from mod_resolver.errors import CouldNotFindModException
from mod_resolver.models import (
    CanonicalCandidate,
    ModrinthProject,
    ModrinthVersion,
    Platform,
    ReleaseType,
)
from mod_resolver.transport import Transport


def modrinth_version_to_candidate(version: ModrinthVersion, mod_name: str) -> CanonicalCandidate:
    """Normalize one Modrinth version. Raises :class:`CandidateRejected` if unusable."""
    try:
        release_type = ReleaseType(version.version_type)
    except ValueError:
        raise CandidateRejected(f"unknown version type {version.version_type!r}") from None

    if not version.files:
        raise CandidateRejected(f"version {version.version_number!r} has no files")
    artifact = version.files[0]

    sha1 = artifact.hashes.get("sha1")
    if not sha1:
        raise CandidateRejected(f"no sha1 hash for {artifact.filename!r}")

    try:
        return CanonicalCandidate(
            name=mod_name,
            file_name=artifact.filename,
            version_label=version.version_number,
            release_date=version.date_published,
            hash=sha1,
            download_url=artifact.url or None,
            release_type=release_type,
            loader_tags=frozenset(loader.lower() for loader in version.loaders),
            game_versions=frozenset(version.game_versions),
        )
    except ValidationError as e:
        raise CandidateRejected(str(e)) from e


@register_adapter
class ModrinthAdapter(PlatformAdapter):
    platform = Platform.MODRINTH

    def __init__(self, transport: Transport, api_base: Optional[str] = None):
        super().__init__(transport)
        self.api_base = (api_base or config.MODRINTH_API_BASE).rstrip("/")

    async def fetch_project_name(self, mod_id: str) -> str:
        data = await self._get_json(
            mod_id,
            f"{self.api_base}/v2/project/{mod_id}",
            headers={"Accept": "application/json"},
        )
        try:
            project = ModrinthProject.model_validate(data)
        except ValidationError as e:
            raise CouldNotFindModException(mod_id, str(self.platform)) from e
        if not project.title:
            raise CouldNotFindModException(mod_id, str(self.platform))
        return project.title

    async def fetch_candidates(
        self, mod_id: str, mod_name: Optional[str] = None
    ) -> list[CanonicalCandidate]:
        if mod_name is None:
            mod_name = await self.fetch_project_name(mod_id)

        data = await self._get_json(
            mod_id,
            f"{self.api_base}/v2/project/{mod_id}/version",
            headers={"Accept": "application/json"},
        )
        if not isinstance(data, list):
            raise CouldNotFindModException(mod_id, str(self.platform))

        def convert(entry) -> CanonicalCandidate:
            try:
                version = ModrinthVersion.model_validate(entry)
            except ValidationError as e:
                raise CandidateRejected(f"malformed version entry: {e}") from e
            return modrinth_version_to_candidate(version, mod_name)

        return self._normalize_all(mod_id, data, convert)
