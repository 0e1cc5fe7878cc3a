"""
Minecraft release lookup against Mojang's version manifest.
"""

from __future__ import annotations

import logging

import httpx
from pydantic import BaseModel, Field, ValidationError

from mod_resolver.config import MOJANG_VERSION_MANIFEST_URL
from mod_resolver.errors import MinecraftVersionsUnavailable
from mod_resolver.transport import Transport

logger = logging.getLogger(__name__)


class LatestVersions(BaseModel):
    release: str
    snapshot: str = ""


class ManifestVersion(BaseModel):
    id: str
    type: str = "release"


class VersionManifest(BaseModel):
    latest: LatestVersions
    versions: list[ManifestVersion] = Field(default_factory=list)


class MinecraftVersions:
    def __init__(self, transport: Transport, manifest_url: str = MOJANG_VERSION_MANIFEST_URL):
        self.transport = transport
        self.manifest_url = manifest_url

    async def _manifest(self) -> VersionManifest:
        try:
            resp = await self.transport.fetch(self.manifest_url)
        except httpx.HTTPError as e:
            raise MinecraftVersionsUnavailable() from e
        if not resp.is_success:
            raise MinecraftVersionsUnavailable()
        try:
            return VersionManifest.model_validate(resp.json())
        except (ValueError, ValidationError) as e:
            raise MinecraftVersionsUnavailable() from e

    async def latest_release(self) -> str:
        """Return the newest release id, e.g. ``"1.21.1"``."""
        manifest = await self._manifest()
        return manifest.latest.release

    async def is_known(self, version: str) -> bool:
        """
        Whether Mojang lists ``version``.

        Returns ``True`` when the manifest cannot be fetched, so an outage
        never blocks a resolution.
        """
        try:
            manifest = await self._manifest()
        except MinecraftVersionsUnavailable:
            logger.debug("Version manifest unavailable; not verifying %s", version)
            return True
        return any(v.id == version for v in manifest.versions)
