"""
Platform adapter interface and registry.

An adapter turns one platform's REST schema into
:class:`~mod_resolver.models.CanonicalCandidate` values. Nothing past this
boundary sees a platform-specific field.

Concrete adapters register themselves with :func:`register_adapter`;
:func:`create_adapter` builds one for a :class:`~mod_resolver.models.Platform`.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Optional

import httpx

from mod_resolver.errors import CouldNotFindModException, UnknownPlatformException
from mod_resolver.models import CanonicalCandidate, Platform
from mod_resolver.transport import Transport

logger = logging.getLogger(__name__)


class CandidateRejected(Exception):
    """An upstream entry that cannot be normalized; the entry is skipped."""


class PlatformAdapter(ABC):
    platform: ClassVar[Platform]

    def __init__(self, transport: Transport):
        self.transport = transport

    @abstractmethod
    async def fetch_project_name(self, mod_id: str) -> str:
        """Look the mod up and return its display name."""

    @abstractmethod
    async def fetch_candidates(
        self, mod_id: str, mod_name: Optional[str] = None
    ) -> list[CanonicalCandidate]:
        """
        Return every normalizable file of the mod.

        ``mod_name`` saves the metadata request when the caller already has
        it. Entries that fail normalization are left out.
        """

    # ── Helpers for subclasses ─────────────────────────────────────

    async def _get_json(
        self,
        mod_id: str,
        url: str,
        headers: Optional[dict[str, str]] = None,
        params: Optional[dict] = None,
    ) -> Any:
        """
        Fetch ``url`` through the transport and decode its JSON body.

        Any failure (transport error, non-2xx, undecodable body) means the
        mod could not be looked up.
        """
        try:
            resp = await self.transport.fetch(url, headers=headers, params=params)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.debug("Request to %s failed: %s", url, e)
            raise CouldNotFindModException(mod_id, str(self.platform)) from e

        if not resp.is_success:
            logger.debug("Request to %s returned HTTP %d", url, resp.status_code)
            raise CouldNotFindModException(mod_id, str(self.platform))

        try:
            return resp.json()
        except ValueError as e:
            logger.debug("Malformed JSON from %s: %s", url, e)
            raise CouldNotFindModException(mod_id, str(self.platform)) from e

    def _normalize_all(self, mod_id: str, entries: list, convert) -> list[CanonicalCandidate]:
        candidates = []
        for entry in entries:
            try:
                candidates.append(convert(entry))
            except CandidateRejected as e:
                logger.debug("%s %s: skipping file: %s", self.platform, mod_id, e)
        logger.debug(
            "%s %s: %d of %d files usable",
            self.platform, mod_id, len(candidates), len(entries),
        )
        return candidates


_REGISTRY: dict[Platform, type[PlatformAdapter]] = {}


def register_adapter(cls: type[PlatformAdapter]) -> type[PlatformAdapter]:
    """Class decorator adding an adapter to the registry under ``cls.platform``."""
    _REGISTRY[cls.platform] = cls
    return cls


def create_adapter(platform: Platform, transport: Transport, **options: Any) -> PlatformAdapter:
    try:
        cls = _REGISTRY[platform]
    except KeyError:
        raise UnknownPlatformException(platform) from None
    return cls(transport, **options)
