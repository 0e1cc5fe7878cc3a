"""
Mod resolution service.

Ties the pieces together for one mod: pick the adapter for the platform,
fetch the mod name and its files, run the matcher and turn the winner into a
:class:`~mod_resolver.models.CanonicalModDescriptor`.

Usage::

    async with RateLimitedTransport() as transport:
        service = ModResolutionService(transport)
        request = ResolutionRequest(
            mod_id="AANobbMI",
            allowed_release_types={"release", "beta"},
            game_version="1.20.1",
            loader="fabric",
            allow_fallback=True,
        )
        descriptor = await service.resolve("modrinth", request)
"""

from __future__ import annotations

import asyncio
import logging
from typing import Iterable, Mapping, Optional, Union

from tqdm import tqdm

# Imported for their register_adapter side effect.
import mod_resolver.curseforge  # noqa: F401
import mod_resolver.modrinth  # noqa: F401
from mod_resolver.adapters import PlatformAdapter, create_adapter
from mod_resolver.config import DEFAULT_CONCURRENCY
from mod_resolver.errors import ModResolverError, NoMatchingCandidate, NoRemoteFileFound
from mod_resolver.matcher import match_candidate
from mod_resolver.models import (
    CanonicalModDescriptor,
    Platform,
    ResolutionRequest,
    parse_loader,
    parse_platform,
)
from mod_resolver.transport import Transport

logger = logging.getLogger(__name__)

ResolutionJob = tuple[Union[str, Platform], ResolutionRequest]


class ModResolutionService:
    """
    Resolve mods against CurseForge and Modrinth.

    Adapters are created lazily per platform and hold no per-request state,
    so one service can serve concurrent resolutions.
    """

    def __init__(
        self,
        transport: Transport,
        adapters: Optional[Mapping[Platform, PlatformAdapter]] = None,
        curseforge_api_key: Optional[str] = None,
    ):
        self.transport = transport
        self._adapters: dict[Platform, PlatformAdapter] = dict(adapters or {})
        self._curseforge_api_key = curseforge_api_key

    def adapter_for(self, platform: Platform) -> PlatformAdapter:
        if platform not in self._adapters:
            options = {}
            if platform is Platform.CURSEFORGE and self._curseforge_api_key:
                options["api_key"] = self._curseforge_api_key
            self._adapters[platform] = create_adapter(platform, self.transport, **options)
        return self._adapters[platform]

    async def resolve(
        self, platform: Union[str, Platform], request: ResolutionRequest
    ) -> CanonicalModDescriptor:
        """
        Resolve one mod.

        Raises:
            UnknownPlatformException / UnknownLoaderException: before any
                request is sent.
            CouldNotFindModException: the mod lookup failed.
            NoRemoteFileFound: no file satisfies the request.
            AmbiguousVersionLabel: a pinned label matched several files.
            DownloadUrlMissingError: the chosen file cannot be downloaded.
        """
        platform = parse_platform(platform)
        parse_loader(request.loader)
        adapter = self.adapter_for(platform)

        mod_name = await adapter.fetch_project_name(request.mod_id)
        candidates = await adapter.fetch_candidates(request.mod_id, mod_name)

        try:
            chosen = match_candidate(candidates, request)
        except NoMatchingCandidate as e:
            logger.debug(
                "%s %s (%s): nothing left after %s",
                platform, request.mod_id, mod_name, e.stage,
            )
            raise NoRemoteFileFound(mod_name, str(platform), e.stage) from e

        descriptor = CanonicalModDescriptor.from_candidate(chosen, platform)
        logger.info(
            "Resolved %s %s -> %s (%s)",
            platform, request.mod_id, descriptor.file_name,
            descriptor.release_date.date().isoformat(),
        )
        return descriptor

    async def resolve_many(
        self,
        jobs: Iterable[ResolutionJob],
        concurrency: int = DEFAULT_CONCURRENCY,
        progress: bool = False,
    ) -> list[Union[CanonicalModDescriptor, ModResolverError]]:
        """
        Resolve several mods concurrently.

        Results come back in job order. A job that fails with a
        :class:`~mod_resolver.errors.ModResolverError` yields that exception
        in its slot instead of cancelling the others.
        """
        jobs = list(jobs)
        semaphore = asyncio.Semaphore(concurrency)
        results: list[Union[CanonicalModDescriptor, ModResolverError]] = [None] * len(jobs)  # type: ignore
        pbar = tqdm(total=len(jobs), desc="Resolving mods", unit="mod", disable=not progress)

        async def resolve_one(idx: int, platform, request: ResolutionRequest):
            async with semaphore:
                try:
                    results[idx] = await self.resolve(platform, request)
                except ModResolverError as e:
                    logger.warning("%s %s: %s", platform, request.mod_id, e)
                    results[idx] = e
                pbar.update(1)

        try:
            await asyncio.gather(
                *[resolve_one(i, platform, request) for i, (platform, request) in enumerate(jobs)]
            )
        finally:
            pbar.close()

        ok_count = sum(1 for r in results if isinstance(r, CanonicalModDescriptor))
        logger.info("Resolved %d / %d mods", ok_count, len(jobs))
        return results
