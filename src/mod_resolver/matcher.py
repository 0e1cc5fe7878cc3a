"""
Candidate matching.

:func:`match_candidate` narrows a list of canonical candidates in fixed
stages and returns the single best file. The stages are kept separate so a
failure can name the constraint that eliminated the last candidate.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Sequence

from mod_resolver.errors import AmbiguousVersionLabel, NoMatchingCandidate
from mod_resolver.models import CanonicalCandidate, ResolutionRequest
from mod_resolver.versions import fallback_versions

logger = logging.getLogger(__name__)


class MatchStage(str, Enum):
    AVAILABILITY = "availability"
    RELEASE_TYPE = "release_type"
    LOADER = "loader"
    GAME_VERSION = "game_version"
    PINNED_VERSION = "pinned_version"

    def __str__(self) -> str:
        return self.value


def _narrow(
    candidates: list[CanonicalCandidate],
    stage: MatchStage,
    keep: Callable[[CanonicalCandidate], bool],
) -> list[CanonicalCandidate]:
    survivors = [c for c in candidates if keep(c)]
    logger.debug("%s: %d -> %d candidates", stage, len(candidates), len(survivors))
    if not survivors:
        raise NoMatchingCandidate(str(stage))
    return survivors


def filter_game_version(
    candidates: list[CanonicalCandidate],
    game_version: str,
    allow_fallback: bool,
) -> list[CanonicalCandidate]:
    """
    Keep exact game version matches; failing that, the first fallback version
    that any candidate supports. Returns an empty list when nothing fits.
    """
    exact = [c for c in candidates if game_version in c.game_versions]
    if exact or not allow_fallback:
        return exact

    for fallback in fallback_versions(game_version):
        matched = [c for c in candidates if fallback in c.game_versions]
        if matched:
            logger.debug("No file for %s, falling back to %s", game_version, fallback)
            return matched
    return []


def match_candidate(
    candidates: Sequence[CanonicalCandidate],
    request: ResolutionRequest,
) -> CanonicalCandidate:
    """
    Pick the file to install for ``request``.

    Raises :class:`~mod_resolver.errors.NoMatchingCandidate` when a stage
    leaves nothing, and :class:`~mod_resolver.errors.AmbiguousVersionLabel`
    when a pinned label matches several files.
    """
    remaining = list(candidates)
    if not remaining:
        raise NoMatchingCandidate(str(MatchStage.AVAILABILITY))

    remaining = _narrow(remaining, MatchStage.AVAILABILITY, lambda c: c.available)
    remaining = _narrow(
        remaining,
        MatchStage.RELEASE_TYPE,
        lambda c: c.release_type in request.allowed_release_types,
    )
    remaining = _narrow(
        remaining, MatchStage.LOADER, lambda c: c.supports_loader(request.loader)
    )

    by_version = filter_game_version(
        remaining, request.game_version, request.allow_fallback
    )
    logger.debug(
        "%s: %d -> %d candidates", MatchStage.GAME_VERSION, len(remaining), len(by_version)
    )
    if not by_version:
        raise NoMatchingCandidate(str(MatchStage.GAME_VERSION))
    remaining = by_version

    if request.version_label is not None:
        label = request.version_label
        pinned = _narrow(
            remaining,
            MatchStage.PINNED_VERSION,
            lambda c: label in (c.version_label, c.file_name),
        )
        if len(pinned) > 1:
            raise AmbiguousVersionLabel(label, len(pinned))
        return pinned[0]

    # sorted() is stable, so equal dates keep upstream order.
    return sorted(remaining, key=lambda c: c.release_date, reverse=True)[0]
