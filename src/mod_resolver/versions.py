"""
Minecraft game version parsing and fallback computation.

When no file targets the exact requested game version, the resolver may
accept files built for a nearby version:

1. the previous patch release (``1.19.2`` → ``1.19.1``);
2. the bare ``major.minor`` line (``1.19.2`` → ``1.19``).

Only plain numeric ``major.minor[.patch]`` versions produce fallbacks;
snapshots and pre-releases (``23w14a``, ``1.20-pre1``) resolve exactly or
not at all.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

_VERSION_RE = re.compile(r"^(\d+)\.(\d+)(?:\.(\d+))?$")


@dataclass(frozen=True)
class GameVersion:
    major: int
    minor: int
    patch: Optional[int] = None

    @classmethod
    def parse(cls, value: str) -> Optional[GameVersion]:
        """Parse ``major.minor[.patch]``; return ``None`` for anything else."""
        match = _VERSION_RE.match(value.strip())
        if not match:
            return None
        major, minor, patch = match.groups()
        return cls(int(major), int(minor), int(patch) if patch is not None else None)

    def __str__(self) -> str:
        if self.patch is None:
            return f"{self.major}.{self.minor}"
        return f"{self.major}.{self.minor}.{self.patch}"

    def previous_patch(self) -> Optional[GameVersion]:
        if self.patch is None or self.patch == 0:
            return None
        return GameVersion(self.major, self.minor, self.patch - 1)

    def without_patch(self) -> Optional[GameVersion]:
        if self.patch is None:
            return None
        return GameVersion(self.major, self.minor)


def fallback_versions(requested: str) -> list[str]:
    """
    Return the fallback game versions for ``requested``, in preference order.

    >>> fallback_versions("1.19.2")
    ['1.19.1', '1.19']
    >>> fallback_versions("1.19.0")
    ['1.19']
    >>> fallback_versions("1.19")
    []
    """
    version = GameVersion.parse(requested)
    if version is None:
        return []
    candidates = [version.previous_patch(), version.without_patch()]
    return [str(v) for v in candidates if v is not None]
