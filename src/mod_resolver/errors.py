"""
Exception taxonomy for mod resolution.

Everything raised on purpose by this package derives from
:class:`ModResolverError`, so callers can catch one base class and still
branch on the concrete type.
"""

from __future__ import annotations

from typing import Any, Optional


class ModResolverError(Exception):
    """Base class for all resolution errors."""

    def __init__(self, message: str, context: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": True,
            "type": self.__class__.__name__,
            "message": self.message,
            "context": self.context,
        }


class CouldNotFindModException(ModResolverError):
    """The mod does not exist on the platform, or the lookup itself failed."""

    def __init__(self, mod_id: str, platform: str):
        super().__init__(
            f"Could not find the given mod: {platform}: {mod_id}",
            {"mod_id": mod_id, "platform": str(platform)},
        )
        self.mod_id = mod_id
        self.platform = platform


class NoRemoteFileFound(ModResolverError):
    """The mod exists but no file satisfies the requested constraints."""

    def __init__(self, mod_name: str, platform: str, stage: Optional[str] = None):
        super().__init__(
            f"Could not find a matching file for {mod_name} on {platform}",
            {"mod_name": mod_name, "platform": str(platform), "stage": stage},
        )
        self.mod_name = mod_name
        self.platform = platform
        self.stage = stage


class DownloadUrlMissingError(ModResolverError):
    """The selected file has no download URL (third-party distribution disabled)."""

    def __init__(self, mod_name: str, platform: str):
        super().__init__(
            f"{platform} did not provide a download URL for {mod_name}",
            {"mod_name": mod_name, "platform": str(platform)},
        )
        self.mod_name = mod_name
        self.platform = platform


class AmbiguousVersionLabel(ModResolverError):
    """A pinned version label matched more than one file."""

    def __init__(self, version_label: str, count: int):
        super().__init__(
            f"Version {version_label!r} matches {count} files; pin a file name instead",
            {"version_label": version_label, "count": count},
        )
        self.version_label = version_label
        self.count = count


class UnknownPlatformException(ModResolverError):
    def __init__(self, platform: Any):
        super().__init__(f"Unknown platform: {platform}", {"platform": str(platform)})
        self.platform = platform


class UnknownLoaderException(ModResolverError):
    def __init__(self, loader: Any):
        super().__init__(f"Unknown loader: {loader}", {"loader": str(loader)})
        self.loader = loader


class UnknownReleaseTypeException(ModResolverError):
    def __init__(self, release_type: Any):
        super().__init__(
            f"Unknown release type: {release_type}",
            {"release_type": str(release_type)},
        )
        self.release_type = release_type


class NoMatchingCandidate(ModResolverError):
    """
    Raised by the matcher when a filtering stage leaves nothing.

    ``stage`` names the stage that emptied the set. The service turns this
    into :class:`NoRemoteFileFound` once it knows the mod name and platform.
    """

    def __init__(self, stage: str):
        super().__init__(f"No candidate left after the {stage} stage", {"stage": stage})
        self.stage = stage


class MinecraftVersionsUnavailable(ModResolverError):
    def __init__(self) -> None:
        super().__init__("Minecraft versions could not be fetched")
