"""
mod-resolver: pick the right CurseForge or Modrinth file for a mod.

Given a mod id, a Minecraft version, a loader and the acceptable release
types, find the one file to install and return its name, date, sha1 and
download URL.
"""

__version__ = "0.1.0"

from mod_resolver.errors import (
    AmbiguousVersionLabel,
    CouldNotFindModException,
    DownloadUrlMissingError,
    ModResolverError,
    NoRemoteFileFound,
    UnknownLoaderException,
    UnknownPlatformException,
    UnknownReleaseTypeException,
)
from mod_resolver.models import (
    CanonicalCandidate,
    CanonicalModDescriptor,
    Loader,
    Platform,
    ReleaseType,
    ResolutionRequest,
)
from mod_resolver.adapters import PlatformAdapter, create_adapter
from mod_resolver.curseforge import CurseForgeAdapter
from mod_resolver.modrinth import ModrinthAdapter
from mod_resolver.matcher import match_candidate
from mod_resolver.service import ModResolutionService
from mod_resolver.transport import RateLimitedTransport
from mod_resolver.minecraft import MinecraftVersions

__all__ = [
    "AmbiguousVersionLabel",
    "CouldNotFindModException",
    "DownloadUrlMissingError",
    "ModResolverError",
    "NoRemoteFileFound",
    "UnknownLoaderException",
    "UnknownPlatformException",
    "UnknownReleaseTypeException",
    "CanonicalCandidate",
    "CanonicalModDescriptor",
    "Loader",
    "Platform",
    "ReleaseType",
    "ResolutionRequest",
    "PlatformAdapter",
    "create_adapter",
    "CurseForgeAdapter",
    "ModrinthAdapter",
    "match_candidate",
    "ModResolutionService",
    "RateLimitedTransport",
    "MinecraftVersions",
]
