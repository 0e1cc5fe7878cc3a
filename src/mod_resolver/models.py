"""
Pydantic data models.

Three groups live here:

* closed enumerations (:class:`Platform`, :class:`Loader`, :class:`ReleaseType`)
  and their parse helpers;
* the platform-neutral types the resolver works with
  (:class:`CanonicalCandidate`, :class:`CanonicalModDescriptor`,
  :class:`ResolutionRequest`);
* thin models of the upstream CurseForge and Modrinth JSON, used only inside
  the adapters.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, Field, field_validator

from mod_resolver.errors import (
    DownloadUrlMissingError,
    UnknownLoaderException,
    UnknownPlatformException,
    UnknownReleaseTypeException,
)


# ── Enumerations ───────────────────────────────────────────────────


class Platform(str, Enum):
    CURSEFORGE = "curseforge"
    MODRINTH = "modrinth"

    def __str__(self) -> str:
        return self.value


class Loader(str, Enum):
    FORGE = "forge"
    NEOFORGE = "neoforge"
    FABRIC = "fabric"
    QUILT = "quilt"
    LITELOADER = "liteloader"
    CAULDRON = "cauldron"
    RIFT = "rift"
    MODLOADER = "modloader"
    BUKKIT = "bukkit"
    SPIGOT = "spigot"
    PAPER = "paper"
    PURPUR = "purpur"
    SPONGE = "sponge"
    FOLIA = "folia"
    BUNGEECORD = "bungeecord"
    WATERFALL = "waterfall"
    VELOCITY = "velocity"
    DATAPACK = "datapack"

    def __str__(self) -> str:
        return self.value


class ReleaseType(str, Enum):
    ALPHA = "alpha"
    BETA = "beta"
    RELEASE = "release"

    def __str__(self) -> str:
        return self.value


def _lookup(enum_cls, value: Any, error_cls):
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        try:
            return enum_cls(value.strip().lower())
        except ValueError:
            pass
    raise error_cls(value)


def parse_platform(value: Union[str, Platform]) -> Platform:
    return _lookup(Platform, value, UnknownPlatformException)


def parse_loader(value: Union[str, Loader]) -> Loader:
    return _lookup(Loader, value, UnknownLoaderException)


def parse_release_type(value: Union[str, ReleaseType]) -> ReleaseType:
    return _lookup(ReleaseType, value, UnknownReleaseTypeException)


def _as_utc(value: Any) -> Any:
    """Parse ISO-8601 timestamps (``Z`` suffix or bare dates included) as aware datetimes."""
    if isinstance(value, str):
        value = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    if isinstance(value, datetime) and value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


# ── Canonical types ────────────────────────────────────────────────


class CanonicalCandidate(BaseModel):
    """
    One downloadable artifact, normalized away from its platform.

    ``version_label`` is what a pinned request is compared against: the file
    name on CurseForge, the ``version_number`` on Modrinth.
    """

    name: str = Field(min_length=1)
    file_name: str
    version_label: str = ""
    release_date: datetime
    hash: str = Field(min_length=1)
    download_url: Optional[str] = None
    release_type: ReleaseType
    loader_tags: frozenset[str] = frozenset()
    game_versions: frozenset[str] = frozenset()
    available: bool = True

    model_config = {"frozen": True}

    @field_validator("release_date", mode="before")
    @classmethod
    def _parse_release_date(cls, value: Any) -> Any:
        return _as_utc(value)

    @field_validator("loader_tags", mode="before")
    @classmethod
    def _lower_loader_tags(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple, set, frozenset)):
            return frozenset(str(tag).lower() for tag in value)
        return value

    def supports_loader(self, loader: Union[str, Loader]) -> bool:
        return str(loader).lower() in self.loader_tags


class CanonicalModDescriptor(BaseModel):
    """The resolution result handed back to callers."""

    name: str
    file_name: str = Field(alias="fileName")
    release_date: datetime = Field(alias="releaseDate")
    hash: str = Field(min_length=1)
    download_url: str = Field(min_length=1, alias="downloadUrl")

    model_config = {"populate_by_name": True, "frozen": True}

    @classmethod
    def from_candidate(
        cls, candidate: CanonicalCandidate, platform: Union[str, Platform]
    ) -> CanonicalModDescriptor:
        if not candidate.download_url:
            raise DownloadUrlMissingError(candidate.name, str(platform))
        return cls(
            name=candidate.name,
            file_name=candidate.file_name,
            release_date=candidate.release_date,
            hash=candidate.hash,
            download_url=candidate.download_url,
        )


class ResolutionRequest(BaseModel):
    """
    What to resolve. Immutable.

    Loader and release types may be given as strings; unknown values raise
    :class:`~mod_resolver.errors.UnknownLoaderException` /
    :class:`~mod_resolver.errors.UnknownReleaseTypeException` directly.
    """

    mod_id: str = Field(min_length=1)
    allowed_release_types: frozenset[ReleaseType]
    game_version: str
    loader: Loader
    allow_fallback: bool = False
    version_label: Optional[str] = None

    model_config = {"frozen": True}

    @field_validator("loader", mode="before")
    @classmethod
    def _parse_loader(cls, value: Any) -> Loader:
        return parse_loader(value)

    @field_validator("allowed_release_types", mode="before")
    @classmethod
    def _parse_release_types(cls, value: Any) -> frozenset[ReleaseType]:
        if isinstance(value, (str, ReleaseType)):
            value = [value]
        return frozenset(parse_release_type(item) for item in value)

    @field_validator("version_label", mode="before")
    @classmethod
    def _blank_label_is_no_pin(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


# ── CurseForge API models ──────────────────────────────────────────


class CurseMod(BaseModel):
    id: int = 0
    name: str = ""
    slug: str = ""

    model_config = {"populate_by_name": True}


class CurseFileHash(BaseModel):
    value: str = ""
    algo: int = 0  # 1=sha1, 2=md5


class SortableGameVersion(BaseModel):
    """
    One entry of ``sortableGameVersions``.

    CurseForge lists loaders and Minecraft versions in the same array: a
    loader entry has ``gameVersionName="Forge"`` and an empty ``gameVersion``.
    """

    game_version_name: str = Field(default="", alias="gameVersionName")
    game_version: str = Field(default="", alias="gameVersion")

    model_config = {"populate_by_name": True}


class CurseFile(BaseModel):
    id: int = 0
    mod_id: int = Field(default=0, alias="modId")
    display_name: str = Field(default="", alias="displayName")
    file_name: str = Field(default="", alias="fileName")
    file_date: datetime = Field(alias="fileDate")
    release_type: int = Field(alias="releaseType")
    file_status: int = Field(default=0, alias="fileStatus")
    is_available: bool = Field(default=True, alias="isAvailable")
    hashes: list[CurseFileHash] = Field(default_factory=list)
    sortable_game_versions: list[SortableGameVersion] = Field(
        default_factory=list, alias="sortableGameVersions"
    )
    download_url: Optional[str] = Field(default=None, alias="downloadUrl")

    model_config = {"populate_by_name": True}

    @field_validator("file_date", mode="before")
    @classmethod
    def _parse_file_date(cls, value: Any) -> Any:
        return _as_utc(value)


# ── Modrinth API models ────────────────────────────────────────────


class ModrinthProject(BaseModel):
    id: str = ""
    slug: str = ""
    title: str = ""


class ModrinthFile(BaseModel):
    url: Optional[str] = None
    filename: str = ""
    primary: bool = False
    size: int = 0
    hashes: dict[str, str] = Field(default_factory=dict)


class ModrinthVersion(BaseModel):
    id: str = ""
    name: str = ""
    version_number: str = ""
    version_type: str = ""
    loaders: list[str] = Field(default_factory=list)
    game_versions: list[str] = Field(default_factory=list)
    date_published: datetime
    files: list[ModrinthFile] = Field(default_factory=list)

    @field_validator("date_published", mode="before")
    @classmethod
    def _parse_date_published(cls, value: Any) -> Any:
        return _as_utc(value)
