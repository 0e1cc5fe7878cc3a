"""Tests for the Modrinth adapter."""

import asyncio
from datetime import datetime, timezone

import pytest

from conftest import modrinth_version
from mod_resolver.adapters import CandidateRejected
from mod_resolver.errors import CouldNotFindModException
from mod_resolver.modrinth import ModrinthAdapter, modrinth_version_to_candidate
from mod_resolver.models import ModrinthVersion, Platform, ReleaseType

API = "https://api.modrinth.com"


def adapter(transport) -> ModrinthAdapter:
    return ModrinthAdapter(transport, api_base=API)


class TestModrinthVersionToCandidate:
    def test_fields(self):
        raw = modrinth_version(
            version_number="mc1.19.2-0.4.4",
            version_type="beta",
            loaders=["Fabric", "Quilt"],
            game_versions=["1.19.1", "1.19.2"],
            date_published="2022-09-01T10:00:00.123456Z",
        )
        c = modrinth_version_to_candidate(ModrinthVersion.model_validate(raw), "Sodium")

        artifact = raw["files"][0]
        assert c.name == "Sodium"
        assert c.file_name == artifact["filename"]
        assert c.version_label == "mc1.19.2-0.4.4"
        assert c.hash == artifact["hashes"]["sha1"]
        assert c.download_url == artifact["url"]
        assert c.release_type is ReleaseType.BETA
        assert c.loader_tags == frozenset({"fabric", "quilt"})
        assert c.game_versions == frozenset({"1.19.1", "1.19.2"})
        assert c.release_date == datetime(2022, 9, 1, 10, 0, 0, 123456, tzinfo=timezone.utc)
        assert c.available is True

    def test_date_only(self):
        raw = modrinth_version(date_published="2021-01-01")
        c = modrinth_version_to_candidate(ModrinthVersion.model_validate(raw), "Sodium")
        assert c.release_date == datetime(2021, 1, 1, tzinfo=timezone.utc)

    def test_unknown_version_type_is_rejected(self):
        raw = modrinth_version(version_type="something")
        with pytest.raises(CandidateRejected):
            modrinth_version_to_candidate(ModrinthVersion.model_validate(raw), "Sodium")

    def test_no_files_is_rejected(self):
        raw = modrinth_version(files=[])
        with pytest.raises(CandidateRejected):
            modrinth_version_to_candidate(ModrinthVersion.model_validate(raw), "Sodium")

    def test_missing_sha1_is_rejected(self):
        raw = modrinth_version()
        raw["files"][0]["hashes"] = {"sha512": "abc"}
        with pytest.raises(CandidateRejected):
            modrinth_version_to_candidate(ModrinthVersion.model_validate(raw), "Sodium")

    def test_missing_url_is_kept_as_none(self):
        raw = modrinth_version()
        raw["files"][0]["url"] = None
        c = modrinth_version_to_candidate(ModrinthVersion.model_validate(raw), "Sodium")
        assert c.download_url is None

    def test_first_file_is_the_artifact(self):
        raw = modrinth_version()
        raw["files"].append(
            {
                "url": "https://cdn.modrinth.com/sources.jar",
                "filename": "sources.jar",
                "primary": False,
                "hashes": {"sha1": "f" * 40},
            }
        )
        c = modrinth_version_to_candidate(ModrinthVersion.model_validate(raw), "Sodium")
        assert c.file_name != "sources.jar"


class TestFetchProjectName:
    def test_success(self, transport):
        transport.respond(json={"id": "AANobbMI", "slug": "sodium", "title": "Sodium"})
        assert asyncio.run(adapter(transport).fetch_project_name("sodium")) == "Sodium"
        call = transport.calls[0]
        assert call["url"] == f"{API}/v2/project/sodium"
        assert "x-api-key" not in call["headers"]

    def test_not_found(self, transport):
        transport.respond(404)
        with pytest.raises(CouldNotFindModException) as exc:
            asyncio.run(adapter(transport).fetch_project_name("missing"))
        assert exc.value.platform == "modrinth"


class TestFetchCandidates:
    def test_fetches_name_then_versions(self, transport):
        transport.respond(json={"title": "Sodium"})
        transport.respond(json=[modrinth_version(), modrinth_version()])

        candidates = asyncio.run(adapter(transport).fetch_candidates("sodium"))

        assert [c.name for c in candidates] == ["Sodium", "Sodium"]
        assert transport.calls[1]["url"] == f"{API}/v2/project/sodium/version"

    def test_versions_request_failure(self, transport):
        transport.respond(json={"title": "Sodium"})
        transport.respond(503)
        with pytest.raises(CouldNotFindModException):
            asyncio.run(adapter(transport).fetch_candidates("sodium"))

    def test_non_list_payload(self, transport):
        transport.respond(json={"error": "weird"})
        with pytest.raises(CouldNotFindModException):
            asyncio.run(adapter(transport).fetch_candidates("sodium", "Sodium"))

    def test_bad_entries_are_skipped(self, transport):
        good = modrinth_version()
        transport.respond(
            json=[
                modrinth_version(version_type="nightly"),
                modrinth_version(files=[]),
                {"id": "no-date"},
                good,
            ]
        )
        candidates = asyncio.run(adapter(transport).fetch_candidates("sodium", "Sodium"))
        assert [c.version_label for c in candidates] == [good["version_number"]]

    def test_platform(self, transport):
        assert adapter(transport).platform is Platform.MODRINTH
