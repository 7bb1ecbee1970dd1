"""
Unit tests for release metadata parsing and fetching.

HTTP requests are mocked with the responses library.
"""

import pytest
import requests
import responses

from goupgrade.core.exceptions import FetchError, ReleaseMetadataError
from goupgrade.toolchain.releases import (
    Release,
    ReleaseFile,
    fetch_releases,
    parse_releases,
)

RELEASES_URL = "https://go.test/dl/releases.json"


class TestReleaseFile:
    """Test ReleaseFile.from_dict."""

    def test_from_dict(self, releases_json):
        data = releases_json[0]["files"][3]
        release_file = ReleaseFile.from_dict(data)
        assert release_file.filename == "go1.21.9.linux-amd64.tar.gz"
        assert release_file.platform == "linux/amd64"
        assert release_file.kind == "archive"

    def test_missing_field(self, releases_json):
        data = dict(releases_json[0]["files"][3])
        del data["arch"]
        with pytest.raises(ReleaseMetadataError, match="arch"):
            ReleaseFile.from_dict(data)

    def test_not_an_object(self):
        with pytest.raises(ReleaseMetadataError, match="JSON object"):
            ReleaseFile.from_dict(["go1.22.3"])


class TestRelease:
    """Test Release.from_dict and helpers."""

    def test_from_dict(self, releases_json):
        release = Release.from_dict(releases_json[2])
        assert release.version == "go1.22.3"
        assert release.stable is True
        assert len(release.files) == 5
        assert all(isinstance(f, ReleaseFile) for f in release.files)

    def test_missing_files(self):
        with pytest.raises(ReleaseMetadataError, match="files"):
            Release.from_dict({"version": "go1.22.3", "stable": True})

    def test_files_not_a_list(self):
        with pytest.raises(ReleaseMetadataError, match="must be a list"):
            Release.from_dict({"version": "go1.22.3", "stable": True, "files": {}})

    def test_file_for(self, releases):
        release = releases[2]
        assert release.file_for("linux", "arm64").filename == (
            "go1.22.3.linux-arm64.tar.gz"
        )
        assert release.file_for("darwin", "arm64").kind == "installer"
        assert release.file_for("darwin", "arm64", "archive").kind == "archive"
        assert release.file_for("windows", "amd64") is None


class TestParseReleases:
    """Test parse_releases."""

    def test_keeps_order(self, releases_json):
        releases = parse_releases(releases_json)
        assert [r.version for r in releases] == [r["version"] for r in releases_json]

    def test_not_a_list(self):
        with pytest.raises(ReleaseMetadataError, match="JSON list"):
            parse_releases({"version": "go1.22.3"})

    def test_empty_list(self):
        assert parse_releases([]) == []


class TestFetchReleases:
    """Test fetch_releases with mocked HTTP."""

    @responses.activate
    def test_fetch(self, releases_json):
        responses.add(responses.GET, RELEASES_URL, json=releases_json, status=200)

        releases = fetch_releases(RELEASES_URL)

        assert len(releases) == len(releases_json)
        assert releases[0].version == "go1.21.9"

    @responses.activate
    def test_fetch_with_session(self, releases_json):
        responses.add(responses.GET, RELEASES_URL, json=releases_json, status=200)

        with requests.Session() as session:
            releases = fetch_releases(RELEASES_URL, session=session)

        assert len(releases) == len(releases_json)

    @responses.activate
    def test_http_error(self):
        responses.add(responses.GET, RELEASES_URL, status=503)

        with pytest.raises(FetchError, match="Failed to fetch"):
            fetch_releases(RELEASES_URL)

    @responses.activate
    def test_invalid_json(self):
        responses.add(responses.GET, RELEASES_URL, body="<html>", status=200)

        with pytest.raises(FetchError, match="Invalid JSON"):
            fetch_releases(RELEASES_URL)

    @responses.activate
    def test_connection_error(self):
        responses.add(
            responses.GET,
            RELEASES_URL,
            body=requests.exceptions.ConnectionError("refused"),
        )

        with pytest.raises(FetchError):
            fetch_releases(RELEASES_URL)

    @responses.activate
    def test_missing_field(self):
        responses.add(
            responses.GET, RELEASES_URL, json=[{"version": "go1.22.3"}], status=200
        )

        with pytest.raises(ReleaseMetadataError):
            fetch_releases(RELEASES_URL)


@pytest.mark.integration
def test_fetch_live_release_list():
    """Fetch the real release list from go.dev."""
    releases = fetch_releases()
    assert any(r.stable for r in releases)
