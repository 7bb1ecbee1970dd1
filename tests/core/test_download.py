"""
Unit tests for download module.

Tests download functionality with mocked network requests.
"""

import threading

import pytest
import requests
import responses

from goupgrade.core.download import DownloadProgress, download_file, format_progress
from goupgrade.core.exceptions import FetchError

ARCHIVE_URL = "https://dl.test/go/go1.22.3.linux-amd64.tar.gz"


class TestDownloadFile:
    """Test download_file."""

    @responses.activate
    def test_download(self, temp_dir):
        content = b"archive bytes" * 1000
        responses.add(
            responses.GET,
            ARCHIVE_URL,
            body=content,
            status=200,
            headers={"Content-Length": str(len(content))},
        )
        dest = temp_dir / "downloads" / "go.tar.gz"

        result = download_file(ARCHIVE_URL, dest)

        assert result == dest
        assert dest.read_bytes() == content

    @responses.activate
    def test_progress_reported_on_completion(self, temp_dir):
        content = b"x" * 20000
        responses.add(
            responses.GET,
            ARCHIVE_URL,
            body=content,
            status=200,
            headers={"Content-Length": str(len(content))},
        )
        updates = []

        download_file(ARCHIVE_URL, temp_dir / "go.tar.gz", progress_callback=updates.append)

        assert updates
        assert updates[-1].bytes_downloaded == len(content)
        assert updates[-1].percentage == pytest.approx(100.0)

    @responses.activate
    def test_http_error(self, temp_dir):
        responses.add(responses.GET, ARCHIVE_URL, status=404)

        with pytest.raises(FetchError, match="failed"):
            download_file(ARCHIVE_URL, temp_dir / "go.tar.gz")

    @responses.activate
    def test_connection_error(self, temp_dir):
        responses.add(
            responses.GET,
            ARCHIVE_URL,
            body=requests.exceptions.ConnectionError("unreachable"),
        )

        with pytest.raises(FetchError):
            download_file(ARCHIVE_URL, temp_dir / "go.tar.gz")

    @responses.activate
    def test_cancelled(self, temp_dir):
        responses.add(responses.GET, ARCHIVE_URL, body=b"x" * 50000, status=200)
        cancel = threading.Event()
        cancel.set()

        with pytest.raises(FetchError, match="cancelled"):
            download_file(ARCHIVE_URL, temp_dir / "go.tar.gz", cancel_event=cancel)

    def test_empty_url(self, temp_dir):
        with pytest.raises(ValueError, match="URL cannot be empty"):
            download_file("", temp_dir / "go.tar.gz")


class TestFormatProgress:
    """Test format_progress."""

    def test_known_size(self):
        progress = DownloadProgress(52428800, 104857600, 50.0, 1048576, 50)
        assert format_progress(progress) == "50.0/100.0 MB (50.0%) at 1.0 MB/s ETA: 50s"

    def test_unknown_size(self):
        progress = DownloadProgress(1048576, 0, 0, 1048576, 0)
        assert format_progress(progress) == "1.0 MB at 1.0 MB/s"

    def test_str(self):
        progress = DownloadProgress(52428800, 104857600, 50.0, 1048576, 50)
        assert str(progress) == format_progress(progress)
