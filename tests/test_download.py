"""Tests for artifact download and checksum verification."""

import hashlib

import pytest

from conftest import FakeResponse, FakeSession, md5
from rocky_media_setup.errors import DownloadError, IntegrityError
from rocky_media_setup.install import ensure_downloaded, file_digest, verify_checksum


class TestEnsureDownloaded:
    """Fetching into the cache directory."""

    def test_downloads_missing_file(self, tmp_path, artifact, session, artifact_body):
        target = tmp_path / artifact.filename
        assert ensure_downloaded(artifact.url, target, session=session) is True
        assert target.read_bytes() == artifact_body
        assert session.calls == [artifact.url]

    def test_existing_file_skips_network(self, tmp_path, artifact, session):
        """A file already in place is kept and the network is not used."""
        target = tmp_path / artifact.filename
        target.write_bytes(b"earlier download")
        assert ensure_downloaded(artifact.url, target, session=session) is False
        assert session.calls == []
        assert target.read_bytes() == b"earlier download"

    def test_creates_parent_directory(self, tmp_path, artifact, session):
        target = tmp_path / "deep" / "cache" / artifact.filename
        ensure_downloaded(artifact.url, target, session=session)
        assert target.exists()

    def test_http_error_raises(self, tmp_path):
        url = "https://example.org/missing.tar.gz"
        session = FakeSession({url: FakeResponse(status_code=404)})
        target = tmp_path / "missing.tar.gz"
        with pytest.raises(DownloadError):
            ensure_downloaded(url, target, session=session)
        assert not target.exists()

    def test_transport_error_raises(self, tmp_path):
        session = FakeSession()
        with pytest.raises(DownloadError, match="no route"):
            ensure_downloaded("https://example.org/x.tar.gz", tmp_path / "x.tar.gz", session=session)

    def test_interrupted_transfer_leaves_nothing(self, tmp_path):
        """Neither the target nor the .part file survives a broken transfer."""
        url = "https://example.org/big.tar.gz"
        session = FakeSession({url: FakeResponse(b"0123456789abcdef", fail_after=8)})
        target = tmp_path / "big.tar.gz"
        with pytest.raises(DownloadError):
            ensure_downloaded(url, target, session=session)
        assert list(tmp_path.iterdir()) == []

    def test_caller_session_not_closed(self, tmp_path, artifact, session):
        ensure_downloaded(artifact.url, tmp_path / artifact.filename, session=session)
        assert session.closed is False


class TestVerifyChecksum:
    """Checksum comparison."""

    def test_matching_checksum(self, tmp_path):
        path = tmp_path / "f.bin"
        path.write_bytes(b"payload")
        verify_checksum(path, md5(b"payload"))

    def test_case_and_whitespace_insensitive(self, tmp_path):
        path = tmp_path / "f.bin"
        path.write_bytes(b"payload")
        verify_checksum(path, f"  {md5(b'payload').upper()}\n")

    def test_mismatch_raises(self, tmp_path):
        path = tmp_path / "f.bin"
        path.write_bytes(b"tampered")
        with pytest.raises(IntegrityError, match="f.bin"):
            verify_checksum(path, md5(b"payload"))

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(IntegrityError, match="not found"):
            verify_checksum(tmp_path / "absent.bin", md5(b""))

    def test_other_algorithm(self, tmp_path):
        path = tmp_path / "f.bin"
        path.write_bytes(b"payload")
        expected = hashlib.sha256(b"payload").hexdigest()
        verify_checksum(path, expected, algorithm="sha256")
        assert file_digest(path, "sha256") == expected
