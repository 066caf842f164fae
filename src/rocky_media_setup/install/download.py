"""Download artifacts into the cache directory and verify their checksums."""

import hashlib
import logging
import os
from dataclasses import dataclass
from pathlib import Path

import requests

from rocky_media_setup.config import DOWNLOAD_TIMEOUT
from rocky_media_setup.errors import DownloadError, IntegrityError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024


@dataclass(frozen=True)
class Artifact:
    """A downloadable file and the hash it must match.

    checksum is None when upstream publishes no hash for the file.
    """

    url: str
    filename: str
    checksum: str | None = None
    algorithm: str = "md5"


def ensure_downloaded(
    url: str,
    local_path: Path,
    session: requests.Session | None = None,
    timeout: float = DOWNLOAD_TIMEOUT,
) -> bool:
    """Fetch url into local_path unless the file is already there.

    Returns True when a download happened. The content is written to a
    ".part" sibling and renamed into place, so a failed transfer never
    leaves a file under the final name.
    """
    local_path = Path(local_path)
    if local_path.exists():
        logger.info("File '%s' already exists. Skipping download.", local_path.name)
        return False

    local_path.parent.mkdir(parents=True, exist_ok=True)
    part_path = local_path.with_name(local_path.name + ".part")
    http = session or requests.Session()

    logger.info("Downloading '%s'...", local_path.name)
    try:
        with http.get(url, stream=True, timeout=timeout) as response:
            response.raise_for_status()
            with open(part_path, "wb") as f:
                for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                    f.write(chunk)
        os.replace(part_path, local_path)
    except (requests.RequestException, OSError) as e:
        part_path.unlink(missing_ok=True)
        raise DownloadError(f"Failed to download {url}: {e}") from e
    finally:
        if session is None:
            http.close()

    return True


def file_digest(path: Path, algorithm: str = "md5") -> str:
    """Hex digest of a file's content."""
    digest = hashlib.new(algorithm)
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(CHUNK_SIZE), b""):
            digest.update(chunk)
    return digest.hexdigest()


def verify_checksum(local_path: Path, expected_hash: str, algorithm: str = "md5") -> None:
    """Raise IntegrityError unless the file hashes to expected_hash."""
    local_path = Path(local_path)
    logger.info("Verifying checksum for %s...", local_path.name)
    try:
        actual = file_digest(local_path, algorithm)
    except FileNotFoundError as e:
        raise IntegrityError(f"File not found: {local_path}") from e

    if actual.lower() != expected_hash.strip().lower():
        raise IntegrityError(
            f"Checksum for {local_path.name} failed: "
            f"expected {algorithm} {expected_hash}, got {actual}"
        )
    logger.info("Checksum for %s verified successfully.", local_path.name)
