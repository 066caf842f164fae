"""
Shared fixtures for the installer test suite.

Nothing here touches the network or the host system: downloads go through
FakeSession, prompts through ScriptedGate and install actions are plain
recording callables.
"""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Iterable

import pytest
import requests

from rocky_media_setup.config import InstallerConfig
from rocky_media_setup.install import Artifact, Component, StatusStore


# =============================================================================
# Prompts
# =============================================================================

class ScriptedGate:
    """Confirmation gate answering from a fixed script.

    Every question and the default it was asked with are recorded. When the
    script runs out, `default` answers.
    """

    def __init__(self, answers: Iterable[bool] = (), default: bool = False):
        self.answers = list(answers)
        self.default = default
        self.questions: list[str] = []
        self.defaults: list[bool] = []

    def __call__(self, question: str, default: bool = False) -> bool:
        self.questions.append(question)
        self.defaults.append(default)
        if self.answers:
            return self.answers.pop(0)
        return self.default


# =============================================================================
# HTTP
# =============================================================================

class FakeResponse:
    def __init__(self, content: bytes = b"", status_code: int = 200, fail_after: int | None = None):
        self.content = content
        self.status_code = status_code
        self.fail_after = fail_after

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")

    def iter_content(self, chunk_size: int = 1):
        for i in range(0, len(self.content), 4):
            if self.fail_after is not None and i >= self.fail_after:
                raise requests.ConnectionError("connection reset")
            yield self.content[i : i + 4]


class FakeSession:
    """requests.Session stand-in serving canned bodies per URL."""

    def __init__(self, responses: dict[str, FakeResponse] | None = None):
        self.responses = responses or {}
        self.calls: list[str] = []
        self.closed = False

    def get(self, url: str, stream: bool = False, timeout: float | None = None) -> FakeResponse:
        self.calls.append(url)
        if url not in self.responses:
            raise requests.ConnectionError(f"no route to {url}")
        return self.responses[url]

    def close(self) -> None:
        self.closed = True


def md5(data: bytes) -> str:
    return hashlib.md5(data).hexdigest()


class RecordingAction:
    """Install action that records calls and optionally fails."""

    def __init__(self, error: Exception | None = None):
        self.calls = 0
        self.error = error

    def __call__(self, ctx) -> None:
        self.calls += 1
        if self.error is not None:
            raise self.error


def make_component(name: str, version: str = "1.0", action=None, artifacts=None) -> Component:
    return Component(
        name=name,
        required_version=version,
        install_action=action or RecordingAction(),
        artifacts=artifacts or [],
    )


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def _quiet_package_logger():
    """Let records reach caplog even after a CLI test set propagate=False."""
    logger = logging.getLogger("rocky_media_setup")
    handlers = list(logger.handlers)
    yield
    logger.handlers = handlers
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def config(tmp_path):
    """Installer config rooted in a temporary cache directory."""
    return InstallerConfig(cache_dir=tmp_path / "cache")


@pytest.fixture
def store(config):
    return StatusStore(config.status_dir)


@pytest.fixture
def gate():
    return ScriptedGate()


@pytest.fixture
def artifact_body():
    return b"release tarball contents"


@pytest.fixture
def artifact(artifact_body):
    return Artifact(
        url="https://example.org/pkg-1.0.tar.gz",
        filename="pkg-1.0.tar.gz",
        checksum=md5(artifact_body),
    )


@pytest.fixture
def session(artifact, artifact_body):
    return FakeSession({artifact.url: FakeResponse(artifact_body)})
