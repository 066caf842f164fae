"""Idempotent installation orchestrator."""

from .component import Component, ComponentInstaller, Confirm, InstallContext, InstallState
from .download import Artifact, ensure_downloaded, file_digest, verify_checksum
from .orchestrator import Orchestrator, RunReport
from .status import StatusStore

__all__ = [
    "Artifact",
    "Component",
    "ComponentInstaller",
    "Confirm",
    "InstallContext",
    "InstallState",
    "Orchestrator",
    "RunReport",
    "StatusStore",
    "ensure_downloaded",
    "file_digest",
    "verify_checksum",
]
