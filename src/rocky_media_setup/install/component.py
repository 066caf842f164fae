"""Version-guarded unit of install work."""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path

import requests

from rocky_media_setup.config import DOWNLOAD_TIMEOUT
from rocky_media_setup.errors import UserDeclinedError

from .download import Artifact, ensure_downloaded, verify_checksum
from .status import StatusStore

logger = logging.getLogger(__name__)

# Called as confirm(question, default=...)
Confirm = Callable[..., bool]


class InstallState(Enum):
    """Lifecycle of one component within a single run."""

    NOT_CHECKED = auto()
    ALREADY_SATISFIED = auto()
    RUNNING = auto()
    DONE = auto()
    SKIPPED = auto()
    FAILED = auto()


@dataclass
class InstallContext:
    """What an install action gets to work with."""

    cache_dir: Path
    confirm: Confirm
    options: Mapping[str, str] = field(default_factory=dict)

    def artifact_path(self, artifact: Artifact) -> Path:
        return self.cache_dir / artifact.filename


@dataclass
class Component:
    name: str
    required_version: str
    install_action: Callable[[InstallContext], object]
    artifacts: list[Artifact] = field(default_factory=list)
    description: str = ""


class ComponentInstaller:
    """Runs one component unless the store says it is already installed."""

    def __init__(
        self,
        component: Component,
        store: StatusStore,
        cache_dir: Path,
        confirm: Confirm,
        options: Mapping[str, str] | None = None,
        session: requests.Session | None = None,
        timeout: float = DOWNLOAD_TIMEOUT,
    ):
        self.component = component
        self.store = store
        self.cache_dir = Path(cache_dir)
        self.confirm = confirm
        self.options = options or {}
        self.session = session
        self.timeout = timeout
        self.state = InstallState.NOT_CHECKED

    @property
    def name(self) -> str:
        return self.component.name

    def is_satisfied(self) -> bool:
        return self.store.is_satisfied(self.name, self.component.required_version)

    def ask_reinstall(self) -> bool:
        return self.confirm(
            f"Component '{self.name}' version '{self.component.required_version}' "
            "is already installed. Do you want to force re-install it?",
            default=False,
        )

    def fetch_artifacts(self) -> None:
        """Download every artifact and check it before anything consumes it."""
        for artifact in self.component.artifacts:
            path = self.cache_dir / artifact.filename
            ensure_downloaded(artifact.url, path, session=self.session, timeout=self.timeout)
            if artifact.checksum:
                verify_checksum(path, artifact.checksum, artifact.algorithm)
            else:
                logger.warning(
                    "No checksum published for %s; using it unverified.",
                    artifact.filename,
                )

    def run(self, reinstall: bool | None = None) -> InstallState:
        """Install the component if needed.

        reinstall decides the "already installed" prompt up front; None asks
        the operator.
        """
        self.state = InstallState.NOT_CHECKED
        component = self.component

        if self.is_satisfied():
            self.state = InstallState.ALREADY_SATISFIED
            if reinstall is None:
                reinstall = self.ask_reinstall()
            if not reinstall:
                logger.info("Skipping %s.", self.name)
                self.state = InstallState.SKIPPED
                return self.state
            logger.info("Re-installing %s as requested.", self.name)
            self.store.clear(self.name)

        self.state = InstallState.RUNNING
        logger.info("Installing %s %s...", self.name, component.required_version)
        context = InstallContext(
            cache_dir=self.cache_dir, confirm=self.confirm, options=self.options
        )
        try:
            self.fetch_artifacts()
            component.install_action(context)
        except UserDeclinedError:
            self.state = InstallState.SKIPPED
            raise
        except Exception:
            self.state = InstallState.FAILED
            raise

        self.store.set(self.name, component.required_version)
        self.state = InstallState.DONE
        logger.info("Installed %s %s.", self.name, component.required_version)
        return self.state
