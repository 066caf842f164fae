"""Run an ordered list of components against one cache directory."""

import logging
import shutil
from dataclasses import dataclass, field

import requests

from rocky_media_setup.config import InstallerConfig
from rocky_media_setup.errors import UserDeclinedError

from .component import Component, ComponentInstaller, Confirm, InstallState
from .status import StatusStore

logger = logging.getLogger(__name__)


@dataclass
class RunReport:
    """Final state of every component in a run."""

    states: dict[str, InstallState] = field(default_factory=dict)
    fully_installed: bool = False  # short-circuited on the terminal component

    @property
    def installed(self) -> list[str]:
        return [n for n, s in self.states.items() if s == InstallState.DONE]

    @property
    def skipped(self) -> list[str]:
        return [n for n, s in self.states.items() if s == InstallState.SKIPPED]


class Orchestrator:
    """Owns the cache directory and status store for one pipeline."""

    def __init__(
        self,
        config: InstallerConfig,
        confirm: Confirm,
        session: requests.Session | None = None,
    ):
        self.config = config
        self.confirm = confirm
        self.session = session
        self.store = StatusStore(config.status_dir)

    def _installer(self, component: Component) -> ComponentInstaller:
        return ComponentInstaller(
            component,
            self.store,
            self.config.cache_dir,
            self.confirm,
            options=self.config.options,
            session=self.session,
            timeout=self.config.download_timeout,
        )

    def reset(self, components: list[Component]) -> None:
        """Delete the cache directory and every status record of the pipeline."""
        cache_dir = self.config.cache_dir
        if not self.confirm(
            f"Force mode deletes '{cache_dir}' and all install records. Continue?",
            default=True,
        ):
            raise UserDeclinedError("Force reinstall declined.")
        logger.warning("Force mode enabled. Cleaning up previous installation.")
        for component in components:
            self.store.clear(component.name)
        if cache_dir.exists():
            shutil.rmtree(cache_dir)

    def has_stale_files(self) -> bool:
        cache_dir = self.config.cache_dir
        if not cache_dir.is_dir():
            return False
        return any(p.name != self.config.status_dirname for p in cache_dir.iterdir())

    def prune_sources(self) -> None:
        """Remove downloads and sources, keeping the status records."""
        cache_dir = self.config.cache_dir
        if not cache_dir.is_dir():
            return
        for path in cache_dir.iterdir():
            if path.name == self.config.status_dirname:
                continue
            if path.is_dir() and not path.is_symlink():
                shutil.rmtree(path)
            else:
                path.unlink()
        logger.info("Deleted sources in '%s' (install records kept).", cache_dir)

    def prepare(self) -> None:
        """Create the cache directory, offering to clear leftovers first."""
        cache_dir = self.config.cache_dir
        if self.has_stale_files() and self.confirm(
            f"Source directory '{cache_dir}' already has files from an earlier run. "
            "Delete them and download again?",
            default=False,
        ):
            self.prune_sources()
        logger.info("Preparing source directory at %s", cache_dir)
        self.config.status_dir.mkdir(parents=True, exist_ok=True)

    def run(self, components: list[Component], force: bool = False) -> RunReport:
        if not components:
            raise ValueError("Pipeline has no components")
        names = [c.name for c in components]
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate component names in pipeline: {names}")

        report = RunReport(states={n: InstallState.NOT_CHECKED for n in names})

        if force:
            self.reset(components)

        terminal = self._installer(components[-1])
        terminal_reinstall = None
        if not force and terminal.is_satisfied():
            terminal_reinstall = terminal.ask_reinstall()
            if not terminal_reinstall:
                logger.info(
                    "%s %s is already fully installed.",
                    terminal.name,
                    terminal.component.required_version,
                )
                logger.info("Use --force to re-install from scratch.")
                report.states = {n: InstallState.SKIPPED for n in names}
                report.fully_installed = True
                return report

        self.prepare()

        for component in components:
            installer = terminal if component is components[-1] else self._installer(component)
            reinstall = terminal_reinstall if installer is terminal else None
            try:
                installer.run(reinstall=reinstall)
            finally:
                report.states[component.name] = installer.state

        return report
