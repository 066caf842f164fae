"""Flat-file store of the last successfully installed version per component."""

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


class StatusStore:
    """One file per component; the file content is the version string."""

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def path_for(self, name: str) -> Path:
        if not name or "/" in name or os.sep in name or name.startswith("."):
            raise ValueError(f"Invalid component name: {name!r}")
        return self.directory / name

    def get(self, name: str) -> str | None:
        """Return the recorded version, or None when there is no record."""
        try:
            return self.path_for(name).read_text().rstrip("\n")
        except FileNotFoundError:
            return None

    def set(self, name: str, version: str) -> None:
        path = self.path_for(name)
        self.directory.mkdir(parents=True, exist_ok=True)
        tmp = path.with_name(f".{name}.tmp")
        tmp.write_text(f"{version}\n")
        os.replace(tmp, path)
        logger.debug("Recorded %s version %s", name, version)

    def clear(self, name: str) -> None:
        self.path_for(name).unlink(missing_ok=True)

    def is_satisfied(self, name: str, version: str) -> bool:
        return self.get(name) == version

    def records(self) -> dict[str, str]:
        """All records in the store, keyed by component name."""
        if not self.directory.is_dir():
            return {}
        return {
            path.name: path.read_text().rstrip("\n")
            for path in sorted(self.directory.iterdir())
            if path.is_file() and not path.name.startswith(".")
        }
