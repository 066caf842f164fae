"""Installer run configuration."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rocky_media_setup.pipelines.types import Pipeline

STATUS_DIRNAME = ".install_status"
DOWNLOAD_TIMEOUT = 60.0


@dataclass(frozen=True)
class InstallerConfig:
    """Settings passed explicitly into the orchestrator.

    cache_dir holds downloaded artifacts, extracted sources and the status
    directory. It survives between runs unless a forced run clears it.
    """

    cache_dir: Path
    status_dirname: str = STATUS_DIRNAME
    download_timeout: float = DOWNLOAD_TIMEOUT
    options: Mapping[str, str] = field(default_factory=dict)

    @property
    def status_dir(self) -> Path:
        return self.cache_dir / self.status_dirname

    @classmethod
    def for_pipeline(
        cls,
        pipeline: Pipeline,
        workdir: str | Path | None = None,
        options: Mapping[str, str] | None = None,
    ) -> InstallerConfig:
        """Build the config for a pipeline, defaulting to its home directory."""
        if workdir:
            cache_dir = Path(workdir).expanduser()
        else:
            cache_dir = Path.home() / pipeline.workdir
        return cls(cache_dir=cache_dir.resolve(), options=dict(options or {}))
