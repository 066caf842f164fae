"""Run packaged pyinfra deploy scripts against the local host."""

import logging
import subprocess
from collections.abc import Mapping
from importlib.resources import files
from pathlib import Path

from rocky_media_setup.errors import ExternalToolError

logger = logging.getLogger(__name__)


def deploy_path(script: str) -> Path:
    """Filesystem path of a deploy script shipped in this package."""
    path = Path(str(files("rocky_media_setup.deploys").joinpath(script)))
    if not path.is_file():
        raise FileNotFoundError(f"Unknown deploy script: {script}")
    return path


def build_command(script: str, data: Mapping[str, object] | None = None) -> list[str]:
    cmd = ["pyinfra", "-y", "@local", str(deploy_path(script))]
    for key, value in (data or {}).items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        elif isinstance(value, (list, tuple)):
            value = ",".join(str(v) for v in value)
        cmd.extend(["--data", f"{key}={value}"])
    return cmd


def run_deploy(script: str, data: Mapping[str, object] | None = None) -> None:
    """Run a deploy script; its console output passes straight through."""
    cmd = build_command(script, data)
    logger.info("Running %s...", script)
    logger.debug("Command: %s", " ".join(cmd))
    try:
        result = subprocess.run(cmd)
    except OSError as e:
        logger.error("Cannot start %s: %s", cmd[0], e)
        # 127 is the shell's "command not found"
        raise ExternalToolError(cmd, 127) from e
    if result.returncode != 0:
        raise ExternalToolError(cmd, result.returncode)
