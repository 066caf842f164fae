"""Platform detection logic."""

import os
import shutil
import subprocess
from pathlib import Path

from rocky_media_setup.errors import UnsupportedPlatformError

from .types import OSType, Platform

OS_MAP = {
    "rocky": OSType.ROCKY,
    "rhel": OSType.RHEL,
    "almalinux": OSType.ALMA,
    "fedora": OSType.FEDORA,
    "debian": OSType.DEBIAN,
    "ubuntu": OSType.UBUNTU,
}


def _read_file(path: str) -> str | None:
    """Read file contents, return None if not found."""
    try:
        return Path(path).read_text().strip()
    except (FileNotFoundError, PermissionError):
        return None


def _parse_env_file(content: str) -> dict[str, str]:
    """Parse KEY=value lines of os-release style files."""
    values = {}
    for line in content.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        values[key.strip()] = value.strip().strip('"').strip("'")
    return values


def _detect_os() -> tuple[str, str]:
    """Detect distribution id and version."""
    os_release = _read_file("/etc/os-release")
    if os_release:
        values = _parse_env_file(os_release)
        return values.get("ID", "").lower(), values.get("VERSION_ID", "")

    if shutil.which("lsb_release"):
        result = subprocess.run(
            ["lsb_release", "-si"], capture_output=True, text=True
        )
        if result.returncode == 0:
            return result.stdout.strip().lower(), ""

    lsb_release = _read_file("/etc/lsb-release")
    if lsb_release:
        values = _parse_env_file(lsb_release)
        return values.get("DISTRIB_ID", "").lower(), values.get("DISTRIB_RELEASE", "")

    if Path("/etc/debian_version").exists():
        return "debian", ""

    return "", ""


def detect_platform() -> Platform:
    """Detect full platform information."""
    os_id, os_version = _detect_os()

    kernel = _read_file("/proc/version")
    kernel_version = ""
    if kernel:
        parts = kernel.split()
        if len(parts) >= 3:
            kernel_version = parts[2]

    return Platform(
        os_type=OS_MAP.get(os_id, OSType.UNKNOWN),
        os_id=os_id,
        os_version=os_version,
        kernel_version=kernel_version,
        is_root=os.geteuid() == 0,
    )


def require_supported(platform: Platform) -> None:
    """Raise UnsupportedPlatformError unless installers may run here."""
    if platform.os_type == OSType.UNKNOWN and not platform.os_id:
        raise UnsupportedPlatformError("Unknown Linux distro.")
    if not platform.is_rocky9:
        found = " ".join(p for p in (platform.os_id, platform.os_version) if p)
        raise UnsupportedPlatformError(
            f"Could not detect 'Rocky Linux 9' (found {found or 'unknown'})."
        )
    if platform.is_root:
        raise UnsupportedPlatformError(
            "Do NOT run this installer as root. Run it as a regular user with sudo rights."
        )
