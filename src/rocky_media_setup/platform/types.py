"""Platform type definitions."""

from dataclasses import dataclass
from enum import Enum, auto


class OSType(Enum):
    """Linux distribution family."""

    ROCKY = auto()
    RHEL = auto()
    ALMA = auto()
    FEDORA = auto()
    DEBIAN = auto()
    UBUNTU = auto()
    UNKNOWN = auto()


SUPPORTED_MAJOR_VERSION = "9"


@dataclass(frozen=True)
class Platform:
    """Detected platform information."""

    os_type: OSType
    os_id: str = ""
    os_version: str = ""  # VERSION_ID from os-release (e.g., "9.6")
    kernel_version: str = ""
    is_root: bool = False

    @property
    def major_version(self) -> str:
        return self.os_version.split(".", 1)[0]

    @property
    def is_rocky(self) -> bool:
        return self.os_type == OSType.ROCKY

    @property
    def is_rocky9(self) -> bool:
        return self.is_rocky and self.major_version == SUPPORTED_MAJOR_VERSION

    @property
    def is_supported(self) -> bool:
        """Check if installers may run on this platform."""
        return self.is_rocky9 and not self.is_root

    def __str__(self) -> str:
        version = f" {self.os_version}" if self.os_version else ""
        return f"{self.os_type.name}{version} (kernel {self.kernel_version or 'unknown'})"
