"""Platform detection for Rocky Linux installers."""

from .detect import detect_platform, require_supported
from .types import OSType, Platform

__all__ = ["detect_platform", "require_supported", "OSType", "Platform"]
