"""Installers for broadcast and multimedia software on Rocky Linux 9."""

__version__ = "0.1.0"
