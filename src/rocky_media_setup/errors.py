"""Error taxonomy shared by the installer library and the CLI."""


class InstallerError(Exception):
    """Base class for errors that terminate an installer run."""

    exit_code = 1


class UnsupportedPlatformError(InstallerError):
    """The host is not a supported Rocky Linux 9 system."""


class DownloadError(InstallerError):
    """An artifact could not be fetched."""


class IntegrityError(InstallerError):
    """An artifact is missing or does not match its declared checksum."""


class ExternalToolError(InstallerError):
    """An external tool (pyinfra, dnf, make, dkms) exited with an error."""

    def __init__(self, command: list[str], returncode: int):
        self.command = command
        self.returncode = returncode
        super().__init__(
            f"Command failed with code {returncode}: {' '.join(command)}"
        )


class UserDeclinedError(InstallerError):
    """The operator answered no to a required prompt. Not a failure."""

    exit_code = 0
