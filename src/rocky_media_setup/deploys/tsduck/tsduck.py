"""
Install TSDuck, the MPEG Transport Stream toolkit, from upstream RPMs.

Usage:
    pyinfra @local deploys/tsduck/tsduck.py --data workdir=<dir> --data step=prerequisites
    pyinfra @local deploys/tsduck/tsduck.py --data workdir=<dir> --data step=packages \
        --data rpms=tsduck-3.39-3956.el9.x86_64.rpm,tsduck-devel-3.39-3956.el9.x86_64.rpm
"""

import sys

from pyinfra import logger
from pyinfra.api.deploy import deploy
from pyinfra.operations import dnf, server

from rocky_media_setup.deploys.utils import get_data, get_list

PREREQUISITES_SCRIPT = "install-prerequisites.sh"


@deploy("Install TSDuck prerequisites")
def install_tsduck_prerequisites(workdir: str) -> None:
    """Run upstream's prerequisites script, then add runtime packages."""
    script = server.shell(
        name="Run TSDuck prerequisites script",
        commands=[
            f"chmod +x {workdir}/{PREREQUISITES_SCRIPT}",
            f"cd {workdir} && ./{PREREQUISITES_SCRIPT}",
        ],
    )

    dnf.packages(
        name="Install TSDuck runtime packages",
        packages=["glibc", "mlocate"],
        _sudo=True,
        _if=script.did_succeed,
    )


@deploy("Install TSDuck")
def install_tsduck(workdir: str, rpms: list[str]) -> None:
    """Install the verified RPMs and refresh linker and locate caches."""
    for rpm in rpms:
        server.shell(
            name=f"Install {rpm}",
            commands=[f"dnf install -y {workdir}/{rpm}"],
            _sudo=True,
        )

    server.shell(
        name="Refresh linker cache and locate database",
        commands=["ldconfig", "updatedb"],
        _sudo=True,
    )


workdir = get_data("workdir")
step = get_data("step", "packages")
if step == "prerequisites":
    install_tsduck_prerequisites(workdir=workdir)
elif step == "packages":
    install_tsduck(workdir=workdir, rpms=get_list("rpms"))
else:
    logger.error(f"Unknown step: {step}")
    sys.exit(1)
