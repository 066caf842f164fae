"""
Enable EPEL/CRB and install build prerequisites on Rocky Linux 9.

Usage:
    pyinfra @local deploys/rocky/prerequisites.py --data categories=base,ffmpeg
    pyinfra @local deploys/rocky/prerequisites.py --data categories=base,dkms --data kernel_headers=true
"""

from pyinfra.api.deploy import deploy
from pyinfra.context import host
from pyinfra.facts.server import Command
from pyinfra.operations import dnf

from rocky_media_setup.deploys.utils import (
    enable_epel_and_crb,
    get_build_dependencies,
    get_data,
    get_flag,
    get_list,
)


@deploy("Install prerequisites")
def install_prerequisites(
    categories: list[str], epel: str = "epel-release", kernel_headers: bool = False
) -> None:
    """Enable extra repositories and install the packages for given categories."""
    enable_epel_and_crb(epel)

    packages = get_build_dependencies(*categories)
    if kernel_headers:
        kernel = host.get_fact(Command, command="uname -r").strip()
        packages.append(f"kernel-headers-{kernel}")

    dnf.packages(
        name="Install prerequisite packages",
        packages=packages,
        _sudo=True,
    )


install_prerequisites(
    categories=get_list("categories") or ["base"],
    epel=get_data("epel", "epel-release"),
    kernel_headers=get_flag("kernel_headers"),
)
