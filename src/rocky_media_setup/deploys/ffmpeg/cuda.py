"""
Install the NVIDIA CUDA Toolkit from a downloaded local repository RPM.

Usage:
    pyinfra @local deploys/ffmpeg/cuda.py --data workdir=<dir> --data rpm=<file> --data toolkit=cuda-toolkit-12-6
"""

from shlex import quote

from pyinfra import logger
from pyinfra.api.deploy import deploy
from pyinfra.context import host
from pyinfra.facts.rpm import RpmPackage
from pyinfra.operations import server

from rocky_media_setup.deploys.utils import get_data


@deploy("Install CUDA Toolkit")
def install_cuda(workdir: str, rpm: str, toolkit: str) -> None:
    """Enable the CUDA repository and install the toolkit unless present."""
    if host.get_fact(RpmPackage, package=toolkit):
        logger.info(f"{toolkit} already installed, skipping.")
        return

    server.shell(
        name="Enable NVIDIA CUDA Toolkit repo",
        commands=[
            f"dnf install -y {quote(f'{workdir}/{rpm}')}",
            "dnf clean all",
        ],
        _sudo=True,
    )

    server.shell(
        name=f"Install {toolkit}",
        commands=[f"dnf -y install {toolkit}", "ldconfig"],
        _sudo=True,
    )


install_cuda(
    workdir=get_data("workdir"),
    rpm=get_data("rpm"),
    toolkit=get_data("toolkit", "cuda-toolkit-12-6"),
)
