"""
Build and install the TBSDTV open source Linux driver offline package.

Upstream instructions: https://www.tbsdtv.com/forum/viewtopic.php?f=87&t=25949

Usage:
    pyinfra @local deploys/drivers/tbsdtv.py --data workdir=<dir> --data package=<zip> \
        --data media_build=media_build-2024-08-29.tar.bz2 --data step=build
    pyinfra @local deploys/drivers/tbsdtv.py --data workdir=<dir> --data step=install
"""

import sys

from pyinfra import logger
from pyinfra.api.deploy import deploy
from pyinfra.operations import server

from rocky_media_setup.deploys.utils import get_data, get_parallel_jobs

# Backports that no longer apply to the Rocky Linux 9 kernel
OBSOLETE_BACKPORTS = [
    "v6.3_class_create.patch",
    "v6.2_class.patch",
    "v6.1_class.patch",
    "v5.18_rc.patch",
    "v5.17_iosys.patch",
    "v5.14_bus_void_return.patch",
]


@deploy("Build TBSDTV drivers")
def build_tbsdtv(workdir: str, package: str, media_build: str) -> None:
    """Unpack, patch and compile the media_build tree."""
    build_dir = f"{workdir}/media_build"
    backports = " ".join(f"{build_dir}/backports/{name}" for name in OBSOLETE_BACKPORTS)

    unpack = server.shell(
        name="Unpack TBSDTV driver package",
        commands=[
            f"cd {workdir} && rm -rf {build_dir} && unzip -o {package}",
            f"cd {workdir} && tar -xf {media_build}",
        ],
    )

    patch = server.shell(
        name="Patch TBSDTV sources for the running kernel",
        commands=[
            f"sed -e 's/ dvb_math\\.o//g' -i {build_dir}/linux/drivers/media/dvb-core/Makefile",
            f"rm -fv {backports}",
            f"cd {build_dir} && ./patch-kernel.sh",
        ],
        _if=unpack.did_succeed,
    )

    server.shell(
        name="Build TBSDTV drivers",
        commands=[f"cd {build_dir} && make -j{get_parallel_jobs()}"],
        _if=patch.did_succeed,
    )


@deploy("Install TBSDTV drivers")
def install_tbsdtv(workdir: str) -> None:
    """Install the built modules into the running kernel's module tree."""
    server.shell(
        name="Install TBSDTV drivers",
        commands=[f"cd {workdir}/media_build && make install"],
        _sudo=True,
    )


workdir = get_data("workdir")
step = get_data("step", "build")
if step == "build":
    build_tbsdtv(
        workdir=workdir,
        package=get_data("package"),
        media_build=get_data("media_build"),
    )
elif step == "install":
    install_tbsdtv(workdir=workdir)
else:
    logger.error(f"Unknown step: {step}")
    sys.exit(1)
