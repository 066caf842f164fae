"""
Install hdspeconf, the RME HDSPe user space configuration tool.

Upstream: https://github.com/PhilippeBekaert/hdspeconf

Usage:
    pyinfra @local deploys/audio/hdspeconf.py --data workdir=<dir>
"""

from io import StringIO

from pyinfra.api.deploy import deploy
from pyinfra.operations import files, server

from rocky_media_setup.deploys.utils import get_data

PKGNAME = "alsa-hdspeconf"
HDSPECONF_REPO = "https://github.com/PhilippeBekaert/hdspeconf.git"
SHARE_DIR = f"/usr/share/{PKGNAME}"

LAUNCHER = f"""#!/usr/bin/env bash
cd {SHARE_DIR}
./hdspeconf
"""


@deploy("Install hdspeconf")
def install_hdspeconf(workdir: str) -> None:
    """Build hdspeconf from upstream and install it with a launcher."""
    src_dir = f"{workdir}/hdspeconf"

    files.directory(
        name="Remove existing hdspeconf directory if present",
        path=src_dir,
        present=False,
    )

    clone = server.shell(
        name="Clone hdspeconf repository",
        commands=[f"git clone {HDSPECONF_REPO} {src_dir}"],
        _retries=2,  # type: ignore[call-arg]
        _retry_delay=5,  # type: ignore[call-arg]
    )

    build = server.shell(
        name="Build hdspeconf",
        commands=[f"cd {src_dir} && make depend", f"cd {src_dir} && make"],
        _if=clone.did_succeed,
    )

    install = server.shell(
        name="Install hdspeconf",
        commands=[
            f"install -vDm755 {src_dir}/hdspeconf -t {SHARE_DIR}",
            f"install -vDm644 {src_dir}/dialog-warning.png -t {SHARE_DIR}",
        ],
        _sudo=True,
        _if=build.did_succeed,
    )

    files.put(
        name="Create hdspeconf launcher in /usr/bin",
        src=StringIO(LAUNCHER),
        dest="/usr/bin/hdspeconf",
        mode="755",
        _sudo=True,
        _if=install.did_succeed,
    )


install_hdspeconf(workdir=get_data("workdir"))
