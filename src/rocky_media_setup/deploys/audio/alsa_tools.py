"""
Build and install selected alsa-tools (hdspmixer, rmedigicontrol).

Usage:
    pyinfra @local deploys/audio/alsa_tools.py --data workdir=<dir> --data version=1.2.11
"""

from pyinfra.api.deploy import deploy
from pyinfra.operations import server

from rocky_media_setup.deploys.utils import get_data, get_list

PKGNAME = "alsa-tools"
DEFAULT_TOOLS = ["hdspmixer", "rmedigicontrol"]


@deploy("Install alsa-tools")
def install_alsa_tools(workdir: str, version: str, tools: list[str]) -> None:
    """Configure, build and install each tool from the release tarball."""
    src_dir = f"{workdir}/{PKGNAME}-{version}"

    extract = server.shell(
        name=f"Extract {PKGNAME} {version}",
        commands=[f"cd {workdir} && rm -rf {src_dir} && tar -xf {PKGNAME}-{version}.tar.bz2"],
    )

    for tool in tools:
        tool_dir = f"{src_dir}/{tool}"
        build = server.shell(
            name=f"Build {tool}",
            commands=[
                f"cd {tool_dir} && autoreconf -vfi",
                f"cd {tool_dir} && ./configure --prefix=/usr --sbindir=/usr/bin",
                f"cd {tool_dir} && make",
            ],
            _if=extract.did_succeed,
        )
        server.shell(
            name=f"Install {tool}",
            commands=[f"make install -C {tool_dir}"],
            _sudo=True,
            _if=build.did_succeed,
        )


install_alsa_tools(
    workdir=get_data("workdir"),
    version=get_data("version"),
    tools=get_list("tools") or DEFAULT_TOOLS,
)
