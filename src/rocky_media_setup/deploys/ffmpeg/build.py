"""
Build and install FFmpeg from a verified release tarball.

Profiles:
    full  DeckLink, Intel QSV, NVIDIA GPU and AMF-AMD GPU support
    alsa  DeckLink and ALSA capture, shared libraries in /usr/lib64

Usage:
    pyinfra @local deploys/ffmpeg/build.py --data workdir=<dir> --data version=8.0 --data profile=alsa
    pyinfra @local deploys/ffmpeg/build.py --data workdir=<dir> --data version=8.0 --data patch=<file>
"""

from shlex import quote

from pyinfra import logger
from pyinfra.api.deploy import deploy
from pyinfra.operations import server

from rocky_media_setup.deploys.utils import configure_command, get_data, get_parallel_jobs


@deploy("Install FFmpeg")
def install_ffmpeg(workdir: str, version: str, profile: str = "alsa", patch: str = "") -> None:
    """Extract, configure, build and install FFmpeg."""
    tarball = f"ffmpeg-{version}.tar.xz"
    src_dir = f"{workdir}/ffmpeg-{version}"
    parallel_jobs = get_parallel_jobs()

    extract = server.shell(
        name=f"Extract FFmpeg {version}",
        commands=[f"cd {workdir} && rm -rf {src_dir} && tar -xf {tarball}"],
    )

    if patch:
        logger.info(f"Applying FFmpeg source patch {patch}")
        extract = server.shell(
            name="Apply FFmpeg source patch",
            commands=[f"cd {src_dir} && patch -p1 < {quote(patch)}"],
            _if=extract.did_succeed,
        )

    configure = server.shell(
        name=f"Configure FFmpeg {version} ({profile} profile)",
        commands=[f"cd {src_dir} && {configure_command(profile)}"],
        _if=extract.did_succeed,
    )

    build = server.shell(
        name=f"Build FFmpeg {version}",
        commands=[f"cd {src_dir} && make -j{parallel_jobs}"],
        _if=configure.did_succeed,
    )

    server.shell(
        name=f"Install FFmpeg {version}",
        commands=[f"cd {src_dir} && make install", "ldconfig", "updatedb"],
        _sudo=True,
        _if=build.did_succeed,
    )


install_ffmpeg(
    workdir=get_data("workdir"),
    version=get_data("version"),
    profile=get_data("profile", "alsa"),
    patch=get_data("patch"),
)
