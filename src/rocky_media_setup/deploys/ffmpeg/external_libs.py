"""
Build the external codec libraries FFmpeg links against.

Installs ffnvcodec headers, x264, x265, zvbi (Teletext) and libklvanc
(VANC SMPTE2038) into /usr.

Usage:
    pyinfra @local deploys/ffmpeg/external_libs.py --data workdir=<dir> --data zvbi=zvbi-0.2.35.tar.bz2
"""

from pyinfra.api.deploy import deploy
from pyinfra.operations import files, server

from rocky_media_setup.deploys.utils import get_data, get_parallel_jobs

NV_CODEC_HEADERS_REPO = "https://git.videolan.org/git/ffmpeg/nv-codec-headers.git"
X264_REPO = "https://code.videolan.org/videolan/x264.git"
X265_REPO = "https://bitbucket.org/multicoreware/x265_git"
KLVANC_REPO = "https://github.com/stoth68000/libklvanc.git"


def _fresh_clone(repo: str, build_dir: str, label: str):
    files.directory(
        name=f"Remove existing {label} directory if present",
        path=build_dir,
        present=False,
    )
    return server.shell(
        name=f"Clone {label} repository",
        commands=[f"git clone --depth 1 {repo} {build_dir}"],
        _retries=2,  # type: ignore[call-arg]
        _retry_delay=5,  # type: ignore[call-arg]
    )


@deploy("Install FFmpeg external libraries")
def install_external_libraries(workdir: str, zvbi: str) -> None:
    """Build and install the codec libraries from upstream sources."""
    jobs = get_parallel_jobs()

    nv_dir = f"{workdir}/nv-codec-headers"
    clone = _fresh_clone(NV_CODEC_HEADERS_REPO, nv_dir, "nv-codec-headers")
    server.shell(
        name="Install ffnvcodec-headers",
        commands=[f"cd {nv_dir} && make PREFIX=/usr && sudo make PREFIX=/usr install"],
        _if=clone.did_succeed,
    )

    x264_dir = f"{workdir}/x264"
    clone = _fresh_clone(X264_REPO, x264_dir, "x264")
    server.shell(
        name="Build and install libx264",
        commands=[
            f"cd {x264_dir} && ./configure --prefix=/usr --libdir=/usr/lib --disable-avs --enable-lto --enable-pic --enable-shared",
            f"cd {x264_dir} && make -j{jobs}",
            f"cd {x264_dir} && sudo make install",
        ],
        _if=clone.did_succeed,
    )

    x265_dir = f"{workdir}/x265_git"
    clone = _fresh_clone(X265_REPO, x265_dir, "x265")
    server.shell(
        name="Build and install libx265",
        commands=[
            f'cd {x265_dir}/build/linux && cmake -G "Unix Makefiles" ../../source -DCMAKE_INSTALL_PREFIX=/usr -Wno-dev',
            f"cd {x265_dir}/build/linux && make -j{jobs}",
            f"cd {x265_dir}/build/linux && sudo make install",
        ],
        _if=clone.did_succeed,
    )

    zvbi_dir = f"{workdir}/{zvbi.removesuffix('.tar.bz2')}"
    server.shell(
        name="Build and install libzvbi (Teletext)",
        commands=[
            f"cd {workdir} && rm -rf {zvbi_dir} && tar -xf {zvbi}",
            f"cd {zvbi_dir} && ./configure --prefix=/usr --sbindir=/usr/bin",
            f"cd {zvbi_dir} && make -j{jobs}",
            f"cd {zvbi_dir} && sudo make install",
        ],
    )

    klvanc_dir = f"{workdir}/libklvanc"
    clone = _fresh_clone(KLVANC_REPO, klvanc_dir, "libklvanc")
    server.shell(
        name="Build and install libklvanc (VANC SMPTE2038)",
        commands=[
            f"cd {klvanc_dir} && ./autogen.sh --build",
            f"cd {klvanc_dir} && ./configure --prefix=/usr --libdir=/usr/lib",
            f"cd {klvanc_dir} && make -j{jobs}",
            f"cd {klvanc_dir} && sudo make install",
            "sudo ldconfig",
        ],
        _if=clone.did_succeed,
    )


install_external_libraries(
    workdir=get_data("workdir"),
    zvbi=get_data("zvbi", "zvbi-0.2.35.tar.bz2"),
)
