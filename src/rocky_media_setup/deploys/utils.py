"""
Shared utilities for pyinfra Rocky Linux deployments.
"""

import os
from shlex import quote

from pyinfra.context import host
from pyinfra.operations import server


def get_parallel_jobs() -> int:
    """Get number of parallel build jobs based on CPU count."""
    return os.cpu_count() or 4


def get_data(key: str, default: str = "") -> str:
    """Read a --data value passed on the pyinfra command line."""
    value = host.data.get(key)
    if value is None:
        return default
    return str(value)


def get_flag(key: str) -> bool:
    return get_data(key).lower() in ("1", "true", "yes", "y")


def get_list(key: str) -> list[str]:
    return [item for item in get_data(key).split(",") if item]


def enable_epel_and_crb(epel_url: str = "epel-release") -> None:
    """Enable EPEL, the CodeReady Builder repo and Development Tools."""
    server.shell(
        name="Enable EPEL, CRB and Development Tools",
        commands=[
            f"dnf install -y {epel_url}",
            "/usr/bin/crb enable",
            'dnf groupinstall -y "Development Tools"',
            "dnf makecache",
        ],
        _sudo=True,
    )


# Build dependencies per installer, installed with dnf
BUILD_DEPS = {
    "base": [
        "autoconf",
        "automake",
        "cmake",
        "curl",
        "git",
        "libtool",
        "patch",
        "pkgconf-pkg-config",
        "tar",
        "wget",
        "xz",
    ],
    "dkms": [
        "dkms",
        "elfutils-libelf-devel",
        "kernel-devel",
    ],
    "ffmpeg": [
        "AMF-devel",
        "clang",
        "glibc",
        "intel-gmmlib-devel",
        "intel-mediasdk-devel",
        "libass-devel",
        "libdrm-devel",
        "libogg-devel",
        "libpciaccess-devel",
        "libssh-devel",
        "libva-devel",
        "libva-utils",
        "libvorbis-devel",
        "libvpl-devel",
        "libX11-devel",
        "mercurial",
        "mlocate",
        "nasm",
        "numactl-devel",
        "numactl-libs",
        "ocl-icd-devel",
        "opencl-headers",
        "openh264-devel",
        "openjpeg2-devel",
        "openssl-devel",
        "perl-devel",
        "SDL2-devel",
        "srt",
        "srt-devel",
        "texinfo",
        "xorg-x11-server-devel",
        "xwayland-devel",
        "yasm",
        "zlib-devel",
    ],
    "ffmpeg_alsa": [
        "alsa-lib-devel",
        "libpciaccess-devel",
        "mlocate",
        "nasm",
        "yasm",
    ],
    "tbsdtv": [
        "bzip2",
        "gcc",
        "kernel-devel",
        "kernel-headers",
        "patchutils",
        "perl",
        "perl-devel",
        "perl-ExtUtils-CBuilder",
        "perl-ExtUtils-MakeMaker",
        "perl-Proc-ProcessTable",
        "unzip",
        "zip",
    ],
    "hdspeconf": [
        "alsa-lib-devel",
        "wxGTK3-devel",
    ],
    "alsa_tools": [
        "alsa-lib-devel",
        "fltk-devel",
        "gtk2-devel",
        "gtk3-devel",
        "hicolor-icon-theme",
    ],
}


def get_build_dependencies(*categories: str) -> list[str]:
    """Get combined list of build dependencies for given categories."""
    deps = set()
    for category in categories:
        if category not in BUILD_DEPS:
            raise KeyError(f"Unknown dependency category: {category}")
        deps.update(BUILD_DEPS[category])
    return sorted(deps)



# Command and file builders shared by the deploy scripts

FFMPEG_PROFILES: dict[str, dict[str, object]] = {
    "full": {
        "pkg_config_path": "/usr/lib/pkgconfig",
        "flags": [
            "--prefix=/usr",
            "--disable-debug",
            "--disable-htmlpages",
            "--enable-amf",
            "--enable-decklink",
            "--enable-gpl",
            "--enable-libdrm",
            "--enable-libklvanc",
            "--enable-libopenh264",
            "--enable-libopenjpeg",
            "--enable-libsrt",
            "--enable-libssh",
            "--enable-libvpl",
            "--enable-libx264",
            "--enable-libx265",
            "--enable-libzvbi",
            "--enable-nonfree",
            "--enable-nvdec",
            "--enable-nvenc",
            "--enable-opencl",
            "--enable-openssl",
            "--enable-pic",
            "--enable-runtime-cpudetect",
            "--enable-vaapi",
        ],
    },
    "alsa": {
        "pkg_config_path": "/usr/lib64/pkgconfig:/usr/lib/pkgconfig",
        "flags": [
            "--prefix=/usr",
            "--libdir=/usr/lib64",
            "--shlibdir=/usr/lib64",
            "--disable-debug",
            "--enable-shared",
            "--enable-gpl",
            "--enable-nonfree",
            "--enable-decklink",
            "--enable-alsa",
            "--enable-pic",
            "--enable-runtime-cpudetect",
        ],
    },
}


def configure_command(profile: str) -> str:
    """Configure invocation for a build profile."""
    settings = FFMPEG_PROFILES[profile]
    flags = " ".join(settings["flags"])  # type: ignore[arg-type]
    return f'PKG_CONFIG_PATH="{settings["pkg_config_path"]}:${{PKG_CONFIG_PATH}}" ./configure {flags}'


def rpm_install_command(rpm_path: str, force: bool) -> str:
    """dnf command installing the driver RPM, optionally over an existing one."""
    rpm_path = quote(rpm_path)
    if not force:
        return f"dnf -y localinstall {rpm_path}"
    return (
        f"if rpm -q desktopvideo > /dev/null; then dnf -y reinstall {rpm_path}; "
        f"else dnf -y localinstall --allowerasing {rpm_path}; fi"
    )


def dkms_conf(package: str, version: str) -> str:
    # DEST_MODULE_LOCATION is ignored on RHEL; DKMS uses the distribution directory.
    return f"""PACKAGE_NAME="{package}"
PACKAGE_VERSION="{version}"
AUTOINSTALL="yes"

BUILT_MODULE_NAME[0]="snd-hdspe"
BUILT_MODULE_LOCATION[0]="sound/pci/hdsp/hdspe"
DEST_MODULE_LOCATION[0]="/kernel/sound/pci/"
"""
