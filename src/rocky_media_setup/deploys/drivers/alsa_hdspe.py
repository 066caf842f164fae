"""
Install the RME HDSPe MADI/AES/RayDAT/AIO/AIO-Pro ALSA driver through DKMS.

Upstream: https://github.com/PhilippeBekaert/snd-hdspe

Usage:
    pyinfra @local deploys/drivers/alsa_hdspe.py --data workdir=<dir> --data version=0.0
"""

from io import StringIO

from pyinfra.api.deploy import deploy
from pyinfra.operations import files, server

from rocky_media_setup.deploys.utils import dkms_conf, get_data

PKGNAME = "alsa-hdspe"
HDSPE_REPO = "https://github.com/PhilippeBekaert/snd-hdspe.git"
MODPROBE_CONF = "/usr/lib/modprobe.d/hdspe.conf"


@deploy("Install RME HDSPe DKMS driver")
def install_alsa_hdspe(workdir: str, version: str) -> None:
    """Clone the driver, register it with DKMS and blacklist snd-hdspm."""
    src_dir = f"{workdir}/snd-hdspe"
    dkms_dir = f"/usr/src/{PKGNAME}-{version}"

    files.directory(
        name="Remove existing snd-hdspe directory if present",
        path=src_dir,
        present=False,
    )

    clone = server.shell(
        name="Clone snd-hdspe repository",
        commands=[f"git clone {HDSPE_REPO} {src_dir}"],
        _retries=2,  # type: ignore[call-arg]
        _retry_delay=5,  # type: ignore[call-arg]
    )

    remove_old = server.shell(
        name=f"Remove previously registered {PKGNAME} {version}",
        commands=[
            f"dkms remove -m {PKGNAME} -v {version} --all || true",
            f"rm -rf {dkms_dir}",
        ],
        _sudo=True,
        _if=clone.did_succeed,
    )

    conf = files.put(
        name="Create dkms.conf",
        src=StringIO(dkms_conf(PKGNAME, version)),
        dest=f"{dkms_dir}/dkms.conf",
        mode="644",
        create_remote_dir=True,
        _sudo=True,
        _if=remove_old.did_succeed,
    )

    copy = server.shell(
        name="Copy driver sources to DKMS tree",
        commands=[
            f"install -Dm644 {src_dir}/Makefile {dkms_dir}/Makefile",
            f"cp -a --no-preserve=ownership {src_dir}/sound {dkms_dir}",
        ],
        _sudo=True,
        _if=conf.did_succeed,
    )

    server.shell(
        name="Install DKMS driver",
        commands=[f"dkms install -m {PKGNAME} -v {version}"],
        _sudo=True,
        _if=copy.did_succeed,
    )

    files.put(
        name="Blacklist conflicting snd-hdspm driver",
        src=StringIO("blacklist snd-hdspm\n"),
        dest=MODPROBE_CONF,
        mode="644",
        _sudo=True,
    )


install_alsa_hdspe(workdir=get_data("workdir"), version=get_data("version", "0.0"))
