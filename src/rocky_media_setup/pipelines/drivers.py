"""Capture card and sound card driver installers."""

from rocky_media_setup.deploys.runner import run_deploy
from rocky_media_setup.errors import UserDeclinedError
from rocky_media_setup.install import Artifact, Component, InstallContext

from .actions import deploy_action, prerequisites
from .types import Pipeline

SECURE_BOOT_STEPS = """If Secure Boot is enabled, you will need the following steps:
1. Type 'mokutil --import /var/lib/dkms/mok.pub'
2. You'll be prompted to create a password. Enter it twice.
3. Reboot the computer. At boot you'll see the MOK Manager EFI interface
4. Press any key to enter it, then select 'Enroll MOK'
5. Then select 'Continue'
6. And confirm with 'Yes' when prompted
7. After this, enter the password you set up with 'mokutil --import' in the previous step
8. At this point you are done, select 'OK' and the computer will reboot trusting the key for your modules
9. After reboot, you can inspect the MOK certificates with 'mokutil --list-enrolled | grep DKMS'"""

TBSDTV_VERSION = "20240829"
TBSDTV_PACKAGE = Artifact(
    url=f"https://www.tbsiptv.com/download/common/tbs-open-linux-drivers_v{TBSDTV_VERSION}.zip",
    filename=f"tbs-open-linux-drivers_v{TBSDTV_VERSION}.zip",
    checksum="79d8e913a679f87bcbe74a8ce0b93858",
)

DEKTEC_VERSION = "2024.06.0"
DEKTEC_SDK = Artifact(
    url=f"https://www.dektec.com/products/SDK/DTAPI/Downloads/LinuxSDK_v{DEKTEC_VERSION}.tar.gz",
    filename=f"LinuxSDK_v{DEKTEC_VERSION}.tar.gz",
    checksum="897aa00d43f1e42cbb778cfa5cc47262",
)

HDSPE_VERSION = "0.0"


def media_build_tarball(version: str) -> str:
    """Name of the media_build archive inside a TBS package (20240829 -> 2024-08-29)."""
    return f"media_build-{version[:4]}-{version[4:6]}-{version[6:]}.tar.bz2"


def install_tbsdtv(ctx: InstallContext) -> None:
    run_deploy(
        "drivers/tbsdtv.py",
        {
            "workdir": ctx.cache_dir,
            "step": "build",
            "package": TBSDTV_PACKAGE.filename,
            "media_build": media_build_tarball(TBSDTV_VERSION),
        },
    )
    if not ctx.confirm(
        "Final step: install the TBSDTV drivers into the current system and kernel. Proceed?",
        default=True,
    ):
        raise UserDeclinedError("TBSDTV driver installation declined.")
    run_deploy("drivers/tbsdtv.py", {"workdir": ctx.cache_dir, "step": "install"})


TBSDTV = Pipeline(
    key="tbsdtv",
    title="TBSDTV open source drivers",
    description="Install TBSDTV Open Source Linux Driver Offline Package?",
    workdir="src/release/tbsdtv",
    components=[
        Component(
            name="prerequisites",
            required_version="1.0",
            install_action=prerequisites("tbsdtv"),
            description="EPEL, CRB, kernel headers and perl build tools",
        ),
        Component(
            name="tbsdtv_drivers",
            required_version=TBSDTV_VERSION,
            install_action=install_tbsdtv,
            artifacts=[TBSDTV_PACKAGE],
            description="TBS media_build driver tree",
        ),
    ],
    notes=[
        "To uninstall/remove TBSDTV drivers, type:\n"
        "sudo rm -rf /lib/modules/$(uname -r)/updates/extra",
    ],
    checks=["TBSDTV modules"],
)

DEKTEC = Pipeline(
    key="dektec",
    title="Dektec DKMS drivers",
    description="Install dektec Linux DKMS for Dektec device drivers?",
    workdir="src/release/dektec",
    components=[
        Component(
            name="prerequisites",
            required_version="1.0",
            install_action=prerequisites("dkms", kernel_headers=True),
            description="EPEL, CRB, Development Tools, DKMS and kernel headers",
        ),
        Component(
            name="dektec_dkms",
            required_version=DEKTEC_VERSION,
            install_action=deploy_action("drivers/dektec.py", sdk=DEKTEC_SDK.filename),
            artifacts=[DEKTEC_SDK],
            description="Dektec Linux SDK drivers",
        ),
    ],
    notes=[SECURE_BOOT_STEPS],
    checks=["Dektec modules", "Secure Boot"],
)

ALSA_HDSPE = Pipeline(
    key="alsa-hdspe",
    title="RME HDSPe DKMS driver",
    description=(
        "Welcome to RME HDSPe sound cards DKMS driver installation. Proceed with installation?"
    ),
    workdir="src/alsa-hdspe-dkms",
    components=[
        Component(
            name="prerequisites",
            required_version="1.0",
            install_action=prerequisites("dkms", kernel_headers=True),
            description="EPEL, CRB, Development Tools, DKMS and kernel headers",
        ),
        Component(
            name="alsa_hdspe_dkms",
            required_version=HDSPE_VERSION,
            install_action=deploy_action("drivers/alsa_hdspe.py", version=HDSPE_VERSION),
            description="snd-hdspe kernel module",
        ),
    ],
    notes=[
        "Successfully installed DKMS drivers, now reboot and check if the module "
        "is loaded by typing 'lsmod | grep snd_hdspe'.",
        SECURE_BOOT_STEPS,
        "For more information please check: https://github.com/PhilippeBekaert/snd-hdspe",
    ],
    checks=["HDSPe DKMS", "HDSPe module", "Secure Boot"],
)
