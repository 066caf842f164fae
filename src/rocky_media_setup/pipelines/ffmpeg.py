"""FFmpeg installers with Blackmagic DeckLink support."""

from rocky_media_setup.deploys.runner import run_deploy
from rocky_media_setup.install import Artifact, Component, InstallContext

from .actions import EPEL_RELEASE_URL, deploy_action, prerequisites
from .types import Pipeline

DECKLINK_SDK_FILENAME = "decklink_sdk_drivers.tar.gz"

FFMPEG_7 = Artifact(
    url="https://ffmpeg.org/releases/ffmpeg-7.1.tar.xz",
    filename="ffmpeg-7.1.tar.xz",
    checksum="623aa63a72139a82ccb99cd6ee477b94",
)

FFMPEG_8 = Artifact(
    url="https://ffmpeg.org/releases/ffmpeg-8.0.tar.xz",
    filename="ffmpeg-8.0.tar.xz",
    checksum="2c91c725fb1b393618554ff429e4ae43",
)

DECKLINK_SDK_14 = Artifact(
    url="https://drive.usercontent.google.com/download?id=1feBeeeaqFQPZCF07am5VebRtU4jOi4tP&confirm=y",
    filename=DECKLINK_SDK_FILENAME,
    checksum="576520bf6cfc270ea32a3c76d80aad2d",
)
DECKLINK_RPM_14 = "desktopvideo-14.4.1a4.x86_64.rpm"

DECKLINK_SDK_15 = Artifact(
    url="https://drive.usercontent.google.com/download?id=1UvOe7UnwgJMTCDvZZwrwxvWtE9CeepWS&confirm=y",
    filename=DECKLINK_SDK_FILENAME,
    checksum="ef3000b4b0aa0d50ec391cece9ff12e1",
)
DECKLINK_RPM_15 = "desktopvideo-15.0a62.x86_64.rpm"

CUDA_VERSION = "12.6.3"
CUDA_RPM = f"cuda-repo-rhel9-12-6-local-{CUDA_VERSION}_560.35.05-1.x86_64.rpm"
# NVIDIA publishes no MD5 next to the local repo RPM
CUDA_REPO = Artifact(
    url=f"https://developer.download.nvidia.com/compute/cuda/{CUDA_VERSION}/local_installers/{CUDA_RPM}",
    filename=CUDA_RPM,
)

ZVBI = Artifact(
    url="https://sourceforge.net/projects/zapping/files/zvbi/0.2.35/zvbi-0.2.35.tar.bz2",
    filename="zvbi-0.2.35.tar.bz2",
)


def install_decklink_15(ctx: InstallContext) -> None:
    force = ctx.confirm(
        "Do you want to force install the Decklink driver RPM package? "
        "(this may override files)",
        default=False,
    )
    run_deploy(
        "blackmagic/decklink.py",
        {
            "workdir": ctx.cache_dir,
            "sdk": DECKLINK_SDK_FILENAME,
            "rpm": DECKLINK_RPM_15,
            "force_rpm": force,
        },
    )


def install_ffmpeg_alsa(ctx: InstallContext) -> None:
    run_deploy(
        "ffmpeg/build.py",
        {
            "workdir": ctx.cache_dir,
            "version": "8.0",
            "profile": "alsa",
            "patch": ctx.options.get("ffmpeg_patch"),
        },
    )


FFMPEG_FULL = Pipeline(
    key="ffmpeg",
    title="FFmpeg 7.1 (DeckLink, QSV, NVENC, AMF)",
    description="Install ffmpeg with Decklink, Intel QSV, NVIDIA GPU and AMF-AMD GPU support?",
    workdir="src/release/rocky9-ffmpeg",
    components=[
        Component(
            name="prerequisites",
            required_version="1.0",
            install_action=prerequisites("ffmpeg"),
            description="EPEL, CRB, Development Tools and build dependencies",
        ),
        Component(
            name="cuda_toolkit",
            required_version=CUDA_VERSION,
            install_action=deploy_action(
                "ffmpeg/cuda.py", rpm=CUDA_RPM, toolkit="cuda-toolkit-12-6"
            ),
            artifacts=[CUDA_REPO],
            description="NVIDIA CUDA Toolkit repository and toolkit",
        ),
        Component(
            name="external_libraries",
            required_version="1.0",
            install_action=deploy_action("ffmpeg/external_libs.py", zvbi=ZVBI.filename),
            artifacts=[ZVBI],
            description="ffnvcodec, x264, x265, zvbi and libklvanc",
        ),
        Component(
            name="decklink_driver",
            required_version="14.2",
            install_action=deploy_action(
                "blackmagic/decklink.py",
                sdk=DECKLINK_SDK_FILENAME,
                rpm=DECKLINK_RPM_14,
            ),
            artifacts=[DECKLINK_SDK_14],
            description="DeckLink SDK 14.2 headers and Desktop Video driver",
        ),
        Component(
            name="ffmpeg",
            required_version="7.1",
            install_action=deploy_action("ffmpeg/build.py", version="7.1", profile="full"),
            artifacts=[FFMPEG_7],
            description="FFmpeg 7.1 with hardware acceleration",
        ),
    ],
    checks=["FFmpeg version", "FFmpeg DeckLink", "DeckLink driver", "NVIDIA encoders"],
)

FFMPEG_ALSA = Pipeline(
    key="ffmpeg-alsa",
    title="FFmpeg 8.0 (DeckLink 15.0, ALSA)",
    description=(
        "This will install FFmpeg 8.0 with DeckLink 15.0 and ALSA support. Proceed?"
    ),
    workdir="ffmpeg_alsa_sources",
    components=[
        Component(
            name="prerequisites_alsa",
            required_version="1.0",
            install_action=prerequisites("dkms", "ffmpeg_alsa", epel=EPEL_RELEASE_URL),
            description="EPEL, CRB, Development Tools, DKMS and ALSA headers",
        ),
        Component(
            name="decklink_driver",
            required_version="15.0",
            install_action=install_decklink_15,
            artifacts=[DECKLINK_SDK_15],
            description="DeckLink SDK 15.0 headers and Desktop Video driver",
        ),
        Component(
            name="ffmpeg_alsa",
            required_version="8.0",
            install_action=install_ffmpeg_alsa,
            artifacts=[FFMPEG_8],
            description="FFmpeg 8.0 with DeckLink and ALSA",
        ),
    ],
    notes=[
        "A DeckLink SDK 15.0 compatibility patch can be applied with --ffmpeg-patch.",
    ],
    checks=["FFmpeg version", "FFmpeg DeckLink", "FFmpeg ALSA", "ALSA devices", "DeckLink driver"],
    offer_prune=True,
)
