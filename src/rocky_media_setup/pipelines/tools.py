"""User space tools: hdspeconf, alsa-tools and TSDuck."""

from rocky_media_setup.install import Artifact, Component

from .actions import deploy_action, prerequisites
from .types import Pipeline

ALSA_TOOLS_VERSION = "1.2.11"
ALSA_TOOLS = ["hdspmixer", "rmedigicontrol"]
ALSA_TOOLS_TARBALL = Artifact(
    url=f"http://www.alsa-project.org/files/pub/tools/alsa-tools-{ALSA_TOOLS_VERSION}.tar.bz2",
    filename=f"alsa-tools-{ALSA_TOOLS_VERSION}.tar.bz2",
    checksum="bc5f5e5689f46a9d4a0b85dc6661732c",
)

TSDUCK_VERSION = "3.39-3956"
TSDUCK_RELEASE_URL = f"https://github.com/tsduck/tsduck/releases/download/v{TSDUCK_VERSION}"
TSDUCK_RPM = Artifact(
    url=f"{TSDUCK_RELEASE_URL}/tsduck-{TSDUCK_VERSION}.el9.x86_64.rpm",
    filename=f"tsduck-{TSDUCK_VERSION}.el9.x86_64.rpm",
    checksum="6694b4168c04fcffe0bfb305ff9dcef0",
)
TSDUCK_DEVEL_RPM = Artifact(
    url=f"{TSDUCK_RELEASE_URL}/tsduck-devel-{TSDUCK_VERSION}.el9.x86_64.rpm",
    filename=f"tsduck-devel-{TSDUCK_VERSION}.el9.x86_64.rpm",
    checksum="a3b2d123074da731d5f644bd7d8f0c4e",
)
# Fetched from the master branch; upstream publishes no checksum for these
TSDUCK_PREREQUISITES = Artifact(
    url="https://raw.githubusercontent.com/tsduck/tsduck/master/scripts/install-prerequisites.sh",
    filename="install-prerequisites.sh",
)
TSDUCK_LICENSE = Artifact(
    url="https://raw.githubusercontent.com/tsduck/tsduck/master/LICENSE.txt",
    filename="LICENSE.txt",
)

HDSPECONF = Pipeline(
    key="hdspeconf",
    title="RME HDSPe configuration tool",
    description=(
        "Welcome to RME HDSPe sound cards user space configuration tool installation. "
        "Proceed with installation?"
    ),
    workdir="src/hdspeconf",
    components=[
        Component(
            name="prerequisites",
            required_version="1.0",
            install_action=prerequisites("hdspeconf"),
            description="EPEL, CRB, ALSA and wxGTK3 headers",
        ),
        Component(
            name="hdspeconf",
            required_version="1.0",
            install_action=deploy_action("audio/hdspeconf.py"),
            description="hdspeconf built from upstream",
        ),
    ],
    notes=[
        "To open the configuration window, open a terminal window and type 'hdspeconf'.",
        "For more information please check: https://github.com/PhilippeBekaert/hdspeconf",
    ],
    checks=["hdspeconf"],
)

ALSA_TOOLS_PIPELINE = Pipeline(
    key="alsa-tools",
    title=f"alsa-tools {ALSA_TOOLS_VERSION} ({', '.join(ALSA_TOOLS)})",
    description="Welcome to alsa-tools installation. Proceed with installation?",
    workdir="src/alsa-tools",
    components=[
        Component(
            name="prerequisites",
            required_version="1.0",
            install_action=prerequisites("alsa_tools"),
            description="EPEL, CRB, ALSA, FLTK and GTK headers",
        ),
        Component(
            name="alsa_tools",
            required_version=ALSA_TOOLS_VERSION,
            install_action=deploy_action(
                "audio/alsa_tools.py", version=ALSA_TOOLS_VERSION, tools=ALSA_TOOLS
            ),
            artifacts=[ALSA_TOOLS_TARBALL],
            description="hdspmixer and rmedigicontrol",
        ),
    ],
    notes=["For more information please check: https://www.alsa-project.org"],
    checks=["hdspmixer"],
)

TSDUCK = Pipeline(
    key="tsduck",
    title=f"TSDuck {TSDUCK_VERSION}",
    description="Install tsduck MPEG Transport Stream Toolkit?",
    workdir="src/release/tsduck",
    components=[
        Component(
            name="tsduck_prerequisites",
            required_version=TSDUCK_VERSION,
            install_action=deploy_action("tsduck/tsduck.py", step="prerequisites"),
            artifacts=[TSDUCK_PREREQUISITES],
            description="Upstream prerequisites script",
        ),
        Component(
            name="tsduck",
            required_version=TSDUCK_VERSION,
            install_action=deploy_action(
                "tsduck/tsduck.py",
                step="packages",
                rpms=[TSDUCK_RPM.filename, TSDUCK_DEVEL_RPM.filename],
            ),
            artifacts=[TSDUCK_RPM, TSDUCK_DEVEL_RPM, TSDUCK_LICENSE],
            description="TSDuck and TSDuck development RPMs",
        ),
    ],
    checks=["TSDuck"],
)
