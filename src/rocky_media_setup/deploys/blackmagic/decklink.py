"""
Install the Blackmagic DeckLink SDK headers and Desktop Video driver RPM.

The SDK archive must already be downloaded and checksum-verified in workdir.

Usage:
    pyinfra @local deploys/blackmagic/decklink.py --data workdir=<dir> \
        --data sdk=decklink_sdk_drivers.tar.gz --data rpm=desktopvideo-15.0a62.x86_64.rpm
"""

from shlex import quote

from pyinfra.api.deploy import deploy
from pyinfra.operations import files, server

from rocky_media_setup.deploys.utils import get_data, get_flag, rpm_install_command

SDK_BASE_DIR = "decklink_sdk_drivers"
LICENSE_DIR = "/usr/share/licenses/decklink"
DOC_DIR = "/usr/share/doc/decklink"


@deploy("Install DeckLink SDK and drivers")
def install_decklink(workdir: str, sdk: str, rpm: str, force_rpm: bool = False) -> None:
    """Install SDK headers, the driver RPM, license and documentation."""
    base = f"{workdir}/{SDK_BASE_DIR}"
    rpm_path = f"{base}/drivers/rpm/x86_64/{rpm}"

    extract = server.shell(
        name="Extract DeckLink SDK",
        commands=[f"cd {workdir} && rm -rf {base} && tar -xf {sdk}"],
    )

    headers = server.shell(
        name="Install DeckLink SDK headers",
        commands=[f"cp -rf {base}/SDK/include/* /usr/include/"],
        _sudo=True,
        _if=extract.did_succeed,
    )

    driver = server.shell(
        name=f"Install DeckLink driver RPM {rpm}",
        commands=[
            f'test -f {quote(rpm_path)} || {{ echo "DeckLink RPM not found at: {rpm_path}"; exit 1; }}',
            rpm_install_command(rpm_path, force_rpm),
        ],
        _sudo=True,
        _if=headers.did_succeed,
    )

    for path in (LICENSE_DIR, DOC_DIR):
        files.directory(
            name=f"Create {path}",
            path=path,
            _sudo=True,
            _if=driver.did_succeed,
        )

    server.shell(
        name="Copy DeckLink license and documentation",
        commands=[
            f"cp -f {base}/drivers/License.txt {LICENSE_DIR}/",
            f'cp -f "{base}/SDK/Blackmagic DeckLink SDK.pdf" {DOC_DIR}/',
        ],
        _sudo=True,
        _if=driver.did_succeed,
    )


install_decklink(
    workdir=get_data("workdir"),
    sdk=get_data("sdk", "decklink_sdk_drivers.tar.gz"),
    rpm=get_data("rpm"),
    force_rpm=get_flag("force_rpm"),
)
