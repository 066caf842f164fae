"""
Install the Dektec Linux SDK device drivers through DKMS.

Usage:
    pyinfra @local deploys/drivers/dektec.py --data workdir=<dir> --data sdk=LinuxSDK_v2024.06.0.tar.gz
"""

from pyinfra.api.deploy import deploy
from pyinfra.operations import server

from rocky_media_setup.deploys.utils import get_data


@deploy("Install Dektec DKMS drivers")
def install_dektec(workdir: str, sdk: str) -> None:
    """Extract the SDK, then build, install and test the DKMS drivers."""
    sdk_dir = f"{workdir}/LinuxSDK"

    extract = server.shell(
        name="Extract Dektec Linux SDK",
        commands=[f"cd {workdir} && rm -rf {sdk_dir} && tar -xf {sdk}"],
    )

    server.shell(
        name="Build and install Dektec DKMS drivers",
        commands=[
            f"cd {sdk_dir}/Drivers && ./Install",
            f"cd {sdk_dir}/Drivers && ./Install -t",
        ],
        _sudo=True,
        _if=extract.did_succeed,
    )


install_dektec(workdir=get_data("workdir"), sdk=get_data("sdk"))
