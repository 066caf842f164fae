"""Install actions that hand work over to packaged pyinfra deploys."""

from collections.abc import Callable

from rocky_media_setup.deploys.runner import run_deploy
from rocky_media_setup.install import InstallContext

Action = Callable[[InstallContext], None]

EPEL_RELEASE_URL = "https://dl.fedoraproject.org/pub/epel/epel-release-latest-9.noarch.rpm"


def deploy_action(script: str, **data: object) -> Action:
    """Run a deploy script with the cache directory as its workdir."""

    def action(ctx: InstallContext) -> None:
        run_deploy(script, {"workdir": ctx.cache_dir, **data})

    return action


def prerequisites(
    *categories: str, epel: str = "epel-release", kernel_headers: bool = False
) -> Action:
    def action(ctx: InstallContext) -> None:
        run_deploy(
            "rocky/prerequisites.py",
            {
                "categories": ["base", *categories],
                "epel": epel,
                "kernel_headers": kernel_headers,
            },
        )

    return action
