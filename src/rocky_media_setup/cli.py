import json as json_module
import logging

import click
import requests
from rich.console import Console

from rocky_media_setup.config import InstallerConfig
from rocky_media_setup.errors import InstallerError, UserDeclinedError
from rocky_media_setup.install import Orchestrator, StatusStore
from rocky_media_setup.pipelines import PIPELINES, Pipeline, get_pipeline
from rocky_media_setup.platform import detect_platform, require_supported

logger = logging.getLogger(__name__)


def _pipeline_arg(ctx, param, value):
    if value is None:
        return None
    try:
        return get_pipeline(value)
    except KeyError as e:
        raise click.BadParameter(e.args[0]) from None


workdir_option = click.option(
    "--workdir",
    type=click.Path(file_okay=False),
    envvar="ROCKY_MEDIA_WORKDIR",
    default=None,
    help="Source/cache directory (defaults to the installer's directory in $HOME)",
)


@click.group()
def main():
    """Idempotent installers for broadcast media software on Rocky Linux 9."""
    pass


@main.command("list")
def list_pipelines():
    """List available installers."""
    from rocky_media_setup.ui import render_pipelines

    render_pipelines(list(PIPELINES.values()))


@main.command()
@click.argument("pipeline", callback=_pipeline_arg)
@click.option("--force", is_flag=True, help="Delete previous sources and install records first")
@click.option(
    "--yes",
    "-y",
    "assume_yes",
    is_flag=True,
    help="Answer every question with its default without asking",
)
@workdir_option
@click.option(
    "--ffmpeg-patch",
    type=click.Path(exists=True, dir_okay=False, resolve_path=True),
    default=None,
    help="Patch file applied to the FFmpeg sources (ffmpeg-alsa)",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug output and remediation hints")
def install(
    pipeline: Pipeline,
    force: bool,
    assume_yes: bool,
    workdir: str | None,
    ffmpeg_patch: str | None,
    verbose: bool,
):
    """Install PIPELINE, skipping components that are already installed."""
    from rocky_media_setup.deploys.verify import run_checks
    from rocky_media_setup.ui import (
        ConfirmationGate,
        render_checks,
        render_run_summary,
        setup_logging,
    )

    console = Console()
    setup_logging(verbose, console)
    gate = ConfirmationGate(console, assume_yes=assume_yes)

    options = {}
    if ffmpeg_patch:
        if pipeline.key != "ffmpeg-alsa":
            logger.warning("--ffmpeg-patch is only used by the ffmpeg-alsa installer.")
        options["ffmpeg_patch"] = ffmpeg_patch
    config = InstallerConfig.for_pipeline(pipeline, workdir=workdir, options=options)

    try:
        platform = detect_platform()
        logger.debug("Detected platform: %s", platform)
        require_supported(platform)

        if not gate(pipeline.description, default=True):
            raise UserDeclinedError("Installation cancelled.")

        with requests.Session() as session:
            orchestrator = Orchestrator(config, gate, session=session)
            report = orchestrator.run(pipeline.components, force=force)

        render_run_summary(pipeline, report, config.cache_dir, console)

        if pipeline.offer_prune and not report.fully_installed:
            if not gate(
                f"Do you want to keep the source directory '{config.cache_dir}'?",
                default=False,
            ):
                orchestrator.prune_sources()
    except UserDeclinedError as e:
        logger.info("%s", e)
        raise SystemExit(e.exit_code)
    except InstallerError as e:
        logger.error("%s", e)
        raise SystemExit(e.exit_code)

    if pipeline.checks:
        results = run_checks(pipeline.checks)
        render_checks(results, verbose=verbose, console=console)
        if any(r.failed for r in results):
            logger.warning("Some checks failed. A reboot may be required to load new drivers.")


@main.command()
@click.argument("pipeline", required=False, callback=_pipeline_arg)
@workdir_option
@click.option(
    "--verbose", "-v", is_flag=True, help="Show remediation hints for failures"
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def status(pipeline: Pipeline | None, workdir: str | None, verbose: bool, as_json: bool):
    """Show install records and verification checks."""
    from rocky_media_setup.deploys.verify import run_checks
    from rocky_media_setup.ui import render_status

    if pipeline is None and workdir:
        raise click.UsageError("--workdir requires a PIPELINE argument")

    platform = detect_platform()
    pipelines = [pipeline] if pipeline else list(PIPELINES.values())

    records = {}
    for p in pipelines:
        config = InstallerConfig.for_pipeline(p, workdir=workdir)
        records[p.key] = StatusStore(config.status_dir).records()

    check_names = [name for p in pipelines for name in p.checks]
    results = run_checks(check_names)

    if as_json:
        data = {
            "platform": {
                "os_type": platform.os_type.name,
                "os_id": platform.os_id,
                "os_version": platform.os_version,
                "kernel_version": platform.kernel_version,
                "is_root": platform.is_root,
            },
            "pipelines": {
                p.key: {
                    c.name: {
                        "required": c.required_version,
                        "installed": records[p.key].get(c.name),
                    }
                    for c in p.components
                }
                for p in pipelines
            },
            "checks": [
                {
                    "name": c.name,
                    "status": c.status.value,
                    "message": c.message,
                    "remediation": c.remediation,
                }
                for c in results
            ],
        }
        click.echo(json_module.dumps(data, indent=2))
    else:
        render_status(platform, pipelines, records, results, verbose=verbose)

    failed = sum(1 for r in results if r.failed)
    raise SystemExit(failed)


if __name__ == "__main__":
    main()
