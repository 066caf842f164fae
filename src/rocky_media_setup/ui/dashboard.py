"""Rich rendering for installer listings, status and run summaries."""

from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from rocky_media_setup.deploys.verify import CheckResult, CheckStatus
from rocky_media_setup.install import InstallState, RunReport
from rocky_media_setup.pipelines import Pipeline
from rocky_media_setup.platform import Platform

STATUS_ICONS = {
    CheckStatus.PASS: "[green]OK[/green]",
    CheckStatus.FAIL: "[red]FAIL[/red]",
    CheckStatus.INFO: "[dim]-[/dim]",
}

STATE_LABELS = {
    InstallState.DONE: "[green]Installed[/green]",
    InstallState.SKIPPED: "[dim]Skipped[/dim]",
    InstallState.FAILED: "[red]Failed[/red]",
    InstallState.RUNNING: "[yellow]Interrupted[/yellow]",
    InstallState.ALREADY_SATISFIED: "[dim]Already installed[/dim]",
    InstallState.NOT_CHECKED: "[dim]Not run[/dim]",
}


def _build_platform_panel(platform: Platform) -> Panel:
    platform_info = f"OS:      {platform.os_id or '(unknown)'}"
    if platform.os_version:
        platform_info += f" {platform.os_version}"
    platform_info += f"\nKernel:  {platform.kernel_version}"
    if not platform.is_rocky9:
        platform_info += "\n[red]Unsupported: Rocky Linux 9 required[/red]"
    return Panel(platform_info, title="Platform")


def _build_components_table(pipeline: Pipeline, records: dict[str, str]) -> Panel:
    table = Table(show_header=True, header_style="bold", box=None)
    table.add_column("Component", style="cyan", min_width=20)
    table.add_column("Required", width=12)
    table.add_column("Installed", width=12)
    table.add_column("Description", min_width=20)

    for comp in pipeline.components:
        installed = records.get(comp.name)
        if installed == comp.required_version:
            installed_text = f"[green]{escape(installed)}[/green]"
        elif installed:
            installed_text = f"[yellow]{escape(installed)}[/yellow]"
        else:
            installed_text = "[dim]-[/dim]"
        table.add_row(comp.name, comp.required_version, installed_text, comp.description)

    return Panel(table, title=f"{pipeline.title} [dim]({pipeline.key})[/dim]")


def _build_checks_table(results: list[CheckResult], verbose: bool) -> Table:
    table = Table(show_header=True, header_style="bold")
    table.add_column("Check", style="cyan", min_width=20)
    table.add_column("Status", justify="center", width=6)
    table.add_column("Details", min_width=20)

    for check in results:
        details = escape(check.message)
        if verbose and check.remediation and check.failed:
            details += f" [dim]({escape(check.remediation)})[/dim]"
        table.add_row(check.name, STATUS_ICONS[check.status], details)
    return table


def render_pipelines(pipelines: list[Pipeline], console: Console | None = None) -> None:
    console = console or Console()
    table = Table(show_header=True, header_style="bold")
    table.add_column("Installer", style="cyan", min_width=12)
    table.add_column("Description", min_width=30)
    table.add_column("Components")

    for pipeline in pipelines:
        components = ", ".join(
            f"{c.name} {c.required_version}" for c in pipeline.components
        )
        table.add_row(pipeline.key, pipeline.title, components)

    console.print(table)


def render_status(
    platform: Platform,
    pipelines: list[Pipeline],
    records: dict[str, dict[str, str]],
    results: list[CheckResult],
    verbose: bool = False,
    console: Console | None = None,
) -> None:
    """Show install records per pipeline followed by verification checks."""
    console = console or Console()
    console.print(_build_platform_panel(platform))
    console.print()

    for pipeline in pipelines:
        console.print(_build_components_table(pipeline, records.get(pipeline.key, {})))

    if results:
        render_checks(results, verbose=verbose, console=console)


def render_checks(
    results: list[CheckResult], verbose: bool = False, console: Console | None = None
) -> None:
    console = console or Console()
    console.print()
    console.print(_build_checks_table(results, verbose))

    passed = sum(1 for c in results if c.status == CheckStatus.PASS)
    failed = sum(1 for c in results if c.failed)
    if failed == 0:
        summary = "[green bold]ALL CHECKS PASSED[/green bold]"
        border_style = "green"
    else:
        summary = f"[red bold]{failed} CHECKS FAILED[/red bold]"
        border_style = "red"
    console.print(
        Panel(
            f"{summary}\nPassed: {passed} | Failed: {failed}",
            title="Summary",
            border_style=border_style,
        )
    )


def render_run_summary(
    pipeline: Pipeline,
    report: RunReport,
    cache_dir: Path,
    console: Console | None = None,
) -> None:
    """Final output of an install: component outcomes, cache location, notes."""
    console = console or Console()

    table = Table(show_header=False, box=None)
    table.add_column("Component", style="cyan", min_width=20)
    table.add_column("Result")
    for name, state in report.states.items():
        table.add_row(name, STATE_LABELS[state])

    console.print()
    if report.fully_installed:
        title = f"{pipeline.title} is already fully installed"
    else:
        title = "Installation finished successfully!"
    console.print(Panel(table, title=title, border_style="green"))
    console.print(f"Downloaded sources are stored in folder '{escape(str(cache_dir))}'.")

    for note in pipeline.notes:
        console.print()
        console.print(Panel(escape(note), title="Next steps", border_style="yellow"))
