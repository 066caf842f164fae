"""Terminal output: tagged logging, prompts and rich dashboards."""

from .console import TaggedHandler, setup_logging
from .dashboard import render_checks, render_pipelines, render_run_summary, render_status
from .prompts import ConfirmationGate

__all__ = [
    "ConfirmationGate",
    "TaggedHandler",
    "render_checks",
    "render_pipelines",
    "render_run_summary",
    "render_status",
    "setup_logging",
]
