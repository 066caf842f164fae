"""Run verification probes through the shell."""

import logging
import subprocess
from collections.abc import Callable

from .types import Check, CheckResult, CheckStatus

logger = logging.getLogger(__name__)

CHECK_TIMEOUT = 30


def _render(template: str, output: str) -> str:
    return template.replace("{result}", output) if template else ""


def run(check: Check, timeout: float = CHECK_TIMEOUT) -> CheckResult:
    """Execute a check's command with ``sh -c`` and judge its stdout.

    A check without check_fn only reports its output (INFO). A probe that
    hangs past the timeout counts as failed.
    """
    logger.debug("Running check %s: %s", check.name, check.command)
    try:
        proc = subprocess.run(
            ["sh", "-c", check.command],
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        return CheckResult(
            check.name,
            CheckStatus.FAIL,
            f"Timed out after {timeout:g}s",
            check.remediation,
        )
    output = proc.stdout.strip()

    if check.check_fn is None:
        return CheckResult(check.name, CheckStatus.INFO, output)

    if check.check_fn(output):
        return CheckResult(check.name, CheckStatus.PASS, _render(check.pass_msg, output))
    return CheckResult(
        check.name,
        CheckStatus.FAIL,
        _render(check.fail_msg, output),
        check.remediation,
    )


def run_check(
    name: str,
    command: str,
    check_fn: Callable[[str], bool] | None = None,
    pass_msg: str = "",
    fail_msg: str = "",
    remediation: str | None = None,
    timeout: float = CHECK_TIMEOUT,
) -> CheckResult:
    """Ad-hoc form of run(); "{result}" in a message is replaced by the output."""
    check = Check(name, command, check_fn, pass_msg, fail_msg, remediation)
    return run(check, timeout=timeout)
