"""Post-install verification framework."""

from collections.abc import Iterable

from .rocky import CHECKS
from .runner import run, run_check
from .types import Check, CheckResult, CheckStatus

__all__ = ["CHECKS", "Check", "CheckResult", "CheckStatus", "get_checks", "run_checks", "run_check"]


def get_checks(names: Iterable[str]) -> list[Check]:
    """Checks for the given names, in order, without duplicates."""
    checks: list[Check] = []
    for name in names:
        check = CHECKS[name]
        if check not in checks:
            checks.append(check)
    return checks


def run_checks(names: Iterable[str]) -> list[CheckResult]:
    """Run the named checks and collect their results."""
    return [run(check) for check in get_checks(names)]
