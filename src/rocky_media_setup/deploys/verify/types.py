"""Types for post-install checks."""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum


class CheckStatus(Enum):
    PASS = "pass"
    FAIL = "fail"
    INFO = "info"  # informational probe, never fails


@dataclass
class CheckResult:
    """Outcome of one probe as shown by `status` and after an install."""

    name: str
    status: CheckStatus
    message: str = ""
    remediation: str | None = None

    @property
    def failed(self) -> bool:
        return self.status == CheckStatus.FAIL


@dataclass(frozen=True)
class Check:
    """A named shell probe and how to judge its output."""

    name: str
    command: str
    check_fn: Callable[[str], bool] | None = None
    pass_msg: str = ""
    fail_msg: str = ""
    remediation: str | None = None
