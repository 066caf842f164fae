"""Tests for post-install verification checks."""

import subprocess
from unittest import mock

import pytest

from rocky_media_setup.deploys.verify import CHECKS, Check, CheckStatus, get_checks, run_check, run_checks
from rocky_media_setup.deploys.verify.runner import run


class TestRunCheck:
    """Shell probes judged by a predicate."""

    def test_pass_with_result_placeholder(self):
        result = run_check("echo", "echo hello", lambda x: x == "hello", pass_msg="got {result}")
        assert result.status == CheckStatus.PASS
        assert result.message == "got hello"
        assert result.remediation is None

    def test_fail_carries_remediation(self):
        result = run_check(
            "echo",
            "echo nope",
            lambda x: x == "hello",
            fail_msg="saw {result}",
            remediation="install hello",
        )
        assert result.status == CheckStatus.FAIL
        assert result.message == "saw nope"
        assert result.remediation == "install hello"

    def test_info_only(self):
        result = run_check("state", "echo 'SecureBoot disabled'")
        assert result.status == CheckStatus.INFO
        assert result.message == "SecureBoot disabled"

    def test_timeout_fails(self):
        with mock.patch(
            "subprocess.run", side_effect=subprocess.TimeoutExpired(["sh"], 1)
        ):
            result = run_check("slow", "sleep 5", lambda x: True, timeout=1)
        assert result.status == CheckStatus.FAIL
        assert "Timed out" in result.message

    def test_run_check_object(self):
        check = Check("count", "echo 3", lambda x: int(x) >= 1, pass_msg="{result} found")
        assert run(check).message == "3 found"


class TestRegistry:
    """Named checks used by the installers."""

    def test_get_checks_dedupes_in_order(self):
        checks = get_checks(["FFmpeg version", "DeckLink driver", "FFmpeg version"])
        assert [c.name for c in checks] == ["FFmpeg version", "DeckLink driver"]

    def test_unknown_check(self):
        with pytest.raises(KeyError):
            get_checks(["Nonexistent"])

    def test_secure_boot_is_info_only(self):
        assert CHECKS["Secure Boot"].check_fn is None

    @pytest.mark.parametrize(
        "name, output, passed",
        [
            ("FFmpeg DeckLink", "1", True),
            ("FFmpeg DeckLink", "0", False),
            ("FFmpeg DeckLink", "", False),
            ("DeckLink driver", "desktopvideo-15.0a62-1.x86_64", True),
            ("DeckLink driver", "missing", False),
            ("TSDuck", "TSDuck - The MPEG Transport Stream Toolkit - version 3.39-3956", True),
            ("TSDuck", "missing", False),
        ],
    )
    def test_predicates(self, name, output, passed):
        assert CHECKS[name].check_fn(output) is passed

    def test_run_checks_uses_each_command(self):
        completed = subprocess.CompletedProcess([], 0, stdout="missing\n", stderr="")
        with mock.patch("subprocess.run", return_value=completed) as proc:
            results = run_checks(["DeckLink driver", "TSDuck"])
        assert proc.call_count == 2
        assert [r.status for r in results] == [CheckStatus.FAIL, CheckStatus.FAIL]
