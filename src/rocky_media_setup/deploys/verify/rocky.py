"""Post-install verification checks for Rocky Linux 9 installers."""

from .types import Check


def _count_at_least(minimum: int):
    def check(output: str) -> bool:
        return output.isdigit() and int(output) >= minimum

    return check


CHECKS: dict[str, Check] = {
    c.name: c
    for c in [
        Check(
            "FFmpeg version",
            "/usr/bin/ffmpeg -version 2>/dev/null | head -1 || echo 'missing'",
            lambda x: x.startswith("ffmpeg version"),
            pass_msg="{result}",
            fail_msg="FFmpeg not found",
        ),
        Check(
            "FFmpeg DeckLink",
            "/usr/bin/ffmpeg -hide_banner -buildconf 2>/dev/null | grep -c enable-decklink || true",
            _count_at_least(1),
            pass_msg="Enabled",
            fail_msg="Not enabled",
        ),
        Check(
            "FFmpeg ALSA",
            "/usr/bin/ffmpeg -hide_banner -buildconf 2>/dev/null | grep -c enable-alsa || true",
            _count_at_least(1),
            pass_msg="Enabled",
            fail_msg="Not enabled",
        ),
        Check(
            "ALSA devices",
            "/usr/bin/ffmpeg -hide_banner -sources alsa 2>&1 | grep -cE '(card|device)' || true",
            _count_at_least(1),
            pass_msg="{result} found",
            fail_msg="No ALSA devices found or not properly configured",
        ),
        Check(
            "NVIDIA encoders",
            "/usr/bin/ffmpeg -hide_banner -encoders 2>/dev/null | grep -c nvenc || true",
            _count_at_least(1),
            pass_msg="{result}",
            fail_msg="{result}",
        ),
        Check(
            "DeckLink driver",
            "rpm -q desktopvideo 2>/dev/null || echo 'missing'",
            lambda x: x.startswith("desktopvideo-"),
            pass_msg="{result}",
            fail_msg="desktopvideo not installed",
        ),
        Check(
            "TBSDTV modules",
            "ls /lib/modules/$(uname -r)/updates/extra 2>/dev/null | wc -l",
            _count_at_least(1),
            pass_msg="{result} module directories",
            fail_msg="Not installed",
        ),
        Check(
            "Dektec modules",
            "lsmod | grep -ci '^dt' || true",
            _count_at_least(1),
            pass_msg="Loaded",
            fail_msg="Not loaded (reboot required?)",
        ),
        Check(
            "HDSPe DKMS",
            "dkms status alsa-hdspe 2>/dev/null | grep -c installed || true",
            _count_at_least(1),
            pass_msg="Installed",
            fail_msg="Not installed",
        ),
        Check(
            "HDSPe module",
            "lsmod | grep -c '^snd_hdspe' || true",
            _count_at_least(1),
            pass_msg="Loaded",
            fail_msg="Not loaded",
            remediation="Reboot, then check 'lsmod | grep snd_hdspe'",
        ),
        Check(
            "Secure Boot",
            "mokutil --sb-state 2>/dev/null || echo 'unknown'",
        ),
        Check(
            "hdspeconf",
            "test -x /usr/share/alsa-hdspeconf/hdspeconf && echo 'installed' || echo 'missing'",
            lambda x: x == "installed",
            pass_msg="Installed",
            fail_msg="Not installed",
        ),
        Check(
            "hdspmixer",
            "command -v hdspmixer || echo 'missing'",
            lambda x: x != "missing",
            pass_msg="{result}",
            fail_msg="Not installed",
        ),
        Check(
            "TSDuck",
            "tsversion 2>/dev/null || echo 'missing'",
            lambda x: x != "missing",
            pass_msg="{result}",
            fail_msg="Not installed",
        ),
    ]
}
