"""Tests for the installer catalog."""

import re
from unittest import mock

import pytest

from conftest import ScriptedGate
from rocky_media_setup.deploys.verify import CHECKS
from rocky_media_setup.errors import UserDeclinedError
from rocky_media_setup.install import InstallContext
from rocky_media_setup.pipelines import PIPELINES, get_pipeline
from rocky_media_setup.pipelines import drivers, ffmpeg

HEX32 = re.compile(r"^[0-9a-f]{32}$")


class TestCatalog:
    """Structure of every registered pipeline."""

    def test_pipeline_order(self):
        assert list(PIPELINES) == [
            "ffmpeg",
            "ffmpeg-alsa",
            "tbsdtv",
            "dektec",
            "alsa-hdspe",
            "hdspeconf",
            "alsa-tools",
            "tsduck",
        ]

    @pytest.mark.parametrize("key", list(PIPELINES))
    def test_component_names_unique(self, key):
        names = [c.name for c in PIPELINES[key].components]
        assert len(names) == len(set(names))

    @pytest.mark.parametrize("key", list(PIPELINES))
    def test_checksums_are_md5_hex(self, key):
        for component in PIPELINES[key].components:
            for artifact in component.artifacts:
                if artifact.checksum is not None:
                    assert HEX32.match(artifact.checksum), artifact.filename

    @pytest.mark.parametrize("key", list(PIPELINES))
    def test_checks_are_registered(self, key):
        for name in PIPELINES[key].checks:
            assert name in CHECKS

    @pytest.mark.parametrize("key", list(PIPELINES))
    def test_workdir_is_relative(self, key):
        assert not PIPELINES[key].workdir.startswith("/")

    def test_terminal_versions(self):
        assert PIPELINES["ffmpeg"].terminal.required_version == "7.1"
        assert PIPELINES["ffmpeg-alsa"].terminal.required_version == "8.0"
        assert PIPELINES["tsduck"].terminal.required_version == "3.39-3956"

    def test_only_ffmpeg_alsa_offers_prune(self):
        assert [k for k, p in PIPELINES.items() if p.offer_prune] == ["ffmpeg-alsa"]

    def test_get_pipeline_unknown(self):
        with pytest.raises(KeyError, match="Choose one of: ffmpeg"):
            get_pipeline("gstreamer")


class TestActions:
    """Install actions hand work to deploy scripts."""

    def _ctx(self, tmp_path, answers=(), options=None):
        return InstallContext(tmp_path, ScriptedGate(answers), options or {})

    def test_prerequisites_always_include_base(self, tmp_path):
        component = PIPELINES["dektec"].components[0]
        with mock.patch("rocky_media_setup.pipelines.actions.run_deploy") as run_deploy:
            component.install_action(self._ctx(tmp_path))
        script, data = run_deploy.call_args.args
        assert script == "rocky/prerequisites.py"
        assert data["categories"] == ["base", "dkms"]
        assert data["kernel_headers"] is True

    def test_deploy_action_passes_workdir(self, tmp_path):
        component = PIPELINES["dektec"].terminal
        with mock.patch("rocky_media_setup.pipelines.actions.run_deploy") as run_deploy:
            component.install_action(self._ctx(tmp_path))
        script, data = run_deploy.call_args.args
        assert script == "drivers/dektec.py"
        assert data["workdir"] == tmp_path
        assert data["sdk"] == "LinuxSDK_v2024.06.0.tar.gz"

    def test_decklink_15_force_rpm_prompt(self, tmp_path):
        ctx = self._ctx(tmp_path, answers=[True])
        with mock.patch.object(ffmpeg, "run_deploy") as run_deploy:
            ffmpeg.install_decklink_15(ctx)
        data = run_deploy.call_args.args[1]
        assert data["force_rpm"] is True
        assert data["rpm"] == "desktopvideo-15.0a62.x86_64.rpm"
        assert "force install" in ctx.confirm.questions[0]

    def test_ffmpeg_alsa_patch_option(self, tmp_path):
        ctx = self._ctx(tmp_path, options={"ffmpeg_patch": "/tmp/decklink15.patch"})
        with mock.patch.object(ffmpeg, "run_deploy") as run_deploy:
            ffmpeg.install_ffmpeg_alsa(ctx)
        data = run_deploy.call_args.args[1]
        assert data["patch"] == "/tmp/decklink15.patch"
        assert data["profile"] == "alsa"

    def test_tbsdtv_builds_then_installs(self, tmp_path):
        with mock.patch.object(drivers, "run_deploy") as run_deploy:
            drivers.install_tbsdtv(self._ctx(tmp_path, answers=[True]))
        steps = [c.args[1]["step"] for c in run_deploy.call_args_list]
        assert steps == ["build", "install"]

    def test_tbsdtv_declined_after_build(self, tmp_path):
        with mock.patch.object(drivers, "run_deploy") as run_deploy:
            with pytest.raises(UserDeclinedError):
                drivers.install_tbsdtv(self._ctx(tmp_path, answers=[False]))
        assert run_deploy.call_count == 1

    def test_media_build_tarball(self):
        assert drivers.media_build_tarball("20240829") == "media_build-2024-08-29.tar.bz2"
