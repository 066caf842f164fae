"""Tests for the deploy runner, the shared deploy helpers and the packaged scripts."""

import ast
import subprocess
import sys
from pathlib import Path
from unittest import mock

import pytest

from rocky_media_setup.deploys.runner import build_command, deploy_path, run_deploy
from rocky_media_setup.errors import ExternalToolError

DEPLOYS_DIR = deploy_path("drivers/dektec.py").parent.parent
DEPLOY_SCRIPTS = sorted(
    str(p.relative_to(DEPLOYS_DIR))
    for p in DEPLOYS_DIR.glob("*/*.py")
    if p.parent.name != "verify" and p.name != "__init__.py"
)


class TestDeployRunner:
    """Building and running pyinfra commands."""

    def test_deploy_path_exists(self):
        path = deploy_path("ffmpeg/build.py")
        assert path.is_file()
        assert path.name == "build.py"

    def test_unknown_script(self):
        with pytest.raises(FileNotFoundError):
            deploy_path("nope/missing.py")

    def test_build_command(self, tmp_path):
        cmd = build_command(
            "drivers/dektec.py",
            {"workdir": tmp_path, "sdk": "LinuxSDK.tar.gz", "force": True, "skip": None},
        )
        assert cmd[:3] == ["pyinfra", "-y", "@local"]
        assert cmd[3].endswith("drivers/dektec.py")
        assert cmd[4:] == [
            "--data", f"workdir={tmp_path}",
            "--data", "sdk=LinuxSDK.tar.gz",
            "--data", "force=true",
        ]

    def test_list_values_joined(self):
        cmd = build_command("rocky/prerequisites.py", {"categories": ["base", "dkms"]})
        assert cmd[-1] == "categories=base,dkms"

    def test_run_deploy_success(self):
        with mock.patch("subprocess.run", return_value=subprocess.CompletedProcess([], 0)) as run:
            run_deploy("tsduck/tsduck.py", {"step": "packages"})
        assert run.call_args.args[0][-1] == "step=packages"

    def test_run_deploy_failure(self):
        with mock.patch("subprocess.run", return_value=subprocess.CompletedProcess([], 3)):
            with pytest.raises(ExternalToolError) as exc_info:
                run_deploy("tsduck/tsduck.py")
        assert exc_info.value.returncode == 3
        assert "Command failed with code 3" in str(exc_info.value)

    def test_run_deploy_pyinfra_missing(self, monkeypatch, tmp_path):
        """A pyinfra that cannot be started is an installer error, not a traceback."""
        monkeypatch.setenv("PATH", str(tmp_path))
        with pytest.raises(ExternalToolError) as exc_info:
            run_deploy("tsduck/tsduck.py", {"step": "packages"})
        assert exc_info.value.returncode == 127
        assert isinstance(exc_info.value.__cause__, FileNotFoundError)

    def test_run_deploy_spawn_error(self):
        with mock.patch("subprocess.run", side_effect=PermissionError(13, "Permission denied")):
            with pytest.raises(ExternalToolError) as exc_info:
                run_deploy("drivers/dektec.py")
        assert exc_info.value.returncode == 127
        assert exc_info.value.command[0] == "pyinfra"


class TestDeployHelpers:
    """Pure command builders shared by the deploy scripts."""

    def test_build_dependencies_merge(self):
        from rocky_media_setup.deploys.utils import BUILD_DEPS, get_build_dependencies

        deps = get_build_dependencies("base", "dkms")
        assert deps == sorted(deps)
        assert set(BUILD_DEPS["dkms"]) <= set(deps)
        assert len(deps) == len(set(deps))

    def test_build_dependencies_unknown(self):
        from rocky_media_setup.deploys.utils import get_build_dependencies

        with pytest.raises(KeyError):
            get_build_dependencies("gstreamer")

    def test_ffmpeg_configure_profiles(self):
        from rocky_media_setup.deploys.utils import configure_command

        alsa = configure_command("alsa")
        assert "--enable-alsa" in alsa
        assert "--enable-decklink" in alsa
        assert "--libdir=/usr/lib64" in alsa
        full = configure_command("full")
        assert "--enable-nvenc" in full
        assert "--enable-alsa" not in full

    def test_decklink_rpm_command(self):
        from rocky_media_setup.deploys.utils import rpm_install_command

        assert rpm_install_command("/src/d.rpm", False) == "dnf -y localinstall /src/d.rpm"
        forced = rpm_install_command("/src/d.rpm", True)
        assert "dnf -y reinstall /src/d.rpm" in forced
        assert "--allowerasing" in forced

    def test_hdspe_dkms_conf(self):
        from rocky_media_setup.deploys.utils import dkms_conf

        conf = dkms_conf("alsa-hdspe", "0.0")
        assert 'PACKAGE_VERSION="0.0"' in conf
        assert 'BUILT_MODULE_NAME[0]="snd-hdspe"' in conf


def _deploy_functions(tree: ast.Module) -> set[str]:
    """Names of the module's functions decorated with @deploy(...)."""
    names = set()
    for node in tree.body:
        if not isinstance(node, ast.FunctionDef):
            continue
        for decorator in node.decorator_list:
            target = decorator.func if isinstance(decorator, ast.Call) else decorator
            if isinstance(target, ast.Name) and target.id == "deploy":
                names.add(node.name)
    return names


def _module_level_calls(tree: ast.Module) -> set[str]:
    """Plain function calls made while the module body runs."""
    calls = set()
    for node in tree.body:
        if isinstance(node, (ast.FunctionDef, ast.ClassDef)):
            continue
        for child in ast.walk(node):
            if isinstance(child, ast.Call) and isinstance(child.func, ast.Name):
                calls.add(child.func.id)
    return calls


class TestDeployScripts:
    """pyinfra executes deploy files top to bottom, with __name__ set to 'builtins'."""

    def test_scripts_found(self):
        assert "drivers/dektec.py" in DEPLOY_SCRIPTS
        assert "tsduck/tsduck.py" in DEPLOY_SCRIPTS
        assert len(DEPLOY_SCRIPTS) == 11

    @pytest.mark.parametrize("script", DEPLOY_SCRIPTS)
    def test_deploy_called_at_module_level(self, script):
        tree = ast.parse(Path(DEPLOYS_DIR, script).read_text())

        for node in tree.body:
            if isinstance(node, ast.If):
                names = {n.id for n in ast.walk(node.test) if isinstance(n, ast.Name)}
                assert "__name__" not in names, f"{script} guards its entry call"

        deploys = _deploy_functions(tree)
        calls = _module_level_calls(tree)
        assert deploys, f"{script} defines no @deploy function"
        assert deploys & calls, f"{script} never calls its deploy"
        assert "exit" not in calls, f"{script} uses the interactive exit() builtin"

    def test_dry_run_queues_operations(self, tmp_path):
        """A packaged script run through pyinfra proposes its operations."""
        cmd = [
            sys.executable,
            "-m",
            "pyinfra",
            "@local",
            str(deploy_path("drivers/dektec.py")),
            "--data",
            f"workdir={tmp_path}",
            "--data",
            "sdk=LinuxSDK_v2024.06.0.tar.gz",
            "--dry",
        ]
        result = subprocess.run(
            cmd,
            cwd=tmp_path,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            timeout=120,
        )

        assert result.returncode == 0, result.stdout
        assert "Extract Dektec Linux SDK" in result.stdout
        assert "Build and install Dektec DKMS drivers" in result.stdout
        assert not (tmp_path / "LinuxSDK").exists()
