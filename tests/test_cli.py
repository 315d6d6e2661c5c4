"""
Tests for CLI commands: interactive menu, install/uninstall, and global options.
"""

import json
import logging
from unittest.mock import patch

from click.testing import CliRunner

from devstack.core.models.outcome import Outcome, OutcomeAction, RunSummary
from devstack.core.models.platform import Platform
from devstack.main import cli

_ORCH = "devstack.core.services.tool_install.orchestration.orchestrator"

_BAD_EXTRA_REPO = """\
hooks:
  extra_repos:
    - repo: local
      hooks:
        - id: x
          bogus: 1
"""


def _summary(operation="install", action=OutcomeAction.INSTALLED) -> RunSummary:
    return RunSummary(
        operation=operation,
        platform=Platform.LINUX,
        outcomes=[Outcome.of("git", Platform.LINUX, action)],
        versions={"git": "2.43.0"},
    )


def _env(tmp_path) -> dict:
    return {
        "DEVSTACK_LOG_FILE": str(tmp_path / "install_log.txt"),
        "OSTYPE": "linux-gnu",
        "HOME": str(tmp_path),
    }


class TestCLIGlobal:
    """Tests for global CLI behavior."""

    def test_help(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "install developer tools" in result.output

    def test_version(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output


class TestMenu:
    def test_invalid_choice_exits_cleanly(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        runner = CliRunner()
        with patch(f"{_ORCH}.run_install") as inst, patch(f"{_ORCH}.run_uninstall") as rm:
            result = runner.invoke(cli, [], input="3\n", env=_env(tmp_path))
        assert result.exit_code == 0
        assert "Select an option:" in result.output
        assert "Invalid option. Exiting..." in result.output
        inst.assert_not_called()
        rm.assert_not_called()

    def test_empty_choice_is_invalid(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        runner = CliRunner()
        result = runner.invoke(cli, [], input="\n", env=_env(tmp_path))
        assert result.exit_code == 0
        assert "Invalid option. Exiting..." in result.output

    def test_choice_one_installs(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        runner = CliRunner()
        with patch(f"{_ORCH}.run_install", return_value=_summary()) as inst:
            result = runner.invoke(cli, [], input="1\n", env=_env(tmp_path))
        assert result.exit_code == 0
        inst.assert_called_once()
        assert inst.call_args.args[2] is None
        assert "Install finished" in result.output

    def test_choice_two_uninstalls(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        runner = CliRunner()
        with patch(f"{_ORCH}.run_uninstall",
                   return_value=_summary("uninstall", OutcomeAction.REMOVED)) as rm:
            result = runner.invoke(cli, [], input="2\n", env=_env(tmp_path))
        assert result.exit_code == 0
        rm.assert_called_once()


class TestInstallCommand:
    def test_single_tool(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        runner = CliRunner()
        with patch(f"{_ORCH}.run_install", return_value=_summary()) as inst:
            result = runner.invoke(cli, ["install", "helm"], env=_env(tmp_path))
        assert result.exit_code == 0
        assert inst.call_args.args[2] == ["helm"]

    def test_failure_exit_code(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        runner = CliRunner()
        with patch(f"{_ORCH}.run_install", return_value=_summary(action=OutcomeAction.FAILED)):
            result = runner.invoke(cli, ["install", "--json"], env=_env(tmp_path))
        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["ok"] is False
        assert data["outcomes"][0]["action"] == "failed"

    def test_run_log_written(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        runner = CliRunner()

        def _fake_install(ctx, config, tools):
            logging.getLogger("devstack.test").info("git is already installed. Skipping...")
            return _summary(action=OutcomeAction.ALREADY_PRESENT)

        with patch(f"{_ORCH}.run_install", side_effect=_fake_install):
            runner.invoke(cli, ["install"], env=_env(tmp_path))
        assert "already installed" in (tmp_path / "install_log.txt").read_text(encoding="utf-8")

    def test_run_log_directory_created(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        env = _env(tmp_path)
        env["DEVSTACK_LOG_FILE"] = str(tmp_path / "logs" / "install_log.txt")
        runner = CliRunner()
        with patch(f"{_ORCH}.run_install", return_value=_summary()):
            result = runner.invoke(cli, ["install"], env=env)
        assert result.exit_code == 0
        assert (tmp_path / "logs" / "install_log.txt").is_file()

    def test_unopenable_run_log_exits_cleanly(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        env = _env(tmp_path)
        env["DEVSTACK_LOG_FILE"] = str(tmp_path)
        runner = CliRunner()
        with patch(f"{_ORCH}.run_install") as inst:
            result = runner.invoke(cli, ["install"], env=env)
        assert result.exit_code == 1
        assert "Cannot open run log" in result.output
        inst.assert_not_called()

    def test_config_error_exit_code(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        runner = CliRunner()
        with patch(f"{_ORCH}.run_install") as inst:
            result = runner.invoke(
                cli, ["--config", str(tmp_path / "missing.yml"), "install"], env=_env(tmp_path),
            )
        assert result.exit_code == 2
        inst.assert_not_called()

    def test_uses_config_tools(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "devstack.yml").write_text("tools: [git, rsync]\n")
        runner = CliRunner()
        with patch(f"{_ORCH}.run_install", return_value=_summary()) as inst:
            runner.invoke(cli, ["install"], env=_env(tmp_path))
        assert inst.call_args.args[1].tools == ["git", "rsync"]

    def test_bad_extra_repo_exits_before_install(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "devstack.yml").write_text(_BAD_EXTRA_REPO)
        runner = CliRunner()
        with patch(f"{_ORCH}.run_install") as inst:
            result = runner.invoke(cli, ["install"], env=_env(tmp_path))
        assert result.exit_code == 2
        assert "Invalid configuration" in result.output
        inst.assert_not_called()


class TestUninstallCommand:
    def test_json(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        runner = CliRunner()
        with patch(f"{_ORCH}.run_uninstall",
                   return_value=_summary("uninstall", OutcomeAction.NOT_FOUND)):
            result = runner.invoke(cli, ["uninstall", "--json"], env=_env(tmp_path))
        assert result.exit_code == 0
        assert json.loads(result.output)["operation"] == "uninstall"


class TestDetectCommand:
    def test_macos(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(cli, ["detect", "--json"], env={"OSTYPE": "darwin23"})
        assert result.exit_code == 0
        assert json.loads(result.output) == {"platform": "macos", "supported": True}

    def test_unknown_exit_code(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["detect"], env={"OSTYPE": "freebsd13", "OS": ""})
        assert result.exit_code == 1
        assert "unknown" in result.output


class TestStatusCommand:
    def test_json(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        runner = CliRunner()
        with patch("shutil.which", return_value=None):
            result = runner.invoke(cli, ["status", "--json"], env=_env(tmp_path))
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["platform"] == "linux"
        assert data["versions"]["terraform"] == "not found"


class TestHooksCommands:
    def test_show_pipeline(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        runner = CliRunner()
        result = runner.invoke(cli, ["hooks", "show"])
        assert result.exit_code == 0
        assert "repos:" in result.output
        assert "checkov" in result.output

    def test_show_manifest(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        runner = CliRunner()
        result = runner.invoke(cli, ["hooks", "show", "--manifest"])
        assert "validate_manifest" in result.output

    def test_write(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        target = tmp_path / "out"
        runner = CliRunner()
        result = runner.invoke(cli, ["hooks", "write", "--target-dir", str(target), "--json"])
        assert result.exit_code == 0
        assert json.loads(result.output)["ok"] is True
        assert (target / ".pre-commit-config.yaml").is_file()

    def test_show_rejects_bad_extra_repo(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "devstack.yml").write_text(_BAD_EXTRA_REPO)
        runner = CliRunner()
        result = runner.invoke(cli, ["hooks", "show"])
        assert result.exit_code == 2
        assert "repos:" not in result.output


class TestConfigCheck:
    def test_valid(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "devstack.yml").write_text("tools: [git]\n")
        runner = CliRunner()
        result = runner.invoke(cli, ["config", "check"])
        assert result.exit_code == 0
        assert "Configuration is valid" in result.output

    def test_defaults_without_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        runner = CliRunner()
        result = runner.invoke(cli, ["config", "check", "--json"])
        assert result.exit_code == 0
        assert json.loads(result.output)["path"] is None

    def test_invalid(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "devstack.yml").write_text("hooks:\n  target: desktop\n")
        runner = CliRunner()
        result = runner.invoke(cli, ["config", "check"])
        assert result.exit_code == 1
        assert "Configuration errors" in result.output

    def test_bad_extra_repo_is_invalid(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "devstack.yml").write_text(_BAD_EXTRA_REPO)
        runner = CliRunner()
        result = runner.invoke(cli, ["config", "check", "--json"])
        assert result.exit_code == 1
        assert json.loads(result.output)["valid"] is False
