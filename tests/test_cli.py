# -*- coding: utf-8 -*-
"""Tests for the command-line entry point."""

import pytest

from upclean import cli
from upclean.actions import ActionRegistry, Tier
from upclean.constants import VERSION
from upclean.system.packages import PackageSnapshot


@pytest.fixture(autouse=True)
def wide_console(monkeypatch):
    monkeypatch.setattr(cli.console, "width", 200)


@pytest.fixture
def log_file(tmp_path):
    return tmp_path / "upclean.log"


@pytest.fixture
def system(mocker):
    """A system with one old kernel and no orphaned configs."""
    mocker.patch("upclean.analysis.read_package_snapshot", return_value=PackageSnapshot(
        kernels=[("linux-image-5.15.0-91-generic", "5.15.0-91-generic"),
                 ("linux-image-5.10.0-20-generic", "5.10.0-20-generic")],
    ))
    mocker.patch("upclean.analysis.running_kernel", return_value="5.15.0-91-generic")


@pytest.fixture
def runner(mocker):
    return mocker.patch("upclean.executor.run_command", return_value=0)


def run_cli(temp_config_dir, log_file, *argv):
    return cli.main(["--log-file", str(log_file), *argv])


class TestInformational:
    def test_help(self, capsys, mock_non_root_user):
        assert cli.main(["--help"]) == 0
        out = capsys.readouterr().out
        assert "--execute" in out
        assert "--skip-unsafe" in out

    def test_version(self, capsys, mock_non_root_user):
        assert cli.main(["--version"]) == 0
        assert VERSION in capsys.readouterr().out


class TestErrors:
    def test_unknown_flag(self, capsys):
        assert cli.main(["--bogus"]) == 1
        assert "usage: upclean" in capsys.readouterr().err

    def test_abbreviations_rejected(self):
        assert cli.main(["--exec"]) == 1

    def test_requires_root(self, mock_non_root_user, mocker, capsys):
        analyze = mocker.patch("upclean.cli.analyze")
        assert cli.main([]) == 1
        analyze.assert_not_called()
        assert "root" in capsys.readouterr().out


class TestDryRun:
    def test_default_previews_everything(self, mock_root_user, temp_config_dir, log_file,
                                         system, runner, capsys):
        assert run_cli(temp_config_dir, log_file) == 0
        runner.assert_not_called()
        out = capsys.readouterr().out
        assert "Dry run complete - no changes made" in out
        assert "Remove old kernels" in out
        assert "Run finished" in log_file.read_text(encoding="utf-8")

    def test_update_only(self, mock_root_user, temp_config_dir, log_file, mocker, runner, capsys):
        read = mocker.patch("upclean.analysis.read_package_snapshot")
        assert run_cli(temp_config_dir, log_file, "--update") == 0
        read.assert_not_called()
        out = capsys.readouterr().out
        assert "Refresh package index" in out
        assert "Remove unused packages" not in out

    def test_package_manager_unavailable(self, mock_root_user, temp_config_dir, log_file,
                                         mocker, runner, capsys):
        mocker.patch("upclean.system.packages.capture", side_effect=FileNotFoundError("dpkg-query"))
        mocker.patch("upclean.analysis.running_kernel", return_value="5.15.0-91-generic")
        assert run_cli(temp_config_dir, log_file, "--clean") == 0
        out = capsys.readouterr().out
        assert "Package database unavailable" in out
        assert "Planned actions: 3" in out
        runner.assert_not_called()


class TestExecute:
    def test_skip_unsafe_completes(self, mock_root_user, temp_config_dir, log_file, mocker, runner):
        reg = ActionRegistry()
        reg.enqueue(Tier.SAFE, "Clear package cache", ["apt-get", "clean"])
        reg.enqueue(Tier.UNSAFE, "Remove old kernels", ["apt-get", "-y", "purge", "linux-image-x"],
                    "current kernel detected in removal list")
        mocker.patch("upclean.cli.analyze", return_value=reg)

        assert run_cli(temp_config_dir, log_file, "--execute", "--skip-unsafe") == 0
        runner.assert_called_once_with(("apt-get", "clean"))
        log = log_file.read_text(encoding="utf-8")
        assert "DECISION skip (skipped by policy) [Unsafe] Remove old kernels" in log

    def test_prompts_for_warnings(self, mock_root_user, temp_config_dir, log_file, system,
                                  mocker, runner):
        mocker.patch("builtins.input", return_value="n")
        assert run_cli(temp_config_dir, log_file, "--clean", "--execute") == 0
        called = [c.args[0] for c in runner.call_args_list]
        assert ("apt-get", "clean") in called
        assert not any("purge" in cmd and "linux-image-5.10.0-20-generic" in cmd for cmd in called)

    def test_do_warnings(self, mock_root_user, temp_config_dir, log_file, system, runner):
        assert run_cli(temp_config_dir, log_file, "--clean", "--execute", "--do-warnings") == 0
        runner.assert_any_call(("apt-get", "-y", "purge", "linux-image-5.10.0-20-generic"))

    def test_failures_do_not_change_exit_code(self, mock_root_user, temp_config_dir, log_file,
                                              system, runner):
        runner.return_value = 100
        assert run_cli(temp_config_dir, log_file, "--execute", "--do-warnings") == 0
        assert "[ERROR]" in log_file.read_text(encoding="utf-8")

    def test_interrupt(self, mock_root_user, temp_config_dir, log_file, system, runner, capsys):
        runner.side_effect = KeyboardInterrupt
        assert run_cli(temp_config_dir, log_file, "--execute") == 130
        assert "partially applied" in capsys.readouterr().out


class TestAsk:
    def test_answers_select_intents(self, mock_root_user, temp_config_dir, log_file, mocker,
                                    runner, capsys):
        mocker.patch("builtins.input", side_effect=["yes", "no"])
        read = mocker.patch("upclean.analysis.read_package_snapshot")
        assert run_cli(temp_config_dir, log_file, "--ask") == 0
        read.assert_not_called()
        out = capsys.readouterr().out
        assert "Cleanup skipped." in out
        assert "Refresh package index" in out

    def test_nothing_selected(self, mock_root_user, temp_config_dir, log_file, mocker, capsys):
        mocker.patch("builtins.input", side_effect=["n", "n"])
        analyze = mocker.patch("upclean.cli.analyze")
        assert run_cli(temp_config_dir, log_file, "--ask") == 0
        analyze.assert_not_called()
        assert "Nothing selected." in capsys.readouterr().out


def test_log_file_from_config(mock_root_user, temp_config_dir, tmp_path, system, runner):
    configured = tmp_path / "configured.log"
    (temp_config_dir / "config.toml").write_text(f'[log]\nfile = "{configured}"\n', encoding="utf-8")
    assert cli.main([]) == 0
    assert "Run started" in configured.read_text(encoding="utf-8")


def test_bad_log_file_type_in_config(mock_root_user, temp_config_dir, tmp_path, mocker, system, runner):
    fallback = tmp_path / "fallback.log"
    mocker.patch("upclean.config.DEFAULT_LOG_FILE", str(fallback))
    (temp_config_dir / "config.toml").write_text("[log]\nfile = 5\n", encoding="utf-8")
    assert cli.main([]) == 0
    assert "Run started" in fallback.read_text(encoding="utf-8")
