import os
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from conftest import FakeMailSender, FakeRunner
from mirror_backup.cli import cli


@pytest.fixture
def cli_runner():
    return CliRunner()


@pytest.mark.parametrize("args", [[], ["only-source"], ["a", "b", "c"], ["--verbose"]])
def test_wrong_argument_count_exits_1(cli_runner, tmp_path, args):
    result = cli_runner.invoke(cli, args)

    assert result.exit_code == 1
    assert "Usage: backup <source_directory> <target_directory>" in result.output
    assert os.listdir(tmp_path) == []


def test_invalid_configuration_exits_1(cli_runner, tmp_path):
    (tmp_path / "backup.yaml").write_text("notifications:\n  transport: pigeon\n")

    result = cli_runner.invoke(cli, ["a", "b"])

    assert result.exit_code == 1
    assert "Configuration error" in result.output


@patch("mirror_backup.cli.create_mail_sender", return_value=FakeMailSender())
@patch("mirror_backup.cli.RsyncRunner")
def test_exit_code_follows_outcome(mock_runner_class, mock_create_sender, cli_runner, dirs):
    source, target = dirs
    mock_runner_class.return_value = FakeRunner(exit_code=12)

    result = cli_runner.invoke(cli, [str(source), str(target)])

    assert result.exit_code == 8
    mock_runner_class.assert_called_once_with('rsync')
    assert "Backup failed during execution" in result.output


@patch("mirror_backup.cli.create_mail_sender", return_value=FakeMailSender())
@patch("mirror_backup.cli.RsyncRunner")
def test_success_exit_code(mock_runner_class, mock_create_sender, cli_runner, dirs, tmp_path):
    source, target = dirs
    mock_runner_class.return_value = FakeRunner()

    result = cli_runner.invoke(cli, [str(source), str(target)], env={'LOG_DIR': 'audit'})

    assert result.exit_code == 0
    assert "Backup completed successfully." in result.output
    assert len(list((tmp_path / "audit").glob("backup_*.log"))) == 1


@patch("mirror_backup.cli.create_mail_sender", return_value=FakeMailSender())
@patch("mirror_backup.cli.RsyncRunner")
def test_log_unavailable_exits_9(mock_runner_class, mock_create_sender, cli_runner, dirs, tmp_path):
    source, target = dirs
    (tmp_path / "blocker").write_text("")

    result = cli_runner.invoke(cli, [str(source), str(target)], env={'LOG_DIR': str(tmp_path / "blocker" / "logs")})

    assert result.exit_code == 9
    assert "Unable to create log file" in result.output


def test_missing_rsync_exits_5(cli_runner, dirs, tmp_path):
    source, target = dirs
    (tmp_path / "backup.yaml").write_text("backup:\n  rsync_path: /nonexistent/rsync\n")

    with patch("mirror_backup.cli.create_mail_sender", return_value=FakeMailSender()):
        result = cli_runner.invoke(cli, [str(source), str(target)])

    assert result.exit_code == 5
    assert not (target / "current").exists()
    log_files = list((tmp_path / "logs").glob("backup_*.log"))
    assert len(log_files) == 1
    assert " - ERROR - " in log_files[0].read_text()
