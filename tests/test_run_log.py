import io
import logging
import os
import re
import stat

import pytest

from mirror_backup.core.exceptions import ExitCode, LogUnavailableError
from mirror_backup.core.models import LogEntry
from mirror_backup.core.run_log import RunLog

LINE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2} - INFO - Backup started\.$")


def test_lines_are_timestamped_and_mirrored(tmp_path):
    stream = io.StringIO()
    log_dir = tmp_path / "logs"

    with RunLog(str(log_dir), "backup_2024-05-01.log", stream=stream) as run_log:
        run_log.log("Backup started.")

    file_lines = (log_dir / "backup_2024-05-01.log").read_text().splitlines()
    assert len(file_lines) == 1
    assert LINE_PATTERN.match(file_lines[0])
    assert stream.getvalue().splitlines() == file_lines


def test_log_directory_is_owner_only(tmp_path):
    log_dir = tmp_path / "logs"
    with RunLog(str(log_dir), "backup.log", stream=io.StringIO()):
        pass

    mode = stat.S_IMODE(os.stat(log_dir).st_mode)
    assert mode & (stat.S_IRWXG | stat.S_IRWXO) == 0


def test_appends_across_runs(tmp_path):
    for message in ("first", "second"):
        with RunLog(str(tmp_path), "backup.log", stream=io.StringIO()) as run_log:
            run_log.error(message)

    lines = (tmp_path / "backup.log").read_text().splitlines()
    assert [line.split(" - ", 2)[1:] for line in lines] == [["ERROR", "first"], ["ERROR", "second"]]


def test_module_loggers_reach_the_log_file(tmp_path):
    with RunLog(str(tmp_path), "backup.log", stream=io.StringIO()):
        logging.getLogger("mirror_backup.reporters.email_reporter").warning("no mail")

    assert "WARNING - no mail" in (tmp_path / "backup.log").read_text()


def test_close_detaches_handlers(tmp_path):
    run_log = RunLog(str(tmp_path), "backup.log", stream=io.StringIO())
    run_log.open()
    run_log.close()

    run_log.log("after close")
    assert "after close" not in (tmp_path / "backup.log").read_text()


def test_unavailable_log_directory_is_fatal(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")

    run_log = RunLog(str(blocker / "logs"), "backup.log", stream=io.StringIO())
    with pytest.raises(LogUnavailableError) as exc_info:
        run_log.open()
    assert exc_info.value.exit_code == ExitCode.LOG_UNAVAILABLE


def test_separator(tmp_path):
    with RunLog(str(tmp_path), "backup.log", stream=io.StringIO()) as run_log:
        run_log.separator()

    assert (tmp_path / "backup.log").read_text().rstrip().endswith(" - INFO - " + "-" * 40)


def test_log_entry_format():
    entry = LogEntry(timestamp="2024-05-01 10:00:00", message="Backup started.")
    assert entry.format() == "2024-05-01 10:00:00 - Backup started."


def test_invalid_level_rejected(tmp_path):
    with pytest.raises(ValueError):
        RunLog(str(tmp_path), "backup.log", level="LOUD")


def test_quiet_level_only_filters_console(tmp_path):
    stream = io.StringIO()
    with RunLog(str(tmp_path), "backup.log", level="WARNING", stream=stream) as run_log:
        run_log.log("Backup started.")
        run_log.separator()
        run_log.error("rsync failed")

    file_text = (tmp_path / "backup.log").read_text()
    assert "INFO - Backup started." in file_text
    assert "INFO - " + "-" * 40 in file_text
    assert "ERROR - rsync failed" in file_text
    assert "Backup started." not in stream.getvalue()
    assert "ERROR - rsync failed" in stream.getvalue()


def test_debug_level_reaches_file(tmp_path):
    with RunLog(str(tmp_path), "backup.log", level="DEBUG", stream=io.StringIO()):
        logging.getLogger("mirror_backup.core.sync_runner").debug("Starting rsync")

    assert "DEBUG - Starting rsync" in (tmp_path / "backup.log").read_text()
