import logging
from datetime import date

import pytest

from mirror_backup.config.config_manager import ConfigManager
from mirror_backup.core.sync_runner import SynchronizationRunner
from mirror_backup.reporters.mail_senders import MailSender

RUN_DATE = date(2024, 5, 1)

ENV_VARS = ["DRY_RUN", "LOG_DIR", "EMAIL_RECIPIENT", "LOG_LEVEL", "NOTIFY_STRICT", "BACKUP_CONFIG"]


class FakeRunner(SynchronizationRunner):
    def __init__(self, available=True, exit_code=0, output=()):
        self.available = available
        self.exit_code = exit_code
        self.output = list(output)
        self.commands = []

    def is_available(self):
        return self.available

    def run(self, command, on_output=None):
        self.commands.append(command)
        for line in self.output:
            if on_output:
                on_output(line)
        return self.exit_code


class FakeMailSender(MailSender):
    name = 'fake-mail'

    def __init__(self, available=True, succeed=True):
        self.available = available
        self.succeed = succeed
        self.sent = []

    def is_available(self):
        return self.available

    def send(self, subject, body, recipient):
        self.sent.append((subject, body, recipient))
        return self.succeed


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch, tmp_path):
    """Isolate each test from the caller's environment and working directory."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    yield
    logger = logging.getLogger("mirror_backup")
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def dirs(tmp_path):
    source = tmp_path / "source"
    target = tmp_path / "target"
    source.mkdir()
    target.mkdir()
    (source / "a.txt").write_text("hello")
    return source, target


@pytest.fixture
def config():
    def load(**environ):
        return ConfigManager(environ=environ).load_config()
    return load


@pytest.fixture
def runner():
    return FakeRunner()


@pytest.fixture
def mail_sender():
    return FakeMailSender()


def pytest_configure(config):
    config.addinivalue_line("markers", "integration: runs the real rsync binary")
