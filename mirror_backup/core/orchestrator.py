"""Main backup orchestration class."""

import logging
from datetime import date
from typing import Any, Dict, Optional, Sequence

from .exceptions import (
    BackupError,
    NotificationError,
    SyncFailedError,
    SyncToolUnavailableError,
    UsageError,
)
from .models import BackupOutcome, BackupRequest
from .run_log import RunLog
from .sync_runner import SynchronizationRunner, build_sync_command
from .validator import PathValidator
from ..reporters.email_reporter import EmailReporter
from ..reporters.mail_senders import MailSender
from ..utils.formatters import format_command, format_date_stamp

USAGE = "Usage: backup <source_directory> <target_directory>"

ERROR_SUBJECT = "Backup Script Error"
SUCCESS_SUBJECT = "Backup Completed Successfully"


class BackupOrchestrator:
    """Drives one backup run from arguments to notification."""

    def __init__(self, config: Dict[str, Any], runner: SynchronizationRunner,
                 mail_sender: MailSender, validator: Optional[PathValidator] = None,
                 today: Optional[date] = None, stream=None):
        """Initialize backup orchestrator.

        Args:
            config: Loaded configuration (see ``ConfigManager.load_config``).
            runner: Synchronization tool.
            mail_sender: Mail transport used for notifications.
            validator: Path validator, a default one if omitted.
            today: Date of the run, the current date if omitted.
            stream: Console stream for the run log.
        """
        self.config = config
        self.runner = runner
        self.mail_sender = mail_sender
        self.validator = validator or PathValidator()
        self.today = today
        self.stream = stream
        self.logger = logging.getLogger(__name__)

    def build_request(self, arguments: Sequence[str]) -> BackupRequest:
        """Resolve the request for this run.

        Raises:
            UsageError: If there are not exactly two arguments.
        """
        if len(arguments) != 2:
            raise UsageError(USAGE)

        date_stamp = format_date_stamp(self.today or date.today())
        backup_config = self.config.get('backup', {})
        logging_config = self.config.get('logging', {})

        return BackupRequest(
            source_path=arguments[0],
            target_path=arguments[1],
            dry_run=bool(backup_config.get('dry_run', False)),
            date_stamp=date_stamp,
            log_directory=logging_config.get('directory', 'logs'),
            log_file_name=f"backup_{date_stamp}.log",
        )

    def run(self, arguments: Sequence[str]) -> BackupOutcome:
        """Run a backup.

        Args:
            arguments: Positional command-line arguments (source, target).

        Returns:
            Outcome of the run; ``exit_code`` is the process exit status.

        Raises:
            UsageError: Wrong argument count. Raised before anything is
                written to disk.
            LogUnavailableError: The log file cannot be created.
        """
        request = self.build_request(arguments)

        run_log = RunLog(
            request.log_directory,
            request.log_file_name,
            level=self.config.get('logging', {}).get('level', 'INFO'),
            stream=self.stream,
        )
        run_log.open()
        try:
            return self._run(request, run_log)
        finally:
            run_log.close()

    def _run(self, request: BackupRequest, run_log: RunLog) -> BackupOutcome:
        notification_config = self.config.get('notifications', {})
        notifier = EmailReporter(
            self.mail_sender,
            recipient=notification_config.get('recipient'),
            strict=bool(notification_config.get('strict', False)),
        )
        self.logger.debug(
            f"Notification policy: {'strict' if notifier.strict else 'permissive'}, "
            f"transport: {self.mail_sender.name}, recipient: {notifier.recipient}"
        )

        try:
            self._preflight(notifier)
            self.validator.validate(request.source_path, request.target_path)
            outcome = self._synchronize(request, run_log, notifier)
        except BackupError as e:
            outcome = self._abort(e, request, run_log, notifier)

        run_log.separator()
        return outcome

    def _preflight(self, notifier: EmailReporter) -> None:
        """Check required external tools.

        Raises:
            SyncToolUnavailableError: If the synchronization tool is missing.
            NotifierUnavailableError: Strict policy, mail transport missing.
        """
        if not self.runner.is_available():
            raise SyncToolUnavailableError(
                f"This script requires {self.runner.name} to run properly. "
                f"Please install {self.runner.name} and try again."
            )
        notifier.check_available()

    def _synchronize(self, request: BackupRequest, run_log: RunLog,
                     notifier: EmailReporter) -> BackupOutcome:
        command = build_sync_command(request, self.runner.executable)

        run_log.separator()
        run_log.log("Backup started.")
        run_log.log(f"Source Directory: {request.source_path}")
        run_log.log(f"Target Directory: {request.current_path}")
        run_log.log(f"Backup Directory: {request.backup_path}")
        run_log.separator()
        if request.dry_run:
            run_log.log("Dry run enabled: no files will be changed. Planned actions follow.")
        run_log.log(f"Running: {format_command(command)}")

        exit_code = self.runner.run(command, on_output=run_log.info)

        if exit_code != 0:
            raise SyncFailedError(
                f"Backup failed during execution ({self.runner.name} exit code {exit_code})."
            )

        message = "Backup completed successfully."
        run_log.log(message)
        notifier.notify(
            SUCCESS_SUBJECT,
            "The backup process has been completed successfully. "
            f"Please check log file for more details: {request.log_path}",
        )
        return BackupOutcome.success(message)

    def _abort(self, error: BackupError, request: BackupRequest, run_log: RunLog,
               notifier: EmailReporter) -> BackupOutcome:
        """Log and report a failed run."""
        run_log.error(f"{error} Please check log file for more details: {request.log_path}")

        if isinstance(error, NotificationError):
            return BackupOutcome.from_error(error)

        try:
            notifier.notify(
                ERROR_SUBJECT,
                f"ERROR: {error}\n\nPlease check log file for more details: {request.log_path}",
            )
        except NotificationError as e:
            run_log.error(str(e))
            return BackupOutcome.from_error(e)

        return BackupOutcome.from_error(error)
