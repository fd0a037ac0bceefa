"""Email reporter for backup run notifications."""

import logging
from typing import List

from .mail_senders import MailSender
from ..config.config_validator import EMAIL_PATTERN
from ..core.exceptions import NotificationSendFailedError, NotifierUnavailableError

DEFAULT_RECIPIENT = "root@localhost"


class EmailReporter:
    """Notifies the operator of run outcomes by email.

    The strict/permissive policy is decided here, once per run. Under the
    strict policy an unavailable transport or a failed send raises; under the
    permissive policy both are logged as warnings and the run continues.
    """

    def __init__(self, sender: MailSender, recipient: str = DEFAULT_RECIPIENT,
                 strict: bool = False):
        """Initialize email reporter.

        Args:
            sender: Mail transport.
            recipient: Recipient address.
            strict: Whether notification problems end the run.
        """
        self.sender = sender
        self.recipient = recipient or DEFAULT_RECIPIENT
        self.strict = strict
        self.logger = logging.getLogger(__name__)

    def check_available(self) -> None:
        """Preflight check of the mail transport.

        Raises:
            NotifierUnavailableError: Under the strict policy, if the transport
                cannot be used.
        """
        for problem in self.validate_configuration():
            self.logger.warning(f"Email configuration issue: {problem}")

        if not self.sender.is_available():
            self._unavailable()

    def notify(self, subject: str, body: str) -> bool:
        """Send a notification.

        Args:
            subject: Email subject line.
            body: Plain text email content.

        Returns:
            True if the message was handed to the transport successfully.

        Raises:
            NotifierUnavailableError: Strict policy, transport unavailable.
            NotificationSendFailedError: Strict policy, send failed.
        """
        if not self.sender.is_available():
            self._unavailable()
            return False

        if self.sender.send(subject, body, self.recipient):
            self.logger.info(f"Email notification sent to {self.recipient}: {subject}")
            return True

        message = f"Failed to send email notification '{subject}' to {self.recipient}."
        if self.strict:
            raise NotificationSendFailedError(message)
        self.logger.warning(message)
        return False

    def validate_configuration(self) -> List[str]:
        """Validate email configuration.

        Returns:
            List of validation errors (empty if valid).
        """
        errors = []

        if not EMAIL_PATTERN.match(self.recipient):
            errors.append(f"Invalid recipient address: {self.recipient}")

        errors.extend(self.sender.validate_configuration())
        return errors

    def _unavailable(self) -> None:
        message = (f"{self.sender.name} is not installed or not configured. "
                   "Unable to send email notifications.")
        if self.strict:
            raise NotifierUnavailableError(message)
        self.logger.warning(message)
