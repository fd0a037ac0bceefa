"""Mail transports used for run notifications."""

import logging
import os
import shutil
import smtplib
import subprocess
from abc import ABC, abstractmethod
from email.mime.text import MIMEText
from typing import Any, Dict, List, Optional


class MailSender(ABC):
    """Delivers a single plain-text message."""

    name = 'mail'

    @abstractmethod
    def is_available(self) -> bool:
        """Return True if this transport can be used on this host."""

    @abstractmethod
    def send(self, subject: str, body: str, recipient: str) -> bool:
        """Send a message, returning True on success."""

    def validate_configuration(self) -> List[str]:
        """Return transport configuration problems (empty if valid)."""
        return []


class MuttMailSender(MailSender):
    """Sends mail by piping the body into ``mutt``."""

    name = 'mutt'

    def __init__(self, mutt_path: str = 'mutt'):
        self.mutt_path = mutt_path
        self.logger = logging.getLogger(__name__)

    def is_available(self) -> bool:
        resolved = shutil.which(self.mutt_path)
        return resolved is not None and os.access(resolved, os.X_OK)

    def send(self, subject: str, body: str, recipient: str) -> bool:
        """Send message with mutt.

        Args:
            subject: Email subject line.
            body: Plain text email content.
            recipient: Recipient address.

        Returns:
            True if mutt exited with status 0.
        """
        cmd = [self.mutt_path, '-s', subject, '--', recipient]

        self.logger.debug(f"Executing mutt for recipient {recipient}")
        try:
            result = subprocess.run(cmd, input=body, capture_output=True, text=True)
        except OSError as e:
            self.logger.error(f"Error executing mutt: {e}")
            return False

        if result.returncode != 0:
            self.logger.error(f"mutt failed with return code {result.returncode}: {result.stderr.strip()}")
            return False

        self.logger.debug(f"Email sent via mutt to {recipient}")
        return True

    def validate_configuration(self) -> List[str]:
        if not self.mutt_path:
            return ["mutt path not configured"]
        return []


class SmtpMailSender(MailSender):
    """Sends mail directly to an SMTP relay."""

    name = 'smtp'

    def __init__(self, smtp_server: Optional[str] = None, smtp_port: int = 587,
                 smtp_user: Optional[str] = None, smtp_pass: Optional[str] = None,
                 from_address: Optional[str] = None, use_tls: bool = True):
        """Initialize SMTP sender.

        Args:
            smtp_server: SMTP server hostname.
            smtp_port: SMTP server port.
            smtp_user: SMTP username.
            smtp_pass: SMTP password.
            from_address: From email address.
            use_tls: Whether to use TLS encryption.
        """
        self.smtp_server = smtp_server
        self.smtp_port = smtp_port
        self.smtp_user = smtp_user
        self.smtp_pass = smtp_pass
        self.from_address = from_address
        self.use_tls = use_tls
        self.logger = logging.getLogger(__name__)

    def is_available(self) -> bool:
        return bool(self.smtp_server and self.from_address)

    def send(self, subject: str, body: str, recipient: str) -> bool:
        msg = self._create_message(subject, body, recipient)
        try:
            self._send_message(msg)
        except (smtplib.SMTPException, OSError) as e:
            self.logger.error(f"Failed to send email via {self.smtp_server}: {e}")
            return False
        return True

    def _create_message(self, subject: str, body: str, recipient: str) -> MIMEText:
        msg = MIMEText(body, 'plain', 'utf-8')
        msg['Subject'] = subject
        msg['From'] = self.from_address
        msg['To'] = recipient
        return msg

    def _send_message(self, msg: MIMEText) -> None:
        """Send email message via SMTP.

        Args:
            msg: Email message to send.
        """
        self.logger.debug(f"Connecting to SMTP server {self.smtp_server}:{self.smtp_port}")

        with smtplib.SMTP(self.smtp_server, self.smtp_port) as server:
            if self.use_tls:
                server.starttls()
                self.logger.debug("Started TLS encryption")

            if self.smtp_user and self.smtp_pass:
                server.login(self.smtp_user, self.smtp_pass)
                self.logger.debug(f"Authenticated as {self.smtp_user}")

            server.send_message(msg)

    def validate_configuration(self) -> List[str]:
        errors = []

        if not self.smtp_server:
            errors.append("SMTP server not configured")

        if not self.from_address:
            errors.append("From address not configured")

        if not (1 <= int(self.smtp_port) <= 65535):
            errors.append(f"Invalid SMTP port: {self.smtp_port}")

        return errors


def create_mail_sender(notification_config: Dict[str, Any]) -> MailSender:
    """Build the configured mail transport.

    Args:
        notification_config: ``notifications`` configuration section.

    Returns:
        An SMTP sender when ``transport`` is ``smtp``, mutt otherwise.
    """
    if notification_config.get('transport') == 'smtp':
        smtp_config = notification_config.get('smtp') or {}
        return SmtpMailSender(
            smtp_server=smtp_config.get('smtp_server'),
            smtp_port=int(smtp_config.get('smtp_port', 587)),
            smtp_user=smtp_config.get('smtp_user'),
            smtp_pass=smtp_config.get('smtp_pass'),
            from_address=smtp_config.get('from_address'),
            use_tls=smtp_config.get('use_tls', True)
        )
    return MuttMailSender(notification_config.get('mutt_path', 'mutt'))
