"""Notification reporters for mirror backup."""

from .email_reporter import EmailReporter
from .mail_senders import MailSender, MuttMailSender, SmtpMailSender, create_mail_sender

__all__ = ["EmailReporter", "MailSender", "MuttMailSender", "SmtpMailSender", "create_mail_sender"]
