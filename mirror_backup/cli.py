"""Command-line interface for mirror backup."""

import sys
from typing import Tuple

import click

from .config.config_manager import ConfigManager
from .core.exceptions import ConfigurationError, LogUnavailableError, UsageError
from .core.orchestrator import USAGE, BackupOrchestrator
from .core.sync_runner import RsyncRunner
from .reporters.mail_senders import create_mail_sender


@click.command(context_settings={'ignore_unknown_options': True})
@click.argument('paths', nargs=-1, type=click.UNPROCESSED)
def cli(paths: Tuple[str, ...]):
    """Mirror SOURCE into TARGET/current, keeping dated copies of changed files.

    \b
    Usage: backup <source_directory> <target_directory>

    \b
    Environment:
      DRY_RUN=true          simulate only, change nothing
      LOG_DIR               log directory (default: logs)
      EMAIL_RECIPIENT       notification recipient
      NOTIFY_STRICT=true    fail the run when notifications cannot be sent
      BACKUP_CONFIG         path to a YAML configuration file
    """
    if len(paths) != 2:
        _usage()

    try:
        config_manager = ConfigManager()
        config = config_manager.load_config()
    except ConfigurationError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(int(e.exit_code))

    orchestrator = BackupOrchestrator(
        config,
        runner=RsyncRunner(config_manager.get_backup_config().get('rsync_path', 'rsync')),
        mail_sender=create_mail_sender(config_manager.get_notification_config()),
    )

    try:
        outcome = orchestrator.run(paths)
    except UsageError:
        _usage()
    except LogUnavailableError as e:
        click.echo(f"ERROR: {e}", err=True)
        sys.exit(int(e.exit_code))

    sys.exit(outcome.exit_code)


def _usage():
    click.echo(USAGE, err=True)
    click.echo("Please try again.", err=True)
    sys.exit(int(UsageError.exit_code))


def main():
    """Main CLI entry point."""
    cli()


if __name__ == '__main__':
    main()
