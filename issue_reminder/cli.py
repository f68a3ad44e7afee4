"""Issue Reminder CLI - mail a digest of unanswered GitHub issues."""

from __future__ import annotations

import logging
import sys
from typing import NoReturn

import click
from rich.console import Console
from rich.logging import RichHandler

from .config import (
    DEFAULT_ACCOUNT,
    DEFAULT_ORG,
    DEFAULT_SINCE,
    DEFAULT_UNTIL,
    SUBJECT_PLACEHOLDER,
    ConfigurationError,
    ReminderConfig,
    default_sender,
)
from .dates import resolve_window
from .delivery import SENDMAIL, TransportError, deliver
from .deps import DependencyMissingError, check_commands
from .github_api import GitHubClient, NetworkError
from .reminder import EmptyRepositoryError, IssueReminder
from .report import build_report

logger = logging.getLogger(__name__)

err_console = Console(stderr=True)

EXIT_USAGE = 1
EXIT_DEPENDENCY_CHECK = 2
EXIT_EMPTY_REPOSITORY = 9


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _fail(message: str, code: int, usage: str | None = None) -> NoReturn:
    err_console.print(message, style="red", markup=False, highlight=False)
    if usage:
        click.echo(usage, err=True)
    sys.exit(code)


@click.command(
    context_settings={"help_option_names": ["-h", "--help"]},
    help=(
        "Notify the recipient via e-mail about unanswered GitHub issues, if they are "
        "older than '--until' and have no labels or assignees.\n\n"
        "Requires sendmail unless --cat is given."
    ),
)
@click.argument("repositories", nargs=-1, metavar="REPOSITORY...")
@click.option("-t", "--to", default="", help="Email address to send the reminder mail to.")
@click.option("-f", "--from", "sender", default=default_sender, show_default="$USER@$HOSTNAME",
              help="Email address to send the reminder mail from.")
@click.option("--subject", default=None, show_default=SUBJECT_PLACEHOLDER,
              help="Email subject for the reminder mail.")
@click.option("-o", "--org", default=DEFAULT_ORG, show_default=True,
              help="GitHub organization whose members count as answering.")
@click.option("-s", "--since", default=DEFAULT_SINCE, show_default=True,
              help="How old issues may be at most to be fetched and checked for comments.")
@click.option("-u", "--until", default=DEFAULT_UNTIL, show_default=True,
              help="How old issues must be at least to be considered unanswered.")
@click.option("-a", "--account", default=DEFAULT_ACCOUNT, show_default=True,
              help="sendmail account to use.")
@click.option("--cat", "cat_only", is_flag=True,
              help="Print the resulting e-mail instead of sending it out.")
@click.option("--token", default=None, help="GitHub token (or set GITHUB_TOKEN).")
@click.option("-v", "--verbose", is_flag=True, help="Log progress to stderr.")
@click.pass_context
def cli(ctx: click.Context, repositories, to, sender, subject, org, since, until,
        account, cat_only, token, verbose) -> None:
    configure_logging(verbose)

    config = ReminderConfig(
        repositories=tuple(repositories),
        to=to,
        sender=sender,
        subject=subject,
        org=org,
        since=since,
        until=until,
        account=account,
        cat_only=cat_only,
    )
    try:
        config.validate()
        window = resolve_window(config.since, config.until)
    except ConfigurationError as error:
        _fail(str(error), EXIT_USAGE, ctx.get_help())

    if not config.cat_only:
        try:
            check_commands(SENDMAIL)
        except DependencyMissingError as error:
            _fail(str(error), EXIT_USAGE)
        except ValueError as error:
            _fail(str(error), EXIT_DEPENDENCY_CHECK)

    try:
        client = GitHubClient(token)
        result = IssueReminder(client, config, window).collect()
    except ConfigurationError as error:
        _fail(str(error), EXIT_USAGE)
    except EmptyRepositoryError as error:
        _fail(str(error), EXIT_EMPTY_REPOSITORY)
    except NetworkError as error:
        _fail(f"Error: {error}", 1)

    if not result:
        logger.info("No unanswered issues in %s", ", ".join(config.repositories))
        return

    report = build_report(result, config)
    try:
        deliver(report, cat_only=config.cat_only, account=config.account)
    except TransportError as error:
        _fail(str(error), error.exit_status)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    try:
        return cli.main(args=argv, prog_name="issue-reminder", standalone_mode=False) or 0
    except click.UsageError as error:
        err_console.print(error.format_message(), style="red", markup=False, highlight=False)
        click.echo(error.ctx.get_help() if error.ctx else "", err=True)
        return EXIT_USAGE
    except click.Abort:
        err_console.print("Cancelled.", style="yellow")
        return 130
    except SystemExit as exit_:
        return exit_.code if isinstance(exit_.code, int) else 1


if __name__ == "__main__":
    sys.exit(main())
