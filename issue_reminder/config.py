"""Configuration constants and run settings for the issue reminder."""

from __future__ import annotations

import getpass
import os
import socket
from dataclasses import dataclass

# Defaults for the command line
DEFAULT_ORG = "NLnetLabs"
DEFAULT_SINCE = "7 days ago"
DEFAULT_UNTIL = "2 days ago"
DEFAULT_ACCOUNT = "default"
FALLBACK_USER = "issue-reminder"

# Report wording
SUBJECT_PREFIX = "Reminder about unanswered issues in"
SUBJECT_PLACEHOLDER = f"{SUBJECT_PREFIX} <repository>"
MULTIPLE_REPOSITORIES = "multiple repositories"
MAX_LISTED_REPOSITORIES = 3

# GitHub API
DEFAULT_PER_PAGE = 100


class ConfigurationError(Exception):
    pass


def default_sender() -> str:
    user = os.environ.get("USER")
    if not user:
        try:
            user = getpass.getuser()
        except (KeyError, OSError):
            # No login name and no passwd entry, as in minimal cron containers.
            user = FALLBACK_USER
    host = os.environ.get("HOSTNAME") or socket.gethostname()
    return f"{user}@{host}"


def split_repository(name: str) -> tuple[str, str]:
    """Split ``owner/name`` into its parts, rejecting anything else."""
    owner, sep, repo = name.strip().partition("/")
    if not sep or not owner or not repo or "/" in repo:
        raise ConfigurationError(f"Repository '{name}' must use owner/name format.")
    return owner, repo


@dataclass(frozen=True)
class ReminderConfig:
    repositories: tuple[str, ...]
    to: str = ""
    sender: str = ""
    subject: str | None = None
    org: str = DEFAULT_ORG
    since: str = DEFAULT_SINCE
    until: str = DEFAULT_UNTIL
    account: str = DEFAULT_ACCOUNT
    cat_only: bool = False

    def validate(self) -> None:
        if not self.cat_only and not self.to:
            raise ConfigurationError("Missing option '-t' (recipient)")
        if not any(name.strip() for name in self.repositories):
            raise ConfigurationError("Missing argument 'repository'")
        # Blank entries are left for the fetch step, which aborts on them.
        for name in self.repositories:
            if name.strip():
                split_repository(name)
