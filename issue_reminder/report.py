"""Plain-text rendering of the reminder mail."""

from __future__ import annotations

from dataclasses import dataclass
from email.header import Header

from .config import MAX_LISTED_REPOSITORIES, MULTIPLE_REPOSITORIES, SUBJECT_PREFIX, ReminderConfig
from .dates import format_timestamp
from .models import Issue
from .reminder import ReminderResult

PREAMBLE = "There are issues without answers from members of the specified org."


def summarize_repos(repositories: list[str]) -> str:
    if not repositories:
        raise ValueError("Cannot summarize an empty repository list")
    if len(repositories) > MAX_LISTED_REPOSITORIES:
        return MULTIPLE_REPOSITORIES
    return ", ".join(repositories)


def build_subject(result: ReminderResult) -> str:
    return f"{SUBJECT_PREFIX} {summarize_repos(result.repositories)}"


def format_issue(issue: Issue) -> str:
    return (
        f"- {issue.title} (#{issue.number})\n"
        f"    by @{issue.login} at {format_timestamp(issue.created_at)}\n"
        f"    at {issue.html_url}"
    )


@dataclass(frozen=True)
class Report:
    to: str
    sender: str
    subject: str
    body: str

    @property
    def encoded_subject(self) -> str:
        if self.subject.isascii():
            return self.subject
        return Header(self.subject, "utf-8").encode()

    @property
    def headers(self) -> str:
        return f"To: {self.to}\nFrom: {self.sender}\nSubject: {self.encoded_subject}\n"

    def as_message(self) -> str:
        return f"{self.headers}\n{self.body}"


def render_body(result: ReminderResult, config: ReminderConfig) -> str:
    lines = [
        PREAMBLE,
        "",
        f"Org: {config.org}",
        f"Checked repos: {' '.join(config.repositories)}",
        f'Filtered by oldest="{config.since}" and newest="{config.until}"',
        "",
    ]
    for repository, issues in result.items():
        lines.append(f"Repository: {repository}")
        lines.append("")
        lines.extend(format_issue(issue) for issue in sorted(issues, key=lambda i: i.number))
        lines.append("")
    return "\n".join(lines) + "\n"


def build_report(result: ReminderResult, config: ReminderConfig) -> Report:
    if not result:
        raise ValueError("No unanswered issues to report")
    return Report(
        to=config.to,
        sender=config.sender,
        subject=config.subject or build_subject(result),
        body=render_body(result, config),
    )
