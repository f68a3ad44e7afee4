from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import reduce
from typing import Iterator

from .config import ReminderConfig, split_repository
from .dates import TimeWindow
from .filters import answered_issue_urls, drop_answered, partition_by_comments, select_candidates
from .github_api import GitHubClient
from .models import Comment, Issue

logger = logging.getLogger(__name__)


class EmptyRepositoryError(ValueError):
    pass


@dataclass(frozen=True)
class ReminderResult:
    """Unanswered issues per repository, in the order repositories were checked."""

    issues: dict[str, tuple[Issue, ...]] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.issues)

    def __bool__(self) -> bool:
        return bool(self.issues)

    def __iter__(self) -> Iterator[str]:
        return iter(self.issues)

    @property
    def repositories(self) -> list[str]:
        return list(self.issues)

    def items(self):
        return self.issues.items()

    def with_repository(self, repository: str, issues: list[Issue]) -> "ReminderResult":
        if not issues:
            return self
        ordered = tuple(sorted(issues, key=lambda issue: issue.number))
        return ReminderResult({**self.issues, repository: ordered})


def aggregate(per_repository: list[tuple[str, list[Issue]]]) -> ReminderResult:
    return reduce(
        lambda result, entry: result.with_repository(*entry),
        per_repository,
        ReminderResult(),
    )


class IssueReminder:
    def __init__(self, client: GitHubClient, config: ReminderConfig, window: TimeWindow) -> None:
        self.client = client
        self.config = config
        self.window = window

    def fetch_members(self) -> frozenset:
        members = frozenset(
            member["login"] for member in self.client.get_org_members(self.config.org)
        )
        logger.info("Fetched %d members of %s", len(members), self.config.org)
        return members

    def fetch_candidates(self, repository: str, members: frozenset) -> list[Issue]:
        if not repository.strip():
            raise EmptyRepositoryError("Empty repository string")
        owner, name = split_repository(repository)
        payloads = self.client.get_open_issues(owner, name, since=self.window.since_param)
        candidates = select_candidates(payloads, members, self.window)
        logger.info(
            "%s: %d open issues, %d candidates", repository, len(payloads), len(candidates)
        )
        return candidates

    def filter_answered(self, candidates: list[Issue], members: frozenset) -> list[Issue]:
        _, commented = partition_by_comments(candidates)
        if not commented:
            return candidates

        answered: set[str] = set()
        for issue in commented:
            logger.debug("Fetching comments of #%d", issue.number)
            payloads = self.client.get_comments(issue.comments_url, since=self.window.since_param)
            comments = [Comment.from_payload(p) for p in payloads]
            answered |= answered_issue_urls(comments, members)

        logger.debug("%d of %d commented issues are answered", len(answered), len(commented))
        return drop_answered(candidates, answered)

    def unanswered(self, repository: str, members: frozenset) -> list[Issue]:
        candidates = self.fetch_candidates(repository, members)
        return self.filter_answered(candidates, members)

    def collect(self) -> ReminderResult:
        members = self.fetch_members()
        return aggregate(
            [(repository, self.unanswered(repository, members)) for repository in self.config.repositories]
        )
