"""Filtering logic for unanswered issues."""

import logging
from typing import Any, Iterable

from .dates import TimeWindow, parse_timestamp
from .models import Comment, Issue

logger = logging.getLogger(__name__)


def is_candidate(payload: dict[str, Any], members: frozenset, window: TimeWindow) -> bool:
    """Structural check of a raw issue payload.

    An issue is a candidate when it has no labels and no assignees, was opened
    by someone outside ``members`` and was created strictly before
    ``window.newest``. The lower bound is applied by the API's ``since``.
    """
    if payload.get("labels"):
        return False
    if payload.get("assignees"):
        return False

    login = (payload.get("user") or {}).get("login", "")
    if login in members:
        return False

    return parse_timestamp(payload["created_at"]) < window.newest


def select_candidates(
    payloads: Iterable[dict[str, Any]], members: frozenset, window: TimeWindow
) -> list[Issue]:
    return [Issue.from_payload(p) for p in payloads if is_candidate(p, members, window)]


def partition_by_comments(candidates: Iterable[Issue]) -> tuple[list[Issue], list[Issue]]:
    """Split candidates into (without comments, with comments)."""
    silent: list[Issue] = []
    commented: list[Issue] = []
    for issue in candidates:
        (commented if issue.comments > 0 else silent).append(issue)
    return silent, commented


def answered_issue_urls(comments: Iterable[Comment], members: frozenset) -> set[str]:
    return {comment.issue_url for comment in comments if comment.login in members}


def drop_answered(candidates: list[Issue], answered: set[str]) -> list[Issue]:
    survivors = []
    for issue in candidates:
        if issue.url in answered:
            logger.debug("Issue #%d has an answer from a member", issue.number)
            continue
        survivors.append(issue)
    return survivors
