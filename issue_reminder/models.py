from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from .dates import parse_timestamp


def _login(payload: dict[str, Any]) -> str:
    user = payload.get("user") or {}
    return user.get("login", "")


@dataclass(frozen=True)
class Issue:
    number: int
    title: str
    login: str
    created_at: datetime
    html_url: str
    url: str
    comments: int
    comments_url: str

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "Issue":
        return cls(
            number=int(payload["number"]),
            title=payload.get("title", ""),
            login=_login(payload),
            created_at=parse_timestamp(payload["created_at"]),
            html_url=payload.get("html_url", ""),
            url=payload.get("url", ""),
            comments=int(payload.get("comments") or 0),
            comments_url=payload.get("comments_url", ""),
        )


@dataclass(frozen=True)
class Comment:
    login: str
    issue_url: str

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "Comment":
        return cls(
            login=_login(payload),
            issue_url=payload.get("issue_url", ""),
        )
