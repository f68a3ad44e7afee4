from __future__ import annotations

from datetime import datetime, timezone

NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


def issue_payload(
    number: int,
    *,
    repo: str = "org/repo",
    login: str = "outsider",
    created_at: str = "2024-06-05T12:00:00Z",
    labels: list | None = None,
    assignees: list | None = None,
    comments: int = 0,
    title: str | None = None,
) -> dict:
    url = f"https://api.github.com/repos/{repo}/issues/{number}"
    return {
        "number": number,
        "title": title or f"Issue {number}",
        "user": {"login": login},
        "created_at": created_at,
        "html_url": f"https://github.com/{repo}/issues/{number}",
        "url": url,
        "comments": comments,
        "comments_url": f"{url}/comments",
        "labels": labels or [],
        "assignees": assignees or [],
    }


def comment_payload(issue: dict, login: str) -> dict:
    return {
        "user": {"login": login},
        "issue_url": issue["url"],
        "created_at": "2024-06-12T08:00:00Z",
    }


class FakeGitHub:
    """In-memory stand-in for GitHubClient that records every call."""

    def __init__(self, members=(), issues=None, comments=None):
        self.members = [{"login": login} for login in members]
        self.issues = issues or {}
        self.comments = comments or {}
        self.calls: list[tuple] = []

    def get_org_members(self, org):
        self.calls.append(("members", org))
        return list(self.members)

    def get_open_issues(self, owner, repo, since):
        self.calls.append(("issues", f"{owner}/{repo}", since))
        return list(self.issues.get(f"{owner}/{repo}", []))

    def get_comments(self, comments_url, since):
        self.calls.append(("comments", comments_url, since))
        return list(self.comments.get(comments_url, []))

    def comment_calls(self):
        return [call for call in self.calls if call[0] == "comments"]
