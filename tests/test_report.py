"""Tests for the reminder mail text."""

from email.header import decode_header, make_header

import pytest

from issue_reminder.models import Issue
from issue_reminder.reminder import ReminderResult, aggregate
from issue_reminder.report import build_report, format_issue, summarize_repos

from helpers import issue_payload


def _result(*repositories):
    return aggregate([
        (repo, [Issue.from_payload(issue_payload(1, repo=repo))]) for repo in repositories
    ])


class TestSummarizeRepos:
    def test_single(self):
        assert summarize_repos(["org/a"]) == "org/a"

    def test_two_joined(self):
        assert summarize_repos(["org/a", "org/b"]) == "org/a, org/b"

    def test_three_joined(self):
        assert summarize_repos(["org/a", "org/b", "org/c"]) == "org/a, org/b, org/c"

    def test_four_is_generic(self):
        assert summarize_repos(["org/a", "org/b", "org/c", "org/d"]) == "multiple repositories"

    def test_empty_raises(self):
        with pytest.raises(ValueError):
            summarize_repos([])


class TestBuildReport:
    def test_subject_for_two_repositories(self, make_config):
        report = build_report(_result("org/a", "org/b"), make_config("org/a", "org/b"))
        assert report.subject == "Reminder about unanswered issues in org/a, org/b"

    def test_subject_for_four_repositories(self, make_config):
        repos = ("org/a", "org/b", "org/c", "org/d")
        report = build_report(_result(*repos), make_config(*repos))
        assert report.subject == "Reminder about unanswered issues in multiple repositories"

    def test_subject_override(self, make_config):
        report = build_report(_result("org/a"), make_config("org/a", subject="Ping"))
        assert report.subject == "Ping"

    def test_empty_result_raises(self, make_config):
        with pytest.raises(ValueError):
            build_report(ReminderResult(), make_config())

    def test_full_message(self, make_config):
        issues = [
            Issue.from_payload(issue_payload(9, title="Second", login="carol",
                                             created_at="2024-06-06T08:30:00Z")),
            Issue.from_payload(issue_payload(3, title="First")),
        ]
        result = aggregate([("org/repo", issues)])
        config = make_config("org/repo", "org/quiet", org="NLnetLabs")

        message = build_report(result, config).as_message()

        assert message == (
            "To: team@example.org\n"
            "From: bot@example.org\n"
            "Subject: Reminder about unanswered issues in org/repo\n"
            "\n"
            "There are issues without answers from members of the specified org.\n"
            "\n"
            "Org: NLnetLabs\n"
            "Checked repos: org/repo org/quiet\n"
            'Filtered by oldest="7 days ago" and newest="2 days ago"\n'
            "\n"
            "Repository: org/repo\n"
            "\n"
            "- First (#3)\n"
            "    by @outsider at 2024-06-05T12:00:00Z\n"
            "    at https://github.com/org/repo/issues/3\n"
            "- Second (#9)\n"
            "    by @carol at 2024-06-06T08:30:00Z\n"
            "    at https://github.com/org/repo/issues/9\n"
            "\n"
        )

    def test_non_ascii_subject_is_encoded(self, make_config):
        report = build_report(_result("org/a"), make_config("org/a", subject="Erinnerung: offene Fragen für Sie"))
        subject_line = report.headers.splitlines()[2]
        assert subject_line.startswith("Subject: =?utf-8?")
        assert subject_line.isascii()
        encoded = subject_line[len("Subject: "):]
        assert str(make_header(decode_header(encoded))) == "Erinnerung: offene Fragen für Sie"

    def test_ascii_subject_is_left_alone(self, make_config):
        report = build_report(_result("org/a"), make_config("org/a", subject="Plain"))
        assert "Subject: Plain\n" in report.headers

    def test_quiet_repository_not_listed(self, make_config):
        report = build_report(_result("org/a"), make_config("org/a", "org/b"))
        assert "Repository: org/a" in report.body
        assert "Repository: org/b" not in report.body
        assert "Checked repos: org/a org/b" in report.body


def test_format_issue():
    issue = Issue.from_payload(issue_payload(12, title="Broken build", login="eve"))
    assert format_issue(issue) == (
        "- Broken build (#12)\n"
        "    by @eve at 2024-06-05T12:00:00Z\n"
        "    at https://github.com/org/repo/issues/12"
    )
