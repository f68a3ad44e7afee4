from __future__ import annotations

import pytest

from issue_reminder.config import ReminderConfig
from issue_reminder.dates import resolve_window

from helpers import NOW


@pytest.fixture
def window():
    return resolve_window("7 days ago", "2 days ago", now=NOW)


@pytest.fixture
def make_config():
    def _make(*repositories, **overrides):
        settings = {"to": "team@example.org", "sender": "bot@example.org"}
        settings.update(overrides)
        return ReminderConfig(repositories=tuple(repositories or ("org/repo",)), **settings)

    return _make
