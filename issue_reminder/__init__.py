"""GitHub Issue Reminder.

Mails a digest of open GitHub issues nobody from the organization has
answered yet:
- no labels and no assignees
- opened by someone outside the organization
- older than the '--until' age and created after '--since'
- no comment from an organization member
"""

__version__ = "1.0.0"
