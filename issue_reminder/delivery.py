"""Send the reminder through sendmail or print it."""

from __future__ import annotations

import logging
import subprocess
import sys
from typing import TextIO

from .config import DEFAULT_ACCOUNT
from .report import Report

logger = logging.getLogger(__name__)

SENDMAIL = "sendmail"


class TransportError(Exception):
    def __init__(self, returncode: int, stderr: str) -> None:
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(f"{SENDMAIL} exited with status {returncode}: {stderr.strip()}")

    @property
    def exit_status(self) -> int:
        # Negative codes mean sendmail was killed by that signal.
        if self.returncode < 0:
            return 128 + abs(self.returncode)
        return self.returncode or 1


def sendmail_command(account: str = DEFAULT_ACCOUNT) -> list[str]:
    if account != DEFAULT_ACCOUNT:
        return [SENDMAIL, "-a", account, "-i", "-t"]
    return [SENDMAIL, "-i", "-t"]


def send_mail(report: Report, account: str = DEFAULT_ACCOUNT) -> None:
    command = sendmail_command(account)
    logger.info("Sending reminder to %s via %s", report.to, " ".join(command))
    result = subprocess.run(
        command, input=report.as_message(), capture_output=True, text=True
    )
    if result.returncode != 0:
        raise TransportError(result.returncode, result.stderr)


def print_report(report: Report, stream: TextIO | None = None) -> None:
    stream = stream or sys.stdout
    stream.write(report.as_message())
    stream.flush()


def deliver(report: Report, *, cat_only: bool, account: str = DEFAULT_ACCOUNT,
            stream: TextIO | None = None) -> None:
    if cat_only:
        logger.info("Printing reminder instead of sending it")
        print_report(report, stream)
    else:
        send_mail(report, account)
