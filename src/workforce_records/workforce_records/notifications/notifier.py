from __future__ import annotations

import logging
from typing import Protocol

logger = logging.getLogger(__name__)


class VerificationNotifier(Protocol):
    """Delivers a one-time verification code to a user through some channel."""

    def send_code(self, *, email: str, code: str) -> None:
        raise NotImplementedError


class LoggingNotifier(VerificationNotifier):
    """Development channel: writes the code to the application log."""

    def send_code(self, *, email: str, code: str) -> None:
        logger.info("verification code for %s: %s", email, code)


class RecordingNotifier(VerificationNotifier):
    """Keeps sent codes in memory; used by tests and local tooling."""

    def __init__(self):
        self.sent: list[tuple[str, str]] = []

    def send_code(self, *, email: str, code: str) -> None:
        self.sent.append((email, code))

    def last_code_for(self, email: str) -> str | None:
        for sent_email, code in reversed(self.sent):
            if sent_email == email:
                return code
        return None
