from __future__ import annotations

import logging
from typing import Protocol

logger = logging.getLogger(__name__)


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"


def completion_message(count: int) -> str:
    if count > 0:
        return f"{_plural(count, 'shift request')} submitted for approval"
    return "Crew verification completed"


def failure_message(member_name: str) -> str:
    return f"Failed to submit request for {member_name}"


def added_message(count: int) -> str:
    return f"Added {_plural(count, 'member')}"


class Notifier(Protocol):
    """User-facing feedback sink. Not needed for correctness."""

    def notify_completion(self, count: int) -> None:
        raise NotImplementedError

    def notify_failure(self, member_name: str) -> None:
        raise NotImplementedError

    def notify_added(self, count: int) -> None:
        raise NotImplementedError


class LoggingNotifier(Notifier):
    def notify_completion(self, count: int) -> None:
        logger.info(completion_message(count))

    def notify_failure(self, member_name: str) -> None:
        logger.warning(failure_message(member_name))

    def notify_added(self, count: int) -> None:
        logger.info(added_message(count))


class CollectingNotifier(Notifier):
    """Keeps messages so a controller can hand them back to the UI."""

    def __init__(self):
        self.messages: list[dict] = []

    def _push(self, category: str, message: str) -> None:
        self.messages.append({"category": category, "message": message})

    def notify_completion(self, count: int) -> None:
        self._push("success", completion_message(count))

    def notify_failure(self, member_name: str) -> None:
        self._push("warning", failure_message(member_name))

    def notify_added(self, count: int) -> None:
        self._push("success", added_message(count))
