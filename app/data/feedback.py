from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Optional


logger = logging.getLogger(__name__)


HISTORY_LIMIT = 200

SUCCESS_MESSAGES = {
    "create": "{label} created successfully",
    "update": "{label} updated successfully",
    "delete": "{label} deleted",
    "activate": "{label} activated",
    "deactivate": "{label} deactivated",
}

FAILURE_MESSAGES = {
    "load": "Could not load {labels}. Showing sample data instead.",
    "create": "Could not create {label}. Please try again.",
    "update": "Could not update {label}. Please try again.",
    "delete": "Could not delete {label}. Please try again.",
    "activate": "Could not activate {label}. Please try again.",
    "deactivate": "Could not deactivate {label}. Please try again.",
}


@dataclass(frozen=True)
class Notification:
    level: str  # "success" | "info" | "error"
    message: str

    @property
    def icon(self) -> str:
        return {"success": "✅", "info": "ℹ️", "error": "⚠️"}.get(self.level, "")


class Notifier:
    """Non-blocking toast queue. Views drain it once per rerun."""

    def __init__(self, history_limit: int = HISTORY_LIMIT):
        self._pending: list[Notification] = []
        self.history: deque[Notification] = deque(maxlen=history_limit)

    def _emit(self, n: Notification) -> None:
        self._pending.append(n)
        self.history.append(n)

    def success(self, operation: str, label: str) -> None:
        template = SUCCESS_MESSAGES.get(operation, "{label} saved")
        self._emit(Notification("success", template.format(label=label)))

    def info(self, message: str) -> None:
        self._emit(Notification("info", message))

    def failure(self, operation: str, label: str, table: str, error: Optional[BaseException] = None) -> None:
        logger.error("%s on '%s' failed: %s", operation, table, error)
        template = FAILURE_MESSAGES.get(operation, "Something went wrong with {label}.")
        self._emit(Notification("error", template.format(label=label.lower(), labels=table)))

    def invalid(self, label: str, errors: list[str]) -> None:
        self._emit(Notification("error", f"{label} not saved: " + "; ".join(errors)))

    def drain(self) -> list[Notification]:
        out, self._pending = self._pending, []
        return out

    def count(self, level: str) -> int:
        return sum(1 for n in self.history if n.level == level)
