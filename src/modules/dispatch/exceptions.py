"""Dispatch domain exceptions."""

from __future__ import annotations

from typing import Iterable


class UnknownCourierEvent(Exception):
    """The courier-reported event has no entry in the mapping table."""

    def __init__(self, event: str, valid_events: Iterable[str]) -> None:
        self.event = event
        self.valid_events = tuple(valid_events)
        super().__init__(
            f"Invalid event: {event}. Valid: {', '.join(self.valid_events)}"
        )


class AssignmentNotFound(Exception):
    """No assignment exists for the order."""


class AssignmentWriteFailed(Exception):
    """The assignment record could not be written."""
