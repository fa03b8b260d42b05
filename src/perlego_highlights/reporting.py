"""Progress reporters used to surface import status to the user."""
from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import List, Optional, Protocol, TextIO


@dataclass(frozen=True)
class ProgressEvent:
    """A user-facing status message.

    ``duration`` is how long the message should stay visible, in seconds;
    ``0`` keeps it until another message replaces it. ``force`` asks the
    sink to replace whatever message is currently shown.
    """

    message: str
    urgent: bool = False
    duration: int = 5
    force: bool = False


class Reporter(Protocol):
    def report(self, event: ProgressEvent) -> None:
        ...


class NullReporter:
    """Discards every event."""

    def report(self, event: ProgressEvent) -> None:
        return None


class ConsoleReporter:
    """Prints events; urgent ones go to ``stderr``."""

    def __init__(self, stream: Optional[TextIO] = None, error_stream: Optional[TextIO] = None) -> None:
        self._stream = stream
        self._error_stream = error_stream

    def report(self, event: ProgressEvent) -> None:
        if event.urgent:
            print(event.message, file=self._error_stream or sys.stderr)
        else:
            print(event.message, file=self._stream or sys.stdout)


class RecordingReporter:
    """Keeps every event in memory."""

    def __init__(self) -> None:
        self.events: List[ProgressEvent] = []

    def report(self, event: ProgressEvent) -> None:
        self.events.append(event)

    @property
    def messages(self) -> List[str]:
        return [event.message for event in self.events]
