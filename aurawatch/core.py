"""
Core interfaces and data structures for Aurawatch.

This module defines the plugin architecture with two categories:
- Classifiers: Which log lines mean something
- Notifiers: How to tell the user
"""

import re
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any, ClassVar

from aurawatch.events import EventHub, Subscriber
from aurawatch.logging_config import get_logger

if TYPE_CHECKING:
    from aurawatch.auras import Aura

logger = get_logger(__name__)

# 2025.04.16 18:07:07 Debug      -  ...
LOG_TIMESTAMP_RE = re.compile(r"^(?P<timestamp>\d{4}\.\d{2}\.\d{2} \d{2}:\d{2}:\d{2})")
LOG_TIMESTAMP_FORMAT = "%Y.%m.%d %H:%M:%S"


def parse_log_timestamp(line: str) -> datetime | None:
    """Parse the VRChat timestamp prefix of a log line, if any."""
    match = LOG_TIMESTAMP_RE.match(line)
    if match is None:
        return None
    try:
        return datetime.strptime(match.group("timestamp"), LOG_TIMESTAMP_FORMAT)
    except ValueError:
        return None


@dataclass(frozen=True)
class LogLine:
    """A complete, non-blank line read from the tracked log."""
    text: str
    source_path: Path
    is_first_read: bool


@dataclass(frozen=True)
class DomainEvent:
    """Base class for events decoded from log lines."""


@dataclass(frozen=True)
class AuthenticationEvent(DomainEvent):
    """A VRChat user logged in."""
    user_name: str
    user_id: str
    timestamp: datetime | None = None


@dataclass(frozen=True)
class UnlockEvent(DomainEvent):
    """An aura was legitimized."""
    item_id: str
    aura: "Aura"
    timestamp: datetime | None = None


@dataclass
class Notification:
    """Message handed to notifiers."""
    title: str
    message: str
    context: dict[str, Any] = field(default_factory=dict)


class LineSource(ABC):
    """Anything that broadcasts LogLine objects."""

    @abstractmethod
    def subscribe(self, callback: Callable[[LogLine], None]) -> Callable[[], None]:
        """Register a line callback and return its unsubscribe function."""
        raise NotImplementedError


class Classifier(ABC):
    """
    Base class for all classifiers.

    A classifier is a compiled pattern plus a decoder for its named
    groups. Subclasses set ``default_pattern``; configuration may
    replace it with a pattern using the same group names.
    """

    default_pattern: ClassVar[str]
    # Set by @register_classifier
    type_name: ClassVar[str] = ""

    def __init__(
        self,
        config: dict[str, Any],
        lookup: Callable[[str], Any] | None = None
    ):
        """
        Initialize the classifier with configuration.

        Args:
            config: Type-specific configuration dictionary
            lookup: Optional metadata resolver for decoded identifiers
        """
        self.config = config
        self.lookup = lookup
        self.pattern = re.compile(config.get("pattern", self.default_pattern))
        self.detections = EventHub(f"classifier.{self.name}")
        self._unsubscribe: Callable[[], None] | None = None

    @property
    def name(self) -> str:
        """Registered type name, or the class name for unregistered classifiers."""
        return self.type_name or type(self).__name__

    def try_match(self, line: str) -> DomainEvent | None:
        """
        Match a line and decode it.

        Returns:
            The decoded event, or None if the line does not match
        """
        match = self.pattern.search(line)
        if match is None:
            return None
        fields = {k: v for k, v in match.groupdict().items() if v is not None}
        return self.decode(fields, line)

    @abstractmethod
    def decode(self, fields: dict[str, str], line: str) -> DomainEvent | None:
        """
        Turn captured groups into an event.

        Args:
            fields: Named groups that participated in the match
            line: The full line, for timestamp extraction

        Returns:
            The decoded event, or None to reject the match
        """
        raise NotImplementedError

    def handle_line(self, line: LogLine) -> None:
        """Classify a broadcast line and republish any event."""
        event = self.try_match(line.text)
        if event is None:
            return
        logger.debug("%s matched: %s", self.name, event)
        self.detections.publish(event, line.is_first_read)

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a ``callback(event, is_first_read)``."""
        return self.detections.subscribe(callback)

    def attach(self, source: LineSource) -> None:
        """Start classifying lines broadcast by ``source``."""
        self.detach()
        self._unsubscribe = source.subscribe(self.handle_line)

    def detach(self) -> None:
        """Stop receiving lines."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None


class Notifier(ABC):
    """
    Base class for all notifiers.

    Notifiers deliver unlock notifications to the user.
    """

    def __init__(self, config: dict[str, Any]):
        """
        Initialize the notifier with configuration.

        Args:
            config: Type-specific configuration dictionary
        """
        self.config = config

    @abstractmethod
    def notify(self, notification: Notification) -> bool:
        """
        Send a notification.

        Args:
            notification: What to tell the user

        Returns:
            True if notification was sent successfully, False otherwise
        """
        raise NotImplementedError
