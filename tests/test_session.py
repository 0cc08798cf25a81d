"""
Tests for the watch session.
"""

from collections.abc import Callable, Iterator
from datetime import datetime
from pathlib import Path

import pytest

from aurawatch.auras import Aura, AuraCatalog
from aurawatch.config import Config, WatchConfig
from aurawatch.core import AuthenticationEvent, Notification, Notifier, UnlockEvent
from aurawatch.session import NOTIFICATION_TITLE, AuraSession

AUTH_LINE = "2025.04.19 14:10:45 Debug      -  User Authenticated: Tomachi (usr_0b83d9be-9852)\n"


def unlock_line(aura_id: int) -> str:
    return (
        "2025.04.19 14:12:00 Debug      -  [<color=green>Elite's RNG Land</color>] "
        f"Successfully legitimized Aura #{aura_id}.\n"
    )


class RecordingNotifier(Notifier):
    """Notifier that remembers what it was asked to send."""

    def __init__(self, config: dict | None = None, result: bool = True) -> None:
        super().__init__(config or {})
        self.result = result
        self.sent: list[Notification] = []

    def notify(self, notification: Notification) -> bool:
        self.sent.append(notification)
        return self.result


class BrokenNotifier(Notifier):
    """Notifier that always raises."""

    def notify(self, notification: Notification) -> bool:
        raise RuntimeError("transport down")


@pytest.fixture
def config(log_dir: Path) -> Config:
    """Session config pointing at the test log directory."""
    return Config(watch=WatchConfig(log_dir=str(log_dir), poll_interval=60.0))


@pytest.fixture
def notifier() -> RecordingNotifier:
    """Recording notifier."""
    return RecordingNotifier()


@pytest.fixture
def make_session(config: Config, catalog: AuraCatalog,
                 notifier: RecordingNotifier) -> Iterator[Callable[[], AuraSession]]:
    """Build sessions and stop them afterwards."""
    sessions: list[AuraSession] = []

    def _make() -> AuraSession:
        session = AuraSession(config, catalog=catalog, notifiers=[notifier])
        sessions.append(session)
        return session

    yield _make

    for session in sessions:
        session.stop()


class TestAuraSession:
    """Tests for AuraSession."""

    def test_backlog_unlocks_are_not_notified(
        self, log_dir: Path, write_log: Callable[..., Path],
        make_session: Callable[[], AuraSession], notifier: RecordingNotifier
    ) -> None:
        """Test that unlocks already in the log at start are suppressed."""
        write_log(log_dir / "output_log_1.txt", AUTH_LINE + unlock_line(41))

        session = make_session()
        session.start()

        assert notifier.sent == []

    def test_backlog_login_is_remembered(
        self, log_dir: Path, write_log: Callable[..., Path],
        make_session: Callable[[], AuraSession], notifier: RecordingNotifier
    ) -> None:
        """Test that the login from the backlog names the player of later unlocks."""
        log_file = write_log(log_dir / "output_log_1.txt", AUTH_LINE)
        session = make_session()
        session.start()

        write_log(log_file, unlock_line(41), append=True)
        session.watcher.poll()

        assert session.current_user == AuthenticationEvent(
            user_name="Tomachi",
            user_id="usr_0b83d9be-9852",
            timestamp=datetime(2025, 4, 19, 14, 10, 45),
        )
        assert len(notifier.sent) == 1
        notification = notifier.sent[0]
        assert notification.title == NOTIFICATION_TITLE
        assert notification.message == "Event Horizon\n1 in 1,000,000"
        assert notification.context["user_name"] == "Tomachi"
        assert notification.context["aura_id"] == "41"
        assert notification.context["category"] == "Formidable"
        assert notification.context["timestamp"] == "2025-04-19T14:12:00"

    def test_ignored_tier_is_not_notified(
        self, log_dir: Path, write_log: Callable[..., Path],
        make_session: Callable[[], AuraSession], notifier: RecordingNotifier
    ) -> None:
        """Test that tier 5 auras are skipped by default."""
        log_file = write_log(log_dir / "output_log_1.txt", AUTH_LINE)
        session = make_session()
        session.start()

        write_log(log_file, unlock_line(55), append=True)
        session.watcher.poll()

        assert notifier.sent == []

    def test_unknown_aura_is_notified(
        self, log_dir: Path, write_log: Callable[..., Path],
        make_session: Callable[[], AuraSession], notifier: RecordingNotifier
    ) -> None:
        """Test that an aura missing from the catalog still notifies."""
        log_file = write_log(log_dir / "output_log_1.txt", AUTH_LINE)
        session = make_session()
        session.start()

        write_log(log_file, unlock_line(999), append=True)
        session.watcher.poll()

        assert len(notifier.sent) == 1
        assert notifier.sent[0].context["aura_name"] == "_Unknown_"
        assert notifier.sent[0].context["rarity"] == "???"

    def test_unlocks_after_rotation_backlog_are_suppressed(
        self, log_dir: Path, write_log: Callable[..., Path],
        make_session: Callable[[], AuraSession], notifier: RecordingNotifier
    ) -> None:
        """Test that the first pass over a rotated-in file is treated as backlog."""
        write_log(log_dir / "output_log_1.txt", AUTH_LINE, age=100)
        session = make_session()
        session.start()

        rotated = write_log(log_dir / "output_log_2.txt", AUTH_LINE + unlock_line(41), age=0)
        session.watcher.poll()
        assert notifier.sent == []
        assert session.current_path == rotated

        write_log(rotated, unlock_line(70), append=True)
        session.watcher.poll()
        assert [n.context["aura_name"] for n in notifier.sent] == ["Cupid (VALENTINE'S EXCLUSIVE)"]

    def test_notifier_failure_is_isolated(self, config: Config, catalog: AuraCatalog) -> None:
        """Test that a raising notifier does not stop the others."""
        good = RecordingNotifier()
        session = AuraSession(config, catalog=catalog, notifiers=[BrokenNotifier({}), good])

        sent = session.dispatch(Notification(title="t", message="m"))

        assert sent == 1
        assert len(good.sent) == 1

    def test_dispatch_counts_only_successes(self, config: Config, catalog: AuraCatalog) -> None:
        """Test that a notifier returning False is not counted."""
        session = AuraSession(
            config, catalog=catalog,
            notifiers=[RecordingNotifier(result=False), RecordingNotifier()]
        )

        assert session.dispatch(Notification(title="t", message="m")) == 1

    def test_handle_event_directly(self, config: Config, catalog: AuraCatalog) -> None:
        """Test routing of events without a log file."""
        notifier = RecordingNotifier()
        session = AuraSession(config, catalog=catalog, notifiers=[notifier])

        session.handle_event(UnlockEvent(item_id="60", aura=catalog.resolve_metadata("60")), True)
        session.handle_event(UnlockEvent(item_id="60", aura=catalog.resolve_metadata("60")), False)

        assert len(notifier.sent) == 1
        assert "user_name" not in notifier.sent[0].context

    def test_build_notification_without_name(self, config: Config, catalog: AuraCatalog) -> None:
        """Test the message for a placeholder aura."""
        session = AuraSession(config, catalog=catalog, notifiers=[])

        notification = session.build_notification(UnlockEvent(item_id="5", aura=Aura(id="5")))

        assert notification.message == "Unknown\n???"
        assert notification.context["category"] == "Ordinary"

    def test_missing_log_directory_reported(
        self, tmp_path: Path, catalog: AuraCatalog, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test that a missing directory is reported once on start and not fatal."""
        config = Config(watch=WatchConfig(log_dir=str(tmp_path / "missing"), poll_interval=60.0))
        session = AuraSession(config, catalog=catalog, notifiers=[])

        session.start()
        try:
            assert session.current_path is None
            assert session.watcher.poll() == 0
        finally:
            session.stop()

        assert caplog.text.count("Log directory does not exist") == 1

    def test_classifiers_built_from_config(self, config: Config, catalog: AuraCatalog) -> None:
        """Test that the configured classifiers are attached to the watcher."""
        session = AuraSession(config, catalog=catalog, notifiers=[])

        assert len(session.classifiers) == 2
        assert session.watcher.lines.subscriber_count == 2

    def test_session_keeps_no_unlock_history(self, config: Config, catalog: AuraCatalog) -> None:
        """Test that a long run of unlocks does not grow session state."""
        notifier = RecordingNotifier()
        session = AuraSession(config, catalog=catalog, notifiers=[notifier])

        def sizes() -> dict[str, int]:
            return {
                name: len(value) for name, value in vars(session).items()
                if isinstance(value, (list, dict, set))
            }

        before = sizes()
        for _ in range(50):
            session.handle_event(UnlockEvent(item_id="41", aura=catalog.resolve_metadata("41")), False)

        assert len(notifier.sent) == 50
        assert sizes() == before
