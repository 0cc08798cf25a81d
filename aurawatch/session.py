"""
Session that wires the log watcher, classifiers and notifiers together.
"""

from pathlib import Path

from aurawatch.auras import AuraCatalog, AuraCategory
from aurawatch.config import Config
from aurawatch.core import AuthenticationEvent, Classifier, Notification, Notifier, UnlockEvent
from aurawatch.logging_config import get_logger
from aurawatch.plugins import create_classifier, create_notifier
from aurawatch.watcher import LogWatcher

logger = get_logger(__name__)

NOTIFICATION_TITLE = "Unlocked New Aura!"


class AuraSession:
    """
    Turns detected unlocks into notifications.

    Unlocks replayed from a file's backlog are not notified, and neither
    are auras whose tier is listed in ``ignored_tiers``. The most recent
    login is always remembered, backlog or not, so that notifications
    can name the player.
    """

    def __init__(
        self,
        config: Config,
        catalog: AuraCatalog | None = None,
        watcher: LogWatcher | None = None,
        notifiers: list[Notifier] | None = None
    ) -> None:
        """
        Initialize the session.

        Args:
            config: Loaded configuration
            catalog: Aura metadata (loaded from config.auras_json if not given)
            watcher: Log watcher (built from config.watch if not given)
            notifiers: Notifiers (built from config.notifiers if not given)
        """
        self.config = config
        self.catalog = catalog or AuraCatalog.load(config.auras_json)
        self.watcher = watcher or LogWatcher(
            log_dir=config.watch.log_dir,
            file_glob=config.watch.file_glob,
            poll_interval=config.watch.poll_interval,
            wake_on_change=config.watch.wake_on_change,
        )
        if notifiers is None:
            notifiers = [create_notifier(n.type, n.config) for n in config.notifiers]
        self.notifiers = notifiers
        self.ignored_tiers = set(config.ignored_tiers)
        self.current_user: AuthenticationEvent | None = None

        self.classifiers: list[Classifier] = []
        for classifier_config in config.classifiers:
            classifier = create_classifier(
                classifier_config.type,
                classifier_config.config,
                self.catalog.resolve_metadata,
            )
            classifier.subscribe(self.handle_event)
            classifier.attach(self.watcher)
            self.classifiers.append(classifier)

    @property
    def current_path(self) -> Path | None:
        """The log file currently being tracked."""
        return self.watcher.current_path

    def check_log_directory(self) -> bool:
        """Report a missing log directory once; the watcher keeps waiting for it."""
        log_dir = Path(self.config.watch.log_dir)
        if not log_dir.is_dir():
            logger.error(
                "Log directory does not exist: %s. Waiting for it to appear.", log_dir
            )
            return False
        return True

    def start(self) -> None:
        """Start watching. The backlog is processed before this returns."""
        self.check_log_directory()
        self.watcher.start()
        logger.info("Tracking %s", self.current_path or "no log file yet")

    def stop(self) -> None:
        """Stop watching."""
        self.watcher.stop()

    def handle_event(self, event: object, is_first_read: bool) -> None:
        """Route a classified event."""
        if isinstance(event, AuthenticationEvent):
            self._on_authenticated(event)
        elif isinstance(event, UnlockEvent):
            self._on_unlock(event, is_first_read)

    def _on_authenticated(self, event: AuthenticationEvent) -> None:
        logger.info("Authenticated user: %s (%s)", event.user_name, event.user_id)
        self.current_user = event

    def _on_unlock(self, event: UnlockEvent, is_first_read: bool) -> None:
        aura = event.aura
        logger.info(
            "Aura unlocked: %s (#%s)%s",
            aura.name_text or "unknown", event.item_id,
            " [backlog]" if is_first_read else ""
        )

        if is_first_read:
            return
        if aura.tier in self.ignored_tiers:
            logger.debug("Ignoring aura #%s with tier %d", event.item_id, aura.tier)
            return

        self.dispatch(self.build_notification(event))

    def build_notification(self, event: UnlockEvent) -> Notification:
        """Describe an unlock for the notifiers."""
        aura = event.aura
        context: dict[str, object] = {
            "aura_id": event.item_id,
            "aura_name": aura.name_text or "_Unknown_",
            "rarity": aura.rarity_text,
        }
        if aura.category in AuraCategory.__members__.values():
            context["category"] = AuraCategory(aura.category).name.title()
        if event.timestamp:
            context["timestamp"] = event.timestamp.isoformat()
        if self.current_user:
            context["user_name"] = self.current_user.user_name
            context["user_id"] = self.current_user.user_id

        return Notification(
            title=NOTIFICATION_TITLE,
            message=f"{aura.name_text or 'Unknown'}\n{aura.rarity_text}",
            context=context,
        )

    def dispatch(self, notification: Notification) -> int:
        """
        Send a notification to every notifier.

        Returns:
            Number of notifiers that reported success
        """
        sent = 0
        for notifier in self.notifiers:
            try:
                if notifier.notify(notification):
                    sent += 1
                else:
                    logger.warning("Notifier %s returned False", notifier.__class__.__name__)
            except Exception:
                logger.error(
                    "Error sending notification via %s",
                    notifier.__class__.__name__,
                    exc_info=True
                )
        return sent
