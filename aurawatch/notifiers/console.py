"""
Console notifier for Aurawatch.
"""

from aurawatch.core import Notification, Notifier
from aurawatch.logging_config import get_logger
from aurawatch.registry import register_notifier

logger = get_logger(__name__)


@register_notifier("console")
class ConsoleNotifier(Notifier):
    """
    Prints notifications to console/stdout.

    Config:
        show_context: Print the context block as well (default: True)
    """

    def notify(self, notification: Notification) -> bool:
        """Print notification to console."""
        logger.info("Console notification: %s", notification.message)

        print(f"\n{'=' * 60}")
        print(notification.title)
        print(notification.message)
        if notification.context and self.config.get("show_context", True):
            print()
            for key, value in notification.context.items():
                print(f"  {key}: {value}")
        print(f"{'=' * 60}\n")
        return True


# Export for dynamic importing
__all__ = ["ConsoleNotifier"]
