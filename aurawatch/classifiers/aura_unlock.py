"""
Detects auras legitimized in Elite's RNG Land.
"""

from aurawatch.auras import Aura
from aurawatch.core import Classifier as BaseClassifier
from aurawatch.core import UnlockEvent, parse_log_timestamp
from aurawatch.registry import register_classifier


@register_classifier("aura_unlock")
class Classifier(BaseClassifier):
    """
    Decodes "Successfully legitimized Aura #<id>." lines.

    The world tag in front of the message has changed colour between
    releases, so only the message itself is anchored:

        2025.04.16 18:07:07 Debug      -  [<color=green>Elite's RNG Land</color>] Successfully legitimized Aura #60.

    Config:
        pattern: Optional replacement regex with an ``aura_id`` group
    """

    default_pattern = r"Successfully legitimized Aura #(?P<aura_id>[0-9]+)\."

    def decode(self, fields: dict[str, str], line: str) -> UnlockEvent:
        aura_id = fields["aura_id"]
        if self.lookup is not None:
            aura = self.lookup(aura_id)
        else:
            aura = Aura(id=aura_id)

        return UnlockEvent(
            item_id=aura_id,
            aura=aura,
            timestamp=parse_log_timestamp(line),
        )


# Export for dynamic importing
AuraUnlockClassifier = Classifier
__all__ = ["AuraUnlockClassifier"]
