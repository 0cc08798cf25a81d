"""
Detects VRChat user logins.
"""

from aurawatch.core import AuthenticationEvent, parse_log_timestamp
from aurawatch.core import Classifier as BaseClassifier
from aurawatch.registry import register_classifier


@register_classifier("authentication")
class Classifier(BaseClassifier):
    """
    Decodes "User Authenticated" lines.

    Example:
        2025.04.19 14:10:45 Debug      -  User Authenticated: Tomachi (usr_0b83d9be-9852-42dd-98e2-625062400acc)

    Config:
        pattern: Optional replacement regex with ``user_name`` and ``user_id`` groups
    """

    default_pattern = (
        r"User Authenticated: (?P<user_name>.+) \((?P<user_id>usr_[A-Za-z0-9\-]+)\)"
    )

    def decode(self, fields: dict[str, str], line: str) -> AuthenticationEvent:
        return AuthenticationEvent(
            user_name=fields["user_name"],
            user_id=fields["user_id"],
            timestamp=parse_log_timestamp(line),
        )


# Export for dynamic importing
AuthenticationClassifier = Classifier
__all__ = ["AuthenticationClassifier"]
