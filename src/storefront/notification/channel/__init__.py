"""Email channel registry.

Provides singleton access to the email adapter. The fake adapter is used
by default; a real provider adapter can be plugged in with ``set_email_sender``.
"""

from storefront.notification.channel.email_port import EmailPort

_email_sender: EmailPort | None = None


def get_email_sender() -> EmailPort:
    """Return the configured email adapter (singleton)."""
    global _email_sender
    if _email_sender is None:
        from storefront.notification.channel.fake_email import FakeEmailAdapter

        _email_sender = FakeEmailAdapter()
    return _email_sender


def set_email_sender(sender: EmailPort) -> None:
    global _email_sender
    _email_sender = sender


def reset_channels() -> None:
    """Drop the adapter singleton (useful for testing)."""
    global _email_sender
    _email_sender = None
