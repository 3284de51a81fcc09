"""Outbound email contract for order notifications."""

from abc import ABC, abstractmethod


class EmailPort(ABC):
    """Delivers one rendered order email to a buyer."""

    @abstractmethod
    def send(self, to: str, subject: str, html_body: str, text_body: str | None = None) -> dict:
        """Deliver ``html_body`` to ``to``; ``text_body`` is the plain-text alternative.

        Returns ``{"message_id", "status"}`` where status is ``"sent"`` or
        ``"failed"``; failed results also carry ``"error"``.
        """
