"""
Console email sender adapter - Implements EmailSender protocol.

This module provides a console-based implementation of the domain's
email sender port, logging outgoing messages for development.
"""

import logging

logger = logging.getLogger(__name__)


class ConsoleEmailSender:
    """
    Implements EmailSender protocol via console logging.

    Uses structural subtyping - no explicit inheritance from Protocol.
    Used when no SMTP host is configured.
    """

    def send(self, recipient: str, subject: str, body: str) -> None:
        """
        Log the message at INFO level (simulates email delivery).

        Args:
            recipient: Recipient email address
            subject: Message subject
            body: Plain-text message body
        """
        logger.info("[EMAIL] To: %s Subject: %s\n%s", recipient, subject, body)
