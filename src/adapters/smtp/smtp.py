"""
SMTP email sender adapter - Implements EmailSender protocol.

Delivers plain-text messages through an SMTP relay using STARTTLS.
"""

import logging
import smtplib
from email.mime.text import MIMEText

logger = logging.getLogger(__name__)


class SmtpEmailSender:
    """
    Implements EmailSender protocol via smtplib.

    A new connection is opened per message; no connection state is shared
    between requests.
    """

    def __init__(
        self,
        host: str,
        port: int = 587,
        username: str = "",
        password: str = "",
        sender: str = "",
        timeout: float = 10.0,
    ) -> None:
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.sender = sender or username
        self.timeout = timeout

    def send(self, recipient: str, subject: str, body: str) -> None:
        """
        Send a plain-text message.

        Raises:
            smtplib.SMTPException or OSError on delivery failure
        """
        msg = MIMEText(body, "plain")
        msg["From"] = self.sender
        msg["To"] = recipient
        msg["Subject"] = subject

        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
            server.starttls()
            if self.username:
                server.login(self.username, self.password)
            server.sendmail(self.sender, [recipient], msg.as_string())

        logger.info("Email sent to %s via %s:%s", recipient, self.host, self.port)
