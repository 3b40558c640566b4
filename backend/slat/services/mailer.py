"""
Outgoing mail over an authenticated SMTP submission connection.

Delivery is synchronous and is attempted exactly once; any failure is raised
as MailDeliveryError for the caller to report.
"""

import smtplib
from email.message import EmailMessage
from email.utils import formataddr

from slat.config import Settings
from slat.logging_config import get_logger, log_with_context

logger = get_logger("mail")


class MailDeliveryError(Exception):
    """Raised when a message could not be handed to the mail server."""
    pass


class SmtpMailer:
    """Sends HTML messages through the SMTP server named in Settings."""

    def __init__(self, settings: Settings):
        self.settings = settings

    def build_message(self, recipient: str, subject: str, html_body: str) -> EmailMessage:
        message = EmailMessage()
        message["Subject"] = subject
        message["From"] = formataddr((self.settings.mail_sender_name, self.settings.mail_username))
        message["To"] = recipient
        message.set_content("This message requires an HTML capable mail client.")
        message.add_alternative(html_body, subtype="html")
        return message

    def send(self, recipient: str, subject: str, html_body: str):
        if not self.settings.mail_configured:
            raise MailDeliveryError("Mail server is not configured")

        message = self.build_message(recipient, subject, html_body)
        try:
            with smtplib.SMTP(self.settings.mail_host, self.settings.mail_port) as server:
                if self.settings.mail_use_tls:
                    server.starttls()
                server.login(self.settings.mail_username, self.settings.mail_password)
                server.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            log_with_context(logger, "ERROR", "Failed to send mail: {}".format(str(e)),
                             extra_data={"host": self.settings.mail_host, "subject": subject})
            raise MailDeliveryError(str(e)) from e

        log_with_context(logger, "INFO", "Mail sent", extra_data={"subject": subject})
