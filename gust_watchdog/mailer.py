"""SMTP delivery of the composed alert."""

import logging
import smtplib
import ssl
from email.errors import HeaderParseError
from email.headerregistry import Address
from email.message import EmailMessage

from gust_watchdog.config import Config
from gust_watchdog.errors import SendError

logger = logging.getLogger(__name__)

SMTP_TIMEOUT = 30  # seconds
SMTPS_PORT = 465


def build_message(config: Config, subject: str, html_body: str, text_body: str) -> EmailMessage:
    """Plain-text part with an HTML alternative, UTF-8 throughout."""
    msg = EmailMessage()
    msg["Subject"] = subject
    try:
        msg["From"] = Address(display_name=config.email_from_name, addr_spec=config.email_from)
    except (ValueError, IndexError, HeaderParseError) as e:
        raise SendError(f"Invalid sender address {config.email_from!r}: {e}") from e
    msg["To"] = ", ".join(config.email_to)
    msg.set_content(text_body, charset="utf-8")
    msg.add_alternative(html_body, subtype="html", charset="utf-8")
    return msg


def _open_connection(config: Config) -> smtplib.SMTP:
    context = ssl.create_default_context()
    if config.smtp_port == SMTPS_PORT:
        return smtplib.SMTP_SSL(config.smtp_server, config.smtp_port, timeout=SMTP_TIMEOUT, context=context)

    server = smtplib.SMTP(config.smtp_server, config.smtp_port, timeout=SMTP_TIMEOUT)
    try:
        server.ehlo()
        # opportunistic: upgrade when offered, otherwise continue in clear text
        if server.has_extn("starttls"):
            server.starttls(context=context)
            server.ehlo()
        else:
            logger.warning("SMTP server %s does not offer STARTTLS", config.smtp_server)
    except Exception:
        server.close()
        raise
    return server


def send_email(config: Config, subject: str, html_body: str, text_body: str) -> None:
    """
    Send the alert to every configured recipient.

    Args:
        config (Config): SMTP settings, sender and recipients
        subject (str): Message subject
        html_body (str): Primary HTML body
        text_body (str): Plain-text alternative

    Raises:
        SendError: If the connection, authentication or submission fails
    """
    msg = build_message(config, subject, html_body, text_body)
    try:
        with _open_connection(config) as server:
            if config.smtp_debug:
                server.set_debuglevel(1)
            if config.smtp_user:
                server.login(config.smtp_user, config.smtp_password)
            refused = server.send_message(msg, from_addr=config.email_from, to_addrs=list(config.email_to))
    except (smtplib.SMTPException, OSError) as e:
        raise SendError(f"Failed to send email via {config.smtp_server}:{config.smtp_port}: {e}") from e

    if refused:
        logger.warning("Some recipients were refused: %s", ", ".join(sorted(refused)))
