"""Outbound mail: SMTP transport, templated messages, and dispatch"""

import logging
import smtplib
import ssl
from email.message import EmailMessage
from pathlib import Path
from typing import Callable

from jinja2 import Environment, FileSystemLoader, select_autoescape

from folio.config import Settings
from folio.contact.validate import ContactSubmission
from folio.errors import TransientUpstreamFailure


logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"
OWNER_NOTICE = "owner-notice"
CONTACT_REPLY = "contact-reply"
REPLY_SUBJECT = "Thanks! Let’s connect"

env = Environment(
    loader=FileSystemLoader(TEMPLATES_DIR),
    autoescape=select_autoescape(enabled_extensions=("html.j2",)),
    trim_blocks=True,
    lstrip_blocks=True,
)


def render_template(template: str, **context) -> tuple[str, str]:
    """Render a named template pair, returning (text, html)."""
    text = env.get_template(f"{template}.txt.j2").render(**context)
    html = env.get_template(f"{template}.html.j2").render(**context)
    return text, html


def make_transport(settings: Settings) -> smtplib.SMTP:
    """Open an authenticated SMTP connection: implicit TLS on 465, STARTTLS otherwise."""
    context = ssl.create_default_context()
    smtp = None
    try:
        if settings.smtp_port == 465:
            smtp = smtplib.SMTP_SSL(settings.smtp_host, settings.smtp_port, context=context)
        else:
            smtp = smtplib.SMTP(settings.smtp_host, settings.smtp_port)
            smtp.starttls(context=context)
        if settings.smtp_user:
            smtp.login(settings.smtp_user, settings.smtp_pass)
    except (smtplib.SMTPException, OSError) as e:
        if smtp is not None:
            smtp.close()
        raise TransientUpstreamFailure(f"Mail server {settings.smtp_host}:{settings.smtp_port} unavailable: {e}") from e
    return smtp


def header_text(value: str) -> str:
    """Collapse whitespace, line breaks included, so user text is safe in a header."""
    return " ".join(value.split())


def _message(sender: str, to: str, subject: str, template: str, reply_to: str = None, **context) -> EmailMessage:
    text, html = render_template(template, **context)
    msg = EmailMessage()
    msg["From"] = sender
    msg["To"] = to
    msg["Subject"] = subject
    if reply_to:
        msg["Reply-To"] = reply_to
    msg.set_content(text)
    msg.add_alternative(html, subtype="html")
    return msg


def build_messages(submission: ContactSubmission, settings: Settings) -> list[EmailMessage]:
    """Owner notice (reply goes to the submitter) followed by the submitter's auto-reply."""
    owner = _message(
        settings.sender, settings.contact_to, f"New contact: {header_text(submission.name)}", OWNER_NOTICE,
        reply_to=submission.email,
        name=submission.name, email=submission.email, message=submission.message,
    )
    reply = _message(
        settings.sender, submission.email, REPLY_SUBJECT, CONTACT_REPLY,
        name=submission.name, calendly=settings.calendly_url or None,
    )
    return [owner, reply]


def dispatch(
    submission: ContactSubmission,
    settings: Settings,
    transport_factory: Callable[[Settings], smtplib.SMTP] = None,
    ) -> int:
    """Send both notifications over one connection and return how many were sent.

    Each send is independent: a refused message is logged and the other is still
    attempted. Raises TransientUpstreamFailure if the transport cannot be opened
    or any message was not delivered.
    """
    transport_factory = transport_factory or make_transport
    messages = build_messages(submission, settings)
    sent = 0
    with transport_factory(settings) as smtp:
        for msg in messages:
            try:
                smtp.send_message(msg)
                sent += 1
            except (smtplib.SMTPException, OSError) as e:
                logger.error("Failed to send %r to %s: %s", msg["Subject"], msg["To"], e)
    if sent < len(messages):
        raise TransientUpstreamFailure(f"Delivered {sent} of {len(messages)} contact emails")
    return sent


def dispatch_in_background(
    submission: ContactSubmission,
    settings: Settings,
    transport_factory: Callable[[Settings], smtplib.SMTP] = None,
    ) -> None:
    """Best-effort dispatch run after the response is sent; failures only reach the log."""
    try:
        dispatch(submission, settings, transport_factory)
    except Exception:
        logger.exception("Contact notification dispatch failed for %s", submission.email)
