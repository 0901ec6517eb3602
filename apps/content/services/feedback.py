"""Footer feedback form: forwards visitor messages by email."""

import logging
from smtplib import SMTPException

from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.utils.html import escape, linebreaks

from .exceptions import (
    ContentValidationError,
    FeedbackNotConfiguredError,
    FeedbackDeliveryError,
)
from .site_content import get_footer_content

logger = logging.getLogger(__name__)


def get_feedback_recipient() -> str:
    """Recipient address configured in the footer's form block, or ''."""
    right = get_footer_content().get('right')
    if not isinstance(right, dict):
        return ''
    return str(right.get('formRecipientEmail') or '').strip()


def send_feedback(*, name: str, email: str, text: str) -> None:
    """
    Email a feedback message to the footer's recipient.

    The sender's address is set as Reply-To so the recipient can answer
    directly.

    Args:
        name: Sender name
        email: Sender email
        text: Message body

    Raises:
        ContentValidationError: If any field is blank
        FeedbackNotConfiguredError: If the footer has no recipient address
        FeedbackDeliveryError: If the mail server rejects the message
    """
    name, email, text = (name or '').strip(), (email or '').strip(), (text or '').strip()
    if not (name and email and text):
        raise ContentValidationError("Name, email and message are required")

    recipient = get_feedback_recipient()
    if not recipient:
        raise FeedbackNotConfiguredError("Feedback recipient is not configured")

    message = EmailMultiAlternatives(
        subject=f"Обратная связь: {name[:50]}",
        body=f"Имя: {name}\nEmail: {email}\n\nСообщение:\n{text}",
        from_email=settings.DEFAULT_FROM_EMAIL,
        to=[recipient],
        reply_to=[email],
    )
    message.attach_alternative(
        f"<p><strong>Имя:</strong> {escape(name)}</p>"
        f"<p><strong>Email:</strong> {escape(email)}</p>"
        f"<p><strong>Сообщение:</strong></p>"
        f"{linebreaks(text, autoescape=True)}",
        'text/html',
    )

    try:
        message.send()
    except (SMTPException, OSError):
        logger.exception("Failed to send feedback from %s", email)
        raise FeedbackDeliveryError("Message could not be sent")

    logger.info("Feedback from %s forwarded to %s", email, recipient)
