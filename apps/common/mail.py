import logging

from django.conf import settings
from django.core.mail import get_connection, send_mail
from django.template.loader import render_to_string
from django.utils.html import strip_tags

logger = logging.getLogger(__name__)


class EmailNotifier:
    """Outbound email channel.

    ``send`` raises on any transport failure. Callers that treat email as
    best-effort are expected to catch and log.
    """

    def __init__(self, from_email=None, timeout=None):
        self.from_email = from_email or settings.DEFAULT_FROM_EMAIL
        self.timeout = timeout or settings.EMAIL_TIMEOUT

    def send(self, recipient, subject, body):
        """Send one HTML email with a plain-text fallback.

        :param recipient: destination address
        :param subject: email subject
        :param body: HTML body
        :return: True when the backend accepted the message
        """
        connection = get_connection(timeout=self.timeout)
        sent = send_mail(
            subject=subject,
            message=strip_tags(body),
            from_email=self.from_email,
            recipient_list=[recipient],
            html_message=body,
            fail_silently=False,
            connection=connection,
        )
        logger.info("Email sent to %s: %s", recipient, subject)
        return sent == 1


def render_email(template_name, context):
    """Render ``emails/<template_name>.html`` with the school contact details merged in."""
    base_context = {
        "school_name": settings.SCHOOL_NAME,
        "school_phone": settings.SCHOOL_PHONE,
        "school_email": settings.SCHOOL_EMAIL,
    }
    return render_to_string(f"emails/{template_name}.html", {**base_context, **context})
