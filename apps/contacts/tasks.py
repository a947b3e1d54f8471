import logging
from smtplib import SMTPException

from celery import shared_task
from django.conf import settings

from apps.common.mail import EmailNotifier, render_email

from .models import ContactMessage

logger = logging.getLogger(__name__)


def message_context(contact):
    return {
        "name": contact.name,
        "email": contact.email,
        "phone": contact.phone,
        "subject": contact.subject,
        "message": contact.message,
        "message_id": contact.message_id,
        "received_at": contact.created_at,
    }


@shared_task(bind=True, autoretry_for=(SMTPException, OSError), retry_backoff=True, max_retries=3)
def send_contact_admin_notification(self, message_pk):
    """Forward a new contact message to the school's admin inbox."""
    contact = ContactMessage.objects.filter(pk=message_pk).first()
    if contact is None:
        logger.warning("Contact message %s disappeared before notification", message_pk)
        return False

    body = render_email("contact_admin_notification", message_context(contact))
    return EmailNotifier().send(settings.ADMIN_EMAIL, f"New Contact Message: {contact.subject}", body)


@shared_task(bind=True, autoretry_for=(SMTPException, OSError), retry_backoff=True, max_retries=3)
def send_contact_auto_reply(self, message_pk):
    """Acknowledge a contact message to its sender with the reference id."""
    contact = ContactMessage.objects.filter(pk=message_pk).first()
    if contact is None:
        logger.warning("Contact message %s disappeared before auto-reply", message_pk)
        return False

    body = render_email("contact_auto_reply", message_context(contact))
    return EmailNotifier().send(contact.email, f"Thank you for contacting us - {settings.SCHOOL_NAME}", body)
