import logging
from smtplib import SMTPException

from celery import shared_task
from django.conf import settings

from apps.common.mail import EmailNotifier, render_email

from .models import Student

logger = logging.getLogger(__name__)


@shared_task(bind=True, autoretry_for=(SMTPException, OSError), retry_backoff=True, max_retries=3)
def send_registration_confirmation(self, student_id):
    """Email the registration confirmation to the parent.

    Transport errors are retried with exponential backoff, up to three times.

    Args:
        student_id (int): primary key of the registration

    Returns:
        bool: True if the email was handed to the mail backend
    """
    student = Student.objects.filter(pk=student_id).first()
    if student is None or not student.email:
        logger.warning("No confirmation email sent for registration %s", student_id)
        return False

    body = render_email(
        "registration_confirmation",
        {
            "parent_name": student.parent_name,
            "student_name": student.student_name,
            "student_age": student.student_age,
            "section": student.section_id,
            "payment_plan": student.payment_plan,
            "registration_id": student.registration_id,
        },
    )
    return EmailNotifier().send(student.email, f"Registration Confirmation - {settings.SCHOOL_NAME}", body)
