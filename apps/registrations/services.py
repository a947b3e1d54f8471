import logging
from dataclasses import dataclass

from django.db import DatabaseError, IntegrityError, transaction
from rest_framework.exceptions import NotFound

from apps.common.utils import paginate
from apps.sections.models import Section

from .exceptions import CapacityExceeded, InvalidSection, RegistrationConflict, RegistrationFailed
from .models import Student
from .tasks import send_registration_confirmation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegistrationResult:
    registration_id: str
    student_id: int
    section: str
    payment_plan: str

    def as_data(self):
        return {
            "registrationId": self.registration_id,
            "studentId": self.student_id,
            "section": self.section,
            "paymentPlan": self.payment_plan,
        }


def queue_registration_confirmation(student):
    send_registration_confirmation.delay(student.pk)


class RegistrationService:
    """Student registration workflow.

    Args:
        notify: callable taking the saved ``Student``; called after the
            registration commits, only when the parent left an email address.
            Its failures are logged and never reach the caller.
    """

    def __init__(self, notify=queue_registration_confirmation):
        self.notify = notify

    def submit(self, data):
        """Register a student and take one seat in the requested section.

        The seat and the row are written in one transaction. The section row is
        locked for the duration, and the seat itself is taken by a guarded
        update, so the enrollment counter never exceeds the capacity.

        Args:
            data (dict): validated fields of ``RegistrationSerializer``

        Returns:
            RegistrationResult

        Raises:
            RegistrationConflict: the same student, parent and phone are already registered
            InvalidSection: the section does not exist or is inactive
            CapacityExceeded: no seat left in the section
            RegistrationFailed: a database read or write failed
        """
        fields = dict(data)
        section_name = fields.pop("section")
        try:
            duplicate = Student.objects.filter(
                student_name=data["student_name"],
                parent_name=data["parent_name"],
                phone=data["phone"],
            )
            if duplicate.exists():
                raise RegistrationConflict()

            with transaction.atomic():
                section = Section.objects.select_for_update().filter(name=section_name, is_active=True).first()
                if section is None:
                    raise InvalidSection()
                if section.is_full or not Section.objects.reserve_seat(section_name):
                    raise CapacityExceeded()
                student = Student.objects.create(section_id=section_name, **fields)
        except IntegrityError as exc:
            logger.info("Duplicate registration for %s rejected by constraint", data["student_name"])
            raise RegistrationConflict() from exc
        except DatabaseError as exc:
            logger.exception("Registration for %s in %s failed", data["student_name"], section_name)
            raise RegistrationFailed() from exc

        logger.info("Registered %s as %s in %s", student.student_name, student.registration_id, section_name)

        if student.email:
            transaction.on_commit(lambda: self._notify(student))

        return RegistrationResult(
            registration_id=student.registration_id,
            student_id=student.pk,
            section=section_name,
            payment_plan=student.payment_plan,
        )

    def _notify(self, student):
        try:
            self.notify(student)
        except Exception:
            logger.exception("Failed to send confirmation email for %s", student.registration_id)

    def set_status(self, pk, new_status):
        """Move a registration to ``new_status``. Any status may follow any other."""
        student = Student.objects.filter(pk=pk).first()
        if student is None:
            raise NotFound("Registration not found")
        student.status = new_status
        student.save(update_fields=["status", "updated_at"])
        logger.info("Registration %s set to %s", student.registration_id, new_status)
        return student

    def get(self, pk):
        student = Student.objects.filter(pk=pk).first()
        if student is None:
            raise NotFound("Registration not found")
        return student

    def list_registrations(self, status=None, section=None, page=1, limit=20):
        """Newest registrations first, filtered by exact status and section.

        Returns:
            tuple[list[Student], dict]: the page and its pagination block
        """
        queryset = Student.objects.all()
        if status:
            queryset = queryset.filter(status=status)
        if section:
            queryset = queryset.filter(section_id=section)
        return paginate(queryset.order_by("-created_at", "-id"), page, limit)
