from django.db import models
from django.db.models import Count
from django.db.models.functions import TruncMonth
from django.utils import timezone

from apps.common.models import BaseModel
from apps.common.utils import months_ago, registration_reference
from apps.sections.models import Section

STATUS_PENDING = "pending"
STATUS_APPROVED = "approved"
STATUS_REJECTED = "rejected"
STATUS_CHOICES = [(STATUS_PENDING, "Pending"), (STATUS_APPROVED, "Approved"), (STATUS_REJECTED, "Rejected")]

PAYMENT_STATUS_CHOICES = [("unpaid", "Unpaid"), ("partial", "Partial"), ("paid", "Paid")]

PLAN_TERMLY = "Termly Plan"
PLAN_ANNUAL = "Annual Plan"
PAYMENT_PLAN_CHOICES = [(PLAN_TERMLY, PLAN_TERMLY), (PLAN_ANNUAL, PLAN_ANNUAL)]


class StudentQuerySet(models.QuerySet):
    def monthly_trends(self, months=6):
        """Registrations per calendar month over the last ``months`` months, newest first.

        Returns:
            list[dict]: ``{"month": "YYYY-MM", "registrations": int}``
        """
        since = months_ago(timezone.now(), months)
        rows = (
            self.filter(created_at__gte=since)
            .annotate(period=TruncMonth("created_at"))
            .values("period")
            .annotate(registrations=Count("id"))
            .order_by("-period")
        )
        return [{"month": row["period"].strftime("%Y-%m"), "registrations": row["registrations"]} for row in rows]


class Student(BaseModel):
    """A registration submitted for one student into one section."""

    student_name = models.CharField(max_length=100)
    student_age = models.PositiveSmallIntegerField()
    parent_name = models.CharField(max_length=100)
    phone = models.CharField(max_length=20)
    email = models.EmailField(null=True, blank=True)
    section = models.ForeignKey(
        Section,
        to_field="name",
        db_column="section",
        on_delete=models.PROTECT,
        related_name="students",
    )
    payment_plan = models.CharField(max_length=20, choices=PAYMENT_PLAN_CHOICES)
    comments = models.TextField(null=True, blank=True)
    registration_date = models.DateTimeField(default=timezone.now)
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=STATUS_PENDING)
    payment_status = models.CharField(max_length=10, choices=PAYMENT_STATUS_CHOICES, default="unpaid")

    objects = StudentQuerySet.as_manager()

    def __str__(self):
        return f"{self.student_name} ({self.section_id})"

    @property
    def registration_id(self):
        return registration_reference(self.pk)

    class Meta:
        db_table = "students"
        ordering = ("-created_at", "-id")
        constraints = [
            models.UniqueConstraint(
                fields=["student_name", "parent_name", "phone"],
                name="unique_student_parent_phone",
            ),
        ]
        indexes = [
            models.Index(fields=["status"], name="students_status_idx"),
            models.Index(fields=["-created_at"], name="students_created_idx"),
        ]


class Payment(models.Model):
    student = models.ForeignKey(Student, on_delete=models.CASCADE, related_name="payments")
    amount = models.DecimalField(max_digits=10, decimal_places=2)
    payment_method = models.CharField(max_length=50, null=True, blank=True)
    payment_reference = models.CharField(max_length=100, null=True, blank=True)
    payment_date = models.DateTimeField(default=timezone.now)
    academic_term = models.CharField(max_length=50, null=True, blank=True)
    status = models.CharField(max_length=20, default="pending")
    notes = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"{self.amount} for {self.student}"

    class Meta:
        db_table = "payments"
        ordering = ("-payment_date",)
