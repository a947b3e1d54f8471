import logging

from django.db.models import Count, Q
from django.http import HttpResponse
from django.utils import timezone
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.common.utils import rows_to_csv
from apps.contacts.models import MESSAGE_UNREAD, ContactMessage
from apps.registrations.models import STATUS_APPROVED, STATUS_PENDING, Student
from apps.sections.models import Section

logger = logging.getLogger(__name__)

RECENT_LIMIT = 5


def approved_count():
    return Count("students", filter=Q(students__status=STATUS_APPROVED))


def export_students():
    return list(
        Student.objects.order_by("-created_at", "-id").values(
            "id",
            "student_name",
            "student_age",
            "parent_name",
            "phone",
            "email",
            "section",
            "payment_plan",
            "comments",
            "registration_date",
            "status",
            "payment_status",
            "created_at",
            "updated_at",
        )
    )


def export_messages():
    return list(
        ContactMessage.objects.order_by("-created_at", "-id").values(
            "id", "name", "email", "phone", "subject", "message", "status", "created_at", "updated_at"
        )
    )


def export_sections():
    return list(
        Section.objects.annotate(enrolled_students=approved_count())
        .order_by("name")
        .values(
            "id",
            "name",
            "description",
            "capacity",
            "current_enrollment",
            "fee_termly",
            "fee_annual",
            "age_min",
            "age_max",
            "is_active",
            "created_at",
            "updated_at",
            "enrolled_students",
        )
    )


EXPORTS = {
    "students": export_students,
    "messages": export_messages,
    "sections": export_sections,
}


class DashboardView(APIView):
    """Overview numbers for the admin dashboard."""

    @extend_schema(
        summary="Admin dashboard",
        description="Overview counts, per-section enrollment, latest activity, 6 month trend and payment plans",
        responses={200: OpenApiResponse(description="Dashboard data")},
        tags=["Admin"],
    )
    def get(self, request):
        overview = Student.objects.aggregate(
            total_students=Count("id"),
            pending_registrations=Count("id", filter=Q(status=STATUS_PENDING)),
            approved_registrations=Count("id", filter=Q(status=STATUS_APPROVED)),
        )
        overview["unread_messages"] = ContactMessage.objects.filter(status=MESSAGE_UNREAD).count()

        section_stats = [
            {**row, "available": row["capacity"] - row["enrolled"]}
            for row in Section.objects.active()
            .annotate(enrolled=approved_count())
            .order_by("name")
            .values("name", "capacity", "enrolled")
        ]

        recent_registrations = Student.objects.order_by("-created_at", "-id").values(
            "student_name", "section", "status", "created_at"
        )
        recent_messages = ContactMessage.objects.order_by("-created_at", "-id").values(
            "name", "subject", "status", "created_at"
        )
        payment_stats = list(
            Student.objects.order_by()
            .values("payment_plan")
            .annotate(count=Count("id"))
            .order_by("payment_plan")
        )

        return Response(
            {
                "success": True,
                "data": {
                    "overview": overview,
                    "section_stats": section_stats,
                    "recent_registrations": list(recent_registrations[:RECENT_LIMIT]),
                    "recent_messages": list(recent_messages[:RECENT_LIMIT]),
                    "monthly_trends": Student.objects.monthly_trends(),
                    "payment_stats": payment_stats,
                },
            },
            status=status.HTTP_200_OK,
        )


class ExportView(APIView):
    """
    Data export API

    ``students``, ``messages`` or ``sections`` as JSON, or as a CSV download
    with ``?format=csv``.
    """

    @extend_schema(
        summary="Export data",
        parameters=[OpenApiParameter("format", str, enum=["json", "csv"], default="json")],
        responses={
            200: OpenApiResponse(description="JSON payload or CSV attachment"),
            400: OpenApiResponse(description="Invalid export type"),
            404: OpenApiResponse(description="No data to export"),
        },
        tags=["Admin"],
    )
    def get(self, request, export_type):
        exporter = EXPORTS.get(export_type)
        if exporter is None:
            return Response({"success": False, "message": "Invalid export type"}, status=status.HTTP_400_BAD_REQUEST)

        rows = exporter()
        exported_at = timezone.now()
        logger.info("Admin %s exported %d %s", request.user.username, len(rows), export_type)

        if request.query_params.get("format") == "csv":
            if not rows:
                return Response({"success": False, "message": "No data to export"}, status=status.HTTP_404_NOT_FOUND)

            filename = f"{export_type}_{exported_at.date().isoformat()}.csv"
            response = HttpResponse(rows_to_csv(rows), content_type="text/csv")
            response["Content-Disposition"] = f'attachment; filename="{filename}"'
            return response

        return Response(
            {"success": True, "data": rows, "exported_at": exported_at.isoformat(), "total_records": len(rows)},
            status=status.HTTP_200_OK,
        )
