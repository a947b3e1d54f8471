from django.core.cache import cache
from django.db.models import Avg, Count, Max, Min, Q
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.exceptions import NotFound
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.common.utils import paginate
from apps.registrations.models import (
    PLAN_ANNUAL,
    PLAN_TERMLY,
    STATUS_APPROVED,
    STATUS_PENDING,
    STATUS_REJECTED,
    Student,
)
from apps.registrations.serializers import StudentSerializer

from .cache import SECTIONS_CACHE_KEY, SECTIONS_CACHE_TIMEOUT
from .models import Section
from .serializers import (
    SectionDetailSerializer,
    SectionListSerializer,
    SectionSerializer,
    SectionStudentsQuerySerializer,
)


def get_section_or_404(name):
    section = Section.objects.filter(name=name).first()
    if section is None:
        raise NotFound("Section not found")
    return section


class SectionListView(APIView):
    """Active sections with fees, age range and seats left (public)."""

    authentication_classes = ()
    permission_classes = (AllowAny,)

    @extend_schema(
        summary="List sections",
        description="Active sections ordered by name. Cached until a section or registration changes.",
        responses={200: SectionListSerializer(many=True)},
        tags=["Sections"],
    )
    def get(self, request):
        data = cache.get(SECTIONS_CACHE_KEY)
        if data is None:
            sections = Section.objects.active().annotate(
                enrolled_students=Count("students", filter=Q(students__status=STATUS_APPROVED))
            )
            data = SectionListSerializer(sections, many=True).data
            cache.set(SECTIONS_CACHE_KEY, data, timeout=SECTIONS_CACHE_TIMEOUT)

        return Response({"success": True, "data": data}, status=status.HTTP_200_OK)


class SectionDetailView(APIView):
    """One active section looked up by id or by name (public)."""

    authentication_classes = ()
    permission_classes = (AllowAny,)

    @extend_schema(
        summary="Get a section",
        description="``identifier`` is either the numeric id or the section name",
        responses={200: SectionDetailSerializer, 404: OpenApiResponse(description="Section not found")},
        tags=["Sections"],
    )
    def get(self, request, identifier):
        lookup = Q(pk=int(identifier)) if identifier.isdecimal() else Q(name=identifier)
        section = (
            Section.objects.active()
            .filter(lookup)
            .annotate(
                enrolled_students=Count("students"),
                approved_students=Count("students", filter=Q(students__status=STATUS_APPROVED)),
                pending_students=Count("students", filter=Q(students__status=STATUS_PENDING)),
            )
            .first()
        )
        if section is None:
            raise NotFound("Section not found")

        return Response({"success": True, "data": SectionDetailSerializer(section).data}, status=status.HTTP_200_OK)


class SectionStudentsView(APIView):
    """Registrations of one section, newest first (admin only)."""

    @extend_schema(
        summary="List students of a section",
        parameters=[
            OpenApiParameter("status", str, enum=[STATUS_PENDING, STATUS_APPROVED, STATUS_REJECTED]),
            OpenApiParameter("page", int),
            OpenApiParameter("limit", int),
        ],
        responses={200: StudentSerializer(many=True), 404: OpenApiResponse(description="Section not found")},
        tags=["Sections"],
    )
    def get(self, request, section_name):
        section = get_section_or_404(section_name)
        query = SectionStudentsQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        params = query.validated_data

        students = Student.objects.filter(section=section)
        if params.get("status"):
            students = students.filter(status=params["status"])
        rows, pagination = paginate(students.order_by("-created_at", "-id"), params["page"], params["limit"])

        return Response(
            {
                "success": True,
                "data": {
                    "section": SectionSerializer(section).data,
                    "students": StudentSerializer(rows, many=True).data,
                },
                "pagination": pagination,
            },
            status=status.HTTP_200_OK,
        )


class SectionStatsView(APIView):
    """Registration statistics for one section (admin only)."""

    @extend_schema(
        summary="Section statistics",
        description="Counts by status and payment plan, age spread, capacity utilisation and 6 month trend",
        responses={
            200: OpenApiResponse(description="Section statistics"),
            404: OpenApiResponse(description="Section not found"),
        },
        tags=["Sections"],
    )
    def get(self, request, section_name):
        section = get_section_or_404(section_name)
        students = Student.objects.filter(section=section)

        stats = students.aggregate(
            total_registrations=Count("id"),
            pending_registrations=Count("id", filter=Q(status=STATUS_PENDING)),
            approved_registrations=Count("id", filter=Q(status=STATUS_APPROVED)),
            rejected_registrations=Count("id", filter=Q(status=STATUS_REJECTED)),
            annual_payments=Count("id", filter=Q(payment_plan=PLAN_ANNUAL)),
            termly_payments=Count("id", filter=Q(payment_plan=PLAN_TERMLY)),
            average_age=Avg("student_age"),
            youngest_student=Min("student_age"),
            oldest_student=Max("student_age"),
        )
        if stats["average_age"] is not None:
            stats["average_age"] = round(stats["average_age"], 1)

        approved = stats["approved_registrations"]
        utilization = approved / section.capacity * 100 if section.capacity else 0

        return Response(
            {
                "success": True,
                "data": {
                    "section": SectionSerializer(section).data,
                    "statistics": {
                        **stats,
                        "capacity_utilization": f"{utilization:.1f}",
                        "available_spots": max(section.capacity - approved, 0),
                    },
                    "monthly_trends": students.monthly_trends(),
                },
            },
            status=status.HTTP_200_OK,
        )
