from drf_spectacular.utils import OpenApiExample, OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from .serializers import (
    INVALID_STATUS_MESSAGE,
    RegistrationListQuerySerializer,
    RegistrationSerializer,
    StatusUpdateSerializer,
    StudentSerializer,
)
from .services import RegistrationService


class RegistrationView(APIView):
    """
    Registration API

    POST is public and submits a new student registration.
    GET lists registrations for admins.
    """

    service_class = RegistrationService

    def get_authenticators(self):
        if self.request.method == "POST":
            return []
        return super().get_authenticators()

    def get_permissions(self):
        if self.request.method == "POST":
            return [AllowAny()]
        return super().get_permissions()

    @extend_schema(
        summary="Register a student",
        description="Submit a registration. One seat of the chosen section is taken on success.",
        request=RegistrationSerializer,
        responses={
            201: OpenApiResponse(
                description="Registration successful",
                examples=[
                    OpenApiExample(
                        "Registered",
                        value={
                            "success": True,
                            "message": "Registration successful",
                            "data": {
                                "registrationId": "MBU000001",
                                "studentId": 1,
                                "section": "Tahfiz",
                                "paymentPlan": "Annual Plan",
                            },
                        },
                    )
                ],
            ),
            400: OpenApiResponse(description="Validation failed, section unavailable or full"),
            409: OpenApiResponse(description="A student with this information is already registered"),
            500: OpenApiResponse(description="Registration failed. Please try again."),
        },
        auth=[],
        tags=["Registration"],
    )
    def post(self, request):
        serializer = RegistrationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = self.service_class().submit(serializer.validated_data)
        return Response(
            {"success": True, "message": "Registration successful", "data": result.as_data()},
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(
        summary="List registrations",
        description="Newest first, optionally filtered by status and section",
        parameters=[
            OpenApiParameter("status", str, enum=["pending", "approved", "rejected"]),
            OpenApiParameter("section", str),
            OpenApiParameter("page", int),
            OpenApiParameter("limit", int),
        ],
        responses={200: StudentSerializer(many=True)},
        tags=["Registration"],
    )
    def get(self, request):
        query = RegistrationListQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        students, pagination = self.service_class().list_registrations(**query.validated_data)
        return Response(
            {"success": True, "data": StudentSerializer(students, many=True).data, "pagination": pagination},
            status=status.HTTP_200_OK,
        )


class RegistrationDetailView(APIView):
    """Single registration, admin only."""

    @extend_schema(
        summary="Get a registration",
        responses={200: StudentSerializer, 404: OpenApiResponse(description="Registration not found")},
        tags=["Registration"],
    )
    def get(self, request, pk):
        student = RegistrationService().get(pk)
        return Response({"success": True, "data": StudentSerializer(student).data}, status=status.HTTP_200_OK)


class RegistrationStatusView(APIView):
    """Approve, reject or reset a registration."""

    @extend_schema(
        summary="Update registration status",
        description="Any status may follow any other",
        request=StatusUpdateSerializer,
        responses={
            200: OpenApiResponse(description="Registration status updated successfully"),
            400: OpenApiResponse(description=INVALID_STATUS_MESSAGE),
            404: OpenApiResponse(description="Registration not found"),
        },
        tags=["Registration"],
    )
    def patch(self, request, pk):
        serializer = StatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        RegistrationService().set_status(pk, serializer.validated_data["status"])
        return Response(
            {"success": True, "message": "Registration status updated successfully"}, status=status.HTTP_200_OK
        )
