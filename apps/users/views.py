import logging

from django.conf import settings
from django.utils import timezone
from drf_spectacular.utils import OpenApiExample, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.tokens import AccessToken

from apps.common.exceptions import ConflictError

from .models import AdminUser
from .serializers import AdminUserSerializer, LoginSerializer, UpdateProfileSerializer

logger = logging.getLogger(__name__)


def issue_access_token(admin):
    """Signed access token carrying the admin's identity and role."""
    token = AccessToken.for_user(admin)
    token["username"] = admin.username
    token["role"] = admin.role
    return token


class LoginView(APIView):
    """
    Admin login API

    Accepts a username or an email plus password and returns a bearer token.
    The token is also set as an httponly ``access_token`` cookie.
    """

    authentication_classes = ()
    permission_classes = (AllowAny,)

    @extend_schema(
        summary="Admin login",
        description="Authenticate an admin with username (or email) and password",
        request=LoginSerializer,
        responses={
            200: OpenApiResponse(description="Token issued"),
            400: OpenApiResponse(description="Missing username or password"),
            401: OpenApiResponse(
                description="Invalid credentials",
                examples=[
                    OpenApiExample("Invalid credentials", value={"success": False, "message": "Invalid credentials"})
                ],
            ),
        },
        tags=["Admin"],
    )
    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        username = serializer.validated_data["username"]
        password = serializer.validated_data["password"]

        admin = AdminUser.objects.get_by_login(username)
        if admin is None or not admin.is_active or not admin.check_password(password):
            logger.warning("Failed admin login for '%s'", username)
            return Response({"success": False, "message": "Invalid credentials"}, status=status.HTTP_401_UNAUTHORIZED)

        previous_login = admin.last_login
        admin.last_login = timezone.now()
        admin.save(update_fields=["last_login"])

        token = issue_access_token(admin)
        admin_data = AdminUserSerializer(admin).data
        admin_data["last_login"] = previous_login.isoformat() if previous_login else None

        response = Response(
            {
                "success": True,
                "message": "Login successful",
                "data": {"token": str(token), "admin": admin_data},
            },
            status=status.HTTP_200_OK,
        )
        response.set_cookie(
            "access_token",
            value=str(token),
            httponly=True,
            secure=settings.ACCESS_TOKEN_COOKIE_SECURE,
            samesite="Lax",
            max_age=int(settings.SIMPLE_JWT["ACCESS_TOKEN_LIFETIME"].total_seconds()),
        )
        return response


class ProfileView(APIView):
    """
    Admin profile API

    GET returns the signed-in admin, PUT changes the email and/or password.
    """

    @extend_schema(
        summary="Admin profile",
        responses={200: AdminUserSerializer},
        tags=["Admin"],
    )
    def get(self, request):
        serializer = AdminUserSerializer(request.user)
        return Response({"success": True, "data": serializer.data}, status=status.HTTP_200_OK)

    @extend_schema(
        summary="Update admin profile",
        description="Change email (must be unique) and/or password (current password required)",
        request=UpdateProfileSerializer,
        responses={
            200: OpenApiResponse(description="Profile updated"),
            400: OpenApiResponse(description="Validation failed, wrong password or nothing to update"),
            409: OpenApiResponse(description="Email already in use"),
        },
        tags=["Admin"],
    )
    def put(self, request):
        admin = request.user
        serializer = UpdateProfileSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        update_fields = []

        email = data.get("email")
        if email and email != admin.email:
            if AdminUser.objects.filter(email=email).exclude(pk=admin.pk).exists():
                raise ConflictError("Email already in use")
            admin.email = email
            update_fields.append("email")

        current_password = data.get("current_password")
        new_password = data.get("new_password")
        if current_password and new_password:
            if not admin.check_password(current_password):
                return Response(
                    {"success": False, "message": "Current password is incorrect"}, status=status.HTTP_400_BAD_REQUEST
                )
            admin.set_password(new_password)
            update_fields.append("password")

        if not update_fields:
            return Response({"success": False, "message": "No valid fields to update"}, status=status.HTTP_400_BAD_REQUEST)

        admin.save(update_fields=update_fields + ["updated_at"])
        logger.info("Admin %s updated profile fields: %s", admin.username, ", ".join(update_fields))

        return Response({"success": True, "message": "Profile updated successfully"}, status=status.HTTP_200_OK)
