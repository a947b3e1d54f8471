from rest_framework import serializers

from .models import AdminUser


class LoginSerializer(serializers.Serializer):
    username = serializers.CharField(
        error_messages={"required": "Username is required", "blank": "Username is required"},
    )
    password = serializers.CharField(
        trim_whitespace=False,
        error_messages={"required": "Password is required", "blank": "Password is required"},
    )


class AdminUserSerializer(serializers.ModelSerializer):
    class Meta:
        model = AdminUser
        fields = ("id", "username", "email", "role", "last_login", "created_at")


class UpdateProfileSerializer(serializers.Serializer):
    """Profile update payload.

    Every field is optional; the password only changes when both the current
    and the new password are given.
    """

    email = serializers.EmailField(required=False, error_messages={"invalid": "Please provide a valid email"})
    currentPassword = serializers.CharField(
        source="current_password",
        required=False,
        min_length=6,
        trim_whitespace=False,
        error_messages={"min_length": "Current password must be at least 6 characters"},
    )
    newPassword = serializers.CharField(
        source="new_password",
        required=False,
        min_length=6,
        trim_whitespace=False,
        error_messages={"min_length": "New password must be at least 6 characters"},
    )
