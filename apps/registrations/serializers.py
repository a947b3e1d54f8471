from rest_framework import serializers

from apps.common.serializers import PaginationQuerySerializer
from apps.common.validators import validate_phone_number
from apps.sections.catalog import SECTION_ALIASES, SECTION_NAMES

from .models import PAYMENT_PLAN_CHOICES, STATUS_CHOICES, Student

INVALID_STATUS_MESSAGE = "Invalid status. Must be pending, approved, or rejected"


def length_messages(message):
    return {"required": message, "blank": message, "min_length": message, "max_length": message}


class RegistrationSerializer(serializers.Serializer):
    """Registration form as posted by the public site."""

    parentName = serializers.CharField(
        source="parent_name",
        min_length=2,
        max_length=100,
        error_messages=length_messages("Parent name must be between 2-100 characters"),
    )
    phone = serializers.CharField(
        max_length=20,
        error_messages={
            "required": "Please provide a valid phone number",
            "blank": "Please provide a valid phone number",
            "max_length": "Please provide a valid phone number",
        },
    )
    email = serializers.EmailField(
        required=False,
        allow_blank=True,
        allow_null=True,
        error_messages={"invalid": "Please provide a valid email address"},
    )
    studentName = serializers.CharField(
        source="student_name",
        min_length=2,
        max_length=100,
        error_messages=length_messages("Student name must be between 2-100 characters"),
    )
    studentAge = serializers.IntegerField(
        source="student_age",
        min_value=3,
        max_value=30,
        error_messages={
            "required": "Student age must be between 3-30 years",
            "invalid": "Student age must be between 3-30 years",
            "min_value": "Student age must be between 3-30 years",
            "max_value": "Student age must be between 3-30 years",
        },
    )
    section = serializers.CharField(error_messages={"required": "Please select a valid section"})
    paymentPlan = serializers.ChoiceField(
        source="payment_plan",
        choices=PAYMENT_PLAN_CHOICES,
        error_messages={
            "required": "Please select a valid payment plan",
            "invalid_choice": "Please select a valid payment plan",
        },
    )
    comments = serializers.CharField(
        required=False,
        allow_blank=True,
        allow_null=True,
        max_length=500,
        error_messages={"max_length": "Comments must not exceed 500 characters"},
    )

    def validate_phone(self, value):
        return validate_phone_number(value)

    def validate_email(self, value):
        return value or None

    def validate_section(self, value):
        name = SECTION_ALIASES.get(value, value)
        if name not in SECTION_NAMES:
            raise serializers.ValidationError("Please select a valid section")
        return name

    def validate_comments(self, value):
        return value or None


class StudentSerializer(serializers.ModelSerializer):
    registration_id = serializers.CharField(read_only=True)
    section = serializers.CharField(source="section_id", read_only=True)

    class Meta:
        model = Student
        fields = (
            "id",
            "registration_id",
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
        read_only_fields = fields


class StatusUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(
        choices=STATUS_CHOICES,
        error_messages={"required": INVALID_STATUS_MESSAGE, "invalid_choice": INVALID_STATUS_MESSAGE},
    )


class RegistrationListQuerySerializer(PaginationQuerySerializer):
    status = serializers.ChoiceField(
        choices=STATUS_CHOICES, required=False, error_messages={"invalid_choice": INVALID_STATUS_MESSAGE}
    )
    section = serializers.CharField(required=False)
