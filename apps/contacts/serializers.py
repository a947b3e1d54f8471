from rest_framework import serializers

from apps.common.serializers import PaginationQuerySerializer
from apps.common.validators import validate_phone_number

from .models import MESSAGE_STATUS_CHOICES, ContactMessage

INVALID_STATUS_MESSAGE = "Invalid status. Must be unread, read, or replied"


def length_messages(message):
    return {"required": message, "blank": message, "min_length": message, "max_length": message}


class ContactSerializer(serializers.ModelSerializer):
    name = serializers.CharField(
        min_length=2, max_length=100, error_messages=length_messages("Name must be between 2-100 characters")
    )
    email = serializers.EmailField(
        error_messages={
            "required": "Please provide a valid email address",
            "blank": "Please provide a valid email address",
            "invalid": "Please provide a valid email address",
        },
    )
    phone = serializers.CharField(
        required=False,
        allow_blank=True,
        allow_null=True,
        max_length=20,
        error_messages={"max_length": "Please provide a valid phone number"},
    )
    subject = serializers.CharField(
        min_length=5, max_length=200, error_messages=length_messages("Subject must be between 5-200 characters")
    )
    message = serializers.CharField(
        min_length=10, max_length=1000, error_messages=length_messages("Message must be between 10-1000 characters")
    )

    class Meta:
        model = ContactMessage
        fields = ("name", "email", "phone", "subject", "message")

    def validate_phone(self, value):
        if not value:
            return None
        return validate_phone_number(value)


class ContactMessageSerializer(serializers.ModelSerializer):
    message_id = serializers.CharField(read_only=True)

    class Meta:
        model = ContactMessage
        fields = (
            "id",
            "message_id",
            "name",
            "email",
            "phone",
            "subject",
            "message",
            "status",
            "created_at",
            "updated_at",
        )
        read_only_fields = fields


class MessageStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(
        choices=MESSAGE_STATUS_CHOICES,
        error_messages={"required": INVALID_STATUS_MESSAGE, "invalid_choice": INVALID_STATUS_MESSAGE},
    )


class MessageListQuerySerializer(PaginationQuerySerializer):
    status = serializers.ChoiceField(
        choices=MESSAGE_STATUS_CHOICES, required=False, error_messages={"invalid_choice": INVALID_STATUS_MESSAGE}
    )
