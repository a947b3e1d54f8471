import re

from rest_framework import serializers

PHONE_RE = re.compile(r"^\+?\d{7,15}$")
PHONE_SEPARATORS_RE = re.compile(r"[\s\-().]")


def validate_phone_number(value):
    """Accept international or local numbers: optional ``+`` and 7 to 15 digits, separators ignored."""
    if not PHONE_RE.match(PHONE_SEPARATORS_RE.sub("", value)):
        raise serializers.ValidationError("Please provide a valid phone number")
    return value
