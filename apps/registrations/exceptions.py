from rest_framework import status
from rest_framework.exceptions import APIException

from apps.common.exceptions import ConflictError


class RegistrationConflict(ConflictError):
    default_detail = "A student with this information is already registered"
    default_code = "duplicate_registration"


class InvalidSection(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Selected section is not available"
    default_code = "invalid_section"


class CapacityExceeded(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Selected section is at full capacity"
    default_code = "capacity_exceeded"


class RegistrationFailed(APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Registration failed. Please try again."
    default_code = "registration_failed"
