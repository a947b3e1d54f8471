import logging

from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class ConflictError(exceptions.APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Resource already exists"
    default_code = "conflict"


def flatten_validation_errors(detail, field=""):
    """Flatten DRF's nested error detail into ``[{"field": ..., "message": ...}]``.

    Every failing field is reported, not only the first one.
    """
    errors = []
    if isinstance(detail, dict):
        for key, value in detail.items():
            errors.extend(flatten_validation_errors(value, f"{field}.{key}" if field else key))
    elif isinstance(detail, list):
        for item in detail:
            errors.extend(flatten_validation_errors(item, field))
    else:
        errors.append({"field": field or "non_field_errors", "message": str(detail)})
    return errors


def api_exception_handler(exc, context):
    """Render every API error as ``{"success": false, "message": ..., "errors"?: [...]}``.

    Exceptions DRF does not know about are logged with their traceback and
    answered with a generic 500 so no internals reach the client.
    """
    response = exception_handler(exc, context)

    if response is None:
        view = context.get("view")
        logger.error(
            "Unhandled error in %s", view.__class__.__name__ if view else "request", exc_info=exc
        )
        return Response(
            {"success": False, "message": "Internal server error"},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if isinstance(exc, exceptions.ValidationError):
        response.data = {
            "success": False,
            "message": "Validation failed",
            "errors": flatten_validation_errors(exc.detail),
        }
    elif isinstance(exc, exceptions.NotAuthenticated):
        response.data = {"success": False, "message": "Access token required"}
    else:
        data = response.data
        message = data.get("detail", data) if isinstance(data, dict) else data
        response.data = {"success": False, "message": str(message)}

    return response
