from rest_framework import exceptions
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import AuthenticationFailed, InvalidToken


class AdminJWTAuthentication(JWTAuthentication):
    """Access token authentication for the admin API.

    The token is read from the ``Authorization: Bearer`` header first and from
    the ``access_token`` cookie second. A request without a token stays
    anonymous so the permission layer answers 401; a token that fails the
    signature, expiry or user lookup is rejected with 403.
    """

    def authenticate(self, request):
        header = self.get_header(request)
        if header is not None:
            raw_token = self.get_raw_token(header)
        else:
            raw_token = request.COOKIES.get("access_token")

        if raw_token is None:
            return None

        try:
            validated_token = self.get_validated_token(raw_token)
            return self.get_user(validated_token), validated_token
        except (InvalidToken, AuthenticationFailed):
            raise exceptions.PermissionDenied("Invalid or expired token")
