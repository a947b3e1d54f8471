from rest_framework.permissions import BasePermission

ADMIN_ROLES = ("admin", "super_admin")


class IsAdminRole(BasePermission):
    """Admin dashboard access.

    Allows authenticated admin users whose role is ``admin`` or ``super_admin``.
    An anonymous request is answered with 401 by DRF, a request that carries a
    valid token for any other role with 403.

    Attributes:
        message (str): Message returned when access is denied.
    """

    message = "Admin access required"

    def has_permission(self, request, view):
        """Decide whether the requesting user may use an admin endpoint.

        Args:
            request (Request): Incoming request.
            view: View being executed.

        Returns:
            bool: True when the user is an authenticated admin.
        """
        if not request.user or not request.user.is_authenticated:
            return False
        return getattr(request.user, "role", None) in ADMIN_ROLES
