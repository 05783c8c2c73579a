from rest_framework.permissions import BasePermission


class RolePermission(BasePermission):
    """
    Allow access only to authenticated users holding exactly ``role``.

    Anonymous requests are turned into 401 by DRF; a role mismatch is a 403.
    Admins do not pass company or student gates, they have their own routes.
    """
    role = None

    def has_permission(self, request, view):
        return bool(
            request.user
            and request.user.is_authenticated
            and getattr(request.user, 'role', None) == self.role
        )


class IsStudent(RolePermission):
    """Allow access only to students."""
    role = 'student'
    message = "Only students can perform this action."


class IsCompany(RolePermission):
    """Allow access only to companies."""
    role = 'company'
    message = "Only companies can perform this action."


class IsAdmin(RolePermission):
    """Allow access only to admins."""
    role = 'admin'
    message = "Only admins can perform this action."
