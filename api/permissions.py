"""
Role-based permissions for the API
"""
from rest_framework import permissions

from core.constants import UserRole


class IsAuditViewer(permissions.BasePermission):
    """
    Permission to allow Admin and Lead roles to read the audit trail
    """
    message = "Permission denied. You may not have access to view audit logs."

    def has_permission(self, request, view):
        """Check if user is authenticated and has correct role"""
        if not (request.user and request.user.is_authenticated):
            return False

        return request.user.is_superuser or request.user.role in UserRole.AUDIT_VIEWERS
