# accounts/permissions.py
from rest_framework.permissions import SAFE_METHODS, BasePermission

from .models import ADMIN_ROLES


def is_admin_account(account):
    return bool(
        account
        and account.is_authenticated
        and getattr(account, 'role', None) in ADMIN_ROLES
    )


class IsAdminRole(BasePermission):
    """Role must be admin or superadmin."""
    message = 'Admin access required'

    def has_permission(self, request, view):
        return is_admin_account(request.user)


class HasAdminPermission(IsAdminRole):
    """
    Admin role plus one permission flag; superadmins always pass.

    Used as an instance: @permission_classes([HasAdminPermission('manage_hospitals')])
    """

    def __init__(self, flag):
        self.flag = flag
        self.message = f'Permission denied: {flag} required'

    def __call__(self):
        # DRF instantiates permission_classes entries
        return self

    def has_permission(self, request, view):
        if not super().has_permission(request, view):
            return False
        return request.user.has_admin_permission(self.flag)


class AdminPermissionOrReadOnly(HasAdminPermission):
    """Anyone may read; writes need the admin permission flag."""

    def has_permission(self, request, view):
        if request.method in SAFE_METHODS:
            return True
        return super().has_permission(request, view)
