from rest_framework.permissions import BasePermission

from .roles import is_superadmin


class IsSuperAdmin(BasePermission):
    """
    Django superuser or a user with the superadmin role.
    """
    def has_permission(self, request, view):
        return is_superadmin(request.user)


class OwnerTotalsPermission(BasePermission):
    """
    An owner can read their own totals, superadmin reads everyone's.
    """
    def has_object_permission(self, request, view, obj):
        user = request.user
        return is_superadmin(user) or (user.is_authenticated and obj.pk == user.pk)
