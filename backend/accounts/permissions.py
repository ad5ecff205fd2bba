from rest_framework.permissions import BasePermission


class IsStaffOrAdmin(BasePermission):
    """
    Recepción / dueños: usuarios con is_staff o superusuarios.
    """
    message = "Solo el personal del salón puede acceder."

    def has_permission(self, request, view):
        u = request.user
        if not u or not u.is_authenticated:
            return False
        return bool(getattr(u, "is_superuser", False) or getattr(u, "is_staff", False))
