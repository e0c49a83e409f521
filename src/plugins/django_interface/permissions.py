from rest_framework.permissions import BasePermission


class HasStoreSession(BasePermission):
    """Allows access only to requests carrying a confirmed store session."""

    message = "Faça login para continuar."

    def has_permission(self, request, view):
        return bool(request.user and getattr(request.user, "is_authenticated", False) and request.auth)
