"""
Shared DRF permission classes.

- IsOwnerOrReadOnly: Anyone may read; only the owner or staff may write

Usage:
    class PostViewSet(viewsets.ModelViewSet):
        permission_classes = [IsAuthenticatedOrReadOnly, IsOwnerOrReadOnly]

    class ProfileView(generics.RetrieveUpdateAPIView):
        permission_classes = [IsAuthenticated, IsOwnerOrReadOnly]
        owner_field = "user"
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.utils.translation import gettext_lazy as _
from rest_framework import permissions

if TYPE_CHECKING:
    from rest_framework.request import Request
    from rest_framework.views import APIView


class IsOwnerOrReadOnly(permissions.BasePermission):
    """
    Object-level permission: safe methods for everyone, writes for the owner.

    The owner is read from the attribute named by the view's `owner_field`
    (default "author"). Staff users may write any object.
    """

    message = _("You can only modify your own content.")
    default_owner_field = "author"

    def has_object_permission(self, request: Request, view: APIView, obj) -> bool:
        if request.method in permissions.SAFE_METHODS:
            return True

        user = request.user
        if not user or not user.is_authenticated:
            return False
        if user.is_staff:
            return True

        owner_field = getattr(view, "owner_field", self.default_owner_field)
        owner_id = getattr(obj, f"{owner_field}_id", None)
        if owner_id is None:
            owner = getattr(obj, owner_field, None)
            owner_id = getattr(owner, "pk", None)
        return owner_id is not None and owner_id == user.pk


class IsStaffOrReadOnly(permissions.BasePermission):
    """Read access for everyone, write access for staff users."""

    def has_permission(self, request: Request, view: APIView) -> bool:
        if request.method in permissions.SAFE_METHODS:
            return True
        return bool(request.user and request.user.is_staff)
