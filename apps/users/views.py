"""User API views."""

from __future__ import annotations

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import mixins, permissions, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from .serializers import UserSerializer

User = get_user_model()


class UserViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    """Household members.

    - the list is only visible to admins (used to book on behalf of someone)
    - `me` returns the profile of the current user
    """

    serializer_class = UserSerializer
    queryset = User.objects.filter(is_active=True).order_by("display_name")
    permission_classes = [permissions.IsAdminUser]

    @action(detail=False, methods=["get"], permission_classes=[permissions.IsAuthenticated])
    def me(self, request):
        """Profile of the current user."""
        serializer = UserSerializer(request.user)
        return Response(serializer.data)
