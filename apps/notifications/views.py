"""API views for notifications."""

from __future__ import annotations

from drf_spectacular.utils import extend_schema  # type: ignore
from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.bookings.application.command_handlers import (
    RespondToOverlapCommand,
    RespondToOverlapHandler,
)
from apps.bookings.serializers import BookingSerializer

from .models import Notification
from .serializers import NotificationSerializer, RespondSerializer


class NotificationViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    """Notifications of the authenticated user, newest first."""

    serializer_class = NotificationSerializer
    permission_classes = [permissions.IsAuthenticated]
    lookup_value_regex = r'\d+'

    def get_queryset(self):  # type: ignore
        return Notification.objects.filter(recipient=self.request.user)

    @action(detail=True, methods=['post'])
    def mark_read(self, request, pk=None):  # type: ignore
        notification = self.get_object()
        if not notification.is_read:
            notification.is_read = True
            notification.save(update_fields=['is_read'])
        return Response(NotificationSerializer(notification).data, status=status.HTTP_200_OK)

    @extend_schema(request=RespondSerializer)
    @action(detail=True, methods=['post'])
    def respond(self, request, pk=None):  # type: ignore
        """Acknowledge or reject an overlap request."""
        serializer = RespondSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        notification, booking = RespondToOverlapHandler().handle(RespondToOverlapCommand(
            actor=request.user,
            notification_id=int(pk),
            action=serializer.validated_data['action'],
        ))
        return Response(
            {
                'notification': NotificationSerializer(notification).data,
                'booking': BookingSerializer(booking).data,
            },
            status=status.HTTP_200_OK,
        )
