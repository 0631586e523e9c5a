"""Serializers for notifications."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Notification


class NotificationSerializer(serializers.ModelSerializer):
    """Serializer for notifications."""

    related_booking_id = serializers.ReadOnlyField()
    is_actionable = serializers.BooleanField(read_only=True)

    class Meta:
        model = Notification
        fields = [
            'id',
            'type',
            'message',
            'related_booking_id',
            'overlap_start',
            'overlap_end',
            'response',
            'is_read',
            'is_actionable',
            'created_at',
        ]
        read_only_fields = fields


class RespondSerializer(serializers.Serializer):
    action = serializers.ChoiceField(
        choices=[Notification.Response.ACKNOWLEDGED, Notification.Response.REJECTED],
    )
