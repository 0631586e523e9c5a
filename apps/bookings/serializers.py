"""Serializers for the booking domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Booking


class BookingSerializer(serializers.ModelSerializer):
    """Read representation of one booking segment."""

    owner_id = serializers.ReadOnlyField(source="owner.id")
    original_booking_id = serializers.ReadOnlyField()

    class Meta:
        model = Booking
        fields = [
            "id",
            "start_date",
            "end_date",
            "owner_id",
            "display_name",
            "status",
            "is_split",
            "original_request_id",
            "original_booking_id",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class BookingCreateSerializer(serializers.Serializer):
    """Booking request: a half-open date range and the wanted status."""

    start_date = serializers.DateField()
    end_date = serializers.DateField(help_text="Abreisetag, nicht mehr belegt.")
    status = serializers.ChoiceField(
        choices=Booking.REQUESTABLE_STATUSES,
        default=Booking.Status.BOOKED,
    )
    owner_id = serializers.IntegerField(
        required=False,
        help_text="Nur für Administratoren: für dieses Mitglied buchen.",
    )

    def validate(self, attrs):  # type: ignore
        if attrs["start_date"] >= attrs["end_date"]:
            raise serializers.ValidationError(
                {"end_date": "Das Enddatum muss nach dem Startdatum liegen."}
            )
        return attrs


class BookingUpdateSerializer(serializers.Serializer):
    """Partial change of a booking; both dates go together."""

    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)
    status = serializers.ChoiceField(
        choices=(*Booking.REQUESTABLE_STATUSES, Booking.Status.CANCELLED),
        required=False,
    )
    owner_id = serializers.IntegerField(required=False)

    def validate(self, attrs):  # type: ignore
        start, end = attrs.get("start_date"), attrs.get("end_date")
        if (start is None) != (end is None):
            raise serializers.ValidationError(
                "Start- und Enddatum müssen zusammen angegeben werden."
            )
        if start is not None and start >= end:
            raise serializers.ValidationError(
                {"end_date": "Das Enddatum muss nach dem Startdatum liegen."}
            )
        return attrs
