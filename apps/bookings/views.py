"""API views for the booking domain."""

from __future__ import annotations

from django.conf import settings  # type: ignore
from drf_spectacular.utils import extend_schema  # type: ignore
from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.response import Response  # type: ignore

from .application.command_handlers import (
    CreateBookingCommand,
    CreateBookingHandler,
    DeleteBookingCommand,
    DeleteBookingHandler,
    UpdateBookingCommand,
    UpdateBookingHandler,
)
from .filters import BookingFilterSet
from .models import Booking
from .serializers import BookingCreateSerializer, BookingSerializer, BookingUpdateSerializer


class BookingViewSet(viewsets.ModelViewSet):
    """Shared calendar of the house.

    Every member sees every booking. Writes go through the command handlers,
    which merge, split and notify; create and update answer with the list of
    segments that were written.
    """

    queryset = Booking.objects.select_related("owner").all()
    serializer_class = BookingSerializer
    filterset_class = BookingFilterSet
    lookup_value_regex = r"\d+"

    def get_permissions(self):  # type: ignore
        if self.action in ("list", "retrieve") and settings.BOOKINGS_PUBLIC_READ:
            return [permissions.AllowAny()]
        return [permissions.IsAuthenticated()]

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return BookingCreateSerializer
        if self.action in ("update", "partial_update"):
            return BookingUpdateSerializer
        return BookingSerializer

    def _segments_response(self, segments, status_code):
        data = BookingSerializer(segments, many=True, context=self.get_serializer_context()).data
        return Response(data, status=status_code)

    @extend_schema(responses={201: BookingSerializer(many=True)})
    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        segments = CreateBookingHandler().handle(CreateBookingCommand(
            actor=request.user,
            start_date=data["start_date"],
            end_date=data["end_date"],
            status=data["status"],
            owner_id=data.get("owner_id"),
        ))
        return self._segments_response(segments, status.HTTP_201_CREATED)

    @extend_schema(responses={200: BookingSerializer(many=True)})
    def update(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        segments = UpdateBookingHandler().handle(UpdateBookingCommand(
            actor=request.user,
            booking_id=int(self.kwargs["pk"]),
            start_date=data.get("start_date"),
            end_date=data.get("end_date"),
            status=data.get("status"),
            owner_id=data.get("owner_id"),
        ))
        return self._segments_response(segments, status.HTTP_200_OK)

    def partial_update(self, request, *args, **kwargs):  # type: ignore
        return self.update(request, *args, **kwargs)

    def destroy(self, request, *args, **kwargs):  # type: ignore
        result = DeleteBookingHandler().handle(DeleteBookingCommand(
            actor=request.user,
            booking_id=int(self.kwargs["pk"]),
        ))
        return Response(
            {"deleted": result.booking_id, "cancelled_dependents": result.cancelled_dependents},
            status=status.HTTP_200_OK,
        )
