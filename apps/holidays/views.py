"""API views for holidays."""

from __future__ import annotations

from rest_framework import permissions, serializers  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from .services import get_public_holidays, get_school_holidays


class YearQuerySerializer(serializers.Serializer):
    year = serializers.IntegerField(required=False, min_value=1900, max_value=2100)


class PublicHolidaysView(APIView):
    """Public holidays of the configured country and subdivision."""

    permission_classes = [permissions.AllowAny]

    def get(self, request):  # type: ignore
        query = YearQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        return Response(get_public_holidays(query.validated_data.get("year")))


class SchoolHolidaysView(APIView):
    """School holidays of the configured state."""

    permission_classes = [permissions.AllowAny]

    def get(self, request):  # type: ignore
        return Response(get_school_holidays())
