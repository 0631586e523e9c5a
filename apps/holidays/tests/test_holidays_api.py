"""Tests for the holiday proxy endpoints."""

from __future__ import annotations

from unittest import mock

import requests
from django.core.cache import cache
from django.test import override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

PUBLIC_HOLIDAYS = [
    {"date": "2030-01-01", "localName": "Neujahr", "counties": None},
    {"date": "2030-06-20", "localName": "Fronleichnam", "counties": ["DE-BW", "DE-HE"]},
    {"date": "2030-10-31", "localName": "Reformationstag", "counties": ["DE-BB", "DE-SN"]},
]

SCHOOL_HOLIDAYS = [
    {"start": "2030-07-01", "end": "2030-08-09", "name": "sommerferien", "stateCode": "HE"},
]


def fake_response(payload):
    response = mock.Mock()
    response.json.return_value = payload
    response.raise_for_status.return_value = None
    return response


@override_settings(HOLIDAYS_COUNTRY="DE", HOLIDAYS_SUBDIVISION="DE-HE", HOLIDAYS_SCHOOL_STATE="HE")
class HolidayAPITests(APITestCase):
    def setUp(self) -> None:
        cache.clear()

    @mock.patch("apps.holidays.services.requests.get")
    def test_public_holidays_are_filtered_to_subdivision(self, get) -> None:
        get.return_value = fake_response(PUBLIC_HOLIDAYS)

        response = self.client.get(reverse("holidays-public"), {"year": 2030})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([h["localName"] for h in response.data], ["Neujahr", "Fronleichnam"])
        self.assertEqual(get.call_args.args[0], "https://date.nager.at/api/v3/PublicHolidays/2030/DE")

    @mock.patch("apps.holidays.services.requests.get")
    def test_public_holidays_are_cached(self, get) -> None:
        get.return_value = fake_response(PUBLIC_HOLIDAYS)

        self.client.get(reverse("holidays-public"), {"year": 2030})
        self.client.get(reverse("holidays-public"), {"year": 2030})

        self.assertEqual(get.call_count, 1)

    @mock.patch("apps.holidays.services.requests.get")
    def test_school_holidays(self, get) -> None:
        get.return_value = fake_response(SCHOOL_HOLIDAYS)

        response = self.client.get(reverse("holidays-school"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, SCHOOL_HOLIDAYS)
        self.assertEqual(get.call_args.args[0], "https://ferien-api.de/api/v1/holidays/HE")

    @mock.patch("apps.holidays.services.requests.get")
    def test_upstream_failure_is_bad_gateway(self, get) -> None:
        get.side_effect = requests.ConnectionError("down")

        response = self.client.get(reverse("holidays-school"))

        self.assertEqual(response.status_code, status.HTTP_502_BAD_GATEWAY)

    def test_invalid_year_is_rejected(self) -> None:
        response = self.client.get(reverse("holidays-public"), {"year": "abc"})

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
