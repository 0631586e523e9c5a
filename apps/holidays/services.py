"""Clients for the public and school holiday APIs."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, List

import requests
from django.conf import settings  # type: ignore
from django.core.cache import cache  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore
from rest_framework import status  # type: ignore
from rest_framework.exceptions import APIException  # type: ignore

logger = logging.getLogger(__name__)

CACHE_PREFIX = "holidays"


class HolidayProviderError(APIException):
    status_code = status.HTTP_502_BAD_GATEWAY
    default_detail = _("Der Feiertagsdienst ist nicht erreichbar.")
    default_code = "holiday_provider_unavailable"


def _fetch_json(url: str) -> Any:
    try:
        response = requests.get(url, timeout=settings.HOLIDAYS_TIMEOUT)
        response.raise_for_status()
        return response.json()
    except (requests.RequestException, ValueError) as e:
        logger.warning(f"Holiday lookup {url} failed: {e}")
        raise HolidayProviderError() from e


def _in_subdivision(holiday: Dict[str, Any], subdivision: str) -> bool:
    counties = holiday.get("counties")
    return counties is None or subdivision in counties


def get_public_holidays(year: int | None = None) -> List[Dict[str, Any]]:
    """
    Nationwide public holidays plus those of the configured subdivision.

    Results are cached per year, country and subdivision.
    """
    year = year or date.today().year
    country = settings.HOLIDAYS_COUNTRY
    subdivision = settings.HOLIDAYS_SUBDIVISION
    key = f"{CACHE_PREFIX}:public:{country}:{subdivision}:{year}"

    cached = cache.get(key)
    if cached is not None:
        return cached

    url = settings.HOLIDAYS_PUBLIC_URL.format(year=year, country=country)
    holidays = [h for h in _fetch_json(url) if _in_subdivision(h, subdivision)]
    cache.set(key, holidays, settings.HOLIDAYS_CACHE_TIMEOUT)
    logger.info(f"Loaded {len(holidays)} public holidays for {subdivision} {year}")
    return holidays


def get_school_holidays() -> List[Dict[str, Any]]:
    """All school holidays the provider knows for the configured state."""
    state = settings.HOLIDAYS_SCHOOL_STATE
    key = f"{CACHE_PREFIX}:school:{state}"

    cached = cache.get(key)
    if cached is not None:
        return cached

    url = settings.HOLIDAYS_SCHOOL_URL.format(state=state)
    holidays = _fetch_json(url)
    cache.set(key, holidays, settings.HOLIDAYS_CACHE_TIMEOUT)
    logger.info(f"Loaded {len(holidays)} school holiday periods for {state}")
    return holidays
