"""Shared fixtures: AsyncMock collaborators and small payload builders."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from startup_helper.core.models import Coordinates, Place, StoreListing, StoreRecord
from startup_helper.core.providers import Providers

SEOUL_CITY_HALL = Coordinates(lat=37.5663, lng=126.9779)


def make_place(name="테스트 장소", address="서울 중구 세종대로 110", coordinates=SEOUL_CITY_HALL, **kwargs):
    return Place(name=name, address=address, coordinates=coordinates, **kwargs)


def make_store(name="가게", large="음식", medium="카페", small="커피전문점/카페/다방", **kwargs):
    return StoreRecord(
        name=name,
        large_category=large,
        large_code=kwargs.pop("large_code", "I2"),
        medium_category=medium,
        medium_code=kwargs.pop("medium_code", "I212"),
        small_category=small,
        road_address=kwargs.pop("road_address", "서울 중구 세종대로 1"),
        **kwargs,
    )


def make_listing(stores, total_count=None):
    return StoreListing(items=list(stores), total_count=len(stores) if total_count is None else total_count)


@pytest.fixture
def geocoder():
    mock = MagicMock()
    mock.resolve = AsyncMock(return_value=make_place())
    return mock


@pytest.fixture
def places():
    mock = MagicMock()
    mock.by_keyword = AsyncMock(return_value=[])
    mock.by_category = AsyncMock(return_value=[])
    mock.category_total_count = AsyncMock(return_value=0)
    return mock


@pytest.fixture
def registry():
    mock = MagicMock()
    mock.stores_in_radius = AsyncMock(return_value=make_listing([]))
    mock.stores_in_district = AsyncMock(return_value=make_listing([]))
    return mock


@pytest.fixture
def grants():
    mock = MagicMock()
    mock.startup_grants = AsyncMock(return_value=[])
    return mock


@pytest.fixture
def providers(geocoder, places):
    """Kakao-only setup: no store registry, no grant listings."""
    return Providers(geocoder=geocoder, places=places)


@pytest.fixture
def full_providers(geocoder, places, registry, grants):
    return Providers(geocoder=geocoder, places=places, registry=registry, grants=grants)
