"""Root conftest — shared test configuration and builders."""

import os
from datetime import date
from decimal import Decimal

import pytest

# Ensure a developer's .env or shell never changes the limits under test
for _key in list(os.environ):
    if _key.startswith("PANGOLIN_"):
        del os.environ[_key]

from pangolin.config import get_settings  # noqa: E402
from pangolin.domain.parcel import Parcel, ParcelId  # noqa: E402


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def make_parcel():
    """Builder: a valid Parcel, overridable per field."""
    def _make(
        parcel_id: str = "P-1",
        amount: Decimal = Decimal("100.00"),
        due_date: date = date(2025, 1, 10),
        rate: float = 1.5,
    ) -> Parcel:
        return Parcel.create(ParcelId(parcel_id), amount, due_date, rate).right_value
    return _make
