"""
Pytest configuration and fixtures for shipping tests.
"""
import os
from datetime import datetime, timezone

import pytest

# Set test environment before importing app modules
os.environ["ENVIRONMENT"] = "development"

from storefront_shipping.models.shipping import CartItem, ShippingAddress  # noqa: E402
from storefront_shipping.services.shipping_calculator import shipping_calculator  # noqa: E402


@pytest.fixture
def calculator():
    """The shared calculator built from the static tables."""
    return shipping_calculator


@pytest.fixture
def monday() -> datetime:
    """Monday 19 October 2026, 09:00 UTC."""
    return datetime(2026, 10, 19, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def friday() -> datetime:
    """Friday 23 October 2026, 09:00 UTC."""
    return datetime(2026, 10, 23, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def light_cart():
    """Single 300g item."""
    return [CartItem(variant_id="tee-black-m", quantity=1, weight=300)]


@pytest.fixture
def heavy_cart():
    """Six default-weight items: 1200g."""
    return [CartItem(variant_id="tee-olive-l", quantity=6)]


@pytest.fixture
def uk_address():
    return ShippingAddress(
        line1="10 Downing Street",
        city="London",
        postcode="SW1A 2AA",
        country="United Kingdom",
    )


@pytest.fixture
def bfpo_address():
    return ShippingAddress(
        line1="Sgt A Smith",
        line2="1 Rifles",
        city="Operation Base",
        postcode="BFPO 123",
        country="GB",
    )


@pytest.fixture
def sample_quote_request():
    return {
        "items": [
            {"variant_id": "tee-olive-l", "quantity": 6, "price": 7.5},
        ],
        "country_code": "gb",
        "subtotal": 45.0,
    }
