"""
Shipping data model

Zones and services are static, read-only configuration. Quotes are value
objects built fresh on every calculation and handed to the checkout layer.
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple

WILDCARD_COUNTRY = "*"


class ServiceType(str, Enum):
    """Delivery service categories. Only STANDARD is ever made free."""
    STANDARD = "standard"
    EXPRESS = "express"
    BFPO_STANDARD = "bfpo_standard"
    BFPO_EXPRESS = "bfpo_express"
    COURIER = "courier"


@dataclass(frozen=True)
class DeliveryDays:
    """Business-day bounds for a service."""
    min: int
    max: int


@dataclass(frozen=True)
class ShippingService:
    """A priced, carrier-specific delivery option within a zone."""
    id: str
    name: str
    carrier: str
    type: ServiceType
    base_rate: float  # major currency units
    estimated_days: DeliveryDays
    tracking_included: bool
    description: str = ""
    weight_multiplier: Optional[float] = None  # set => priced by weight tier
    max_weight: Optional[int] = None  # grams
    requires_signature: bool = False

    @property
    def is_weight_priced(self) -> bool:
        return bool(self.weight_multiplier)


@dataclass(frozen=True)
class ShippingZone:
    """A named grouping of destinations sharing services and a free threshold."""
    code: str
    name: str
    countries: Tuple[str, ...]
    free_shipping_threshold: float
    services: Tuple[ShippingService, ...]
    description: Optional[str] = None

    @property
    def is_wildcard(self) -> bool:
        return WILDCARD_COUNTRY in self.countries

    def matches_country(self, country_code: str) -> bool:
        return country_code.upper() in self.countries


@dataclass(frozen=True)
class CartItem:
    """A cart line as seen by the shipping engine."""
    variant_id: str
    quantity: int
    weight: Optional[float] = None  # grams per unit


@dataclass(frozen=True)
class ShippingAddress:
    """Free-text destination address fields used by zone heuristics."""
    line1: Optional[str] = None
    line2: Optional[str] = None
    city: Optional[str] = None
    postcode: Optional[str] = None
    country: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ShippingAddress":
        """Build from checkout form data (snake_case or camelCase keys)."""
        def pick(*keys):
            for key in keys:
                value = data.get(key)
                if value:
                    return str(value)
            return None

        return cls(
            line1=pick("line1", "address_line1", "addressLine1"),
            line2=pick("line2", "address_line2", "addressLine2"),
            city=pick("city"),
            postcode=pick("postcode", "postal_code", "postalCode"),
            country=pick("country", "country_code", "countryCode"),
        )

    def text(self) -> str:
        """All populated fields joined, for indicator matching."""
        parts = (self.line1, self.line2, self.city, self.postcode, self.country)
        return " ".join(p for p in parts if p)


@dataclass(frozen=True)
class DeliveryEstimate:
    """Concrete delivery window, both ends on weekdays."""
    min: datetime
    max: datetime


@dataclass(frozen=True)
class ShippingQuote:
    """Computed price and delivery window for one service."""
    service: ShippingService
    zone: ShippingZone
    final_rate: float
    estimated_delivery: DeliveryEstimate
    is_free: bool
    weight_adjustment: Optional[float] = None
    special_instructions: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "service_id": self.service.id,
            "service_name": self.service.name,
            "carrier": self.service.carrier,
            "service_type": self.service.type.value,
            "zone_code": self.zone.code,
            "final_rate": self.final_rate,
            "is_free": self.is_free,
            "estimated_delivery": {
                "min": self.estimated_delivery.min.isoformat(),
                "max": self.estimated_delivery.max.isoformat(),
            },
            "special_instructions": self.special_instructions,
        }


@dataclass(frozen=True)
class ServiceLookup:
    """A service together with the zone it belongs to."""
    service: ShippingService
    zone: ShippingZone


@dataclass(frozen=True)
class WeightTier:
    """Upper bound (inclusive, grams) and multiplier. None bound = open-ended."""
    max_weight: Optional[int]
    multiplier: float

    def applies_to(self, total_weight: float) -> bool:
        return self.max_weight is None or total_weight <= self.max_weight


@dataclass(frozen=True)
class RegionalPostcodeRule:
    """Routes home-country postcodes with a given prefix to a regional zone."""
    country_code: str
    postcode_prefix: str
    zone_code: str


@dataclass(frozen=True)
class ShippingRules:
    """Everything the calculator is built from."""
    zones: Tuple[ShippingZone, ...]
    military_indicators: Tuple[str, ...]
    regional_rules: Tuple[RegionalPostcodeRule, ...]
    weight_tiers: Tuple[WeightTier, ...]
    default_item_weight: float
    courier_window_carriers: Tuple[str, ...] = field(default_factory=tuple)
    military_zone_code: str = "BFPO"
    fallback_zone_code: str = "WORLD"
