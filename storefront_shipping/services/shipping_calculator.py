"""
Shipping Calculator

Resolves the destination zone, prices each of the zone's services against
the cart, and returns quotes ordered for display at checkout.

Handles:
- BFPO / military address detection (overrides the country code)
- Northern Ireland routing by postcode prefix
- Weight-tiered pricing and per-service weight caps
- Free standard shipping above the zone threshold
- Delivery windows that never land on a weekend

The calculator holds only the immutable rule tables, so a single instance
is shared by every request.
"""
import logging
import re
from datetime import datetime, timedelta
from typing import Iterable, List, Optional

from storefront_shipping.core.config import settings
from storefront_shipping.core.utils import utcnow
from storefront_shipping.models.shipping import (
    CartItem,
    DeliveryDays,
    DeliveryEstimate,
    RegionalPostcodeRule,
    ServiceLookup,
    ServiceType,
    ShippingAddress,
    ShippingQuote,
    ShippingRules,
    ShippingService,
    ShippingZone,
)
from storefront_shipping.models.zones import (
    COURIER_WINDOW_CARRIERS,
    FALLBACK_DELIVERY_DAYS,
    MILITARY_ADDRESS_INDICATORS,
    NI_ZONE,
    SHIPPING_ZONES,
    WEIGHT_TIERS,
)

logger = logging.getLogger(__name__)

# BFPO postcodes look like "BFPO 123" or "BFPO1234"
BFPO_POSTCODE_PATTERN = re.compile(r"^BFPO\s*\d{1,4}$", re.IGNORECASE | re.ASCII)

BFPO_INSTRUCTIONS = (
    "BFPO addresses: Please ensure your military mail forwarding is active. "
    "Allow extra time for overseas delivery."
)
SIGNATURE_INSTRUCTIONS = (
    "Signature required on delivery. Someone must be present to receive the package."
)
COURIER_WINDOW_INSTRUCTIONS = (
    "You will receive a 1-hour delivery window notification via SMS or email."
)

SATURDAY = 5
SUNDAY = 6


def adjust_for_weekend(value: datetime) -> datetime:
    """Move a Saturday or Sunday forward to the following Monday."""
    weekday = value.weekday()
    if weekday == SATURDAY:
        return value + timedelta(days=2)
    if weekday == SUNDAY:
        return value + timedelta(days=1)
    return value


def add_delivery_days(start: datetime, days: int) -> datetime:
    """Add the service's day estimate to start, then skip any weekend landing."""
    return adjust_for_weekend(start + timedelta(days=days))


def delivery_window(start: datetime, days: DeliveryDays) -> DeliveryEstimate:
    return DeliveryEstimate(
        min=add_delivery_days(start, days.min),
        max=add_delivery_days(start, days.max),
    )


class ShippingCalculator:
    """
    Pure shipping quote engine over a set of static rules.
    """

    def __init__(self, rules: ShippingRules):
        self._rules = rules
        self._zones_by_code = {zone.code: zone for zone in rules.zones}
        self._lookup = {
            service.id: ServiceLookup(service=service, zone=zone)
            for zone in rules.zones
            for service in zone.services
        }

    @property
    def rules(self) -> ShippingRules:
        return self._rules

    @property
    def zones(self):
        return self._rules.zones

    def get_zone(self, code: str) -> Optional[ShippingZone]:
        return self._zones_by_code.get(code.upper())

    @property
    def fallback_zone(self) -> ShippingZone:
        return self._zones_by_code[self._rules.fallback_zone_code]

    # ==================== Zone Resolution ====================

    def is_military_address(self, address: Optional[ShippingAddress]) -> bool:
        """True when any address field mentions a military postal indicator."""
        if address is None:
            return False
        text = address.text().lower()
        return any(indicator in text for indicator in self._rules.military_indicators)

    @staticmethod
    def validate_military_postcode(postcode: Optional[str]) -> bool:
        """Format check for BFPO postcodes (BFPO + 1-4 digits)."""
        if not postcode:
            return False
        return bool(BFPO_POSTCODE_PATTERN.match(postcode.strip()))

    def _regional_zone(
        self, country_code: str, address: Optional[ShippingAddress]
    ) -> Optional[ShippingZone]:
        if address is None or not address.postcode:
            return None
        postcode = address.postcode.strip().upper()
        for rule in self._rules.regional_rules:
            if country_code == rule.country_code and postcode.startswith(rule.postcode_prefix):
                return self._zones_by_code.get(rule.zone_code)
        return None

    def resolve_zone(
        self, country_code: str, address: Optional[ShippingAddress] = None
    ) -> ShippingZone:
        """
        Get the shipping zone for a destination.

        Precedence: military address, regional postcode, country code,
        then the rest-of-world zone. Never fails.
        """
        upper_country = (country_code or "").strip().upper()

        # Military addresses route to BFPO regardless of country code
        if self.is_military_address(address):
            logger.debug(f"Military address detected (country={upper_country!r})")
            return self._zones_by_code[self._rules.military_zone_code]

        regional = self._regional_zone(upper_country, address)
        if regional is not None:
            logger.debug(f"Regional postcode routed {upper_country} to zone {regional.code}")
            return regional

        for zone in self._rules.zones:
            if zone.matches_country(upper_country):
                return zone

        return self.fallback_zone

    def is_country_supported(self, country_code: str) -> bool:
        """True when the country has a dedicated zone rather than rest of world."""
        return not self.resolve_zone(country_code).is_wildcard

    # ==================== Pricing ====================

    def total_weight(self, items: Iterable[CartItem]) -> float:
        """Total cart weight in grams, using the default weight for unweighted items."""
        default = self._rules.default_item_weight
        return sum((item.weight or default) * item.quantity for item in items)

    def weight_tier_multiplier(self, total_weight: float) -> float:
        for tier in self._rules.weight_tiers:
            if tier.applies_to(total_weight):
                return tier.multiplier
        return self._rules.weight_tiers[-1].multiplier

    def price_for_weight(self, service: ShippingService, total_weight: float) -> float:
        """Base rate, scaled by weight tier for weight-priced services."""
        if not service.is_weight_priced:
            return service.base_rate
        return service.base_rate * self.weight_tier_multiplier(total_weight)

    def special_instructions(
        self, service: ShippingService, zone: ShippingZone
    ) -> Optional[str]:
        """First matching advisory wins."""
        if zone.code == self._rules.military_zone_code:
            return BFPO_INSTRUCTIONS
        if service.requires_signature:
            return SIGNATURE_INSTRUCTIONS
        if service.carrier in self._rules.courier_window_carriers:
            return COURIER_WINDOW_INSTRUCTIONS
        return None

    # ==================== Quotes ====================

    def quote(
        self,
        items: Iterable[CartItem],
        country_code: str,
        address: Optional[ShippingAddress] = None,
        subtotal: float = 0.0,
        now: Optional[datetime] = None,
    ) -> List[ShippingQuote]:
        """
        Calculate shipping quotes for a cart and destination.

        Returns free quotes first, then ascending by price. Services whose
        weight cap the cart exceeds are left out.
        """
        items = list(items)
        zone = self.resolve_zone(country_code, address)
        total_weight = self.total_weight(items)
        start = now or utcnow()
        first_tier_limit = self._rules.weight_tiers[0].max_weight

        quotes = []
        for service in zone.services:
            if service.max_weight and total_weight > service.max_weight:
                logger.debug(
                    f"Skipping {service.id}: {total_weight}g exceeds {service.max_weight}g"
                )
                continue

            is_free = subtotal >= zone.free_shipping_threshold and service.type == ServiceType.STANDARD
            rate = self.price_for_weight(service, total_weight)

            quotes.append(
                ShippingQuote(
                    service=service,
                    zone=zone,
                    final_rate=0.0 if is_free else rate,
                    estimated_delivery=delivery_window(start, service.estimated_days),
                    is_free=is_free,
                    weight_adjustment=(
                        total_weight
                        if first_tier_limit is not None and total_weight > first_tier_limit
                        else None
                    ),
                    special_instructions=self.special_instructions(service, zone),
                )
            )

        quotes.sort(key=lambda q: (not q.is_free, q.final_rate))

        logger.info(
            f"Shipping quotes: zone={zone.code} weight={total_weight}g "
            f"subtotal={subtotal} options={len(quotes)}"
        )
        return quotes

    # ==================== Lookup ====================

    def lookup_service(self, service_id: str) -> Optional[ServiceLookup]:
        """Find a service and its zone by id. None means a re-quote is required."""
        found = self._lookup.get(service_id)
        if found is None:
            logger.warning(f"Unknown shipping service id: {service_id!r}")
        return found

    def estimated_delivery_range(
        self, service_id: str, order_date: Optional[datetime] = None
    ) -> DeliveryEstimate:
        """Delivery window for a stored service id, with a generic fallback."""
        start = order_date or utcnow()
        found = self._lookup.get(service_id)
        days = found.service.estimated_days if found else FALLBACK_DELIVERY_DAYS
        return delivery_window(start, days)


def build_rules() -> ShippingRules:
    """Assemble the shipping rules from the static tables and settings."""
    indicators = tuple(
        dict.fromkeys(MILITARY_ADDRESS_INDICATORS + tuple(settings.SHIPPING_EXTRA_MILITARY_INDICATORS))
    )
    regional_rule = RegionalPostcodeRule(
        country_code=settings.SHIPPING_HOME_COUNTRY,
        postcode_prefix=settings.SHIPPING_REGIONAL_POSTCODE_PREFIX,
        zone_code=NI_ZONE.code,
    )
    return ShippingRules(
        zones=SHIPPING_ZONES,
        military_indicators=indicators,
        regional_rules=(regional_rule,),
        weight_tiers=WEIGHT_TIERS,
        default_item_weight=settings.SHIPPING_DEFAULT_ITEM_WEIGHT_GRAMS,
        courier_window_carriers=COURIER_WINDOW_CARRIERS,
    )


shipping_calculator = ShippingCalculator(build_rules())


def get_shipping_calculator() -> ShippingCalculator:
    """FastAPI dependency returning the shared calculator."""
    return shipping_calculator
