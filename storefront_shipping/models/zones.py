"""
Static shipping rule tables.

Rates are GBP, weights are grams. These tables are read-only after import;
add or change services here rather than at runtime.
"""
from storefront_shipping.models.shipping import (
    DeliveryDays,
    ServiceType,
    ShippingService,
    ShippingZone,
    WeightTier,
    WILDCARD_COUNTRY,
)

# Matched case-insensitively against the joined address text
MILITARY_ADDRESS_INDICATORS = (
    "bfpo",
    "british forces",
    "forces post office",
    "army post office",
    "naval post office",
    "raf post office",
)

# 0-500g base, 501-1000g +20%, 1001-2000g +50%, 2000g+ +100%
WEIGHT_TIERS = (
    WeightTier(max_weight=500, multiplier=1.0),
    WeightTier(max_weight=1000, multiplier=1.2),
    WeightTier(max_weight=2000, multiplier=1.5),
    WeightTier(max_weight=None, multiplier=2.0),
)

# Carriers that send a delivery-window notification
COURIER_WINDOW_CARRIERS = ("DPD",)

# Used when a stored service id can no longer be resolved
FALLBACK_DELIVERY_DAYS = DeliveryDays(min=7, max=14)

UK_ZONE = ShippingZone(
    code="UK",
    name="United Kingdom",
    countries=("GB",),
    free_shipping_threshold=50.00,
    description="Mainland UK addresses",
    services=(
        ShippingService(
            id="uk-royal-mail-standard",
            name="Royal Mail Standard",
            carrier="Royal Mail",
            type=ServiceType.STANDARD,
            base_rate=4.99,
            weight_multiplier=1.0,
            estimated_days=DeliveryDays(min=2, max=5),
            tracking_included=True,
            description="2nd Class Signed For - tracked and secure",
        ),
        ShippingService(
            id="uk-royal-mail-express",
            name="Royal Mail Express",
            carrier="Royal Mail",
            type=ServiceType.EXPRESS,
            base_rate=9.99,
            weight_multiplier=1.0,
            estimated_days=DeliveryDays(min=1, max=2),
            requires_signature=True,
            tracking_included=True,
            description="1st Class Signed For - next working day delivery",
        ),
        ShippingService(
            id="uk-dpd-courier",
            name="DPD Next Day",
            carrier="DPD",
            type=ServiceType.COURIER,
            base_rate=12.99,
            weight_multiplier=1.0,
            estimated_days=DeliveryDays(min=1, max=1),
            requires_signature=True,
            tracking_included=True,
            max_weight=20000,  # 20kg
            description="DPD next working day courier with 1-hour delivery window",
        ),
    ),
)

BFPO_ZONE = ShippingZone(
    code="BFPO",
    name="British Forces Post Office",
    countries=("BFPO",),
    free_shipping_threshold=40.00,
    description="British military personnel overseas",
    services=(
        ShippingService(
            id="bfpo-standard",
            name="BFPO Standard Post",
            carrier="Royal Mail BFPO",
            type=ServiceType.BFPO_STANDARD,
            base_rate=3.99,
            estimated_days=DeliveryDays(min=5, max=14),
            tracking_included=False,
            description="Surface mail to BFPO address - economical option",
        ),
        ShippingService(
            id="bfpo-priority",
            name="BFPO Priority Post",
            carrier="Royal Mail BFPO",
            type=ServiceType.BFPO_EXPRESS,
            base_rate=8.99,
            estimated_days=DeliveryDays(min=3, max=7),
            requires_signature=True,
            tracking_included=True,
            description="Airmail to BFPO address - faster delivery with tracking",
        ),
    ),
)

NI_ZONE = ShippingZone(
    code="NI",
    name="Northern Ireland",
    countries=("GB-NIR",),
    free_shipping_threshold=50.00,
    description="Northern Ireland addresses",
    services=(
        ShippingService(
            id="ni-royal-mail-standard",
            name="Royal Mail Standard (NI)",
            carrier="Royal Mail",
            type=ServiceType.STANDARD,
            base_rate=5.99,
            estimated_days=DeliveryDays(min=3, max=6),
            tracking_included=True,
            description="2nd Class Signed For to Northern Ireland",
        ),
        ShippingService(
            id="ni-royal-mail-express",
            name="Royal Mail Express (NI)",
            carrier="Royal Mail",
            type=ServiceType.EXPRESS,
            base_rate=11.99,
            estimated_days=DeliveryDays(min=1, max=3),
            requires_signature=True,
            tracking_included=True,
            description="1st Class Signed For to Northern Ireland",
        ),
    ),
)

EU_ZONE = ShippingZone(
    code="EU",
    name="European Union",
    countries=(
        "DE", "FR", "ES", "IT", "NL", "BE", "IE", "AT",
        "PT", "DK", "SE", "FI", "LU", "MT", "CY",
    ),
    free_shipping_threshold=75.00,
    description="European Union member states",
    services=(
        ShippingService(
            id="eu-royal-mail-international",
            name="Royal Mail International Standard",
            carrier="Royal Mail International",
            type=ServiceType.STANDARD,
            base_rate=12.99,
            weight_multiplier=1.2,
            estimated_days=DeliveryDays(min=5, max=10),
            tracking_included=True,
            max_weight=2000,  # 2kg limit
            description="International Signed delivery to EU",
        ),
        ShippingService(
            id="eu-royal-mail-tracked",
            name="Royal Mail International Tracked",
            carrier="Royal Mail International",
            type=ServiceType.EXPRESS,
            base_rate=24.99,
            weight_multiplier=1.3,
            estimated_days=DeliveryDays(min=3, max=5),
            requires_signature=True,
            tracking_included=True,
            max_weight=2000,
            description="International Tracked & Signed to EU",
        ),
    ),
)

WORLD_ZONE = ShippingZone(
    code="WORLD",
    name="Rest of World",
    countries=(WILDCARD_COUNTRY,),
    free_shipping_threshold=150.00,
    description="International destinations outside EU",
    services=(
        ShippingService(
            id="world-royal-mail-international",
            name="Royal Mail International Standard",
            carrier="Royal Mail International",
            type=ServiceType.STANDARD,
            base_rate=19.99,
            weight_multiplier=1.5,
            estimated_days=DeliveryDays(min=10, max=21),
            tracking_included=True,
            max_weight=2000,
            description="International delivery worldwide",
        ),
        ShippingService(
            id="world-royal-mail-tracked",
            name="Royal Mail International Tracked",
            carrier="Royal Mail International",
            type=ServiceType.EXPRESS,
            base_rate=39.99,
            weight_multiplier=1.6,
            estimated_days=DeliveryDays(min=5, max=14),
            requires_signature=True,
            tracking_included=True,
            max_weight=2000,
            description="International Tracked & Signed worldwide",
        ),
    ),
)

# Order matters: the first zone listing a country wins
SHIPPING_ZONES = (UK_ZONE, BFPO_ZONE, NI_ZONE, EU_ZONE, WORLD_ZONE)
