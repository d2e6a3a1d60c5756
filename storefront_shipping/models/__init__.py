"""
Shipping domain models and static rule tables.
"""
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
    WeightTier,
)
from storefront_shipping.models.zones import SHIPPING_ZONES

__all__ = [
    "CartItem",
    "DeliveryDays",
    "DeliveryEstimate",
    "RegionalPostcodeRule",
    "ServiceLookup",
    "ServiceType",
    "ShippingAddress",
    "ShippingQuote",
    "ShippingRules",
    "ShippingService",
    "ShippingZone",
    "WeightTier",
    "SHIPPING_ZONES",
]
