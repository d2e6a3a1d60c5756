"""
Checkout shipping options

Converts shipping quotes into the payment provider's shipping_rate_data
format. Amounts are sent in minor units (pence); metadata values must all be
strings.
"""
from typing import Any, Dict, Iterable, List, Optional

from storefront_shipping.core.config import settings
from storefront_shipping.core.utils import to_minor_units
from storefront_shipping.models.shipping import ShippingQuote


def _flag(value: bool) -> str:
    return "true" if value else "false"


def build_shipping_option(quote: ShippingQuote, currency: Optional[str] = None) -> Dict[str, Any]:
    """Build a single fixed-amount shipping option from a quote."""
    service = quote.service
    return {
        "shipping_rate_data": {
            "type": "fixed_amount",
            "fixed_amount": {
                "amount": to_minor_units(quote.final_rate),
                "currency": (currency or settings.SHIPPING_CURRENCY).lower(),
            },
            "display_name": service.name,
            "delivery_estimate": {
                "minimum": {"unit": "business_day", "value": service.estimated_days.min},
                "maximum": {"unit": "business_day", "value": service.estimated_days.max},
            },
            "metadata": {
                "service_id": service.id,
                "carrier": service.carrier,
                "service_type": service.type.value,
                "zone_code": quote.zone.code,
                "tracking_included": _flag(service.tracking_included),
                "requires_signature": _flag(service.requires_signature),
                "description": service.description,
                "special_instructions": quote.special_instructions or "",
            },
        }
    }


def build_shipping_options(
    quotes: Iterable[ShippingQuote], currency: Optional[str] = None
) -> List[Dict[str, Any]]:
    """Build shipping options for every quote, preserving quote order."""
    return [build_shipping_option(quote, currency) for quote in quotes]
