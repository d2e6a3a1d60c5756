from storefront_shipping.services.checkout_options import build_shipping_options
from storefront_shipping.services.shipping_calculator import (
    ShippingCalculator,
    get_shipping_calculator,
)

__all__ = [
    "ShippingCalculator",
    "build_shipping_options",
    "get_shipping_calculator",
]
