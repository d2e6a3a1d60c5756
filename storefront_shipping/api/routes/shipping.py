"""
Shipping API Routes

Provides endpoints for:
- Rate quoting (cart + destination -> ordered shipping options)
- Cart-page shipping preview with free-shipping progress
- Checkout shipping options in the payment provider's format
- Service lookup for re-hydrating a stored selection
- Military address and BFPO postcode hints for address forms
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, Query

from storefront_shipping.core.utils import round_money
from storefront_shipping.core.exceptions import (
    ShippingQuoteError,
    ShippingServiceNotFoundError,
)
from storefront_shipping.services.checkout_options import build_shipping_options
from storefront_shipping.services.shipping_calculator import (
    ShippingCalculator,
    get_shipping_calculator,
)
from storefront_shipping.schemas.shipping import (
    CheckoutOptionsResponse,
    CountrySupportResponse,
    DeliveryWindowResponse,
    MilitaryAddressRequest,
    MilitaryAddressResponse,
    PostcodeValidationResponse,
    QuoteListResponse,
    QuoteRequest,
    QuoteResponse,
    ServiceLookupResponse,
    ServiceResponse,
    ShippingPreviewResponse,
    ZoneResponse,
    ZoneSummary,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/shipping", tags=["shipping"])


def _lookup_or_404(calculator: ShippingCalculator, service_id: str):
    found = calculator.lookup_service(service_id)
    if found is None:
        raise ShippingServiceNotFoundError(
            "Selected shipping service is no longer available; please re-quote",
            service_id=service_id,
        )
    return found


# ==================== Quote Endpoints ====================


@router.post("/quotes", response_model=QuoteListResponse)
def get_quotes(
    request: QuoteRequest,
    calculator: ShippingCalculator = Depends(get_shipping_calculator),
):
    """
    Get shipping options for a cart and destination.

    Free options come first, then ascending by price.
    """
    address = request.shipping_address()
    zone = calculator.resolve_zone(request.country_code, address)
    quotes = calculator.quote(
        request.cart_items(),
        request.country_code,
        address=address,
        subtotal=request.subtotal,
    )
    return QuoteListResponse(
        zone=ZoneSummary.from_zone(zone),
        quotes=[QuoteResponse.from_quote(q) for q in quotes],
        default_service_id=quotes[0].service.id if quotes else None,
    )


@router.post("/preview", response_model=ShippingPreviewResponse)
def preview_shipping(
    request: QuoteRequest,
    calculator: ShippingCalculator = Depends(get_shipping_calculator),
):
    """Shipping preview for the cart page, including distance to free shipping."""
    address = request.shipping_address()
    items = request.cart_items()
    zone = calculator.resolve_zone(request.country_code, address)
    quotes = calculator.quote(
        items,
        request.country_code,
        address=address,
        subtotal=request.subtotal,
    )
    remaining = max(zone.free_shipping_threshold - request.subtotal, 0.0)
    return ShippingPreviewResponse(
        zone=ZoneSummary.from_zone(zone),
        quotes=[QuoteResponse.from_quote(q) for q in quotes],
        qualifies_for_free=request.subtotal >= zone.free_shipping_threshold,
        amount_to_free_shipping=round_money(remaining),
        subtotal=request.subtotal,
        total_weight=calculator.total_weight(items),
    )


@router.post("/checkout-options", response_model=CheckoutOptionsResponse)
def checkout_options(
    request: QuoteRequest,
    calculator: ShippingCalculator = Depends(get_shipping_calculator),
):
    """
    Shipping options formatted for the payment provider's checkout session.

    A checkout session cannot be created without at least one option, so an
    order no service can carry is rejected here.
    """
    address = request.shipping_address()
    items = request.cart_items()
    quotes = calculator.quote(
        items,
        request.country_code,
        address=address,
        subtotal=request.subtotal,
    )
    zone = calculator.resolve_zone(request.country_code, address)
    if not quotes:
        raise ShippingQuoteError(
            "No shipping service can carry this order",
            details={"zone_code": zone.code, "total_weight": calculator.total_weight(items)},
        )
    return CheckoutOptionsResponse(
        zone_code=zone.code,
        shipping_options=build_shipping_options(quotes),
    )


# ==================== Zone / Service Endpoints ====================


@router.get("/zones", response_model=List[ZoneResponse])
def list_zones(calculator: ShippingCalculator = Depends(get_shipping_calculator)):
    """All shipping zones with their services."""
    return [ZoneResponse.from_zone(zone) for zone in calculator.zones]


@router.get("/services/{service_id}", response_model=ServiceLookupResponse)
def get_service(
    service_id: str,
    calculator: ShippingCalculator = Depends(get_shipping_calculator),
):
    """
    Look up a previously selected service.

    404 means the stored selection is stale and the cart must be re-quoted.
    """
    found = _lookup_or_404(calculator, service_id)
    return ServiceLookupResponse(
        service=ServiceResponse.from_service(found.service),
        zone=ZoneSummary.from_zone(found.zone),
    )


@router.get("/services/{service_id}/delivery-estimate", response_model=DeliveryWindowResponse)
def get_delivery_estimate(
    service_id: str,
    calculator: ShippingCalculator = Depends(get_shipping_calculator),
):
    """Estimated delivery window for a service, starting today."""
    _lookup_or_404(calculator, service_id)
    window = calculator.estimated_delivery_range(service_id)
    return DeliveryWindowResponse(min=window.min, max=window.max)


@router.get("/countries/{country_code}", response_model=CountrySupportResponse)
def country_support(
    country_code: str,
    calculator: ShippingCalculator = Depends(get_shipping_calculator),
):
    """Whether a country has a dedicated zone (otherwise rest-of-world rates apply)."""
    zone = calculator.resolve_zone(country_code)
    return CountrySupportResponse(
        country_code=country_code.upper(),
        supported=not zone.is_wildcard,
        zone_code=zone.code,
    )


# ==================== Address Hint Endpoints ====================


@router.post("/military-address", response_model=MilitaryAddressResponse)
def check_military_address(
    request: MilitaryAddressRequest,
    calculator: ShippingCalculator = Depends(get_shipping_calculator),
):
    """Detect a military (BFPO) address so the form can show a hint."""
    address = request.address.to_address()
    is_military = calculator.is_military_address(address)
    zone_code = None
    if is_military or request.country_code:
        zone_code = calculator.resolve_zone(request.country_code or "", address).code
    return MilitaryAddressResponse(is_military=is_military, zone_code=zone_code)


@router.get("/bfpo-postcode", response_model=PostcodeValidationResponse)
def validate_bfpo_postcode(
    postcode: str = Query(..., max_length=20),
    calculator: ShippingCalculator = Depends(get_shipping_calculator),
):
    """Format check for BFPO postcodes (e.g. "BFPO 123")."""
    return PostcodeValidationResponse(
        postcode=postcode,
        valid=calculator.validate_military_postcode(postcode),
    )
