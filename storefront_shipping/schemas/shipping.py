"""
Shipping Schemas

Pydantic models for shipping API requests and responses.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from storefront_shipping.core.utils import round_money
from storefront_shipping.models.shipping import (
    CartItem,
    ShippingAddress,
    ShippingQuote,
    ShippingService,
    ShippingZone,
)


# ==================== Request Schemas ====================


class CartItemIn(BaseModel):
    """A cart line for rate calculation."""
    variant_id: str = Field(..., min_length=1, max_length=100)
    quantity: int = Field(..., ge=1, le=1000)
    weight: Optional[float] = Field(None, gt=0, description="Weight per unit in grams")
    price: Optional[float] = Field(None, ge=0)

    def to_cart_item(self) -> CartItem:
        return CartItem(variant_id=self.variant_id, quantity=self.quantity, weight=self.weight)


class AddressIn(BaseModel):
    """Destination address fields inspected for BFPO / regional routing."""
    line1: Optional[str] = Field(None, max_length=200)
    line2: Optional[str] = Field(None, max_length=200)
    city: Optional[str] = Field(None, max_length=100)
    postcode: Optional[str] = Field(None, max_length=20)
    country: Optional[str] = Field(None, max_length=100)

    def to_address(self) -> ShippingAddress:
        return ShippingAddress(
            line1=self.line1,
            line2=self.line2,
            city=self.city,
            postcode=self.postcode,
            country=self.country,
        )


class QuoteRequest(BaseModel):
    """Request shipping quotes for a cart."""
    items: List[CartItemIn] = Field(..., min_length=1)
    country_code: str = Field(..., min_length=2, max_length=6)
    address: Optional[AddressIn] = None
    subtotal: float = Field(..., ge=0)

    @field_validator("country_code")
    @classmethod
    def validate_country_code(cls, v):
        return v.strip().upper()

    def cart_items(self) -> List[CartItem]:
        return [item.to_cart_item() for item in self.items]

    def shipping_address(self) -> Optional[ShippingAddress]:
        return self.address.to_address() if self.address else None


class MilitaryAddressRequest(BaseModel):
    """Address to check for military postal indicators."""
    address: AddressIn
    country_code: Optional[str] = Field(None, min_length=2, max_length=6)


# ==================== Response Schemas ====================


class DeliveryDaysResponse(BaseModel):
    min: int
    max: int


class DeliveryWindowResponse(BaseModel):
    min: datetime
    max: datetime


class ServiceResponse(BaseModel):
    """A shipping service as configured."""
    id: str
    name: str
    carrier: str
    type: str
    base_rate: float
    estimated_days: DeliveryDaysResponse
    tracking_included: bool
    requires_signature: bool = False
    max_weight: Optional[int] = None
    weight_priced: bool = False
    description: str = ""

    @classmethod
    def from_service(cls, service: ShippingService) -> "ServiceResponse":
        return cls(
            id=service.id,
            name=service.name,
            carrier=service.carrier,
            type=service.type.value,
            base_rate=service.base_rate,
            estimated_days=DeliveryDaysResponse(
                min=service.estimated_days.min, max=service.estimated_days.max
            ),
            tracking_included=service.tracking_included,
            requires_signature=service.requires_signature,
            max_weight=service.max_weight,
            weight_priced=service.is_weight_priced,
            description=service.description,
        )


class ZoneSummary(BaseModel):
    code: str
    name: str
    free_shipping_threshold: float
    description: Optional[str] = None

    @classmethod
    def from_zone(cls, zone: ShippingZone) -> "ZoneSummary":
        return cls(
            code=zone.code,
            name=zone.name,
            free_shipping_threshold=zone.free_shipping_threshold,
            description=zone.description,
        )


class ZoneResponse(ZoneSummary):
    countries: List[str]
    services: List[ServiceResponse]

    @classmethod
    def from_zone(cls, zone: ShippingZone) -> "ZoneResponse":
        return cls(
            code=zone.code,
            name=zone.name,
            free_shipping_threshold=zone.free_shipping_threshold,
            description=zone.description,
            countries=list(zone.countries),
            services=[ServiceResponse.from_service(s) for s in zone.services],
        )


class QuoteResponse(BaseModel):
    """A single shipping option for the cart."""
    service: ServiceResponse
    zone_code: str
    final_rate: float
    is_free: bool
    estimated_delivery: DeliveryWindowResponse
    weight_adjustment: Optional[float] = None
    special_instructions: Optional[str] = None

    @classmethod
    def from_quote(cls, quote: ShippingQuote) -> "QuoteResponse":
        return cls(
            service=ServiceResponse.from_service(quote.service),
            zone_code=quote.zone.code,
            final_rate=round_money(quote.final_rate),
            is_free=quote.is_free,
            estimated_delivery=DeliveryWindowResponse(
                min=quote.estimated_delivery.min, max=quote.estimated_delivery.max
            ),
            weight_adjustment=quote.weight_adjustment,
            special_instructions=quote.special_instructions,
        )


class QuoteListResponse(BaseModel):
    """Ordered shipping options; the first is the suggested default."""
    zone: ZoneSummary
    quotes: List[QuoteResponse]
    default_service_id: Optional[str] = None


class ShippingPreviewResponse(BaseModel):
    """Cart-page preview of shipping options and free-shipping progress."""
    zone: ZoneSummary
    quotes: List[QuoteResponse]
    qualifies_for_free: bool
    amount_to_free_shipping: float
    subtotal: float
    total_weight: float


class CheckoutOptionsResponse(BaseModel):
    """Shipping options in the payment provider's shipping_rate_data format."""
    zone_code: str
    shipping_options: List[Dict[str, Any]]


class ServiceLookupResponse(BaseModel):
    service: ServiceResponse
    zone: ZoneSummary


class MilitaryAddressResponse(BaseModel):
    is_military: bool
    zone_code: Optional[str] = None


class PostcodeValidationResponse(BaseModel):
    postcode: str
    valid: bool


class CountrySupportResponse(BaseModel):
    country_code: str
    supported: bool
    zone_code: str
