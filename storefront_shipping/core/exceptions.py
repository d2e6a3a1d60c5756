"""
Storefront Exception Hierarchy

All exceptions include code, message, and details so API handlers can
serialize them and logs carry enough context for debugging.

The shipping calculator itself never raises for unrecognised input (it
degrades to defaults); these errors surface at the API layer.

Exception Hierarchy:
    StorefrontBaseError
    └── ShippingError
        ├── ShippingQuoteError
        └── ShippingServiceNotFoundError
"""
import logging
from typing import Optional, Dict, Any

logger = logging.getLogger(__name__)


class StorefrontBaseError(Exception):
    """
    Base exception for all storefront custom errors.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code for programmatic handling
        details: Additional context for debugging
        severity: P0-P3 severity level
        status_code: HTTP status the API layer responds with
    """

    default_code: str = "STOREFRONT_ERROR"
    default_severity: str = "P2"
    status_code: int = 400

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        severity: Optional[str] = None,
    ):
        self.message = message
        self.code = code or self.default_code
        self.details = details or {}
        self.severity = severity or self.default_severity
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "severity": self.severity,
            "details": self.details,
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


# =============================================================================
# SHIPPING ERRORS
# =============================================================================

class ShippingError(StorefrontBaseError):
    """Base exception for shipping-related errors."""
    default_code = "SHIPPING_ERROR"
    default_severity = "P1"


class ShippingQuoteError(ShippingError):
    """No usable shipping quote for a cart (e.g. too heavy for every service)."""
    default_code = "SHIPPING_QUOTE_FAILED"
    status_code = 422


class ShippingServiceNotFoundError(ShippingError):
    """
    A previously selected service id no longer exists.

    Callers should treat this as "re-quote required", not a hard failure.
    """
    default_code = "SHIPPING_SERVICE_NOT_FOUND"
    default_severity = "P3"
    status_code = 404

    def __init__(
        self,
        message: str,
        service_id: Optional[str] = None,
        **kwargs
    ):
        details = kwargs.pop("details", {})
        details.update({
            "service_id": service_id,
            "requote_required": True,
        })
        super().__init__(message, details=details, **kwargs)
