"""
Tests for the exception hierarchy and error handling middleware.
"""
import json

import pytest
from starlette.requests import Request

from storefront_shipping.core.error_handler import (
    ErrorSanitizationMiddleware,
    is_sensitive_error,
    sanitize_error_message,
    storefront_error_handler,
)
from storefront_shipping.core.exceptions import (
    ShippingError,
    ShippingQuoteError,
    ShippingServiceNotFoundError,
    StorefrontBaseError,
)


def _request(path: str = "/api/shipping/quotes") -> Request:
    scope = {"type": "http", "method": "POST", "path": path, "headers": []}
    return Request(scope)


class TestExceptions:

    def test_defaults(self):
        err = ShippingQuoteError("no quotes")
        assert isinstance(err, ShippingError)
        assert isinstance(err, StorefrontBaseError)
        assert err.code == "SHIPPING_QUOTE_FAILED"
        assert err.severity == "P1"
        assert err.status_code == 422
        assert ShippingError("x").status_code == 400

    def test_service_not_found_details(self):
        err = ShippingServiceNotFoundError("gone", service_id="uk-old")
        assert err.status_code == 404
        assert err.details == {"service_id": "uk-old", "requote_required": True}
        assert err.to_dict() == {
            "error_type": "ShippingServiceNotFoundError",
            "code": "SHIPPING_SERVICE_NOT_FOUND",
            "message": "gone",
            "severity": "P3",
            "details": {"service_id": "uk-old", "requote_required": True},
        }

    def test_code_override(self):
        assert ShippingError("x", code="CUSTOM").code == "CUSTOM"


class TestSanitization:

    def test_sensitive_messages_hidden(self):
        assert is_sensitive_error("invalid API key supplied")
        assert sanitize_error_message("invalid API key supplied").startswith("An internal error")

    def test_plain_messages_kept(self):
        assert sanitize_error_message(ValueError("bad input")) == "bad input"

    def test_long_messages_truncated(self):
        assert sanitize_error_message("x" * 300) == "x" * 200 + "..."


class TestHandlers:

    @pytest.mark.asyncio
    async def test_storefront_error_handler(self):
        err = ShippingServiceNotFoundError("Service gone", service_id="uk-old")
        response = await storefront_error_handler(_request(), err)

        assert response.status_code == 404
        body = json.loads(response.body)
        assert body["code"] == "SHIPPING_SERVICE_NOT_FOUND"
        assert body["error"] == "shipping_service_not_found"
        assert body["details"]["service_id"] == "uk-old"

    @pytest.mark.asyncio
    async def test_middleware_sanitizes_unhandled_errors(self):
        middleware = ErrorSanitizationMiddleware(app=None)

        async def _call_next(request):
            raise RuntimeError("boom")

        response = await middleware.dispatch(_request(), _call_next)

        assert response.status_code == 500
        body = json.loads(response.body)
        assert body["error"] == "internal_error"
        assert "boom" not in body["message"]
        assert body["error_id"].startswith("unknown-")
