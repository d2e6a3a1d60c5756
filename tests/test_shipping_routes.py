"""
Tests for shipping API routes.
"""
import pytest
from fastapi.testclient import TestClient

from storefront_shipping.main import app


@pytest.fixture
def client():
    return TestClient(app)


class TestHealthEndpoints:

    def test_root(self, client):
        resp = client.get("/")
        assert resp.status_code == 200
        assert resp.json()["status"] == "operational"

    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "healthy"


class TestQuoteEndpoints:

    def test_quotes_for_uk_cart(self, client, sample_quote_request):
        resp = client.post("/api/shipping/quotes", json=sample_quote_request)
        assert resp.status_code == 200
        data = resp.json()

        assert data["zone"]["code"] == "UK"
        assert data["default_service_id"] == "uk-royal-mail-standard"
        rates = [q["final_rate"] for q in data["quotes"]]
        assert rates == sorted(rates)
        assert data["quotes"][0]["final_rate"] == 7.49
        assert data["quotes"][0]["weight_adjustment"] == 1200

    def test_quotes_with_bfpo_address(self, client, sample_quote_request):
        sample_quote_request["address"] = {
            "line1": "Sgt A Smith",
            "postcode": "BFPO 123",
            "country": "GB",
        }
        resp = client.post("/api/shipping/quotes", json=sample_quote_request)
        assert resp.status_code == 200
        data = resp.json()

        assert data["zone"]["code"] == "BFPO"
        assert [q["service"]["id"] for q in data["quotes"]] == ["bfpo-standard", "bfpo-priority"]
        assert all(q["special_instructions"].startswith("BFPO addresses") for q in data["quotes"])

    def test_quotes_reject_empty_cart(self, client, sample_quote_request):
        sample_quote_request["items"] = []
        resp = client.post("/api/shipping/quotes", json=sample_quote_request)
        assert resp.status_code == 422

    def test_quotes_reject_zero_quantity(self, client, sample_quote_request):
        sample_quote_request["items"][0]["quantity"] = 0
        resp = client.post("/api/shipping/quotes", json=sample_quote_request)
        assert resp.status_code == 422

    def test_quotes_reject_negative_subtotal(self, client, sample_quote_request):
        sample_quote_request["subtotal"] = -1
        resp = client.post("/api/shipping/quotes", json=sample_quote_request)
        assert resp.status_code == 422

    def test_quotes_when_nothing_fits(self, client):
        resp = client.post("/api/shipping/quotes", json={
            "items": [{"variant_id": "boots", "quantity": 1, "weight": 2500}],
            "country_code": "FR",
            "subtotal": 20,
        })
        assert resp.status_code == 200
        assert resp.json()["quotes"] == []
        assert resp.json()["default_service_id"] is None

    def test_preview_reports_free_shipping_progress(self, client, sample_quote_request):
        resp = client.post("/api/shipping/preview", json=sample_quote_request)
        assert resp.status_code == 200
        data = resp.json()

        assert data["qualifies_for_free"] is False
        assert data["amount_to_free_shipping"] == pytest.approx(5.0)
        assert data["total_weight"] == 1200
        assert data["zone"]["free_shipping_threshold"] == 50.0

    def test_preview_over_threshold(self, client, sample_quote_request):
        sample_quote_request["subtotal"] = 60
        data = client.post("/api/shipping/preview", json=sample_quote_request).json()

        assert data["qualifies_for_free"] is True
        assert data["amount_to_free_shipping"] == 0
        assert data["quotes"][0]["is_free"] is True
        assert data["quotes"][0]["final_rate"] == 0

    def test_checkout_options(self, client, sample_quote_request):
        resp = client.post("/api/shipping/checkout-options", json=sample_quote_request)
        assert resp.status_code == 200
        data = resp.json()

        assert data["zone_code"] == "UK"
        first = data["shipping_options"][0]["shipping_rate_data"]
        assert first["fixed_amount"] == {"amount": 749, "currency": "gbp"}
        assert first["metadata"]["service_id"] == "uk-royal-mail-standard"

    def test_displayed_rates_match_charged_amounts(self, client, sample_quote_request):
        quotes = client.post("/api/shipping/quotes", json=sample_quote_request).json()["quotes"]
        options = client.post("/api/shipping/checkout-options", json=sample_quote_request).json()

        charged = [o["shipping_rate_data"]["fixed_amount"]["amount"] for o in options["shipping_options"]]
        displayed = [q["final_rate"] for q in quotes]
        assert displayed == [7.49, 14.99, 19.49]
        assert charged == [749, 1499, 1949]
        assert [round(rate * 100) for rate in displayed] == charged

    def test_checkout_options_rejects_unshippable_order(self, client):
        resp = client.post("/api/shipping/checkout-options", json={
            "items": [{"variant_id": "boots", "quantity": 2, "weight": 1500}],
            "country_code": "AU",
            "subtotal": 120,
        })
        assert resp.status_code == 422
        data = resp.json()
        assert data["code"] == "SHIPPING_QUOTE_FAILED"
        assert data["details"] == {"zone_code": "WORLD", "total_weight": 3000}


class TestServiceEndpoints:

    def test_list_zones(self, client):
        resp = client.get("/api/shipping/zones")
        assert resp.status_code == 200
        codes = [z["code"] for z in resp.json()]
        assert codes == ["UK", "BFPO", "NI", "EU", "WORLD"]

    def test_get_service(self, client):
        resp = client.get("/api/shipping/services/bfpo-priority")
        assert resp.status_code == 200
        data = resp.json()
        assert data["service"]["type"] == "bfpo_express"
        assert data["zone"]["code"] == "BFPO"

    def test_stale_service_requires_requote(self, client):
        resp = client.get("/api/shipping/services/free-standard")
        assert resp.status_code == 404
        data = resp.json()
        assert data["code"] == "SHIPPING_SERVICE_NOT_FOUND"
        assert data["details"]["requote_required"] is True

    def test_stale_service_message_not_masked(self, client):
        resp = client.get("/api/shipping/services/monkey-tracked")
        assert resp.status_code == 404
        data = resp.json()
        assert "re-quote" in data["message"]
        assert data["details"]["service_id"] == "monkey-tracked"

    def test_delivery_estimate(self, client):
        resp = client.get("/api/shipping/services/uk-royal-mail-express/delivery-estimate")
        assert resp.status_code == 200
        data = resp.json()
        assert data["min"] <= data["max"]

    def test_delivery_estimate_unknown_service(self, client):
        resp = client.get("/api/shipping/services/nope/delivery-estimate")
        assert resp.status_code == 404

    @pytest.mark.parametrize("country_code,supported,zone_code", [
        ("gb", True, "UK"),
        ("DE", True, "EU"),
        ("JP", False, "WORLD"),
    ])
    def test_country_support(self, client, country_code, supported, zone_code):
        data = client.get(f"/api/shipping/countries/{country_code}").json()
        assert data["supported"] is supported
        assert data["zone_code"] == zone_code
        assert data["country_code"] == country_code.upper()


class TestAddressHintEndpoints:

    def test_military_address_detected(self, client):
        resp = client.post("/api/shipping/military-address", json={
            "address": {"line1": "HQ British Forces Cyprus", "postcode": "BFPO 57"},
            "country_code": "CY",
        })
        assert resp.status_code == 200
        assert resp.json() == {"is_military": True, "zone_code": "BFPO"}

    def test_civilian_address(self, client):
        resp = client.post("/api/shipping/military-address", json={
            "address": {"line1": "1 High Street", "postcode": "BT1 1AA"},
            "country_code": "GB",
        })
        assert resp.json() == {"is_military": False, "zone_code": "NI"}

    def test_civilian_address_without_country(self, client):
        resp = client.post("/api/shipping/military-address", json={
            "address": {"line1": "1 High Street"},
        })
        assert resp.json() == {"is_military": False, "zone_code": None}

    @pytest.mark.parametrize("postcode,valid", [
        ("BFPO 123", True),
        ("bfpo1234", True),
        ("BFPO 12345", False),
        ("SW1A 1AA", False),
    ])
    def test_bfpo_postcode_validation(self, client, postcode, valid):
        resp = client.get("/api/shipping/bfpo-postcode", params={"postcode": postcode})
        assert resp.status_code == 200
        assert resp.json()["valid"] is valid
