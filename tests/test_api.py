"""Tests for the reference API endpoints."""

import os
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

# Set environment variables before importing app
os.environ.setdefault("API_KEY", "test_api_key_12345")

from beanstream_sdk.api import _build_connector, app, get_connector
from beanstream_sdk.connectors.base import AVSResult, PaymentResponse
from beanstream_sdk.exceptions import (
    MissingCredentialsError,
    MissingRequiredOptionError,
    ResponseParseError,
)


@pytest.fixture
def mock_connector():
    connector = MagicMock()
    approved = PaymentResponse(
        success=True,
        message="Approved",
        params={"trnId": "10000028"},
        authorization="10000028;15.00;P",
        cvv_result="M",
        avs_result=AVSResult(code="R"),
    )
    connector.authorize.return_value = approved
    connector.purchase.return_value = approved
    connector.capture.return_value = approved
    connector.refund.return_value = approved
    connector.void.return_value = approved
    connector.health_check.return_value = {"ok": True, "provider": "beanstream"}
    return connector


@pytest.fixture
def client(mock_connector):
    """Create test client with the connector replaced."""
    app.dependency_overrides[get_connector] = lambda: mock_connector
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    """Return authenticated headers."""
    return {"Authorization": "Bearer test_api_key_12345"}


@pytest.fixture
def card_payment_body():
    return {
        "amount": 1500,
        "source": {
            "kind": "card",
            "name": "Longbob Longsen",
            "number": "4030000010001234",
            "month": 4,
            "year": 2030,
            "verification_value": "123",
        },
        "options": {"order_id": "order-1"},
    }


class TestAuthentication:
    """Tests for API key checks."""

    def test_missing_key_rejected(self, client, card_payment_body):
        """Test requests without credentials are refused."""
        response = client.post("/payments", json=card_payment_body)
        assert response.status_code in (401, 403)

    def test_wrong_key_rejected(self, client, card_payment_body):
        """Test requests with the wrong key are refused."""
        response = client.post(
            "/payments", json=card_payment_body, headers={"Authorization": "Bearer nope"}
        )
        assert response.status_code == 401

    def test_health_is_public(self, client):
        """Test the health endpoint needs no key."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["provider"] == "beanstream"


class TestCreatePayment:
    """Tests for POST /payments."""

    def test_authorize_by_default(self, client, auth_headers, card_payment_body, mock_connector):
        """Test the default intent authorizes the card."""
        response = client.post("/payments", json=card_payment_body, headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["authorization"] == "10000028;15.00;P"
        assert data["avs_result"] == {"code": "R"}

        mock_connector.authorize.assert_called_once()
        amount, source, options = mock_connector.authorize.call_args.args
        assert amount == 1500
        assert source.number == "4030000010001234"
        assert options.order_id == "order-1"

    def test_purchase_with_bank_account(self, client, auth_headers, mock_connector):
        """Test purchase intent with an EFT source."""
        body = {
            "amount": 1500,
            "intent": "purchase",
            "source": {"kind": "bank_account", "account_number": "4321", "routing_number": "011000015"},
        }
        response = client.post("/payments", json=body, headers=auth_headers)

        assert response.status_code == 200
        _, source, _ = mock_connector.purchase.call_args.args
        assert source.kind == "bank_account"

    def test_invalid_source_rejected(self, client, auth_headers):
        """Test unknown source kinds fail validation."""
        body = {"amount": 1500, "source": {"kind": "wallet", "token": "abc"}}
        response = client.post("/payments", json=body, headers=auth_headers)
        assert response.status_code == 422

    def test_non_positive_amount_rejected(self, client, auth_headers, card_payment_body):
        """Test amounts must be positive."""
        card_payment_body["amount"] = 0
        response = client.post("/payments", json=card_payment_body, headers=auth_headers)
        assert response.status_code == 422

    def test_missing_option_is_bad_request(self, client, auth_headers, card_payment_body, mock_connector):
        """Test option errors map to 400."""
        mock_connector.authorize.side_effect = MissingRequiredOptionError("recurring_billing")
        response = client.post("/payments", json=card_payment_body, headers=auth_headers)
        assert response.status_code == 400
        assert "recurring_billing" in response.json()["detail"]

    def test_missing_credentials_is_server_error(self, client, auth_headers, card_payment_body, mock_connector):
        """Test credential errors map to 500 without leaking details."""
        mock_connector.authorize.side_effect = MissingCredentialsError("no secure_profile_api_key")
        response = client.post("/payments", json=card_payment_body, headers=auth_headers)
        assert response.status_code == 500
        assert response.json()["detail"] == "Server configuration error"

    def test_float_option_amount_rejected(self, client, auth_headers, card_payment_body):
        """Test option amounts given as JSON floats fail validation."""
        card_payment_body["options"]["subtotal"] = 12.0
        response = client.post("/payments", json=card_payment_body, headers=auth_headers)
        assert response.status_code == 422

    def test_float_payment_amount_rejected(self, client, auth_headers, card_payment_body):
        """Test the payment amount must be integer minor units."""
        card_payment_body["amount"] = 1500.0
        response = client.post("/payments", json=card_payment_body, headers=auth_headers)
        assert response.status_code == 422


class TestAdjustments:
    """Tests for capture, refund and void endpoints."""

    def test_capture(self, client, auth_headers, mock_connector):
        """Test capture passes the amount and token through."""
        body = {"authorization": "10000028;15.00;PA", "amount": 1000}
        response = client.post("/payments/capture", json=body, headers=auth_headers)

        assert response.status_code == 200
        mock_connector.capture.assert_called_once_with(1000, "10000028;15.00;PA")

    def test_refund(self, client, auth_headers, mock_connector):
        """Test refund passes the amount and token through."""
        body = {"authorization": "10000028;15.00;P", "amount": 500}
        response = client.post("/payments/refund", json=body, headers=auth_headers)

        assert response.status_code == 200
        mock_connector.refund.assert_called_once_with(500, "10000028;15.00;P")

    def test_void(self, client, auth_headers, mock_connector):
        """Test void passes the token through."""
        response = client.post(
            "/payments/void", json={"authorization": "10000028;15.00;P"}, headers=auth_headers
        )

        assert response.status_code == 200
        mock_connector.void.assert_called_once_with("10000028;15.00;P")

    def test_capture_requires_amount(self, client, auth_headers):
        """Test capture without an amount fails validation."""
        response = client.post(
            "/payments/capture", json={"authorization": "1;2;3"}, headers=auth_headers
        )
        assert response.status_code == 422

    def test_parse_error_is_bad_gateway(self, client, auth_headers, mock_connector):
        """Test unparseable processor responses map to 502."""
        mock_connector.void.side_effect = ResponseParseError("bad xml")
        response = client.post(
            "/payments/void", json={"authorization": "1;2;3"}, headers=auth_headers
        )
        assert response.status_code == 502


class TestConnectorConfiguration:
    """Tests for building the connector from the environment."""

    @pytest.fixture
    def unconfigured_client(self, monkeypatch):
        monkeypatch.setenv("BEANSTREAM_LOGIN", "")
        app.dependency_overrides.clear()
        _build_connector.cache_clear()
        yield TestClient(app)
        _build_connector.cache_clear()

    def test_missing_login_on_health(self, unconfigured_client):
        """Test a missing merchant login is reported as a configuration error."""
        response = unconfigured_client.get("/health")
        assert response.status_code == 500
        assert response.json()["detail"] == "Server configuration error"

    def test_missing_login_on_payment(self, unconfigured_client, auth_headers, card_payment_body):
        """Test payment routes report the same configuration error."""
        response = unconfigured_client.post("/payments", json=card_payment_body, headers=auth_headers)
        assert response.status_code == 500
        assert response.json()["detail"] == "Server configuration error"
