"""
Tests for the GST verification API endpoints
"""
from fastapi.testclient import TestClient
from unittest.mock import AsyncMock, patch

from gst_verify.config import settings
from gst_verify.main import app
from gst_verify.models.responses import VerificationResult
from gst_verify.services.gst_verification import GSTVerificationClient

client = TestClient(app)


def _patch_verify(result=None, side_effect=None):
    mock = AsyncMock(return_value=result, side_effect=side_effect)
    return patch.object(GSTVerificationClient, "verify", new=mock)


class TestVerifyEndpoint:
    """Test cases for POST /api/v1/gst/verify"""

    def test_invalid_gstin_is_reported_without_provider_call(self):
        with patch('aiohttp.ClientSession.get') as mock_get:
            response = client.post("/api/v1/gst/verify", json={"gstin": "22AAAAA0000A1Z5"})

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["valid"] is False
        assert "checksum" in data["error"]
        mock_get.assert_not_called()

    def test_missing_body_field_is_invalid(self):
        response = client.post("/api/v1/gst/verify", json={})

        assert response.status_code == 200
        assert response.json()["valid"] is False

    def test_non_string_gstin_is_invalid(self):
        with patch('aiohttp.ClientSession.get') as mock_get:
            response = client.post("/api/v1/gst/verify", json={"gstin": 27})

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["valid"] is False
        assert data["error"]
        mock_get.assert_not_called()

    def test_malformed_json_body_is_invalid(self):
        response = client.post(
            "/api/v1/gst/verify",
            content=b'{"gstin": ',
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["valid"] is False
        assert data["error"]

    def test_non_object_json_body_is_invalid(self):
        response = client.post("/api/v1/gst/verify", json=["27AAPFU0939F1ZV"])

        assert response.status_code == 200
        assert response.json()["valid"] is False

    def test_missing_provider_key_returns_503(self):
        with patch.object(settings, "GST_APPYFLOW_KEY", None), \
                patch.object(settings, "GST_APPYFLOW_KEY_SECRET", None):
            response = client.post("/api/v1/gst/verify", json={"gstin": "27AAPFU0939F1ZV"})

        assert response.status_code == 503
        data = response.json()
        assert data["success"] is False
        assert data["valid"] is False
        assert data["code"] == "MISSING_GST_API_KEY"
        assert "GST_APPYFLOW_KEY" in data["error"]

    def test_verified_gstin(self):
        result = VerificationResult(
            valid=True,
            legal_name="Example Pvt Ltd",
            trade_name="Example Traders",
            state_code="27",
            status="Active",
            message="GST verified",
            raw={"lgnm": "Example Pvt Ltd"},
        )
        with _patch_verify(result):
            response = client.post("/api/v1/gst/verify", json={"gstin": "27AAPFU0939F1ZV"})

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "valid": True,
            "legalName": "Example Pvt Ltd",
            "tradeName": "Example Traders",
            "stateCode": "27",
            "status": "Active",
        }

    def test_unverified_gstin_reports_provider_status(self):
        result = VerificationResult(valid=False, status="Cancelled", message="GST not verified")
        with _patch_verify(result):
            response = client.post("/api/v1/gst/verify", json={"gstin": "27AAPFU0939F1ZV"})

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["valid"] is False
        assert data["error"] == "GST not verified"
        assert data["providerStatus"] == "Cancelled"

    def test_provider_failure_is_not_a_server_error(self):
        result = VerificationResult(
            valid=False,
            status="HTTP_502",
            status_code=502,
            message="GST provider returned HTTP 502",
        )
        with _patch_verify(result):
            response = client.post("/api/v1/gst/verify", json={"gstin": "27AAPFU0939F1ZV"})

        assert response.status_code == 200
        assert response.json()["providerStatus"] == "HTTP_502"

    def test_unexpected_error_returns_500(self):
        with _patch_verify(side_effect=RuntimeError("boom")):
            response = client.post("/api/v1/gst/verify", json={"gstin": "27AAPFU0939F1ZV"})

        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "valid": False,
            "error": "Unexpected server error",
        }

    def test_disabled_verification(self):
        with patch.object(settings, "GST_VERIFICATION_ENABLED", False):
            response = client.post("/api/v1/gst/verify", json={"gstin": "27AAPFU0939F1ZV"})

        assert response.status_code == 503
        assert response.json()["detail"] == "GST verification is currently disabled"


class TestValidateEndpoint:
    """Test cases for POST /api/v1/gst/validate"""

    def test_valid_gstin(self):
        response = client.post("/api/v1/gst/validate", json={"gstin": " 27aapfu0939f1zv "})

        assert response.status_code == 200
        data = response.json()
        assert data["normalized"] == "27AAPFU0939F1ZV"
        assert data["is_valid"] is True
        assert data["state_code"] == "27"
        assert data["state_name"] == "Maharashtra"
        assert data["pan"] == "AAPFU0939F"
        assert data["errors"] == []

    def test_bad_checksum(self):
        response = client.post("/api/v1/gst/validate", json={"gstin": "22AAAAA0000A1Z5"})

        data = response.json()
        assert data["is_valid"] is False
        assert data["format_valid"] is True
        assert data["checksum_valid"] is False
        assert data["expected_check_character"] == "C"
        assert len(data["errors"]) == 1

    def test_non_string_gstin(self):
        response = client.post("/api/v1/gst/validate", json={"gstin": 27})

        assert response.status_code == 200
        data = response.json()
        assert data["normalized"] == "27"
        assert data["is_valid"] is False
        assert data["errors"]

    def test_malformed_json_body(self):
        response = client.post(
            "/api/v1/gst/validate",
            content=b"not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["normalized"] == ""
        assert data["is_valid"] is False

    def test_never_calls_provider(self):
        with patch('aiohttp.ClientSession.get') as mock_get:
            client.post("/api/v1/gst/validate", json={"gstin": "27AAPFU0939F1ZV"})
        mock_get.assert_not_called()


def test_gst_health_hides_key():
    with patch.object(settings, "GST_APPYFLOW_KEY", "super-secret"):
        response = client.get("/api/v1/gst/health")

    assert response.status_code == 200
    data = response.json()
    assert data["service"] == "gst_verification"
    assert data["provider_configured"] is True
    assert "super-secret" not in response.text
