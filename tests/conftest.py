"""
Pytest configuration and shared fixtures for GST verification tests
"""
import pytest
import os
import sys
from unittest.mock import AsyncMock, MagicMock

# Add the project root to the Python path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))


@pytest.fixture
def valid_gstins():
    """GSTINs that pass both format and checksum validation"""
    return [
        "27AAPFU0939F1ZV",  # Maharashtra, textbook example
        "07AAGFF2194N1Z1",  # Delhi
        "29AABCU9603R1ZJ",  # Karnataka
        "22AAAAA0000A1ZC",  # Chhattisgarh
    ]


@pytest.fixture
def provider_response():
    """Build an async context manager mimicking aiohttp's session.get(...)"""

    def _build(status=200, payload=None, json_error=None):
        response = MagicMock()
        response.status = status
        if json_error is not None:
            response.json = AsyncMock(side_effect=json_error)
        else:
            response.json = AsyncMock(return_value={} if payload is None else payload)

        context = MagicMock()
        context.__aenter__.return_value = response
        context.__aexit__.return_value = False
        return context

    return _build


@pytest.fixture
def taxpayer_payload():
    """Typical provider payload with a nested taxpayerInfo block"""
    return {
        "taxpayerInfo": {
            "gstin": "27AAPFU0939F1ZV",
            "lgnm": "Example Pvt Ltd",
            "tradeNam": "Example Traders",
            "sts": "Active",
            "pradr": {"stcd": "Maharashtra"},
        },
        "success": True,
    }
