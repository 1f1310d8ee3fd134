"""
Pytest configuration and fixtures for carrier-rates tests.
"""
import json
from pathlib import Path

import pytest

from carrier_rates.core.config import UPSConfig
from carrier_rates.schemas.enums import DimensionUnit, WeightUnit
from carrier_rates.schemas.shipping import RateRequest
from mocks.mock_transport import MockTransport

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def load_fixture(name: str) -> dict:
    return json.loads((FIXTURES_DIR / name).read_text(encoding="utf-8"))


@pytest.fixture
def transport() -> MockTransport:
    return MockTransport()


@pytest.fixture
def ups_config() -> UPSConfig:
    return UPSConfig(
        client_id="test_client_id",
        client_secret="test_client_secret",
        account_number="123456",
        base_url="https://onlinetools.ups.com",
        oauth_url="https://onlinetools.ups.com/security/v1/oauth/token",
        version="v2409",
        transaction_src="testing",
        auth_timeout_ms=5000,
        rating_timeout_ms=10000,
    )


@pytest.fixture
def oauth_fixture() -> dict:
    return load_fixture("ups_oauth_response.json")


@pytest.fixture
def shop_fixture() -> dict:
    return load_fixture("ups_rate_response_shop.json")


@pytest.fixture
def single_fixture() -> dict:
    return load_fixture("ups_rate_response_single.json")


@pytest.fixture
def sample_request_data() -> dict:
    """Sample rate request as a caller would submit it."""
    return {
        "origin": {
            "name": "Acme Corp",
            "address_lines": ["100 Main Street"],
            "city": "TIMONIUM",
            "state_province": "MD",
            "postal_code": "21093",
            "country_code": "US",
        },
        "destination": {
            "name": "John Smith",
            "address_lines": ["200 Oak Avenue", "Apt 5"],
            "city": "Alpharetta",
            "state_province": "GA",
            "postal_code": "30005",
            "country_code": "US",
            "residential": True,
        },
        "packages": [
            {
                "weight": {"value": 10, "unit": WeightUnit.LBS},
                "dimensions": {
                    "length": 12,
                    "width": 8,
                    "height": 6,
                    "unit": DimensionUnit.IN,
                },
            }
        ],
    }


@pytest.fixture
def load_json():
    """Loader for any JSON file under tests/fixtures."""
    return load_fixture


@pytest.fixture
def sample_request(sample_request_data) -> RateRequest:
    return RateRequest.model_validate(sample_request_data)
