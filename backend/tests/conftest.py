"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient

from pharmaquote.config import Settings
from pharmaquote.main import create_app
from pharmaquote.models import Item
from pharmaquote.services.quote_session import QuoteFormSession
from pharmaquote.services.settings_source import StaticSettingsSource
from pharmaquote.store import DraftStore

# API version prefix
API_PREFIX = "/api/v1"


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    """Create a fake clock for TTL tests."""
    return FakeClock()


@pytest.fixture
def test_settings() -> Settings:
    """Application settings isolated from any local .env file."""
    return Settings(_env_file=None, settings_api_url="")


@pytest.fixture
def org_settings() -> dict:
    """Organization settings as returned by the settings API."""
    return {
        "terms": "50% advance, balance before dispatch.",
        "bankDetails": "HDFC Bank, A/C 50200012345678, IFSC HDFC0001234",
        "companyPhone": "+911234567890",
        "companyEmail": "sales@example.com",
        "invoiceLabel": "PROFORMA",
    }


@pytest.fixture
def mock_store(clock: FakeClock) -> DraftStore:
    """Create draft store driven by the fake clock."""
    return DraftStore(draft_ttl=60, max_drafts=10, clock=clock)


@pytest.fixture
def client(test_settings: Settings, org_settings: dict) -> TestClient:
    """Create FastAPI test client."""
    app = create_app(config=test_settings, settings_source=StaticSettingsSource(org_settings))
    return TestClient(app)


@pytest.fixture
def sample_item_data() -> dict:
    """A complete tablet line item (wire format)."""
    return {
        "brandName": "Paracip 650",
        "categoryType": "Drug",
        "orderType": "New",
        "formulationType": "Tablet",
        "composition": "Paracetamol 650mg",
        "packing": "10x10",
        "packagingType": "Blister",
        "pvcType": "Clear PVC",
        "quantity": 5000,
        "mrp": 32.5,
        "rate": 11.2,
    }


@pytest.fixture
def sample_item(sample_item_data: dict) -> Item:
    return Item.model_validate(sample_item_data)


@pytest.fixture
def sample_header() -> dict:
    """Valid quote header fields (wire format)."""
    return {
        "partyName": "Sunrise Pharma",
        "marketedBy": "Sunrise Healthcare Pvt Ltd",
        "clientEmail": "orders@sunrise.example",
        "clientPhone": "+91 98765 43210",
        "clientAddress": "Plot 12, Industrial Area, Baddi",
    }


@pytest.fixture
def session() -> QuoteFormSession:
    """Fresh quote session with process defaults."""
    return QuoteFormSession()
