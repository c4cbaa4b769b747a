"""
Pytest configuration and shared fixtures.
"""

import pytest
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fastapi.testclient import TestClient

from app.main import app
from app.calculations.currency import FALLBACK_RATES
from app.services.exchange_rates import (
    ExchangeRateService,
    RateSnapshot,
    get_exchange_rate_service,
)


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow")
    config.addinivalue_line("markers", "integration: marks integration tests")


class FixedRateService(ExchangeRateService):
    """Rate service that never touches the network."""

    def __init__(self, snapshot: RateSnapshot):
        super().__init__()
        self.snapshot = snapshot
        self.calls = 0

    def get_rates(self) -> RateSnapshot:
        self.calls += 1
        return self.snapshot


@pytest.fixture
def live_snapshot():
    """Live-looking snapshot using the documented rates."""
    return RateSnapshot(
        rates=dict(FALLBACK_RATES),
        date="2026-10-16",
        success=True,
    )


@pytest.fixture
def rate_service(live_snapshot):
    """Fixed rate service injected into the API."""
    service = FixedRateService(live_snapshot)
    app.dependency_overrides[get_exchange_rate_service] = lambda: service
    yield service
    app.dependency_overrides.pop(get_exchange_rate_service, None)


@pytest.fixture
def client(rate_service):
    """Create test client."""
    return TestClient(app)
