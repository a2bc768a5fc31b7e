import pytest
from fastapi.testclient import TestClient

from checkout_api.main import create_app
from tests.cart_scenario_factory import CartScenarioFactory, FakeProvider


@pytest.fixture()
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture()
def client(provider: FakeProvider) -> TestClient:
    """
    Creates a fresh FastAPI app and TestClient for each test,
    wired to a recording fake provider.
    """
    app = create_app(CartScenarioFactory.settings(), provider=provider)
    return TestClient(app)


@pytest.fixture()
def inline_client(provider: FakeProvider) -> TestClient:
    app = create_app(CartScenarioFactory.inline_settings(), provider=provider)
    return TestClient(app)
