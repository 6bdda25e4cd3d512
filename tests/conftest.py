import pytest
from fastapi.testclient import TestClient
from main import app
from app.db import memory
from app.schemas.receipt import ReceiptCreate


TARGET_RECEIPT = {
    "retailer": "Target",
    "purchaseDate": "2022-01-01",
    "purchaseTime": "13:01",
    "items": [
        {"shortDescription": "Mountain Dew 12PK", "price": "6.49"},
        {"shortDescription": "Emils Cheese Pizza", "price": "12.25"},
        {"shortDescription": "Knorr Creamy Chicken", "price": "1.26"},
        {"shortDescription": "Doritos Nacho Cheese", "price": "3.35"},
        {"shortDescription": "   Klarbrunn 12-PK 12 FL OZ  ", "price": "12.00"},
    ],
    "total": "35.35",
}

MM_CORNER_MARKET_RECEIPT = {
    "retailer": "M&M Corner Market",
    "purchaseDate": "2022-03-20",
    "purchaseTime": "14:33",
    "items": [
        {"shortDescription": "Gatorade", "price": "2.25"},
        {"shortDescription": "Gatorade", "price": "2.25"},
        {"shortDescription": "Gatorade", "price": "2.25"},
        {"shortDescription": "Gatorade", "price": "2.25"},
    ],
    "total": "9.00",
}

# Scores nothing but the retailer name: even day, morning, one item, odd cents
PLAIN_RECEIPT = {
    "retailer": "Shop",
    "purchaseDate": "2022-01-02",
    "purchaseTime": "09:00",
    "items": [{"shortDescription": "Milk", "price": "1.01"}],
    "total": "1.01",
}


@pytest.fixture
def make_receipt():
    """Build a ReceiptCreate from PLAIN_RECEIPT with some fields replaced."""
    def _make(**overrides) -> ReceiptCreate:
        return ReceiptCreate(**{**PLAIN_RECEIPT, **overrides})
    return _make


@pytest.fixture
def target_receipt():
    return ReceiptCreate(**TARGET_RECEIPT)


@pytest.fixture
def mm_receipt():
    return ReceiptCreate(**MM_CORNER_MARKET_RECEIPT)


@pytest.fixture
def receipt_store():
    """Fresh process store for a single test."""
    store = memory.open_store()
    yield store
    memory.close_store()


@pytest.fixture
def test_client():
    """Fixture for FastAPI test client."""
    # Use TestClient with context manager to trigger lifespan
    with TestClient(app) as client:
        yield client


@pytest.fixture
def target_payload():
    """The Target receipt as a JSON request body."""
    return {**TARGET_RECEIPT, "items": [dict(item) for item in TARGET_RECEIPT["items"]]}


@pytest.fixture
def plain_payload():
    return {**PLAIN_RECEIPT, "items": [dict(item) for item in PLAIN_RECEIPT["items"]]}
