from unittest.mock import patch
from fastapi import status
from app.services.points_service import CalculationError


def test_root(test_client):
    response = test_client.get("/")

    assert response.status_code == status.HTTP_200_OK
    assert "Receipt Processor" in response.json()["message"]


def test_process_then_get_points(test_client, target_payload):
    response = test_client.post("/receipts/process", json=target_payload)

    assert response.status_code == status.HTTP_200_OK
    receipt_id = response.json()["id"]

    response = test_client.get(f"/receipts/{receipt_id}/points")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"points": 33}


def test_same_receipt_twice_gets_two_ids(test_client, target_payload):
    first = test_client.post("/receipts/process", json=target_payload).json()["id"]
    second = test_client.post("/receipts/process", json=target_payload).json()["id"]

    assert first != second


def test_unknown_id_returns_404(test_client):
    response = test_client.get("/receipts/7fb1377b-b223-49d9-a31a-5a02701dd310/points")

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"detail": "No receipt found for that ID."}


def test_pattern_violation_returns_400(test_client, target_payload):
    response = test_client.post("/receipts/process", json={**target_payload, "total": "35.3"})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    detail = response.json()["detail"]
    assert detail["message"] == "The receipt is invalid."
    assert detail["errors"][0]["field"] == "total"


def test_missing_field_returns_400(test_client, target_payload):
    payload = {k: v for k, v in target_payload.items() if k != "retailer"}
    response = test_client.post("/receipts/process", json=payload)

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    detail = response.json()["detail"]
    assert detail["message"] == "The receipt is invalid."
    assert detail["errors"][0]["field"] == "retailer"


def test_empty_items_returns_400(test_client, target_payload):
    response = test_client.post("/receipts/process", json={**target_payload, "items": []})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"]["errors"][0]["field"] == "items"


def test_malformed_json_returns_400(test_client):
    response = test_client.post(
        "/receipts/process",
        content="{not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_calculation_failure_returns_400(test_client, target_payload):
    with patch(
        "app.services.receipt_service.calculate_points",
        side_effect=CalculationError("purchaseDate: invalid date"),
    ):
        response = test_client.post("/receipts/process", json=target_payload)

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"]["errors"][0]["message"] == "purchaseDate: invalid date"


def test_long_total_is_scored(test_client, plain_payload):
    response = test_client.post("/receipts/process", json={**plain_payload, "total": "1" * 30 + ".00"})

    assert response.status_code == status.HTTP_200_OK
    receipt_id = response.json()["id"]

    response = test_client.get(f"/receipts/{receipt_id}/points")

    # 4 retailer + 50 round + 25 quarter + 5 over ten
    assert response.json() == {"points": 84}
