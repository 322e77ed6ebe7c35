"""
HTTP tests for the report service.
"""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from sales_report.main import app
from sales_report.store import store


@pytest.fixture
def client():
    store.clear()
    with TestClient(app) as c:
        yield c
    store.clear()


def posted_data(purchase_records=None):
    if purchase_records is None:
        purchase_records = [{
            "seller_id": "S-1",
            "total_amount": 100,
            "items": [{"sku": "P-1", "quantity": 1, "sale_price": 100, "discount": 0}],
        }]
    return {
        "sellers": [
            {"id": "S-1", "first_name": "Ann", "last_name": "Lee"},
            {"id": "S-2", "first_name": "Bob", "last_name": "Ray"},
        ],
        "products": [{"sku": "P-1", "purchase_price": 60}],
        "customers": [{"id": "C-1"}],
        "purchase_records": purchase_records,
    }


class TestStoredReport:
    def test_sellers_are_seeded(self, client):
        resp = client.get("/api/v1/sellers")
        assert resp.status_code == 200
        assert len(resp.json()["sellers"]) == 5

    def test_top_profit_seller_gets_first_bonus(self, client):
        resp = client.get("/api/v1/report")
        assert resp.status_code == 200
        report = resp.json()["report"]
        assert len(report) == 5
        best = max(report, key=lambda e: Decimal(e["profit"]))
        assert Decimal(best["bonus"]) == Decimal("15")

    def test_input_order_mode(self, client):
        resp = client.get("/api/v1/report", params={"ranking_mode": "input_order"})
        report = resp.json()["report"]
        assert report[0]["seller_id"] == "seller_1"
        assert Decimal(report[0]["bonus"]) == Decimal("15")
        assert Decimal(report[-1]["bonus"]) == Decimal("0")

    def test_share_of_profit_bonus_policy(self, client):
        resp = client.get("/api/v1/report", params={"bonus_policy": "share_of_profit"})
        assert resp.status_code == 200
        report = resp.json()["report"]
        best = max(report, key=lambda e: Decimal(e["profit"]))
        # 15 % of the unrounded profit, so allow one cent either way
        expected = Decimal(best["profit"]) * Decimal("0.15")
        assert abs(Decimal(best["bonus"]) - expected) <= Decimal("0.01")

    def test_unknown_bonus_policy_rejected(self, client):
        resp = client.get("/api/v1/report", params={"bonus_policy": "lottery"})
        assert resp.status_code == 422

    def test_reseed_does_not_duplicate_records(self, client):
        resp = client.post("/api/v1/admin/seed")
        assert resp.json()["purchase_records"] == 200
        report = client.get("/api/v1/report").json()["report"]
        assert sum(e["sales_count"] for e in report) == 200

    def test_empty_store_is_invalid(self, client):
        store.clear()
        resp = client.get("/api/v1/report")
        assert resp.status_code == 422


class TestPostedReport:
    def test_report_for_posted_data(self, client):
        resp = client.post("/api/v1/report", json=posted_data())
        assert resp.status_code == 200
        first, second = resp.json()["report"]
        assert first["name"] == "Ann Lee"
        assert Decimal(first["profit"]) == Decimal("40")
        assert first["top_products"] == [{"sku": "P-1", "quantity": 1}]
        assert Decimal(second["bonus"]) == Decimal("0")

    def test_empty_records_rejected(self, client):
        resp = client.post("/api/v1/report", json=posted_data(purchase_records=[]))
        assert resp.status_code == 422

    def test_unknown_seller_is_404(self, client):
        records = [{
            "seller_id": "S-9",
            "total_amount": 10,
            "items": [{"sku": "P-1", "quantity": 1, "sale_price": 10}],
        }]
        resp = client.post("/api/v1/report", json=posted_data(purchase_records=records))
        assert resp.status_code == 404
        assert "S-9" in resp.json()["detail"]
