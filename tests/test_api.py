"""Tests for the HTTP API in ledgerline.api."""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from ledgerline.api import create_application
from ledgerline.config import Settings
from ledgerline.store import LedgerStore


@pytest.fixture
def client(store: LedgerStore, tmp_path: Path) -> TestClient:
    settings = Settings(db_path=tmp_path / "unused.db")
    return TestClient(create_application(store=store, settings=settings))


def create(client: TestClient, description: str = "Salary", amount: float = 100, type: str = "income") -> dict:
    response = client.post("/transactions", json={"description": description, "amount": amount, "type": type})
    assert response.status_code == 201
    return response.json()


class TestTransactionRoutes:
    """Tests for the /transactions routes."""

    def test_create_returns_201_and_record(self, client: TestClient) -> None:
        record = create(client)

        assert record["description"] == "Salary"
        assert record["amount"] == 100
        assert record["type"] == "income"
        assert set(record) == {"id", "description", "amount", "type", "date", "created_at"}

    def test_create_missing_fields_returns_400(self, client: TestClient) -> None:
        response = client.post("/transactions", json={"description": "Salary"})

        assert response.status_code == 400
        assert set(response.json()["fields"]) == {"amount", "type"}
        assert client.get("/transactions").json() == []

    def test_create_bad_type_returns_400(self, client: TestClient) -> None:
        response = client.post("/transactions", json={"description": "Gift", "amount": 5, "type": "transfer"})

        assert response.status_code == 400
        assert "type" in response.json()["fields"]

    def test_create_without_body_returns_400(self, client: TestClient) -> None:
        assert client.post("/transactions").status_code == 400

    def test_get_one(self, client: TestClient) -> None:
        record = create(client)

        response = client.get(f"/transactions/{record['id']}")

        assert response.status_code == 200
        assert response.json() == record

    def test_get_missing_returns_404(self, client: TestClient) -> None:
        response = client.get("/transactions/42")

        assert response.status_code == 404
        assert response.json() == {"error": "Transaction not found"}

    @pytest.mark.parametrize("amount", ["sNaN", 10**400, "1e999"])
    def test_create_unrepresentable_amount_returns_400(self, client: TestClient, amount: object) -> None:
        response = client.post("/transactions", json={"description": "Odd", "amount": amount, "type": "expense"})

        assert response.status_code == 400
        assert "amount" in response.json()["fields"]
        assert client.get("/transactions").json() == []

    def test_out_of_range_id_returns_404(self, client: TestClient) -> None:
        """Should treat ids beyond SQLite's integer range as missing."""
        huge = 2**63

        assert client.get(f"/transactions/{huge}").status_code == 404
        assert client.delete(f"/transactions/{huge}").status_code == 404
        response = client.put(f"/transactions/{huge}", json={"description": "X", "amount": 1, "type": "income"})
        assert response.status_code == 404

    def test_list(self, client: TestClient) -> None:
        record = create(client)

        assert client.get("/transactions").json() == [record]

    def test_update(self, client: TestClient) -> None:
        record = create(client)

        response = client.put(
            f"/transactions/{record['id']}", json={"description": "Bonus", "amount": "250.5", "type": "income"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["description"] == "Bonus"
        assert body["amount"] == 250.5
        assert body["date"] == record["date"]

    def test_update_missing_returns_404(self, client: TestClient) -> None:
        response = client.put("/transactions/42", json={"description": "Bonus", "amount": 1, "type": "income"})

        assert response.status_code == 404

    def test_update_invalid_returns_400(self, client: TestClient) -> None:
        record = create(client)

        response = client.put(f"/transactions/{record['id']}", json={"description": "", "amount": 1, "type": "income"})

        assert response.status_code == 400

    def test_delete_then_delete_again(self, client: TestClient) -> None:
        record = create(client)

        first = client.delete(f"/transactions/{record['id']}")
        second = client.delete(f"/transactions/{record['id']}")

        assert first.status_code == 200
        assert first.json() == {"message": "Transaction deleted successfully"}
        assert second.status_code == 404

    def test_summary_stats(self, client: TestClient) -> None:
        create(client, "Salary", 100, "income")
        create(client, "Groceries", 40, "expense")

        response = client.get("/transactions/summary/stats")

        assert response.status_code == 200
        assert response.json() == {"income": 100, "expenses": 40, "balance": 60}

    def test_storage_failure_returns_generic_500(self, client: TestClient, store: LedgerStore) -> None:
        store.close()

        response = client.get("/transactions")

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}


class TestReportRoutes:
    """Tests for the /reports/monthly routes."""

    @pytest.fixture
    def march_client(self, march_store: LedgerStore, tmp_path: Path) -> TestClient:
        settings = Settings(db_path=tmp_path / "unused.db")
        return TestClient(create_application(store=march_store, settings=settings))

    def test_monthly_list(self, march_client: TestClient) -> None:
        response = march_client.get("/reports/monthly/2024/3")

        assert response.status_code == 200
        assert [t["description"] for t in response.json()] == ["Salary", "Groceries"]

    def test_monthly_csv(self, march_client: TestClient) -> None:
        response = march_client.get("/reports/monthly/2024/3/csv")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert 'filename="monthly-report-2024-03.csv"' in response.headers["content-disposition"]
        assert "Balance,₹30.00" in response.content.decode("utf-8")

    def test_monthly_pdf(self, march_client: TestClient) -> None:
        response = march_client.get("/reports/monthly/2024/3/pdf")

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert 'filename="monthly-report-2024-03.pdf"' in response.headers["content-disposition"]
        assert response.content.startswith(b"%PDF-")

    def test_empty_month_exports_succeed(self, march_client: TestClient) -> None:
        assert march_client.get("/reports/monthly/2023/1").json() == []
        assert march_client.get("/reports/monthly/2023/1/csv").status_code == 200
        assert march_client.get("/reports/monthly/2023/1/pdf").status_code == 200

    def test_invalid_month_returns_400(self, march_client: TestClient) -> None:
        assert march_client.get("/reports/monthly/2024/13").status_code == 400

    @pytest.mark.parametrize("year", [0, 10000, 2**63])
    def test_out_of_range_year_returns_400(self, march_client: TestClient, year: int) -> None:
        assert march_client.get(f"/reports/monthly/{year}/3").status_code == 400
        assert march_client.get(f"/reports/monthly/{year}/3/csv").status_code == 400

    def test_read_failure_returns_500(self, march_client: TestClient, march_store: LedgerStore) -> None:
        march_store.close()

        response = march_client.get("/reports/monthly/2024/3/csv")

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to generate report"}


def test_health(client: TestClient) -> None:
    assert client.get("/health").json()["status"] == "ok"
