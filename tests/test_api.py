"""
Tests for the HTTP layer.

Validates status codes, the {data, meta} envelope and the mapping of
domain errors to the {error, message, status, details} envelope.
"""
from datetime import timedelta

import pytest

from api import create_app
from models.base_model import utcnow


@pytest.fixture
def client(storage):
    app = create_app("test", storage=storage)
    return app.test_client()


def make_publisher(client, name="Rocco"):
    res = client.post("/api/v1/publishers", json={"name": name, "address": "Rio"})
    assert res.status_code == 201
    return res.get_json()["data"]


def make_book(client, isbn="978-0", publisher_id=None):
    publisher_id = publisher_id or make_publisher(client)["id"]
    res = client.post(
        "/api/v1/books",
        json={"isbn": isbn, "title": "Vidas Secas", "published_date": "1938-03-01", "publisher_id": publisher_id},
    )
    assert res.status_code == 201
    return res.get_json()["data"]


def make_company(client, is_private=True, address=None):
    body = {"name": "Grafica", "is_private": is_private}
    if address:
        body["address"] = address
    res = client.post("/api/v1/printing-companies", json=body)
    assert res.status_code == 201
    return res.get_json()["data"]


class TestHealth:
    def test_health(self, client) -> None:
        res = client.get("/api/v1/health")
        assert res.status_code == 200
        assert res.get_json()["database"] == "ok"


class TestPublishersAndAuthors:
    """CRUD endpoints and error mapping."""

    def test_duplicate_publisher_is_409(self, client) -> None:
        make_publisher(client, "Rocco")
        res = client.post("/api/v1/publishers", json={"name": "rocco", "address": "Rio"})
        body = res.get_json()
        assert res.status_code == 409
        assert body["error"] == "DUPLICATE"
        assert body["details"]["field"] == "name"

    def test_invalid_payload_is_422(self, client) -> None:
        res = client.post("/api/v1/authors", json={"rg": "1"})
        body = res.get_json()
        assert res.status_code == 422
        assert body["error"] == "VALIDATION_ERROR"
        assert "name" in body["details"]["details"]

    def test_list_is_paginated(self, client) -> None:
        for i in range(3):
            client.post("/api/v1/authors", json={"rg": f"RG{i}", "name": f"Author {i}", "address": "x"})
        res = client.get("/api/v1/authors?page=2&limit=2")
        body = res.get_json()
        assert res.status_code == 200
        assert body["meta"] == {"page": 2, "limit": 2, "total": 3}
        assert [a["rg"] for a in body["data"]] == ["RG2"]

    def test_missing_author_is_404(self, client) -> None:
        res = client.get("/api/v1/authors/unknown")
        assert res.status_code == 404
        assert res.get_json()["error"] == "NOT_FOUND"

    def test_delete_publisher_with_books_is_409(self, client) -> None:
        book = make_book(client)
        res = client.delete(f"/api/v1/publishers/{book['publisher_id']}")
        assert res.status_code == 409
        assert res.get_json()["details"]["rule"] == "PUBLISHER_HAS_BOOKS"


class TestBooks:
    """Book endpoints, including authorship links."""

    def test_unknown_publisher_is_400(self, client) -> None:
        res = client.post(
            "/api/v1/books",
            json={"isbn": "1", "title": "T", "published_date": "2000-01-01", "publisher_id": 999},
        )
        assert res.status_code == 400
        assert res.get_json()["error"] == "REFERENCE_ERROR"

    def test_author_links(self, client) -> None:
        book = make_book(client)
        client.post("/api/v1/authors", json={"rg": "A1", "name": "Graciliano Ramos", "address": "AL"})

        res = client.post(f"/api/v1/books/{book['isbn']}/authors", json={"rg": "A1"})
        assert res.status_code == 201

        res = client.get(f"/api/v1/books/{book['isbn']}")
        assert [a["rg"] for a in res.get_json()["data"]["authors"]] == ["A1"]

        res = client.delete(f"/api/v1/books/{book['isbn']}/authors/A1")
        body = res.get_json()
        assert res.status_code == 409
        assert body["message"] == "cannot remove last author"

    def test_missing_rg_is_422(self, client) -> None:
        book = make_book(client)
        res = client.post(f"/api/v1/books/{book['isbn']}/authors", json={})
        assert res.status_code == 422
        assert res.get_json()["error"] == "MISSING_FIELD"

    def test_non_object_body_is_422(self, client) -> None:
        book = make_book(client)
        res = client.post(f"/api/v1/books/{book['isbn']}/authors", json=["A1"])
        assert res.status_code == 422
        assert res.get_json()["error"] == "VALIDATION_ERROR"


class TestPrinting:
    """Companies, contracts, printing jobs and reports."""

    def test_contracted_company_without_address_is_422(self, client) -> None:
        res = client.post("/api/v1/printing-companies", json={"name": "Grafica", "is_private": False})
        assert res.status_code == 422
        assert res.get_json()["error"] == "MISSING_FIELD"

    def test_contract_with_private_company_is_400(self, client) -> None:
        company = make_company(client, is_private=True)
        res = client.post(
            "/api/v1/contracts", json={"value": "100.00", "responsible": "Ana", "company_id": company["id"]}
        )
        assert res.status_code == 400
        assert res.get_json()["error"] == "INELIGIBLE_REFERENCE"

    def test_contract_value_is_serialized_as_string(self, client) -> None:
        company = make_company(client, is_private=False, address="Rua 1")
        res = client.post(
            "/api/v1/contracts", json={"value": "99.9", "responsible": "Ana", "company_id": company["id"]}
        )
        assert res.status_code == 201
        assert res.get_json()["data"]["value"] == "99.90"

    def test_schedule_and_list_jobs(self, client) -> None:
        book = make_book(client)
        company = make_company(client)
        delivery = (utcnow() + timedelta(days=3)).isoformat()

        res = client.post(
            "/api/v1/printing-jobs",
            json={"isbn": book["isbn"], "company_id": company["id"], "copies": 300, "delivery_date": delivery},
        )
        assert res.status_code == 201
        assert res.get_json()["data"]["label"] == "urgent"

        res = client.post(
            "/api/v1/printing-jobs",
            json={"isbn": book["isbn"], "company_id": company["id"], "copies": 1, "delivery_date": delivery},
        )
        assert res.status_code == 409

        pending = client.get("/api/v1/printing-jobs/pending").get_json()["data"]
        overdue = client.get("/api/v1/printing-jobs/overdue").get_json()["data"]
        assert len(pending) == 1
        assert overdue == []

        res = client.post(f"/api/v1/printing-jobs/{book['isbn']}/{company['id']}/complete")
        assert res.status_code == 200
        assert client.get("/api/v1/printing-jobs").get_json()["meta"]["total"] == 0

    def test_statistics_requires_window(self, client) -> None:
        res = client.get("/api/v1/reports/printing-statistics?start=2024-01-01")
        assert res.status_code == 422

        res = client.get("/api/v1/reports/printing-statistics?start=2024-02-01&end=2024-01-01")
        assert res.status_code == 422
        assert res.get_json()["error"] == "VALIDATION_ERROR"

    def test_statistics_empty_window(self, client) -> None:
        res = client.get("/api/v1/reports/printing-statistics?start=2024-01-01&end=2024-01-31")
        data = res.get_json()["data"]
        assert res.status_code == 200
        assert data["period"] == "2024-01-01 to 2024-01-31"
        assert data["most_active_company_id"] is None

    def test_contract_analysis_without_contracts(self, client) -> None:
        data = client.get("/api/v1/reports/contract-analysis").get_json()["data"]
        assert data["total_contracts"] == 0
        assert data["average_value"] == "0.00"
