"""
Shared fixtures.

Every test gets its own in-memory SQLite database and a ServiceRegistry
wired to it. APP_ENV is forced to "test" before the models package is
imported so the module-level storage never touches a file.
"""
import os

os.environ["APP_ENV"] = "test"

from datetime import date, timedelta

import pytest

from models.base_model import utcnow
from models.db_storage import DBStorage
from models.printing_job import PrintingJob
from services.registry import ServiceRegistry


@pytest.fixture
def storage():
    store = DBStorage("sqlite://")
    store.reload()
    yield store
    store.drop_all()


@pytest.fixture
def services(storage):
    return ServiceRegistry(storage)


@pytest.fixture
def publisher(services):
    return services.publishers.create_publisher({"name": "Companhia das Letras", "address": "Rua Bandeira Paulista 702"})


@pytest.fixture
def author(services):
    return services.authors.create_author({"rg": "MG-1234567", "name": "Clarice Lispector", "address": "Rio de Janeiro"})


@pytest.fixture
def second_author(services):
    return services.authors.create_author({"rg": "SP-7654321", "name": "Machado de Assis", "address": "Rio de Janeiro"})


@pytest.fixture
def book(services, publisher):
    return services.books.create_book(
        {
            "isbn": "9788535914849",
            "title": "A Hora da Estrela",
            "published_date": date(1977, 10, 26),
            "publisher_id": publisher.id,
        }
    )


@pytest.fixture
def second_book(services, publisher):
    return services.books.create_book(
        {
            "isbn": "9788535910667",
            "title": "Dom Casmurro",
            "published_date": date(1899, 1, 1),
            "publisher_id": publisher.id,
        }
    )


@pytest.fixture
def private_company(services):
    return services.printing.create_printing_company({"name": "Grafica Propria"}, is_private=True)


@pytest.fixture
def contracted_company(services):
    return services.printing.create_printing_company(
        {"name": "Grafica Parceira"}, is_private=False, address="Av. Industrial 100"
    )


@pytest.fixture
def insert_job(storage):
    """Store a printing job directly, bypassing the past-date check of scheduling."""

    def _insert(isbn, company_id, copies=100, delivery_date=None):
        job = PrintingJob(
            isbn=isbn,
            company_id=company_id,
            copies=copies,
            delivery_date=delivery_date or utcnow() + timedelta(days=30),
        )
        storage.new(job)
        storage.save()
        return job

    return _insert
