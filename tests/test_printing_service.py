"""
Tests for PrintingService: companies, contracts and printing jobs.
"""
from datetime import datetime, time, timedelta
from decimal import Decimal

import pytest

from models.base_model import utcnow
from models.printing_company import ContractedPrintingCompany, PrivatePrintingCompany
from models.printing_job import JobStatus
from services.errors import (
    DuplicateError,
    IneligibleReferenceError,
    InvariantViolation,
    MissingFieldError,
    NotFoundError,
    UnresolvedReferenceError,
    ValidationError,
)


def job_payload(isbn, company_id, copies=500, days=30):
    return {
        "isbn": isbn,
        "company_id": company_id,
        "copies": copies,
        "delivery_date": utcnow() + timedelta(days=days),
    }


class TestPrintingCompanies:
    """Creation rules per company kind."""

    def test_private_company_ignores_address(self, services) -> None:
        company = services.printing.create_printing_company({"name": "Own Press"}, is_private=True, address="Ignored")
        assert isinstance(company, PrivatePrintingCompany)
        assert company.is_private
        assert not hasattr(company, "address")

    def test_contracted_company_keeps_address(self, contracted_company) -> None:
        assert isinstance(contracted_company, ContractedPrintingCompany)
        assert contracted_company.address == "Av. Industrial 100"

    def test_contracted_company_requires_address(self, services) -> None:
        with pytest.raises(MissingFieldError) as exc:
            services.printing.create_printing_company({"name": "No Address"}, is_private=False)
        assert exc.value.field == "address"
        assert services.printing.list_printing_companies() == []

    def test_blank_address_is_invalid(self, services) -> None:
        with pytest.raises(ValidationError):
            services.printing.create_printing_company({"name": "Blank"}, is_private=False, address="   ")

    def test_blank_name_is_invalid(self, services) -> None:
        with pytest.raises(ValidationError):
            services.printing.create_printing_company({"name": ""}, is_private=True)

    def test_list_by_kind(self, services, private_company, contracted_company) -> None:
        assert [c.id for c in services.printing.list_printing_companies("private")] == [private_company.id]
        assert [c.id for c in services.printing.list_printing_companies("contracted")] == [contracted_company.id]
        with pytest.raises(ValidationError):
            services.printing.list_printing_companies("public")

    def test_update_contracted_company_address(self, services, contracted_company) -> None:
        updated = services.printing.update_printing_company(
            contracted_company.id, {"name": "Renamed", "address": "Rua Nova 1"}
        )
        assert updated.name == "Renamed"
        assert updated.address == "Rua Nova 1"

    def test_delete_company_removes_its_contracts(self, services, contracted_company) -> None:
        for value in ("100.00", "250.00"):
            services.printing.create_contract(
                {"value": value, "responsible": "Ana", "company_id": contracted_company.id}
            )
        services.printing.delete_printing_company(contracted_company.id)

        assert services.printing.list_contracts() == []
        with pytest.raises(NotFoundError):
            services.printing.get_printing_company(contracted_company.id)

    def test_delete_company_with_jobs_refused(self, services, private_company, book, insert_job) -> None:
        insert_job(book.isbn, private_company.id)
        with pytest.raises(InvariantViolation) as exc:
            services.printing.delete_printing_company(private_company.id)
        assert exc.value.rule == "COMPANY_HAS_PRINTING_JOBS"

    def test_delete_missing_company(self, services) -> None:
        with pytest.raises(NotFoundError):
            services.printing.delete_printing_company(99)


class TestContracts:
    """Only contracted companies may hold contracts."""

    def test_create_contract(self, services, contracted_company) -> None:
        contract = services.printing.create_contract(
            {"value": "1500.50", "responsible": "Maria Souza", "company_id": contracted_company.id}
        )
        assert contract.value == Decimal("1500.50")
        assert services.printing.get_contracts_by_company(contracted_company.id)[0].id == contract.id

    def test_private_company_is_ineligible(self, services, private_company) -> None:
        with pytest.raises(IneligibleReferenceError) as exc:
            services.printing.create_contract(
                {"value": "10.00", "responsible": "Ana", "company_id": private_company.id}
            )
        assert exc.value.message == "only contracted companies can have contracts"

    def test_missing_company_is_ineligible(self, services) -> None:
        with pytest.raises(IneligibleReferenceError):
            services.printing.create_contract({"value": "10.00", "responsible": "Ana", "company_id": 77})

    @pytest.mark.parametrize("value", ["0", "-5", "NaN", "Infinity", "abc"])
    def test_value_must_be_positive_and_finite(self, services, contracted_company, value) -> None:
        with pytest.raises(ValidationError):
            services.printing.create_contract(
                {"value": value, "responsible": "Ana", "company_id": contracted_company.id}
            )

    def test_update_cannot_move_contract_to_private_company(
        self, services, contracted_company, private_company
    ) -> None:
        contract = services.printing.create_contract(
            {"value": "10.00", "responsible": "Ana", "company_id": contracted_company.id}
        )
        with pytest.raises(IneligibleReferenceError):
            services.printing.update_contract(
                contract.id, {"value": "20.00", "responsible": "Ana", "company_id": private_company.id}
            )
        assert services.printing.get_contract(contract.id).value == Decimal("10.00")

    def test_contract_finders(self, services, contracted_company) -> None:
        low = services.printing.create_contract(
            {"value": "10.00", "responsible": "Ana Lima", "company_id": contracted_company.id}
        )
        high = services.printing.create_contract(
            {"value": "900.00", "responsible": "Bruno", "company_id": contracted_company.id}
        )
        assert [c.id for c in services.printing.get_contracts_by_responsible("lima")] == [low.id]
        assert [c.id for c in services.printing.get_contracts_by_value_range("100", "1000")] == [high.id]
        with pytest.raises(ValidationError):
            services.printing.get_contracts_by_value_range("1000", "100")

    def test_delete_contract(self, services, contracted_company) -> None:
        contract = services.printing.create_contract(
            {"value": "10.00", "responsible": "Ana", "company_id": contracted_company.id}
        )
        services.printing.delete_contract(contract.id)
        with pytest.raises(NotFoundError):
            services.printing.get_contract(contract.id)


class TestPrintingJobs:
    """Scheduling rules and the overdue/pending partition."""

    def test_schedule_job(self, services, book, private_company) -> None:
        job = services.printing.schedule_printing_job(job_payload(book.isbn, private_company.id))
        assert job.copies == 500
        assert services.printing.get_printing_job(book.isbn, private_company.id) is not None

    def test_schedule_with_iso_string_date(self, services, book, private_company) -> None:
        payload = job_payload(book.isbn, private_company.id)
        payload["delivery_date"] = payload["delivery_date"].isoformat()
        job = services.printing.schedule_printing_job(payload)
        assert job.delivery_date > utcnow()

    def test_duplicate_pair_rejected(self, services, book, private_company) -> None:
        services.printing.schedule_printing_job(job_payload(book.isbn, private_company.id))
        with pytest.raises(DuplicateError):
            services.printing.schedule_printing_job(job_payload(book.isbn, private_company.id, days=60))

    def test_unknown_company_checked_before_book(self, services) -> None:
        with pytest.raises(UnresolvedReferenceError) as exc:
            services.printing.schedule_printing_job(job_payload("missing", 404))
        assert exc.value.field == "company_id"

    def test_unknown_book(self, services, private_company) -> None:
        with pytest.raises(UnresolvedReferenceError) as exc:
            services.printing.schedule_printing_job(job_payload("missing", private_company.id))
        assert exc.value.field == "isbn"

    def test_past_delivery_date_rejected(self, services, book, private_company) -> None:
        with pytest.raises(ValidationError) as exc:
            services.printing.schedule_printing_job(job_payload(book.isbn, private_company.id, days=-1))
        assert "delivery_date" in exc.value.details

    @pytest.mark.parametrize("copies", [0, -3])
    def test_copies_must_be_positive(self, services, book, private_company, copies) -> None:
        with pytest.raises(ValidationError):
            services.printing.schedule_printing_job(job_payload(book.isbn, private_company.id, copies=copies))

    def test_copies_beyond_column_range_rejected(self, services, book, private_company) -> None:
        with pytest.raises(ValidationError) as exc:
            services.printing.schedule_printing_job(job_payload(book.isbn, private_company.id, copies=2**63))
        assert "copies" in exc.value.details
        assert services.printing.list_printing_jobs() == []

    def test_date_only_delivery_today_is_accepted(self, services, book, private_company) -> None:
        today = utcnow().date()
        payload = job_payload(book.isbn, private_company.id)
        payload["delivery_date"] = today.isoformat()

        job = services.printing.schedule_printing_job(payload)

        assert job.delivery_date == datetime.combine(today, time.max)
        assert job.status() == JobStatus.PENDING

    def test_overdue_and_pending_partition(
        self, services, book, second_book, private_company, insert_job
    ) -> None:
        insert_job(book.isbn, private_company.id, delivery_date=utcnow() - timedelta(days=2))
        services.printing.schedule_printing_job(job_payload(second_book.isbn, private_company.id))

        overdue = services.printing.get_overdue_jobs()
        pending = services.printing.get_pending_jobs()

        assert [j.isbn for j in overdue] == [book.isbn]
        assert [j.isbn for j in pending] == [second_book.isbn]
        assert overdue[0].label() == "overdue"

    def test_jobs_by_company_ordered_by_delivery(
        self, services, book, second_book, private_company
    ) -> None:
        services.printing.schedule_printing_job(job_payload(book.isbn, private_company.id, days=40))
        services.printing.schedule_printing_job(job_payload(second_book.isbn, private_company.id, days=5))

        jobs = services.printing.get_printing_jobs_by_company(private_company.id)
        assert [j.isbn for j in jobs] == [second_book.isbn, book.isbn]

    def test_jobs_of_missing_company(self, services) -> None:
        with pytest.raises(NotFoundError):
            services.printing.get_printing_jobs_by_company(5)

    def test_update_and_complete_job(self, services, book, private_company) -> None:
        services.printing.schedule_printing_job(job_payload(book.isbn, private_company.id))
        updated = services.printing.update_printing_job(
            book.isbn, private_company.id, {"copies": 42, "delivery_date": utcnow() + timedelta(days=3)}
        )
        assert updated.copies == 42
        assert updated.label() == "urgent"

        services.printing.complete_printing_job(book.isbn, private_company.id)
        assert services.printing.list_printing_jobs() == []

    def test_jobs_by_delivery_range(self, services, book, second_book, private_company) -> None:
        services.printing.schedule_printing_job(job_payload(book.isbn, private_company.id, days=5))
        services.printing.schedule_printing_job(job_payload(second_book.isbn, private_company.id, days=50))

        start = utcnow().date()
        end = (utcnow() + timedelta(days=10)).date()
        rows = services.printing.get_printing_jobs_by_delivery_range(start, end)
        assert [j.isbn for j in rows] == [book.isbn]
