"""
Tests for ReportingService: printing statistics and contract value analysis.
"""
from datetime import date, datetime, time, timedelta
from decimal import Decimal

import pytest

from models.base_model import utcnow
from services.errors import ValidationError


class TestPrintingStatistics:
    """Window totals, most-active company and the current status counts."""

    def test_window_totals_and_most_active(
        self, services, book, second_book, private_company, contracted_company, insert_job
    ) -> None:
        now = utcnow()
        insert_job(book.isbn, private_company.id, copies=100, delivery_date=now + timedelta(days=3))
        insert_job(book.isbn, contracted_company.id, copies=200, delivery_date=now + timedelta(days=20))
        insert_job(second_book.isbn, contracted_company.id, copies=50, delivery_date=now - timedelta(days=2))

        stats = services.reporting.get_printing_statistics(
            (now - timedelta(days=10)).date(), (now + timedelta(days=30)).date()
        )

        assert stats.total_jobs == 3
        assert stats.total_copies == 350
        assert stats.most_active_company_id == contracted_company.id
        assert stats.overdue_jobs == 1
        assert stats.pending_jobs == 2
        assert stats.urgent_jobs == 1

    def test_tie_goes_to_lowest_company_id(
        self, services, book, private_company, contracted_company, insert_job
    ) -> None:
        now = utcnow()
        insert_job(book.isbn, contracted_company.id, delivery_date=now + timedelta(days=5))
        insert_job(book.isbn, private_company.id, delivery_date=now + timedelta(days=6))

        stats = services.reporting.get_printing_statistics(now - timedelta(days=1), now + timedelta(days=10))
        assert stats.most_active_company_id == min(private_company.id, contracted_company.id)

    def test_empty_window(self, services, book, private_company, insert_job) -> None:
        insert_job(book.isbn, private_company.id, delivery_date=utcnow() + timedelta(days=100))

        stats = services.reporting.get_printing_statistics(date(2000, 1, 1), date(2000, 12, 31))

        assert stats.total_jobs == 0
        assert stats.total_copies == 0
        assert stats.most_active_company_id is None
        assert stats.period == "2000-01-01 to 2000-12-31"
        # status counts are not limited to the window
        assert stats.pending_jobs == 1

    def test_date_end_covers_whole_day(self, services, book, private_company, insert_job) -> None:
        day = (utcnow() + timedelta(days=4)).date()
        insert_job(book.isbn, private_company.id, delivery_date=datetime.combine(day, time(23, 30)))

        stats = services.reporting.get_printing_statistics(day, day)
        assert stats.total_jobs == 1

    def test_start_after_end_rejected(self, services) -> None:
        with pytest.raises(ValidationError):
            services.reporting.get_printing_statistics(date(2024, 2, 1), date(2024, 1, 1))

    def test_missing_bound_rejected(self, services) -> None:
        with pytest.raises(ValidationError):
            services.reporting.get_printing_statistics(None, date(2024, 1, 1))


class TestContractValueAnalysis:
    """Count, total, average, min and max over every contract."""

    def test_no_contracts_is_all_zero(self, services) -> None:
        analysis = services.reporting.get_contract_value_analysis()
        assert analysis.total_contracts == 0
        assert analysis.total_value == Decimal("0")
        assert analysis.average_value == Decimal("0")
        assert analysis.min_value == Decimal("0")
        assert analysis.max_value == Decimal("0")

    def test_analysis(self, services, contracted_company) -> None:
        for value in ("100.00", "200.00", "300.50"):
            services.printing.create_contract(
                {"value": value, "responsible": "Ana", "company_id": contracted_company.id}
            )

        analysis = services.reporting.get_contract_value_analysis()

        assert analysis.total_contracts == 3
        assert analysis.total_value == Decimal("600.50")
        assert analysis.average_value == Decimal("200.17")
        assert analysis.min_value == Decimal("100.00")
        assert analysis.max_value == Decimal("300.50")
