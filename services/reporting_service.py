"""Read-only analytics over printing jobs and contracts."""
from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from models.base_model import utcnow
from services.base import Service
from services.book_service import check_range
from services.ports import ContractRepository, PrintingJobRepository
from services.printing_service import to_datetime_bound
from utils.decorators import service_operation

logger = logging.getLogger(__name__)

ZERO = Decimal("0.00")
CENT = Decimal("0.01")


@dataclass
class PrintingStatistics:
    period: str
    total_jobs: int
    total_copies: int
    most_active_company_id: Optional[int]
    overdue_jobs: int
    pending_jobs: int
    urgent_jobs: int


@dataclass
class ContractValueAnalysis:
    total_contracts: int
    total_value: Decimal
    average_value: Decimal
    min_value: Decimal
    max_value: Decimal


class ReportingService(Service):
    def __init__(self, storage, printing_jobs: PrintingJobRepository, contracts: ContractRepository) -> None:
        super().__init__(storage)
        self._printing_jobs = printing_jobs
        self._contracts = contracts

    @service_operation("printing statistics")
    def get_printing_statistics(self, start, end) -> PrintingStatistics:
        """
        Totals for jobs delivered in [start, end].

        The overdue, pending and urgent counts describe every job at the
        time of the call, not just the window.
        """
        start_at, end_at = to_datetime_bound(start), to_datetime_bound(end, end_of_day=True)
        check_range(start_at, end_at)

        in_window = self._printing_jobs.find_by_delivery_range(start_at, end_at)
        jobs_per_company = Counter(job.company_id for job in in_window)

        most_active = None
        if jobs_per_company:
            # most jobs, lowest id on ties
            most_active = min(jobs_per_company, key=lambda company_id: (-jobs_per_company[company_id], company_id))

        now = utcnow()
        overdue = self._printing_jobs.find_overdue(now)
        pending = self._printing_jobs.find_pending(now)

        stats = PrintingStatistics(
            period=f"{start_at.date().isoformat()} to {end_at.date().isoformat()}",
            total_jobs=len(in_window),
            total_copies=sum(job.copies for job in in_window),
            most_active_company_id=most_active,
            overdue_jobs=len(overdue),
            pending_jobs=len(pending),
            urgent_jobs=sum(1 for job in pending if job.is_urgent(now)),
        )
        logger.debug("Printing statistics for %s: %s jobs", stats.period, stats.total_jobs)
        return stats

    @service_operation("contract value analysis")
    def get_contract_value_analysis(self) -> ContractValueAnalysis:
        values = [Decimal(contract.value) for contract in self._contracts.find_all()]
        if not values:
            return ContractValueAnalysis(0, ZERO, ZERO, ZERO, ZERO)

        total = sum(values, ZERO)
        return ContractValueAnalysis(
            total_contracts=len(values),
            total_value=total.quantize(CENT),
            average_value=(total / len(values)).quantize(CENT),
            min_value=min(values).quantize(CENT),
            max_value=max(values).quantize(CENT),
        )
