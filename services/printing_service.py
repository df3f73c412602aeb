"""
Printing companies, contracts and printing jobs.

- A company is private or contracted; only contracted companies carry an
  address and only they may hold contracts.
- A printing job links one book to one company; the pair is unique.
- Job status is derived from the delivery date at read time.
"""
from __future__ import annotations

import logging
from datetime import date, datetime
from typing import List, Optional

from marshmallow import ValidationError as SchemaValidationError

from models.base_model import utcnow
from models.contract import Contract
from models.printing_company import (
    CompanyKind,
    ContractedPrintingCompany,
    PrintingCompany,
    PrivatePrintingCompany,
)
from models.printing_job import PrintingJob
from models.schemas.common import to_decimal_2
from models.schemas.contract import ContractCreateSchema, ContractUpdateSchema
from models.schemas.printing_company import ContractedAddressSchema, PrintingCompanySchema
from models.schemas.printing_job import PrintingJobCreateSchema, PrintingJobUpdateSchema
from services.base import Service, load_or_raise
from services.book_service import check_range
from services.errors import (
    DuplicateError,
    IneligibleReferenceError,
    InvariantViolation,
    MissingFieldError,
    NotFoundError,
    UnresolvedReferenceError,
    ValidationError,
)
from services.ports import (
    BookRepository,
    ContractRepository,
    PrintingCompanyRepository,
    PrintingJobRepository,
)
from utils.decorators import service_operation

logger = logging.getLogger(__name__)

company_schema = PrintingCompanySchema()
address_schema = ContractedAddressSchema()
contract_create_schema = ContractCreateSchema()
contract_update_schema = ContractUpdateSchema()
job_create_schema = PrintingJobCreateSchema()
job_update_schema = PrintingJobUpdateSchema()


def to_datetime_bound(value, end_of_day: bool = False) -> Optional[datetime]:
    """Widen a date to a datetime; a date used as an upper bound covers the whole day."""
    if value is None or isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, datetime.max.time() if end_of_day else datetime.min.time())
    raise ValidationError("Not a valid date.", value=str(value))


class PrintingService(Service):
    def __init__(
        self,
        storage,
        companies: PrintingCompanyRepository,
        contracts: ContractRepository,
        printing_jobs: PrintingJobRepository,
        books: BookRepository,
    ) -> None:
        super().__init__(storage)
        self._companies = companies
        self._contracts = contracts
        self._printing_jobs = printing_jobs
        self._books = books

    # ------------------------------------------------------------------
    # Printing companies
    # ------------------------------------------------------------------
    def _require_company(self, company_id: int) -> PrintingCompany:
        company = self._companies.find_by_key(company_id)
        if company is None:
            raise NotFoundError("PrintingCompany", "id", company_id)
        return company

    def _load_address(self, address: Optional[str]) -> str:
        if address is None:
            raise MissingFieldError("address", "address is required for contracted companies")
        return load_or_raise(address_schema, {"address": address})["address"]

    @service_operation("create printing company")
    def create_printing_company(
        self, data: dict, is_private: bool, address: Optional[str] = None
    ) -> PrintingCompany:
        """
        Create a private or contracted company.

        Contracted companies require an address. An address passed for a
        private company is ignored.
        """
        payload = load_or_raise(company_schema, data)
        if is_private:
            company = PrivatePrintingCompany(name=payload["name"])
        else:
            company = ContractedPrintingCompany(name=payload["name"], address=self._load_address(address))

        company = self._companies.create(company)
        self._commit()
        logger.info("Printing company %s created (%s)", company.id, company.kind)
        return company

    @service_operation("update printing company")
    def update_printing_company(self, company_id: int, data: dict) -> PrintingCompany:
        company = self._require_company(company_id)
        payload = load_or_raise(company_schema, {"name": (data or {}).get("name")})
        company.name = payload["name"]
        if company.is_contracted:
            company.address = self._load_address((data or {}).get("address"))

        self._companies.update(company)
        self._commit()
        logger.info("Printing company %s updated", company_id)
        return company

    @service_operation("delete printing company")
    def delete_printing_company(self, company_id: int) -> None:
        """Delete a company and its contracts together; refused while it has printing jobs."""
        company = self._require_company(company_id)
        if self._printing_jobs.find_by_company(company_id):
            raise InvariantViolation(
                "COMPANY_HAS_PRINTING_JOBS",
                "cannot delete a printing company with printing jobs",
                field="id",
                value=company_id,
            )

        contracts = self._contracts.find_by_company(company_id) if company.is_contracted else []
        for contract in contracts:
            self._contracts.delete(contract)
        self._companies.delete(company)
        self._commit()
        logger.info("Printing company %s deleted with %d contract(s)", company_id, len(contracts))

    @service_operation("get printing company")
    def get_printing_company(self, company_id: int) -> PrintingCompany:
        return self._require_company(company_id)

    @service_operation("list printing companies")
    def list_printing_companies(self, kind: Optional[str] = None) -> List[PrintingCompany]:
        if kind is None:
            return self._companies.find_all()
        try:
            kind = CompanyKind(kind).value
        except ValueError:
            raise ValidationError("kind must be 'private' or 'contracted'", field="kind", value=kind)
        return self._companies.find_by_kind(kind)

    @service_operation("search printing companies")
    def search_printing_companies(self, name: str) -> List[PrintingCompany]:
        if not name or not name.strip():
            raise ValidationError("name is required", field="name")
        return self._companies.search_by_name(name)

    # ------------------------------------------------------------------
    # Contracts
    # ------------------------------------------------------------------
    def _require_contract(self, contract_id: int) -> Contract:
        contract = self._contracts.find_by_key(contract_id)
        if contract is None:
            raise NotFoundError("Contract", "id", contract_id)
        return contract

    def _require_contracted(self, company_id: int) -> None:
        if self._companies.find_contracted(company_id) is None:
            raise IneligibleReferenceError(
                "only contracted companies can have contracts",
                field="company_id",
                value=company_id,
            )

    @service_operation("create contract")
    def create_contract(self, data: dict) -> Contract:
        payload = load_or_raise(contract_create_schema, data)
        self._require_contracted(payload["company_id"])

        contract = self._contracts.create(Contract(**payload))
        self._commit()
        logger.info("Contract %s created for company %s", contract.id, contract.company_id)
        return contract

    @service_operation("update contract")
    def update_contract(self, contract_id: int, data: dict) -> Contract:
        contract = self._require_contract(contract_id)
        payload = load_or_raise(contract_update_schema, data)
        self._require_contracted(payload["company_id"])

        for key, value in payload.items():
            setattr(contract, key, value)
        self._contracts.update(contract)
        self._commit()
        logger.info("Contract %s updated", contract_id)
        return contract

    @service_operation("delete contract")
    def delete_contract(self, contract_id: int) -> None:
        contract = self._require_contract(contract_id)
        self._contracts.delete(contract)
        self._commit()
        logger.info("Contract %s deleted", contract_id)

    @service_operation("get contract")
    def get_contract(self, contract_id: int) -> Contract:
        return self._require_contract(contract_id)

    @service_operation("list contracts")
    def list_contracts(self) -> List[Contract]:
        return self._contracts.find_all()

    @service_operation("list contracts by company")
    def get_contracts_by_company(self, company_id: int) -> List[Contract]:
        self._require_company(company_id)
        return self._contracts.find_by_company(company_id)

    @service_operation("search contracts by responsible")
    def get_contracts_by_responsible(self, responsible: str) -> List[Contract]:
        if not responsible or not responsible.strip():
            raise ValidationError("responsible is required", field="responsible")
        return self._contracts.find_by_responsible(responsible)

    @service_operation("list contracts by value")
    def get_contracts_by_value_range(self, min_value, max_value) -> List[Contract]:
        try:
            low, high = to_decimal_2(min_value), to_decimal_2(max_value)
        except SchemaValidationError as err:
            raise ValidationError("value bounds must be finite numbers", field="value") from err
        check_range(low, high)
        return self._contracts.find_by_value_range(low, high)

    # ------------------------------------------------------------------
    # Printing jobs
    # ------------------------------------------------------------------
    def _require_job(self, isbn: str, company_id: int) -> PrintingJob:
        job = self._printing_jobs.find_by_key(isbn, company_id)
        if job is None:
            raise NotFoundError("PrintingJob", "isbn_company_id", {"isbn": isbn, "company_id": company_id})
        return job

    @service_operation("schedule printing job")
    def schedule_printing_job(self, data: dict) -> PrintingJob:
        payload = load_or_raise(job_create_schema, data)
        isbn, company_id = payload["isbn"], payload["company_id"]

        if self._companies.find_by_key(company_id) is None:
            raise UnresolvedReferenceError("PrintingCompany", "company_id", company_id)
        if self._books.find_by_key(isbn) is None:
            raise UnresolvedReferenceError("Book", "isbn", isbn)
        if self._printing_jobs.find_by_key(isbn, company_id) is not None:
            raise DuplicateError("PrintingJob", "isbn_company_id", {"isbn": isbn, "company_id": company_id})

        job = self._printing_jobs.create(PrintingJob(**payload))
        self._commit()
        logger.info(
            "Printing job scheduled: book %s at company %s, %d copies due %s",
            isbn, company_id, job.copies, job.delivery_date.isoformat(),
        )
        return job

    @service_operation("update printing job")
    def update_printing_job(self, isbn: str, company_id: int, data: dict) -> PrintingJob:
        job = self._require_job(isbn, company_id)
        payload = load_or_raise(job_update_schema, data)
        job.copies = payload["copies"]
        job.delivery_date = payload["delivery_date"]
        self._printing_jobs.update(job)
        self._commit()
        logger.info("Printing job %s/%s updated", isbn, company_id)
        return job

    @service_operation("delete printing job")
    def delete_printing_job(self, isbn: str, company_id: int) -> None:
        job = self._require_job(isbn, company_id)
        self._printing_jobs.delete(job)
        self._commit()
        logger.info("Printing job %s/%s deleted", isbn, company_id)

    @service_operation("complete printing job")
    def complete_printing_job(self, isbn: str, company_id: int) -> PrintingJob:
        """Mark a job delivered by removing it. Returns the removed job."""
        job = self._require_job(isbn, company_id)
        self._printing_jobs.delete(job)
        self._commit()
        logger.info("Printing job %s/%s completed", isbn, company_id)
        return job

    @service_operation("get printing job")
    def get_printing_job(self, isbn: str, company_id: int) -> PrintingJob:
        return self._require_job(isbn, company_id)

    @service_operation("list printing jobs")
    def list_printing_jobs(self) -> List[PrintingJob]:
        return self._printing_jobs.find_all()

    @service_operation("list overdue printing jobs")
    def get_overdue_jobs(self) -> List[PrintingJob]:
        return self._printing_jobs.find_overdue(utcnow())

    @service_operation("list pending printing jobs")
    def get_pending_jobs(self) -> List[PrintingJob]:
        return self._printing_jobs.find_pending(utcnow())

    @service_operation("list printing jobs by company")
    def get_printing_jobs_by_company(self, company_id: int) -> List[PrintingJob]:
        self._require_company(company_id)
        return self._printing_jobs.find_by_company(company_id)

    @service_operation("list printing jobs by book")
    def get_printing_jobs_by_book(self, isbn: str) -> List[PrintingJob]:
        if self._books.find_by_key(isbn) is None:
            raise NotFoundError("Book", "isbn", isbn)
        return self._printing_jobs.find_by_book(isbn)

    @service_operation("list printing jobs by delivery date")
    def get_printing_jobs_by_delivery_range(self, start, end) -> List[PrintingJob]:
        start, end = to_datetime_bound(start), to_datetime_bound(end, end_of_day=True)
        check_range(start, end)
        return self._printing_jobs.find_by_delivery_range(start, end)
