"""
Repository interfaces (ABCs) the services depend on.

Infrastructure implements these (see models/repositories.py). Single-item
finders return None when nothing matches; they never raise for absence.
Mutating calls stage changes only: the service that issued them commits.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date, datetime
from decimal import Decimal
from typing import Generic, List, Optional, TypeVar

from models.author import Author
from models.book import Authorship, Book
from models.contract import Contract
from models.printing_company import ContractedPrintingCompany, PrintingCompany
from models.printing_job import PrintingJob
from models.publisher import Publisher

T = TypeVar("T")


class Repository(Generic[T], ABC):
    """Create/update/delete/find_all shared by every entity store."""

    @abstractmethod
    def create(self, entity: T) -> T:
        """Stage a new entity and return it with generated keys populated."""
        raise NotImplementedError

    @abstractmethod
    def update(self, entity: T) -> T:
        raise NotImplementedError

    @abstractmethod
    def delete(self, entity: T) -> None:
        raise NotImplementedError

    @abstractmethod
    def find_all(self) -> List[T]:
        raise NotImplementedError


class PublisherRepository(Repository[Publisher]):
    @abstractmethod
    def find_by_key(self, publisher_id: int) -> Optional[Publisher]:
        raise NotImplementedError

    @abstractmethod
    def find_by_name(self, name: str, exclude_id: int | None = None) -> Optional[Publisher]:
        """Case-insensitive exact name match, optionally ignoring one id."""
        raise NotImplementedError

    @abstractmethod
    def search_by_name(self, fragment: str) -> List[Publisher]:
        raise NotImplementedError


class AuthorRepository(Repository[Author]):
    @abstractmethod
    def find_by_key(self, rg: str) -> Optional[Author]:
        raise NotImplementedError

    @abstractmethod
    def search_by_name(self, fragment: str) -> List[Author]:
        raise NotImplementedError


class BookRepository(Repository[Book]):
    @abstractmethod
    def find_by_key(self, isbn: str) -> Optional[Book]:
        raise NotImplementedError

    @abstractmethod
    def find_by_key_for_update(self, isbn: str) -> Optional[Book]:
        """Like find_by_key, but row-locks the book until the next commit/rollback."""
        raise NotImplementedError

    @abstractmethod
    def search_by_title(self, fragment: str) -> List[Book]:
        raise NotImplementedError

    @abstractmethod
    def find_by_publisher(self, publisher_id: int) -> List[Book]:
        raise NotImplementedError

    @abstractmethod
    def find_by_publication_range(self, start: date, end: date) -> List[Book]:
        raise NotImplementedError


class AuthorshipRepository(ABC):
    @abstractmethod
    def create(self, authorship: Authorship) -> Authorship:
        raise NotImplementedError

    @abstractmethod
    def find(self, isbn: str, rg: str) -> Optional[Authorship]:
        raise NotImplementedError

    @abstractmethod
    def delete(self, authorship: Authorship) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete_by_book(self, isbn: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def count_by_book(self, isbn: str) -> int:
        raise NotImplementedError

    @abstractmethod
    def find_authors_by_book(self, isbn: str) -> List[Author]:
        """Authors of a book ordered by name."""
        raise NotImplementedError

    @abstractmethod
    def find_books_by_author(self, rg: str) -> List[Book]:
        raise NotImplementedError


class PrintingCompanyRepository(Repository[PrintingCompany]):
    @abstractmethod
    def find_by_key(self, company_id: int) -> Optional[PrintingCompany]:
        raise NotImplementedError

    @abstractmethod
    def find_contracted(self, company_id: int) -> Optional[ContractedPrintingCompany]:
        """Return the company only when it exists as a contracted company."""
        raise NotImplementedError

    @abstractmethod
    def find_by_kind(self, kind: str) -> List[PrintingCompany]:
        raise NotImplementedError

    @abstractmethod
    def search_by_name(self, fragment: str) -> List[PrintingCompany]:
        raise NotImplementedError


class ContractRepository(Repository[Contract]):
    @abstractmethod
    def find_by_key(self, contract_id: int) -> Optional[Contract]:
        raise NotImplementedError

    @abstractmethod
    def find_by_company(self, company_id: int) -> List[Contract]:
        raise NotImplementedError

    @abstractmethod
    def find_by_responsible(self, fragment: str) -> List[Contract]:
        raise NotImplementedError

    @abstractmethod
    def find_by_value_range(self, min_value: Decimal, max_value: Decimal) -> List[Contract]:
        raise NotImplementedError


class PrintingJobRepository(Repository[PrintingJob]):
    @abstractmethod
    def find_by_key(self, isbn: str, company_id: int) -> Optional[PrintingJob]:
        raise NotImplementedError

    @abstractmethod
    def find_by_company(self, company_id: int) -> List[PrintingJob]:
        """Jobs of one company ordered by delivery date ascending."""
        raise NotImplementedError

    @abstractmethod
    def find_by_book(self, isbn: str) -> List[PrintingJob]:
        raise NotImplementedError

    @abstractmethod
    def find_by_delivery_range(self, start: datetime, end: datetime) -> List[PrintingJob]:
        """Jobs whose delivery date falls in [start, end]."""
        raise NotImplementedError

    @abstractmethod
    def find_overdue(self, now: datetime) -> List[PrintingJob]:
        raise NotImplementedError

    @abstractmethod
    def find_pending(self, now: datetime) -> List[PrintingJob]:
        raise NotImplementedError
