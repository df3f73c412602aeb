"""
SQLAlchemy implementations of the repository ports.

Each repository works on the DBStorage scoped session. Mutations are staged
and flushed (so generated ids and constraint errors surface early); the
calling service owns the commit.
"""
from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import func

from models.author import Author
from models.book import Authorship, Book
from models.contract import Contract
from models.printing_company import ContractedPrintingCompany, PrintingCompany
from models.printing_job import PrintingJob
from models.publisher import Publisher
from services import ports


def _like(fragment: str) -> str:
    return f"%{fragment.strip().lower()}%"


class SQLRepository:
    """Staging helpers shared by every SQL repository."""

    def __init__(self, storage):
        self._storage = storage

    @property
    def session(self):
        return self._storage.get_session()

    def create(self, entity):
        self._storage.new(entity)
        self._storage.flush()
        return entity

    def update(self, entity):
        self._storage.new(entity)
        self._storage.flush()
        return entity

    def delete(self, entity) -> None:
        self._storage.delete(entity)
        self._storage.flush()


class SQLPublisherRepository(SQLRepository, ports.PublisherRepository):
    def find_by_key(self, publisher_id: int) -> Optional[Publisher]:
        return self.session.get(Publisher, publisher_id)

    def find_all(self) -> List[Publisher]:
        return self.session.query(Publisher).order_by(Publisher.id.asc()).all()

    def find_by_name(self, name: str, exclude_id: int | None = None) -> Optional[Publisher]:
        q = self.session.query(Publisher).filter(func.lower(Publisher.name) == name.strip().lower())
        if exclude_id is not None:
            q = q.filter(Publisher.id != exclude_id)
        return q.first()

    def search_by_name(self, fragment: str) -> List[Publisher]:
        return (
            self.session.query(Publisher)
            .filter(func.lower(Publisher.name).like(_like(fragment)))
            .order_by(Publisher.name.asc())
            .all()
        )


class SQLAuthorRepository(SQLRepository, ports.AuthorRepository):
    def find_by_key(self, rg: str) -> Optional[Author]:
        return self.session.get(Author, rg)

    def find_all(self) -> List[Author]:
        return self.session.query(Author).order_by(Author.name.asc(), Author.rg.asc()).all()

    def search_by_name(self, fragment: str) -> List[Author]:
        return (
            self.session.query(Author)
            .filter(func.lower(Author.name).like(_like(fragment)))
            .order_by(Author.name.asc())
            .all()
        )


class SQLBookRepository(SQLRepository, ports.BookRepository):
    def find_by_key(self, isbn: str) -> Optional[Book]:
        return self.session.get(Book, isbn)

    def find_by_key_for_update(self, isbn: str) -> Optional[Book]:
        # SQLite ignores FOR UPDATE; PostgreSQL/MySQL hold the row lock until commit
        return (
            self.session.query(Book)
            .filter(Book.isbn == isbn)
            .with_for_update()
            .populate_existing()
            .one_or_none()
        )

    def find_all(self) -> List[Book]:
        return self.session.query(Book).order_by(Book.title.asc(), Book.isbn.asc()).all()

    def search_by_title(self, fragment: str) -> List[Book]:
        return (
            self.session.query(Book)
            .filter(func.lower(Book.title).like(_like(fragment)))
            .order_by(Book.title.asc())
            .all()
        )

    def find_by_publisher(self, publisher_id: int) -> List[Book]:
        return (
            self.session.query(Book)
            .filter(Book.publisher_id == publisher_id)
            .order_by(Book.title.asc())
            .all()
        )

    def find_by_publication_range(self, start: date, end: date) -> List[Book]:
        return (
            self.session.query(Book)
            .filter(Book.published_date >= start, Book.published_date <= end)
            .order_by(Book.published_date.asc(), Book.isbn.asc())
            .all()
        )


class SQLAuthorshipRepository(SQLRepository, ports.AuthorshipRepository):
    def find(self, isbn: str, rg: str) -> Optional[Authorship]:
        return self.session.get(Authorship, (isbn, rg))

    def delete_by_book(self, isbn: str) -> None:
        for authorship in self.session.query(Authorship).filter(Authorship.isbn == isbn).all():
            self._storage.delete(authorship)
        self._storage.flush()

    def count_by_book(self, isbn: str) -> int:
        return (
            self.session.query(func.count(Authorship.rg))
            .filter(Authorship.isbn == isbn)
            .scalar()
        )

    def find_authors_by_book(self, isbn: str) -> List[Author]:
        return (
            self.session.query(Author)
            .join(Authorship, Authorship.rg == Author.rg)
            .filter(Authorship.isbn == isbn)
            .order_by(Author.name.asc(), Author.rg.asc())
            .all()
        )

    def find_books_by_author(self, rg: str) -> List[Book]:
        return (
            self.session.query(Book)
            .join(Authorship, Authorship.isbn == Book.isbn)
            .filter(Authorship.rg == rg)
            .order_by(Book.title.asc())
            .all()
        )


class SQLPrintingCompanyRepository(SQLRepository, ports.PrintingCompanyRepository):
    def find_by_key(self, company_id: int) -> Optional[PrintingCompany]:
        return self.session.get(PrintingCompany, company_id)

    def find_contracted(self, company_id: int) -> Optional[ContractedPrintingCompany]:
        return (
            self.session.query(ContractedPrintingCompany)
            .filter(ContractedPrintingCompany.id == company_id)
            .one_or_none()
        )

    def find_all(self) -> List[PrintingCompany]:
        return self.session.query(PrintingCompany).order_by(PrintingCompany.id.asc()).all()

    def find_by_kind(self, kind: str) -> List[PrintingCompany]:
        return (
            self.session.query(PrintingCompany)
            .filter(PrintingCompany.kind == kind)
            .order_by(PrintingCompany.id.asc())
            .all()
        )

    def search_by_name(self, fragment: str) -> List[PrintingCompany]:
        return (
            self.session.query(PrintingCompany)
            .filter(func.lower(PrintingCompany.name).like(_like(fragment)))
            .order_by(PrintingCompany.name.asc())
            .all()
        )


class SQLContractRepository(SQLRepository, ports.ContractRepository):
    def find_by_key(self, contract_id: int) -> Optional[Contract]:
        return self.session.get(Contract, contract_id)

    def find_all(self) -> List[Contract]:
        return self.session.query(Contract).order_by(Contract.id.asc()).all()

    def find_by_company(self, company_id: int) -> List[Contract]:
        return (
            self.session.query(Contract)
            .filter(Contract.company_id == company_id)
            .order_by(Contract.id.asc())
            .all()
        )

    def find_by_responsible(self, fragment: str) -> List[Contract]:
        return (
            self.session.query(Contract)
            .filter(func.lower(Contract.responsible).like(_like(fragment)))
            .order_by(Contract.id.asc())
            .all()
        )

    def find_by_value_range(self, min_value: Decimal, max_value: Decimal) -> List[Contract]:
        return (
            self.session.query(Contract)
            .filter(Contract.value >= min_value, Contract.value <= max_value)
            .order_by(Contract.value.asc(), Contract.id.asc())
            .all()
        )


class SQLPrintingJobRepository(SQLRepository, ports.PrintingJobRepository):
    def find_by_key(self, isbn: str, company_id: int) -> Optional[PrintingJob]:
        return self.session.get(PrintingJob, (isbn, company_id))

    def find_all(self) -> List[PrintingJob]:
        return (
            self.session.query(PrintingJob)
            .order_by(PrintingJob.delivery_date.asc(), PrintingJob.isbn.asc())
            .all()
        )

    def find_by_company(self, company_id: int) -> List[PrintingJob]:
        return (
            self.session.query(PrintingJob)
            .filter(PrintingJob.company_id == company_id)
            .order_by(PrintingJob.delivery_date.asc(), PrintingJob.isbn.asc())
            .all()
        )

    def find_by_book(self, isbn: str) -> List[PrintingJob]:
        return (
            self.session.query(PrintingJob)
            .filter(PrintingJob.isbn == isbn)
            .order_by(PrintingJob.delivery_date.asc())
            .all()
        )

    def find_by_delivery_range(self, start: datetime, end: datetime) -> List[PrintingJob]:
        return (
            self.session.query(PrintingJob)
            .filter(PrintingJob.delivery_date >= start, PrintingJob.delivery_date <= end)
            .order_by(PrintingJob.delivery_date.asc(), PrintingJob.company_id.asc())
            .all()
        )

    def find_overdue(self, now: datetime) -> List[PrintingJob]:
        return (
            self.session.query(PrintingJob)
            .filter(PrintingJob.delivery_date < now)
            .order_by(PrintingJob.delivery_date.asc())
            .all()
        )

    def find_pending(self, now: datetime) -> List[PrintingJob]:
        return (
            self.session.query(PrintingJob)
            .filter(PrintingJob.delivery_date >= now)
            .order_by(PrintingJob.delivery_date.asc())
            .all()
        )
