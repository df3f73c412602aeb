"""
Book and authorship rules.

- A book must reference an existing publisher.
- Authorship is a many-to-many link with at most one row per (isbn, rg).
- A book never loses its last author: removal is rejected at that boundary.
  A freshly created book may have no authors yet.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import List

from models.author import Author
from models.book import Authorship, Book
from models.schemas.book import BookCreateSchema, BookUpdateSchema
from services.base import Service, load_or_raise
from services.errors import (
    DuplicateError,
    InvariantViolation,
    NotFoundError,
    UnresolvedReferenceError,
    ValidationError,
)
from services.ports import (
    AuthorRepository,
    AuthorshipRepository,
    BookRepository,
    PrintingJobRepository,
    PublisherRepository,
)
from utils.decorators import service_operation

logger = logging.getLogger(__name__)

create_schema = BookCreateSchema()
update_schema = BookUpdateSchema()


@dataclass
class BookWithAuthors:
    book: Book
    authors: List[Author] = field(default_factory=list)


def check_range(start, end) -> None:
    """Both bounds present and ordered, else ValidationError."""
    if start is None or end is None:
        raise ValidationError("start and end are required", field="start" if start is None else "end")
    if start > end:
        raise ValidationError("start cannot be after end", field="start", value=str(start))


class BookService(Service):
    def __init__(
        self,
        storage,
        books: BookRepository,
        authors: AuthorRepository,
        publishers: PublisherRepository,
        authorships: AuthorshipRepository,
        printing_jobs: PrintingJobRepository,
    ) -> None:
        super().__init__(storage)
        self._books = books
        self._authors = authors
        self._publishers = publishers
        self._authorships = authorships
        self._printing_jobs = printing_jobs

    def _require_publisher(self, publisher_id: int) -> None:
        if self._publishers.find_by_key(publisher_id) is None:
            raise UnresolvedReferenceError("Publisher", "publisher_id", publisher_id)

    def _require_book(self, isbn: str) -> Book:
        book = self._books.find_by_key(isbn)
        if book is None:
            raise NotFoundError("Book", "isbn", isbn)
        return book

    @service_operation("create book")
    def create_book(self, data: dict) -> Book:
        payload = load_or_raise(create_schema, data)
        if self._books.find_by_key(payload["isbn"]) is not None:
            raise DuplicateError("Book", "isbn", payload["isbn"])
        self._require_publisher(payload["publisher_id"])

        book = self._books.create(Book(**payload))
        self._commit()
        logger.info("Book %s created (publisher %s)", book.isbn, book.publisher_id)
        return book

    @service_operation("update book")
    def update_book(self, isbn: str, data: dict) -> Book:
        book = self._require_book(isbn)
        payload = load_or_raise(update_schema, data)
        self._require_publisher(payload["publisher_id"])

        for key, value in payload.items():
            setattr(book, key, value)
        self._books.update(book)
        self._commit()
        logger.info("Book %s updated", isbn)
        return book

    @service_operation("delete book")
    def delete_book(self, isbn: str) -> None:
        """Delete a book and its authorships; refused while printing jobs exist."""
        book = self._require_book(isbn)
        if self._printing_jobs.find_by_book(isbn):
            raise InvariantViolation(
                "BOOK_HAS_PRINTING_JOBS",
                "cannot delete a book with printing jobs",
                field="isbn",
                value=isbn,
            )
        self._authorships.delete_by_book(isbn)
        self._books.delete(book)
        self._commit()
        logger.info("Book %s deleted", isbn)

    @service_operation("get book")
    def get_book(self, isbn: str) -> Book:
        return self._require_book(isbn)

    @service_operation("list books")
    def list_books(self) -> List[Book]:
        return self._books.find_all()

    @service_operation("search books")
    def search_books(self, title: str) -> List[Book]:
        if not title or not title.strip():
            raise ValidationError("title is required", field="title")
        return self._books.search_by_title(title)

    @service_operation("list books by publication date")
    def get_books_by_publication_range(self, start: date, end: date) -> List[Book]:
        check_range(start, end)
        return self._books.find_by_publication_range(start, end)

    @service_operation("add author to book")
    def add_author_to_book(self, isbn: str, rg: str) -> Authorship:
        if self._books.find_by_key(isbn) is None:
            raise UnresolvedReferenceError("Book", "isbn", isbn)
        if self._authors.find_by_key(rg) is None:
            raise UnresolvedReferenceError("Author", "rg", rg)
        if self._authorships.find(isbn, rg) is not None:
            raise DuplicateError("Authorship", "isbn_rg", {"isbn": isbn, "rg": rg})

        authorship = self._authorships.create(Authorship(isbn=isbn, rg=rg))
        self._commit()
        logger.info("Author %s added to book %s", rg, isbn)
        return authorship

    @service_operation("remove author from book")
    def remove_author_from_book(self, isbn: str, rg: str) -> None:
        # Lock the book row first so the count below cannot be raced by
        # another removal on backends that support row locks.
        self._books.find_by_key_for_update(isbn)
        authorship = self._authorships.find(isbn, rg)
        if authorship is None:
            raise UnresolvedReferenceError("Authorship", "isbn_rg", {"isbn": isbn, "rg": rg})

        if self._authorships.count_by_book(isbn) <= 1:
            raise InvariantViolation(
                "LAST_AUTHOR",
                "cannot remove last author",
                field="isbn_rg",
                value={"isbn": isbn, "rg": rg},
            )

        self._authorships.delete(authorship)
        self._commit()
        logger.info("Author %s removed from book %s", rg, isbn)

    @service_operation("get book with authors")
    def get_book_with_authors(self, isbn: str) -> BookWithAuthors:
        book = self._require_book(isbn)
        return BookWithAuthors(book=book, authors=self._authorships.find_authors_by_book(isbn))
