from __future__ import annotations

import logging
from typing import List

from models.author import Author
from models.book import Book
from models.schemas.author import AuthorCreateSchema, AuthorUpdateSchema
from services.base import Service, load_or_raise
from services.errors import DuplicateError, InvariantViolation, NotFoundError, ValidationError
from services.ports import AuthorRepository, AuthorshipRepository
from utils.decorators import service_operation

logger = logging.getLogger(__name__)

create_schema = AuthorCreateSchema()
update_schema = AuthorUpdateSchema()


class AuthorService(Service):
    """Author lifecycle: unique RG on creation, no deletion while authoring books."""

    def __init__(self, storage, authors: AuthorRepository, authorships: AuthorshipRepository) -> None:
        super().__init__(storage)
        self._authors = authors
        self._authorships = authorships

    def _require_author(self, rg: str) -> Author:
        author = self._authors.find_by_key(rg)
        if author is None:
            raise NotFoundError("Author", "rg", rg)
        return author

    @service_operation("create author")
    def create_author(self, data: dict) -> Author:
        payload = load_or_raise(create_schema, data)
        if self._authors.find_by_key(payload["rg"]) is not None:
            raise DuplicateError("Author", "rg", payload["rg"])

        author = self._authors.create(Author(**payload))
        self._commit()
        logger.info("Author %s created", author.rg)
        return author

    @service_operation("update author")
    def update_author(self, rg: str, data: dict) -> Author:
        author = self._require_author(rg)
        payload = load_or_raise(update_schema, data)
        author.name = payload["name"]
        author.address = payload["address"]
        self._authors.update(author)
        self._commit()
        logger.info("Author %s updated", rg)
        return author

    @service_operation("delete author")
    def delete_author(self, rg: str) -> None:
        author = self._require_author(rg)
        if self._authorships.find_books_by_author(rg):
            raise InvariantViolation("AUTHOR_HAS_BOOKS", "author has books", field="rg", value=rg)
        self._authors.delete(author)
        self._commit()
        logger.info("Author %s deleted", rg)

    @service_operation("get author")
    def get_author(self, rg: str) -> Author:
        return self._require_author(rg)

    @service_operation("list authors")
    def list_authors(self) -> List[Author]:
        return self._authors.find_all()

    @service_operation("search authors")
    def search_authors(self, name: str) -> List[Author]:
        if not name or not name.strip():
            raise ValidationError("name is required", field="name")
        return self._authors.search_by_name(name)

    @service_operation("get author books")
    def get_author_books(self, rg: str) -> List[Book]:
        self._require_author(rg)
        return self._authorships.find_books_by_author(rg)
