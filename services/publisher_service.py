from __future__ import annotations

import logging
from typing import List

from models.book import Book
from models.publisher import Publisher
from models.schemas.publisher import PublisherCreateSchema, PublisherUpdateSchema
from services.base import Service, load_or_raise
from services.errors import DuplicateError, InvariantViolation, NotFoundError, ValidationError
from services.ports import BookRepository, PublisherRepository
from utils.decorators import service_operation

logger = logging.getLogger(__name__)

create_schema = PublisherCreateSchema()
update_schema = PublisherUpdateSchema()


class PublisherService(Service):
    """
    Publisher lifecycle.
    Names are unique (case-insensitive); a publisher with books cannot be deleted.
    """

    def __init__(self, storage, publishers: PublisherRepository, books: BookRepository) -> None:
        super().__init__(storage)
        self._publishers = publishers
        self._books = books

    def _require_publisher(self, publisher_id: int) -> Publisher:
        publisher = self._publishers.find_by_key(publisher_id)
        if publisher is None:
            raise NotFoundError("Publisher", "id", publisher_id)
        return publisher

    @service_operation("create publisher")
    def create_publisher(self, data: dict) -> Publisher:
        payload = load_or_raise(create_schema, data)
        if self._publishers.find_by_name(payload["name"]) is not None:
            raise DuplicateError("Publisher", "name", payload["name"])

        publisher = self._publishers.create(Publisher(**payload))
        self._commit()
        logger.info("Publisher %s created (%s)", publisher.id, publisher.name)
        return publisher

    @service_operation("update publisher")
    def update_publisher(self, publisher_id: int, data: dict) -> Publisher:
        publisher = self._require_publisher(publisher_id)
        payload = load_or_raise(update_schema, data)
        if self._publishers.find_by_name(payload["name"], exclude_id=publisher.id) is not None:
            raise DuplicateError("Publisher", "name", payload["name"])

        publisher.name = payload["name"]
        publisher.address = payload["address"]
        self._publishers.update(publisher)
        self._commit()
        logger.info("Publisher %s updated", publisher_id)
        return publisher

    @service_operation("delete publisher")
    def delete_publisher(self, publisher_id: int) -> None:
        publisher = self._require_publisher(publisher_id)
        if self._books.find_by_publisher(publisher_id):
            raise InvariantViolation(
                "PUBLISHER_HAS_BOOKS", "publisher has books", field="id", value=publisher_id
            )
        self._publishers.delete(publisher)
        self._commit()
        logger.info("Publisher %s deleted", publisher_id)

    @service_operation("get publisher")
    def get_publisher(self, publisher_id: int) -> Publisher:
        return self._require_publisher(publisher_id)

    @service_operation("list publishers")
    def list_publishers(self) -> List[Publisher]:
        return self._publishers.find_all()

    @service_operation("search publishers")
    def search_publishers(self, name: str) -> List[Publisher]:
        if not name or not name.strip():
            raise ValidationError("name is required", field="name")
        return self._publishers.search_by_name(name)

    @service_operation("get publisher books")
    def get_publisher_books(self, publisher_id: int) -> List[Book]:
        self._require_publisher(publisher_id)
        return self._books.find_by_publisher(publisher_id)
