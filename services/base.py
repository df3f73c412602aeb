from __future__ import annotations

from marshmallow import Schema
from marshmallow import ValidationError as SchemaValidationError

from services.errors import ValidationError


def load_or_raise(schema: Schema, data) -> dict:
    """Run a marshmallow schema; field failures become a domain ValidationError."""
    try:
        return schema.load(data or {})
    except SchemaValidationError as err:
        raise ValidationError.from_messages(err.messages) from err


class Service:
    """Holds the storage commit boundary."""

    def __init__(self, storage):
        self._storage = storage

    def _commit(self) -> None:
        self._storage.save()
