from marshmallow import Schema, fields, validates

from models.schemas.common import (
    MAX_KEY_LENGTH,
    DateField,
    StrippedSchema,
    bounded,
    validate_not_future,
)
from models.schemas.author import AuthorOutSchema


class BookUpdateSchema(StrippedSchema):
    # Full replace: every mutable field is required
    title = fields.String(required=True, validate=bounded())
    published_date = DateField(required=True)
    publisher_id = fields.Integer(required=True)

    @validates("published_date")
    def _validate_published_date(self, value, **kwargs):
        validate_not_future(value)


class BookCreateSchema(BookUpdateSchema):
    isbn = fields.String(required=True, validate=bounded(MAX_KEY_LENGTH))


class BookOutSchema(Schema):
    isbn = fields.String()
    title = fields.String()
    published_date = fields.Date()
    publisher_id = fields.Integer()
    created_at = fields.DateTime()
    updated_at = fields.DateTime()


class BookWithAuthorsOutSchema(Schema):
    book = fields.Nested(BookOutSchema)
    authors = fields.List(fields.Nested(AuthorOutSchema))
