from marshmallow import Schema, fields

from models.schemas.common import MAX_KEY_LENGTH, StrippedSchema, bounded


class AuthorUpdateSchema(StrippedSchema):
    name = fields.String(required=True, validate=bounded())
    address = fields.String(required=True, validate=bounded())


class AuthorCreateSchema(AuthorUpdateSchema):
    rg = fields.String(required=True, validate=bounded(MAX_KEY_LENGTH))


class AuthorOutSchema(Schema):
    rg = fields.String()
    name = fields.String()
    address = fields.String()
    created_at = fields.DateTime()
    updated_at = fields.DateTime()
