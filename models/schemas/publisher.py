from marshmallow import Schema, fields

from models.schemas.common import StrippedSchema, bounded


class PublisherCreateSchema(StrippedSchema):
    name = fields.String(required=True, validate=bounded())
    address = fields.String(required=True, validate=bounded())


class PublisherUpdateSchema(PublisherCreateSchema):
    pass


class PublisherOutSchema(Schema):
    id = fields.Integer()
    name = fields.String()
    address = fields.String()
    created_at = fields.DateTime()
    updated_at = fields.DateTime()
