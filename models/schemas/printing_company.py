from marshmallow import Schema, fields

from models.schemas.common import StrippedSchema, bounded


class PrintingCompanySchema(StrippedSchema):
    name = fields.String(required=True, validate=bounded())


class ContractedAddressSchema(StrippedSchema):
    address = fields.String(required=True, validate=bounded())


class PrintingCompanyCreateSchema(StrippedSchema):
    """HTTP payload; the service decides what the address means for each kind."""
    name = fields.String(required=True)
    is_private = fields.Boolean(required=True)
    address = fields.String(allow_none=True, load_default=None)


class PrintingCompanyOutSchema(Schema):
    id = fields.Integer()
    name = fields.String()
    kind = fields.String()
    address = fields.Method("get_address")
    created_at = fields.DateTime()
    updated_at = fields.DateTime()

    def get_address(self, obj):
        return getattr(obj, "address", None)
