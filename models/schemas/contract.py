from marshmallow import Schema, fields, validate

from models.schemas.common import StrippedSchema, bounded


class ContractUpdateSchema(StrippedSchema):
    # NaN and infinity are rejected by the field itself (allow_nan defaults to False)
    value = fields.Decimal(
        required=True,
        places=2,
        validate=validate.Range(min=0, min_inclusive=False, error="value must be > 0."),
    )
    responsible = fields.String(required=True, validate=bounded())
    company_id = fields.Integer(required=True)


class ContractCreateSchema(ContractUpdateSchema):
    pass


class ContractOutSchema(Schema):
    id = fields.Integer()
    value = fields.Decimal(as_string=True, places=2)
    responsible = fields.String()
    company_id = fields.Integer()
    created_at = fields.DateTime()
    updated_at = fields.DateTime()


class ContractValueAnalysisOutSchema(Schema):
    total_contracts = fields.Integer()
    total_value = fields.Decimal(as_string=True, places=2)
    average_value = fields.Decimal(as_string=True, places=2)
    min_value = fields.Decimal(as_string=True, places=2)
    max_value = fields.Decimal(as_string=True, places=2)
