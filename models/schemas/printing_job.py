from marshmallow import Schema, fields, validate, validates

from models.schemas.common import (
    MAX_INT,
    MAX_KEY_LENGTH,
    DateTimeField,
    StrippedSchema,
    bounded,
    validate_not_past,
)


class PrintingJobUpdateSchema(StrippedSchema):
    copies = fields.Integer(
        required=True, validate=validate.Range(min=1, max=MAX_INT, error="copies must be between 1 and {max}.")
    )
    delivery_date = DateTimeField(required=True)


class PrintingJobCreateSchema(PrintingJobUpdateSchema):
    isbn = fields.String(required=True, validate=bounded(MAX_KEY_LENGTH))
    company_id = fields.Integer(required=True)

    @validates("delivery_date")
    def _validate_delivery_date(self, value, **kwargs):
        validate_not_past(value)


class PrintingJobOutSchema(Schema):
    isbn = fields.String()
    company_id = fields.Integer()
    copies = fields.Integer()
    delivery_date = fields.DateTime()
    status = fields.Method("get_status")
    label = fields.Method("get_label")
    days_until_delivery = fields.Method("get_days_until_delivery")

    def get_status(self, obj):
        return obj.status().value

    def get_label(self, obj):
        return obj.label()

    def get_days_until_delivery(self, obj):
        return obj.days_until_delivery()


class PrintingStatisticsOutSchema(Schema):
    period = fields.String()
    total_jobs = fields.Integer()
    total_copies = fields.Integer()
    most_active_company_id = fields.Integer(allow_none=True)
    overdue_jobs = fields.Integer()
    pending_jobs = fields.Integer()
    urgent_jobs = fields.Integer()
