from marshmallow import EXCLUDE, Schema, fields, validate, validates, validates_schema, ValidationError, post_load

from models.schemas.common import to_positive_decimal_2, validate_not_blank


class EntryBaseSchema(Schema):
    # user_id is deliberately absent: unknown fields are rejected, owners come from the token
    title = fields.String(required=True, validate=[validate.Length(min=1, max=100), validate_not_blank])
    category = fields.String(allow_none=True, load_default=None, validate=validate.Length(max=50))
    amount = fields.Decimal(required=True)
    note = fields.String(allow_none=True, load_default=None)

    @validates("amount")
    def _validate_amount(self, value, **kwargs):
        to_positive_decimal_2(value)

    @post_load
    def _quantize_amount(self, data, **kwargs):
        data["amount"] = to_positive_decimal_2(data["amount"])
        return data


class ExpenseSchema(EntryBaseSchema):
    expense_date = fields.Date(required=True)


class IncomeSchema(EntryBaseSchema):
    income_date = fields.Date(required=True)


class EntryOutBaseSchema(Schema):
    id = fields.Integer()
    title = fields.String()
    category = fields.String(allow_none=True)
    amount = fields.Decimal(as_string=True, places=2)
    note = fields.String(allow_none=True)
    created_at = fields.DateTime(format="%Y-%m-%dT%H:%M:%S")
    username = fields.Function(lambda obj: obj.user.username if obj.user else None)


class ExpenseOutSchema(EntryOutBaseSchema):
    expense_date = fields.Date()


class IncomeOutSchema(EntryOutBaseSchema):
    income_date = fields.Date()


class DateRangeSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    start_date = fields.Date(required=True)
    end_date = fields.Date(required=True)

    @validates_schema
    def _validate_order(self, data, **kwargs):
        if data["start_date"] > data["end_date"]:
            raise ValidationError("start_date must be on or before end_date.", "start_date")
