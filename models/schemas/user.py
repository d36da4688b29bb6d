from marshmallow import Schema, fields, pre_load, validate

from models.schemas.common import normalize_email, validate_not_blank

USERNAME_LENGTH = validate.Length(min=3, max=50)
PASSWORD_LENGTH = validate.Length(min=8, max=128, error="Password must be at least 8 characters long.")


class _EmailNormalizingSchema(Schema):
    @pre_load
    def normalize(self, data, **kwargs):
        if isinstance(data, dict) and "email" in data:
            data = dict(data, email=normalize_email(data["email"]))
        if isinstance(data, dict) and isinstance(data.get("username"), str):
            data = dict(data, username=data["username"].strip())
        return data


class RegisterSchema(_EmailNormalizingSchema):
    username = fields.String(required=True, validate=USERNAME_LENGTH)
    email = fields.Email(required=True, validate=validate.Length(max=255))
    password = fields.String(required=True, load_only=True, validate=PASSWORD_LENGTH)


class LoginSchema(Schema):
    username = fields.String(required=True, validate=validate_not_blank)
    password = fields.String(required=True, load_only=True, validate=validate_not_blank)

    @pre_load
    def strip_username(self, data, **kwargs):
        if isinstance(data, dict) and isinstance(data.get("username"), str):
            data = dict(data, username=data["username"].strip())
        return data


class RefreshSchema(Schema):
    refresh_token = fields.String(required=True, validate=validate_not_blank)


class UpdateProfileSchema(_EmailNormalizingSchema):
    username = fields.String(required=True, validate=USERNAME_LENGTH)
    email = fields.Email(required=True, validate=validate.Length(max=255))


class UserOutSchema(Schema):
    id = fields.Integer()
    username = fields.String()
    email = fields.String()
    created_at = fields.DateTime(format="%Y-%m-%dT%H:%M:%S")


class AuthTokenOutSchema(Schema):
    """Login / refresh response body."""
    access_token = fields.String()
    token_type = fields.Constant("Bearer")
    refresh_token = fields.String()
    expires_in = fields.Integer()
    id = fields.Function(lambda result: result.user.id)
    username = fields.Function(lambda result: result.user.username)
    email = fields.Function(lambda result: result.user.email)
    created_at = fields.Function(lambda result: result.user.created_at.strftime("%Y-%m-%dT%H:%M:%S"))
