"""
Authentication blueprint:
- POST /auth/register
- POST /auth/login
- POST /auth/refresh
- POST /auth/logout
- GET  /auth/me
- PUT  /auth/update

The implementation:
- Uses argon2 for password hashing (via utils.security)
- Issues stateless access tokens (JWT, 24h by default) and one opaque refresh token per
  user, stored in the refresh_tokens table (7 days by default)
- Refresh does not rotate the refresh token; login does
"""
from __future__ import annotations

from flask import Blueprint, request, jsonify

from models.schemas.user import (
    RegisterSchema,
    LoginSchema,
    RefreshSchema,
    UpdateProfileSchema,
    UserOutSchema,
    AuthTokenOutSchema,
)
from services.auth_service import get_auth_gateway
from utils.decorators import login_required

bp = Blueprint("auth", __name__)

register_schema = RegisterSchema()
login_schema = LoginSchema()
refresh_schema = RefreshSchema()
update_profile_schema = UpdateProfileSchema()
user_out_schema = UserOutSchema()
auth_token_out_schema = AuthTokenOutSchema()


def _json_body() -> dict:
    return request.get_json(silent=True) or {}


@bp.post("/register")
def register():
    """
    Register a new user. No tokens are issued; call /auth/login afterwards.
    ---
    tags:
      - Auth
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        schema:
          type: object
          required: [username, email, password]
          properties:
            username: { type: string, minLength: 3, maxLength: 50 }
            email: { type: string }
            password: { type: string, minLength: 8 }
    responses:
      201:
        description: Created
      409:
        description: Username or email already taken
      422:
        description: Validation error
    """
    data = register_schema.load(_json_body())
    user = get_auth_gateway().register(data["username"], data["email"], data["password"])
    return jsonify(
        {
            "message": "User registered successfully!",
            "data": user_out_schema.dump(user),
        }
    ), 201


@bp.post("/login")
def login():
    """
    Login: return access_token, refresh_token and the user's public fields
    ---
    tags:
      - Auth
    consumes:
      - application/json
    parameters:
      -  in: body
         name: body
         schema:
           type: object
           properties:
             username: { type: string }
             password: { type: string }
    responses:
      200:
        description: OK (returns tokens)
      401:
        description: Invalid username or password
    """
    data = login_schema.load(_json_body())
    result = get_auth_gateway().login(data["username"], data["password"])
    return jsonify(auth_token_out_schema.dump(result)), 200


@bp.post("/refresh")
def refresh():
    """
    Exchange a refresh token for a new access token (the refresh token is returned unchanged)
    ---
    tags:
      - Auth
    consumes:
      - application/json
    parameters:
      -  in: body
         name: body
         schema:
           type: object
           properties:
             refresh_token: { type: string }
    responses:
      200:
        description: OK (returns a new access token)
      401:
        description: Refresh token expired
      404:
        description: Refresh token not found
    """
    data = refresh_schema.load(_json_body())
    result = get_auth_gateway().refresh(data["refresh_token"])
    return jsonify(auth_token_out_schema.dump(result)), 200


@bp.post("/logout")
@login_required()
def logout(principal):
    """
    Logout: deletes the caller's refresh token. Issued access tokens stay valid until they expire.
    ---
    tags:
      - Auth
    security:
      - Bearer: []
    responses:
      200:
        description: Logged out
      401:
        description: Unauthorized
    """
    get_auth_gateway().logout(principal.id)
    return jsonify({"message": "User logged out successfully!"}), 200


@bp.get("/me")
@login_required()
def me(principal):
    """
    Get current user info
    ---
    tags:
      - Auth
    security:
      - Bearer: []
    responses:
      200:
        description: OK
      401:
        description: Unauthorized
    """
    return jsonify(principal.to_dict()), 200


@bp.put("/update")
@login_required()
def update_profile(principal):
    """
    Update the caller's username and email
    ---
    tags:
      - Auth
    security:
      - Bearer: []
    consumes:
      - application/json
    parameters:
      -  in: body
         name: body
         schema:
           type: object
           properties:
             username: { type: string }
             email: { type: string }
    responses:
      200:
        description: Updated
      401:
        description: Unauthorized
      409:
        description: Username or email already taken
    """
    data = update_profile_schema.load(_json_body())
    user = get_auth_gateway().update_profile(principal.id, data["username"], data["email"])
    return jsonify(
        {
            "message": "User profile updated successfully!",
            "data": user_out_schema.dump(user),
        }
    ), 200
