"""Pydantic request/response schemas for the Identity API."""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- Request Schemas ---


class RegisterRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Alice",
                    "email": "alice@example.com",
                    "password": "s3cret!",
                }
            ]
        }
    }

    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., max_length=254)
    password: str = Field(..., min_length=6, max_length=72)


class LoginRequest(BaseModel):
    email: str = Field(..., max_length=254)
    password: str = Field(..., min_length=1, max_length=72)


# --- Response Schemas ---


class UserSchema(BaseModel):
    id: str
    name: str
    email: str


class TokenResponse(BaseModel):
    token: str
    user: UserSchema


class MeResponse(BaseModel):
    user: UserSchema
