"""Pydantic schemas for authentication endpoints.

Request fields are optional so that missing values are reported by the
service as a 400 with the same message shape as every other auth error.
"""

from pydantic import BaseModel, Field


class RegisterRequest(BaseModel):
    name: str | None = None
    email: str | None = None
    password: str | None = None


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class ForgotPasswordRequest(BaseModel):
    email: str | None = None


class ResetPasswordRequest(BaseModel):
    model_config = {"populate_by_name": True}

    email: str | None = None
    token: str | int | None = None
    new_password: str | None = Field(default=None, alias="newPassword")


class UserResponse(BaseModel):
    id: int
    name: str
    email: str

    model_config = {"from_attributes": True}


class RegisterResponse(BaseModel):
    msg: str
    user: UserResponse


class LoginResponse(BaseModel):
    token: str
    user: UserResponse


class MessageResponse(BaseModel):
    msg: str
