"""Authentication schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

# Required-ness is checked by the auth service so that missing fields
# come back as 400 rather than a validation error.


class UserRegister(BaseModel):
    """User registration request."""

    name: str | None = Field(None, max_length=255)
    email: EmailStr | None = None
    password: str | None = Field(None, max_length=128)

    @field_validator("email", mode="before")
    @classmethod
    def blank_email_is_missing(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class UserLogin(BaseModel):
    """User login request."""

    email: str | None = Field(None, max_length=255)
    password: str | None = Field(None, max_length=128)


class UserResponse(BaseModel):
    """User information response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    created_at: datetime
    updated_at: datetime


class AuthResponse(BaseModel):
    """Authentication response with token and user info."""

    model_config = ConfigDict(from_attributes=True)

    user: UserResponse
    token: str
    token_type: str = "bearer"  # noqa: S105
    expires_at: datetime


class UserUpdate(BaseModel):
    """Update a user; omitted fields are left unchanged."""

    name: str | None = Field(None, min_length=1, max_length=255)
    email: EmailStr | None = None
    password: str | None = Field(None, max_length=128)


class MessageResponse(BaseModel):
    message: str
