"""Request models for the HTTP API."""

from pydantic import BaseModel, EmailStr, Field, field_validator

MIN_PASSWORD_LENGTH = 8


class SignupRequest(BaseModel):
    """Payload accepted by the signup endpoint."""

    username: str = Field(min_length=1, max_length=64)
    email: EmailStr
    password: str = Field(min_length=MIN_PASSWORD_LENGTH, max_length=128)

    @field_validator("username", mode="before")
    @classmethod
    def _strip_username(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value

    @field_validator("password")
    @classmethod
    def _check_strength(cls, value: str) -> str:
        if not any(char.isalpha() for char in value):
            raise ValueError("Password must contain at least one letter")
        if not any(char.isdigit() for char in value):
            raise ValueError("Password must contain at least one digit")
        return value


class SigninRequest(BaseModel):
    """Payload accepted by the signin endpoint."""

    email: EmailStr
    password: str = Field(min_length=1)


class CreateSessionRequest(BaseModel):
    """Payload accepted when creating a live session."""

    title: str = Field(min_length=1, max_length=200)

    @field_validator("title", mode="before")
    @classmethod
    def _strip_title(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value
