from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

from aichat.application.services.password_hashing import MAX_PASSWORD_BYTES
from aichat.domain.users.entities import normalize_email


class CredentialsDTO(BaseModel):
    email: str
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def normalize(cls, value: str) -> str:
        value = normalize_email(value)
        if not value:
            raise PydanticCustomError("missing", "Email cannot be empty", {})
        return value


class RegisterRequestDTO(CredentialsDTO):
    @field_validator("password")
    @classmethod
    def validate_length(cls, value: str) -> str:
        if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise PydanticCustomError(
                "password_too_long",
                "Password must be at most {max_bytes} bytes",
                {"max_bytes": MAX_PASSWORD_BYTES},
            )
        return value


class LoginRequestDTO(CredentialsDTO):
    pass


class UserDTO(BaseModel):
    """Public projection of a user; the password hash never leaves the domain."""

    id: str
    email: str
    credits: int
    is_premium: bool = Field(serialization_alias="isPremium")

    model_config = ConfigDict(from_attributes=True)


class UserEnvelopeDTO(BaseModel):
    user: UserDTO

    def payload(self) -> dict:
        return self.model_dump(by_alias=True)


class MessageDTO(BaseModel):
    message: str
