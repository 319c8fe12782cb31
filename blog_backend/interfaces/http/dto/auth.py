from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class RegisterRequestDTO(BaseModel):
    username: str = Field(min_length=4, max_length=64)
    password: str = Field(min_length=8, max_length=128)

    @field_validator("username", mode="before")
    @classmethod
    def strip_username(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value


class LoginRequestDTO(BaseModel):
    username: str = Field(min_length=1, max_length=64)
    password: str = Field(min_length=1, max_length=128)  # No length policy on login

    @field_validator("username", mode="before")
    @classmethod
    def strip_username(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value


class PublicUserDTO(BaseModel):
    id: int
    username: str


class RegisterResponseDTO(BaseModel):
    user: PublicUserDTO


class LoginResponseDTO(BaseModel):
    message: str = "Login successful!"
    user: PublicUserDTO


class ProfileDTO(BaseModel):
    id: int
    username: str
    iat: int
    exp: int


class LogoutResponseDTO(BaseModel):
    message: str = "Logged out successfully"
