# /app/schemas/auth.py
from pydantic import BaseModel, EmailStr, Field
from typing import Optional


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class PasswordUpdateRequest(BaseModel):
    old_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6)


class MessageResponse(BaseModel):
    message: str


class OAuthLoginResponse(BaseModel):
    success: bool
    role: str
    userId: str
    email: str
    full_name: Optional[str]
    message: str
    redirect: str


class SessionInfoResponse(BaseModel):
    success: bool
    userId: str
    role: str
    email: str


class BulkCreateResponse(BaseModel):
    inserted: list[str]
    skipped: list[str]
    rejected: list[str]
