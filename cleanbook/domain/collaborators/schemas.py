"""Collaborator domain schemas - Pydantic models for validation"""

from typing import Optional

from pydantic import BaseModel, field_validator

from ...shared.validators import validate_email, validate_phone
from ..enums import CollaboratorLevel

MIN_PASSWORD_LENGTH = 4


class CollaboratorUpdate(BaseModel):
    """Schema for a collaborator editing their own profile"""

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    photo: Optional[str] = None

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v):
        if v:
            return validate_phone(v)
        return v

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        if v:
            return validate_email(v)
        return v


class PasswordChangeRequest(BaseModel):
    current: str
    new: str
    confirm: str

    @field_validator("new")
    @classmethod
    def validate_length(cls, v):
        if len(v) < MIN_PASSWORD_LENGTH:
            raise ValueError(f"New password must have at least {MIN_PASSWORD_LENGTH} characters")
        return v


class CollaboratorResponse(BaseModel):
    id: str
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    photo: Optional[str] = None
    level: CollaboratorLevel
