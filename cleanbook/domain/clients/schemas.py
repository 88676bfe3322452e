"""Client domain schemas - Pydantic models for validation"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from ...shared.validators import validate_email, validate_phone


class ClientUpdate(BaseModel):
    """Schema for a client editing their own profile"""

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


class ClientResponse(BaseModel):
    """Schema for client response"""

    id: str
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    photo: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
