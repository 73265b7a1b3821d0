"""Request/response models for the user's contact identity."""

from typing import Optional

from pydantic import BaseModel, field_validator


class ContactIdentity(BaseModel):
    """Details shared with brokers of boats the user likes."""

    name: str
    email: str
    phone: str = ""

    @field_validator("name", "email")
    @classmethod
    def not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v


class ContactResponse(BaseModel):
    user_id: str
    contact: Optional[ContactIdentity] = None
