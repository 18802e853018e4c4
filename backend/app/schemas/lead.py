"""Lead Schemas - contact-form submission contract.

Invariants:
    - LeadCreate.name and LeadCreate.email: strings, stripped, non-empty
    - LeadCreate.message: optional string, stored as given
    - No email format check beyond presence
"""

from pydantic import BaseModel, StrictStr, field_validator


class LeadCreate(BaseModel):
    """Lead submission body."""
    name: StrictStr
    email: StrictStr
    message: StrictStr | None = None

    @field_validator("name", "email")
    @classmethod
    def strip_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("cannot be empty or whitespace")
        return v


class LeadCreated(BaseModel):
    """Lead creation response."""
    id: int
