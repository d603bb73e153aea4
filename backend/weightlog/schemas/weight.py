"""Weight Schemas — Pydantic request/response models for the weights API.

Invariants:
    - weight: finite number > 0; JSON strings and booleans are rejected, not coerced
    - date: non-empty YYYY-MM-DD naming a real day
    - id: integer; booleans and floats rejected
    - WeightDelete needs either deleteAll=true or an id

Design Decisions:
    - mode="before" validators reuse core/enforce_entries checks on the raw JSON
      value, so the HTTP boundary and the handler layer share one rule set
    - deleteAll is strict: only JSON true triggers a bulk clear
"""

from datetime import datetime

from pydantic import (
    BaseModel, ConfigDict, Field, field_validator, model_validator,
)

from weightlog.core.enforce_entries import (
    validate_entry_date, validate_entry_id, validate_weight,
)


def _checked(check, value):
    error = check(value)
    if error:
        raise ValueError(error)
    return value


class WeightCreate(BaseModel):
    """POST body — record a weight for a date."""
    weight: float
    date: str

    @field_validator("weight", mode="before")
    @classmethod
    def check_weight(cls, v):
        return _checked(validate_weight, v)

    @field_validator("date", mode="before")
    @classmethod
    def check_date(cls, v):
        return _checked(validate_entry_date, v)


class WeightUpdate(BaseModel):
    """PUT body — change the weight of an existing entry."""
    id: int
    weight: float

    @field_validator("id", mode="before")
    @classmethod
    def check_id(cls, v):
        return _checked(validate_entry_id, v)

    @field_validator("weight", mode="before")
    @classmethod
    def check_weight(cls, v):
        return _checked(validate_weight, v)


class WeightDelete(BaseModel):
    """DELETE body — one entry by id, or every entry with deleteAll."""
    model_config = ConfigDict(populate_by_name=True)

    id: int | None = None
    delete_all: bool = Field(False, alias="deleteAll", strict=True)

    @field_validator("id", mode="before")
    @classmethod
    def check_id(cls, v):
        if v is None:
            return v
        return _checked(validate_entry_id, v)

    @model_validator(mode="after")
    def require_target(self):
        if not self.delete_all and self.id is None:
            raise ValueError("ID must be a valid number")
        return self


class WeightEntryResponse(BaseModel):
    """Public entry shape used by list responses."""
    id: int
    weight: float
    date: str


class WeightEntryDetail(WeightEntryResponse):
    """Entry with its creation timestamp."""
    created_at: datetime | None = None
