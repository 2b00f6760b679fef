"""
Pydantic schemas for the Member resource.

`MemberCreate` holds the structural rules for a registration submission. Each
field declares its own constraints, and `FieldValidator` turns pydantic's
errors into per-field messages. `MemberRead` is the response shape for the
listing/lookup endpoints.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from member_registry.validators.config_validators import blank_to_none, to_lowercase

NAME_MIN_LENGTH = 1
NAME_MAX_LENGTH = 25
PHONE_MIN_LENGTH = 10
PHONE_MAX_LENGTH = 12


class MemberCreate(BaseModel):
    """A candidate Member as submitted to POST /members."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    name: str = Field(
        min_length=NAME_MIN_LENGTH,
        max_length=NAME_MAX_LENGTH,
        pattern=r"^[^0-9]*$",
    )
    email: EmailStr
    phone: str | None = Field(
        default=None,
        min_length=PHONE_MIN_LENGTH,
        max_length=PHONE_MAX_LENGTH,
        pattern=r"^[0-9]+$",
    )

    @field_validator("phone", mode="before")
    @classmethod
    def _blank_phone_is_absent(cls, v):
        return blank_to_none(v)

    @field_validator("email", mode="before")
    @classmethod
    def _bare_address_only(cls, v):
        # EmailStr would accept "Name <addr>" and drop the display name
        if isinstance(v, str) and ("<" in v or ">" in v):
            raise ValueError("display-name form is not accepted")
        return v

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, v: str) -> str:
        # stored and looked up lower-cased so case variants collide
        return to_lowercase(v)


class MemberRead(BaseModel):
    """A persisted Member as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    phone: str | None = None
