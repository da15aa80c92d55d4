"""Oracle Schemas — Pydantic models for the oracle request/response boundary.

Invariants:
    - OraclePayload.name and .icon are stripped and non-empty
    - Inner whitespace of name collapsed to single spaces
    - Length bounds are applied by validate_oracle_payload (configurable)
"""

from pydantic import BaseModel, Field, field_validator


class OracleRequest(BaseModel):
    """Names of the two elements being mixed."""
    element_a_name: str = Field(min_length=1)
    element_b_name: str = Field(min_length=1)


class OraclePayload(BaseModel):
    """Structured element proposal returned by the oracle."""
    name: str
    icon: str

    @field_validator("name")
    @classmethod
    def clean_name(cls, v: str) -> str:
        v = " ".join(v.split())
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v

    @field_validator("icon")
    @classmethod
    def clean_icon(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("icon cannot be empty or whitespace")
        return v
