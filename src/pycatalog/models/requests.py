"""Pydantic request models for client and table entrypoints.

These models provide a consistent "validate → normalize → execute" flow.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pycatalog.models._base import ServiceId


class ServiceRef(BaseModel):
    """Request addressing a single service by id."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_default=True,
        str_strip_whitespace=True,
    )

    id: ServiceId

    @field_validator("id")
    @classmethod
    def _id_non_empty(cls, value: ServiceId) -> ServiceId:
        if isinstance(value, str):
            value = value.strip()
            if not value:
                raise ValueError("service id must be non-empty")
        return value


class PageRequest(BaseModel):
    """Search text plus pagination window."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    query: str = ""
    page: int = Field(default=0, ge=0)
    page_size: int = Field(default=10, ge=1)
