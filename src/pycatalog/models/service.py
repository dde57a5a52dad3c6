"""Service record and edit draft models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pycatalog._constants import DEFAULT_CURRENCY_SUFFIX, FIELD_NAME, FIELD_PRICE, PRICE_PLACEHOLDER
from pycatalog.models._base import CatalogBaseModel, Price, ServiceId, format_price


class Service(CatalogBaseModel):
    """A catalog entry as returned by the backend.

    Parameters
    ----------
    id : int or str
        Identifier assigned by the backend; stable for the record's lifetime.
    name : str
        Display name (wire key ``nazwa``).
    price : Decimal or None
        Price (wire key ``cena``); ``None`` when no price is set or the
        backend sent something that is not a number.
    """

    id: ServiceId
    name: str = Field(default="", alias=FIELD_NAME)
    price: Price = Field(default=None, alias=FIELD_PRICE)

    @field_validator("id")
    @classmethod
    def _id_not_blank(cls, value: ServiceId) -> ServiceId:
        if isinstance(value, str) and not value.strip():
            raise ValueError("service id must not be blank")
        return value

    def display_price(
        self,
        suffix: str = DEFAULT_CURRENCY_SUFFIX,
        placeholder: str = PRICE_PLACEHOLDER,
    ) -> str:
        """Price label, e.g. ``"30.00 zł"`` or ``"-"``."""
        return format_price(self.price, suffix=suffix, placeholder=placeholder)


class ServiceDraft(BaseModel):
    """Unsaved field values for creating or editing a service."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
    )

    name: str = Field(default="", alias=FIELD_NAME)
    price: Price = Field(default=None, alias=FIELD_PRICE)

    @classmethod
    def from_service(cls, service: Service) -> ServiceDraft:
        return cls(name=service.name, price=service.price)

    def merge(self, **fields: Any) -> ServiceDraft:
        """Return a copy with *fields* replaced and every other field kept.

        Values are validated, so ``merge(price="12,50")`` stores
        ``Decimal("12.50")`` and ``merge(price="")`` clears the price.
        """
        current = self.model_dump()
        current.update(fields)
        return type(self).model_validate(current)

    def to_payload(self) -> dict[str, Any]:
        """Wire body for create/update calls."""
        return {
            FIELD_NAME: self.name,
            FIELD_PRICE: float(self.price) if self.price is not None else None,
        }
