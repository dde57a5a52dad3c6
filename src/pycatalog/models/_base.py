"""Base model and shared field types for catalog records.

Every record model inherits from :class:`CatalogBaseModel` which provides:

* ``populate_by_name`` so wire aliases (``nazwa``/``cena``) and Python
  field names are both accepted.
* A ``model_validator(mode="before")`` that drops ``None`` and NaN so the
  field default is used. Strings are kept as sent.
* A ``raw`` dict that captures the original payload.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator

_CENTS = Decimal("0.01")

ServiceId = int | str
"""Opaque record identifier assigned by the remote store."""


def parse_price(value: Any) -> Decimal | None:
    """Coerce a wire price to :class:`~decimal.Decimal`.

    Accepts numbers and numeric strings (a comma decimal separator is
    allowed). Anything that is not a finite number becomes ``None``,
    which the rest of the library treats as "no price set".
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value if value.is_finite() else None
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        return Decimal(str(value))
    if isinstance(value, str):
        text = value.strip().replace(",", ".")
        if not text:
            return None
        try:
            parsed = Decimal(text)
        except InvalidOperation:
            return None
        return parsed if parsed.is_finite() else None
    return None


Price = Annotated[Decimal | None, BeforeValidator(parse_price)]
"""Annotated type that coerces wire prices and maps garbage to ``None``."""


def format_price(price: Any, *, suffix: str = "zł", placeholder: str = "-") -> str:
    """Render *price* with two decimals and a currency suffix.

    >>> format_price(30, suffix="zł")
    '30.00 zł'
    >>> format_price(None)
    '-'
    """
    amount = parse_price(price)
    if amount is None:
        return placeholder
    text = str(amount.quantize(_CENTS, rounding=ROUND_HALF_UP))
    return f"{text} {suffix}" if suffix else text


class CatalogBaseModel(BaseModel):
    """Base for records returned by the catalog backend.

    Handles:
    * wire alias / field name population
    * ``None`` and NaN values → dropped so the field default is used
    * Stashes the original payload in ``raw``
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    raw: dict[str, Any] = Field(default_factory=dict, exclude=True, repr=False)
    """Original API response dict."""

    @model_validator(mode="before")
    @classmethod
    def _clean_values(cls, values: Any) -> Any:
        """Drop null values and stash the raw payload."""
        if not isinstance(values, dict):
            return values
        original = dict(values)

        cleaned: dict[str, Any] = {}
        for key, value in original.items():
            if value is None:
                continue
            if isinstance(value, float) and math.isnan(value):
                continue
            cleaned[key] = value

        # Only auto-stash raw when not explicitly provided (i.e. model_validate
        # from an API dict).
        if "raw" not in values:
            cleaned["raw"] = original
        return cleaned
