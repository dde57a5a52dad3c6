"""Client configuration for pycatalog."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pycatalog._constants import (
    BASE_URL,
    DEFAULT_CURRENCY_SUFFIX,
    DEFAULT_LOCALE,
    DEFAULT_ROWS_PER_PAGE,
    PRICE_PLACEHOLDER,
    ROWS_PER_PAGE_OPTIONS,
    SERVICES_ENDPOINT,
)
from pycatalog.exceptions import CatalogConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_int_tuple(value: str) -> tuple[int, ...]:
    try:
        return tuple(int(part) for part in value.split(",") if part.strip())
    except ValueError as exc:
        raise CatalogConfigError(f"Invalid integer list: {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class CatalogConfig:
    """Client configuration.

    Parameters
    ----------
    base_url : str
        Root URL of the catalog backend, without a trailing slash.
    services_endpoint : str
        Path of the services collection (``GET``/``POST``), item paths are
        ``{services_endpoint}/{id}``.
    locale : str
        Locale used for name collation (``"pl"`` orders Polish diacritics
        after their base letters).
    currency_suffix : str
        Suffix appended to formatted prices (``"30.00 zł"``).
    price_placeholder : str
        Glyph rendered when a service has no price.
    rows_per_page : int
        Initial page size for the services table.
    rows_per_page_options : tuple of int
        Page sizes a user may pick from.
    request_timeout : float
        Total timeout per remote call in seconds.  ``0`` disables it.
    api_token : str or None
        Optional bearer token sent as ``Authorization`` header.
    api_trace_enabled : bool
        Log every request and response body at DEBUG level (redacted).
    """

    base_url: str = BASE_URL
    services_endpoint: str = SERVICES_ENDPOINT
    locale: str = DEFAULT_LOCALE
    currency_suffix: str = DEFAULT_CURRENCY_SUFFIX
    price_placeholder: str = PRICE_PLACEHOLDER
    rows_per_page: int = DEFAULT_ROWS_PER_PAGE
    rows_per_page_options: tuple[int, ...] = ROWS_PER_PAGE_OPTIONS
    request_timeout: float = 30.0
    api_token: str | None = None
    api_trace_enabled: bool = False

    def __post_init__(self) -> None:
        if not self.rows_per_page_options or any(size < 1 for size in self.rows_per_page_options):
            raise CatalogConfigError("rows_per_page_options must contain positive page sizes")
        if self.rows_per_page not in self.rows_per_page_options:
            raise CatalogConfigError(
                f"rows_per_page={self.rows_per_page} is not one of {self.rows_per_page_options}"
            )
        if self.request_timeout < 0:
            raise CatalogConfigError("request_timeout must be >= 0")
        # Normalise so URL joins never produce a double slash.
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    @classmethod
    def from_env(cls, **overrides: Any) -> CatalogConfig:
        """Create configuration from environment variables.

        Reads optional ``CATALOG_*`` variables. Explicit keyword arguments
        override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        CatalogConfig
            Populated configuration.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "CATALOG_BASE_URL": "base_url",
            "CATALOG_SERVICES_ENDPOINT": "services_endpoint",
            "CATALOG_LOCALE": "locale",
            "CATALOG_CURRENCY_SUFFIX": "currency_suffix",
            "CATALOG_PRICE_PLACEHOLDER": "price_placeholder",
            "CATALOG_API_TOKEN": "api_token",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        rows_env = env.get("CATALOG_ROWS_PER_PAGE")
        if rows_env is not None and "rows_per_page" not in overrides:
            config_kwargs["rows_per_page"] = int(rows_env)

        options_env = env.get("CATALOG_ROWS_PER_PAGE_OPTIONS")
        if options_env is not None and "rows_per_page_options" not in overrides:
            config_kwargs["rows_per_page_options"] = _env_int_tuple(options_env)

        timeout_env = env.get("CATALOG_REQUEST_TIMEOUT")
        if timeout_env is not None and "request_timeout" not in overrides:
            config_kwargs["request_timeout"] = float(timeout_env)

        if "api_trace_enabled" not in overrides:
            config_kwargs["api_trace_enabled"] = _env_bool(
                env.get("CATALOG_API_TRACE_ENABLED"),
                False,
            )

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
