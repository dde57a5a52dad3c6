"""Internal constants shared across the library."""

BASE_URL = "http://localhost:3000"
SERVICES_ENDPOINT = "/api/uslugi"
USER_AGENT = "pycatalog/1"

# Wire field names used by the remote catalog.
FIELD_NAME = "nazwa"
FIELD_PRICE = "cena"

DEFAULT_LOCALE = "pl"
DEFAULT_CURRENCY_SUFFIX = "zł"
PRICE_PLACEHOLDER = "-"

ROWS_PER_PAGE_OPTIONS: tuple[int, ...] = (10, 25, 50)
DEFAULT_ROWS_PER_PAGE = 10
