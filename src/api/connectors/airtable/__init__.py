"""Conector Airtable: único ponto de IO com a API REST do Airtable."""

from .errors import (
    FIELD_REJECTION_TYPES,
    AirtableApiError,
    AirtableRejectionError,
    parse_airtable_error,
)
from .http_client import AirtableHttpClient, create_airtable_http_client

__all__ = [
    "FIELD_REJECTION_TYPES",
    "AirtableApiError",
    "AirtableHttpClient",
    "AirtableRejectionError",
    "create_airtable_http_client",
    "parse_airtable_error",
]
