"""API client for the BluOS HTTP/XML interface."""

from bluectl.api.client import BluOSClient
from bluectl.api.document import DocumentNode, parse_document
from bluectl.api.protocol import (
    BluOSError,
    ConfigError,
    NetworkError,
    NotFoundError,
    ParseError,
    RequestTimeoutError,
    ToolNotFoundError,
)
from bluectl.api.query import query_all, query_first
from bluectl.api.transport import Transport

__all__ = [
    "BluOSClient",
    "BluOSError",
    "ConfigError",
    "DocumentNode",
    "NetworkError",
    "NotFoundError",
    "ParseError",
    "RequestTimeoutError",
    "ToolNotFoundError",
    "Transport",
    "parse_document",
    "query_all",
    "query_first",
]
