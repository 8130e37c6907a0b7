"""
Send a query to ClickHouse over HTTP and parse the TabSeparated reply.
"""

from .config import Config, load_config
from .errors import (
    ClickHouseQueryError,
    ConfigError,
    MalformedRowError,
    TransportError,
)
from .helper import ClickHouseHelper, create_helper
from .log import configure_logging
from .parser import ParsedResult, ScalarResult, TableResult, parse_result
from .transport import AsyncHTTPTransport, HTTPTransport, QueryResponse

__all__ = [
    "AsyncHTTPTransport",
    "ClickHouseHelper",
    "ClickHouseQueryError",
    "Config",
    "ConfigError",
    "HTTPTransport",
    "MalformedRowError",
    "ParsedResult",
    "QueryResponse",
    "ScalarResult",
    "TableResult",
    "TransportError",
    "configure_logging",
    "create_helper",
    "load_config",
    "parse_result",
]
