"""
Query helper: sends one request to the backend and parses the reply.
"""
from typing import Sequence, Union

import structlog

from .config import Config
from .errors import TransportError
from .parser import ParsedResult, parse_result
from .transport import AsyncHTTPTransport, HTTPTransport, QueryResponse

logger = structlog.get_logger(__name__)


class ClickHouseHelper:
    """Send a query, parse the plain-text reply into rows or a scalar."""

    def __init__(self, transport: Union[HTTPTransport, AsyncHTTPTransport],
                 lenient_transport: bool = False, strict_rows: bool = False):
        """
        Args:
            transport: configured HTTPTransport (or AsyncHTTPTransport for aquery)
            lenient_transport: on request failure parse an empty reply
                instead of raising TransportError
            strict_rows: raise MalformedRowError on field/column count mismatch
        """
        self.transport = transport
        self.lenient_transport = lenient_transport
        self.strict_rows = strict_rows

    def query(self, request: str, is_table_result: bool,
              columns: Sequence[str] = ()) -> ParsedResult:
        """Run the request and return a TableResult or ScalarResult."""
        response = self.transport.send(request)
        return self._handle(response, is_table_result, columns)

    async def aquery(self, request: str, is_table_result: bool,
                     columns: Sequence[str] = ()) -> ParsedResult:
        if not isinstance(self.transport, AsyncHTTPTransport):
            raise TypeError("aquery requires an AsyncHTTPTransport")
        response = await self.transport.send(request)
        return self._handle(response, is_table_result, columns)

    def _handle(self, response: QueryResponse, is_table_result: bool,
                columns: Sequence[str]) -> ParsedResult:
        if response.completed:
            data = response.text
        elif self.lenient_transport:
            logger.error("clickhouse_query_degraded_to_empty",
                         url=response.url,
                         error=response.error)
            data = ""
        else:
            raise TransportError(response.url, response.error)

        return parse_result(data, is_table_result, columns, strict=self.strict_rows)


def create_helper(config: Config, asynchronous: bool = False, transport=None) -> ClickHouseHelper:
    """Create a ClickHouseHelper wired from the clickhouse section of a Config."""
    settings = config.clickhouse
    transport_class = AsyncHTTPTransport if asynchronous else HTTPTransport
    http_transport = transport_class(
        config.endpoint_url,
        timeout=settings.get('timeout'),
        transport=transport,
    )
    return ClickHouseHelper(
        http_transport,
        lenient_transport=bool(settings.get('lenient_transport', False)),
        strict_rows=bool(settings.get('strict_rows', False)),
    )
