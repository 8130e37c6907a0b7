"""
Encapsulates the HTTP exchange with the backend (using httpx).
One POST per call: no retries, no custom headers, no connection reuse.
Keeps network code separate from result parsing.
"""
import time
from datetime import datetime, timezone
from typing import Dict, Optional

import httpx
import structlog

logger = structlog.get_logger(__name__)


class QueryResponse:
    def __init__(
        self,
        url: str,
        status_code: int,
        content: bytes = b'',
        headers: Dict[str, str] = None,
        elapsed: float = 0.0,
        error: str = None,
        encoding: str = None
    ):
        """Initialize a QueryResponse with the raw backend reply and metadata."""
        self.url = url
        self.status_code = status_code
        self.content = content
        self.headers = headers or {}
        self.elapsed = elapsed
        self.error = error
        self.encoding = encoding
        self.timestamp = datetime.now(timezone.utc)

    @property
    def completed(self) -> bool:
        """True when the request reached the backend and a reply was read."""
        return self.error is None

    @property
    def success(self) -> bool:
        """Check if the request completed with a 2xx status code."""
        return self.completed and 200 <= self.status_code < 300

    @property
    def text(self) -> str:
        """Decode the response content to text using detected or fallback encoding."""
        if not self.content:
            return ""
        encoding = self.encoding or 'utf-8'
        try:
            return self.content.decode(encoding)
        except (UnicodeDecodeError, LookupError):
            return self.content.decode('utf-8', errors='replace')

    @property
    def size(self) -> int:
        """Get the size of the response content in bytes."""
        return len(self.content)


class _BaseTransport:
    def __init__(self, endpoint_url: str, timeout: Optional[float] = None, transport=None):
        """
        Args:
            endpoint_url: ready-to-use backend URL, not validated here
            timeout: seconds; None keeps the httpx default
            transport: optional httpx transport (e.g. httpx.MockTransport)
        """
        self.endpoint_url = endpoint_url
        self.timeout = timeout
        self._transport = transport

    def _client_options(self) -> Dict:
        options = {}
        if self.timeout is not None:
            options['timeout'] = httpx.Timeout(self.timeout)
        if self._transport is not None:
            options['transport'] = self._transport
        return options

    def _log_request(self, body: str):
        logger.debug("clickhouse_request_sent",
                     url=self.endpoint_url,
                     body=body,
                     body_size=len(body))

    def _build_response(self, response: httpx.Response, start_time: float) -> QueryResponse:
        result = QueryResponse(
            url=self.endpoint_url,
            status_code=response.status_code,
            content=response.content,
            headers=dict(response.headers),
            elapsed=time.time() - start_time,
            encoding=response.encoding
        )

        # backend errors come back as ordinary text and are parsed as data
        if not result.success:
            logger.warning("clickhouse_http_error",
                           url=self.endpoint_url,
                           status_code=result.status_code,
                           size=result.size)
        else:
            logger.debug("clickhouse_response_received",
                         url=self.endpoint_url,
                         status_code=result.status_code,
                         size=result.size,
                         elapsed=result.elapsed)
        return result

    def _failed(self, error: str, start_time: float) -> QueryResponse:
        logger.warning("clickhouse_request_failed", url=self.endpoint_url, error=error)
        return QueryResponse(
            url=self.endpoint_url,
            status_code=0,
            elapsed=time.time() - start_time,
            error=error
        )


class HTTPTransport(_BaseTransport):
    """Blocking transport: send() returns once the whole body has been read."""

    def send(self, body: str) -> QueryResponse:
        """POST the body verbatim and return the reply, whatever its status."""
        self._log_request(body)
        start_time = time.time()

        try:
            with httpx.Client(**self._client_options()) as client:
                response = client.post(self.endpoint_url, content=body)
            return self._build_response(response, start_time)

        except httpx.TimeoutException as e:
            error = f"Timeout: {str(e)}"

        except httpx.ConnectError as e:
            error = f"Connection error: {str(e)}"

        except httpx.HTTPError as e:
            error = f"HTTP transport error: {str(e)}"

        return self._failed(error, start_time)


class AsyncHTTPTransport(_BaseTransport):
    """Same exchange as HTTPTransport, awaitable."""

    async def send(self, body: str) -> QueryResponse:
        self._log_request(body)
        start_time = time.time()

        try:
            async with httpx.AsyncClient(**self._client_options()) as client:
                response = await client.post(self.endpoint_url, content=body)
            return self._build_response(response, start_time)

        except httpx.TimeoutException as e:
            error = f"Timeout: {str(e)}"

        except httpx.ConnectError as e:
            error = f"Connection error: {str(e)}"

        except httpx.HTTPError as e:
            error = f"HTTP transport error: {str(e)}"

        return self._failed(error, start_time)
