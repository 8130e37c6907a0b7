"""
Exceptions raised by the query helper.
"""


class ClickHouseQueryError(Exception):
    """Base error class"""


class ConfigError(ClickHouseQueryError):
    """Configuration is missing or unusable."""


class TransportError(ClickHouseQueryError):
    """The HTTP request never completed (connection refused, timeout, ...)."""

    def __init__(self, url: str, error: str):
        self.url = url
        self.error = error
        super().__init__(f"Request to {url} failed: {error}")


class MalformedRowError(ClickHouseQueryError):
    """A response line has a different number of fields than there are columns."""

    def __init__(self, line_number: int, expected: int, actual: int):
        self.line_number = line_number
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Line {line_number}: expected {expected} fields, got {actual}"
        )
