"""Error taxonomy for a bulk run.

- `ConfigError`: bad input, raised before any network activity.
- `ServerValidationError`: the server rejected the parameters. Assumed to
  repeat for every remaining request, so the run stops.
- `TransientTransportError`: one request failed in transit; the loop skips it.
- `LocalWriteError`: the destination could not be written; fatal.
"""

from __future__ import annotations

from pathlib import Path


class ClimateBulkError(Exception):
    """Base class for every error raised by this package."""


class ConfigError(ClimateBulkError):
    def __init__(self, option: str, message: str) -> None:
        super().__init__(message)
        self.option = option
        self.message = message

    def __str__(self) -> str:
        return f"--{self.option}: {self.message}"


class ServerValidationError(ClimateBulkError):
    def __init__(self, url: str, message: str) -> None:
        super().__init__(message)
        self.url = url


class UnexpectedContentTypeError(ServerValidationError):
    """2xx response that is not a data download (usually an HTML error page)."""

    def __init__(self, url: str, content_type: str | None) -> None:
        super().__init__(
            url,
            "Server did not return expected data type - check your station ID and other parameters.",
        )
        self.content_type = content_type


class ServerStatusError(ServerValidationError):
    """Non-2xx HTTP status."""

    def __init__(self, url: str, status_code: int, reason: str = "") -> None:
        super().__init__(
            url,
            f"Failed to retrieve data from server with URL {url}. Error: {status_code}",
        )
        self.status_code = status_code
        self.reason = reason


class TransientTransportError(ClimateBulkError):
    def __init__(self, url: str, cause: BaseException) -> None:
        super().__init__(f"I/O or transport error occurred for {url}: {cause}")
        self.url = url
        self.cause = cause


class LocalWriteError(ClimateBulkError):
    def __init__(self, path: Path, cause: BaseException) -> None:
        super().__init__(f"Failed to write {path}: {cause}")
        self.path = path
        self.cause = cause
