"""HTTP client abstraction for the hosting service API.

This module provides:
- HttpClient: Protocol for HTTP operations (injectable for tests)
- RealHttpClient: Real implementation using urllib
- MockHttpClient: Mock implementation for testing
"""

from __future__ import annotations

import ssl
import urllib.error
import urllib.request
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from cargotag.core.result import Err, Ok, Result

__all__ = [
    "HttpClient",
    "RealHttpClient",
    "MockHttpClient",
    "HttpError",
]


@dataclass(frozen=True, slots=True)
class HttpError:
    """HTTP error details.

    Attributes:
        url: The URL that failed
        status: HTTP status code (0 for network errors)
        message: Human-readable error message
    """

    url: str
    status: int
    message: str

    def __str__(self) -> str:
        if self.status:
            return f"HTTP {self.status}: {self.message} ({self.url})"
        return f"{self.message} ({self.url})"


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for HTTP operations.

    Lets tests inject MockHttpClient instead of calling the real API.
    """

    def get_status(self, url: str) -> Result[int, HttpError]:
        """GET url and return the success status; the body is not inspected.

        Returns:
            Ok(status) for a 2xx response, Err(HttpError) for an error
            status or a network failure
        """
        ...


class RealHttpClient:
    """HTTP client using urllib with bearer-token authentication."""

    def __init__(
        self,
        token: str | None = None,
        timeout: float = 30.0,
        user_agent: str = "cargo-tag/0.1.0",
    ) -> None:
        """Initialize HTTP client.

        Args:
            token: Bearer token sent with every request (None for anonymous)
            timeout: Request timeout in seconds
            user_agent: User-Agent header value
        """
        self.timeout = timeout
        self.user_agent = user_agent
        self._token = token
        self._ssl_context = ssl.create_default_context()

    def _headers(self) -> dict[str, str]:
        headers = {
            "User-Agent": self.user_agent,
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def get_status(self, url: str) -> Result[int, HttpError]:
        try:
            req = urllib.request.Request(url, headers=self._headers())
            with urllib.request.urlopen(
                req,
                timeout=self.timeout,
                context=self._ssl_context,
            ) as response:
                return Ok(int(response.status))
        except urllib.error.HTTPError as e:
            return Err(HttpError(url=url, status=e.code, message=str(e.reason)))
        except urllib.error.URLError as e:
            return Err(HttpError(url=url, status=0, message=str(e.reason)))
        except TimeoutError:
            return Err(HttpError(url=url, status=0, message="Request timed out"))
        except (ValueError, OSError) as e:
            return Err(HttpError(url=url, status=0, message=str(e)))


class MockHttpClient:
    """Mock HTTP client for testing.

    Unknown URLs answer 404, like a missing ref.

    Usage:
        client = MockHttpClient()
        client.set_status(url, 200)
        client.set_status(other_url, HttpError(url=other_url, status=500, message="boom"))
    """

    def __init__(self) -> None:
        self._responses: dict[str, int | HttpError] = {}
        self.calls: list[str] = []

    def set_status(self, url: str, response: int | HttpError) -> None:
        """Set the success status (or the error) returned for URL."""
        self._responses[url] = response

    def get_status(self, url: str) -> Result[int, HttpError]:
        self.calls.append(url)

        response = self._responses.get(url)
        if response is None:
            return Err(HttpError(url=url, status=404, message="Not Found"))
        if isinstance(response, HttpError):
            return Err(response)
        return Ok(response)
