"""HTTP capability used by the navigator.

The navigator depends only on ``HttpCapability``; ``HalClient`` is the
default implementation built on ``httpx``.  Responses whose content type
mentions ``json`` are decoded into a document, everything else is kept as
text (relation documentation is typically markdown).

The client never retries.  Transport failures surface as
``UpstreamError``; HTTP error statuses are returned to the caller, which
decides whether they are fatal.

Classes
-------
- ClientConfig    — timeout and default headers
- HttpResult      — status, decoded body and content type of one response
- HttpCapability  — protocol consumed by the navigator
- HalClient       — httpx-backed implementation
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

import httpx

from hal_walk.errors import UpstreamError

logger = logging.getLogger(__name__)

DEFAULT_ACCEPT = "application/hal+json, application/json, text/markdown"


@dataclass(frozen=True)
class ClientConfig:
    """Transport settings for ``HalClient``.

    Parameters
    ----------
    timeout:
        Seconds to wait for a response.  ``None`` disables the timeout.
    accept:
        Value of the ``Accept`` header sent with every request.
    user_agent:
        Value of the ``User-Agent`` header.
    default_headers:
        Extra headers sent with every request; per-request headers win.
    """

    timeout: float | None = 30.0
    accept: str = DEFAULT_ACCEPT
    user_agent: str = "hal-walk"
    default_headers: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError(f"timeout must be positive or None, got {self.timeout!r}.")
        if not self.accept.strip():
            raise ValueError("accept must not be empty.")


@dataclass(frozen=True)
class HttpResult:
    """One completed HTTP round trip.

    Parameters
    ----------
    status_code:
        HTTP status returned by the server.
    body:
        Decoded JSON document, or the raw text for non-JSON responses.
    content_type:
        The response ``Content-Type`` header, empty if absent.
    """

    status_code: int
    body: Any
    content_type: str = ""

    @property
    def is_error(self) -> bool:
        return self.status_code >= 400


class HttpCapability(Protocol):
    """Performs one HTTP request and returns the decoded response."""

    def request(
        self,
        url: str,
        method: str = "GET",
        body: Any = None,
        headers: dict[str, str] | None = None,
    ) -> HttpResult:
        ...


class HalClient:
    """``HttpCapability`` implementation built on ``httpx.Client``.

    Parameters
    ----------
    config:
        Transport settings.  Defaults to ``ClientConfig()``.
    transport:
        Optional ``httpx`` transport, e.g. ``httpx.MockTransport`` in tests.

    Example
    -------
    ::

        with HalClient() as client:
            result = client.request("https://api.example.com/")
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.config = config or ClientConfig()
        self._transport = transport
        self._client: httpx.Client | None = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def connect(self) -> None:
        """Create the underlying ``httpx.Client``."""
        self._client = httpx.Client(
            timeout=self.config.timeout,
            headers={
                "Accept": self.config.accept,
                "User-Agent": self.config.user_agent,
                **self.config.default_headers,
            },
            transport=self._transport,
        )

    def close(self) -> None:
        """Close the underlying client and release connections."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> "HalClient":
        self.connect()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------

    def request(
        self,
        url: str,
        method: str = "GET",
        body: Any = None,
        headers: dict[str, str] | None = None,
    ) -> HttpResult:
        """Send one request and decode the response.

        Parameters
        ----------
        url:
            Absolute URL to request.
        method:
            HTTP method.
        body:
            JSON-serialisable request body; ``None`` sends no body.
        headers:
            Per-request headers.

        Returns
        -------
        HttpResult

        Raises
        ------
        UpstreamError
            On transport failure (connection, timeout, protocol) or when a
            JSON response cannot be decoded.
        """
        if self._client is None:
            self.connect()
        assert self._client is not None

        kwargs: dict[str, Any] = {"headers": dict(headers or {})}
        if body is not None:
            kwargs["json"] = body

        logger.debug("HalClient: %s %s", method, url)
        try:
            response = self._client.request(method, url, **kwargs)
        except httpx.TimeoutException as exc:
            raise UpstreamError(f"Request to {url} timed out: {exc}", url=url) from exc
        except httpx.HTTPError as exc:
            raise UpstreamError(f"Request to {url} failed: {exc}", url=url) from exc

        content_type = response.headers.get("content-type", "")
        logger.debug("HalClient: %s %s -> %d (%s)", method, url, response.status_code, content_type)

        if "json" in content_type and response.content:
            try:
                decoded: Any = response.json()
            except json.JSONDecodeError as exc:
                raise UpstreamError(
                    f"Response from {url} is not valid JSON: {exc}",
                    url=url,
                    status_code=response.status_code,
                ) from exc
            return HttpResult(response.status_code, decoded, content_type)

        return HttpResult(response.status_code, response.text, content_type)
