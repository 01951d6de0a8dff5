"""httpx transports and response interpretation.

The transports only move bytes: they send a ``SignedRequest`` and hand back
a ``RawResponse``.  ``interpret_response`` then turns the raw response into
the shape the descriptor declared, raising ``ServerError`` on non-2xx.
Neither retries; see ``contextio.resilience`` for that.
"""

from __future__ import annotations

import json
from typing import Any, Protocol

import httpx
import structlog
from pydantic import BaseModel, ConfigDict

from contextio.domain.errors import ResponseDecodeError, ServerError, TransportError
from contextio.domain.models import SignedRequest
from contextio.domain.types import ResponseShape

logger = structlog.get_logger()

DEFAULT_TIMEOUT: float = 60.0


class RawResponse(BaseModel):
    """Status, headers, and undecoded body of an HTTP response."""

    model_config = ConfigDict(frozen=True)

    status_code: int
    content: bytes
    headers: dict[str, str] = {}

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")


class Transport(Protocol):
    """Synchronous transport collaborator."""

    def send(self, request: SignedRequest) -> RawResponse: ...


class AsyncTransport(Protocol):
    """Asynchronous transport collaborator."""

    async def send(self, request: SignedRequest) -> RawResponse: ...


def _to_raw(response: httpx.Response) -> RawResponse:
    return RawResponse(
        status_code=response.status_code,
        content=response.content,
        headers=dict(response.headers),
    )


class HttpTransport:
    """Blocking transport backed by ``httpx.Client``.

    Args:
        timeout: Per-request timeout in seconds.
        client: Optional preconfigured client (e.g. with a mock transport).
    """

    def __init__(
        self, timeout: float = DEFAULT_TIMEOUT, client: httpx.Client | None = None
    ) -> None:
        self._timeout = timeout
        self._client = client if client is not None else httpx.Client(timeout=timeout)

    def send(self, request: SignedRequest) -> RawResponse:
        """Send a signed request.

        Raises:
            TransportError: If no response was received.
        """
        try:
            response = self._client.request(
                str(request.method),
                request.url,
                headers=request.headers,
                content=request.body,
                timeout=self._timeout,
            )
        except httpx.TransportError as exc:
            logger.warning(
                "transport_failed",
                method=str(request.method),
                path_template=request.descriptor.path_template,
                error=str(exc),
            )
            raise TransportError(str(exc)) from exc
        return _to_raw(response)

    @property
    def closed(self) -> bool:
        return self._client.is_closed

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> HttpTransport:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class AsyncHttpTransport:
    """Non-blocking transport backed by ``httpx.AsyncClient``."""

    def __init__(
        self, timeout: float = DEFAULT_TIMEOUT, client: httpx.AsyncClient | None = None
    ) -> None:
        self._timeout = timeout
        self._client = client if client is not None else httpx.AsyncClient(timeout=timeout)

    async def send(self, request: SignedRequest) -> RawResponse:
        """Send a signed request.

        Raises:
            TransportError: If no response was received.
        """
        try:
            response = await self._client.request(
                str(request.method),
                request.url,
                headers=request.headers,
                content=request.body,
                timeout=self._timeout,
            )
        except httpx.TransportError as exc:
            logger.warning(
                "transport_failed",
                method=str(request.method),
                path_template=request.descriptor.path_template,
                error=str(exc),
            )
            raise TransportError(str(exc)) from exc
        return _to_raw(response)

    @property
    def closed(self) -> bool:
        return self._client.is_closed

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> AsyncHttpTransport:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


def interpret_response(raw: RawResponse, shape: ResponseShape) -> Any:
    """Decode a raw response according to the declared response shape.

    Args:
        raw: The transport's response.
        shape: Shape declared by the request descriptor.

    Returns:
        A dict for DICTIONARY, a list for ARRAY, text for STRING, and bytes
        for RAW.

    Raises:
        ServerError: If the status is not 2xx.
        ResponseDecodeError: If the body does not match ``shape``.
    """
    if not raw.is_success:
        raise ServerError(raw.status_code, raw.text)

    if shape == ResponseShape.RAW:
        return raw.content
    if shape == ResponseShape.STRING:
        return raw.text

    try:
        decoded = json.loads(raw.content)
    except ValueError as exc:
        raise ResponseDecodeError(f"Expected JSON {shape} response: {exc}") from exc

    expected = dict if shape == ResponseShape.DICTIONARY else list
    if not isinstance(decoded, expected):
        raise ResponseDecodeError(
            f"Expected JSON {shape} response, got {type(decoded).__name__}"
        )
    return decoded
