"""Pydantic v2 models for credentials, request descriptors, and signed requests."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, SecretStr

from contextio.domain.types import HttpMethod, ResponseShape

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class Credentials(BaseModel):
    """OAuth credentials and account binding held by a single client.

    The consumer key/secret identify the API key; token, token secret and
    account id are filled in once the connect-token handshake completes.
    Instances are immutable -- the client swaps in a new instance when the
    authentication state changes.
    """

    model_config = ConfigDict(frozen=True)

    consumer_key: str
    consumer_secret: SecretStr
    token: str | None = None
    token_secret: SecretStr | None = None
    account_id: str | None = None

    @property
    def token_secret_value(self) -> str:
        """Return the raw token secret, or an empty string when absent."""
        if self.token_secret is None:
            return ""
        return self.token_secret.get_secret_value()

    @property
    def is_authorized(self) -> bool:
        """Return True when token, token secret, and account id are all present."""
        return bool(self.token and self.token_secret_value and self.account_id)

    def cleared(self) -> Credentials:
        """Return a copy holding only the consumer key and secret."""
        return Credentials(consumer_key=self.consumer_key, consumer_secret=self.consumer_secret)

    def to_storage(self) -> dict[str, str | None]:
        """Serialize to a plain dict suitable for a credential store.

        The consumer secret is left out: it belongs to the application, not
        the account.  Unlike ``model_dump`` this reveals the token secret, so
        the result must only ever be handed to a store, never to a logger.
        """
        return {
            "consumer_key": self.consumer_key,
            "token": self.token,
            "token_secret": self.token_secret.get_secret_value() if self.token_secret else None,
            "account_id": self.account_id,
        }

    @classmethod
    def from_storage(cls, data: dict[str, Any], consumer_secret: str = "") -> Credentials:
        """Rebuild credentials from a dict produced by ``to_storage``."""
        return cls.model_validate({"consumer_secret": consumer_secret, **data})


class RequestDescriptor(BaseModel):
    """An unsigned description of one API call.

    ``path_template`` keeps the ``{placeholder}`` form for logging and
    grouping; ``path`` is the resolved, percent-encoded path relative to the
    API base URL.
    """

    model_config = ConfigDict(frozen=True)

    method: HttpMethod
    path_template: str
    path: str
    params: dict[str, str] = Field(default_factory=dict)
    response_shape: ResponseShape = ResponseShape.DICTIONARY
    unverified: bool = False


class SignedRequest(BaseModel):
    """A request ready for a transport: final URL, Authorization header, body."""

    model_config = ConfigDict(frozen=True)

    descriptor: RequestDescriptor
    url: str
    authorization: str
    oauth_params: dict[str, str]
    body: str | None = None

    @property
    def method(self) -> HttpMethod:
        """Return the HTTP method of the underlying descriptor."""
        return self.descriptor.method

    @property
    def headers(self) -> dict[str, str]:
        """Return the headers a transport must send with this request."""
        headers = {"Authorization": self.authorization, "Accept": "application/json"}
        if self.body is not None:
            headers["Content-Type"] = FORM_CONTENT_TYPE
        return headers
