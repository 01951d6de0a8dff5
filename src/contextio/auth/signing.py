"""OAuth 1.0 HMAC-SHA1 request signing (RFC 5849).

The signature covers the HTTP method, the base URL without query string, and
every request and protocol parameter, percent-encoded and sorted.  The API
recomputes it server-side, so any deviation in encoding or ordering makes the
request fail with 401.

Usage::

    signed = sign(descriptor, credentials)
    httpx.request(signed.method, signed.url, headers=signed.headers, content=signed.body)
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import secrets
import time
from collections.abc import Iterable, Mapping
from urllib.parse import quote

import structlog

from contextio.domain.errors import MissingCredentialsError
from contextio.domain.models import Credentials, RequestDescriptor, SignedRequest
from contextio.domain.types import HttpMethod

logger = structlog.get_logger()

DEFAULT_BASE_URL = "https://api.context.io/"
SIGNATURE_METHOD = "HMAC-SHA1"
OAUTH_VERSION = "1.0"

# RFC 3986 unreserved characters; everything else is percent-encoded.
_UNRESERVED = "-._~"


def percent_encode(value: str) -> str:
    """Percent-encode ``value`` per RFC 5849 section 3.6 (UTF-8, unreserved kept)."""
    return quote(str(value).encode("utf-8"), safe=_UNRESERVED)


def generate_nonce() -> str:
    """Return a fresh random nonce."""
    return secrets.token_hex(16)


def normalize_parameters(params: Iterable[tuple[str, str]]) -> str:
    """Encode, sort, and join parameters into the signature's parameter string.

    Pairs are sorted by encoded key, then by encoded value, so the result does
    not depend on the order of ``params``.
    """
    encoded = sorted((percent_encode(key), percent_encode(value)) for key, value in params)
    return "&".join(f"{key}={value}" for key, value in encoded)


def signature_base_string(method: str, base_url: str, params: Iterable[tuple[str, str]]) -> str:
    """Build ``METHOD&enc(base_url)&enc(normalized params)``."""
    return "&".join(
        [
            str(method).upper(),
            percent_encode(base_url),
            percent_encode(normalize_parameters(params)),
        ]
    )


def signing_key(consumer_secret: str, token_secret: str = "") -> str:
    """Build the HMAC key ``enc(consumer_secret)&enc(token_secret)``."""
    return f"{percent_encode(consumer_secret)}&{percent_encode(token_secret)}"


def build_signature(
    method: str,
    base_url: str,
    params: Iterable[tuple[str, str]],
    consumer_secret: str,
    token_secret: str = "",
) -> str:
    """Compute the base64 HMAC-SHA1 signature of a request.

    Args:
        method: HTTP method.
        base_url: Scheme, host, and path of the request, without query string.
        params: All request and ``oauth_*`` parameters except the signature.
        consumer_secret: The API consumer secret.
        token_secret: The access token secret, empty for two-legged calls.

    Returns:
        The signature as a base64 string.
    """
    base_string = signature_base_string(method, base_url, params)
    digest = hmac.new(
        signing_key(consumer_secret, token_secret).encode("utf-8"),
        base_string.encode("utf-8"),
        hashlib.sha1,
    ).digest()
    return base64.b64encode(digest).decode("ascii")


def authorization_header(oauth_params: Mapping[str, str]) -> str:
    """Render ``OAuth key="value", ...`` from the protocol parameters."""
    pairs = ", ".join(
        f'{percent_encode(key)}="{percent_encode(value)}"'
        for key, value in sorted(oauth_params.items())
    )
    return f"OAuth {pairs}"


def encode_pairs(params: Mapping[str, str]) -> str:
    """Encode parameters for a query string or form body, matching the signed encoding."""
    return "&".join(
        f"{percent_encode(key)}={percent_encode(value)}" for key, value in params.items()
    )


def join_url(base_url: str, path: str) -> str:
    """Join the API base URL and a relative API path."""
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


def _require_consumer(credentials: Credentials) -> None:
    missing = []
    if not credentials.consumer_key:
        missing.append("consumer_key")
    if not credentials.consumer_secret.get_secret_value():
        missing.append("consumer_secret")
    if missing:
        raise MissingCredentialsError(*missing)


def sign(
    descriptor: RequestDescriptor,
    credentials: Credentials,
    base_url: str = DEFAULT_BASE_URL,
    *,
    nonce: str | None = None,
    timestamp: int | None = None,
) -> SignedRequest:
    """Sign a request descriptor with the given credentials.

    A fresh nonce and timestamp are generated unless injected; a retried
    request must be signed again rather than re-sent.

    Args:
        descriptor: The request to sign.
        credentials: Consumer key/secret and, when authorized, the token pair.
        base_url: API root the descriptor's path is relative to.
        nonce: Override the random nonce (tests only).
        timestamp: Override the current Unix time (tests only).

    Returns:
        A ``SignedRequest`` with final URL, Authorization header, and body.

    Raises:
        MissingCredentialsError: If the consumer key or secret is empty.
    """
    _require_consumer(credentials)

    oauth_params: dict[str, str] = {
        "oauth_consumer_key": credentials.consumer_key,
        "oauth_nonce": nonce if nonce is not None else generate_nonce(),
        "oauth_signature_method": SIGNATURE_METHOD,
        "oauth_timestamp": str(timestamp if timestamp is not None else int(time.time())),
        "oauth_version": OAUTH_VERSION,
    }
    if credentials.token:
        oauth_params["oauth_token"] = credentials.token

    endpoint = join_url(base_url, descriptor.path)
    signed_params = [*descriptor.params.items(), *oauth_params.items()]
    oauth_params["oauth_signature"] = build_signature(
        descriptor.method,
        endpoint,
        signed_params,
        credentials.consumer_secret.get_secret_value(),
        credentials.token_secret_value,
    )

    url = endpoint
    body: str | None = None
    if descriptor.method == HttpMethod.GET:
        if descriptor.params:
            url = f"{endpoint}?{encode_pairs(descriptor.params)}"
    elif descriptor.params:
        body = encode_pairs(descriptor.params)

    logger.debug(
        "request_signed",
        method=str(descriptor.method),
        path_template=descriptor.path_template,
        two_legged=not credentials.token,
    )

    return SignedRequest(
        descriptor=descriptor,
        url=url,
        authorization=authorization_header(oauth_params),
        oauth_params=oauth_params,
        body=body,
    )
