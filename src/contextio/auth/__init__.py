"""OAuth request signing and credential storage."""

from contextio.auth.login import parse_login_response
from contextio.auth.signing import (
    DEFAULT_BASE_URL,
    authorization_header,
    build_signature,
    generate_nonce,
    normalize_parameters,
    percent_encode,
    sign,
    signature_base_string,
)
from contextio.auth.store import CredentialStore, InMemoryCredentialStore, JsonFileCredentialStore

__all__ = [
    "DEFAULT_BASE_URL",
    "CredentialStore",
    "InMemoryCredentialStore",
    "JsonFileCredentialStore",
    "authorization_header",
    "build_signature",
    "generate_nonce",
    "normalize_parameters",
    "parse_login_response",
    "percent_encode",
    "sign",
    "signature_base_string",
]
