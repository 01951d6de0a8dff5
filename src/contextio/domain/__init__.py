"""Domain types, models, and errors for the Context.IO client."""

from contextio.domain.errors import (
    AuthFailureError,
    ContextIOError,
    InvalidTransitionError,
    MissingCredentialsError,
    ResponseDecodeError,
    ServerError,
    TransportError,
)
from contextio.domain.models import Credentials, RequestDescriptor, SignedRequest
from contextio.domain.types import (
    PROVIDER_EMAIL_HINTS,
    AuthState,
    BodyType,
    EmailProviderType,
    HttpMethod,
    IncludeHeaders,
    ResponseShape,
    SortOrder,
)

__all__ = [
    "PROVIDER_EMAIL_HINTS",
    "AuthFailureError",
    "AuthState",
    "BodyType",
    "ContextIOError",
    "Credentials",
    "EmailProviderType",
    "HttpMethod",
    "IncludeHeaders",
    "InvalidTransitionError",
    "MissingCredentialsError",
    "RequestDescriptor",
    "ResponseDecodeError",
    "ResponseShape",
    "ServerError",
    "SignedRequest",
    "SortOrder",
    "TransportError",
]
