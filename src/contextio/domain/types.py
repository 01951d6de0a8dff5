"""Domain enumerations for the Context.IO client."""

from enum import IntEnum, StrEnum


class HttpMethod(StrEnum):
    """HTTP methods used by the Context.IO 2.0 API."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


class ResponseShape(StrEnum):
    """How a caller should interpret the body of a response."""

    DICTIONARY = "dictionary"
    ARRAY = "array"
    STRING = "string"
    RAW = "raw"


class AuthState(StrEnum):
    """States in the client authentication lifecycle."""

    UNAUTHENTICATED = "unauthenticated"
    PENDING_TOKEN = "pending_token"
    AUTHORIZED = "authorized"


class EmailProviderType(IntEnum):
    """Email providers offered when beginning the connect-token handshake."""

    GENERIC_IMAP = 0
    GMAIL = 1
    YAHOO = 2
    AOL = 3
    HOTMAIL = 4


class IncludeHeaders(StrEnum):
    """Values accepted by the ``include_headers`` parameter."""

    NONE = "0"
    PARSED = "1"
    RAW = "raw"


class SortOrder(StrEnum):
    """Sort direction for listings."""

    ASC = "asc"
    DESC = "desc"


class BodyType(StrEnum):
    """MIME types accepted by ``body_type`` and the message body ``type`` filter."""

    PLAIN = "text/plain"
    HTML = "text/html"


# Domain hint sent with a connect token request so the hosted login page can
# preselect the provider.
PROVIDER_EMAIL_HINTS: dict[EmailProviderType, str] = {
    EmailProviderType.GMAIL: "@gmail.com",
    EmailProviderType.YAHOO: "@yahoo.com",
    EmailProviderType.AOL: "@aol.com",
    EmailProviderType.HOTMAIL: "@hotmail.com",
}

