"""Context.IO API client facade.

``ContextIOClient`` holds the OAuth credentials and account id and exposes
one method per API operation.  Operation methods are pure builders: they
return a ``RequestDescriptor`` and never touch the network.  Pass the
descriptor to ``execute`` (or ``aexecute``) to sign and send it through the
configured transport, or to ``sign`` to hand the request to your own HTTP
stack.

The client performs no I/O when constructed.  Credentials saved by an
earlier ``complete_login`` are only loaded when ``restore_credentials`` is
called.  Instances are not thread-safe: guard ``complete_login`` and
``clear_credentials`` with a lock if other threads are issuing requests.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

import structlog
from pydantic import SecretStr

from contextio.auth.login import parse_login_response
from contextio.auth.signing import DEFAULT_BASE_URL, sign
from contextio.auth.store import CredentialStore
from contextio.config import Settings
from contextio.domain.errors import AuthFailureError, MissingCredentialsError
from contextio.domain.models import Credentials, RequestDescriptor, SignedRequest
from contextio.domain.types import (
    AuthState,
    BodyType,
    EmailProviderType,
    HttpMethod,
    ResponseShape,
)
from contextio.resources import (
    accounts,
    connect_tokens,
    contacts,
    email_addresses,
    files,
    messages,
    sources,
    threads,
    webhooks,
)
from contextio.resources.encoding import merge_params
from contextio.resources.params import (
    ContactsParams,
    FilesParams,
    FolderMessagesParams,
    MessageFlags,
    MessageParams,
    MessagesParams,
    MessageUpdateParams,
    SourceCreateParams,
    SourceModifyParams,
    SourcesParams,
    ThreadParams,
    ThreadsParams,
    WebhookParams,
)
from contextio.resources.paths import API_VERSION
from contextio.state_machine import AuthEvent, AuthStateMachine
from contextio.transport.http import (
    DEFAULT_TIMEOUT,
    AsyncHttpTransport,
    AsyncTransport,
    HttpTransport,
    Transport,
    interpret_response,
)

logger = structlog.get_logger()

ExtraParams = Mapping[str, Any] | None


class ContextIOClient:
    """Builds, signs, and optionally executes Context.IO 2.0 requests.

    Args:
        consumer_key: The API consumer key.
        consumer_secret: The API consumer secret.
        token: Access token, if already obtained.
        token_secret: Access token secret, if already obtained.
        account_id: Account the client builds requests for.
        credential_store: Optional store used by ``complete_login``,
            ``restore_credentials`` and ``clear_credentials``.
        transport: Optional synchronous transport; an ``HttpTransport`` is
            created on first ``execute`` otherwise.
        async_transport: Optional asynchronous transport for ``aexecute``.
        base_url: API root URL.
        timeout: Timeout in seconds for transports the client creates.
    """

    def __init__(
        self,
        consumer_key: str,
        consumer_secret: str,
        token: str | None = None,
        token_secret: str | None = None,
        account_id: str | None = None,
        *,
        credential_store: CredentialStore | None = None,
        transport: Transport | None = None,
        async_transport: AsyncTransport | None = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._credentials = Credentials(
            consumer_key=consumer_key,
            consumer_secret=SecretStr(consumer_secret),
            token=token or None,
            token_secret=SecretStr(token_secret) if token_secret else None,
            account_id=account_id or None,
        )
        self._store = credential_store
        self._transport = transport
        self._async_transport = async_transport
        # Transports built lazily by execute/aexecute; injected ones belong to the caller.
        self._owned_transport: HttpTransport | None = None
        self._owned_async_transport: AsyncHttpTransport | None = None
        self.base_url = base_url
        self.timeout = timeout

        initial = (
            AuthState.AUTHORIZED if self._credentials.is_authorized else AuthState.UNAUTHENTICATED
        )
        self._auth = AuthStateMachine(initial_state=initial)

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        credential_store: CredentialStore | None = None,
        transport: Transport | None = None,
        async_transport: AsyncTransport | None = None,
    ) -> ContextIOClient:
        """Create a client from ``Settings``."""
        return cls(
            settings.contextio_consumer_key,
            settings.contextio_consumer_secret.get_secret_value(),
            token=settings.contextio_token or None,
            token_secret=settings.contextio_token_secret.get_secret_value() or None,
            account_id=settings.contextio_account_id or None,
            credential_store=credential_store,
            transport=transport,
            async_transport=async_transport,
            base_url=settings.contextio_base_url,
            timeout=settings.contextio_timeout,
        )

    # -- Credentials & state ---------------------------------------------------

    @property
    def credentials(self) -> Credentials:
        """Return the current (immutable) credentials snapshot."""
        return self._credentials

    @property
    def account_id(self) -> str | None:
        return self._credentials.account_id

    @property
    def is_authorized(self) -> bool:
        """Return True iff token, token secret, and account id are all present."""
        return self._credentials.is_authorized

    @property
    def auth_state(self) -> AuthState:
        return self._auth.state

    @property
    def auth_history(self) -> list[tuple[AuthState, str, AuthState]]:
        return self._auth.history

    def _require_account(self) -> str:
        if not self._credentials.account_id:
            raise MissingCredentialsError("account_id")
        return self._credentials.account_id

    def restore_credentials(self) -> bool:
        """Load previously saved credentials for this consumer key.

        Returns:
            True if authorized credentials were found and applied.
        """
        if self._store is None:
            return False
        stored = self._store.load(self._credentials.consumer_key)
        if stored is None or not stored.is_authorized:
            return False

        self._credentials = Credentials(
            consumer_key=self._credentials.consumer_key,
            consumer_secret=self._credentials.consumer_secret,
            token=stored.token,
            token_secret=stored.token_secret,
            account_id=stored.account_id,
        )
        self._auth.trigger(AuthEvent.RESTORE)
        logger.info("credentials_restored", account_id=stored.account_id)
        return True

    def begin_auth(
        self,
        provider_type: EmailProviderType,
        callback_url: str,
        extra_params: ExtraParams = None,
    ) -> RequestDescriptor:
        """Start the connect-token handshake for a new account or source.

        When the client is already authorized the token adds a source to the
        current account instead of creating a new one.
        """
        account_id = self._credentials.account_id if self.is_authorized else None
        descriptor = connect_tokens.begin_auth(
            provider_type, callback_url, account_id, extra_params
        )
        self._auth.trigger(AuthEvent.BEGIN_AUTH)
        return descriptor

    @staticmethod
    def redirect_url_from_response(response: Mapping[str, Any]) -> str | None:
        """Return the hosted login URL from a ``begin_auth`` response."""
        return connect_tokens.redirect_url_from_response(response)

    def fetch_account_with_connect_token(self, connect_token: str) -> RequestDescriptor:
        """Build the request that exchanges a connect token for credentials."""
        account_id = self._credentials.account_id if self.is_authorized else None
        if self._auth.state == AuthState.UNAUTHENTICATED:
            # A connect token in hand means a handshake is under way.
            self._auth.trigger(AuthEvent.BEGIN_AUTH)
        return connect_tokens.fetch_account_with_connect_token(connect_token, account_id)

    def complete_login(self, response: Mapping[str, Any], save_credentials: bool = False) -> bool:
        """Apply the credentials from a connect-token response.

        Args:
            response: Decoded body of ``fetch_account_with_connect_token``.
            save_credentials: Persist the credentials to the credential store.

        Returns:
            True on success; False if the response lacks the token, token
            secret, or account id.
        """
        try:
            token, token_secret, account_id = parse_login_response(response)
        except AuthFailureError as exc:
            logger.warning("complete_login_failed", reason=str(exc))
            return False

        self._credentials = Credentials(
            consumer_key=self._credentials.consumer_key,
            consumer_secret=self._credentials.consumer_secret,
            token=token,
            token_secret=SecretStr(token_secret),
            account_id=account_id,
        )
        self._auth.trigger(AuthEvent.COMPLETE_LOGIN)
        logger.info("login_completed", account_id=account_id)

        if save_credentials:
            if self._store is None:
                logger.warning("credential_store_not_configured")
            else:
                self._store.save(self._credentials)
        return True

    def clear_credentials(self) -> None:
        """Forget the token pair and account id, including any saved copy.

        The in-memory state is cleared first, so an error from the store
        still leaves the client consistently unauthenticated.
        """
        self._credentials = self._credentials.cleared()
        self._auth.trigger(AuthEvent.CLEAR_CREDENTIALS)
        logger.info("credentials_cleared")
        if self._store is not None:
            self._store.clear(self._credentials.consumer_key)

    # -- Signing & execution ---------------------------------------------------

    def sign(
        self,
        descriptor: RequestDescriptor,
        *,
        nonce: str | None = None,
        timestamp: int | None = None,
    ) -> SignedRequest:
        """Sign ``descriptor`` with the current credentials."""
        return sign(descriptor, self._credentials, self.base_url, nonce=nonce, timestamp=timestamp)

    def request_for_path(
        self,
        path: str,
        method: HttpMethod | str = HttpMethod.GET,
        params: Mapping[str, Any] | None = None,
        response_shape: ResponseShape = ResponseShape.DICTIONARY,
    ) -> SignedRequest:
        """Sign a request for an arbitrary path in the 2.0 namespace.

        Args:
            path: Path relative to ``2.0/``, e.g. ``accounts/<id>/contacts``.
                Segments must already be escaped.
            method: HTTP method.
            params: Parameters; sent in the query string for GET, otherwise
                as a form-encoded body.
            response_shape: Shape to record on the descriptor.

        Returns:
            The signed request.
        """
        relative = path.lstrip("/")
        if not relative.startswith(f"{API_VERSION}/"):
            relative = f"{API_VERSION}/{relative}"
        descriptor = RequestDescriptor(
            method=HttpMethod(str(method).upper()),
            path_template=relative,
            path=relative,
            params=merge_params({}, params),
            response_shape=response_shape,
        )
        return self.sign(descriptor)

    def execute(self, descriptor: RequestDescriptor) -> Any:
        """Sign ``descriptor`` and send it through the synchronous transport.

        Returns:
            The response interpreted per ``descriptor.response_shape``.

        Raises:
            MissingCredentialsError: If the consumer key or secret is empty.
            TransportError: If no response was received.
            ServerError: If the API answered with a non-2xx status.
        """
        if self._transport is None:
            self._owned_transport = HttpTransport(timeout=self.timeout)
            self._transport = self._owned_transport
        signed = self.sign(descriptor)
        raw = self._transport.send(signed)
        logger.debug(
            "request_completed",
            method=str(descriptor.method),
            path_template=descriptor.path_template,
            status_code=raw.status_code,
        )
        return interpret_response(raw, descriptor.response_shape)

    async def aexecute(self, descriptor: RequestDescriptor) -> Any:
        """Async counterpart of ``execute``."""
        if self._async_transport is None:
            self._owned_async_transport = AsyncHttpTransport(timeout=self.timeout)
            self._async_transport = self._owned_async_transport
        signed = self.sign(descriptor)
        raw = await self._async_transport.send(signed)
        logger.debug(
            "request_completed",
            method=str(descriptor.method),
            path_template=descriptor.path_template,
            status_code=raw.status_code,
        )
        return interpret_response(raw, descriptor.response_shape)

    def close(self) -> None:
        """Release the connection pool of a transport the client created itself.

        Injected transports are left open for their owner to close.  A later
        ``execute`` creates a fresh transport.
        """
        if self._owned_transport is not None:
            self._owned_transport.close()
            if self._transport is self._owned_transport:
                self._transport = None
            self._owned_transport = None

    async def aclose(self) -> None:
        """Close every transport the client created, sync and async."""
        self.close()
        if self._owned_async_transport is not None:
            await self._owned_async_transport.aclose()
            if self._async_transport is self._owned_async_transport:
                self._async_transport = None
            self._owned_async_transport = None

    def __enter__(self) -> ContextIOClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    async def __aenter__(self) -> ContextIOClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # -- Account ---------------------------------------------------------------

    def get_account(self) -> RequestDescriptor:
        return accounts.get_account(self._require_account())

    def update_account(
        self,
        first_name: str | None = None,
        last_name: str | None = None,
        extra_params: ExtraParams = None,
    ) -> RequestDescriptor:
        return accounts.update_account(self._require_account(), first_name, last_name, extra_params)

    def delete_account(self) -> RequestDescriptor:
        return accounts.delete_account(self._require_account())

    # -- Contacts --------------------------------------------------------------

    def get_contacts(
        self, fields: ContactsParams | None = None, extra_params: ExtraParams = None
    ) -> RequestDescriptor:
        return contacts.get_contacts(self._require_account(), fields, extra_params)

    def get_contact(self, email: str) -> RequestDescriptor:
        return contacts.get_contact(self._require_account(), email)

    def get_contact_files(self, email: str, extra_params: ExtraParams = None) -> RequestDescriptor:
        return contacts.get_contact_files(self._require_account(), email, extra_params)

    def get_contact_messages(
        self, email: str, extra_params: ExtraParams = None
    ) -> RequestDescriptor:
        return contacts.get_contact_messages(self._require_account(), email, extra_params)

    def get_contact_threads(
        self, email: str, extra_params: ExtraParams = None
    ) -> RequestDescriptor:
        return contacts.get_contact_threads(self._require_account(), email, extra_params)

    # -- Email addresses -------------------------------------------------------

    def get_email_addresses(self) -> RequestDescriptor:
        return email_addresses.get_email_addresses(self._require_account())

    def add_email_address(self, email: str) -> RequestDescriptor:
        return email_addresses.add_email_address(self._require_account(), email)

    def update_email_address(self, email: str, primary: bool) -> RequestDescriptor:
        return email_addresses.update_email_address(self._require_account(), email, primary)

    def delete_email_address(self, email: str) -> RequestDescriptor:
        return email_addresses.delete_email_address(self._require_account(), email)

    # -- Files -----------------------------------------------------------------

    def get_files(
        self, fields: FilesParams | None = None, extra_params: ExtraParams = None
    ) -> RequestDescriptor:
        return files.get_files(self._require_account(), fields, extra_params)

    def get_file(self, file_id: str) -> RequestDescriptor:
        return files.get_file(self._require_account(), file_id)

    def get_file_changes(self, file_id: str) -> RequestDescriptor:
        return files.get_file_changes(self._require_account(), file_id)

    def get_file_content_url(
        self, file_id: str, extra_params: ExtraParams = None
    ) -> RequestDescriptor:
        return files.get_file_content_url(self._require_account(), file_id, extra_params)

    def download_file_content(self, file_id: str) -> RequestDescriptor:
        return files.download_file_content(self._require_account(), file_id)

    def get_file_related(self, file_id: str) -> RequestDescriptor:
        return files.get_file_related(self._require_account(), file_id)

    def get_file_revisions(self, file_id: str) -> RequestDescriptor:
        return files.get_file_revisions(self._require_account(), file_id)

    # -- Messages --------------------------------------------------------------

    def get_messages(
        self, fields: MessagesParams | None = None, extra_params: ExtraParams = None
    ) -> RequestDescriptor:
        return messages.get_messages(self._require_account(), fields, extra_params)

    def get_message(
        self,
        message_id: str,
        fields: MessageParams | None = None,
        extra_params: ExtraParams = None,
    ) -> RequestDescriptor:
        return messages.get_message(self._require_account(), message_id, fields, extra_params)

    def update_message(
        self,
        message_id: str,
        destination_folder: str,
        fields: MessageUpdateParams | None = None,
        extra_params: ExtraParams = None,
    ) -> RequestDescriptor:
        return messages.update_message(
            self._require_account(), message_id, destination_folder, fields, extra_params
        )

    def delete_message(self, message_id: str) -> RequestDescriptor:
        return messages.delete_message(self._require_account(), message_id)

    def get_message_body(
        self, message_id: str, body_type: BodyType | str | None = None
    ) -> RequestDescriptor:
        return messages.get_message_body(self._require_account(), message_id, body_type)

    def get_message_flags(self, message_id: str) -> RequestDescriptor:
        return messages.get_message_flags(self._require_account(), message_id)

    def update_message_flags(self, message_id: str, flags: MessageFlags) -> RequestDescriptor:
        return messages.update_message_flags(self._require_account(), message_id, flags)

    def get_message_folders(self, message_id: str) -> RequestDescriptor:
        return messages.get_message_folders(self._require_account(), message_id)

    def update_message_folders(
        self,
        message_id: str,
        add_to_folder: str | None = None,
        remove_from_folder: str | None = None,
    ) -> RequestDescriptor:
        return messages.update_message_folders(
            self._require_account(), message_id, add_to_folder, remove_from_folder
        )

    def set_message_folders(
        self,
        message_id: str,
        folder_names: Sequence[str] = (),
        symbolic_folder_names: Sequence[str] = (),
    ) -> RequestDescriptor:
        """Replace a message's folders. The returned descriptor is marked ``unverified``."""
        return messages.set_message_folders(
            self._require_account(), message_id, folder_names, symbolic_folder_names
        )

    def get_message_headers(self, message_id: str) -> RequestDescriptor:
        return messages.get_message_headers(self._require_account(), message_id)

    def get_message_raw_headers(self, message_id: str) -> RequestDescriptor:
        return messages.get_message_raw_headers(self._require_account(), message_id)

    def get_message_source(self, message_id: str) -> RequestDescriptor:
        return messages.get_message_source(self._require_account(), message_id)

    def get_message_thread(
        self,
        message_id: str,
        fields: ThreadParams | None = None,
        extra_params: ExtraParams = None,
    ) -> RequestDescriptor:
        return messages.get_message_thread(
            self._require_account(), message_id, fields, extra_params
        )

    # -- Sources & folders -----------------------------------------------------

    def get_sources(
        self, fields: SourcesParams | None = None, extra_params: ExtraParams = None
    ) -> RequestDescriptor:
        return sources.get_sources(self._require_account(), fields, extra_params)

    def create_source(
        self,
        email: str,
        server: str,
        username: str,
        use_ssl: bool,
        port: int,
        source_type: str = "IMAP",
        fields: SourceCreateParams | None = None,
        extra_params: ExtraParams = None,
    ) -> RequestDescriptor:
        return sources.create_source(
            self._require_account(),
            email,
            server,
            username,
            use_ssl,
            port,
            source_type,
            fields,
            extra_params,
        )

    def get_source(self, source_label: str) -> RequestDescriptor:
        return sources.get_source(self._require_account(), source_label)

    def update_source(
        self,
        source_label: str,
        fields: SourceModifyParams | None = None,
        extra_params: ExtraParams = None,
    ) -> RequestDescriptor:
        return sources.update_source(self._require_account(), source_label, fields, extra_params)

    def delete_source(self, source_label: str) -> RequestDescriptor:
        return sources.delete_source(self._require_account(), source_label)

    def get_source_folders(
        self,
        source_label: str,
        include_extended_counts: bool | None = None,
        no_cache: bool | None = None,
    ) -> RequestDescriptor:
        return sources.get_source_folders(
            self._require_account(), source_label, include_extended_counts, no_cache
        )

    def get_folder(
        self,
        folder_path: str,
        source_label: str,
        include_extended_counts: bool | None = None,
        delim: str | None = None,
    ) -> RequestDescriptor:
        return sources.get_folder(
            self._require_account(), source_label, folder_path, include_extended_counts, delim
        )

    def create_folder(
        self, folder_path: str, source_label: str, delim: str | None = None
    ) -> RequestDescriptor:
        return sources.create_folder(self._require_account(), source_label, folder_path, delim)

    def delete_folder(self, folder_path: str, source_label: str) -> RequestDescriptor:
        return sources.delete_folder(self._require_account(), source_label, folder_path)

    def expunge_folder(self, folder_path: str, source_label: str) -> RequestDescriptor:
        return sources.expunge_folder(self._require_account(), source_label, folder_path)

    def get_folder_messages(
        self,
        folder_path: str,
        source_label: str,
        fields: FolderMessagesParams | None = None,
        extra_params: ExtraParams = None,
    ) -> RequestDescriptor:
        return sources.get_folder_messages(
            self._require_account(), source_label, folder_path, fields, extra_params
        )

    # -- Sync ------------------------------------------------------------------

    def get_source_sync_status(self, source_label: str) -> RequestDescriptor:
        return sources.get_source_sync_status(self._require_account(), source_label)

    def force_source_sync(self, source_label: str) -> RequestDescriptor:
        return sources.force_source_sync(self._require_account(), source_label)

    def get_sync_status(self) -> RequestDescriptor:
        return sources.get_sync_status(self._require_account())

    def force_sync(self) -> RequestDescriptor:
        return sources.force_sync(self._require_account())

    # -- Threads ---------------------------------------------------------------

    def get_threads(
        self, fields: ThreadsParams | None = None, extra_params: ExtraParams = None
    ) -> RequestDescriptor:
        return threads.get_threads(self._require_account(), fields, extra_params)

    def get_thread(self, thread_id: str, extra_params: ExtraParams = None) -> RequestDescriptor:
        return threads.get_thread(self._require_account(), thread_id, extra_params)

    # -- Webhooks --------------------------------------------------------------

    def get_webhooks(self, extra_params: ExtraParams = None) -> RequestDescriptor:
        return webhooks.get_webhooks(self._require_account(), extra_params)

    def create_webhook(
        self,
        callback_url: str,
        failure_notification_url: str,
        fields: WebhookParams | None = None,
        extra_params: ExtraParams = None,
    ) -> RequestDescriptor:
        return webhooks.create_webhook(
            self._require_account(), callback_url, failure_notification_url, fields, extra_params
        )

    def get_webhook(self, webhook_id: str, extra_params: ExtraParams = None) -> RequestDescriptor:
        return webhooks.get_webhook(self._require_account(), webhook_id, extra_params)

    def update_webhook(
        self,
        webhook_id: str,
        fields: WebhookParams | None = None,
        extra_params: ExtraParams = None,
    ) -> RequestDescriptor:
        return webhooks.update_webhook(self._require_account(), webhook_id, fields, extra_params)

    def delete_webhook(self, webhook_id: str) -> RequestDescriptor:
        return webhooks.delete_webhook(self._require_account(), webhook_id)
