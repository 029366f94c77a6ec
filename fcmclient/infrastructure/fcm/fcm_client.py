"""Concrete implementation of the MessagingClient interface for the FCM legacy HTTP API.

Serializes ``HttpMessage`` objects, posts them through a pooled ``httpx``
client and translates the gateway's answer back into domain models.
"""

import asyncio
import json
import logging
import time
from typing import Any, Optional

import httpx

# Domain Layer Imports
from fcmclient.domain.events.send_events import (
    DomainEvent, EventHandler, SendFailed, SendInitiated, SendSucceeded,
)
from fcmclient.domain.interfaces.messaging_client import MessagingClient
from fcmclient.domain.models.common import ApiKey, AuthorizationHeader
from fcmclient.domain.models.message import HttpMessage
from fcmclient.domain.models.response import HttpResponse

from fcmclient.infrastructure.config import settings
from fcmclient.infrastructure.fcm.errors import (
    DecodeError, FCMError, GatewayError, SerializationError, TransportError,
)
from fcmclient.infrastructure.resilience.retry_after import RetryAfterTracker

logger = logging.getLogger(__name__)

SERVER_URL = "https://fcm.googleapis.com/fcm/send"

# Bounds connecting, the TLS handshake and waiting for a pooled connection.
CONNECTION_TIMEOUT = 5.0


class FCMClient(MessagingClient):
    """FCM implementation of the MessagingClient interface.

    The client is meant to be long-lived. It keeps an internal pool of HTTP
    connections and any number of threads may call ``send_http`` on the same
    instance at once.

    Only connection setup is time-bounded. Once a request is on the wire
    there is no read or overall timeout, so a silent peer blocks the call.
    """

    def __init__(
        self,
        api_key: ApiKey,
        *,
        server_url: str = SERVER_URL,
        connection_timeout: float = CONNECTION_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
        trust_env: bool = True,
        event_handler: Optional[EventHandler] = None,
    ):
        """Initializes the FCM client. Performs no I/O.

        Args:
            api_key: FCM server key. Sent as ``Authorization: key=<api_key>``.
            server_url: Gateway endpoint.
            connection_timeout: Seconds allowed for connect, TLS handshake and pool acquisition.
            transport: Optional httpx transport, e.g. ``httpx.MockTransport`` in tests.
            trust_env: Honour proxy and certificate settings from the environment.
            event_handler: Optional callable receiving ``DomainEvent`` objects.
        """
        self._authorization = AuthorizationHeader("key=" + api_key)
        self.server_url = server_url
        self.connection_timeout = connection_timeout
        self._event_handler = event_handler
        self._retry_after = RetryAfterTracker()
        self._http = httpx.Client(
            timeout=httpx.Timeout(None, connect=connection_timeout, pool=connection_timeout),
            transport=transport,
            trust_env=trust_env,
        )
        logger.info(f"FCMClient initialized for endpoint: {self.server_url}")

    # --- Lifecycle ---

    def close(self) -> None:
        """Closes pooled connections. The client cannot send afterwards."""
        self._http.close()

    def __enter__(self) -> "FCMClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # --- MessagingClient ---

    def send_http(self, message: HttpMessage) -> HttpResponse:
        """Posts a message to the gateway and blocks until it answers.

        Raises:
            SerializationError: The message could not be encoded.
            TransportError: The request failed before a response arrived.
            GatewayError: The gateway answered with a non-200 status.
            DecodeError: The 200 body did not match the response shape.
        """
        target = message.target_summary()
        self._emit(SendInitiated(endpoint=self.server_url, target=target, dry_run=message.dry_run))
        logger.debug(f"Sending message to FCM ({target}, dry_run={message.dry_run})")

        start_time = time.perf_counter()
        try:
            response = self._round_trip(message)
        except FCMError as e:
            self._emit(SendFailed(
                endpoint=self.server_url,
                error_type=type(e).__name__,
                error_message=str(e),
                status_code=getattr(e, "status_code", None),
            ))
            raise
        latency_ms = (time.perf_counter() - start_time) * 1000

        logger.debug(
            f"FCM accepted message in {latency_ms:.2f}ms: success={response.success}, "
            f"failure={response.failure}, canonical_ids={response.canonical_ids}"
        )
        self._emit(SendSucceeded(
            endpoint=self.server_url,
            latency_ms=latency_ms,
            success=response.success,
            failure=response.failure,
            canonical_ids=response.canonical_ids,
            multicast_id=response.multicast_id,
            retry_after=self._retry_after.value,
        ))
        return response

    async def post_http(self, message: HttpMessage) -> HttpResponse:
        """Runs ``send_http`` in a worker thread so it can be awaited."""
        return await asyncio.to_thread(self.send_http, message)

    def get_retry_after(self) -> int:
        """Seconds to wait before retrying, from the last decoded response."""
        return self._retry_after.seconds()

    # --- Internals ---

    def _round_trip(self, message: HttpMessage) -> HttpResponse:
        try:
            body = message.to_json()
        except (TypeError, ValueError) as e:
            raise SerializationError(f"Failed to encode FCM message: {e}") from e

        headers = {
            "Content-Type": "application/json",
            "Authorization": self._authorization,
        }
        try:
            request = self._http.build_request(
                "POST", self.server_url, content=body.encode("utf-8"), headers=headers
            )
            # send() reads the whole body, which hands the connection back to the pool
            http_response = self._http.send(request)
        except (httpx.HTTPError, httpx.InvalidURL, UnicodeEncodeError) as e:
            # UnicodeEncodeError: header values (the API key) must be ASCII
            raise TransportError(f"POST {self.server_url} failed: {type(e).__name__}: {e}") from e

        try:
            text = http_response.text
            if http_response.status_code != httpx.codes.OK:
                logger.debug(f"FCM returned status {http_response.status_code}")
                raise GatewayError(http_response.status_code, http_response.reason_phrase, text)

            try:
                response = HttpResponse.from_dict(json.loads(http_response.content))
            except (TypeError, ValueError, RecursionError) as e:
                raise DecodeError(f"Invalid FCM response body: {e}", body=text) from e

            self._retry_after.update(http_response.headers.get("Retry-After"))
            return response
        finally:
            http_response.close()

    def _emit(self, event: DomainEvent) -> None:
        if self._event_handler is not None:
            self._event_handler(event)


def create_client_from_config(**overrides: Any) -> FCMClient:
    """Builds an FCMClient from loaded configuration.

    Keyword arguments are passed to ``FCMClient`` and take precedence over
    configured values.

    Raises:
        ValueError: If no API key is configured or passed in.
    """
    api_key = overrides.pop("api_key", None) or settings.get_fcm_api_key()
    if not api_key:
        raise ValueError("FCM API key not provided and not found in configuration (FCM_API_KEY).")

    overrides.setdefault("server_url", settings.get_server_url())
    overrides.setdefault("connection_timeout", settings.get_connection_timeout())
    return FCMClient(ApiKey(api_key), **overrides)
