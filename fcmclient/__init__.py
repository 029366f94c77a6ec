"""fcmclient: a small blocking client for the FCM legacy HTTP gateway.

Typical use::

    from fcmclient import FCMClient, HttpMessage, Notification

    client = FCMClient(api_key)
    response = client.send_http(HttpMessage(to=token, notification=Notification(title="Hi")))
"""

from fcmclient.domain.events.send_events import DomainEvent, SendFailed, SendInitiated, SendSucceeded
from fcmclient.domain.interfaces.messaging_client import MessagingClient
from fcmclient.domain.models.message import (
    PRIORITY_HIGH, PRIORITY_NORMAL, HttpMessage, Notification, Priority,
)
from fcmclient.domain.models.response import (
    ERROR_DEVICE_MESSAGE_RATE_EXCEEDED,
    ERROR_INTERNAL_SERVER_ERROR,
    ERROR_INVALID_DATA_KEY,
    ERROR_INVALID_PACKAGE_NAME,
    ERROR_INVALID_REGISTRATION,
    ERROR_INVALID_TTL,
    ERROR_MESSAGE_TOO_BIG,
    ERROR_MISMATCH_SENDER_ID,
    ERROR_MISSING_REGISTRATION,
    ERROR_NOT_REGISTERED,
    ERROR_TOPICS_MESSAGE_RATE_EXCEEDED,
    ERROR_UNAVAILABLE,
    ErrorCode,
    HttpResponse,
    Result,
)
from fcmclient.infrastructure.fcm.errors import (
    DecodeError, FCMError, GatewayError, SerializationError, TransportError,
)
from fcmclient.infrastructure.fcm.fcm_client import (
    CONNECTION_TIMEOUT, SERVER_URL, FCMClient, create_client_from_config,
)

__version__ = "0.1.0"
