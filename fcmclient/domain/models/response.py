"""Domain models for FCM gateway responses.

Includes the per-target ``Result`` entries, the aggregate ``HttpResponse``
and the vocabulary of error codes the gateway may report. Error codes are
carried verbatim; nothing in this package acts on them.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional

from .common import MessageId, RegistrationToken, WireDict


class ErrorCode(str, Enum):
    """Error codes reported in ``Result.error``."""
    MISSING_REGISTRATION = "MissingRegistration"
    INVALID_REGISTRATION = "InvalidRegistration"
    NOT_REGISTERED = "NotRegistered"
    INVALID_PACKAGE_NAME = "InvalidPackageName"
    MISMATCH_SENDER_ID = "MismatchSenderId"
    MESSAGE_TOO_BIG = "MessageTooBig"
    INVALID_DATA_KEY = "InvalidDataKey"
    INVALID_TTL = "InvalidTtl"
    UNAVAILABLE = "Unavailable"
    INTERNAL_SERVER_ERROR = "InternalServerError"
    DEVICE_MESSAGE_RATE_EXCEEDED = "DeviceMessageRateExceeded"
    TOPICS_MESSAGE_RATE_EXCEEDED = "TopicsMessageRateExceeded"


ERROR_MISSING_REGISTRATION = ErrorCode.MISSING_REGISTRATION.value
ERROR_INVALID_REGISTRATION = ErrorCode.INVALID_REGISTRATION.value
ERROR_NOT_REGISTERED = ErrorCode.NOT_REGISTERED.value
ERROR_INVALID_PACKAGE_NAME = ErrorCode.INVALID_PACKAGE_NAME.value
ERROR_MISMATCH_SENDER_ID = ErrorCode.MISMATCH_SENDER_ID.value
ERROR_MESSAGE_TOO_BIG = ErrorCode.MESSAGE_TOO_BIG.value
ERROR_INVALID_DATA_KEY = ErrorCode.INVALID_DATA_KEY.value
ERROR_INVALID_TTL = ErrorCode.INVALID_TTL.value
ERROR_UNAVAILABLE = ErrorCode.UNAVAILABLE.value
ERROR_INTERNAL_SERVER_ERROR = ErrorCode.INTERNAL_SERVER_ERROR.value
ERROR_DEVICE_MESSAGE_RATE_EXCEEDED = ErrorCode.DEVICE_MESSAGE_RATE_EXCEEDED.value
ERROR_TOPICS_MESSAGE_RATE_EXCEEDED = ErrorCode.TOPICS_MESSAGE_RATE_EXCEEDED.value


def _optional_str(raw: WireDict, key: str) -> Optional[str]:
    value = raw.get(key)
    if value is not None and not isinstance(value, str):
        raise TypeError(f"'{key}' must be a string, got {type(value).__name__}")
    return value


def _int(raw: WireDict, key: str) -> int:
    value = raw.get(key)
    if value is None:
        return 0
    # bool is an int subclass, but true/false is not a count
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"'{key}' must be an integer, got {type(value).__name__}")
    return value


@dataclass
class Result:
    """Outcome for a single target, in the order targets were sent."""
    message_id: Optional[MessageId] = None
    registration_id: Optional[RegistrationToken] = None  # canonical id, set when the token was replaced
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.message_id is not None and self.error is None

    @classmethod
    def from_dict(cls, raw: Any) -> "Result":
        if raw is None:
            return cls()
        if not isinstance(raw, dict):
            raise TypeError(f"result entry must be an object, got {type(raw).__name__}")
        return cls(
            message_id=_optional_str(raw, "message_id"),
            registration_id=_optional_str(raw, "registration_id"),
            error=_optional_str(raw, "error"),
        )

    def to_dict(self) -> WireDict:
        return {
            key: value
            for key, value in (
                ("message_id", self.message_id),
                ("registration_id", self.registration_id),
                ("error", self.error),
            )
            if value is not None
        }


@dataclass
class HttpResponse:
    """Aggregate response to an FCM HTTP message.

    Missing or null counters decode to zero and unknown keys are ignored,
    matching the gateway's lenient JSON.
    """
    multicast_id: int = 0
    success: int = 0
    failure: int = 0
    canonical_ids: int = 0
    results: List[Result] = field(default_factory=list)

    @property
    def fail(self) -> int:
        """Alias of ``failure``."""
        return self.failure

    @classmethod
    def from_dict(cls, raw: Any) -> "HttpResponse":
        """Decodes a parsed JSON document.

        A ``null`` document or result entry decodes to empty values.

        Raises:
            TypeError: If the document does not match the response shape.
        """
        if raw is None:
            return cls()
        if not isinstance(raw, dict):
            raise TypeError(f"response must be a JSON object, got {type(raw).__name__}")

        raw_results = raw.get("results")
        if raw_results is None:
            raw_results = []
        elif not isinstance(raw_results, list):
            raise TypeError(f"'results' must be a list, got {type(raw_results).__name__}")

        return cls(
            multicast_id=_int(raw, "multicast_id"),
            success=_int(raw, "success"),
            failure=_int(raw, "failure"),
            canonical_ids=_int(raw, "canonical_ids"),
            results=[Result.from_dict(entry) for entry in raw_results],
        )

    def to_dict(self) -> WireDict:
        payload: WireDict = {
            "multicast_id": self.multicast_id,
            "success": self.success,
            "failure": self.failure,
            "canonical_ids": self.canonical_ids,
        }
        if self.results:
            payload["results"] = [result.to_dict() for result in self.results]
        return payload
