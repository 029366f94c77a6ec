"""Defines common Value Objects used across the messaging domain.

These objects represent simple values such as API keys, registration
tokens and condition expressions, giving the message and response models
semantic types while remaining plain strings at runtime.
"""

from typing import Any, Dict, NewType

# === Credentials ===
ApiKey = NewType("ApiKey", str)                  # Server key as issued by the Firebase console
AuthorizationHeader = NewType("AuthorizationHeader", str)  # "key=<ApiKey>"

# === Targeting ===
RegistrationToken = NewType("RegistrationToken", str)  # Opaque per-device identifier
ConditionExpression = NewType("ConditionExpression", str)  # e.g. "'news' in topics && 'sport' in topics"
CollapseKey = NewType("CollapseKey", str)

# === Gateway Output ===
MessageId = NewType("MessageId", str)            # Assigned by the gateway on acceptance

# === Wire Representation ===
WireDict = Dict[str, Any]  # JSON-compatible mapping sent to or received from the gateway
