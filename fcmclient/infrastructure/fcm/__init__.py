"""FCM legacy HTTP gateway client.

Implements the ``MessagingClient`` interface from the domain layer on top
of a pooled ``httpx.Client``.
Bounded Context: Message Delivery
"""
