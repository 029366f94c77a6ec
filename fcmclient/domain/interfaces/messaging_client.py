"""Interface for push messaging gateway clients.

Defines the contract for submitting a message to a gateway and reading the
server-advised retry hint afterwards.
"""

import abc

from ..models.message import HttpMessage
from ..models.response import HttpResponse


class MessagingClient(abc.ABC):
    """Abstract Base Class for gateway clients."""

    @abc.abstractmethod
    def send_http(self, message: HttpMessage) -> HttpResponse:
        """Sends a message and blocks until the gateway answers.

        Args:
            message: The message to deliver.

        Returns:
            The decoded gateway response.

        Raises:
            FCMError: A subclass describing which stage failed.
        """
        pass

    @abc.abstractmethod
    async def post_http(self, message: HttpMessage) -> HttpResponse:
        """Awaitable variant of ``send_http`` with the same semantics."""
        pass

    @abc.abstractmethod
    def get_retry_after(self) -> int:
        """Returns the seconds to wait before retrying, 0 when unknown."""
        pass

    def send(self, message: HttpMessage) -> HttpResponse:
        """Alias of ``send_http``."""
        return self.send_http(message)
