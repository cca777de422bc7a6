"""SMS transport ports (protocols)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .message import Message, SentMessage


@runtime_checkable
class ITransport(Protocol):
    """Framework-agnostic port for sending a message through one gateway.

    Adapters must explicitly declare: class SnsTransport(ITransport):
    """

    async def send(self, message: Message) -> SentMessage:
        """Send the message and return the sent-message descriptor.

        Raises:
            UnsupportedMessageError: The transport cannot handle the message type.
            DeliveryError: The gateway rejected the message.
        """
        ...

    def supports(self, message: Message) -> bool:
        """Whether ``send`` accepts this message type."""
        ...


@runtime_checkable
class ITransportFactory(Protocol):
    """Builds a transport from a DSN string.

    The generic delegate of TransportFactory implements this; applications
    can provide their own to reach other SMS backends.
    """

    def from_dsn(self, dsn: str) -> ITransport:
        """Create the transport described by ``dsn``.

        Raises:
            ConfigurationError: The DSN is invalid or its scheme is unknown.
        """
        ...


__all__: list[str] = ["ITransport", "ITransportFactory"]
