"""Outbound message types and the sent-message descriptor."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Union


@dataclass(frozen=True)
class SmsMessage:
    """Plain SMS text message.

    Attributes:
        phone: Recipient number, country-code prefixed (``+4479...``).
        subject: Message text.
    """

    phone: str
    subject: str

    def __post_init__(self) -> None:
        if not self.phone.strip():
            raise ValueError("SmsMessage requires a recipient phone number")


@dataclass(frozen=True)
class ChatMessage:
    """Chat-channel message (Slack, Telegram, ...).

    SMS transports do not support it; it exists so that callers can route
    non-SMS notifications through the same transport interface.
    """

    subject: str
    options: dict[str, object] = field(default_factory=dict)


Message = Union[SmsMessage, ChatMessage]


@dataclass(frozen=True)
class SentMessage:
    """Immutable record of a message accepted by a transport.

    Attributes:
        original_message: The message that was sent.
        transport: String identity of the transport that sent it.
        message_id: Gateway-assigned message id, if any.
        sent_at: When the gateway accepted the message (UTC).
    """

    original_message: Message
    transport: str
    message_id: str | None = None
    sent_at: datetime | None = None

    def __post_init__(self) -> None:
        if self.sent_at is None:
            object.__setattr__(self, "sent_at", datetime.now(timezone.utc))


__all__: list[str] = ["SmsMessage", "ChatMessage", "Message", "SentMessage"]
