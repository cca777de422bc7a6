"""Non-network transports for development and tests."""

from __future__ import annotations

import logging

from ..exceptions import UnsupportedMessageError
from .message import Message, SentMessage, SmsMessage
from .ports import ITransport

logger = logging.getLogger(__name__)


class NullTransport(ITransport):
    """Accepts every message and discards it (``null://null``)."""

    def supports(self, message: Message) -> bool:
        return True

    async def send(self, message: Message) -> SentMessage:
        return SentMessage(message, str(self))

    def __str__(self) -> str:
        return "null"


class ConsoleTransport(ITransport):
    """
    Development adapter that writes SMS messages to the log (``console://default``).
    """

    def __init__(self, output_to_stdout: bool = False):
        self.output_to_stdout = output_to_stdout

    def supports(self, message: Message) -> bool:
        return isinstance(message, SmsMessage)

    async def send(self, message: Message) -> SentMessage:
        if not isinstance(message, SmsMessage):
            raise UnsupportedMessageError(
                f"ConsoleTransport does not support {type(message).__name__}"
            )

        output = "\n".join(
            [
                "═" * 50,
                "SMS SENT VIA CONSOLE",
                f"To:   {message.phone}",
                f"Body: {message.subject}",
                "═" * 50,
            ]
        )
        logger.info(output)
        if self.output_to_stdout:
            print(output)

        return SentMessage(message, str(self), message_id="console-debug")

    def __str__(self) -> str:
        return "console"


class InMemoryTransport(ITransport):
    """
    Test double (Fake) that stores sent SMS messages in a list for assertions.
    """

    def __init__(self) -> None:
        self.sent_messages: list[SmsMessage] = []

    def supports(self, message: Message) -> bool:
        return isinstance(message, SmsMessage)

    async def send(self, message: Message) -> SentMessage:
        if not isinstance(message, SmsMessage):
            raise UnsupportedMessageError(
                f"InMemoryTransport does not support {type(message).__name__}"
            )
        self.sent_messages.append(message)
        return SentMessage(message, str(self), message_id=f"test-{len(self.sent_messages)}")

    def assert_sent(self, phone: str, count: int = 1) -> None:
        """Helper for test assertions."""
        matches = [m for m in self.sent_messages if m.phone == phone]
        if len(matches) != count:
            raise AssertionError(
                f"Expected {count} messages to {phone}, but found {len(matches)}."
            )

    def clear(self) -> None:
        """Clear all sent messages."""
        self.sent_messages.clear()

    def __str__(self) -> str:
        return "memory"


__all__: list[str] = ["NullTransport", "ConsoleTransport", "InMemoryTransport"]
