"""Translation catalogue and flash messages for user-facing notices."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from .ports import IFlashMessageQueue, ITranslator

DEFAULT_MESSAGES: dict[str, str] = {
    "sms.message": "Your authentication code is: {code}",
    "error.dsn.invalid.title": "SMS transport not configured",
    "error.dsn.invalid.message": (
        "No valid DSN is configured for the SMS provider. Please contact your administrator."
    ),
    "error.mobileNumber.empty.title": "Mobile number missing",
    "error.mobileNumber.empty.message": "Please enter your mobile number.",
    "error.mobileNumber.missingCountryPrefix.title": "Country code missing",
    "error.mobileNumber.missingCountryPrefix.message": (
        "The mobile number must start with the country code, e.g. +49."
    ),
}


class FlashSeverity(Enum):
    """Severity of a flash message."""

    NOTICE = "notice"
    INFO = "info"
    OK = "ok"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class FlashMessage:
    """Immutable user-visible notice."""

    message: str
    title: str = ""
    severity: FlashSeverity = FlashSeverity.ERROR
    store_in_session: bool = True


class DictTranslator(ITranslator):
    """Translator backed by a plain mapping.

    Falls back to DEFAULT_MESSAGES and finally to the key itself.

    Example:
        ```python
        translator = DictTranslator({"sms.message": "Ihr Code lautet: {code}"})
        ```
    """

    def __init__(self, messages: Mapping[str, str] | None = None) -> None:
        self._messages = {**DEFAULT_MESSAGES, **(messages or {})}

    def translate(self, key: str) -> str:
        return self._messages.get(key, key)


class InMemoryFlashMessageQueue(IFlashMessageQueue):
    """Collects flash messages in a list (tests, CLI hosts)."""

    def __init__(self) -> None:
        self.messages: list[FlashMessage] = []

    def add(self, message: FlashMessage) -> None:
        self.messages.append(message)

    def clear(self) -> None:
        self.messages.clear()


__all__: list[str] = [
    "DEFAULT_MESSAGES",
    "FlashSeverity",
    "FlashMessage",
    "DictTranslator",
    "InMemoryFlashMessageQueue",
]
