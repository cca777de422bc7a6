"""MFA ports (protocols) consumed by the SMS provider.

The host authentication framework supplies these collaborators: property
storage, translation, flash messages and (optionally) an audit store.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .audit import MfaAuditEvent
    from .messages import FlashMessage


@runtime_checkable
class IMfaPropertyStore(Protocol):
    """Protocol for persisting MFA provider properties.

    Entries are keyed by the owning user and the provider identifier.
    Implementations should make ``update_properties`` a single-row
    update (merge the given keys into the stored entry) so that concurrent
    requests for the same entry do not lose an attempt increment.
    """

    async def has_entry(self, user_id: str, identifier: str) -> bool:
        """Check whether an entry exists.

        Args:
            user_id: Owning user identifier.
            identifier: Provider identifier (e.g. ``"sms"``).
        """
        ...

    async def get_properties(self, user_id: str, identifier: str) -> dict[str, Any] | None:
        """Load all properties of an entry.

        Returns:
            A copy of the stored properties, or None if no entry exists.
        """
        ...

    async def create_entry(self, user_id: str, identifier: str, properties: dict[str, Any]) -> bool:
        """Create a new entry.

        Returns:
            True if the entry was created.
        """
        ...

    async def update_properties(
        self, user_id: str, identifier: str, properties: dict[str, Any]
    ) -> bool:
        """Merge ``properties`` into an existing entry.

        Returns:
            True if the entry exists and was updated.
        """
        ...


@runtime_checkable
class ITranslator(Protocol):
    """Resolves translation keys to localized strings.

    The ``sms.message`` text must contain the literal placeholder ``{code}``;
    it is substituted verbatim, so other braces in the text are left alone.
    """

    def translate(self, key: str) -> str:
        """Return the localized string for ``key`` (or ``key`` if unknown)."""
        ...


@runtime_checkable
class IFlashMessageQueue(Protocol):
    """Queue of user-visible notices rendered by the host backend."""

    def add(self, message: FlashMessage) -> None:
        """Enqueue a flash message."""
        ...


@runtime_checkable
class IMfaAuditStore(Protocol):
    """Protocol for recording MFA audit events."""

    async def record(self, event: MfaAuditEvent) -> None:
        """Record an audit event."""
        ...


__all__: list[str] = [
    "IMfaPropertyStore",
    "ITranslator",
    "IFlashMessageQueue",
    "IMfaAuditStore",
]
