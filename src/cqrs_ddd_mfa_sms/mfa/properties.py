"""Provider property entries and the per-user property manager."""

from __future__ import annotations

import copy
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from .ports import IMfaPropertyStore


def coerce_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


@dataclass(frozen=True)
class ProviderEntry:
    """Typed view of a persisted provider entry.

    Attributes:
        active: Whether the SMS factor is enabled.
        mobile_number: Country-code prefixed number (``+...``).
        auth_code: Pending one-time code, empty when none is outstanding.
        attempts: Consecutive failed verifications.
        last_used: Unix time of the last successful verification (0 if never).
        updated: Unix time of the last modification.
        created: Unix time the entry was created.
    """

    active: bool = False
    mobile_number: str = ""
    auth_code: str = ""
    attempts: int = 0
    last_used: int = 0
    updated: int = 0
    created: int = 0

    @classmethod
    def from_properties(cls, properties: dict[str, Any]) -> ProviderEntry:
        return cls(
            active=bool(properties.get("active", False)),
            mobile_number=str(properties.get("mobileNumber") or ""),
            auth_code=str(properties.get("authCode") or ""),
            attempts=coerce_int(properties.get("attempts")),
            last_used=coerce_int(properties.get("lastUsed")),
            updated=coerce_int(properties.get("updated")),
            created=coerce_int(properties.get("created")),
        )


class ProviderPropertyManager:
    """Reads and writes the properties of one provider for one user.

    Every write stamps ``updated``; creating an entry also stamps ``created``.

    Example:
        ```python
        manager = ProviderPropertyManager(store, user_id="user-123", identifier="sms")
        if not await manager.has_provider_entry():
            await manager.create_provider_entry({"mobileNumber": "+15551234567"})
        entry = await manager.get_entry()
        ```
    """

    def __init__(
        self,
        store: IMfaPropertyStore,
        *,
        user_id: str,
        identifier: str,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self.store = store
        self.user_id = user_id
        self.identifier = identifier
        self._clock = clock or time.time

    def _now(self) -> int:
        return int(self._clock())

    async def has_provider_entry(self) -> bool:
        return await self.store.has_entry(self.user_id, self.identifier)

    async def get_properties(self) -> dict[str, Any]:
        """All properties, or an empty dict when no entry exists."""
        return await self.store.get_properties(self.user_id, self.identifier) or {}

    async def get_property(self, key: str, default: Any = None) -> Any:
        properties = await self.get_properties()
        value = properties.get(key)
        return default if value is None else value

    async def get_entry(self) -> ProviderEntry | None:
        """Typed entry, or None when the provider was never set up."""
        properties = await self.store.get_properties(self.user_id, self.identifier)
        if properties is None:
            return None
        return ProviderEntry.from_properties(properties)

    async def create_provider_entry(self, properties: dict[str, Any]) -> bool:
        now = self._now()
        return await self.store.create_entry(
            self.user_id,
            self.identifier,
            {**properties, "created": now, "updated": now},
        )

    async def update_properties(self, properties: dict[str, Any]) -> bool:
        return await self.store.update_properties(
            self.user_id,
            self.identifier,
            {**properties, "updated": self._now()},
        )


class InMemoryMfaPropertyStore(IMfaPropertyStore):
    """In-memory property store for TESTING ONLY.

    ⚠️ WARNING: Auth codes are stored in plain text in memory.
    Do NOT use in production!
    """

    def __init__(self) -> None:
        self._entries: dict[tuple[str, str], dict[str, Any]] = {}

    async def has_entry(self, user_id: str, identifier: str) -> bool:
        return (user_id, identifier) in self._entries

    async def get_properties(self, user_id: str, identifier: str) -> dict[str, Any] | None:
        entry = self._entries.get((user_id, identifier))
        return copy.deepcopy(entry) if entry is not None else None

    async def create_entry(self, user_id: str, identifier: str, properties: dict[str, Any]) -> bool:
        key = (user_id, identifier)
        if key in self._entries:
            return False
        self._entries[key] = copy.deepcopy(properties)
        return True

    async def update_properties(
        self, user_id: str, identifier: str, properties: dict[str, Any]
    ) -> bool:
        entry = self._entries.get((user_id, identifier))
        if entry is None:
            return False
        entry.update(copy.deepcopy(properties))
        return True

    def clear(self) -> None:
        """Remove all entries."""
        self._entries.clear()


__all__: list[str] = ["ProviderEntry", "ProviderPropertyManager", "InMemoryMfaPropertyStore"]
