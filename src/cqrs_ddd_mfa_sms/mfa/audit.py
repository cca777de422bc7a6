"""Audit events for SMS MFA operations."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from .ports import IMfaAuditStore


class MfaEventType(Enum):
    """Types of MFA audit events.

    Event naming follows the pattern: `auth.mfa.<action>`
    """

    ENABLED = "auth.mfa.enabled"
    DISABLED = "auth.mfa.disabled"
    VERIFIED = "auth.mfa.verified"
    FAILED = "auth.mfa.failed"
    LOCKED = "auth.mfa.locked"
    UNLOCKED = "auth.mfa.unlocked"
    CODE_SENT = "auth.mfa.code_sent"


@dataclass(frozen=True)
class MfaAuditEvent:
    """MFA audit event.

    Attributes:
        event_type: The type of MFA event.
        principal_id: The user the provider entry belongs to.
        provider: Provider identifier (``"sms"``).
        timestamp: When the event occurred (UTC).
        success: Whether the operation was successful.
        metadata: Additional event-specific data. Never contains auth codes.
    """

    event_type: MfaEventType
    principal_id: str
    provider: str = "sms"
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    success: bool = True
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert event to dictionary for serialization."""
        return {
            "event_type": self.event_type.value,
            "principal_id": self.principal_id,
            "provider": self.provider,
            "timestamp": self.timestamp.isoformat(),
            "success": self.success,
            "metadata": self.metadata,
        }


class InMemoryMfaAuditStore(IMfaAuditStore):
    """In-memory implementation of IMfaAuditStore.

    Note:
        Events are stored in memory and will be lost on restart.
        Not suitable for production use.
    """

    def __init__(self) -> None:
        self._events: list[MfaAuditEvent] = []
        self._by_principal: dict[str, list[int]] = defaultdict(list)

    async def record(self, event: MfaAuditEvent) -> None:
        self._by_principal[event.principal_id].append(len(self._events))
        self._events.append(event)

    async def get_events(self, principal_id: str, *, limit: int = 100) -> list[MfaAuditEvent]:
        """Events for a principal, most recent first."""
        indices = self._by_principal.get(principal_id, [])
        return [self._events[idx] for idx in reversed(indices)][:limit]

    def count_by_type(self, event_type: MfaEventType) -> int:
        return sum(1 for event in self._events if event.event_type == event_type)

    def clear(self) -> None:
        self._events.clear()
        self._by_principal.clear()


__all__: list[str] = ["MfaEventType", "MfaAuditEvent", "InMemoryMfaAuditStore"]
