"""Request and view payloads exchanged with the host framework."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class MfaViewType(Enum):
    """Which provider view the host is asking for."""

    SETUP = "setup"
    EDIT = "edit"
    AUTH = "auth"


@dataclass(frozen=True)
class MfaRequest:
    """Inbound request data relevant to the provider.

    Attributes:
        query_params: Parsed query string.
        parsed_body: Parsed form body.
    """

    query_params: dict[str, Any] = field(default_factory=dict)
    parsed_body: dict[str, Any] = field(default_factory=dict)

    def get_param(self, name: str, default: Any = None) -> Any:
        """Look up ``name`` in the query params first, then in the body."""
        if self.query_params.get(name) is not None:
            return self.query_params[name]
        if self.parsed_body.get(name) is not None:
            return self.parsed_body[name]
        return default


@dataclass(frozen=True)
class MfaView:
    """Renderable payload: a template name plus its variables."""

    template: str
    variables: dict[str, Any] = field(default_factory=dict)


__all__: list[str] = ["MfaViewType", "MfaRequest", "MfaView"]
