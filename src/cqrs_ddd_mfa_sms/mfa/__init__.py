"""SMS multi-factor authentication provider.

Usage:
    ```python
    from cqrs_ddd_mfa_sms.mfa import ProviderPropertyManager, SmsMfaProvider

    provider = SmsMfaProvider(config, flash_messages=queue, audit_store=audit)
    manager = ProviderPropertyManager(store, user_id="user-123", identifier="sms")
    view = await provider.handle_request(request, manager, MfaViewType.AUTH)
    ```
"""

from __future__ import annotations

from .audit import InMemoryMfaAuditStore, MfaAuditEvent, MfaEventType
from .messages import (
    DEFAULT_MESSAGES,
    DictTranslator,
    FlashMessage,
    FlashSeverity,
    InMemoryFlashMessageQueue,
)
from .ports import IFlashMessageQueue, IMfaAuditStore, IMfaPropertyStore, ITranslator
from .properties import InMemoryMfaPropertyStore, ProviderEntry, ProviderPropertyManager
from .provider import (
    AUTH_CODE_LENGTH,
    SmsMfaProvider,
    generate_auth_code,
    normalize_mobile_number,
    validate_mobile_number,
)
from .views import MfaRequest, MfaView, MfaViewType

__all__: list[str] = [
    # Ports
    "IMfaPropertyStore",
    "ITranslator",
    "IFlashMessageQueue",
    "IMfaAuditStore",
    # Provider
    "SmsMfaProvider",
    "AUTH_CODE_LENGTH",
    "generate_auth_code",
    "normalize_mobile_number",
    "validate_mobile_number",
    # Properties
    "ProviderEntry",
    "ProviderPropertyManager",
    "InMemoryMfaPropertyStore",
    # Views
    "MfaViewType",
    "MfaRequest",
    "MfaView",
    # Messages
    "DEFAULT_MESSAGES",
    "DictTranslator",
    "FlashMessage",
    "FlashSeverity",
    "InMemoryFlashMessageQueue",
    # Audit
    "MfaEventType",
    "MfaAuditEvent",
    "InMemoryMfaAuditStore",
]
