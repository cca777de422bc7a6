"""Test configuration and fixtures."""

from __future__ import annotations

import pytest

from cqrs_ddd_mfa_sms.config import MfaSmsConfig
from cqrs_ddd_mfa_sms.mfa import (
    InMemoryFlashMessageQueue,
    InMemoryMfaAuditStore,
    InMemoryMfaPropertyStore,
    ProviderPropertyManager,
    SmsMfaProvider,
)
from cqrs_ddd_mfa_sms.sms import GenericTransportFactory, InMemoryTransport, TransportFactory

# 2015-08-30 12:36:00 UTC
FIXED_NOW = 1440938160


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests that require external services",
    )


class FakeClock:
    """Deterministic unix-time clock that tests can advance."""

    def __init__(self, now: float = FIXED_NOW) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def config() -> MfaSmsConfig:
    """Provider config routed to the in-memory transport."""
    return MfaSmsConfig(dsn="memory://default", maxAttempts=3)


@pytest.fixture
def transport() -> InMemoryTransport:
    return InMemoryTransport()


@pytest.fixture
def transport_factory(transport: InMemoryTransport) -> TransportFactory:
    return TransportFactory(GenericTransportFactory().register("memory", lambda dsn: transport))


@pytest.fixture
def property_store() -> InMemoryMfaPropertyStore:
    return InMemoryMfaPropertyStore()


@pytest.fixture
def properties(
    property_store: InMemoryMfaPropertyStore, clock: FakeClock
) -> ProviderPropertyManager:
    """Property manager for a test user and the SMS provider."""
    return ProviderPropertyManager(property_store, user_id="user-123", identifier="sms", clock=clock)


@pytest.fixture
def flash_messages() -> InMemoryFlashMessageQueue:
    return InMemoryFlashMessageQueue()


@pytest.fixture
def audit_store() -> InMemoryMfaAuditStore:
    return InMemoryMfaAuditStore()


@pytest.fixture
def provider(
    config: MfaSmsConfig,
    transport_factory: TransportFactory,
    flash_messages: InMemoryFlashMessageQueue,
    audit_store: InMemoryMfaAuditStore,
    clock: FakeClock,
) -> SmsMfaProvider:
    return SmsMfaProvider(
        config,
        transport_factory=transport_factory,
        flash_messages=flash_messages,
        audit_store=audit_store,
        clock=clock,
    )
