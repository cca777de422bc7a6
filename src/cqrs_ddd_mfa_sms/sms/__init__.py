"""SMS transports: message types, DSN resolution and the signed SNS transport."""

from __future__ import annotations

from .dsn import Dsn
from .factory import GenericTransportFactory, TransportFactory
from .memory import ConsoleTransport, InMemoryTransport, NullTransport
from .message import ChatMessage, Message, SentMessage, SmsMessage
from .ports import ITransport, ITransportFactory
from .signing import (
    CanonicalRequest,
    SignatureV4Signer,
    SignedRequest,
    SigningScope,
    build_canonical_request,
    build_string_to_sign,
    calculate_signature,
    derive_signing_key,
    encode_query,
)
from .sns import SnsTransport

__all__: list[str] = [
    # Ports
    "ITransport",
    "ITransportFactory",
    # Messages
    "Message",
    "SmsMessage",
    "ChatMessage",
    "SentMessage",
    # Resolution
    "Dsn",
    "TransportFactory",
    "GenericTransportFactory",
    # Transports
    "SnsTransport",
    "NullTransport",
    "ConsoleTransport",
    "InMemoryTransport",
    # Signing
    "CanonicalRequest",
    "SigningScope",
    "SignedRequest",
    "SignatureV4Signer",
    "build_canonical_request",
    "build_string_to_sign",
    "calculate_signature",
    "derive_signing_key",
    "encode_query",
]
