"""AWS Signature Version 4 request signing.

Implements the canonical request and the HMAC-SHA256 signing-key chain
without the AWS SDK.

See:
    https://docs.aws.amazon.com/general/latest/gr/sigv4-create-canonical-request.html
    https://docs.aws.amazon.com/general/latest/gr/sigv4-calculate-signature.html
"""

from __future__ import annotations

import hashlib
import hmac
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any
from urllib.parse import quote

ALGORITHM = "AWS4-HMAC-SHA256"
TERMINATOR = "aws4_request"
DATE_FORMAT = "%Y%m%d"
TIMESTAMP_FORMAT = "%Y%m%dT%H%M%SZ"


# ═══════════════════════════════════════════════════════════════
# CANONICAL REQUEST
# ═══════════════════════════════════════════════════════════════


def uri_encode(value: str) -> str:
    """Percent-encode per RFC 3986 (only ``A-Za-z0-9-_.~`` stay literal)."""
    return quote(value, safe="-_.~")


def _flatten(params: Mapping[str, Any], prefix: str = "") -> list[tuple[str, str]]:
    pairs: list[tuple[str, str]] = []
    for key, value in params.items():
        name = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            pairs.extend(_flatten(value, name))
        elif isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
            pairs.extend(_flatten({str(i): item for i, item in enumerate(value, start=1)}, name))
        elif value is None:
            continue
        elif isinstance(value, bool):
            pairs.append((name, "true" if value else "false"))
        else:
            pairs.append((name, str(value)))
    return pairs


def encode_query(params: Mapping[str, Any]) -> str:
    """Build the canonical query string.

    Nested mappings and sequences are flattened into dot-qualified keys
    (sequences are 1-indexed), so ``{"Attr": [{"Name": "x"}]}`` becomes
    ``Attr.1.Name=x``. Keys and values are RFC 3986 encoded and pairs are
    sorted by encoded key, byte-wise.
    """
    encoded = [(uri_encode(key), uri_encode(value)) for key, value in _flatten(params)]
    encoded.sort()
    return "&".join(f"{key}={value}" for key, value in encoded)


def canonical_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Lowercase header names, trim values and sort by name."""
    lowered = {name.lower(): str(value).strip() for name, value in headers.items()}
    return dict(sorted(lowered.items()))


def sha256_hex(data: bytes | str) -> str:
    if isinstance(data, str):
        data = data.encode("utf-8")
    return hashlib.sha256(data).hexdigest()


@dataclass(frozen=True)
class CanonicalRequest:
    """Byte-exact serialization of an HTTP request used as signing input.

    Attributes:
        method: Upper-case HTTP method.
        path: Canonical URI path.
        query_string: Output of ``encode_query``.
        headers: Canonical headers, sorted by lowercase name.
        payload_hash: Hex SHA-256 of the request body.
    """

    method: str
    path: str
    query_string: str
    headers: tuple[tuple[str, str], ...]
    payload_hash: str

    @property
    def signed_headers(self) -> str:
        """Semicolon-joined lowercase header names."""
        return ";".join(name for name, _ in self.headers)

    def to_string(self) -> str:
        header_block = "".join(f"{name}:{value}\n" for name, value in self.headers)
        return "\n".join(
            [
                self.method,
                self.path,
                self.query_string,
                header_block,
                self.signed_headers,
                self.payload_hash,
            ]
        )

    def hexdigest(self) -> str:
        """Hex SHA-256 of the canonical request string."""
        return sha256_hex(self.to_string())

    def __str__(self) -> str:
        return self.to_string()


def build_canonical_request(
    method: str,
    path: str,
    params: Mapping[str, Any],
    headers: Mapping[str, str],
    body: bytes | str = b"",
) -> CanonicalRequest:
    """Create the canonical request for the given request components.

    An empty body hashes to the SHA-256 of the empty string.
    """
    return CanonicalRequest(
        method=method.upper(),
        path=path or "/",
        query_string=encode_query(params),
        headers=tuple(canonical_headers(headers).items()),
        payload_hash=sha256_hex(body),
    )


# ═══════════════════════════════════════════════════════════════
# SIGNATURE
# ═══════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class SigningScope:
    """Credential scope binding a derived key to a date, region and service."""

    date: str
    region: str
    service: str

    def __str__(self) -> str:
        return "/".join([self.date, self.region, self.service, TERMINATOR])


def _hmac_sha256(key: bytes, message: str) -> bytes:
    return hmac.new(key, message.encode("utf-8"), hashlib.sha256).digest()


def derive_signing_key(secret_key: str, date: str, region: str, service: str) -> bytes:
    """Derive the SigV4 signing key.

    ``HMAC(HMAC(HMAC(HMAC("AWS4" + secret, date), region), service), "aws4_request")``
    """
    key = _hmac_sha256(f"AWS4{secret_key}".encode("utf-8"), date)
    key = _hmac_sha256(key, region)
    key = _hmac_sha256(key, service)
    return _hmac_sha256(key, TERMINATOR)


def build_string_to_sign(timestamp: str, scope: SigningScope, canonical_request_hash: str) -> str:
    return "\n".join([ALGORITHM, timestamp, str(scope), canonical_request_hash])


def calculate_signature(signing_key: bytes, string_to_sign: str) -> str:
    """Hex-encoded HMAC-SHA256 of the string to sign."""
    return hmac.new(signing_key, string_to_sign.encode("utf-8"), hashlib.sha256).hexdigest()


@dataclass(frozen=True)
class SignedRequest:
    """Result of signing: the query string and the headers to send."""

    method: str
    query_string: str
    headers: dict[str, str]
    signature: str
    canonical_request: CanonicalRequest


class SignatureV4Signer:
    """Signs requests for one set of credentials, region and service.

    Example:
        ```python
        signer = SignatureV4Signer("AKIA...", "secret", region="eu-west-1", service="sns")
        signed = signer.sign(
            "POST",
            "/",
            {"Action": "Publish"},
            {"Host": "sns.eu-west-1.amazonaws.com"},
        )
        signed.headers["Authorization"]
        ```
    """

    def __init__(
        self,
        access_key: str,
        secret_key: str,
        *,
        region: str,
        service: str,
        date_header: str = "Date",
    ) -> None:
        self.access_key = access_key
        self.secret_key = secret_key
        self.region = region
        self.service = service
        self.date_header = date_header

    def sign(
        self,
        method: str,
        path: str,
        params: Mapping[str, Any],
        headers: Mapping[str, str],
        body: bytes | str = b"",
        *,
        now: datetime | None = None,
    ) -> SignedRequest:
        """Sign the request.

        The date header is added to ``headers`` and signed. The returned
        headers include ``Authorization``; the input mapping is not mutated.

        Args:
            now: Signing time; defaults to the current UTC time. Date and
                timestamp come from this single reading.
        """
        now = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
        timestamp = now.strftime(TIMESTAMP_FORMAT)
        scope = SigningScope(now.strftime(DATE_FORMAT), self.region, self.service)

        request_headers = dict(headers)
        request_headers[self.date_header] = timestamp

        canonical = build_canonical_request(method, path, params, request_headers, body)
        string_to_sign = build_string_to_sign(timestamp, scope, canonical.hexdigest())
        signing_key = derive_signing_key(self.secret_key, scope.date, scope.region, scope.service)
        signature = calculate_signature(signing_key, string_to_sign)

        request_headers["Authorization"] = (
            f"{ALGORITHM} Credential={self.access_key}/{scope}, "
            f"SignedHeaders={canonical.signed_headers}, Signature={signature}"
        )
        return SignedRequest(
            method=canonical.method,
            query_string=canonical.query_string,
            headers=request_headers,
            signature=signature,
            canonical_request=canonical,
        )


__all__: list[str] = [
    "ALGORITHM",
    "uri_encode",
    "encode_query",
    "canonical_headers",
    "sha256_hex",
    "CanonicalRequest",
    "build_canonical_request",
    "SigningScope",
    "derive_signing_key",
    "build_string_to_sign",
    "calculate_signature",
    "SignedRequest",
    "SignatureV4Signer",
]
