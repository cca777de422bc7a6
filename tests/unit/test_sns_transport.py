"""Tests for the SNS SMS transport."""

from __future__ import annotations

import re
from datetime import datetime, timezone

import httpx
import pytest

from cqrs_ddd_mfa_sms.exceptions import (
    ApiContractError,
    DeliveryError,
    UnsupportedMessageError,
)
from cqrs_ddd_mfa_sms.sms import (
    ChatMessage,
    SmsMessage,
    SnsTransport,
    TransportFactory,
    build_canonical_request,
)

SIGNING_TIME = datetime(2015, 8, 30, 12, 36, 0, tzinfo=timezone.utc)
EXAMPLE_SECRET = "wJalrXUtnFEMI/K7MDENG+bPxRfiCYEXAMPLEKEY"

# Computed with openssl for SmsMessage("+447911123456", "Your code: 123456"),
# us-east-1 and SIGNING_TIME.
PUBLISH_QUERY = (
    "Action=Publish"
    "&Message=Your%20code%3A%20123456"
    "&MessageAttributes.entry.1.Name=AWS.SNS.SMS.MaxPrice"
    "&MessageAttributes.entry.1.Value.DataType=Number"
    "&MessageAttributes.entry.1.Value.StringValue=1.0"
    "&MessageAttributes.entry.2.Name=AWS.SNS.SMS.SMSType"
    "&MessageAttributes.entry.2.Value.DataType=String"
    "&MessageAttributes.entry.2.Value.StringValue=Transactional"
    "&MessageAttributes.entry.3.Name=AWS.SNS.SMS.SenderID"
    "&MessageAttributes.entry.3.Value.DataType=String"
    "&MessageAttributes.entry.3.Value.StringValue=TYPO3"
    "&PhoneNumber=%2B447911123456"
    "&Version=2010-03-31"
)
PUBLISH_CANONICAL_HASH = "aa9139f546245bb506751750060dad12b615d28372d9f83ac182a290cda4bba5"
PUBLISH_SIGNATURE = "d00225d28d7c786ecdb8b48ca306b890459a184a084d3efa7016c6270fcdc690"

PUBLISH_RESPONSE = {
    "PublishResponse": {
        "PublishResult": {"MessageId": "94f20ce6-13c5-43a0-9a9e-ca52d816e90b"},
        "ResponseMetadata": {"RequestId": "f187a3c1-376f-11df-8963-01868b7c937a"},
    }
}


class RecordingHandler:
    """httpx.MockTransport handler that records requests."""

    def __init__(self, response: httpx.Response) -> None:
        self.response = response
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.response


def make_transport(handler: RecordingHandler, region: str | None = "us-east-1") -> SnsTransport:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return SnsTransport(
        "AKIAEXAMPLE",
        EXAMPLE_SECRET,
        region,
        client=client,
        clock=lambda: SIGNING_TIME,
    )


@pytest.fixture
def message() -> SmsMessage:
    return SmsMessage(" +447911123456 ", "Your code: 123456")


class TestSnsTransportIdentity:
    def test_string_identity(self) -> None:
        transport = SnsTransport("AKIAEXAMPLE", "secret", "eu-central-1")

        assert str(transport) == "sns+https://AKIAEXAMPLE@sns.eu-central-1.amazonaws.com"

    def test_default_region(self) -> None:
        transport = SnsTransport("AKIAEXAMPLE", "secret", None)

        assert transport.region == "eu-west-1"
        assert transport.endpoint == "sns.eu-west-1.amazonaws.com"

    def test_secret_is_not_part_of_identity(self) -> None:
        transport = SnsTransport("AKIAEXAMPLE", "top-secret", "eu-west-1")

        assert "top-secret" not in str(transport)

    def test_supports_only_sms(self, message: SmsMessage) -> None:
        transport = SnsTransport("AKIAEXAMPLE", "secret")

        assert transport.supports(message)
        assert not transport.supports(ChatMessage("hello"))


class TestSnsTransportParameters:
    def test_publish_parameters(self, message: SmsMessage) -> None:
        params = SnsTransport("AK", "secret").build_parameters(message)

        assert params["Action"] == "Publish"
        assert params["Version"] == "2010-03-31"
        assert params["Message"] == "Your code: 123456"
        assert params["PhoneNumber"] == "+447911123456"
        assert [entry["Name"] for entry in params["MessageAttributes"]["entry"]] == [
            "AWS.SNS.SMS.MaxPrice",
            "AWS.SNS.SMS.SMSType",
            "AWS.SNS.SMS.SenderID",
        ]
        assert params["MessageAttributes"]["entry"][0]["Value"] == {
            "DataType": "Number",
            "StringValue": "1.0",
        }


class TestSnsTransportSend:
    @pytest.mark.asyncio
    async def test_send_returns_message_id(self, message: SmsMessage) -> None:
        handler = RecordingHandler(httpx.Response(200, json=PUBLISH_RESPONSE))
        transport = make_transport(handler)

        sent = await transport.send(message)

        assert sent.message_id == "94f20ce6-13c5-43a0-9a9e-ca52d816e90b"
        assert sent.original_message is message
        assert sent.transport == "sns+https://AKIAEXAMPLE@sns.us-east-1.amazonaws.com"
        assert sent.sent_at is not None

    @pytest.mark.asyncio
    async def test_request_shape(self, message: SmsMessage) -> None:
        handler = RecordingHandler(httpx.Response(200, json=PUBLISH_RESPONSE))
        transport = make_transport(handler)

        await transport.send(message)

        assert len(handler.requests) == 1
        request = handler.requests[0]
        query = request.url.query.decode()
        assert request.method == "POST"
        assert request.url.host == "sns.us-east-1.amazonaws.com"
        assert request.url.path == "/"
        assert request.content == b""
        # Byte-wise key order puts "Message" before "MessageAttributes..."
        assert query.startswith(
            "Action=Publish&Message=Your%20code%3A%20123456"
            "&MessageAttributes.entry.1.Name=AWS.SNS.SMS.MaxPrice"
        )
        assert "PhoneNumber=%2B447911123456" in query
        assert query.endswith("&Version=2010-03-31")

    @pytest.mark.asyncio
    async def test_request_is_signed(self, message: SmsMessage) -> None:
        handler = RecordingHandler(httpx.Response(200, json=PUBLISH_RESPONSE))
        transport = make_transport(handler)

        await transport.send(message)

        request = handler.requests[0]
        authorization = request.headers["Authorization"]
        assert request.headers["Date"] == "20150830T123600Z"
        assert request.headers["Accept"] == "application/json"
        assert authorization.startswith(
            "AWS4-HMAC-SHA256 Credential=AKIAEXAMPLE/20150830/us-east-1/sns/aws4_request, "
            "SignedHeaders=date;host, Signature="
        )

    @pytest.mark.asyncio
    async def test_known_answer_signature(self, message: SmsMessage) -> None:
        handler = RecordingHandler(httpx.Response(200, json=PUBLISH_RESPONSE))
        transport = make_transport(handler)

        await transport.send(message)

        request = handler.requests[0]
        assert request.url.query.decode() == PUBLISH_QUERY
        assert request.headers["Authorization"] == (
            "AWS4-HMAC-SHA256 "
            "Credential=AKIAEXAMPLE/20150830/us-east-1/sns/aws4_request, "
            "SignedHeaders=date;host, "
            f"Signature={PUBLISH_SIGNATURE}"
        )

    def test_known_answer_canonical_request(self, message: SmsMessage) -> None:
        transport = SnsTransport("AKIAEXAMPLE", EXAMPLE_SECRET, "us-east-1")
        headers = {"Host": transport.endpoint, "Date": "20150830T123600Z"}

        canonical = build_canonical_request(
            "POST", "/", transport.build_parameters(message), headers
        )

        assert canonical.query_string == PUBLISH_QUERY
        assert canonical.hexdigest() == PUBLISH_CANONICAL_HASH

    @pytest.mark.asyncio
    async def test_non_200_raises_delivery_error(self, message: SmsMessage) -> None:
        handler = RecordingHandler(httpx.Response(503))
        transport = make_transport(handler)

        with pytest.raises(DeliveryError, match="Unable to send SMS: Service Unavailable") as exc:
            await transport.send(message)

        assert exc.value.status_code == 503
        assert exc.value.reason == "Service Unavailable"
        assert not isinstance(exc.value, ApiContractError)

    @pytest.mark.asyncio
    async def test_missing_message_id_raises_api_contract_error(
        self, message: SmsMessage
    ) -> None:
        handler = RecordingHandler(
            httpx.Response(200, json={"PublishResponse": {"PublishResult": {}}})
        )
        transport = make_transport(handler)

        with pytest.raises(ApiContractError, match="Unknown API error"):
            await transport.send(message)

    @pytest.mark.asyncio
    async def test_non_json_body_raises_api_contract_error(self, message: SmsMessage) -> None:
        handler = RecordingHandler(httpx.Response(200, text="<PublishResponse/>"))
        transport = make_transport(handler)

        with pytest.raises(ApiContractError):
            await transport.send(message)

    @pytest.mark.asyncio
    async def test_unexpected_json_shape_raises_api_contract_error(
        self, message: SmsMessage
    ) -> None:
        handler = RecordingHandler(httpx.Response(200, json={"PublishResponse": "ok"}))
        transport = make_transport(handler)

        with pytest.raises(ApiContractError):
            await transport.send(message)

    @pytest.mark.asyncio
    async def test_chat_message_is_rejected_without_request(self) -> None:
        handler = RecordingHandler(httpx.Response(200, json=PUBLISH_RESPONSE))
        transport = make_transport(handler)

        with pytest.raises(UnsupportedMessageError):
            await transport.send(ChatMessage("hello"))

        assert handler.requests == []


class TestDsnToSignedRequest:
    @pytest.mark.asyncio
    async def test_publish_through_factory(self) -> None:
        handler = RecordingHandler(httpx.Response(200, json=PUBLISH_RESPONSE))
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        factory = TransportFactory(http_client=client)

        transport = factory.get(
            "sns+https://AKIAEXAMPLE:wJalrXUtnFEMI%2FK7MDENG%2BbPxRfiCYEXAMPLEKEY"
            "@default?region=us-east-1"
        )
        sent = await transport.send(SmsMessage("+15551234567", "Your code: 123456"))

        request = handler.requests[0]
        query = request.url.query.decode()
        authorization = request.headers["Authorization"]
        date = request.headers["Date"][:8]
        assert request.url.host == "sns.us-east-1.amazonaws.com"
        assert query.startswith(
            "Action=Publish&Message=Your%20code%3A%20123456"
            "&MessageAttributes.entry.1.Name=AWS.SNS.SMS.MaxPrice"
        )
        assert "&PhoneNumber=%2B15551234567&" in query
        assert re.fullmatch(r"[0-9]{8}", date)
        assert f"Credential=AKIAEXAMPLE/{date}/us-east-1/sns/aws4_request, " in authorization
        assert sent.transport == "sns+https://AKIAEXAMPLE@sns.us-east-1.amazonaws.com"
        assert sent.message_id == "94f20ce6-13c5-43a0-9a9e-ca52d816e90b"
