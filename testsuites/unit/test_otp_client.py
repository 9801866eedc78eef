import httpx
import pytest

from pomframework.config import OtpConfiguration
from pomframework.otp_client import OtpRetrievalError, SmsOtpClient


def _otp_config(**overrides):
    values = dict(
        api_base_url="https://sms.test",
        account_sid="AC123",
        auth_token="token",
        phone_number="+15550001111",
        poll_attempts=3,
        poll_interval_ms=0,
        initial_delay_ms=0,
    )
    values.update(overrides)
    return OtpConfiguration(**values)


def _transport(responses, seen=None):
    queue = list(responses)

    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        # the last entry repeats for any further polls
        status, payload = queue.pop(0) if len(queue) > 1 else queue[0]
        return httpx.Response(status, json=payload)

    return httpx.MockTransport(handler)


def _messages(*bodies):
    return 200, {"messages": [{"body": body} for body in bodies]}


@pytest.mark.asyncio
async def test_fetch_code_from_latest_message():
    seen = []
    client = SmsOtpClient(_otp_config(), transport=_transport([_messages("Your code is 482913")], seen))

    assert await client.fetch_code() == "482913"

    request = seen[0]
    assert request.url.path == "/2010-04-01/Accounts/AC123/Messages.json"
    assert request.url.params["To"] == "+15550001111"
    assert request.url.params["PageSize"] == "1"
    assert request.headers["Authorization"].startswith("Basic ")


@pytest.mark.asyncio
async def test_fetch_code_polls_until_message_arrives():
    seen = []
    responses = [_messages(), _messages("no digits here"), _messages("Code: 123456")]
    client = SmsOtpClient(_otp_config(), transport=_transport(responses, seen))

    assert await client.fetch_code() == "123456"
    assert len(seen) == 3


@pytest.mark.asyncio
async def test_fetch_code_survives_http_errors():
    responses = [(500, {"message": "busy"}), _messages("000111")]
    async with SmsOtpClient(_otp_config(), transport=_transport(responses)) as client:
        assert await client.fetch_code() == "000111"


@pytest.mark.asyncio
async def test_fetch_code_gives_up_after_attempts():
    seen = []
    client = SmsOtpClient(_otp_config(poll_attempts=2), transport=_transport([_messages()], seen))

    with pytest.raises(OtpRetrievalError, match="2 attempt"):
        await client.fetch_code()
    assert len(seen) == 2


@pytest.mark.asyncio
async def test_unconfigured_client_fails_fast():
    client = SmsOtpClient(_otp_config(auth_token=""), transport=_transport([_messages("123456")]))

    with pytest.raises(OtpRetrievalError, match="not configured"):
        await client.fetch_code()


def test_extract_code_uses_pattern():
    client = SmsOtpClient(_otp_config(code_pattern=r"\d{4}"))

    assert client.extract_code("PIN 9876 expires") == "9876"
    assert client.extract_code("") is None


def test_repr_hides_token():
    assert "token" not in repr(_otp_config(auth_token="token-value"))
