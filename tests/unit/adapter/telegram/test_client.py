"""Unit tests for the Telegram Bot API gateway."""

import json

import httpx
import pytest

from gate.adapter.telegram import RealTelegramGateway
from gate.adapter.telegram.client import ALLOWED_UPDATES
from gate.domain.error import GatewayUnavailableError, RemovalFailedError
from gate.domain.value import ChatId, UserId

BOT_URL = "https://api.telegram.test/bot123:abc"
CHANNEL = ChatId(-1001234567890)


class FakeBotAPI:
    """Answers Bot API calls from a table of canned results."""

    def __init__(self, results: dict | None = None, errors: dict | None = None):
        self.results = results or {}
        self.errors = errors or {}
        self.requests: list[tuple[str, dict]] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        method = request.url.path.rsplit("/", 1)[-1]
        params = json.loads(request.content or b"{}")
        self.requests.append((method, params))
        if method in self.errors:
            return httpx.Response(
                400,
                json={
                    "ok": False,
                    "error_code": 400,
                    "description": self.errors[method],
                },
            )
        return httpx.Response(
            200, json={"ok": True, "result": self.results.get(method, True)}
        )

    def methods(self) -> list[str]:
        return [method for method, _ in self.requests]


def make_gateway(api: FakeBotAPI) -> RealTelegramGateway:
    client = httpx.AsyncClient(transport=httpx.MockTransport(api))
    return RealTelegramGateway(client, BOT_URL, request_timeout=5.0)


class TestCreateInviteLink:
    """Tests for create_invite_link."""

    @pytest.mark.asyncio
    async def test_sends_link_parameters(self):
        # Arrange
        api = FakeBotAPI(
            results={"createChatInviteLink": {"invite_link": "https://t.me/+abc"}}
        )
        gateway = make_gateway(api)

        # Act
        link = await gateway.create_invite_link(
            CHANNEL, expire_date=1705363200, creates_join_request=True, name="gate-1"
        )

        # Assert
        assert link == "https://t.me/+abc"
        method, params = api.requests[0]
        assert method == "createChatInviteLink"
        assert params == {
            "chat_id": CHANNEL,
            "name": "gate-1",
            "expire_date": 1705363200,
            "creates_join_request": True,
        }

    @pytest.mark.asyncio
    async def test_api_error_becomes_gateway_unavailable(self):
        api = FakeBotAPI(errors={"createChatInviteLink": "Bad Request: not enough rights"})
        gateway = make_gateway(api)

        with pytest.raises(GatewayUnavailableError, match="not enough rights"):
            await gateway.create_invite_link(CHANNEL, 1705363200, True, "gate-1")

    @pytest.mark.asyncio
    async def test_transport_error_becomes_gateway_unavailable(self):
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = httpx.AsyncClient(transport=httpx.MockTransport(refuse))
        gateway = RealTelegramGateway(client, BOT_URL)

        with pytest.raises(GatewayUnavailableError):
            await gateway.create_invite_link(CHANNEL, 1705363200, True, "gate-1")


class TestJoinDecisions:
    """Tests for approving and declining join requests."""

    @pytest.mark.asyncio
    async def test_approve_and_decline(self):
        api = FakeBotAPI()
        gateway = make_gateway(api)

        await gateway.approve_join_request(CHANNEL, UserId(100))
        await gateway.decline_join_request(CHANNEL, UserId(200))

        assert api.requests == [
            ("approveChatJoinRequest", {"chat_id": CHANNEL, "user_id": 100}),
            ("declineChatJoinRequest", {"chat_id": CHANNEL, "user_id": 200}),
        ]

    @pytest.mark.asyncio
    async def test_expired_request_raises(self):
        api = FakeBotAPI(errors={"approveChatJoinRequest": "HIDE_REQUESTER_MISSING"})
        gateway = make_gateway(api)

        with pytest.raises(GatewayUnavailableError):
            await gateway.approve_join_request(CHANNEL, UserId(100))


class TestRemoveMember:
    """Tests for remove_member."""

    @pytest.mark.asyncio
    async def test_bans_then_unbans(self):
        """Removal is a ban immediately lifted, so the user can rejoin later."""
        # Arrange
        api = FakeBotAPI()
        gateway = make_gateway(api)

        # Act
        await gateway.remove_member(CHANNEL, UserId(100))

        # Assert
        assert api.methods() == ["banChatMember", "unbanChatMember"]
        assert api.requests[1][1]["only_if_banned"] is True

    @pytest.mark.asyncio
    async def test_failure_raises_removal_failed(self):
        api = FakeBotAPI(errors={"banChatMember": "Bad Request: user not found"})
        gateway = make_gateway(api)

        with pytest.raises(RemovalFailedError) as exc_info:
            await gateway.remove_member(CHANNEL, UserId(100))

        assert exc_info.value.user_id == 100
        assert exc_info.value.reason == "Bad Request: user not found"
        assert api.methods() == ["banChatMember"]


class TestSendMessage:
    """Tests for send_message."""

    @pytest.mark.asyncio
    async def test_posts_text(self):
        api = FakeBotAPI()
        gateway = make_gateway(api)

        await gateway.send_message(ChatId(100), "Invalid code.")

        assert api.requests == [("sendMessage", {"chat_id": 100, "text": "Invalid code."})]

    @pytest.mark.asyncio
    async def test_non_json_response_raises(self):
        def broken(request: httpx.Request) -> httpx.Response:
            return httpx.Response(502, text="<html>Bad Gateway</html>")

        client = httpx.AsyncClient(transport=httpx.MockTransport(broken))
        gateway = RealTelegramGateway(client, BOT_URL)

        with pytest.raises(GatewayUnavailableError, match="502"):
            await gateway.send_message(ChatId(100), "hi")


class TestGetUpdates:
    """Tests for get_updates."""

    @pytest.mark.asyncio
    async def test_requests_only_relevant_update_types(self):
        # Arrange
        updates = [{"update_id": 7, "message": {"text": "/start"}}]
        api = FakeBotAPI(results={"getUpdates": updates})
        gateway = make_gateway(api)

        # Act
        result = await gateway.get_updates(offset=7, timeout=30)

        # Assert
        assert result == updates
        method, params = api.requests[0]
        assert method == "getUpdates"
        assert params == {
            "timeout": 30,
            "allowed_updates": ALLOWED_UPDATES,
            "offset": 7,
        }

    @pytest.mark.asyncio
    async def test_first_poll_omits_offset(self):
        api = FakeBotAPI(results={"getUpdates": []})
        gateway = make_gateway(api)

        assert await gateway.get_updates(offset=None, timeout=30) == []
        assert "offset" not in api.requests[0][1]
