"""Telegram Bot API client implementation.

Implements the channel gateway on top of the Bot API HTTP interface,
plus long polling for inbound updates.
"""

from typing import Any

import httpx
import logfire

from gate.adapter.error import TelegramAPIError
from gate.domain.error import GatewayUnavailableError, RemovalFailedError
from gate.domain.service.gateway import ChannelGateway
from gate.domain.value import ChatId, UserId

ALLOWED_UPDATES = ["message", "chat_join_request"]


class TelegramGateway(ChannelGateway):
    """Base class for Telegram gateways.

    Provides type distinction for dependency injection and adds the
    inbound side of the Bot API.
    """

    async def get_updates(self, offset: int | None, timeout: int) -> list[dict]:
        """Long-poll for new updates.

        Args:
            offset: Identifier of the first update to return
            timeout: Server-side long-poll timeout in seconds

        Returns:
            Raw update objects

        Raises:
            GatewayUnavailableError: If the call fails
        """
        raise NotImplementedError


class RealTelegramGateway(TelegramGateway):
    """Telegram gateway talking to the Bot API over HTTPS."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        bot_url: str,
        request_timeout: float = 60.0,
    ) -> None:
        """Initialize Telegram gateway.

        Args:
            client: Shared HTTP client
            bot_url: Base URL including the bot token
            request_timeout: Timeout for regular method calls, in seconds
        """
        self.client = client
        self.bot_url = bot_url
        self.request_timeout = request_timeout

    async def _call(
        self,
        method: str,
        params: dict[str, Any],
        timeout: float | None = None,
    ) -> Any:
        """Call a Bot API method.

        Args:
            method: Bot API method name
            params: JSON parameters
            timeout: Optional per-call timeout override

        Returns:
            The ``result`` field of the response

        Raises:
            TelegramAPIError: If the transport fails or the API reports an error
        """
        try:
            response = await self.client.post(
                f"{self.bot_url}/{method}",
                json=params,
                timeout=timeout or self.request_timeout,
            )
        except httpx.HTTPError as e:
            logfire.error("Telegram HTTP error", method=method, error=str(e))
            raise TelegramAPIError(method, f"HTTP error: {e}") from e

        try:
            payload = response.json()
        except ValueError as e:
            logfire.error(
                "Telegram returned a non-JSON response",
                method=method,
                status_code=response.status_code,
            )
            raise TelegramAPIError(
                method, f"Invalid response ({response.status_code})"
            ) from e

        if not payload.get("ok"):
            description = payload.get("description", "unknown error")
            logfire.error(
                "Telegram API error",
                method=method,
                status_code=response.status_code,
                error=description,
            )
            raise TelegramAPIError(method, description, payload.get("error_code"))

        return payload.get("result")

    async def create_invite_link(
        self,
        chat_id: ChatId,
        expire_date: int,
        creates_join_request: bool,
        name: str,
    ) -> str:
        """Create a chat invite link.

        Raises:
            GatewayUnavailableError: If the call fails
        """
        try:
            result = await self._call(
                "createChatInviteLink",
                {
                    "chat_id": chat_id,
                    "name": name,
                    "expire_date": expire_date,
                    "creates_join_request": creates_join_request,
                },
            )
        except TelegramAPIError as e:
            raise GatewayUnavailableError(str(e)) from e
        return result["invite_link"]

    async def approve_join_request(self, chat_id: ChatId, user_id: UserId) -> None:
        """Approve a join request."""
        try:
            await self._call(
                "approveChatJoinRequest", {"chat_id": chat_id, "user_id": user_id}
            )
        except TelegramAPIError as e:
            raise GatewayUnavailableError(str(e)) from e

    async def decline_join_request(self, chat_id: ChatId, user_id: UserId) -> None:
        """Decline a join request."""
        try:
            await self._call(
                "declineChatJoinRequest", {"chat_id": chat_id, "user_id": user_id}
            )
        except TelegramAPIError as e:
            raise GatewayUnavailableError(str(e)) from e

    async def remove_member(self, chat_id: ChatId, user_id: UserId) -> None:
        """Kick a member: ban, then lift the ban so a later rejoin stays possible.

        Raises:
            RemovalFailedError: If either call fails
        """
        try:
            await self._call("banChatMember", {"chat_id": chat_id, "user_id": user_id})
            await self._call(
                "unbanChatMember",
                {"chat_id": chat_id, "user_id": user_id, "only_if_banned": True},
            )
        except TelegramAPIError as e:
            raise RemovalFailedError(user_id, e.description) from e

    async def send_message(self, chat_id: ChatId, text: str) -> None:
        """Send a plain text message."""
        try:
            await self._call("sendMessage", {"chat_id": chat_id, "text": text})
        except TelegramAPIError as e:
            raise GatewayUnavailableError(str(e)) from e

    async def get_updates(self, offset: int | None, timeout: int) -> list[dict]:
        """Long-poll the Bot API for updates."""
        params: dict[str, Any] = {
            "timeout": timeout,
            "allowed_updates": ALLOWED_UPDATES,
        }
        if offset is not None:
            params["offset"] = offset

        try:
            # The HTTP timeout has to outlast the server-side hold
            result = await self._call("getUpdates", params, timeout=timeout + 10.0)
        except TelegramAPIError as e:
            raise GatewayUnavailableError(str(e)) from e
        return result or []


class MockTelegramGateway(TelegramGateway):
    """Mock Telegram gateway for testing.

    Records every call and returns deterministic data without network
    access. Failure switches make individual operations raise.
    """

    def __init__(self):
        """Initialize mock gateway with empty call log."""
        self.calls: list[tuple[str, dict]] = []
        self.sent_messages: list[tuple[ChatId, str]] = []
        self.pending_updates: list[dict] = []

        self.fail_invite_links = False
        self.fail_join_decisions = False
        self.fail_removals = False
        self.fail_messages = False

        self._link_counter = 0

    def calls_to(self, method: str) -> list[dict]:
        """Arguments of every recorded call to ``method``."""
        return [args for name, args in self.calls if name == method]

    def queue_update(self, update: dict) -> None:
        """Make an update available to the next get_updates call."""
        self.pending_updates.append(update)

    async def create_invite_link(
        self,
        chat_id: ChatId,
        expire_date: int,
        creates_join_request: bool,
        name: str,
    ) -> str:
        """Return a fresh mock invite link."""
        self.calls.append(
            (
                "create_invite_link",
                {
                    "chat_id": chat_id,
                    "expire_date": expire_date,
                    "creates_join_request": creates_join_request,
                    "name": name,
                },
            )
        )
        if self.fail_invite_links:
            raise GatewayUnavailableError("createChatInviteLink failed: mock outage")
        self._link_counter += 1
        return f"https://t.me/+mock{self._link_counter:04d}"

    async def approve_join_request(self, chat_id: ChatId, user_id: UserId) -> None:
        """Record approval."""
        self.calls.append(
            ("approve_join_request", {"chat_id": chat_id, "user_id": user_id})
        )
        if self.fail_join_decisions:
            raise GatewayUnavailableError("approveChatJoinRequest failed: mock outage")

    async def decline_join_request(self, chat_id: ChatId, user_id: UserId) -> None:
        """Record decline."""
        self.calls.append(
            ("decline_join_request", {"chat_id": chat_id, "user_id": user_id})
        )
        if self.fail_join_decisions:
            raise GatewayUnavailableError("declineChatJoinRequest failed: mock outage")

    async def remove_member(self, chat_id: ChatId, user_id: UserId) -> None:
        """Record removal."""
        self.calls.append(("remove_member", {"chat_id": chat_id, "user_id": user_id}))
        if self.fail_removals:
            raise RemovalFailedError(user_id, "mock outage")

    async def send_message(self, chat_id: ChatId, text: str) -> None:
        """Record an outgoing message."""
        self.calls.append(("send_message", {"chat_id": chat_id, "text": text}))
        if self.fail_messages:
            raise GatewayUnavailableError("sendMessage failed: mock outage")
        self.sent_messages.append((chat_id, text))

    async def get_updates(self, offset: int | None, timeout: int) -> list[dict]:
        """Hand out queued updates at or after ``offset``."""
        ready = [
            u
            for u in self.pending_updates
            if offset is None or u.get("update_id", 0) >= offset
        ]
        self.pending_updates = []
        return ready
