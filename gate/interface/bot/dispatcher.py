"""Update dispatcher.

Routes parsed updates to use cases. Every update runs in its own DI
REQUEST scope (one database transaction); replies go out after the scope
has closed.
"""

import re
from datetime import datetime
from typing import Callable, Optional

import logfire
from dishka import AsyncContainer

from gate.adapter.telegram import TelegramGateway
from gate.application.usecase.code import IssueCodeRequest, IssueCodeUseCase
from gate.application.usecase.join import (
    ArbitrateJoinRequestUseCase,
    JoinRequestDecisionRequest,
)
from gate.application.usecase.redeem import RedeemCodeRequest, RedeemCodeUseCase
from gate.config import Settings
from gate.domain.error import GatewayUnavailableError
from gate.domain.model.common import utcnow
from gate.domain.value import CODE_PATTERN, ChatId, UserId
from gate.interface.bot.conversation import AdminConversationStore
from gate.interface.bot.events import JoinRequest, TextMessage, parse_update

USE_COMMAND = re.compile(r"^/use(?:@\w+)?\s+([A-Za-z0-9]{10})$")


def command_name(text: str) -> Optional[str]:
    """Return the bare command of a message (``/start@bot x`` -> ``/start``)."""
    if not text.startswith("/"):
        return None
    return text.split(maxsplit=1)[0].split("@", 1)[0].lower()


def parse_days(text: str) -> int:
    """Parse a duration answer; anything non-numeric maps to 0 (never allowed)."""
    text = text.strip()
    return int(text) if text.isdigit() else 0


class UpdateDispatcher:
    """Turns raw updates into use case calls and replies."""

    def __init__(
        self,
        container: AsyncContainer,
        gateway: TelegramGateway,
        settings: Settings,
        conversations: AdminConversationStore,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        """Initialize dispatcher.

        Args:
            container: Application-scope DI container
            gateway: Telegram gateway used for replies
            settings: Application settings
            conversations: Pending admin prompts
            clock: Source of the current instant
        """
        self.container = container
        self.gateway = gateway
        self.settings = settings
        self.conversations = conversations
        self.clock = clock

    @property
    def admin_id(self) -> UserId:
        return UserId(self.settings.telegram.admin_id)

    @property
    def channel_id(self) -> ChatId:
        return ChatId(self.settings.telegram.channel_id)

    def usage_hint(self) -> str:
        """Reply explaining how to present a code."""
        if self.settings.subscription.redemption_trigger == "plain_text":
            return "Hi! Send your 10-character subscription code as a message."
        return "Hi! Send your subscription code like this:\n\n/use YOURCODE"

    def duration_prompt(self) -> str:
        allowed = " / ".join(
            str(d) for d in self.settings.subscription.allowed_durations
        )
        return f"Enter the subscription duration in days ({allowed}):"

    async def handle(self, update: dict) -> None:
        """Dispatch one update, logging instead of raising on failure."""
        try:
            await self.dispatch(update)
        except Exception:
            logfire.exception(
                "Unhandled error while processing update",
                update_id=update.get("update_id"),
            )

    async def dispatch(self, update: dict) -> None:
        """Dispatch one raw update."""
        event = parse_update(update)
        if event is None:
            logfire.debug("Dropping unsupported update", update_id=update.get("update_id"))
            return

        if isinstance(event, JoinRequest):
            await self.on_join_request(event)
        else:
            await self.on_message(event)

    async def on_join_request(self, event: JoinRequest) -> None:
        """Decide a join request for the managed channel."""
        if event.chat_id != self.channel_id:
            logfire.debug("Ignoring join request for another chat", chat_id=event.chat_id)
            return

        async with self.container() as request_container:
            use_case = await request_container.get(ArbitrateJoinRequestUseCase)
            await use_case.execute(
                JoinRequestDecisionRequest(user_id=event.user_id, now=self.clock())
            )

    async def on_message(self, event: TextMessage) -> None:
        """Route a text message to the matching flow."""
        now = self.clock()
        text = event.text.strip()
        command = command_name(text)

        if event.user_id == self.admin_id and command is None:
            if self.conversations.consume(self.admin_id, ChatId(event.chat_id), now):
                await self.issue_code(event, parse_days(text), now)
                return

        if command == "/start":
            await self.reply(event.chat_id, self.usage_hint())
        elif command == "/generate":
            await self.on_generate(event, text, now)
        elif self.settings.subscription.redemption_trigger == "command":
            if command == "/use":
                match = USE_COMMAND.match(text)
                if match is None:
                    await self.reply(event.chat_id, self.usage_hint())
                else:
                    await self.redeem(event, match.group(1), now)
        elif command is None:
            if CODE_PATTERN.match(text):
                await self.redeem(event, text, now)
            else:
                await self.reply(event.chat_id, self.usage_hint())

    async def on_generate(self, event: TextMessage, text: str, now: datetime) -> None:
        """Handle ``/generate`` with or without a duration argument."""
        parts = text.split(maxsplit=1)
        if event.user_id != self.admin_id or len(parts) == 2:
            days = parse_days(parts[1]) if len(parts) == 2 else 0
            await self.issue_code(event, days, now)
            return

        self.conversations.purge(now)
        self.conversations.open(self.admin_id, ChatId(event.chat_id), now)
        await self.reply(event.chat_id, self.duration_prompt())

    async def issue_code(self, event: TextMessage, days: int, now: datetime) -> None:
        async with self.container() as request_container:
            use_case = await request_container.get(IssueCodeUseCase)
            response = await use_case.execute(
                IssueCodeRequest(requester_id=event.user_id, duration_days=days, now=now)
            )
        await self.reply(event.chat_id, response.message)

    async def redeem(self, event: TextMessage, code: str, now: datetime) -> None:
        async with self.container() as request_container:
            use_case = await request_container.get(RedeemCodeUseCase)
            response = await use_case.execute(
                RedeemCodeRequest(
                    user_id=event.user_id, handle=event.handle, code=code, now=now
                )
            )
        await self.reply(event.chat_id, response.message)

    async def reply(self, chat_id: int, text: str) -> None:
        """Send a reply; a failed send is logged, not raised."""
        try:
            await self.gateway.send_message(ChatId(chat_id), text)
        except GatewayUnavailableError as e:
            logfire.error("Failed to send reply", chat_id=chat_id, error=str(e))
