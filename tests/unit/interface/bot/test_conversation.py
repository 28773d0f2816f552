"""Unit tests for AdminConversationStore."""

from datetime import timedelta

from gate.domain.value import ChatId, UserId
from gate.interface.bot.conversation import AdminConversationStore
from tests.factories import ADMIN_ID, T0

ADMIN = UserId(ADMIN_ID)
CHAT = ChatId(ADMIN_ID)


class TestAdminConversationStore:
    """Tests for AdminConversationStore."""

    def test_prompt_is_consumed_once(self):
        store = AdminConversationStore(timeout_seconds=120)
        store.open(ADMIN, CHAT, T0)

        assert store.consume(ADMIN, CHAT, T0 + timedelta(seconds=10)) is True
        assert store.consume(ADMIN, CHAT, T0 + timedelta(seconds=11)) is False

    def test_prompt_times_out(self):
        store = AdminConversationStore(timeout_seconds=120)
        store.open(ADMIN, CHAT, T0)

        assert store.consume(ADMIN, CHAT, T0 + timedelta(seconds=120)) is False

    def test_prompt_is_scoped_to_admin_and_chat(self):
        store = AdminConversationStore(timeout_seconds=120)
        store.open(ADMIN, CHAT, T0)

        assert store.consume(UserId(7), CHAT, T0) is False
        assert store.consume(ADMIN, ChatId(999), T0) is False
        assert store.consume(ADMIN, CHAT, T0) is True

    def test_purge_drops_only_timed_out_prompts(self):
        store = AdminConversationStore(timeout_seconds=60)
        store.open(ADMIN, CHAT, T0)
        store.open(ADMIN, ChatId(2), T0 + timedelta(seconds=50))

        dropped = store.purge(T0 + timedelta(seconds=60))

        assert dropped == 1
        assert store.consume(ADMIN, ChatId(2), T0 + timedelta(seconds=60)) is True
