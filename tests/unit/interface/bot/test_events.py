"""Unit tests for update parsing."""

from gate.interface.bot.events import JoinRequest, TextMessage, parse_update


class TestParseUpdate:
    """Tests for parse_update."""

    def test_text_message(self):
        update = {
            "update_id": 7,
            "message": {
                "message_id": 1,
                "chat": {"id": 100, "type": "private"},
                "from": {"id": 100, "is_bot": False, "username": "alice"},
                "text": "/use ABCD123456",
            },
        }

        event = parse_update(update)

        assert event == TextMessage(
            update_id=7,
            chat_id=100,
            user_id=100,
            handle="alice",
            text="/use ABCD123456",
        )

    def test_message_without_username_has_empty_handle(self):
        update = {
            "update_id": 1,
            "message": {"chat": {"id": 5}, "from": {"id": 5}, "text": "hi"},
        }

        event = parse_update(update)

        assert isinstance(event, TextMessage)
        assert event.handle == ""

    def test_join_request(self):
        update = {
            "update_id": 9,
            "chat_join_request": {
                "chat": {"id": -1001234567890, "type": "channel"},
                "from": {"id": 100, "is_bot": False},
                "date": 1704067200,
            },
        }

        assert parse_update(update) == JoinRequest(
            update_id=9, chat_id=-1001234567890, user_id=100
        )

    def test_non_text_message_is_dropped(self):
        update = {
            "update_id": 2,
            "message": {"chat": {"id": 5}, "from": {"id": 5}, "sticker": {}},
        }

        assert parse_update(update) is None

    def test_join_request_without_actor_is_dropped(self):
        update = {"update_id": 3, "chat_join_request": {"chat": {"id": -100}}}

        assert parse_update(update) is None

    def test_unrelated_update_is_dropped(self):
        assert parse_update({"update_id": 4, "edited_message": {}}) is None
        assert parse_update({}) is None
