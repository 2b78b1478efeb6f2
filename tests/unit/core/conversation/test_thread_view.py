import pytest

from dataclasses import replace

from reply_thread.core.conversation.data_classes import AuthorInfo
from reply_thread.core.conversation.thread_view import (
    VERIFIED_BOT_FLAG, DisplayMessage, ThreadView, can_view_thread
)

class TestThreadView:
    """Tests for the ThreadView class"""

    @pytest.fixture
    def thread_view(self, config):
        """Create a ThreadView instance"""
        return ThreadView(config)

    def test_can_view_thread(self, make_message):
        """Test that only replies offer a thread view"""
        assert can_view_thread(make_message("2", reply_to="1")) is True
        assert can_view_thread(make_message("1")) is False
        assert can_view_thread(None) is False

    def test_build_is_chronological(self, thread_view, make_message):
        """Test that display records run from the root to the requested message"""
        thread = [
            make_message("3", reply_to="2"),
            make_message("2", reply_to="1"),
            make_message("1", author_id="user_2")
        ]

        display_messages = thread_view.build(thread)

        assert [msg.message_id for msg in display_messages] == ["1", "2", "3"]
        assert display_messages[0].author_name == "name_user_2"
        assert [msg.is_last for msg in display_messages] == [False, False, True]
        assert not hasattr(display_messages[0], "reference")

    def test_build_empty_thread(self, thread_view):
        """Test that an empty thread has nothing to display"""
        assert thread_view.build([]) == []
        assert thread_view.render([]) == []

    def test_render_single_chunk(self, thread_view):
        """Test rendering a short thread"""
        display_messages = [
            DisplayMessage("1", "channel_1", "user_1", "Alice", "Hello", 1609459200000),
            DisplayMessage("2", "channel_1", "user_2", "Bob", "Hi there", None, True)
        ]

        chunks = thread_view.render(display_messages)

        assert chunks == [
            "**Alice** (2021-01-01 00:00 UTC)\nHello\n\n**Bob**\nHi there"
        ]

    def test_render_message_without_content(self, thread_view):
        """Test that a message without text only shows its header"""
        chunks = thread_view.render([DisplayMessage("1", "channel_1", "user_1", "Alice", "")])

        assert chunks == ["**Alice**"]

    def test_render_splits_into_chunks(self, config):
        """Test that chunks stay below the maximum message length"""
        config.adapter["max_message_length"] = 50
        thread_view = ThreadView(config)
        display_messages = [
            DisplayMessage(str(i), "channel_1", "user_1", "Alice", "word " * 6)
            for i in range(4)
        ]

        chunks = thread_view.render(display_messages)

        assert len(chunks) > 1
        assert all(len(chunk) <= 50 for chunk in chunks)
        assert sum(chunk.count("**Alice**") for chunk in chunks) == 4

    def test_render_splits_long_message(self, config):
        """Test that a single long message is split at spaces"""
        config.adapter["max_message_length"] = 40
        thread_view = ThreadView(config)

        chunks = thread_view.render([
            DisplayMessage("1", "channel_1", "user_1", "Alice", "lorem ipsum " * 10)
        ])

        assert len(chunks) > 1
        assert all(len(chunk) <= 40 for chunk in chunks)
        assert "".join(chunks).replace(" ", "").count("loremipsum") == 10

    def test_bot_authors_get_a_badge(self, thread_view, make_message):
        """Test that bot and verified bot authors are marked in the header"""
        thread = [
            replace(
                make_message("3", reply_to="2", content=""),
                author=AuthorInfo(user_id="bot_2", username="Helper", is_bot=True, public_flags=VERIFIED_BOT_FLAG)
            ),
            replace(
                make_message("2", reply_to="1", content=""),
                author=AuthorInfo(user_id="bot_1", username="Echo", is_bot=True)
            ),
            make_message("1", content="")
        ]

        display_messages = thread_view.build(thread)

        assert [msg.author_badge for msg in display_messages] == [None, "BOT", "BOT ✓"]
        assert thread_view.render(display_messages) == [
            "**name_user_1** (2021-01-01 00:00 UTC)\n\n"
            "**Echo** [BOT] (2021-01-01 00:00 UTC)\n\n"
            "**Helper** [BOT ✓] (2021-01-01 00:00 UTC)"
        ]
