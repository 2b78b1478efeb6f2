import copy
import os
import pytest
import sys
import yaml

from unittest.mock import mock_open, patch

project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from reply_thread.core.cache.message_cache import MessageCache
from reply_thread.core.conversation.data_classes import AuthorInfo, Message, MessageReference
from reply_thread.core.utils.config import Config

@pytest.fixture
def basic_config_data():
    """Base configuration data used by the tests"""
    return {
        "adapter": {
            "bot_token": "bot_token",
            "application_id": "123456789",
            "api_base": "https://discord.test/api/v10",
            "request_timeout": 5,
            "fetch_retries": 2,
            "retry_delay": 0,
            "max_message_length": 2000
        },
        "caching": {
            "max_cached_messages": 1000,
            "max_age_hours": 24,
            "cache_maintenance_interval": 3600
        },
        "logging": {
            "logging_level": "INFO",
            "log_format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            "log_file_path": "test.log",
            "max_log_size": 1024,
            "backup_count": 3
        },
        "thread": {
            "max_length": 101,
            "nearby_messages_limit": 3
        }
    }

@pytest.fixture
def mock_config_factory():
    """Factory fixture to create Config instances from dictionaries"""
    def _create_config(config_data):
        with patch("builtins.open", mock_open(read_data=yaml.dump(config_data))):
            with patch("os.path.exists", return_value=True):
                return Config()
    return _create_config

@pytest.fixture
def config(basic_config_data, mock_config_factory):
    """Config instance built from the basic configuration data"""
    return mock_config_factory(copy.deepcopy(basic_config_data))

@pytest.fixture(scope="function", autouse=True)
def reset_message_cache():
    """Make sure every test starts without a shared MessageCache"""
    original_instance = MessageCache._instance
    MessageCache._instance = None

    yield

    MessageCache._instance = original_instance

@pytest.fixture
def make_message():
    """Factory fixture to create Message objects"""
    def _create(message_id, author_id="user_1", reply_to=None, channel_id="channel_1", content=None):
        reference = None
        if reply_to:
            reference = MessageReference(channel_id=channel_id, message_id=reply_to)

        return Message(
            message_id=message_id,
            channel_id=channel_id,
            author=AuthorInfo(user_id=author_id, username=f"name_{author_id}"),
            content=content if content is not None else f"Message {message_id}",
            timestamp=1609459200000,
            reference=reference
        )
    return _create

@pytest.fixture
def make_payload():
    """Factory fixture to create raw Discord REST message payloads"""
    def _create(message_id, author_id="user_1", reply_to=None, channel_id="channel_1"):
        payload = {
            "id": message_id,
            "channel_id": channel_id,
            "type": 19 if reply_to else 0,
            "author": {
                "id": author_id,
                "username": f"name_{author_id}",
                "global_name": None,
                "public_flags": 0
            },
            "content": f"Message {message_id}",
            "timestamp": "2021-01-01T00:00:00.000000+00:00",
            "attachments": [],
            "embeds": []
        }
        if reply_to:
            payload["message_reference"] = {
                "type": 0,
                "channel_id": channel_id,
                "message_id": reply_to
            }
        return payload
    return _create
