import pytest
import yaml

from unittest.mock import patch, mock_open

from reply_thread.core.utils.config import Config

class TestConfig:
    """Tests for the Config class"""

    @pytest.fixture
    def default_config_data(self):
        """Default config data for testing"""
        return {
            "adapter": {
                "bot_token": "test_token",
                "fetch_retries": 2
            },
            "caching": {
                "max_cached_messages": 1000,
                "max_age_hours": 24
            },
            "logging": {
                "logging_level": "INFO"
            },
            "thread": {
                "max_length": 101
            },
            "unknown": {
                "key": "value"
            }
        }

    @pytest.fixture
    def config(self, default_config_data):
        """Create a Config instance with a mocked config file"""
        config_yaml = yaml.dump(default_config_data)
        with patch("builtins.open", mock_open(read_data=config_yaml)):
            with patch("os.path.exists", return_value=True):
                yield Config()

    class TestConfigLoading:
        """Tests for configuration loading functionality"""

        def test_load_config_with_existing_file(self, config, default_config_data):
            """Test loading configuration from an existing file"""
            for category in ["adapter", "caching", "logging", "thread"]:
                assert getattr(config, category) == default_config_data[category]

        def test_unknown_categories_are_ignored(self, config):
            """Test that categories outside the known list are not loaded"""
            assert not hasattr(config, "unknown")

        def test_missing_file_raises(self):
            """Test that a missing config file is reported"""
            with patch("os.path.exists", return_value=False):
                with pytest.raises(FileNotFoundError):
                    Config("missing.yaml")

        def test_empty_file(self):
            """Test that an empty file yields empty categories"""
            with patch("builtins.open", mock_open(read_data="")):
                with patch("os.path.exists", return_value=True):
                    config = Config()

            assert config.adapter == {}
            assert config.get_setting("thread", "max_length") == 101

    class TestConfigAccess:
        """Tests for configuration access methods"""

        @pytest.mark.parametrize("category,key,expected", [
            ("adapter", "bot_token", "test_token"),
            ("adapter", "fetch_retries", 2),
            ("caching", "max_age_hours", 24),
            ("thread", "max_length", 101),
        ])
        def test_get_setting_existing_keys(self, config, category, key, expected):
            """Test getting settings with existing keys"""
            assert config.get_setting(category, key) == expected

        @pytest.mark.parametrize("category,key,default_value,expected", [
            ("adapter", "non_existent", "default_value", "default_value"),
            ("non_existent_category", "key", 42, 42),
        ])
        def test_get_setting_with_defaults(self, config, category, key, default_value, expected):
            """Test getting settings with default values"""
            assert config.get_setting(category, key, default_value) == expected

        def test_get_setting_unknown_category_without_default(self, config):
            """Test that an unknown category without default raises"""
            with pytest.raises(ValueError):
                config.get_setting("non_existent_category", "key")

        @pytest.mark.parametrize("category,key,expected", [
            ("adapter", "api_base", "https://discord.com/api/v10"),
            ("adapter", "retry_delay", 1),
            ("caching", "cache_maintenance_interval", 3600),
            ("logging", "log_file_path", "logs/reply_thread.log"),
            ("thread", "nearby_messages_limit", 3),
        ])
        def test_get_setting_built_in_defaults(self, config, category, key, expected):
            """Test that settings missing from the file fall back to built-in defaults"""
            assert config.get_setting(category, key) == expected

        def test_file_value_wins_over_built_in_default(self, mock_config_factory):
            """Test that configured values, including zero, are not replaced"""
            config = mock_config_factory({"adapter": {"retry_delay": 0}})

            assert config.get_setting("adapter", "retry_delay") == 0

        def test_explicit_default_wins_over_built_in_default(self, config):
            """Test that a caller supplied default is preferred"""
            assert config.get_setting("adapter", "api_base", "https://other.test") == "https://other.test"

        def test_unknown_key_without_default(self, config):
            """Test that keys without any default are None"""
            assert config.get_setting("adapter", "application_id") is None
