"""Test configuration loading"""

import pytest

from lyric_finder.config import settings as settings_module
from lyric_finder.config.settings import Settings, get_settings, reload_settings
from lyric_finder.exceptions import ConfigError


class TestSettingsLoading:
    """Test defaults, YAML files and environment overrides"""

    def test_defaults(self, clean_env):
        """Test defaults apply without config file or environment"""
        settings = Settings()

        assert settings.loaded_from is None
        assert settings.server.port == 3000
        assert settings.server.host == "0.0.0.0"
        assert settings.lyrics.lrclib_base_url == "https://lrclib.net/api"
        assert settings.lyrics.genius_api_key == ""
        assert settings.logging.level == "INFO"
        assert settings.validate() == []

    def test_yaml_file(self, clean_env):
        """Test values from an explicit config file"""
        config_file = clean_env / "custom.yaml"
        config_file.write_text(
            "server:\n  port: 8080\n"
            "lyrics:\n  timeout: 5\n  unknown_key: ignored\n"
            "logging:\n  level: DEBUG\n",
            encoding='utf-8'
        )

        settings = Settings(str(config_file))

        assert settings.loaded_from == config_file
        assert settings.server.port == 8080
        assert settings.lyrics.timeout == 5
        assert settings.logging.level == "DEBUG"
        assert not hasattr(settings.lyrics, 'unknown_key')

    def test_config_yaml_in_working_directory(self, clean_env):
        """Test config.yaml in the working directory is found"""
        (clean_env / "config.yaml").write_text("server:\n  app_name: Lyrics Test\n", encoding='utf-8')

        assert Settings().server.app_name == "Lyrics Test"

    def test_environment_overrides_file(self, clean_env, monkeypatch):
        """Test environment variables win over the config file"""
        config_file = clean_env / "custom.yaml"
        config_file.write_text("server:\n  port: 8080\n", encoding='utf-8')
        monkeypatch.setenv('PORT', "9000")
        monkeypatch.setenv('GENIUS_API_KEY', "secret-token")
        monkeypatch.setenv('LRCLIB_BASE_URL', "http://localhost:1234/api")

        settings = Settings(str(config_file))

        assert settings.server.port == 9000
        assert settings.lyrics.genius_api_key == "secret-token"
        assert settings.lyrics.lrclib_base_url == "http://localhost:1234/api"

    def test_invalid_port_variable(self, clean_env, monkeypatch):
        """Test a non-numeric PORT raises ConfigError"""
        monkeypatch.setenv('PORT', "eighty")

        with pytest.raises(ConfigError):
            Settings()

    def test_invalid_yaml(self, clean_env):
        """Test unparsable YAML raises ConfigError"""
        config_file = clean_env / "broken.yaml"
        config_file.write_text("server: [unclosed\n", encoding='utf-8')

        with pytest.raises(ConfigError) as exc_info:
            Settings(str(config_file))

        assert exc_info.value.details['file_path'] == str(config_file)

    def test_yaml_not_a_mapping(self, clean_env):
        """Test a YAML list is rejected"""
        config_file = clean_env / "list.yaml"
        config_file.write_text("- a\n- b\n", encoding='utf-8')

        with pytest.raises(ConfigError):
            Settings(str(config_file))


class TestSettingsValidation:
    """Test validation and serialization"""

    def test_validate_reports_problems(self, clean_env):
        """Test every invalid value is reported"""
        settings = Settings()
        settings.server.port = 70000
        settings.logging.level = "LOUD"
        settings.lyrics.lrclib_base_url = "ftp://example.com"
        settings.lyrics.timeout = 0

        problems = settings.validate()

        assert len(problems) == 4
        with pytest.raises(ConfigError) as exc_info:
            settings.require_valid()
        assert exc_info.value.details['errors'] == problems

    def test_to_dict_masks_api_key(self, clean_env, monkeypatch):
        """Test the API key is hidden unless asked for"""
        monkeypatch.setenv('GENIUS_API_KEY', "secret-token")
        settings = Settings()

        assert settings.to_dict()['lyrics']['genius_api_key'] == "********"
        assert settings.to_dict(mask_secrets=False)['lyrics']['genius_api_key'] == "secret-token"
        assert "secret-token" not in str(settings)

    def test_log_file_path(self, clean_env):
        """Test file logging can be disabled"""
        settings = Settings()
        assert settings.get_log_file_path().name == "lyric-finder.log"

        settings.logging.file = ""
        assert settings.get_log_file_path() is None


class TestSettingsSingleton:
    """Test the global settings instance"""

    def test_get_settings_is_cached(self, clean_env):
        """Test get_settings returns the same instance"""
        assert get_settings() is get_settings()

    def test_reload_settings(self, clean_env):
        """Test reload_settings replaces the global instance"""
        config_file = clean_env / "custom.yaml"
        config_file.write_text("server:\n  port: 8181\n", encoding='utf-8')
        first = get_settings()

        reloaded = reload_settings(str(config_file))

        assert reloaded is not first
        assert reloaded.server.port == 8181
        assert settings_module._settings is reloaded
