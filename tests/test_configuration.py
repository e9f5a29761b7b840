"""
Tests for the configuration service.
"""

import json

import pytest

from widgetlens.exceptions import ConfigurationError
from widgetlens.services.configuration_service import (
    ConfigurationService, DetectionConfig, ParserConfig, ServerConfig, WidgetLensConfig,
    get_config_service, reset_config_service,
)


class TestWidgetLensConfig:
    """Test configuration validation."""

    def test_defaults(self):
        """Test default values."""
        config = WidgetLensConfig()
        assert config.parser.strict_lexing is True
        assert config.detection.min_instances == 2
        assert config.detection.ignore_properties == ["key", "id"]
        assert config.server.port == 8000
        assert config.log_level == "WARNING"

    @pytest.mark.parametrize("config", [
        lambda: WidgetLensConfig(detection=DetectionConfig(min_instances=0)),
        lambda: WidgetLensConfig(detection=DetectionConfig(min_confidence=1.5)),
        lambda: WidgetLensConfig(detection=DetectionConfig(max_variants=0)),
        lambda: WidgetLensConfig(detection=DetectionConfig(instance_weight=-0.1)),
        lambda: WidgetLensConfig(parser=ParserConfig(max_source_length=-1)),
        lambda: WidgetLensConfig(server=ServerConfig(port=70000)),
        lambda: WidgetLensConfig(log_level="LOUD"),
    ])
    def test_invalid_values(self, config):
        """Test invalid values raise ConfigurationError."""
        with pytest.raises(ConfigurationError):
            config()

    def test_to_dict(self):
        """Test dictionary conversion."""
        data = WidgetLensConfig().to_dict()
        assert set(data) == {"parser", "detection", "server", "log_level", "debug_mode"}
        assert data["detection"]["max_variants"] == 10


class TestConfigurationService:
    """Test loading, saving and overriding configuration."""

    def test_defaults_without_file(self):
        """Test a missing file falls back to defaults."""
        config = ConfigurationService("does-not-exist.json").get_config()
        assert config.detection.min_confidence == 0.7

    def test_load_from_file(self, tmp_path):
        """Test values are read from a JSON file."""
        path = tmp_path / "widgetlens.json"
        path.write_text(json.dumps({
            "detection": {"min_instances": 3, "unknown": 1},
            "parser": {"strict_lexing": False},
            "log_level": "INFO",
        }))

        config = ConfigurationService(str(path)).get_config()
        assert config.detection.min_instances == 3
        assert config.parser.strict_lexing is False
        assert config.log_level == "INFO"

    def test_invalid_json_ignored(self, tmp_path):
        """Test an unreadable file falls back to defaults."""
        path = tmp_path / "broken.json"
        path.write_text("{not json")

        config = ConfigurationService(str(path)).get_config()
        assert config.detection.min_instances == 2

    def test_invalid_file_values(self, tmp_path):
        """Test invalid file values raise ConfigurationError."""
        path = tmp_path / "widgetlens.json"
        path.write_text(json.dumps({"detection": {"min_confidence": 3}}))

        with pytest.raises(ConfigurationError):
            ConfigurationService(str(path)).get_config()

    def test_save_and_reload(self, tmp_path):
        """Test saved configuration loads back."""
        path = tmp_path / "nested" / "widgetlens.json"
        service = ConfigurationService(str(path))
        config = WidgetLensConfig(detection=DetectionConfig(max_variants=4))

        service.save_config(config)

        assert ConfigurationService(str(path)).get_config().detection.max_variants == 4

    def test_save_without_path(self):
        """Test saving without a path raises."""
        with pytest.raises(ConfigurationError):
            ConfigurationService().save_config(WidgetLensConfig())

    def test_env_overrides(self, monkeypatch):
        """Test environment variables override defaults."""
        monkeypatch.setenv("WIDGETLENS_DETECTION_MIN_INSTANCES", "4")
        monkeypatch.setenv("WIDGETLENS_DETECTION_MIN_CONFIDENCE", "0.5")
        monkeypatch.setenv("WIDGETLENS_DETECTION_IGNORE_PROPERTIES", "key, semanticsLabel")
        monkeypatch.setenv("WIDGETLENS_PARSER_STRICT_LEXING", "false")
        monkeypatch.setenv("WIDGETLENS_SERVER_PORT", "9000")
        monkeypatch.setenv("WIDGETLENS_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("WIDGETLENS_DEBUG", "true")

        config = ConfigurationService().get_config()
        assert config.detection.min_instances == 4
        assert config.detection.min_confidence == 0.5
        assert config.detection.ignore_properties == ["key", "semanticsLabel"]
        assert config.parser.strict_lexing is False
        assert config.server.port == 9000
        assert config.log_level == "DEBUG"
        assert config.debug_mode is True

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        """Test environment variables take precedence over the file."""
        path = tmp_path / "widgetlens.json"
        path.write_text(json.dumps({"detection": {"min_instances": 3}}))
        monkeypatch.setenv("WIDGETLENS_DETECTION_MIN_INSTANCES", "5")

        assert ConfigurationService(str(path)).get_config().detection.min_instances == 5

    def test_unparseable_env_value_ignored(self, monkeypatch):
        """Test a malformed number keeps the default."""
        monkeypatch.setenv("WIDGETLENS_SERVER_PORT", "eighty")
        assert ConfigurationService().get_config().server.port == 8000

    def test_update_config(self):
        """Test section and global updates."""
        service = ConfigurationService()
        service.update_config(detection={"min_instances": 6}, debug_mode=True)

        assert service.get_detection_config().min_instances == 6
        assert service.get_config().debug_mode is True

    def test_update_config_validates(self):
        """Test updates are validated."""
        service = ConfigurationService()
        with pytest.raises(ConfigurationError):
            service.update_config(server={"port": 0})

    def test_global_service(self, tmp_path, monkeypatch):
        """Test the global service honours WIDGETLENS_CONFIG and resets."""
        path = tmp_path / "widgetlens.json"
        path.write_text(json.dumps({"server": {"port": 8123}}))
        monkeypatch.setenv("WIDGETLENS_CONFIG", str(path))

        service = get_config_service()
        assert get_config_service() is service
        assert service.get_server_config().port == 8123

        reset_config_service()
        assert get_config_service() is not service
