"""
Configuration Service - Centralized configuration management.

Settings come from dataclass defaults, an optional JSON file, then
WIDGETLENS_* environment variables, in that order of precedence.
"""

import os
import json
import logging
from dataclasses import dataclass, asdict, field, fields
from pathlib import Path
from typing import Dict, Any, Optional, List, Type, TypeVar

from ..exceptions import ConfigurationError

T = TypeVar('T')


@dataclass
class ParserConfig:
    """Lexer/parser settings."""
    # Abort parsing (no AST) when the lexer reports errors
    strict_lexing: bool = True
    # Caller-side guard against pathological inputs; 0 disables it
    max_source_length: int = 1_000_000


@dataclass
class DetectionConfig:
    """Component detector settings."""
    min_instances: int = 2
    min_confidence: float = 0.7
    max_variants: int = 10
    ignore_properties: List[str] = field(default_factory=lambda: ["key", "id"])
    structural_only: bool = False
    include_custom_widgets: bool = True

    # Confidence weights
    instance_weight: float = 0.5
    complexity_weight: float = 0.3
    variant_weight: float = 0.2
    instance_saturation: int = 5

    # Hamming distance bound for related-pattern search
    related_max_distance: int = 3


@dataclass
class ServerConfig:
    """HTTP service settings."""
    host: str = "127.0.0.1"
    port: int = 8000
    reload: bool = False


@dataclass
class WidgetLensConfig:
    """Master configuration combining all settings."""
    parser: ParserConfig = field(default_factory=ParserConfig)
    detection: DetectionConfig = field(default_factory=DetectionConfig)
    server: ServerConfig = field(default_factory=ServerConfig)

    # Global settings
    log_level: str = "WARNING"
    debug_mode: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        detection = self.detection
        if detection.min_instances < 1:
            raise ConfigurationError("min_instances must be at least 1")
        if not 0.0 <= detection.min_confidence <= 1.0:
            raise ConfigurationError("min_confidence must be between 0 and 1")
        if detection.max_variants < 1:
            raise ConfigurationError("max_variants must be at least 1")
        if detection.instance_saturation < 1:
            raise ConfigurationError("instance_saturation must be at least 1")
        if min(detection.instance_weight, detection.complexity_weight, detection.variant_weight) < 0:
            raise ConfigurationError("confidence weights must be non-negative")
        if detection.related_max_distance < 0:
            raise ConfigurationError("related_max_distance must be non-negative")
        if self.parser.max_source_length < 0:
            raise ConfigurationError("max_source_length must be non-negative")
        if not 0 < self.server.port < 65536:
            raise ConfigurationError("port must be between 1 and 65535")
        if self.log_level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ConfigurationError(f"Unknown log level: {self.log_level}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "parser": asdict(self.parser),
            "detection": asdict(self.detection),
            "server": asdict(self.server),
            "log_level": self.log_level,
            "debug_mode": self.debug_mode,
        }


class ConfigurationService:
    """
    Centralized configuration management service.

    Loads the configuration lazily and caches it until ``load_config`` or
    ``update_config`` replaces it.
    """

    def __init__(self, config_path: Optional[str] = None):
        self.logger = logging.getLogger(__name__)
        self.config_path = Path(config_path) if config_path else None
        self._config: Optional[WidgetLensConfig] = None

    def get_config(self) -> WidgetLensConfig:
        """Get the current configuration, loading from file if needed."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self, config_path: Optional[str] = None) -> WidgetLensConfig:
        """
        Load configuration from file or environment variables.

        Args:
            config_path: Optional path to configuration file

        Returns:
            WidgetLensConfig instance

        Raises:
            ConfigurationError: If the resulting values are invalid
        """
        config_file = Path(config_path) if config_path else self.config_path

        parser_config = ParserConfig()
        detection_config = DetectionConfig()
        server_config = ServerConfig()
        global_settings: Dict[str, Any] = {}

        if config_file and config_file.exists():
            try:
                with open(config_file, 'r') as f:
                    data = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                self.logger.warning(f"Failed to load config from {config_file}: {e}")
            else:
                parser_config = self._dict_to_dataclass(data.get('parser', {}), ParserConfig)
                detection_config = self._dict_to_dataclass(data.get('detection', {}), DetectionConfig)
                server_config = self._dict_to_dataclass(data.get('server', {}), ServerConfig)
                for key in ('log_level', 'debug_mode'):
                    if key in data:
                        global_settings[key] = data[key]
                self.logger.info(f"Loaded configuration from {config_file}")

        parser_config = self._apply_env_overrides(parser_config, 'WIDGETLENS_PARSER_')
        detection_config = self._apply_env_overrides(detection_config, 'WIDGETLENS_DETECTION_')
        server_config = self._apply_env_overrides(server_config, 'WIDGETLENS_SERVER_')

        if os.getenv('WIDGETLENS_LOG_LEVEL'):
            global_settings['log_level'] = os.environ['WIDGETLENS_LOG_LEVEL']
        if os.getenv('WIDGETLENS_DEBUG'):
            global_settings['debug_mode'] = os.environ['WIDGETLENS_DEBUG'].lower() == 'true'

        return WidgetLensConfig(
            parser=parser_config,
            detection=detection_config,
            server=server_config,
            **global_settings
        )

    def save_config(self, config: WidgetLensConfig, config_path: Optional[str] = None) -> None:
        """
        Save configuration to file.

        Args:
            config: Configuration to save
            config_path: Optional path to save to
        """
        config_file = Path(config_path) if config_path else self.config_path

        if not config_file:
            raise ConfigurationError("No config path specified")

        try:
            config_file.parent.mkdir(parents=True, exist_ok=True)
            with open(config_file, 'w') as f:
                json.dump(config.to_dict(), f, indent=2)
        except OSError as e:
            raise ConfigurationError(f"Failed to save config to {config_file}: {e}")

        self.logger.info(f"Saved configuration to {config_file}")

    def _dict_to_dataclass(self, data: Dict[str, Any], dataclass_type: Type[T]) -> T:
        """Convert dictionary to dataclass, dropping unknown keys."""
        field_names = {f.name for f in fields(dataclass_type)}
        unknown = set(data) - field_names
        if unknown:
            self.logger.warning(f"Ignoring unknown {dataclass_type.__name__} keys: {sorted(unknown)}")
        filtered_data = {k: v for k, v in data.items() if k in field_names}
        return dataclass_type(**filtered_data)

    def _apply_env_overrides(self, config: T, prefix: str) -> T:
        """Apply environment variable overrides to configuration."""
        config_dict = asdict(config)

        for config_field in fields(config):
            env_key = f"{prefix}{config_field.name.upper()}"
            env_value = os.getenv(env_key)

            if env_value is None:
                continue

            try:
                if config_field.type == bool:
                    config_dict[config_field.name] = env_value.lower() in ('true', '1', 'yes', 'on')
                elif config_field.type == int:
                    config_dict[config_field.name] = int(env_value)
                elif config_field.type == float:
                    config_dict[config_field.name] = float(env_value)
                elif config_field.type == List[str]:
                    config_dict[config_field.name] = [v.strip() for v in env_value.split(',') if v.strip()]
                else:
                    config_dict[config_field.name] = env_value

                self.logger.debug(f"Applied env override: {env_key}={env_value}")

            except (ValueError, TypeError) as e:
                self.logger.warning(f"Failed to parse env var {env_key}={env_value}: {e}")

        return type(config)(**config_dict)

    def get_parser_config(self) -> ParserConfig:
        return self.get_config().parser

    def get_detection_config(self) -> DetectionConfig:
        return self.get_config().detection

    def get_server_config(self) -> ServerConfig:
        return self.get_config().server

    def update_config(self, **kwargs) -> None:
        """
        Update configuration with new values.

        Section keys (``parser``, ``detection``, ``server``) take dictionaries;
        other keys update global settings. The result is validated again.
        """
        config = self.get_config()
        sections = {
            'parser': asdict(config.parser),
            'detection': asdict(config.detection),
            'server': asdict(config.server),
        }

        for section, values in sections.items():
            for key, value in kwargs.get(section, {}).items():
                if key in values:
                    values[key] = value
                else:
                    self.logger.warning(f"Unknown {section} setting: {key}")

        global_settings = {
            'log_level': kwargs.get('log_level', config.log_level),
            'debug_mode': kwargs.get('debug_mode', config.debug_mode),
        }

        self._config = WidgetLensConfig(
            parser=ParserConfig(**sections['parser']),
            detection=DetectionConfig(**sections['detection']),
            server=ServerConfig(**sections['server']),
            **global_settings
        )


# Global configuration service instance
_config_service: Optional[ConfigurationService] = None


def get_config_service() -> ConfigurationService:
    """Get the global configuration service instance."""
    global _config_service
    if _config_service is None:
        _config_service = ConfigurationService(os.getenv('WIDGETLENS_CONFIG'))
    return _config_service


def reset_config_service() -> None:
    """Reset the global configuration service (mainly for testing)."""
    global _config_service
    _config_service = None
