"""
Services package for widgetlens.
"""

from .configuration_service import (
    ConfigurationService,
    WidgetLensConfig,
    ParserConfig,
    DetectionConfig,
    ServerConfig,
    get_config_service,
    reset_config_service
)

__all__ = [
    "ConfigurationService",
    "WidgetLensConfig",
    "ParserConfig",
    "DetectionConfig",
    "ServerConfig",
    "get_config_service",
    "reset_config_service",
]
