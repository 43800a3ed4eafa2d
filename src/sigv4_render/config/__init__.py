"""Plugin configuration."""

from .loader import (
    PLUGIN_NAME,
    ConfigLoader,
    load_config,
    resolve_env_vars,
    resolve_region,
)
from .models import LoggingConfig, PluginConfig, SigningConfig, TemplateConfig

__all__ = [
    "PLUGIN_NAME",
    "ConfigLoader",
    "PluginConfig",
    "TemplateConfig",
    "SigningConfig",
    "LoggingConfig",
    "load_config",
    "resolve_env_vars",
    "resolve_region",
]
