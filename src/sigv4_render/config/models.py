"""Plugin configuration data models."""

from dataclasses import dataclass, field

from sigv4_render.template.engine import DEFAULT_MAX_DEPTH
from sigv4_render.types import LogFormat, LogLevel


@dataclass
class TemplateConfig:
    """Template rendering configuration."""

    max_depth: int = DEFAULT_MAX_DEPTH


@dataclass
class SigningConfig:
    """Pending-request configuration while credentials load."""

    max_pending: int | None = None  # None = unbounded


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.COLORED


@dataclass
class PluginConfig:
    """Root plugin configuration.

    The region is resolved once at load time and carried here; nothing
    reads it from process-wide state afterwards.
    """

    service_name: str
    region: str | None = None
    template: TemplateConfig = field(default_factory=TemplateConfig)
    signing: SigningConfig = field(default_factory=SigningConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
