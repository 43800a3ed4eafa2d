"""Plugin configuration loader."""

import logging
import os
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from sigv4_render.errors import create_error
from sigv4_render.types import LogFormat, LogLevel, ValidationIssue, ValidationResult

from .models import LoggingConfig, PluginConfig, SigningConfig, TemplateConfig

logger = logging.getLogger(__name__)

PLUGIN_NAME = "aws-sigv4"
SERVICE_NAME_KEY = "serviceName"
REGION_ENV_VARS = ("AWS_REGION", "AWS_DEFAULT_REGION")


def resolve_env_vars(value: str) -> str:
    """Resolve environment variable references in string.

    Supports:
    - ${VAR} - Required, error if not set
    - ${VAR:-default} - With default value
    - ${VAR:?error message} - Required with custom error

    Args:
        value: String with potential env var references

    Returns:
        String with env vars resolved

    Raises:
        SigV4Error: If required var not set
    """
    pattern = r"\$\{([^}:]+)(?::([?-])([^}]*))?\}"

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        operator = match.group(2)  # '-' or '?' or None
        operand = match.group(3)  # default value or error message

        env_value = os.environ.get(var_name)
        if env_value is not None:
            return env_value

        if operator == "-":
            return operand or ""
        elif operator == "?":
            error_msg = operand or f"Required environment variable {var_name} not set"
            raise create_error("CONFIG_INVALID", detail=error_msg)
        else:
            raise create_error(
                "CONFIG_INVALID",
                detail=f"Required environment variable {var_name} not set",
            )

    return re.sub(pattern, replacer, value)


def _resolve_env_vars_recursive(data: Any) -> Any:
    if isinstance(data, dict):
        return {k: _resolve_env_vars_recursive(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [_resolve_env_vars_recursive(item) for item in data]
    elif isinstance(data, str):
        return resolve_env_vars(data)
    else:
        return data


def resolve_region(
    explicit: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> str | None:
    """Pick the signing region.

    Resolution order: explicit value, AWS_REGION, AWS_DEFAULT_REGION.

    Args:
        explicit: Region from the plugin configuration
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Region name, or None if none is configured
    """
    if explicit:
        return explicit
    env = os.environ if environ is None else environ
    for name in REGION_ENV_VARS:
        if env.get(name):
            return env[name]
    return None


def _parse_log_level(value: Any) -> LogLevel:
    name = str(value).upper()
    if name == "WARNING":
        name = "WARN"
    return LogLevel(name)


class ConfigLoader:
    """Load and validate the aws-sigv4 plugin configuration."""

    def __init__(self, environ: Mapping[str, str] | None = None):
        """Initialize config loader.

        Args:
            environ: Environment used for region resolution (defaults to os.environ)
        """
        self._environ = environ
        self._config: PluginConfig | None = None

    def validate_script_config(self, script_config: Any) -> Mapping[str, Any]:
        """Check a script's ``config`` block for the plugin section.

        Args:
            script_config: The script's ``config`` mapping

        Returns:
            The plugin's configuration section

        Raises:
            SigV4Error: PLUGIN_CONFIG_REQUIRED, SERVICE_NAME_REQUIRED or
                SERVICE_NAME_INVALID
        """
        plugins = script_config.get("plugins") if isinstance(script_config, Mapping) else None
        if not isinstance(plugins, Mapping) or PLUGIN_NAME not in plugins:
            raise create_error("PLUGIN_CONFIG_REQUIRED")

        section = plugins[PLUGIN_NAME]
        if not isinstance(section, Mapping) or SERVICE_NAME_KEY not in section:
            raise create_error("SERVICE_NAME_REQUIRED")
        if not isinstance(section[SERVICE_NAME_KEY], str):
            raise create_error("SERVICE_NAME_INVALID")

        return section

    def validate(self, section: Mapping[str, Any]) -> ValidationResult:
        """Validate the optional keys of a plugin section.

        Args:
            section: Plugin configuration section

        Returns:
            ValidationResult with errors and warnings
        """
        errors: list[ValidationIssue] = []
        warnings: list[ValidationIssue] = []
        prefix = f"plugins.{PLUGIN_NAME}"

        valid_keys = {
            SERVICE_NAME_KEY,
            "region",
            "maxRenderDepth",
            "maxPending",
            "logLevel",
            "logFormat",
        }
        for key in section:
            if key not in valid_keys:
                warnings.append(
                    ValidationIssue(
                        path=f"{prefix}.{key}",
                        message=f"Unknown configuration key: {key}",
                        severity="warning",
                    )
                )

        region = section.get("region")
        if region is not None and not isinstance(region, str):
            errors.append(
                ValidationIssue(path=f"{prefix}.region", message="region must be a string")
            )

        for key in ("maxRenderDepth", "maxPending"):
            value = section.get(key)
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                errors.append(
                    ValidationIssue(
                        path=f"{prefix}.{key}",
                        message=f"{key} must be a positive integer",
                    )
                )

        if "logLevel" in section:
            try:
                _parse_log_level(section["logLevel"])
            except ValueError:
                errors.append(
                    ValidationIssue(
                        path=f"{prefix}.logLevel",
                        message=f"logLevel must be one of {', '.join(lv.value for lv in LogLevel)}",
                    )
                )

        if "logFormat" in section:
            try:
                LogFormat(str(section["logFormat"]).lower())
            except ValueError:
                errors.append(
                    ValidationIssue(
                        path=f"{prefix}.logFormat",
                        message=f"logFormat must be one of {', '.join(f.value for f in LogFormat)}",
                    )
                )

        return ValidationResult(valid=True, errors=errors, warnings=warnings)

    def load_from_script_config(self, script_config: Any) -> PluginConfig:
        """Build a PluginConfig from a script's ``config`` block.

        Args:
            script_config: The script's ``config`` mapping

        Returns:
            Loaded PluginConfig instance

        Raises:
            SigV4Error: If the plugin section is missing or invalid
        """
        section = self.validate_script_config(script_config)

        validation = self.validate(section)
        if not validation.valid:
            error_messages = [f"- {issue.message}" for issue in validation.errors]
            raise create_error(
                "CONFIG_INVALID",
                detail="Configuration validation failed:\n" + "\n".join(error_messages),
            )
        for issue in validation.warnings:
            logger.warning("%s (%s)", issue.message, issue.path)

        config = self._section_to_config(section)
        self._config = config
        return config

    def load(self, path: str | Path) -> PluginConfig:
        """Load configuration from a YAML script file.

        The file may be a whole script (``config.plugins.aws-sigv4``) or just
        its ``config`` block. ``${VAR}`` references are resolved first.

        Args:
            path: Path to the YAML file

        Returns:
            Loaded PluginConfig instance

        Raises:
            SigV4Error: If file not found or invalid
        """
        config_path = Path(path)
        if not config_path.exists():
            raise create_error(
                "CONFIG_INVALID",
                detail=f"Configuration file not found: {config_path}",
            )

        try:
            with config_path.open() as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise create_error(
                "CONFIG_INVALID",
                detail=f"Invalid YAML in config file: {e}",
            ) from e

        data = _resolve_env_vars_recursive(data)
        script_config = data.get("config", data) if isinstance(data, dict) else data
        return self.load_from_script_config(script_config)

    def get(self) -> PluginConfig:
        """Get the last loaded configuration.

        Raises:
            SigV4Error: If nothing has been loaded yet
        """
        if self._config is None:
            raise create_error("CONFIG_INVALID", detail="Configuration not loaded")
        return self._config

    def _section_to_config(self, section: Mapping[str, Any]) -> PluginConfig:
        template = TemplateConfig()
        if section.get("maxRenderDepth") is not None:
            template.max_depth = section["maxRenderDepth"]

        logging_config = LoggingConfig()
        if "logLevel" in section:
            logging_config.level = _parse_log_level(section["logLevel"])
        if "logFormat" in section:
            logging_config.format = LogFormat(str(section["logFormat"]).lower())

        return PluginConfig(
            service_name=section[SERVICE_NAME_KEY],
            region=resolve_region(section.get("region"), self._environ),
            template=template,
            signing=SigningConfig(max_pending=section.get("maxPending")),
            logging=logging_config,
        )


def load_config(path: str | Path) -> PluginConfig:
    """Convenience function to load config from a YAML file.

    Args:
        path: Path to config file

    Returns:
        Loaded PluginConfig instance
    """
    return ConfigLoader().load(path)
