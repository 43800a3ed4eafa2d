"""Plugin logger - hierarchical colored logging for rendering and signing."""

import json
import sys
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, TextIO

from sigv4_render.logging.colors import (
    CYAN,
    GREEN,
    LIGHT_BLUE,
    MAGENTA,
    RED,
    RESET,
    YELLOW,
)
from sigv4_render.types import LogFormat, LogLevel


@dataclass
class LogConfig:
    """Logger configuration."""

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.COLORED
    show_context: bool = True
    truncate_at: int = 200
    components: dict[str, bool] = field(default_factory=dict)
    output: TextIO = field(default=sys.stdout)

    def __post_init__(self) -> None:
        """Initialize default components if not provided."""
        if not self.components:
            self.components = {
                "render": True,
                "signing": True,
            }


class PluginLogger:
    """Main logger facade. Creates component-specific loggers."""

    def __init__(self, config: LogConfig | None = None):
        """Initialize logger with configuration.

        Args:
            config: Logger configuration (defaults to LogConfig())
        """
        self.config = config or LogConfig()
        self._level_order = {
            LogLevel.DEBUG: 0,
            LogLevel.INFO: 1,
            LogLevel.WARN: 2,
            LogLevel.ERROR: 3,
        }

    def render(self) -> "RenderLogger":
        """Get a logger for template rendering events."""
        return RenderLogger(self)

    def signing(self, service_name: str) -> "SigningLogger":
        """Get a logger scoped to signing requests for one service.

        Args:
            service_name: AWS service the plugin signs for

        Returns:
            SigningLogger instance
        """
        return SigningLogger(self, service_name)

    def configure(self, config: LogConfig) -> None:
        """Update configuration.

        Args:
            config: New logger configuration
        """
        self.config = config

    def _should_log(self, level: LogLevel) -> bool:
        return self._level_order.get(level, 0) >= self._level_order.get(self.config.level, 1)

    def _log(
        self,
        level: LogLevel,
        component: str,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Internal logging method.

        Args:
            level: Log level
            component: Component name (render, signing)
            message: Log message
            context: Additional context data
        """
        if not self._should_log(level):
            return

        if not self.config.components.get(component, True):
            return

        if self.config.format == LogFormat.JSON:
            self._log_json(level, component, message, context)
        else:
            self._log_colored(level, component, message, context)

    def _log_json(
        self,
        level: LogLevel,
        component: str,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        log_entry = {
            "timestamp": datetime.now(UTC).isoformat().replace("+00:00", "Z"),
            "level": level.value,
            "component": component,
            "message": message,
        }
        if context:
            log_entry.update(context)

        print(json.dumps(log_entry, default=str), file=self.config.output)

    def _log_colored(
        self,
        level: LogLevel,
        component: str,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        level_colors = {
            LogLevel.DEBUG: LIGHT_BLUE,
            LogLevel.INFO: CYAN,
            LogLevel.WARN: YELLOW,
            LogLevel.ERROR: RED,
        }

        color = level_colors.get(level, RESET)
        component_color = {
            "render": MAGENTA,
            "signing": GREEN,
        }.get(component, RESET)

        # Format: [COMPONENT] message
        output = f"{component_color}[{component.upper()}]{RESET} {color}{message}{RESET}"

        if context and self.config.show_context:
            context_str = str(context)
            if len(context_str) > self.config.truncate_at:
                context_str = context_str[: self.config.truncate_at] + "..."
            output += f" {LIGHT_BLUE}{context_str}{RESET}"

        print(output, file=self.config.output)


class RenderLogger:
    """Logger for template rendering events."""

    def __init__(self, parent: PluginLogger):
        """Initialize render logger.

        Args:
            parent: Parent PluginLogger instance
        """
        self.parent = parent

    def call_expanded(self, name: str, depth: int) -> None:
        """Log a template function call spliced into a string.

        Args:
            name: Function name including its sigil
            depth: Re-expansion depth the call was found at
        """
        context = {"event": "call_expanded", "function": name, "depth": depth}
        self.parent._log(LogLevel.DEBUG, "render", f"Expanded call '{name}'", context)

    def call_unresolved(self, name: str) -> None:
        """Log a call expression whose function is not registered.

        Args:
            name: Function name including its sigil
        """
        context = {"event": "call_unresolved", "function": name}
        message = f"No template function '{name}', leaving placeholder as-is"
        self.parent._log(LogLevel.DEBUG, "render", message, context)

    def recursion_exceeded(self, expression: str, max_depth: int) -> None:
        """Log runaway re-expansion.

        Args:
            expression: String being rendered when the bound was hit
            max_depth: Configured expansion bound
        """
        context = {
            "event": "recursion_exceeded",
            "expression": expression,
            "max_depth": max_depth,
        }
        message = f"Template expansion exceeded {max_depth} passes"
        self.parent._log(LogLevel.ERROR, "render", message, context)


class SigningLogger:
    """Logger for credential and signing events."""

    def __init__(self, parent: PluginLogger, service_name: str):
        """Initialize signing logger.

        Args:
            parent: Parent PluginLogger instance
            service_name: AWS service the plugin signs for
        """
        self.parent = parent
        self.service_name = service_name

    def _context(self, event: str, **extra: Any) -> dict[str, Any]:
        context: dict[str, Any] = {"service_name": self.service_name, "event": event}
        context.update(extra)
        return context

    def credentials_ready(self, drained: int) -> None:
        """Log successful credential load.

        Args:
            drained: Number of queued requests released
        """
        message = f"Credentials loaded, releasing {drained} pending request(s) ✓"
        self.parent._log(
            LogLevel.INFO, "signing", message, self._context("credentials_ready", drained=drained)
        )

    def credentials_failed(self, error: Exception) -> None:
        """Log a credential fetch failure.

        Args:
            error: Error reported by the credentials provider
        """
        context = self._context(
            "credentials_failed", error=str(error), error_type=type(error).__name__
        )
        message = f"aws-sigv4 ERROR (signature will not be added): {error}"
        detail = getattr(error, "detail", None)
        if detail:
            message += f"  {detail}"
        self.parent._log(LogLevel.ERROR, "signing", message, context)

    def invalid(self, error: Exception) -> None:
        """Log a credential/region diagnostic that prevents signing.

        Args:
            error: Diagnostic error (message + suggestion)
        """
        suggestion = getattr(error, "suggestion", None)
        message = f"aws-sigv4 ERROR (signature will not be added): {error}"
        if suggestion:
            message += f"  {suggestion}"
        context = self._context("signing_skipped", error=str(error))
        self.parent._log(LogLevel.ERROR, "signing", message, context)

    def queued(self, pending: int) -> None:
        """Log a request held while credentials load.

        Args:
            pending: Queue length after enqueueing
        """
        message = f"Credentials not ready, request queued ({pending} pending)"
        context = self._context("request_queued", pending=pending)
        self.parent._log(LogLevel.DEBUG, "signing", message, context)

    def queue_full(self, max_pending: int) -> None:
        """Log a request rejected because the pending queue is full.

        Args:
            max_pending: Configured queue bound
        """
        message = f"Pending queue full ({max_pending}), request rejected"
        context = self._context("queue_full", max_pending=max_pending)
        self.parent._log(LogLevel.WARN, "signing", message, context)

    def signed(self, method: str, path: str) -> None:
        """Log a signed request.

        Args:
            method: HTTP method
            path: Request path (with query)
        """
        message = f"Signed {method} {path} ✓"
        context = self._context("request_signed", method=method, path=path)
        self.parent._log(LogLevel.DEBUG, "signing", message, context)

    def failed(self, error: Exception) -> None:
        """Log a render or signer failure.

        Args:
            error: Error passed to the request callback
        """
        context = self._context("signing_failed", error=str(error), error_type=type(error).__name__)
        message = f"Signing failed: {error}"
        self.parent._log(LogLevel.ERROR, "signing", message, context)

    def callback_failed(self, error: Exception) -> None:
        """Log an exception raised by a queued request's callback.

        Args:
            error: Exception raised by the callback
        """
        context = self._context(
            "callback_failed", error=str(error), error_type=type(error).__name__
        )
        message = f"Queued request callback raised {type(error).__name__}: {error}"
        self.parent._log(LogLevel.ERROR, "signing", message, context)
