"""
Pytest configuration and shared fixtures for sigv4-render tests.
"""

import io
import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sigv4_render.logging import LogConfig, PluginLogger  # noqa: E402
from sigv4_render.signing import Credentials  # noqa: E402
from sigv4_render.types import LogFormat, LogLevel  # noqa: E402
from tests.mocks import CallbackRecorder, FakeSigner  # noqa: E402


# =============================================================================
# Signing Fixtures
# =============================================================================


@pytest.fixture
def credentials() -> Credentials:
    """Valid static credentials."""
    return Credentials(access_key_id="AKIDEXAMPLE", secret_access_key="secret")


@pytest.fixture
def signer() -> FakeSigner:
    """Recording signer."""
    return FakeSigner()


@pytest.fixture
def callback() -> CallbackRecorder:
    """Recording request callback."""
    return CallbackRecorder()


# =============================================================================
# Logging Fixtures
# =============================================================================


@pytest.fixture
def log_output() -> io.StringIO:
    """Buffer capturing plugin log lines."""
    return io.StringIO()


@pytest.fixture
def plugin_logger(log_output: io.StringIO) -> PluginLogger:
    """JSON logger writing to log_output at DEBUG level."""
    return PluginLogger(LogConfig(level=LogLevel.DEBUG, format=LogFormat.JSON, output=log_output))


# =============================================================================
# Markers Configuration
# =============================================================================


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "property: Property-based tests")
