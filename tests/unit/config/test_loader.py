"""Unit tests for the plugin configuration loader."""

import pytest

from sigv4_render.config import ConfigLoader, load_config, resolve_env_vars, resolve_region
from sigv4_render.errors import SigV4Error
from sigv4_render.types import LogFormat, LogLevel


def script_config(**section):
    return {"plugins": {"aws-sigv4": section}}


class TestResolveRegion:
    """Tests for region resolution order."""

    def test_explicit_wins(self):
        env = {"AWS_REGION": "eu-west-1"}
        assert resolve_region("us-east-1", env) == "us-east-1"

    def test_aws_region_before_default(self):
        env = {"AWS_REGION": "eu-west-1", "AWS_DEFAULT_REGION": "ap-south-1"}
        assert resolve_region(None, env) == "eu-west-1"

    def test_default_region(self):
        assert resolve_region(None, {"AWS_DEFAULT_REGION": "ap-south-1"}) == "ap-south-1"

    def test_empty_values_skipped(self):
        env = {"AWS_REGION": "", "AWS_DEFAULT_REGION": "us-west-2"}
        assert resolve_region("", env) == "us-west-2"

    def test_none(self):
        assert resolve_region(None, {}) is None


class TestResolveEnvVars:
    """Tests for ${VAR} resolution in config files."""

    def test_set(self, monkeypatch):
        monkeypatch.setenv("SIGV4_TEST_SERVICE", "s3")
        assert resolve_env_vars("${SIGV4_TEST_SERVICE}") == "s3"

    def test_default(self, monkeypatch):
        monkeypatch.delenv("SIGV4_TEST_UNSET", raising=False)
        assert resolve_env_vars("${SIGV4_TEST_UNSET:-fallback}") == "fallback"

    def test_required_message(self, monkeypatch):
        monkeypatch.delenv("SIGV4_TEST_UNSET", raising=False)
        with pytest.raises(SigV4Error) as exc_info:
            resolve_env_vars("${SIGV4_TEST_UNSET:?set the service}")
        assert exc_info.value.code == "CONFIG_INVALID"
        assert exc_info.value.detail == "set the service"

    def test_required_unset(self, monkeypatch):
        monkeypatch.delenv("SIGV4_TEST_UNSET", raising=False)
        with pytest.raises(SigV4Error):
            resolve_env_vars("${SIGV4_TEST_UNSET}")


class TestScriptConfig:
    """Tests for the script config checks."""

    @pytest.mark.parametrize(
        "config",
        [None, {}, {"plugins": None}, {"plugins": {}}, {"plugins": {"other": {}}}],
    )
    def test_plugin_section_required(self, config):
        with pytest.raises(SigV4Error) as exc_info:
            ConfigLoader(environ={}).load_from_script_config(config)
        assert exc_info.value.code == "PLUGIN_CONFIG_REQUIRED"
        assert str(exc_info.value) == (
            'The "aws-sigv4" plugin requires configuration under '
            "[script].config.plugins.aws-sigv4"
        )

    def test_service_name_required(self):
        with pytest.raises(SigV4Error) as exc_info:
            ConfigLoader(environ={}).load_from_script_config(script_config(region="us-east-1"))
        assert exc_info.value.code == "SERVICE_NAME_REQUIRED"
        assert str(exc_info.value) == 'The "serviceName" parameter is required'

    def test_service_name_must_be_string(self):
        with pytest.raises(SigV4Error) as exc_info:
            ConfigLoader(environ={}).load_from_script_config(script_config(serviceName=5))
        assert exc_info.value.code == "SERVICE_NAME_INVALID"
        assert str(exc_info.value) == 'The "serviceName" param must have a string value'

    def test_minimal(self):
        config = ConfigLoader(environ={}).load_from_script_config(
            script_config(serviceName="execute-api")
        )
        assert config.service_name == "execute-api"
        assert config.region is None
        assert config.template.max_depth == 32
        assert config.signing.max_pending is None
        assert config.logging.level == LogLevel.INFO

    def test_region_from_environment(self):
        loader = ConfigLoader(environ={"AWS_REGION": "eu-central-1"})
        config = loader.load_from_script_config(script_config(serviceName="s3"))
        assert config.region == "eu-central-1"

    def test_optional_keys(self):
        config = ConfigLoader(environ={}).load_from_script_config(
            script_config(
                serviceName="s3",
                region="us-east-2",
                maxRenderDepth=5,
                maxPending=10,
                logLevel="warning",
                logFormat="JSON",
            )
        )
        assert config.region == "us-east-2"
        assert config.template.max_depth == 5
        assert config.signing.max_pending == 10
        assert config.logging.level == LogLevel.WARN
        assert config.logging.format == LogFormat.JSON

    @pytest.mark.parametrize(
        "key,value",
        [
            ("maxRenderDepth", 0),
            ("maxPending", -1),
            ("maxPending", True),
            ("region", 12),
            ("logLevel", "loud"),
            ("logFormat", "xml"),
        ],
    )
    def test_invalid_optional_keys(self, key, value):
        with pytest.raises(SigV4Error) as exc_info:
            ConfigLoader(environ={}).load_from_script_config(
                script_config(serviceName="s3", **{key: value})
            )
        assert exc_info.value.code == "CONFIG_INVALID"
        assert key in exc_info.value.detail

    def test_unknown_key_is_warning(self):
        result = ConfigLoader().validate({"serviceName": "s3", "extra": 1})
        assert result.valid
        assert [issue.path for issue in result.warnings] == ["plugins.aws-sigv4.extra"]

    def test_get(self):
        loader = ConfigLoader(environ={})
        with pytest.raises(SigV4Error):
            loader.get()
        config = loader.load_from_script_config(script_config(serviceName="s3"))
        assert loader.get() is config


class TestLoadYaml:
    """Tests for loading config from YAML files."""

    def test_whole_script(self, tmp_path, monkeypatch):
        monkeypatch.setenv("SIGV4_TEST_SERVICE", "execute-api")
        path = tmp_path / "script.yml"
        path.write_text(
            "config:\n"
            "  target: https://example.com\n"
            "  plugins:\n"
            "    aws-sigv4:\n"
            "      serviceName: ${SIGV4_TEST_SERVICE}\n"
            "      region: us-west-1\n"
        )
        config = load_config(path)
        assert config.service_name == "execute-api"
        assert config.region == "us-west-1"

    def test_config_block_only(self, tmp_path):
        path = tmp_path / "config.yml"
        path.write_text("plugins:\n  aws-sigv4:\n    serviceName: s3\n    region: us-east-1\n")
        assert ConfigLoader().load(path).service_name == "s3"

    def test_missing_file(self, tmp_path):
        with pytest.raises(SigV4Error) as exc_info:
            load_config(tmp_path / "nope.yml")
        assert "not found" in exc_info.value.detail

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yml"
        path.write_text("plugins: [unclosed\n")
        with pytest.raises(SigV4Error) as exc_info:
            load_config(path)
        assert "Invalid YAML" in exc_info.value.detail
