"""
Tests for relay configuration loading.
"""
import pytest
import yaml

from chat_relay.core.config import load_config

PROVIDER_ENV = (
    "OPENAI_API_KEY", "OPENAI_MODEL", "OPENAI_BASE_URL",
    "GEMINI_API_KEY", "GEMINI_MODEL", "GEMINI_BASE_URL",
    "ANTHROPIC_API_KEY", "ANTHROPIC_MODEL", "ANTHROPIC_BASE_URL",
    "CHAT_RELAY_CONFIG", "PORT", "HOST", "CORS_ORIGINS",
    "OTEL_EXPORTER_OTLP_ENDPOINT", "PROVIDER_TIMEOUT",
)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Isolate tests from the caller's environment and config files."""
    for var in PROVIDER_ENV:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    return monkeypatch


class TestEnvironmentConfig:
    """Test configuration built from environment variables."""

    def test_defaults(self, clean_env):
        """Test built-in defaults with nothing configured."""
        config = load_config()
        assert config.port == 3001
        assert config.host == "0.0.0.0"
        assert config.cors_origins == ["*"]
        assert config.otel_endpoint is None
        assert config.providers["openai"].default_model == "gpt-4o-mini"
        assert config.providers["gemini"].default_model == "gemini-2.0-flash-exp"
        assert config.providers["anthropic"].default_model == "claude-3-5-sonnet-20241022"
        assert config.credentials_present() == {"openai": False, "gemini": False, "anthropic": False}

    def test_credentials_from_env(self, clean_env):
        """Test credentials and overrides are read from the environment."""
        clean_env.setenv("OPENAI_API_KEY", "sk-test")
        clean_env.setenv("OPENAI_BASE_URL", "http://localhost:8000/v1")
        clean_env.setenv("ANTHROPIC_API_KEY", "ak-test")
        clean_env.setenv("ANTHROPIC_MODEL", "claude-3-haiku-20240307")
        clean_env.setenv("PORT", "8080")

        config = load_config()

        assert config.credentials_present() == {"openai": True, "gemini": False, "anthropic": True}
        assert config.providers["openai"].base_url == "http://localhost:8000/v1"
        assert config.providers["anthropic"].default_model == "claude-3-haiku-20240307"
        assert config.port == 8080

    def test_empty_credential_is_absent(self, clean_env):
        """Test an empty key counts as not configured."""
        clean_env.setenv("GEMINI_API_KEY", "")
        assert load_config().credentials_present()["gemini"] is False


class TestFileConfig:
    """Test configuration loaded from YAML."""

    def test_load_file_with_env_expansion(self, clean_env, tmp_path):
        """Test ${VAR} references and per-provider settings."""
        clean_env.setenv("MY_GEMINI_KEY", "g-test")
        path = tmp_path / "relay.yaml"
        path.write_text(yaml.safe_dump({
            "providers": {
                "gemini": {"api_key": "${MY_GEMINI_KEY}", "model": "gemini-1.5-pro", "timeout": 15},
                "mistral": {"api_key": "ignored"},
            },
            "server": {"port": 9000},
        }))

        config = load_config(str(path))

        assert config.providers["gemini"].api_key == "g-test"
        assert config.providers["gemini"].default_model == "gemini-1.5-pro"
        assert config.providers["gemini"].timeout == 15.0
        assert "mistral" not in config.providers
        assert config.port == 9000

    def test_config_path_from_env(self, clean_env, tmp_path):
        """Test CHAT_RELAY_CONFIG points at the file."""
        path = tmp_path / "custom.yaml"
        path.write_text(yaml.safe_dump({"providers": {"openai": {"api_key": "sk-file"}}}))
        clean_env.setenv("CHAT_RELAY_CONFIG", str(path))

        assert load_config().providers["openai"].api_key == "sk-file"

    def test_missing_file_falls_back(self, clean_env, tmp_path):
        """Test a missing file uses the environment."""
        clean_env.setenv("OPENAI_API_KEY", "sk-env")
        config = load_config(str(tmp_path / "nope.yaml"))
        assert config.providers["openai"].api_key == "sk-env"

    def test_invalid_yaml_falls_back(self, clean_env, tmp_path):
        """Test unparsable files are ignored."""
        path = tmp_path / "broken.yaml"
        path.write_text("providers: [unclosed")
        config = load_config(str(path))
        assert config.port == 3001

    @pytest.mark.parametrize("data", [
        {"providers": {"openai": {"timeout": "fast"}}},
        {"server": {"port": "abc"}},
        {"providers": {"openai": ["not", "a", "mapping"]}},
        {"providers": ["openai"]},
    ])
    def test_malformed_values_fall_back(self, clean_env, tmp_path, data):
        """Test bad values in a well-formed file do not stop start-up."""
        clean_env.setenv("OPENAI_API_KEY", "sk-env")
        path = tmp_path / "relay.yaml"
        path.write_text(yaml.safe_dump(data))

        config = load_config(str(path))

        assert config.port == 3001
        assert config.providers["openai"].timeout == 60.0
        assert config.providers["openai"].api_key == "sk-env"
