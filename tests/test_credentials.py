"""Tests for loading Danfoss API credentials."""

import base64

import pytest

from pydanfoss_ally import ConfigurationError, Credentials, load_credentials
from pydanfoss_ally.const import ENV_API_KEY, ENV_API_SECRET


class TestLoadCredentials:
    """Tests for load_credentials."""

    def test_reads_key_and_secret(self) -> None:
        """Test that both variables are read."""
        creds = load_credentials({ENV_API_KEY: "key", ENV_API_SECRET: "secret"})
        assert creds == Credentials(key="key", secret="secret")

    def test_missing_key_names_variable(self) -> None:
        """Test that a missing key raises and names DANFOSS_API_KEY."""
        with pytest.raises(ConfigurationError, match=ENV_API_KEY):
            load_credentials({ENV_API_SECRET: "secret"})

    def test_missing_secret_names_variable(self) -> None:
        """Test that a missing secret raises and names DANFOSS_API_SECRET."""
        with pytest.raises(ConfigurationError, match=ENV_API_SECRET):
            load_credentials({ENV_API_KEY: "key"})

    def test_empty_value_counts_as_missing(self) -> None:
        """Test that an empty variable is rejected."""
        with pytest.raises(ConfigurationError, match=ENV_API_KEY):
            load_credentials({ENV_API_KEY: "", ENV_API_SECRET: "secret"})

    def test_defaults_to_process_environment(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that os.environ is used when no mapping is given."""
        monkeypatch.setenv(ENV_API_KEY, "env_key")
        monkeypatch.setenv(ENV_API_SECRET, "env_secret")
        creds = load_credentials()
        assert creds.key == "env_key"
        assert creds.secret == "env_secret"


class TestCredentials:
    """Tests for the Credentials dataclass."""

    def test_basic_auth_header(self) -> None:
        """Test that the header is base64 of key:secret."""
        creds = Credentials(key="key", secret="secret")
        expected = base64.b64encode(b"key:secret").decode()
        assert creds.basic_auth_header() == f"Basic {expected}"

    def test_repr_hides_secret(self) -> None:
        """Test that the secret does not leak into logs."""
        creds = Credentials(key="key", secret="very_secret")
        assert "very_secret" not in repr(creds)

    def test_is_frozen(self) -> None:
        """Test that credentials cannot be modified."""
        creds = Credentials(key="key", secret="secret")
        with pytest.raises((AttributeError, TypeError)):
            creds.key = "other"
