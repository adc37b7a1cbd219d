"""
Unit tests for credential storage.

Tests the in-memory and .env-backed stores and the presence check.
"""
import pytest

from core.config import read_user_env_vars, write_user_env_vars
from core.credentials import (
    PROPERTY_KEY_API_KEY,
    PROPERTY_KEY_ORG_DOMAIN,
    EnvFileCredentialStore,
    MemoryCredentialStore,
    check_credential,
    load_credentials,
    set_credential,
)
from core.domain.errors import CredentialsNotSetError
from core.interfaces.credential_store import CredentialStore


@pytest.fixture
def clean_env(monkeypatch):
    monkeypatch.delenv(PROPERTY_KEY_API_KEY, raising=False)
    monkeypatch.delenv(PROPERTY_KEY_ORG_DOMAIN, raising=False)
    return monkeypatch


class TestMemoryStore:
    """MemoryCredentialStore behaviour."""

    def test_satisfies_protocol(self):
        assert isinstance(MemoryCredentialStore(), CredentialStore)

    def test_set_credential_stores_both_keys(self):
        store = MemoryCredentialStore()
        set_credential(store, "secret", "team.backlog.jp")

        assert store.get_property(PROPERTY_KEY_API_KEY) == "secret"
        assert store.get_property(PROPERTY_KEY_ORG_DOMAIN) == "team.backlog.jp"

    def test_check_fails_when_empty(self):
        with pytest.raises(CredentialsNotSetError, match="not configured"):
            check_credential(MemoryCredentialStore())

    def test_check_fails_when_domain_missing(self):
        store = MemoryCredentialStore({PROPERTY_KEY_API_KEY: "secret"})
        with pytest.raises(CredentialsNotSetError):
            check_credential(store)

    def test_check_passes_with_both(self):
        store = MemoryCredentialStore({PROPERTY_KEY_API_KEY: "k", PROPERTY_KEY_ORG_DOMAIN: "d"})
        check_credential(store)

    def test_load_credentials(self):
        store = MemoryCredentialStore({PROPERTY_KEY_API_KEY: "k", PROPERTY_KEY_ORG_DOMAIN: "team.backlog.com"})
        creds = load_credentials(store)

        assert creds.api_key == "k"
        assert creds.org_domain == "team.backlog.com"

    def test_present_but_empty_values_load_as_empty(self):
        store = MemoryCredentialStore({PROPERTY_KEY_API_KEY: "", PROPERTY_KEY_ORG_DOMAIN: ""})
        creds = load_credentials(store)
        assert creds.api_key == ""
        assert creds.org_domain == ""


class TestEnvFileStore:
    """EnvFileCredentialStore persists into the user .env."""

    def test_roundtrip_through_file(self, tmp_path, clean_env):
        env_path = tmp_path / "cfg" / ".env"
        store = EnvFileCredentialStore(env_path)
        set_credential(store, "secret", "team.backlog.com")

        assert env_path.exists()
        reopened = EnvFileCredentialStore(env_path)
        assert sorted(reopened.get_keys()) == [PROPERTY_KEY_API_KEY, PROPERTY_KEY_ORG_DOMAIN]
        assert reopened.get_property(PROPERTY_KEY_API_KEY) == "secret"

    def test_preserves_unrelated_entries(self, tmp_path, clean_env):
        env_path = tmp_path / ".env"
        write_user_env_vars({"BACKLOG_HTTP_TIMEOUT_SECONDS": "5"}, env_path)

        set_credential(EnvFileCredentialStore(env_path), "k", "d")

        values = read_user_env_vars(env_path)
        assert values["BACKLOG_HTTP_TIMEOUT_SECONDS"] == "5"
        assert values[PROPERTY_KEY_API_KEY] == "k"

    def test_environment_overrides_file(self, tmp_path, clean_env):
        env_path = tmp_path / ".env"
        set_credential(EnvFileCredentialStore(env_path), "from-file", "file.backlog.com")
        clean_env.setenv(PROPERTY_KEY_API_KEY, "from-env")

        store = EnvFileCredentialStore(env_path)
        assert store.get_property(PROPERTY_KEY_API_KEY) == "from-env"
        assert store.get_property(PROPERTY_KEY_ORG_DOMAIN) == "file.backlog.com"

    def test_environment_only(self, tmp_path, clean_env):
        clean_env.setenv(PROPERTY_KEY_API_KEY, "k")
        clean_env.setenv(PROPERTY_KEY_ORG_DOMAIN, "env.backlog.jp")

        creds = load_credentials(EnvFileCredentialStore(tmp_path / "missing.env"))
        assert creds.org_domain == "env.backlog.jp"

    def test_missing_file_fails_check(self, tmp_path, clean_env):
        with pytest.raises(CredentialsNotSetError):
            check_credential(EnvFileCredentialStore(tmp_path / "missing.env"))


def test_env_parser_ignores_comments_and_quotes(tmp_path):
    env_path = tmp_path / ".env"
    env_path.write_text('# comment\nBACKLOG_API_KEY="quoted"\nnot-a-pair\n\n', encoding="utf-8")

    assert read_user_env_vars(env_path) == {"BACKLOG_API_KEY": "quoted"}
