"""Tests for clients/vault_client.py - connection string resolution."""

from unittest.mock import patch

import pytest

from clients.vault_client import VaultClient, VaultError, get_database_url, get_valkey_url


@pytest.fixture
def no_vault_env(monkeypatch):
    for name in ("VAULT_ADDR", "VAULT_ROLE_ID", "VAULT_SECRET_ID", "POSTGRES_URL", "VALKEY_URL"):
        monkeypatch.delenv(name, raising=False)


class TestEnvironmentPrecedence:

    def test_database_url_from_env(self, no_vault_env, monkeypatch):
        monkeypatch.setenv("POSTGRES_URL", "postgresql://u@h/db")
        assert get_database_url() == "postgresql://u@h/db"

    def test_valkey_url_from_env(self, no_vault_env, monkeypatch):
        monkeypatch.setenv("VALKEY_URL", "redis://h:6379/0")
        assert get_valkey_url() == "redis://h:6379/0"

    def test_url_read_once(self, no_vault_env, monkeypatch):
        monkeypatch.setenv("POSTGRES_URL", "postgresql://first")
        get_database_url()
        monkeypatch.setenv("POSTGRES_URL", "postgresql://second")

        assert get_database_url() == "postgresql://first"

    def test_falls_back_to_vault(self, no_vault_env):
        with patch("clients.vault_client.VaultClient") as vault_cls:
            vault_cls.return_value.get_secret.return_value = "postgresql://from-vault"
            assert get_database_url() == "postgresql://from-vault"

        vault_cls.return_value.get_secret.assert_called_once_with("database", "url")


class TestVaultClientInit:

    def test_missing_vault_addr_raises(self, no_vault_env):
        with pytest.raises(VaultError, match="VAULT_ADDR"):
            VaultClient()

    def test_missing_approle_credentials_raises(self, no_vault_env, monkeypatch):
        monkeypatch.setenv("VAULT_ADDR", "http://vault:8200")
        with pytest.raises(VaultError, match="VAULT_ROLE_ID"):
            VaultClient()


class TestGetSecret:

    @pytest.fixture
    def vault(self, no_vault_env, monkeypatch):
        monkeypatch.setenv("VAULT_ADDR", "http://vault:8200")
        monkeypatch.setenv("VAULT_ROLE_ID", "role")
        monkeypatch.setenv("VAULT_SECRET_ID", "secret")
        with patch("clients.vault_client.hvac.Client") as client_cls:
            hvac_client = client_cls.return_value
            hvac_client.auth.approle.login.return_value = {"auth": {"client_token": "tok"}}
            hvac_client.is_authenticated.return_value = True
            yield VaultClient(), hvac_client

    def test_path_scoped_to_dashboard(self, vault):
        client, hvac_client = vault
        hvac_client.secrets.kv.v2.read_secret_version.return_value = {"data": {"data": {"url": "x"}}}

        assert client.get_secret("database", "url") == "x"
        hvac_client.secrets.kv.v2.read_secret_version.assert_called_once_with(
            path="dashboard/database", raise_on_deleted_version=True
        )

    def test_missing_field_raises(self, vault):
        client, hvac_client = vault
        hvac_client.secrets.kv.v2.read_secret_version.return_value = {"data": {"data": {"other": "x"}}}

        with pytest.raises(VaultError, match="Field 'url' not found"):
            client.get_secret("database", "url")
