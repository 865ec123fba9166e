"""
Connection strings for the dashboard, from the environment or HashiCorp Vault.

Each URL is resolved once per process and cached. An environment variable
(POSTGRES_URL, VALKEY_URL) wins when set; otherwise the value is read from
Vault using AppRole authentication. All Vault paths are scoped to the
'dashboard/' prefix.
"""

import os
import logging
from typing import Dict

import hvac
from hvac.exceptions import InvalidPath, Unauthorized, Forbidden, VaultError as HvacError

logger = logging.getLogger(__name__)

_SECRET_PREFIX = "dashboard"

# Singleton instance and cache
_vault_client_instance: "VaultClient | None" = None
_secret_cache: Dict[str, str] = {}


def _ensure_vault_client() -> "VaultClient":
    global _vault_client_instance
    if _vault_client_instance is None:
        _vault_client_instance = VaultClient()
    return _vault_client_instance


class VaultError(Exception):
    """Vault operation failed. Fatal - the dashboard cannot start without its URLs."""


class VaultClient:
    """Vault client with AppRole auth, env-based config, and fail-fast behavior."""

    def __init__(
        self,
        vault_addr: str | None = None,
        vault_namespace: str | None = None,
    ):
        self.vault_addr = vault_addr or os.getenv("VAULT_ADDR")
        self.vault_namespace = vault_namespace or os.getenv("VAULT_NAMESPACE")
        self.vault_role_id = os.getenv("VAULT_ROLE_ID")
        self.vault_secret_id = os.getenv("VAULT_SECRET_ID")

        if not self.vault_addr:
            raise VaultError("VAULT_ADDR environment variable is required")

        if not self.vault_role_id or not self.vault_secret_id:
            raise VaultError(
                "VAULT_ROLE_ID and VAULT_SECRET_ID environment variables are required"
            )

        client_kwargs = {"url": self.vault_addr}
        if self.vault_namespace:
            client_kwargs["namespace"] = self.vault_namespace

        self.client = hvac.Client(**client_kwargs)
        self._authenticate_approle()

        if not self.client.is_authenticated():
            raise VaultError("Vault authentication failed")

        logger.info(f"Vault client initialized: {self.vault_addr}")

    def _authenticate_approle(self) -> None:
        try:
            auth_response = self.client.auth.approle.login(
                role_id=self.vault_role_id,
                secret_id=self.vault_secret_id,
            )
            self.client.token = auth_response["auth"]["client_token"]
        except HvacError as e:
            logger.error(f"AppRole authentication failed: {e}")
            raise VaultError(f"AppRole authentication failed: {e}") from e

    def get_secret(self, path: str, field: str) -> str:
        """
        Retrieve a single field from a KV v2 secret under 'dashboard/'.

        Raises:
            VaultError: Path missing or not accessible, or field not present.
        """
        full_path = f"{_SECRET_PREFIX}/{path}"

        try:
            response = self.client.secrets.kv.v2.read_secret_version(
                path=full_path, raise_on_deleted_version=True
            )
        except InvalidPath as e:
            raise VaultError(f"Secret path '{full_path}' not found in Vault") from e
        except (Unauthorized, Forbidden) as e:
            raise VaultError(f"Access denied to secret '{full_path}': {e}") from e

        secret_data = response["data"]["data"]
        if field not in secret_data:
            raise VaultError(
                f"Field '{field}' not found in secret '{full_path}'. "
                f"Available: {', '.join(secret_data.keys())}"
            )
        return secret_data[field]


def _resolve_url(env_var: str, path: str) -> str:
    cache_key = f"{_SECRET_PREFIX}/{path}/url"
    if cache_key in _secret_cache:
        return _secret_cache[cache_key]

    value = os.getenv(env_var)
    if value:
        logger.info(f"{env_var} taken from environment")
    else:
        value = _ensure_vault_client().get_secret(path, "url")

    _secret_cache[cache_key] = value
    return value


def get_database_url() -> str:
    """PostgreSQL connection URL (POSTGRES_URL, else Vault 'dashboard/database')."""
    return _resolve_url("POSTGRES_URL", "database")


def get_valkey_url() -> str:
    """Valkey connection URL (VALKEY_URL, else Vault 'dashboard/valkey')."""
    return _resolve_url("VALKEY_URL", "valkey")


def clear_cache() -> None:
    """Forget resolved URLs and the Vault session. Used by tests."""
    global _vault_client_instance
    _vault_client_instance = None
    _secret_cache.clear()
