"""Read-only access to JSON secret documents."""

from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any

from sitelog_sheets.config import get_secrets_dir
from sitelog_sheets.secrets.exceptions import InvalidSecretError, SecretNotFoundError

logger = logging.getLogger(__name__)


def env_var_for(name: str) -> str:
    """Environment variable that may carry a secret.

    "sitelogix/google-oauth" -> "SITELOGIX_GOOGLE_OAUTH"
    """
    return re.sub(r"[^A-Za-z0-9]+", "_", name).strip("_").upper()


class SecretStore:
    """Lookup of named JSON secrets.

    A secret is resolved from the environment variable derived from its name
    first, then from ``<secrets_dir>/<name>.json``. Parsed documents are cached
    for the lifetime of the store.

    Example:
        >>> store = SecretStore()
        >>> oauth = store.get("sitelogix/google-oauth")
        >>> oauth["client_id"]
    """

    def __init__(self, secrets_dir: str | Path | None = None) -> None:
        self.secrets_dir = Path(secrets_dir) if secrets_dir else get_secrets_dir()
        self._cache: dict[str, dict[str, Any]] = {}

    def path_for(self, name: str) -> Path:
        return self.secrets_dir / f"{name}.json"

    def exists(self, name: str) -> bool:
        """Check whether a secret is available without parsing it."""
        if name in self._cache:
            return True
        return bool(os.environ.get(env_var_for(name))) or self.path_for(name).exists()

    def get(self, name: str, required_keys: tuple[str, ...] = ()) -> dict[str, Any]:
        """Fetch a secret document.

        Args:
            name: Secret name (e.g., "sitelogix/google-oauth").
            required_keys: Keys that must be present and non-empty.

        Returns:
            The parsed JSON object.

        Raises:
            SecretNotFoundError: If no source provides the secret.
            InvalidSecretError: If the secret is not a JSON object or misses keys.
        """
        if name not in self._cache:
            self._cache[name] = self._load(name)

        secret = self._cache[name]
        missing = [key for key in required_keys if not secret.get(key)]
        if missing:
            raise InvalidSecretError(f"Secret '{name}' is missing keys: {', '.join(missing)}")
        return secret

    def _load(self, name: str) -> dict[str, Any]:
        env_var = env_var_for(name)
        raw = os.environ.get(env_var)
        if raw:
            source = f"${env_var}"
        else:
            path = self.path_for(name)
            if not path.exists():
                raise SecretNotFoundError(name, env_var, str(path))
            raw = path.read_text()
            source = str(path)

        try:
            secret = json.loads(raw)
        except json.JSONDecodeError as e:
            raise InvalidSecretError(f"Secret '{name}' from {source} is not valid JSON: {e}") from e

        if not isinstance(secret, dict):
            raise InvalidSecretError(f"Secret '{name}' from {source} must be a JSON object")

        logger.info(f"Loaded secret {name} from {source}")
        return secret
