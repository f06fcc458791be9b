"""Secret retrieval for OAuth credentials and spreadsheet configuration."""

from sitelog_sheets.secrets.exceptions import (
    InvalidSecretError,
    SecretError,
    SecretNotFoundError,
)
from sitelog_sheets.secrets.store import SecretStore, env_var_for

__all__ = [
    "SecretStore",
    "env_var_for",
    "SecretError",
    "SecretNotFoundError",
    "InvalidSecretError",
]
