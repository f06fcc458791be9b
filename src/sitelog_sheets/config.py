"""Centralized credential configuration.

Secrets are read from the sitelog-sheets repo root by default:
    .env                                  - environment overrides
    secrets/sitelogix/google-oauth.json   - OAuth client id/secret + refresh token
    secrets/sitelogix/google-sheets.json  - target spreadsheet id or URL

Any secret can instead be supplied through an environment variable holding
its JSON document (see sitelog_sheets.secrets.SecretStore).

This module auto-loads the .env file on import, so values placed there are
visible to every sitelog_sheets module.
"""

import os
from pathlib import Path

# __file__ is src/sitelog_sheets/config.py, so 3 levels up
REPO_ROOT = Path(__file__).parent.parent.parent
ENV_FILE = REPO_ROOT / ".env"

# Secret names, as stored in the secrets store
GOOGLE_OAUTH_SECRET = "sitelogix/google-oauth"
GOOGLE_SHEETS_SECRET = "sitelogix/google-sheets"

DEFAULT_REDIRECT_URI = "http://localhost:3000"
DEFAULT_ORGANIZATION_NAME = "Parkway Construction Services"
HOURS_LOG_SHEET = "hours log"


def _load_env_file(env_path: Path) -> dict[str, str]:
    """Load environment variables from a file.

    Args:
        env_path: Path to .env file.

    Returns:
        Dictionary of loaded variables.
    """
    loaded = {}
    if not env_path.exists():
        return loaded

    with open(env_path) as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" not in line:
                continue

            key, _, value = line.partition("=")
            key = key.strip()
            value = value.strip()

            if (value.startswith('"') and value.endswith('"')) or (
                value.startswith("'") and value.endswith("'")
            ):
                value = value[1:-1]

            # Environment wins over .env
            if key and key not in os.environ:
                os.environ[key] = value
                loaded[key] = value

    return loaded


def get_secrets_dir() -> Path:
    """Directory holding secret JSON documents.

    Honors SITELOG_SECRETS_DIR, falling back to <repo>/secrets.
    """
    override = os.environ.get("SITELOG_SECRETS_DIR")
    if override:
        return Path(override).expanduser()
    return REPO_ROOT / "secrets"


def get_credential_status() -> dict:
    """Get status of all configured credentials.

    Returns:
        Dictionary with credential status.
    """
    from sitelog_sheets.secrets import SecretStore

    store = SecretStore()
    return {
        "repo_root": str(REPO_ROOT),
        "env_file": ENV_FILE.exists(),
        "secrets_dir": str(store.secrets_dir),
        "secrets": {
            GOOGLE_OAUTH_SECRET: store.exists(GOOGLE_OAUTH_SECRET),
            GOOGLE_SHEETS_SECRET: store.exists(GOOGLE_SHEETS_SECRET),
        },
    }


# Auto-load .env from repo root on import
_loaded = _load_env_file(ENV_FILE)
