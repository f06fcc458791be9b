"""Google OAuth and API authentication utilities."""

from sitelog_sheets.google.exceptions import (
    AuthorizationRequired,
    CredentialsNotFoundError,
    GoogleAuthError,
    ScopeMismatchError,
    TokenError,
)
from sitelog_sheets.google.oauth import GoogleOAuth

__all__ = [
    "GoogleOAuth",
    "GoogleAuthError",
    "CredentialsNotFoundError",
    "TokenError",
    "ScopeMismatchError",
    "AuthorizationRequired",
]
