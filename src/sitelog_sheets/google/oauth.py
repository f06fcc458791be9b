"""Google OAuth management using Authlib.

This module provides user-delegated OAuth 2.0 for Google APIs with:
- Authorization URL generation and code exchange (to obtain a refresh token)
- Access token refresh from a stored refresh token
- Google API service creation (Sheets, Drive)

The client id, client secret and refresh token are read from the
``sitelogix/google-oauth`` secret rather than a local token file:
    {"client_id": "...", "client_secret": "...", "refresh_token": "..."}
"""

import logging
from datetime import datetime, timedelta
from typing import Any

from authlib.integrations.requests_client import OAuth2Session
from authlib.oauth2 import OAuth2Error
from google.oauth2.credentials import Credentials as GoogleCredentials
from googleapiclient.discovery import build

from sitelog_sheets.config import DEFAULT_REDIRECT_URI, GOOGLE_OAUTH_SECRET
from sitelog_sheets.google.exceptions import (
    CredentialsNotFoundError,
    ScopeMismatchError,
    TokenError,
)

logger = logging.getLogger(__name__)


SCOPES = {
    "sheets": "https://www.googleapis.com/auth/spreadsheets",
    "sheets_readonly": "https://www.googleapis.com/auth/spreadsheets.readonly",
    "drive": "https://www.googleapis.com/auth/drive",
    "drive_readonly": "https://www.googleapis.com/auth/drive.readonly",
    "drive_file": "https://www.googleapis.com/auth/drive.file",
}

DEFAULT_SCOPES = ["sheets", "drive_file"]


class GoogleOAuth:
    """Google OAuth management using Authlib.

    Holds the OAuth client and a long-lived refresh token, trades the refresh
    token for access tokens on demand and builds Google API services.

    Example:
        >>> auth = GoogleOAuth.from_store(SecretStore())
        >>> if not auth.is_authorized():
        ...     print(f"Visit: {auth.get_authorization_url()}")
        ...     auth.fetch_token(code=input("Paste code: "))
        >>> sheets_service = auth.build_service("sheets", "v4")
    """

    AUTHORIZE_URL = "https://accounts.google.com/o/oauth2/auth"
    TOKEN_URL = "https://oauth2.googleapis.com/token"
    REVOKE_URL = "https://oauth2.googleapis.com/revoke"

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        refresh_token: str | None = None,
        redirect_uri: str = DEFAULT_REDIRECT_URI,
        scopes: list[str] | None = None,
    ):
        """Initialize Google OAuth.

        Args:
            client_id: OAuth client ID.
            client_secret: OAuth client secret.
            refresh_token: Previously granted refresh token, if any.
            redirect_uri: Redirect URI registered for the OAuth client.
            scopes: List of scope names (e.g., ["sheets", "drive_file"]) or full URLs.
                   If None, defaults to ["sheets", "drive_file"].
        """
        if not client_id or not client_secret:
            raise CredentialsNotFoundError("the supplied OAuth configuration")

        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.required_scopes = self._resolve_scopes(scopes or DEFAULT_SCOPES)

        token = {"refresh_token": refresh_token} if refresh_token else None

        self.session = OAuth2Session(
            client_id=self.client_id,
            client_secret=self.client_secret,
            scope=" ".join(self.required_scopes),
            redirect_uri=self.redirect_uri,
            token=token,
            token_endpoint=self.TOKEN_URL,
            token_endpoint_auth_method="client_secret_post",
        )

        self._state: str | None = None
        self.last_refresh: datetime | None = None
        self.refresh_count = 0

    @classmethod
    def from_secret(cls, secret: dict[str, Any], scopes: list[str] | None = None) -> "GoogleOAuth":
        """Build from a secret document with client_id, client_secret, refresh_token."""
        if not secret.get("client_id") or not secret.get("client_secret"):
            raise CredentialsNotFoundError(GOOGLE_OAUTH_SECRET)

        return cls(
            client_id=secret["client_id"],
            client_secret=secret["client_secret"],
            refresh_token=secret.get("refresh_token"),
            redirect_uri=secret.get("redirect_uri") or DEFAULT_REDIRECT_URI,
            scopes=scopes,
        )

    @classmethod
    def from_store(
        cls,
        store,
        secret_name: str = GOOGLE_OAUTH_SECRET,
        scopes: list[str] | None = None,
    ) -> "GoogleOAuth":
        """Build from the OAuth secret held in a SecretStore."""
        return cls.from_secret(store.get(secret_name), scopes=scopes)

    def _resolve_scopes(self, scopes: list[str]) -> list[str]:
        """Resolve scope names to full URLs."""
        resolved = []
        for scope in scopes:
            if scope.startswith("https://"):
                resolved.append(scope)
            elif scope in SCOPES:
                resolved.append(SCOPES[scope])
            else:
                raise ValueError(
                    f"Unknown scope: {scope}. Use full URL or one of: {list(SCOPES.keys())}"
                )
        return resolved

    @property
    def refresh_token(self) -> str | None:
        if not self.session.token:
            return None
        return self.session.token.get("refresh_token")

    def is_authorized(self) -> bool:
        """Check if a refresh token is available.

        Returns:
            True if the client can obtain access tokens without user consent.
        """
        return bool(self.refresh_token)

    def get_authorization_url(self) -> str:
        """Start OAuth authorization flow.

        Consent is forced so that Google issues a refresh token.

        Returns:
            Authorization URL for user to visit.
        """
        authorization_url, state = self.session.create_authorization_url(
            self.AUTHORIZE_URL,
            access_type="offline",
            prompt="consent",
        )

        self._state = state
        return authorization_url

    def fetch_token(
        self,
        authorization_response: str | None = None,
        code: str | None = None,
    ) -> dict[str, Any]:
        """Complete authorization flow and fetch tokens.

        Args:
            authorization_response: The full redirect URL from OAuth callback.
            code: The bare authorization code, as an alternative.

        Returns:
            The fetched OAuth token dict (includes refresh_token).

        Raises:
            ValueError: If neither argument is given.
            TokenError: If the exchange fails.
            ScopeMismatchError: If the granted scopes miss required ones.
        """
        if not authorization_response and not code:
            raise ValueError("Provide the redirect URL or the authorization code")

        kwargs: dict[str, Any] = {}
        if authorization_response:
            kwargs["authorization_response"] = authorization_response
        else:
            kwargs["code"] = code

        try:
            token = self.session.fetch_token(
                self.TOKEN_URL,
                grant_type="authorization_code",
                **kwargs,
            )
        except OAuth2Error as e:
            raise TokenError(f"Failed to exchange authorization code: {e}") from e

        granted = set(token.get("scope", "").split())
        if granted:
            missing = set(self.required_scopes) - granted
            if missing:
                raise ScopeMismatchError(missing)

        if not token.get("refresh_token"):
            logger.warning("Token response has no refresh_token; re-run consent with prompt=consent")

        logger.info(f"Fetched token with scopes: {sorted(granted)}")
        return dict(token)

    def _access_token_expired(self) -> bool:
        token = self.session.token or {}
        if not token.get("access_token"):
            return True
        expires_at = token.get("expires_at", 0)
        return bool(expires_at) and expires_at < datetime.now().timestamp()

    def get_credentials(self) -> GoogleCredentials:
        """Get Google Credentials object for API client libraries.

        Returns:
            Google Credentials object with a current access token.

        Raises:
            TokenError: If not authorized or token refresh fails.
        """
        if not self.is_authorized():
            raise TokenError("No refresh token available; authorization required")

        if self._access_token_expired():
            logger.info("Access token missing or expired, refreshing...")
            try:
                self.session.refresh_token(
                    self.TOKEN_URL,
                    refresh_token=self.refresh_token,
                )
            except OAuth2Error as e:
                raise TokenError(f"Failed to refresh token: {e}") from e

            self.last_refresh = datetime.now()
            self.refresh_count += 1

        return GoogleCredentials(
            token=self.session.token["access_token"],
            refresh_token=self.refresh_token,
            token_uri=self.TOKEN_URL,
            client_id=self.client_id,
            client_secret=self.client_secret,
            scopes=self.required_scopes,
        )

    def build_service(self, service_name: str = "sheets", version: str = "v4"):
        """Build a Google API service with current credentials.

        Args:
            service_name: Name of the service (e.g., 'sheets', 'drive').
            version: API version (e.g., 'v4').

        Returns:
            Google API service object.
        """
        creds = self.get_credentials()
        return build(service_name, version, credentials=creds, cache_discovery=False)

    def revoke_token(self) -> None:
        """Revoke the grant at Google and forget the session's tokens.

        Revoking the refresh token also invalidates its access tokens. The
        stored secret is not touched; remove its refresh_token by hand.
        """
        token = self.session.token
        if not token:
            logger.warning("No token to revoke")
            return

        value = token.get("refresh_token") or token.get("access_token")
        try:
            response = self.session.post(
                self.REVOKE_URL,
                params={"token": value},
                withhold_token=True,
            )
            if response.status_code != 200:
                logger.warning(f"Revoke returned HTTP {response.status_code}: {response.text}")
        except Exception as e:
            logger.warning(f"Failed to revoke token remotely: {e}")

        self.session.token = None
        self.last_refresh = None
        logger.info("Token revoked")

    def get_token_info(self) -> dict[str, Any]:
        """Get information about the current token.

        Returns:
            Dictionary with token status, scopes, expiry, etc.
        """
        if not self.is_authorized():
            return {"status": "no_token"}

        token = self.session.token
        expires_at = token.get("expires_at", 0)

        if not token.get("access_token"):
            status = "refresh_only"
            expires_str = "n/a"
        elif expires_at:
            expires_in = expires_at - datetime.now().timestamp()
            expires_str = str(timedelta(seconds=max(0, int(expires_in))))
            status = "expired" if expires_in < 0 else "valid"
        else:
            status = "valid"
            expires_str = "unknown"

        return {
            "status": status,
            "scopes": token.get("scope", "").split() or self.required_scopes,
            "expires_in": expires_str,
            "has_refresh_token": True,
            "refresh_count": self.refresh_count,
            "last_refresh": self.last_refresh.isoformat() if self.last_refresh else None,
        }
