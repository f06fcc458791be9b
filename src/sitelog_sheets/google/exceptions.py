"""Google authentication exceptions."""


class GoogleAuthError(Exception):
    """Base exception for Google authentication errors."""

    pass


class CredentialsNotFoundError(GoogleAuthError):
    """Raised when the OAuth client credentials are missing."""

    def __init__(self, source: str):
        self.source = source
        super().__init__(
            f"OAuth client credentials not found in {source}. "
            "Store client_id and client_secret from Google Cloud Console there."
        )


class TokenError(GoogleAuthError):
    """Raised when there's an issue with the OAuth token."""

    pass


class ScopeMismatchError(GoogleAuthError):
    """Raised when granted scopes don't cover the required scopes."""

    def __init__(self, missing_scopes: set[str]):
        self.missing_scopes = missing_scopes
        super().__init__(f"Token missing required scopes: {missing_scopes}")


class AuthorizationRequired(GoogleAuthError):
    """Raised when no refresh token is available and the user must consent."""

    def __init__(self, auth_url: str, message: str = "OAuth authorization required"):
        self.auth_url = auth_url
        super().__init__(f"{message}\nAuthorization URL: {auth_url}")
