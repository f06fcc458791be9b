"""Secret store exceptions."""


class SecretError(Exception):
    """Base exception for secret retrieval errors."""

    pass


class SecretNotFoundError(SecretError):
    """Raised when a secret is neither in the environment nor on disk."""

    def __init__(self, name: str, env_var: str, path: str):
        self.name = name
        self.env_var = env_var
        self.path = path
        super().__init__(f"Secret '{name}' not found. Set {env_var} or create {path}.")


class InvalidSecretError(SecretError):
    """Raised when a secret is not a JSON object or lacks required keys."""

    pass
