"""Network configuration constants for the quiz server."""

DEFAULT_HOST: str = "0.0.0.0"
DEFAULT_PORT: int = 5505
CORS_ALLOWED_ORIGINS: str = "*"
