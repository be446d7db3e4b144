"""Bearer-token authentication for the Glean client API."""

import os

from dotenv import load_dotenv

from ..errors import ConfigurationError


class GleanAuth:
    """Holds Glean API credentials and builds request headers."""

    def __init__(self, api_url: str, api_token: str, user_email: str) -> None:
        """Initialize authentication with explicit credentials.

        Args:
            api_url: Glean client API base URL (e.g. https://acme-be.glean.com/rest/api/v1)
            api_token: Glean client API token
            user_email: Identity the calls are made on behalf of

        Raises:
            ConfigurationError: If any credential is empty
        """
        self.api_url = (api_url or "").rstrip("/")
        self.api_token = api_token or ""
        self.user_email = user_email or ""

        missing = [
            env_name
            for env_name, value in (
                ("GLEAN_API_URL", self.api_url),
                ("GLEAN_API_TOKEN", self.api_token),
                ("GLEAN_USER_EMAIL", self.user_email),
            )
            if not value
        ]
        if missing:
            raise ConfigurationError(
                f"Missing Glean API credentials: {', '.join(missing)}. "
                "Set them in the environment or pass them directly."
            )

    @classmethod
    def from_env(
        cls,
        api_url: str | None = None,
        api_token: str | None = None,
        user_email: str | None = None,
    ) -> "GleanAuth":
        """Build credentials, filling gaps from the environment (and a .env file)."""
        load_dotenv()
        return cls(
            api_url=api_url or os.getenv("GLEAN_API_URL", ""),
            api_token=api_token or os.getenv("GLEAN_API_TOKEN", ""),
            user_email=user_email or os.getenv("GLEAN_USER_EMAIL", ""),
        )

    def get_headers(self) -> dict[str, str]:
        """Generate headers for an API request."""
        return {
            "Authorization": f"Bearer {self.api_token}",
            "Content-Type": "application/json",
            "Accept": "application/json",
            "X-Scio-Actas": self.user_email,
        }

    def get_full_url(self, endpoint: str) -> str:
        """Build full URL from the base URL and an endpoint name."""
        return f"{self.api_url}/{endpoint.lstrip('/')}"
