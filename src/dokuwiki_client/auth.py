"""Authentication module for loading DokuWiki credentials.

This module handles loading DokuWiki credentials from environment variables
using python-dotenv. Values missing from the environment may be filled in from
a ClientConfig (url and user only; the password is never stored in config
files). It validates that all required credentials are present and raises
appropriate errors if any are missing.
"""

import os
from typing import NamedTuple, Optional

from dotenv import load_dotenv

from src.models.client_config import ClientConfig
from .errors import InvalidCredentialsError


class Credentials(NamedTuple):
    """DokuWiki XML-RPC credentials."""
    url: str
    user: str
    password: str


class Authenticator:
    """Loads and validates DokuWiki credentials from environment variables.

    Credentials are loaded from a .env file using python-dotenv and are never
    cached or logged.

    Environment variables:
        DOKUWIKI_URL: XML-RPC endpoint (e.g., https://wiki.example.com/lib/exe/xmlrpc.php)
        DOKUWIKI_USER: Wiki user name
        DOKUWIKI_PASSWORD: Wiki password

    Raises:
        InvalidCredentialsError: If any required credential is missing

    Example:
        >>> auth = Authenticator()
        >>> creds = auth.get_credentials()
        >>> print(f"Connecting to {creds.url}")
    """

    def __init__(self, config: Optional[ClientConfig] = None):
        """Initialize the authenticator by loading environment variables from .env file.

        Args:
            config: Optional client configuration supplying url and user
                when the environment does not
        """
        self._config = config
        load_dotenv()

    @property
    def timeout(self) -> int:
        """HTTP timeout in seconds from config (30 when no config is set)."""
        return self._config.timeout if self._config else ClientConfig.timeout

    @property
    def verify_ssl(self) -> bool:
        """Whether TLS certificates are verified."""
        return self._config.verify_ssl if self._config else ClientConfig.verify_ssl

    def get_credentials(self) -> Credentials:
        """Get DokuWiki credentials from environment variables.

        Returns:
            Credentials: A named tuple containing url, user, and password

        Raises:
            InvalidCredentialsError: If any required credential is missing
        """
        url = os.getenv('DOKUWIKI_URL') or (self._config.url if self._config else None)
        user = os.getenv('DOKUWIKI_USER') or (self._config.user if self._config else None)
        password = os.getenv('DOKUWIKI_PASSWORD')

        if not url or not user or not password:
            raise InvalidCredentialsError(
                user=user if user else "unknown",
                endpoint=url if url else "unknown"
            )

        return Credentials(url=url, user=user, password=password)
