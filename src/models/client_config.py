"""Client configuration data model."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class ClientConfig:
    """Connection settings read from .dokuwiki-client.yaml.

    The password is deliberately absent; it is only read from the
    environment by the Authenticator.

    Attributes:
        url: XML-RPC endpoint of the wiki (None if taken from environment)
        user: Wiki user name (None if taken from environment)
        timeout: HTTP timeout in seconds for each call
        verify_ssl: Whether TLS certificates are verified
    """
    url: Optional[str] = None
    user: Optional[str] = None
    timeout: int = 30
    verify_ssl: bool = True
