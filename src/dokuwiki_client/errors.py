"""Typed exception hierarchy for DokuWiki-related errors.

This module defines all custom exceptions used by the DokuWiki client library.
All exceptions inherit from DokuWikiError base class for easy catching and
include descriptive messages with context to help with debugging.
"""

from typing import List, Optional


class WikiClientError(Exception):
    """Base exception for all dokuwiki-client errors.

    Use this to catch any application-level error from the client tool.
    """
    pass


class DokuWikiError(WikiClientError):
    """Base exception for all errors raised while talking to the wiki."""
    pass


class RemoteFaultError(DokuWikiError):
    """Raised when the wiki rejects an XML-RPC call with a fault.

    The fault string is kept verbatim so callers see exactly what the wiki
    reported (e.g. "The file does not exist", "File already exists. Nothing
    done.").
    """

    def __init__(self, fault_code: int, fault_string: str, method: Optional[str] = None):
        super().__init__(fault_string)
        self.fault_code = fault_code
        self.fault_string = fault_string
        self.method = method


class ResponseParseError(DokuWikiError):
    """Raised when a wiki response does not match the expected record schema."""

    def __init__(self, record: str, problems: List[str]):
        super().__init__(
            f"Cannot parse {record} from wiki response: {'; '.join(problems)}"
        )
        self.record = record
        self.problems = list(problems)


class InvalidCredentialsError(DokuWikiError):
    """Raised when credentials are missing or the wiki refuses them."""

    def __init__(self, user: str, endpoint: str):
        super().__init__(
            f"Credentials are invalid (user: {user}, endpoint: {endpoint})"
        )
        self.user = user
        self.endpoint = endpoint


class APIUnreachableError(DokuWikiError):
    """Raised when the XML-RPC endpoint is not available or unreachable."""

    def __init__(self, endpoint: str):
        super().__init__(f"API is not available at {endpoint}")
        self.endpoint = endpoint


class APIAccessError(DokuWikiError):
    """Raised when a call fails for any other transport-level reason."""

    def __init__(self, message: str = "DokuWiki API failure"):
        super().__init__(message)
