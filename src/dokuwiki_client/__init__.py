"""DokuWiki client library.

This package provides a typed Python client for the DokuWiki XML-RPC API:
listing namespaces and pages, fulltext search, reading and writing pages,
managing attachments and deleting whole namespaces.
"""

from .errors import (
    WikiClientError,
    DokuWikiError,
    RemoteFaultError,
    ResponseParseError,
    InvalidCredentialsError,
    APIUnreachableError,
    APIAccessError,
)
from .wiki_client import DokuWikiClient

__all__ = [
    "DokuWikiClient",
    "WikiClientError",
    "DokuWikiError",
    "RemoteFaultError",
    "ResponseParseError",
    "InvalidCredentialsError",
    "APIUnreachableError",
    "APIAccessError",
]
