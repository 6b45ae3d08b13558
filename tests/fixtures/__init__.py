"""Test fixtures for DokuWiki client tests.

This module provides:
- FakeDokuWiki, an in-memory wiki implementing the transport contract
- Sample XML-RPC response structs
"""

from .fake_wiki import FakeDokuWiki
from .sample_responses import (
    SAMPLE_PAGELIST_ITEM,
    SAMPLE_SEARCH_ITEM,
    SAMPLE_ATTACHMENT_ITEM,
    SAMPLE_ALL_PAGES_ITEM,
    NAMESPACE_PAGES,
)

__all__ = [
    'FakeDokuWiki',
    'SAMPLE_PAGELIST_ITEM',
    'SAMPLE_SEARCH_ITEM',
    'SAMPLE_ATTACHMENT_ITEM',
    'SAMPLE_ALL_PAGES_ITEM',
    'NAMESPACE_PAGES',
]
