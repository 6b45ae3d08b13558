"""Data models for wiki records and client configuration."""

from src.models.client_config import ClientConfig
from src.models.wiki_records import AttachmentInfo, PageData, PageSummary, SearchHit

__all__ = ['AttachmentInfo', 'ClientConfig', 'PageData', 'PageSummary', 'SearchHit']
