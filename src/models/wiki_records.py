"""Value records built from DokuWiki XML-RPC responses.

Records are frozen dataclasses: they compare and hash by value, and are never
modified after the response parser creates them. None of them stores a parent
or child pointer; the namespace of a record is always derived from its id.
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class PageSummary:
    """Item of a dokuwiki.getPagelist result.

    Attributes:
        id: Page id (namespace + name)
        rev: Page revision
        size: Page size in bytes
        mtime: Last change as a unix timestamp
    """
    id: str
    rev: int
    size: int
    mtime: int


@dataclass(frozen=True)
class SearchHit:
    """Item of a dokuwiki.search result.

    The page fields are held in an embedded PageSummary; the properties
    below only delegate to it.

    Attributes:
        page: Summary of the matching page
        score: Score achieved in fulltext search
        snippet: Text snippet with hit highlighting
        title: Page title
    """
    page: PageSummary
    score: int
    snippet: str
    title: str

    @property
    def id(self) -> str:
        return self.page.id

    @property
    def rev(self) -> int:
        return self.page.rev

    @property
    def size(self) -> int:
        return self.page.size

    @property
    def mtime(self) -> int:
        return self.page.mtime


@dataclass(frozen=True)
class AttachmentInfo:
    """File uploaded to the wiki as attachment, as listed by wiki.getAttachments.

    Attributes:
        id: Media id (namespace + name)
        file: Name of the file
        size: Size in bytes
        mtime: Upload date as a unix timestamp
        last_modified: Modification date
        is_img: True if file is an image
        writable: True if file is writable
        perms: Permissions of the file
    """
    id: str
    file: str
    size: int
    mtime: int
    last_modified: datetime
    is_img: bool
    writable: bool
    perms: int


@dataclass(frozen=True)
class PageData:
    """Item of a wiki.getAllPages result.

    Attributes:
        id: Page id
        perms: Integer denoting the permissions on the page
        size: Size in bytes
        last_modified: Last modification date
    """
    id: str
    perms: int
    size: int
    last_modified: datetime
