"""DokuWiki client over the wiki's XML-RPC API.

This module provides DokuWikiClient, the typed surface over the remote
namespace store. Every method is one or more sequential round trips through
the transport; nothing is cached and nothing is retried.

The wiki has no directory listing and no delete call. Child namespaces are
inferred from the ids of the pages they contain, and pages are deleted by
saving empty content.
"""

import logging
from typing import Any, List, Optional, Protocol, Set

from src.models.wiki_records import AttachmentInfo, PageData, PageSummary, SearchHit
from .auth import Authenticator
from .page_id import depth_of, name_of, namespace_of
from .response_parser import (
    parse_attachment_info,
    parse_id,
    parse_page_data,
    parse_page_summary,
    parse_search_hit,
)
from .transport import XmlRpcTransport

logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Call-by-name remote invocation primitive used by DokuWikiClient."""

    def invoke(self, method: str, *params: Any) -> Any:
        ...


class DokuWikiClient:
    """Client representing a connection to DokuWiki via XML-RPC.

    Namespace depths passed to listing methods are absolute (counted from the
    root, where root level has depth 1), not relative to the namespace given.
    Depth 0 means unlimited.

    The client holds no state besides the transport. Sharing one instance
    between threads needs external synchronization.

    Example:
        >>> with DokuWikiClient.connect(url, "bot", "secret") as client:
        ...     client.get_namespace_names("team")
        {'project', 'archive'}
    """

    def __init__(self, transport: Transport):
        """Initialize the client.

        Args:
            transport: Object executing remote calls; raises RemoteFaultError
                when the wiki rejects a call
        """
        self._transport = transport

    @classmethod
    def connect(
        cls,
        url: str,
        user: str,
        password: str,
        timeout: int = 30,
        verify_ssl: bool = True,
    ) -> "DokuWikiClient":
        """Create a client talking to the XML-RPC endpoint at url."""
        return cls(XmlRpcTransport(url, user, password, timeout=timeout, verify_ssl=verify_ssl))

    @classmethod
    def from_authenticator(cls, authenticator: Authenticator) -> "DokuWikiClient":
        """Create a client from credentials loaded by an Authenticator.

        Raises:
            InvalidCredentialsError: If any credential is missing
        """
        creds = authenticator.get_credentials()
        return cls.connect(
            creds.url,
            creds.user,
            creds.password,
            timeout=authenticator.timeout,
            verify_ssl=authenticator.verify_ssl,
        )

    def close(self) -> None:
        """Release the transport's connection, if it holds one."""
        close = getattr(self._transport, 'close', None)
        if close is not None:
            close()

    def __enter__(self) -> "DokuWikiClient":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def get_version(self) -> str:
        """Return version of the wiki."""
        return self._transport.invoke('dokuwiki.getVersion')

    def _get_pages(self, namespace: str, depth: int) -> List[Any]:
        return self._transport.invoke('dokuwiki.getPagelist', namespace, {'depth': depth})

    def _get_attachments(self, namespace: str, depth: int) -> List[AttachmentInfo]:
        items = self._transport.invoke('wiki.getAttachments', namespace, {'depth': depth})
        return [parse_attachment_info(item) for item in items]

    def get_namespace_names(self, namespace: str) -> Set[str]:
        """Get names of namespaces one level below namespace.

        Child namespaces are recognized by the pages listed one level deeper
        than namespace itself. A child holding only deeper sub-namespaces and
        no pages of its own is not found.

        Args:
            namespace: Namespace the search is done in

        Returns:
            Set of names (last segment only) of the child namespaces
        """
        names = set()
        for page in self._get_pages(namespace, depth_of(namespace) + 1):
            page_namespace = namespace_of(parse_id(page))
            # pages directly in namespace say nothing about child namespaces
            if page_namespace != namespace:
                names.add(name_of(page_namespace))
        return names

    def get_pages(self, namespace: str, depth: int) -> List[PageSummary]:
        """Get pages in namespace.

        Args:
            namespace: Namespace in which search is done
            depth: Absolute depth of search, 0 means unlimited
        """
        return [parse_page_summary(page) for page in self._get_pages(namespace, depth)]

    def get_page_names(self, namespace: str) -> List[str]:
        """Get names of pages directly in namespace."""
        return [name_of(parse_id(page)) for page in self._get_pages(namespace, depth_of(namespace))]

    def get_all_pages(self) -> List[PageData]:
        """Get all pages from the wiki."""
        return [parse_page_data(page) for page in self._transport.invoke('wiki.getAllPages')]

    def _search(self, query: str) -> List[Any]:
        return self._transport.invoke('dokuwiki.search', query)

    def search_pages(self, query: str) -> List[SearchHit]:
        """Find pages matching a fulltext query (wiki search syntax)."""
        return [parse_search_hit(hit) for hit in self._search(query)]

    def search_page_ids(self, query: str) -> List[str]:
        """Get ids of pages matching a fulltext query (wiki search syntax)."""
        return [parse_id(hit) for hit in self._search(query)]

    def get_page(self, page_id: str) -> str:
        """Get raw wiki text of a page.

        Returns:
            Content of the page, empty string if page does not exist
        """
        return self._transport.invoke('wiki.getPage', page_id)

    def put_page(
        self,
        page_id: str,
        text: str,
        summary: Optional[str] = None,
        minor: Optional[bool] = None,
    ) -> None:
        """Create or overwrite a page.

        Args:
            page_id: Id of page to be created / updated
            text: New text of the page
            summary: Change summary stored in page history
            minor: Mark the modification as minor

        Summary and minor flag are only sent when given.
        """
        attrs = {}
        if summary is not None:
            attrs['sum'] = summary
        if minor is not None:
            attrs['minor'] = minor
        self._transport.invoke('wiki.putPage', page_id, text, attrs)

    def delete_page(self, page_id: str) -> None:
        """Delete page by saving empty content; the wiki has no delete call."""
        logger.debug(f"Deleting page {page_id}")
        self.put_page(page_id, "")

    def delete_pages(self, namespace: str) -> None:
        """Delete all pages in namespace, including all sub-namespaces.

        Pages are deleted one by one. The first failure propagates and pages
        deleted before it stay deleted.
        """
        page_ids = [parse_id(page) for page in self._get_pages(namespace, 0)]
        logger.info(f"Deleting {len(page_ids)} page(s) in namespace '{namespace}'")
        for page_id in page_ids:
            self.delete_page(page_id)

    def get_attachments(self, namespace: str, depth: Optional[int] = None) -> List[AttachmentInfo]:
        """Get attachments in namespace.

        Args:
            namespace: Namespace that should be searched
            depth: Absolute depth of sub-namespaces searched through, 0 means
                unlimited; defaults to the namespace's own depth, i.e. just
                attachments directly in namespace
        """
        if depth is None:
            depth = depth_of(namespace)
        return self._get_attachments(namespace, depth)

    def get_attachment_file_names(self, namespace: str) -> List[str]:
        """Get plain file names of attachments directly in namespace."""
        return [attachment.file for attachment in self.get_attachments(namespace)]

    def get_attachment(self, media_id: str) -> bytes:
        """Get content of an attachment.

        Raises:
            RemoteFaultError: If the file does not exist
        """
        return self._transport.invoke('wiki.getAttachment', media_id)

    def put_attachment(
        self,
        media_id: str,
        data: bytes,
        overwrite: bool,
        mtime: Optional[int] = None,
    ) -> None:
        """Upload an attachment.

        Args:
            media_id: Id the attachment is stored under
            data: File content
            overwrite: Replace an existing file; without it the wiki
                refuses to touch an existing file
            mtime: Modification time (unix timestamp) to record instead of now

        Raises:
            RemoteFaultError: If the file exists and overwrite is False
        """
        attrs = {'ow': overwrite}
        if mtime is not None:
            attrs['mtime'] = mtime
        self._transport.invoke('wiki.putAttachment', media_id, data, attrs)

    def delete_attachment(self, media_id: str) -> None:
        """Delete an attachment.

        Raises:
            RemoteFaultError: If the attachment does not exist or is still
                referenced from an existing page
        """
        logger.debug(f"Deleting attachment {media_id}")
        self._transport.invoke('wiki.deleteAttachment', media_id)

    def delete_attachments(self, namespace: str) -> None:
        """Delete all attachments in namespace, including all sub-namespaces.

        Same failure policy as delete_pages: stop at the first failure, no
        rollback.
        """
        media_ids = [attachment.id for attachment in self._get_attachments(namespace, 0)]
        logger.info(f"Deleting {len(media_ids)} attachment(s) in namespace '{namespace}'")
        for media_id in media_ids:
            self.delete_attachment(media_id)

    def delete_namespace(self, namespace: str) -> None:
        """Remove all pages and then all attachments under namespace.

        Pages go first so attachments they referenced become deletable.
        Not atomic: if an attachment is still referenced from a page outside
        namespace, the fault propagates after the pages are already gone.

        Raises:
            RemoteFaultError: If any page or attachment cannot be deleted
        """
        self.delete_pages(namespace)
        self.delete_attachments(namespace)
