"""Unit tests for wiki_client module."""

from unittest.mock import Mock, patch

import pytest

from src.dokuwiki_client.auth import Credentials
from src.dokuwiki_client.errors import RemoteFaultError, ResponseParseError
from src.dokuwiki_client.wiki_client import DokuWikiClient
from src.models.wiki_records import AttachmentInfo, PageData, PageSummary, SearchHit
from tests.fixtures.fake_wiki import FakeDokuWiki
from tests.fixtures.sample_responses import (
    NAMESPACE_PAGES,
    SAMPLE_ALL_PAGES_ITEM,
    SAMPLE_ATTACHMENT_ITEM,
    SAMPLE_PAGELIST_ITEM,
    SAMPLE_SEARCH_ITEM,
)


@pytest.fixture
def transport():
    """Mock transport recording remote calls."""
    return Mock()


@pytest.fixture
def client(transport):
    return DokuWikiClient(transport)


@pytest.fixture
def wiki():
    """Fake wiki populated with the namespace scenario pages."""
    return FakeDokuWiki(pages=NAMESPACE_PAGES)


@pytest.fixture
def wiki_client(wiki):
    return DokuWikiClient(wiki)


class TestRemoteCalls:
    """Each operation issues the expected XML-RPC call."""

    def test_get_version(self, client, transport):
        transport.invoke.return_value = 'Release 2024-02-06a "Kaos"'

        assert client.get_version() == 'Release 2024-02-06a "Kaos"'
        transport.invoke.assert_called_once_with('dokuwiki.getVersion')

    def test_get_pages_passes_depth(self, client, transport):
        transport.invoke.return_value = [SAMPLE_PAGELIST_ITEM]

        result = client.get_pages('team:project', 0)

        assert result == [PageSummary(id='team:project:start', rev=1700000000,
                                      size=512, mtime=1700000000)]
        transport.invoke.assert_called_once_with(
            'dokuwiki.getPagelist', 'team:project', {'depth': 0}
        )

    def test_get_page_names_lists_at_namespace_depth(self, client, transport):
        transport.invoke.return_value = [SAMPLE_PAGELIST_ITEM]

        assert client.get_page_names('team:project') == ['start']
        transport.invoke.assert_called_once_with(
            'dokuwiki.getPagelist', 'team:project', {'depth': 3}
        )

    def test_get_page_names_in_root(self, client, transport):
        transport.invoke.return_value = [{'id': 'start'}, {'id': 'wiki'}]

        assert client.get_page_names('') == ['start', 'wiki']
        transport.invoke.assert_called_once_with('dokuwiki.getPagelist', '', {'depth': 1})

    def test_get_namespace_names_lists_one_level_deeper(self, client, transport):
        transport.invoke.return_value = []

        client.get_namespace_names('team')

        transport.invoke.assert_called_once_with('dokuwiki.getPagelist', 'team', {'depth': 3})

    def test_get_all_pages(self, client, transport):
        transport.invoke.return_value = [SAMPLE_ALL_PAGES_ITEM]

        result = client.get_all_pages()

        assert len(result) == 1
        assert isinstance(result[0], PageData)
        transport.invoke.assert_called_once_with('wiki.getAllPages')

    def test_search_pages(self, client, transport):
        transport.invoke.return_value = [SAMPLE_SEARCH_ITEM]

        result = client.search_pages('project')

        assert len(result) == 1
        assert isinstance(result[0], SearchHit)
        assert result[0].score == 7
        transport.invoke.assert_called_once_with('dokuwiki.search', 'project')

    def test_search_page_ids(self, client, transport):
        transport.invoke.return_value = [SAMPLE_SEARCH_ITEM, {**SAMPLE_SEARCH_ITEM, 'id': 'a:b'}]

        assert client.search_page_ids('project') == ['team:project:start', 'a:b']

    def test_get_page(self, client, transport):
        transport.invoke.return_value = '====== Start ======'

        assert client.get_page('team:start') == '====== Start ======'
        transport.invoke.assert_called_once_with('wiki.getPage', 'team:start')

    def test_put_page_without_options_sends_empty_attrs(self, client, transport):
        """Summary and minor flag are left out entirely when not given."""
        client.put_page('team:start', 'text')

        transport.invoke.assert_called_once_with('wiki.putPage', 'team:start', 'text', {})

    def test_put_page_with_summary_and_minor(self, client, transport):
        client.put_page('team:start', 'text', summary='typo', minor=True)

        transport.invoke.assert_called_once_with(
            'wiki.putPage', 'team:start', 'text', {'sum': 'typo', 'minor': True}
        )

    def test_put_page_sends_minor_false_explicitly(self, client, transport):
        """minor=False is a value, not an omission."""
        client.put_page('team:start', 'text', minor=False)

        transport.invoke.assert_called_once_with(
            'wiki.putPage', 'team:start', 'text', {'minor': False}
        )

    def test_put_page_sends_empty_summary(self, client, transport):
        client.put_page('team:start', 'text', summary='')

        transport.invoke.assert_called_once_with(
            'wiki.putPage', 'team:start', 'text', {'sum': ''}
        )

    def test_delete_page_saves_empty_content(self, client, transport):
        client.delete_page('team:start')

        transport.invoke.assert_called_once_with('wiki.putPage', 'team:start', '', {})

    def test_get_attachments_defaults_to_namespace_depth(self, client, transport):
        transport.invoke.return_value = [SAMPLE_ATTACHMENT_ITEM]

        result = client.get_attachments('team:project')

        assert isinstance(result[0], AttachmentInfo)
        transport.invoke.assert_called_once_with(
            'wiki.getAttachments', 'team:project', {'depth': 3}
        )

    def test_get_attachments_with_explicit_depth(self, client, transport):
        transport.invoke.return_value = []

        client.get_attachments('team:project', 0)

        transport.invoke.assert_called_once_with(
            'wiki.getAttachments', 'team:project', {'depth': 0}
        )

    def test_get_attachment_file_names(self, client, transport):
        transport.invoke.return_value = [SAMPLE_ATTACHMENT_ITEM]

        assert client.get_attachment_file_names('team:project') == ['diagram.png']

    def test_get_attachment(self, client, transport):
        transport.invoke.return_value = b'\x89PNG'

        assert client.get_attachment('team:diagram.png') == b'\x89PNG'
        transport.invoke.assert_called_once_with('wiki.getAttachment', 'team:diagram.png')

    def test_put_attachment(self, client, transport):
        client.put_attachment('team:a.txt', b'data', False)

        transport.invoke.assert_called_once_with(
            'wiki.putAttachment', 'team:a.txt', b'data', {'ow': False}
        )

    def test_put_attachment_with_mtime(self, client, transport):
        client.put_attachment('team:a.txt', b'data', True, mtime=1600000000)

        transport.invoke.assert_called_once_with(
            'wiki.putAttachment', 'team:a.txt', b'data', {'ow': True, 'mtime': 1600000000}
        )

    def test_delete_attachment(self, client, transport):
        client.delete_attachment('team:a.txt')

        transport.invoke.assert_called_once_with('wiki.deleteAttachment', 'team:a.txt')

    def test_malformed_listing_raises_parse_error(self, client, transport):
        transport.invoke.return_value = [{'rev': 1}]

        with pytest.raises(ResponseParseError):
            client.get_page_names('team')

    def test_remote_fault_propagates_unchanged(self, client, transport):
        fault = RemoteFaultError(221, "The requested file does not exist", 'wiki.getAttachment')
        transport.invoke.side_effect = fault

        with pytest.raises(RemoteFaultError) as exc_info:
            client.get_attachment('team:missing.png')

        assert exc_info.value is fault


class TestNamespaceNames:
    """Scenarios for get_namespace_names against the fake wiki."""

    def test_returns_direct_child_namespaces(self, wiki_client):
        assert wiki_client.get_namespace_names('ns') == {'sub', 'sub2'}

    def test_root_namespaces(self, wiki_client):
        assert wiki_client.get_namespace_names('') == {'ns', 'other'}

    def test_leaf_namespace_has_no_children(self, wiki_client):
        assert wiki_client.get_namespace_names('ns:sub') == set()

    def test_namespace_without_own_pages_is_invisible(self):
        """A child holding only deeper namespaces is not discovered."""
        wiki = FakeDokuWiki(pages={'ns:p1': 'x', 'ns:empty:deep:p2': 'y'})
        assert DokuWikiClient(wiki).get_namespace_names('ns') == set()


class TestPageListing:
    """Scenarios for page listing against the fake wiki."""

    def test_page_names_only_direct_pages(self, wiki_client):
        assert sorted(wiki_client.get_page_names('ns')) == ['p1', 'p2']

    def test_get_pages_unlimited_depth(self, wiki_client):
        ids = [page.id for page in wiki_client.get_pages('ns', 0)]
        assert sorted(ids) == ['ns:p1', 'ns:p2', 'ns:sub2:p4', 'ns:sub2:p5', 'ns:sub:p3']

    def test_get_page_missing_returns_empty_string(self, wiki_client):
        """Reading a page never written is not an error."""
        assert wiki_client.get_page('ns:never-written') == ""

    def test_put_then_get_page(self, wiki_client):
        wiki_client.put_page('ns:new', 'hello', summary='created')
        assert wiki_client.get_page('ns:new') == 'hello'

    def test_search(self, wiki_client):
        hits = wiki_client.search_pages('three')
        assert [hit.id for hit in hits] == ['ns:sub:p3']
        assert wiki_client.search_page_ids('page') == sorted(NAMESPACE_PAGES)


class TestAttachments:
    """Scenarios for attachment handling against the fake wiki."""

    def test_put_without_overwrite_on_existing_file_faults(self):
        wiki = FakeDokuWiki(media={'ns:a.txt': b'original'})
        wiki_client = DokuWikiClient(wiki)

        with pytest.raises(RemoteFaultError) as exc_info:
            wiki_client.put_attachment('ns:a.txt', b'changed', False)

        assert 'already exists' in str(exc_info.value).lower()
        assert wiki_client.get_attachment('ns:a.txt') == b'original'

    def test_put_with_overwrite_replaces_file(self):
        wiki = FakeDokuWiki(media={'ns:a.txt': b'original'})
        wiki_client = DokuWikiClient(wiki)

        wiki_client.put_attachment('ns:a.txt', b'changed', True)

        assert wiki_client.get_attachment('ns:a.txt') == b'changed'

    def test_put_with_mtime_is_recorded(self, wiki_client):
        wiki_client.put_attachment('ns:a.txt', b'data', False, mtime=1600000000)

        [attachment] = wiki_client.get_attachments('ns')
        assert attachment.mtime == 1600000000

    def test_delete_twice_faults_on_second_call(self):
        wiki = FakeDokuWiki(media={'ns:a.txt': b'data'})
        wiki_client = DokuWikiClient(wiki)

        wiki_client.delete_attachment('ns:a.txt')
        with pytest.raises(RemoteFaultError) as exc_info:
            wiki_client.delete_attachment('ns:a.txt')

        assert 'could not delete' in str(exc_info.value).lower()

    def test_get_missing_attachment_faults(self, wiki_client):
        with pytest.raises(RemoteFaultError, match="does not exist"):
            wiki_client.get_attachment('ns:missing.png')

    def test_attachment_file_names_only_direct(self):
        wiki = FakeDokuWiki(media={'ns:a.txt': b'1', 'ns:sub:b.png': b'2'})
        assert DokuWikiClient(wiki).get_attachment_file_names('ns') == ['a.txt']


class TestClose:
    """Releasing the transport connection."""

    def test_close_delegates_to_transport(self, client, transport):
        client.close()

        transport.close.assert_called_once_with()

    def test_context_manager_closes_transport(self, transport):
        with DokuWikiClient(transport) as client:
            client.get_version()

        transport.close.assert_called_once_with()

    def test_context_manager_closes_on_error(self, transport):
        transport.invoke.side_effect = RemoteFaultError(1, "boom")

        with pytest.raises(RemoteFaultError):
            with DokuWikiClient(transport) as client:
                client.get_version()

        transport.close.assert_called_once_with()

    def test_close_without_transport_close(self):
        """A transport offering only invoke is accepted."""
        transport = Mock(spec=['invoke'])

        DokuWikiClient(transport).close()


class TestFromAuthenticator:
    """Test cases for building a client from credentials."""

    @patch('src.dokuwiki_client.wiki_client.XmlRpcTransport')
    def test_from_authenticator_uses_credentials(self, mock_transport):
        authenticator = Mock()
        authenticator.get_credentials.return_value = Credentials(
            url='https://wiki.example.com/lib/exe/xmlrpc.php', user='bot', password='secret'
        )
        authenticator.timeout = 10
        authenticator.verify_ssl = False

        DokuWikiClient.from_authenticator(authenticator)

        mock_transport.assert_called_once_with(
            'https://wiki.example.com/lib/exe/xmlrpc.php', 'bot', 'secret',
            timeout=10, verify_ssl=False,
        )
