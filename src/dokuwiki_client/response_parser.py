"""Decoding of untyped XML-RPC structs into wiki records.

Each record has a schema mapping every required field to the primitive kind
it must have. Decoding checks all fields before failing, so a single
ResponseParseError reports every missing or mistyped field at once.
"""

from datetime import datetime
from typing import Any, Dict, Mapping, Type

from src.models.wiki_records import AttachmentInfo, PageData, PageSummary, SearchHit
from .errors import ResponseParseError

Kind = Type

ID_SCHEMA: Dict[str, Kind] = {
    'id': str,
}

PAGE_SUMMARY_SCHEMA: Dict[str, Kind] = {
    'id': str,
    'rev': int,
    'size': int,
    'mtime': int,
}

SEARCH_HIT_SCHEMA: Dict[str, Kind] = {
    **PAGE_SUMMARY_SCHEMA,
    'score': int,
    'snippet': str,
    'title': str,
}

ATTACHMENT_INFO_SCHEMA: Dict[str, Kind] = {
    'id': str,
    'file': str,
    'size': int,
    'mtime': int,
    'lastModified': datetime,
    'isimg': bool,
    'writable': bool,
    'perms': int,
}

PAGE_DATA_SCHEMA: Dict[str, Kind] = {
    'id': str,
    'perms': int,
    'size': int,
    'lastModified': datetime,
}


def _matches(value: Any, kind: Kind) -> bool:
    # bool is an int subclass; a flag must never pass for a number
    if isinstance(value, bool) and kind is not bool:
        return False
    return isinstance(value, kind)


def decode_struct(struct: Any, schema: Mapping[str, Kind], record: str) -> Dict[str, Any]:
    """Validate a response struct against a schema.

    Args:
        struct: Untyped value received from the transport
        schema: Field name to required kind
        record: Record name used in the error message

    Returns:
        Dict with exactly the schema's fields

    Raises:
        ResponseParseError: If struct is not a mapping or any field is
            missing or has the wrong kind
    """
    if not isinstance(struct, Mapping):
        raise ResponseParseError(record, [f"expected struct, got {type(struct).__name__}"])

    problems = []
    for field_name, kind in schema.items():
        if field_name not in struct:
            problems.append(f"missing field '{field_name}'")
        elif not _matches(struct[field_name], kind):
            problems.append(
                f"field '{field_name}' should be {kind.__name__}, "
                f"got {type(struct[field_name]).__name__}"
            )
    if problems:
        raise ResponseParseError(record, problems)

    return {field_name: struct[field_name] for field_name in schema}


def parse_page_summary(struct: Any) -> PageSummary:
    """Create PageSummary from one item of a dokuwiki.getPagelist response."""
    fields = decode_struct(struct, PAGE_SUMMARY_SCHEMA, 'PageSummary')
    return PageSummary(
        id=fields['id'],
        rev=fields['rev'],
        size=fields['size'],
        mtime=fields['mtime'],
    )


def parse_search_hit(struct: Any) -> SearchHit:
    """Create SearchHit from one item of a dokuwiki.search response."""
    fields = decode_struct(struct, SEARCH_HIT_SCHEMA, 'SearchHit')
    return SearchHit(
        page=PageSummary(
            id=fields['id'],
            rev=fields['rev'],
            size=fields['size'],
            mtime=fields['mtime'],
        ),
        score=fields['score'],
        snippet=fields['snippet'],
        title=fields['title'],
    )


def parse_attachment_info(struct: Any) -> AttachmentInfo:
    """Create AttachmentInfo from one item of a wiki.getAttachments response."""
    fields = decode_struct(struct, ATTACHMENT_INFO_SCHEMA, 'AttachmentInfo')
    return AttachmentInfo(
        id=fields['id'],
        file=fields['file'],
        size=fields['size'],
        mtime=fields['mtime'],
        last_modified=fields['lastModified'],
        is_img=fields['isimg'],
        writable=fields['writable'],
        perms=fields['perms'],
    )


def parse_page_data(struct: Any) -> PageData:
    """Create PageData from one item of a wiki.getAllPages response."""
    fields = decode_struct(struct, PAGE_DATA_SCHEMA, 'PageData')
    return PageData(
        id=fields['id'],
        perms=fields['perms'],
        size=fields['size'],
        last_modified=fields['lastModified'],
    )


def parse_id(struct: Any) -> str:
    """Extract just the id of a listing or search item."""
    return decode_struct(struct, ID_SCHEMA, 'id')['id']
