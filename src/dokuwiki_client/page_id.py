"""Namespace model for colon-delimited DokuWiki identifiers.

Page and media ids look like ``team:project:page``: the last segment is the
name, everything before the last separator is the namespace. Nothing here is
cached; callers recompute namespace, name and depth from the id each time.
"""

SEPARATOR = ":"


def namespace_of(page_id: str) -> str:
    """Return namespace of page (without name).

    An id without separator lives in the root namespace (""). When the id
    starts with the separator, the cut point moves one character left, so
    ``":a:b"`` gives ``":"`` and ``":a"`` gives ``""``.
    """
    cut = page_id.rfind(SEPARATOR)
    if cut < 0:
        return ""
    if page_id.startswith(SEPARATOR):
        cut = max(cut - 1, 0)
    return page_id[:cut]


def name_of(page_id: str) -> str:
    """Return name of page (without namespace)."""
    return page_id[page_id.rfind(SEPARATOR) + 1:]


def depth_of(namespace: str) -> int:
    """Get depth of namespace as used by the wiki's listing calls.

    Root namespace has depth 1. Any other namespace starts at 2 (its own last
    segment carries no separator) and adds one per separator. Leading or
    trailing separators are ignored.

    Args:
        namespace: Absolute namespace; relative namespaces cannot be
            evaluated without context

    Returns:
        Depth counted from the root, always >= 1
    """
    if not namespace:
        return 1
    return 2 + namespace[1:-1].count(SEPARATOR)


def join(namespace: str, name: str) -> str:
    """Build an id from namespace and name; root namespace yields just the name."""
    if not namespace:
        return name
    return f"{namespace}{SEPARATOR}{name}"
