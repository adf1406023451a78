"""Path queries over document trees.

A path is a sequence of tag names. ``query_first`` follows the first match at
every level. ``query_all`` follows the *last* match at every intermediate
level and collects every sibling match at the final one. BluOS responses only
ever hold one container per level (``albums/sections/section``), so this is
all the traversal the extractors need.
"""

from collections.abc import Sequence

from bluectl.api.document import DocumentNode

Path = Sequence[str]
NodeList = Sequence[str | DocumentNode]


def _check_path(path: Path) -> None:
    if not path:
        raise ValueError("Query path must contain at least one tag")


def query_first(path: Path, nodes: NodeList) -> DocumentNode | None:
    """Return the first node matching ``path``, or None.

    Args:
        path: Tag names, outermost first.
        nodes: Node list to scan; text entries are skipped.

    Returns:
        The matched node, or None when any segment has no match.

    Raises:
        ValueError: If ``path`` is empty.
    """
    _check_path(path)
    head, rest = path[0], path[1:]

    for node in nodes:
        if isinstance(node, DocumentNode) and node.tag == head:
            if rest:
                return query_first(rest, node.children)
            return node
    return None


def query_all(path: Path, nodes: NodeList) -> list[DocumentNode]:
    """Return every node matching the last segment of ``path``.

    Intermediate segments descend through the last matching node at that
    level.

    Args:
        path: Tag names, outermost first.
        nodes: Node list to scan; text entries are skipped.

    Returns:
        Matching nodes in document order (possibly empty).

    Raises:
        ValueError: If ``path`` is empty.
    """
    _check_path(path)
    head, rest = path[0], path[1:]

    matches = [node for node in nodes if isinstance(node, DocumentNode) and node.tag == head]
    if not rest:
        return matches
    if not matches:
        return []
    return query_all(rest, matches[-1].children)


def node_text(path: Path, nodes: NodeList) -> str | None:
    """Return the direct text of the first node matching ``path``."""
    node = query_first(path, nodes)
    return node.text if node is not None else None
