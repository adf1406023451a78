"""Document tree for parsed BluOS responses.

BluOS answers every request with a small XML document. Responses are
converted into immutable ``DocumentNode`` trees so the query engine can walk
them without touching ``ElementTree`` objects:

    <status etag="4e26">
      <state>pause</state>
      <title1>Radio</title1>
    </status>

becomes ``DocumentNode("status", {"etag": "4e26"}, (DocumentNode("state", ...),
DocumentNode("title1", ...)))``. Text children are plain strings.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from xml.etree import ElementTree

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DocumentNode:
    """A single element of a parsed response.

    Attributes:
        tag: Element name (never empty).
        attributes: Attribute name -> value, in document order.
        children: Text strings and nested nodes, in document order.
    """

    tag: str
    attributes: dict[str, str] = field(default_factory=dict)
    children: tuple[str | DocumentNode, ...] = ()

    def __post_init__(self) -> None:
        """Reject nodes without a tag."""
        if not self.tag:
            raise ValueError("DocumentNode tag must not be empty")

    @property
    def text(self) -> str | None:
        """Return the first direct text child, or None."""
        for child in self.children:
            if isinstance(child, str):
                return child
        return None

    @property
    def nodes(self) -> list[DocumentNode]:
        """Return element children, skipping text."""
        return [child for child in self.children if isinstance(child, DocumentNode)]

    def get(self, name: str, default: str | None = None) -> str | None:
        """Return an attribute value, or ``default`` when missing."""
        return self.attributes.get(name, default)


def _convert(element: ElementTree.Element) -> DocumentNode:
    children: list[str | DocumentNode] = []
    if element.text and element.text.strip():
        children.append(element.text)
    for sub in element:
        children.append(_convert(sub))
        if sub.tail and sub.tail.strip():
            children.append(sub.tail)
    return DocumentNode(
        tag=element.tag,
        attributes=dict(element.attrib),
        children=tuple(children),
    )


def parse_document(body: bytes | str) -> list[DocumentNode]:
    """Parse a response body into its root-level node sequence.

    Whitespace-only text between elements is dropped. Empty or malformed
    bodies return an empty list so that extraction stays total.

    Args:
        body: Raw response body. Bytes are decoded as UTF-8 by the parser.

    Returns:
        A list holding the root node, or an empty list.
    """
    if isinstance(body, str):
        body = body.encode("utf-8")
    if not body.strip():
        return []

    try:
        root = ElementTree.fromstring(body)
    except ElementTree.ParseError as e:
        logger.debug("Discarding malformed response body: %s", e)
        return []

    return [_convert(root)]
