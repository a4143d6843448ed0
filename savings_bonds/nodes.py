"""
Minimal document tree used by the table extractor.

The extractor only needs tag names, class names, children and text, so the
parsed HTML is converted into plain ``Node`` objects instead of handing
BeautifulSoup elements to the rest of the package. Tests can build trees
directly without going through a parser.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import Comment, Declaration, Doctype, ProcessingInstruction

logger = logging.getLogger(__name__)

# Elements whose content never carries table data
_DROPPED_TAGS = {"script", "style"}
_DROPPED_STRINGS = (Comment, Declaration, Doctype, ProcessingInstruction)


@dataclass
class Node:
    """An element (``tag`` set) or a text node (``tag`` is None)."""

    tag: Optional[str] = None
    text: str = ""
    classes: Tuple[str, ...] = ()
    children: List["Node"] = field(default_factory=list)

    @property
    def is_text(self) -> bool:
        return self.tag is None

    @property
    def first_child(self) -> Optional["Node"]:
        """
        First meaningful child of this node.

        Whitespace-only text between tags is formatting, so it is passed over
        in favour of the next element or text. A node whose only content is
        whitespace yields that whitespace text node; a node with no children
        yields None.
        """
        blank = None
        for child in self.children:
            if child.is_text and not child.text.strip():
                if blank is None:
                    blank = child
                continue
            return child
        return blank

    def has_class(self, class_name: str) -> bool:
        return class_name in self.classes

    def get_text(self) -> str:
        if self.is_text:
            return self.text
        return "".join(child.get_text() for child in self.children)

    def iter_descendants(self) -> Iterator["Node"]:
        """Yield every descendant in document order (depth-first, pre-order)."""
        for child in self.children:
            yield child
            yield from child.iter_descendants()


def element(tag: str, *children, classes: Tuple[str, ...] = ()) -> Node:
    """Build an element node; plain strings become text nodes."""
    kids = [Node(text=c) if isinstance(c, str) else c for c in children]
    return Node(tag=tag, classes=tuple(classes), children=kids)


def find_by_class(root: Node, class_name: str) -> List[Node]:
    """All descendants of *root* carrying *class_name*, in document order."""
    return [n for n in root.iter_descendants() if not n.is_text and n.has_class(class_name)]


def find_by_tag(root: Node, tag: str) -> List[Node]:
    """All descendants of *root* with the given tag name, in document order."""
    tag = tag.lower()
    return [n for n in root.iter_descendants() if n.tag == tag]


def _convert(el: Tag) -> Node:
    node = Node(tag=el.name.lower(), classes=tuple(el.get("class") or ()))
    for child in el.children:
        if isinstance(child, Tag):
            if child.name.lower() in _DROPPED_TAGS:
                continue
            node.children.append(_convert(child))
        elif isinstance(child, NavigableString):
            if isinstance(child, _DROPPED_STRINGS):
                continue
            node.children.append(Node(text=str(child)))
    return node


def parse_html(html: str) -> Node:
    """Parse an HTML document into a ``Node`` tree rooted at a ``document`` node."""
    logger.debug(f"Parsing HTML document ({len(html)} characters)")
    soup = BeautifulSoup(html, "lxml")
    root = Node(tag="document")
    for child in soup.children:
        if isinstance(child, Tag):
            root.children.append(_convert(child))
    return root
