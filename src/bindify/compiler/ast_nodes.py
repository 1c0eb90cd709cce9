"""Markup tree node definitions."""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Sequence

# Tag-like node kinds. Raw text elements keep their own kind so the scanner
# and serializer can leave their contents alone.
TAG = "tag"
SCRIPT = "script"
STYLE = "style"


@dataclass(eq=False)
class Node:
    """Base for all tree nodes.

    ``parent``, ``prev`` and ``next`` are navigational only. They are kept
    consistent by :func:`link_siblings` and :func:`splice`; traversal always
    goes through ``Element.children``.
    """

    parent: Optional["Element"] = field(default=None, init=False, repr=False)
    prev: Optional["Node"] = field(default=None, init=False, repr=False)
    next: Optional["Node"] = field(default=None, init=False, repr=False)


@dataclass(eq=False)
class Element(Node):
    """Tag, script or style node."""

    name: str = ""
    attributes: Dict[str, str] = field(default_factory=dict)
    children: List[Node] = field(default_factory=list)
    kind: str = TAG

    @property
    def is_raw_text(self) -> bool:
        return self.kind in (SCRIPT, STYLE)


@dataclass(eq=False)
class Text(Node):
    """Character data between tags."""

    data: str = ""


@dataclass(eq=False)
class Comment(Node):
    """<!--data-->"""

    data: str = ""


@dataclass(eq=False)
class CData(Node):
    """<data> for a CDATA section, stored without the angle brackets."""

    data: str = ""


@dataclass(eq=False)
class Directive(Node):
    """<data> for a doctype or processing instruction, without the angle brackets."""

    data: str = ""


def link_siblings(nodes: Sequence[Node], parent: Optional[Element] = None) -> None:
    """Reset parent/prev/next references for a sibling sequence."""
    previous: Optional[Node] = None
    for node in nodes:
        node.parent = parent
        node.prev = previous
        node.next = None
        if previous is not None:
            previous.next = node
        previous = node


def splice(
    siblings: List[Node],
    index: int,
    delete_count: int,
    new_nodes: Sequence[Node],
    parent: Optional[Element] = None,
) -> None:
    """Replace ``siblings[index:index + delete_count]`` with ``new_nodes`` and relink."""
    siblings[index : index + delete_count] = list(new_nodes)
    link_siblings(siblings, parent)


def walk(nodes: Sequence[Node]) -> Iterator[Node]:
    """Pre-order traversal over the owning children relation.

    Iterates over a snapshot of each sibling list, so a visited node may be
    spliced into a new wrapper without disturbing the walk.
    """
    for node in list(nodes):
        yield node
        if isinstance(node, Element) and node.children:
            yield from walk(node.children)
