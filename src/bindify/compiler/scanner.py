"""Tree walker that finds bindings and hands them to the attacher."""

import logging
from typing import List, Optional

from bindify.compiler.ast_nodes import TAG, Element, Node, Text, splice, walk
from bindify.compiler.codegen.binding import BindingAttacher
from bindify.compiler.exceptions import BindingStructureError
from bindify.compiler.interpolation.base import InterpolationParser
from bindify.compiler.markup import MarkupAdapter
from bindify.config import TransformOptions

logger = logging.getLogger(__name__)


class BindingScanner:
    """Scans attribute values and text nodes for bindings."""

    def __init__(
        self,
        options: TransformOptions,
        parser: InterpolationParser,
        attacher: BindingAttacher,
        adapter: MarkupAdapter,
    ) -> None:
        self.options = options
        self.parser = parser
        self.attacher = attacher
        self.adapter = adapter
        self.skip_attributes = frozenset(name.lower() for name in options.skip_attributes)

    def scan(self, nodes: List[Node]) -> int:
        """Attach every binding found under ``nodes``. Returns the number of bindings."""
        count = 0
        for node in walk(nodes):
            if isinstance(node, Element):
                if node.kind == TAG:
                    count += self._scan_attributes(node)
            elif isinstance(node, Text):
                if node.parent is not None and node.parent.is_raw_text:
                    continue
                if self._scan_text(node, nodes):
                    count += 1
        return count

    def _scan_attributes(self, element: Element) -> int:
        count = 0
        # snapshot: the attacher adds the directive attribute while we iterate
        for name, value in list(element.attributes.items()):
            if name.lower() in self.skip_attributes:
                continue
            chunks = self.parser.split(value)
            if len(chunks) > 1:
                self.attacher.attach_attribute(element, name, chunks)
                count += 1
        return count

    def _scan_text(self, node: Text, roots: List[Node]) -> bool:
        chunks = self.parser.split(node.data)
        if len(chunks) == 1:
            return False

        anchor = self.find_anchor(node)
        if not isinstance(anchor, Element):
            anchor = self._promote(node, roots)

        if not isinstance(anchor, Element):
            raise BindingStructureError("Text binding has no element to attach to", node.data)

        self.attacher.attach_text(node, anchor, chunks)
        return True

    @staticmethod
    def find_anchor(node: Node) -> Optional[Node]:
        """Previous sibling, else parent, else next sibling."""
        if node.prev is not None:
            return node.prev
        if node.parent is not None:
            return node.parent
        return node.next

    def _promote(self, node: Text, roots: List[Node]) -> Optional[Node]:
        """Wrap ``node`` in a synthetic element spliced in at its position."""
        tag = self.options.synthetic_tag
        wrappers = self.adapter.parse_fragment(f"<{tag}></{tag}>")
        if len(wrappers) != 1 or not isinstance(wrappers[0], Element):
            raise BindingStructureError(f"Cannot synthesize <{tag}> wrapper", node.data)
        wrapper = wrappers[0]

        parent = node.parent
        siblings = parent.children if parent is not None else roots
        index = next(i for i, sibling in enumerate(siblings) if sibling is node)

        splice(siblings, index, 1, [wrapper], parent)
        splice(wrapper.children, 0, len(wrapper.children), [node], wrapper)
        logger.debug("Wrapped text binding in synthetic <%s>", wrapper.name)
        return self.find_anchor(node)
