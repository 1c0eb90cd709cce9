"""Attach generated bindings to the directive attribute of their anchor element."""

import logging
from typing import Dict, Mapping, Sequence, Tuple

from bindify.compiler.ast_nodes import Element, Text
from bindify.compiler.codegen.expression import CompiledBinding, compile_chunks

logger = logging.getLogger(__name__)

CLAUSE_SEPARATOR = ","

# Attributes with a dedicated handler; everything else goes through attr(<name>).
SPECIAL_ATTRIBUTE_HANDLERS: Dict[str, str] = {
    "value": "value",
    "style": "css",
}


class BindingAttacher:
    """
    Writes ``handler:expression`` clauses into the binding directive attribute
    and leaves a readable placeholder where the binding was.

    Subclass and override :meth:`attribute_handler`, :meth:`text_handler` or
    :meth:`format_clause` to target a different directive dialect.
    """

    def __init__(
        self,
        binding_attribute: str = "data-bind",
        output_delimiters: Tuple[str, str] = ("{{", "}}"),
    ) -> None:
        self.binding_attribute = binding_attribute
        self.output_delimiters = output_delimiters
        # shield mark -> literal mark, set per document by the transform
        self.literal_marks: Mapping[str, str] = {}

    def attribute_handler(self, name: str) -> str:
        return SPECIAL_ATTRIBUTE_HANDLERS.get(name, f"attr({name})")

    def text_handler(self, node: Text) -> str:
        """text(next) from a previous sibling, text(first) from the parent, text(prev) otherwise."""
        if node.prev is not None:
            qualifier = "next"
        elif node.parent is not None:
            qualifier = "first"
        else:
            qualifier = "prev"
        return f"text({qualifier})"

    def format_clause(self, handler: str, compiled: CompiledBinding) -> str:
        return f"{handler}:{compiled.expression}"

    def attach_attribute(self, element: Element, name: str, chunks: Sequence[str]) -> None:
        """Bind an attribute value of ``element``."""
        compiled = compile_chunks(chunks, self.output_delimiters, self.literal_marks)
        self._push_clause(element, self.format_clause(self.attribute_handler(name), compiled))
        element.attributes[name] = compiled.placeholder

    def attach_text(self, node: Text, anchor: Element, chunks: Sequence[str]) -> None:
        """Bind a text node, storing the directive on ``anchor``."""
        compiled = compile_chunks(chunks, self.output_delimiters, self.literal_marks)
        self._push_clause(anchor, self.format_clause(self.text_handler(node), compiled))
        node.data = compiled.placeholder

    def _push_clause(self, element: Element, clause: str) -> None:
        existing = element.attributes.get(self.binding_attribute, "").strip()
        if existing and not existing.endswith(CLAUSE_SEPARATOR):
            existing += CLAUSE_SEPARATOR
        element.attributes[self.binding_attribute] = existing + clause
        logger.debug("<%s %s=%r>", element.name, self.binding_attribute, clause)
