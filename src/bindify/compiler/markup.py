"""lxml-backed markup adapter: parse HTML into bindify nodes and serialize them back."""

import logging
import re
from typing import Dict, List, Optional, Sequence

from lxml import etree, html  # type: ignore

from bindify.compiler.ast_nodes import (
    SCRIPT,
    STYLE,
    TAG,
    CData,
    Comment,
    Directive,
    Element,
    Node,
    Text,
    link_siblings,
)

logger = logging.getLogger(__name__)

# Elements serialized without a closing tag when they have no children.
SELF_CLOSING_TAGS = frozenset(
    {
        "area",
        "base",
        "basefont",
        "br",
        "col",
        "command",
        "embed",
        "frame",
        "hr",
        "img",
        "input",
        "isindex",
        "keygen",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
        # svg
        "path",
        "circle",
        "ellipse",
        "line",
        "rect",
        "use",
        "stop",
        "polyline",
        "polygon",
    }
)

# Whitespace inside these is significant and never collapsed.
PRESERVE_WHITESPACE_TAGS = frozenset({"pre", "textarea", "script", "style"})

_WHITESPACE_RE = re.compile(r"\s+")

# libxml2 lower-cases names and drops CDATA sections, so both are recovered from the source.
_TAG_RE = re.compile(r"</?([A-Za-z][^\s/>]*)([^>]*)>")
_ATTRIBUTE_RE = re.compile(r"""([^\s"'=/>]+)(?:\s*=\s*(?:"[^"]*"|'[^']*'|[^\s>]+))?""")
_CDATA_RE = re.compile(r"<!\[CDATA\[[\s\S]*?\]\]>")

# Private use area; one unused code point stands in for "&" while lxml parses.
_AMP_MASK_RANGE = range(0xE000, 0xF900)


def _quote_attribute(value: str) -> str:
    return str(value).replace('"', "&quot;")


class MarkupAdapter:
    """Parse and serialize markup without decoding character references."""

    def __init__(self, normalize_whitespace: bool = True) -> None:
        self.normalize_whitespace = normalize_whitespace
        self._amp_mask: Optional[str] = None
        self._cased_tags: Dict[str, str] = {}
        self._cased_attributes: Dict[str, str] = {}
        self._cdata: Dict[str, str] = {}

    def parse(self, markup: str) -> List[Node]:
        """Parse a document or fragment into a list of top-level nodes."""
        self._amp_mask = self._pick_amp_mask(markup)
        if self._amp_mask:
            markup = markup.replace("&", self._amp_mask)

        self._collect_cased_names(markup)
        markup = self._hide_cdata(markup)

        clean = markup.strip().lower()
        if clean.startswith("<!doctype") or clean.startswith("<html"):
            nodes = self._parse_document(markup, has_doctype=clean.startswith("<!doctype"))
        else:
            nodes = self._parse_fragment(markup)

        link_siblings(nodes)
        return nodes

    def parse_fragment(self, markup: str) -> List[Node]:
        """Parse a standalone fragment, e.g. a synthetic wrapper element."""
        nodes = self._parse_fragment(markup)
        link_siblings(nodes)
        return nodes

    def serialize(self, nodes: Sequence[Node], xhtml_mode: bool = False) -> str:
        """Render nodes back to markup, restoring any masked character references."""
        result = self._render(nodes, xhtml_mode)
        # sections inside raw text were never mapped to nodes
        for key, data in self._cdata.items():
            result = result.replace(f"<!--{key}-->", f"<{data}>")
        if self._amp_mask:
            result = result.replace(self._amp_mask, "&")
        return result

    def _collect_cased_names(self, markup: str) -> None:
        self._cased_tags = {}
        self._cased_attributes = {}
        for match in _TAG_RE.finditer(markup):
            tag = match.group(1)
            if tag != tag.lower():
                self._cased_tags.setdefault(tag.lower(), tag)
            for attribute in _ATTRIBUTE_RE.finditer(match.group(2)):
                name = attribute.group(1)
                if name != name.lower():
                    self._cased_attributes.setdefault(name.lower(), name)

    def _hide_cdata(self, markup: str) -> str:
        """Swap CDATA sections for keyed comments the HTML parser keeps."""
        self._cdata = {}
        counter = 0

        def replace(match: "re.Match[str]") -> str:
            nonlocal counter
            while True:
                counter += 1
                key = f"bindify-cdata-{counter}"
                if key not in markup:
                    break
            self._cdata[key] = match.group(0)[1:-1]
            return f"<!--{key}-->"

        return _CDATA_RE.sub(replace, markup)

    def _pick_amp_mask(self, markup: str) -> Optional[str]:
        if "&" not in markup:
            return None
        for code_point in _AMP_MASK_RANGE:
            candidate = chr(code_point)
            if candidate not in markup:
                return candidate
        # Every private use code point is taken; let lxml decode references.
        logger.warning("No free mask character; character references will be decoded")
        return None

    def _make_parser(self) -> etree.HTMLParser:
        return html.HTMLParser(encoding="utf-8", default_doctype=False, remove_comments=False)

    def _parse_document(self, markup: str, has_doctype: bool) -> List[Node]:
        root = html.document_fromstring(markup.encode("utf-8"), parser=self._make_parser())
        nodes: List[Node] = []

        doctype = root.getroottree().docinfo.doctype
        if has_doctype and doctype:
            nodes.append(Directive(data=doctype[1:-1]))

        for sibling in reversed(list(root.itersiblings(preceding=True))):
            mapped = self._map_leaf(sibling)
            if mapped is not None:
                nodes.append(mapped)

        nodes.append(self._map_element(root, preserve=False))

        for sibling in root.itersiblings():
            mapped = self._map_leaf(sibling)
            if mapped is not None:
                nodes.append(mapped)
        return nodes

    def _parse_fragment(self, markup: str) -> List[Node]:
        wrapped = f"<html><body>{markup}</body></html>"
        doc = html.document_fromstring(wrapped.encode("utf-8"), parser=self._make_parser())
        nodes: List[Node] = []
        # libxml2 may hoist metadata elements such as <meta> into <head>
        for section in doc:
            if section.tag in ("head", "body"):
                nodes.extend(self._map_children(section, preserve=False))
        return nodes

    def _map_children(self, element: etree._Element, preserve: bool) -> List[Node]:
        children: List[Node] = []
        if element.text:
            children.append(self._make_text(element.text, preserve))

        for child in element:
            if isinstance(child.tag, str):
                children.append(self._map_element(child, preserve))
            else:
                mapped = self._map_leaf(child)
                if mapped is not None:
                    children.append(mapped)

            if child.tail:
                children.append(self._make_text(child.tail, preserve))
        return children

    def _map_element(self, element: etree._Element, preserve: bool) -> Element:
        lowered = element.tag.lower()
        name = self._cased_tags.get(lowered, element.tag)
        if lowered == SCRIPT:
            kind = SCRIPT
        elif lowered == STYLE:
            kind = STYLE
        else:
            kind = TAG

        attributes = {
            self._cased_attributes.get(key, key): value for key, value in element.attrib.items()
        }
        node = Element(name=name, attributes=attributes, kind=kind)
        preserve = preserve or lowered in PRESERVE_WHITESPACE_TAGS
        node.children = self._map_children(element, preserve)
        link_siblings(node.children, node)
        return node

    def _map_leaf(self, element: etree._Element) -> Optional[Node]:
        # lxml exposes comments and processing instructions as elements with a factory tag
        if element.tag is etree.Comment:
            data = element.text or ""
            if data in self._cdata:
                return CData(data=self._cdata[data])
            return Comment(data=data)
        if element.tag is etree.ProcessingInstruction:
            target = element.target
            body = f" {element.text}" if element.text else ""
            return Directive(data=f"?{target}{body}?")
        return None

    def _make_text(self, data: str, preserve: bool) -> Text:
        if self.normalize_whitespace and not preserve:
            data = _WHITESPACE_RE.sub(" ", data)
        return Text(data=data)

    def _render(self, nodes: Sequence[Node], xhtml_mode: bool) -> str:
        parts: List[str] = []
        for node in nodes:
            if isinstance(node, Element):
                parts.append(self._render_element(node, xhtml_mode))
            elif isinstance(node, Text):
                parts.append(node.data)
            elif isinstance(node, Comment):
                parts.append(f"<!--{node.data}-->")
            elif isinstance(node, (CData, Directive)):
                parts.append(f"<{node.data}>")
        return "".join(parts)

    def _render_element(self, node: Element, xhtml_mode: bool) -> str:
        attrs = "".join(
            f' {name}="{_quote_attribute(value)}"' for name, value in node.attributes.items()
        )
        if node.children:
            inner = self._render(node.children, xhtml_mode)
            return f"<{node.name}{attrs}>{inner}</{node.name}>"
        if node.name.lower() in SELF_CLOSING_TAGS:
            return f"<{node.name}{attrs}{' />' if xhtml_mode else '>'}"
        return f"<{node.name}{attrs}></{node.name}>"
