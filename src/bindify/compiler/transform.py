"""Pipeline: shield, parse, scan and attach, serialize, unshield."""

import logging
from typing import Any, Mapping, Optional, Union

from bindify.compiler.codegen.binding import BindingAttacher
from bindify.compiler.interpolation.accessor import AccessorInterpolationParser
from bindify.compiler.markup import MarkupAdapter
from bindify.compiler.scanner import BindingScanner
from bindify.compiler.shield import TemplateShield
from bindify.config import TransformOptions

logger = logging.getLogger(__name__)


def transform(
    document: str,
    options: Union[TransformOptions, Mapping[str, Any], None] = None,
    *,
    attacher: Optional[BindingAttacher] = None,
) -> str:
    """
    Rewrite inline ``{path}`` bindings in an HTML document into
    binding directives plus static placeholders.

    ``<input value="{name}">`` becomes
    ``<input value="{{name()}}" data-bind="value:this.name()">``.

    Raises BindifyConfigError before touching the document when the
    options or delimiter patterns are invalid.
    """
    opts = TransformOptions.resolve(options)

    # Compile every pattern up front so configuration errors surface before parsing.
    shield = TemplateShield(opts.template_delimiters)
    parser = AccessorInterpolationParser(*opts.binding_delimiters)
    if attacher is None:
        attacher = BindingAttacher(opts.binding_attribute, opts.output_delimiters)
    adapter = MarkupAdapter(normalize_whitespace=opts.normalize_whitespace)

    shielded, clippings = shield.shield(document)
    attacher.literal_marks = {clipping.mark: clipping.literal_mark for clipping in clippings}
    nodes = adapter.parse(shielded)

    count = BindingScanner(opts, parser, attacher, adapter).scan(nodes)
    logger.debug("Attached %d binding(s)", count)

    output = adapter.serialize(nodes, xhtml_mode=opts.xhtml_mode)
    return shield.unshield(output, clippings)
