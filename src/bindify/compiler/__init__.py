"""Compiler module."""

from bindify.compiler.markup import MarkupAdapter
from bindify.compiler.shield import TemplateShield

__all__ = ["MarkupAdapter", "TemplateShield"]
