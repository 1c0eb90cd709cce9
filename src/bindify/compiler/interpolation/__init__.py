"""Interpolation parsers."""

from bindify.compiler.interpolation.accessor import AccessorInterpolationParser
from bindify.compiler.interpolation.base import InterpolationParser

__all__ = ["InterpolationParser", "AccessorInterpolationParser"]
