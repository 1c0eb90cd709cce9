"""bindify: compile inline {bindings} in HTML into data-bind directives."""

from bindify.compiler.codegen.binding import BindingAttacher
from bindify.compiler.exceptions import BindifyConfigError, BindifyError, BindingStructureError
from bindify.compiler.transform import transform
from bindify.config import TransformOptions

__version__ = "0.1.0"

__all__ = [
    "transform",
    "TransformOptions",
    "BindingAttacher",
    "BindifyError",
    "BindifyConfigError",
    "BindingStructureError",
]
