"""Binding code generation."""

from bindify.compiler.codegen.binding import BindingAttacher
from bindify.compiler.codegen.expression import CompiledBinding, compile_chunks

__all__ = ["BindingAttacher", "CompiledBinding", "compile_chunks"]
