"""Compiler exceptions."""

from typing import Any, Dict, List, Optional


class BindifyError(Exception):
    """Base class for all bindify errors."""


class BindifyConfigError(BindifyError):
    """Raised when transform options or delimiter patterns are invalid."""

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        self.message = message
        self.errors = errors or []
        super().__init__(message)

    def __str__(self) -> str:
        if self.errors:
            details = "; ".join(
                f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg', '')}"
                for err in self.errors
            )
            return f"{self.message} ({details})"
        return self.message


class BindingStructureError(BindifyError):
    """Raised when a text binding has no element to carry its directive."""

    def __init__(self, message: str, text: str = ""):
        self.message = message
        self.text = text
        super().__init__(message)

    def __str__(self) -> str:
        if self.text:
            return f"{self.message}: {self.text[:40]!r}"
        return self.message
