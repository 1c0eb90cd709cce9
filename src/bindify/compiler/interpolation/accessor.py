"""Property-accessor interpolation parser."""

import re
from typing import List, Pattern

from bindify.compiler.escaping import escape_pattern
from bindify.compiler.exceptions import BindifyConfigError
from bindify.compiler.interpolation.base import InterpolationParser

# identifier(.identifier)*
ACCESSOR_PATH = r"[$A-Za-z_][$\w]*(?:\.[$A-Za-z_][$\w]*)*"


class AccessorInterpolationParser(InterpolationParser):
    """Finds ``{path.to.property}`` bindings; anything else between delimiters is literal."""

    def __init__(self, open_delimiter: str = "{", close_delimiter: str = "}") -> None:
        self.open_delimiter = open_delimiter
        self.close_delimiter = close_delimiter
        self.pattern = self._compile(open_delimiter, close_delimiter)

    @staticmethod
    def _compile(open_delimiter: str, close_delimiter: str) -> Pattern[str]:
        source = (
            f"{escape_pattern(open_delimiter)}\\s*({ACCESSOR_PATH})\\s*"
            f"{escape_pattern(close_delimiter)}"
        )
        try:
            return re.compile(source)
        except re.error as e:
            raise BindifyConfigError(f"Invalid binding delimiter pattern {source!r}: {e}")

    def split(self, text: str) -> List[str]:
        # One capture group, so re.split alternates literal/expression.
        return self.pattern.split(text)
