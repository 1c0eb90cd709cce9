"""Masking of external template-engine blocks."""

import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Pattern, Sequence, Tuple

from bindify.compiler.escaping import escape_js_chars, escape_pattern
from bindify.compiler.exceptions import BindifyConfigError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Clipping:
    """A protected region: the mark that replaced it and its original text."""

    mark: str
    text: str

    @property
    def literal_mark(self) -> str:
        """Stand-in for the mark inside a generated string literal; restored escaped."""
        return f"{self.mark}js"


class TemplateShield:
    """
    Replaces template blocks such as ``{{#each items}}`` or ``<% code %>`` with
    unique marks before parsing, and puts them back afterwards.

    Delimiter pairs are tried in the given order at each position.
    """

    def __init__(
        self,
        delimiters: Sequence[Tuple[str, str]],
        mark_prefix: str = "bind",
        mark_suffix: str = "ify",
    ) -> None:
        self.mark_prefix = mark_prefix
        self.mark_suffix = mark_suffix
        self.pattern = self._compile(delimiters)

    @staticmethod
    def _compile(delimiters: Sequence[Tuple[str, str]]) -> Optional[Pattern[str]]:
        if not delimiters:
            return None

        source = "|".join(
            f"{escape_pattern(open_)}[\\s\\S]*?{escape_pattern(close)}"
            for open_, close in delimiters
        )
        try:
            return re.compile(source)
        except re.error as e:
            raise BindifyConfigError(f"Invalid template delimiter pattern {source!r}: {e}")

    def shield(self, document: str) -> Tuple[str, List[Clipping]]:
        """Mask every template block. Returns the masked document and the clippings."""
        if self.pattern is None:
            return document, []

        clippings: List[Clipping] = []
        counter = 0

        def replace(match: "re.Match[str]") -> str:
            nonlocal counter
            while True:
                counter += 1
                mark = f"{self.mark_prefix}{counter}{self.mark_suffix}"
                if mark not in document:
                    break
            clippings.append(Clipping(mark=mark, text=match.group(0)))
            return mark

        shielded = self.pattern.sub(replace, document)
        logger.debug("Shielded %d template block(s)", len(clippings))
        return shielded, clippings

    @staticmethod
    def unshield(document: str, clippings: Sequence[Clipping]) -> str:
        """
        Restore the original text of every clipping.

        Literal marks go first: each literal mark starts with its plain mark.
        """
        for clipping in reversed(clippings):
            document = document.replace(clipping.literal_mark, escape_js_chars(clipping.text))
        for clipping in reversed(clippings):
            document = document.replace(clipping.mark, clipping.text)
        return document
