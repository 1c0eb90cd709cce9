"""Base interpolation parser."""

from abc import ABC, abstractmethod
from typing import List


class InterpolationParser(ABC):
    """Base class for splitting text into literal and expression chunks."""

    @abstractmethod
    def split(self, text: str) -> List[str]:
        """
        Split text into alternating literal/expression chunks.
        'Hello {name}!' -> ['Hello ', 'name', '!']

        Even positions are literals (possibly empty), odd positions are
        expressions. A single-element result means no binding was found.
        """
        pass

    def has_bindings(self, text: str) -> bool:
        return len(self.split(text)) > 1
