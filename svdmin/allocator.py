"""Tag allocator: maps element names to single-character symbols.

Symbols are handed out on demand in first-seen order, so the table is a pure
function of document order and the same input always yields the same table.
"""
from __future__ import annotations

import logging
import string
from typing import Dict, List, Tuple

from .errors import CapacityExceededError

DEFAULT_ALPHABET = string.ascii_lowercase

logger = logging.getLogger(__name__)


class TagAllocator:
    """Injective, append-only mapping of tag name -> symbol for one run."""

    def __init__(self, alphabet: str = DEFAULT_ALPHABET) -> None:
        if not alphabet:
            raise ValueError("alphabet must not be empty")
        if len(set(alphabet)) != len(alphabet):
            raise ValueError("alphabet contains repeated symbols")
        self.alphabet = alphabet
        self._symbols: Dict[str, str] = {}

    def __len__(self) -> int:
        return len(self._symbols)

    def __contains__(self, name: object) -> bool:
        return name in self._symbols

    @property
    def capacity(self) -> int:
        return len(self.alphabet)

    def resolve(self, name: str) -> str:
        """Return the symbol bound to ``name``, allocating the next one if new."""
        symbol = self._symbols.get(name)
        if symbol is not None:
            return symbol
        idx = len(self._symbols)
        if idx >= self.capacity:
            raise CapacityExceededError(name, self.capacity)
        symbol = self.alphabet[idx]
        self._symbols[name] = symbol
        logger.debug("Allocated %s=%s", symbol, name)
        return symbol

    def export(self) -> List[Tuple[str, str]]:
        # dicts keep insertion order, which is allocation order
        return [(symbol, name) for name, symbol in self._symbols.items()]

    def render(self) -> str:
        """Side-table string: ``a=xml,b=foo,...``."""
        return ",".join(f"{symbol}={name}" for symbol, name in self.export())
