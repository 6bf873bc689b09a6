"""Streaming rewriter: renames tags, drops ignored subtrees, squeezes text.

The rewriter consumes one token at a time and owns both its output buffer and
its :class:`~svdmin.allocator.TagAllocator`. Nothing is readable until the
``EndOfDocument`` token has been processed.
"""
from __future__ import annotations

import io
import logging
from typing import FrozenSet, Iterable, List, Optional, Tuple
from xml.sax.saxutils import escape

from .allocator import TagAllocator
from .normalize import normalize_text
from .tokens import EndOfDocument, EndTag, StartTag, Text, Token, describe

# SVD elements that carry layout/addressing details rather than documentation
IGNORE_TAGS: FrozenSet[str] = frozenset({
    "baseAddress",
    "addressBlock",
    "addressOffset",
    "offset",
    "size",
    "usage",
    "access",
    "resetValue",
    "bitOffset",
    "bitWidth",
})

logger = logging.getLogger(__name__)


class TagRewriter:
    """Single-use token rewriter. Create one per document."""

    def __init__(self, ignore_tags: Iterable[str] = IGNORE_TAGS, allocator: Optional[TagAllocator] = None) -> None:
        self.ignore_tags: FrozenSet[str] = frozenset(ignore_tags)
        self.allocator = allocator if allocator is not None else TagAllocator()
        self._out = io.StringIO()
        # open elements inside the current ignored subtree, its root included
        self._skip_depth = 0
        self._done = False
        self.skipped_subtrees = 0

    @property
    def done(self) -> bool:
        return self._done

    @property
    def skipping(self) -> bool:
        return self._skip_depth > 0

    def feed(self, token: Token) -> None:
        if self._done:
            raise RuntimeError(f"rewriter already finished; got {describe(token)}")
        if isinstance(token, StartTag):
            self._start(token.name)
        elif isinstance(token, EndTag):
            self._end(token.name)
        elif isinstance(token, Text):
            self._text(token.content)
        elif isinstance(token, EndOfDocument):
            self._done = True
        else:
            raise TypeError(f"unexpected token {token!r}")

    def run(self, tokens: Iterable[Token]) -> str:
        """Consume ``tokens`` up to ``EndOfDocument`` and return the body."""
        for token in tokens:
            self.feed(token)
            if self._done:
                break
        return self.result()

    def _start(self, name: str) -> None:
        if self._skip_depth:
            self._skip_depth += 1
            return
        if name in self.ignore_tags:
            logger.debug("Skipping <%s> subtree", name)
            self._skip_depth = 1
            self.skipped_subtrees += 1
            return
        self._out.write(f"<{self.allocator.resolve(name)}>")

    def _end(self, name: str) -> None:
        if self._skip_depth:
            self._skip_depth -= 1
            return
        self._out.write(f"</{self.allocator.resolve(name)}>")

    def _text(self, content: str) -> None:
        if self._skip_depth:
            return
        text = normalize_text(content)
        if text:
            self._out.write(escape(text))

    def result(self) -> str:
        if not self._done:
            raise RuntimeError("document not finished; no result available")
        return self._out.getvalue()

    def symbol_table(self) -> List[Tuple[str, str]]:
        if not self._done:
            raise RuntimeError("document not finished; no symbol table available")
        return self.allocator.export()
