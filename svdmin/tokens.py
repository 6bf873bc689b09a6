"""Streaming markup tokenizer built on lxml's feed parser.

The parser is driven with a *target* object instead of building a tree, so
tokens come out in document order while the input is fed in chunks. Memory
stays proportional to the chunk size plus any pending text, not to the size
of the document.
"""
from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Deque, Iterator, List, Optional, Union

from lxml import etree  # type: ignore

from .errors import MalformedInputError

DEFAULT_CHUNK_SIZE = 64 * 1024

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StartTag:
    name: str


@dataclass(frozen=True)
class EndTag:
    name: str


@dataclass(frozen=True)
class Text:
    content: str


@dataclass(frozen=True)
class EndOfDocument:
    pass


Token = Union[StartTag, EndTag, Text, EndOfDocument]


class _TokenCollector:
    """Parser target that turns lxml callbacks into queued tokens.

    lxml may split one text node across several ``data`` calls (chunk
    boundaries, entity references, CDATA sections); they are joined here and
    released as one ``Text`` token when the next tag, comment or processing
    instruction arrives.
    """

    def __init__(self) -> None:
        self.pending: Deque[Token] = deque()
        self._text: List[str] = []

    def _flush_text(self) -> None:
        if self._text:
            self.pending.append(Text("".join(self._text)))
            self._text = []

    def start(self, tag, attrib, nsmap=None) -> None:
        self._flush_text()
        self.pending.append(StartTag(tag))

    def end(self, tag) -> None:
        self._flush_text()
        self.pending.append(EndTag(tag))

    def data(self, data) -> None:
        self._text.append(data)

    # comments and processing instructions emit nothing but still end a text node
    def comment(self, text) -> None:
        self._flush_text()

    def pi(self, target, data=None) -> None:
        self._flush_text()

    def close(self) -> None:
        self._flush_text()


def _chunks(data: bytes, size: int) -> Iterator[bytes]:
    for offset in range(0, len(data), size):
        yield data[offset:offset + size]


def iter_tokens(document: Union[str, bytes], chunk_size: int = DEFAULT_CHUNK_SIZE) -> Iterator[Token]:
    """Yield the token stream of ``document``, ending with ``EndOfDocument``.

    Single pass and not restartable. Raises ``MalformedInputError`` as soon as
    the parser rejects the input; tokens already yielded must be discarded by
    the caller.
    """
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")
    data = document.encode("utf-8") if isinstance(document, str) else document
    if not data.strip():
        raise MalformedInputError("no element found")
    collector = _TokenCollector()
    parser = etree.XMLParser(target=collector, encoding="utf-8", resolve_entities=False)
    try:
        for chunk in _chunks(data, chunk_size):
            parser.feed(chunk)
            while collector.pending:
                yield collector.pending.popleft()
        parser.close()
    except etree.XMLSyntaxError as e:
        logger.debug("Tokenizer rejected document: %s", e)
        raise MalformedInputError(str(e)) from e
    while collector.pending:
        yield collector.pending.popleft()
    yield EndOfDocument()


def describe(token: Optional[Token]) -> str:
    if isinstance(token, StartTag):
        return f"<{token.name}>"
    if isinstance(token, EndTag):
        return f"</{token.name}>"
    if isinstance(token, Text):
        return repr(token.content)
    return "EOF"
