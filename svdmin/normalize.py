"""Whitespace normalization for text nodes.

The policy is deliberately aggressive: after tabs and newlines become spaces,
any run of two or more whitespace characters is deleted outright rather than
collapsed to a single space. Isolated single spaces survive.
"""
from __future__ import annotations

import re

MULTI_SPACE = re.compile(r"\s{2,}")


def normalize_text(content: str) -> str:
    t = content.replace("\t", " ")
    t = t.replace("\r", "")
    t = t.replace("\n", " ")
    t = MULTI_SPACE.sub("", t)
    return t.strip()
