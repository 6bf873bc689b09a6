from .allocator import TagAllocator
from .minifier import minify, minify_file, minify_paths
from .normalize import normalize_text
from .rewriter import IGNORE_TAGS, TagRewriter
from . import errors  # re-export module so callers can catch errors.MinifyError

__all__ = [
    "TagAllocator",
    "TagRewriter",
    "IGNORE_TAGS",
    "minify",
    "minify_file",
    "minify_paths",
    "normalize_text",
    "errors",
]
__version__ = "0.1.0"
