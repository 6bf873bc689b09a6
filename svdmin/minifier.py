"""Minify SVD / XML documents into a symbol table plus a tag-renamed body.

Output format::

    a=device,b=peripherals,c=peripheral,...
    <a><b><c>...</c></b></a>

Entry points:
  * ``minify(text)``       core transform over an in-memory document
  * ``minify_file(path)``  read + dispatch on file extension
  * ``minify_paths(...)``  batch mode over files/directories (tqdm progress);
                           per-file failures become result records
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Set, Union

from tqdm import tqdm

from .errors import EncodingError, MinifyError, MinifyIOError, NoFileExtensionError, UnsupportedFileTypeError
from .rewriter import TagRewriter
from .tokens import iter_tokens

OUTPUT_SUFFIX = ".min.txt"

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def minify(document_text: str) -> str:
    """Return ``<symbol-table>\\n<rewritten-document>`` for ``document_text``."""
    rewriter = TagRewriter()
    body = rewriter.run(iter_tokens(document_text))
    tags = rewriter.allocator.render()
    logger.debug("Minified document: %d tags, %d subtrees dropped", len(rewriter.allocator), rewriter.skipped_subtrees)
    return f"{tags}\n{body}"


MINIFIERS: Dict[str, Callable[[str], str]] = {
    "svd": minify,
    "xml": minify,
}


def read_document(path: PathLike) -> str:
    p = Path(path)
    try:
        raw = p.read_bytes()
    except OSError as e:
        raise MinifyIOError(str(p), e.strerror or str(e)) from e
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise EncodingError(f"{p.name}: {e}") from e


def minify_file(path: PathLike) -> str:
    """Read ``path`` and minify it with the minifier registered for its extension."""
    p = Path(path)
    contents = read_document(p)
    extension = p.suffix.lstrip(".")
    if not extension:
        raise NoFileExtensionError()
    minifier = MINIFIERS.get(extension.lower())
    if minifier is None:
        raise UnsupportedFileTypeError(extension)
    return minifier(contents)


def iter_input(path: PathLike) -> Iterable[Path]:
    p = Path(path)
    if p.is_dir():
        yield from sorted(f for f in p.iterdir() if f.is_file() and f.suffix.lstrip(".").lower() in MINIFIERS)
    else:
        yield p


def output_path_for(path: Path, output_dir: Optional[PathLike] = None) -> Path:
    base = Path(output_dir) if output_dir else path.parent
    return base / (path.name + OUTPUT_SUFFIX)


def minify_paths(paths: Iterable[PathLike], output_dir: Optional[PathLike] = None) -> List[dict]:
    """Minify every input file, writing ``<name>.min.txt`` outputs (``chip.svd`` -> ``chip.svd.min.txt``).

    Never raises for a single bad file; each input produces one record with
    ``success`` / ``error`` so the caller can report on the whole batch.
    """
    files = [f for p in paths for f in iter_input(p)]
    if output_dir:
        Path(output_dir).mkdir(parents=True, exist_ok=True)
    results: List[dict] = []
    written: Set[Path] = set()
    for path in tqdm(files, desc="Minifying", disable=len(files) < 2):
        out = output_path_for(path, output_dir)
        try:
            if out in written:
                raise MinifyError(f"output {out} already written for an earlier input")
            minified = minify_file(path)
            out.write_text(minified + "\n", encoding="utf-8")
            written.add(out)
            results.append({
                "file": str(path),
                "output": str(out),
                "before": path.stat().st_size,
                "after": out.stat().st_size,
                "success": True,
                "error": None,
            })
        except (MinifyError, OSError) as e:
            logger.error("Minify failed for %s: %s", path, e)
            results.append({
                "file": str(path),
                "output": None,
                "before": path.stat().st_size if path.exists() else 0,
                "after": 0,
                "success": False,
                "error": str(e),
            })
    ok = sum(1 for r in results if r["success"])
    logger.info("Minified %s/%s files", ok, len(results))
    return results
