from __future__ import annotations
import os
import logging
from typing import Iterable, List, Optional

from .config import EXCLUDE_DIRS, INCLUDE_EXTS, PROGRESS_EVERY_FILES
from .models import LoadReport
from .tree import PrefixTree

# Progress logging (set COMPLETION_VERBOSE=1 to enable)
VERBOSE = os.environ.get("COMPLETION_VERBOSE") == "1"

log = logging.getLogger(__name__)


def _wanted(filename: str, exts: List[str]) -> bool:
    return any(filename.lower().endswith(ext) for ext in exts)


def iter_text_files(roots: Iterable[str], exts: Optional[List[str]] = None) -> Iterable[str]:
    """
    Yield text files under each root, recursively, in a stable order.
    A root that is itself a file is yielded as-is, whatever its extension.
    """
    exts = [e.lower() for e in (exts or INCLUDE_EXTS)]
    for root in roots:
        root = os.path.abspath(root)
        if os.path.isfile(root):
            yield root
            continue
        if not os.path.isdir(root):
            raise FileNotFoundError(root)
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames[:] = sorted(d for d in dirnames if d not in EXCLUDE_DIRS)
            for fn in sorted(filenames):
                if _wanted(fn, exts):
                    yield os.path.join(dirpath, fn)


def load_tree(roots: Iterable[str],
              tree: Optional[PrefixTree] = None,
              exts: Optional[List[str]] = None) -> tuple[PrefixTree, LoadReport]:
    """
    Feed every line of every text file under `roots` into `tree`
    (a new PrefixTree when omitted). Unreadable files are skipped.
    """
    tree = tree if tree is not None else PrefixTree()
    files = lines = added = skipped = 0

    for path in iter_text_files(roots, exts):
        try:
            with open(path, "r", encoding="utf-8", errors="ignore") as f:
                before = len(tree)
                for raw in f:
                    lines += 1
                    tree.insert(raw.rstrip("\r\n"))
                added += len(tree) - before
        except OSError as exc:
            log.warning("Skipping unreadable file %s: %s", path, exc)
            skipped += 1
            continue

        files += 1
        if VERBOSE and files % PROGRESS_EVERY_FILES == 0:
            log.info("[scanned] files=%s words=%s", f"{files:,}", f"{len(tree):,}")

    log.info("[done] files=%d lines=%d new words=%d", files, lines, added)
    return tree, LoadReport(files=files, lines=lines, words_added=added, skipped_files=skipped)
