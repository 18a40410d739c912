from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Iterator, List, Optional

from .models import TreeStats
from .tree import PrefixTree

log = logging.getLogger(__name__)


class GuardedTree:
    """
    Lock-scoped handle around a PrefixTree shared between threads.
    A split replaces a child node in place, so a completion must never walk
    the tree while an insert is running; every call here holds the lock for
    the whole operation.
    """

    def __init__(self, tree: Optional[PrefixTree] = None) -> None:
        self._tree = tree if tree is not None else PrefixTree()
        self._lock = threading.RLock()

    @contextmanager
    def access(self) -> Iterator[PrefixTree]:
        """Hold the lock and hand out the current tree for a batch of calls."""
        with self._lock:
            yield self._tree

    def swap(self, tree: PrefixTree) -> PrefixTree:
        """Install a freshly built tree as the new generation; returns the old one."""
        with self._lock:
            old, self._tree = self._tree, tree
        log.info("Swapped prefix tree generation: %d -> %d words", len(old), len(tree))
        return old

    def insert(self, text: str) -> None:
        with self._lock:
            self._tree.insert(text)

    def complete(self, prefix: str, limit: Optional[int] = None) -> List[str]:
        with self._lock:
            return self._tree.complete(prefix, limit)

    def complete_line(self, line: str, limit: Optional[int] = None) -> List[str]:
        with self._lock:
            return self._tree.complete_line(line, limit)

    def stats(self) -> TreeStats:
        with self._lock:
            return self._tree.stats()

    def clear(self) -> None:
        with self._lock:
            self._tree.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._tree)
