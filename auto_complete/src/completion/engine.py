# completion/engine.py
from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from . import config as CFG
from .guard import GuardedTree
from .loader import load_tree
from .models import Completion, LoadReport, TreeStats, WordPolicy
from .normalize import last_word
from .tree import PrefixTree

log = logging.getLogger(__name__)


class Engine:
    """
    Thin orchestration layer that glues together:
      - corpus loading (loader.load_tree),
      - the prefix tree, behind a GuardedTree so threaded callers are safe,
      - line completion for user queries.

    Public API (used by CLI/Flask/GUI):
      * build(roots, ...): load folders into a fresh tree -> swap it in
      * feed(text):        add ad-hoc text to the current tree
      * add_word(word):    add one word, report whether it was new
      * complete(query, top_k): completions for the last word of query
      * stats() / shutdown()
    """

    # ------------- lifecycle -------------

    def __init__(self, policy: Optional[WordPolicy] = None) -> None:
        self.policy: WordPolicy = policy or WordPolicy()
        self.tree: Optional[GuardedTree] = None
        self.last_report: Optional[LoadReport] = None

    # /* ~~~ Build a tree from source folders and install it ~~~ */
    def build(
        self,
        roots: Iterable[str],
        *,
        policy: Optional[WordPolicy] = None,
        exts: Optional[List[str]] = None,      # e.g. [".txt", ".md"]; defaults to config
        verbose: bool = False,
    ) -> LoadReport:
        if verbose:
            logging.basicConfig(level=logging.INFO)

        roots = list(roots)
        if not roots:
            raise ValueError("build(): at least one root folder is required")
        if policy is not None:
            self.policy = policy

        log.info("Loading corpus from %s", roots)
        fresh, report = load_tree(roots, PrefixTree(self.policy), exts=exts)

        if self.tree is None:
            self.tree = GuardedTree(fresh)
        else:
            self.tree.swap(fresh)
        self.last_report = report

        log.info("Engine build() complete: words=%d nodes=%d", len(fresh), fresh.size())
        return report

    def feed(self, text: str) -> None:
        self._ensure_tree().insert(text)

    def add_word(self, word: str) -> bool:
        with self._ensure_tree().access() as tree:
            return tree.insert_word(word)

    # ------------- query -------------

    # /* ~~~ Complete the last word of a query and return the whole lines ~~~ */
    def complete(self, query: str, *, top_k: Optional[int] = CFG.TOP_K) -> List[Completion]:
        tree = self._require_tree()
        if top_k is not None and top_k <= 0:
            return []
        # split with the policy of the tree that answers, not self.policy
        with tree.access() as current:
            lines = current.complete_line(query, top_k)
            head, _ = last_word(query, current.policy)
        return [
            Completion(word=line[len(head):], completed_line=line, rank=i)
            for i, line in enumerate(lines, start=1)
        ]

    def stats(self) -> TreeStats:
        return self._require_tree().stats()

    # ------------- teardown -------------

    def shutdown(self) -> None:
        try:
            if self.tree is not None:
                self.tree.clear()
        finally:
            self.tree = None
            log.info("Engine shutdown complete")

    # ------------- internals -------------

    def _ensure_tree(self) -> GuardedTree:
        if self.tree is None:
            self.tree = GuardedTree(PrefixTree(self.policy))
        return self.tree

    def _require_tree(self) -> GuardedTree:
        if self.tree is None:
            raise RuntimeError("Engine not initialized. Call build() or feed() first.")
        return self.tree
