from __future__ import annotations

import logging
from dataclasses import replace
from itertools import islice
from typing import Iterable, Iterator, List, Optional, Tuple

from .models import Node, TreeStats, WordPolicy
from .normalize import last_word, normalize_prefix, normalize_word, split_words

log = logging.getLogger(__name__)


def common_prefix_length(a: str, b: str) -> int:
    """Length of the longest common prefix of a and b."""
    n = min(len(a), len(b))
    i = 0
    while i < n and a[i] == b[i]:
        i += 1
    return i


class PrefixTree:
    """
    Compressed trie of words.

    Each node stores a run of characters (its segment), so words sharing a
    stem share the nodes of that stem:

        root ─ "bat" ┬ "cave"
                     ├ "m" ┬ "an"
                     │     └ "obile"

    The tree owns its WordPolicy and applies it both to inserted text and to
    completion prefixes, so the two sides are always normalized alike.

    Public API:
      * insert(text):            split text into words and add each one
      * complete(prefix, limit): words starting with prefix, lexicographic
      * complete_line(line):     complete the last word of a line
      * word_count() / size() / stats() / clear()

    Not thread-safe: wrap it in guard.GuardedTree when threads share it.
    """

    def __init__(self, policy: Optional[WordPolicy] = None, **overrides) -> None:
        base = policy or WordPolicy()
        self.policy: WordPolicy = replace(base, **overrides) if overrides else base
        self.root = Node("")
        self._words = 0
        self._nodes = 1

    def __repr__(self) -> str:
        return f"PrefixTree(words={self._words}, nodes={self._nodes})"

    # ------------- insertion -------------

    def insert(self, text: str) -> None:
        """Add every word of `text` (split and normalized per the policy)."""
        for word in split_words(text, self.policy):
            self._add(word)

    def insert_many(self, lines: Iterable[str]) -> None:
        for line in lines:
            self.insert(line)

    def insert_word(self, word: str) -> bool:
        """Normalize and add a single word. Returns True if it was not present yet."""
        word = normalize_word(word, self.policy)
        if len(word) < self.policy.min_word_len:
            return False
        return self._add(word)

    def _add(self, word: str) -> bool:
        node = self.root
        rest = word
        while rest:
            child = node.children.get(rest[0])

            # nothing shares the next character: hang the whole tail here
            if child is None:
                node.children[rest[0]] = Node(rest, is_terminal=True)
                self._nodes += 1
                self._words += 1
                return True

            common = common_prefix_length(child.segment, rest)
            if common == len(child.segment):
                node = child
                rest = rest[common:]
                continue

            # split: `mid` takes the shared part, `child` keeps its tail
            mid = Node(child.segment[:common])
            child.segment = child.segment[common:]
            mid.children[child.segment[0]] = child
            node.children[mid.segment[0]] = mid
            self._nodes += 1

            tail = rest[common:]
            if tail:
                mid.children[tail[0]] = Node(tail, is_terminal=True)
                self._nodes += 1
            else:
                mid.is_terminal = True
            self._words += 1
            return True

        if node.is_terminal:
            return False
        node.is_terminal = True
        self._words += 1
        return True

    # ------------- lookup -------------

    def _locate(self, key: str) -> Tuple[Optional[Node], str]:
        """
        Walk `key` down from the root without changing anything.
        Returns (node, pending): `pending` is the rest of node's segment when
        key ends inside it, "" when key ends on a node boundary.
        (None, "") when key is not a prefix of any word.
        """
        node = self.root
        rest = key
        while rest:
            child = node.children.get(rest[0])
            if child is None:
                return None, ""
            common = common_prefix_length(child.segment, rest)
            if common == len(child.segment):
                node = child
                rest = rest[common:]
                continue
            if common == len(rest):
                return child, child.segment[common:]
            return None, ""
        return node, ""

    def _walk(self, start: Node, text: str) -> Iterator[str]:
        """
        Yield the words of start's subtree in lexicographic order.
        `text` is the word spelled by the path up to and including start.
        Pre-order with children sorted by first character: a word comes
        before its extensions and sibling subtrees never interleave.
        """
        stack = [(start, text)]
        while stack:
            node, spelled = stack.pop()
            if node.is_terminal:
                yield spelled
            for first in sorted(node.children, reverse=True):
                child = node.children[first]
                stack.append((child, spelled + child.segment))

    def complete(self, prefix: str, limit: Optional[int] = None) -> List[str]:
        """
        Every stored word starting with `prefix`, in lexicographic order.
        The prefix goes through the same policy as inserted words. An empty
        prefix returns all words; no match returns [].
        `limit` keeps only the first N words of that order.
        """
        if limit is not None and limit < 0:
            raise ValueError("limit must be >= 0")
        key = normalize_prefix(prefix, self.policy)
        if key is None:
            return []
        node, pending = self._locate(key)
        if node is None:
            return []
        return list(islice(self._walk(node, key + pending), limit))

    def complete_line(self, line: str, limit: Optional[int] = None) -> List[str]:
        """
        Complete the last word of `line` and return whole lines:
        "to the bat" -> ["to the batcave", "to the batman", ...].
        """
        head, tail = last_word(line, self.policy)
        if not tail:
            return []
        return [head + word for word in self.complete(tail, limit)]

    def __contains__(self, word: object) -> bool:
        if not isinstance(word, str):
            return False
        key = normalize_prefix(word, self.policy)
        if not key:
            return False
        node, pending = self._locate(key)
        return node is not None and node is not self.root and not pending and node.is_terminal

    def __iter__(self) -> Iterator[str]:
        return self._walk(self.root, "")

    # ------------- bookkeeping -------------

    def __len__(self) -> int:
        return self._words

    def word_count(self) -> int:
        return self._words

    def size(self) -> int:
        """Number of nodes, root included."""
        return self._nodes

    def stats(self) -> TreeStats:
        stored = 0
        spelled_total = 0
        stack = [(self.root, 0)]
        while stack:
            node, depth = stack.pop()
            stored += len(node.segment)
            depth += len(node.segment)
            if node.is_terminal:
                spelled_total += depth
            for child in node.children.values():
                stack.append((child, depth))
        return TreeStats(
            words=self._words,
            nodes=self._nodes,
            stored_chars=stored,
            word_chars=spelled_total,
        )

    def clear(self) -> None:
        self.root = Node("")
        self._words = 0
        self._nodes = 1
        log.debug("prefix tree cleared")

    def set_min_word_len(self, n: int) -> None:
        """Only affects later inserts; words already stored stay."""
        self.policy = replace(self.policy, min_word_len=n)
