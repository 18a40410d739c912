from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Optional

from . import config as CFG


class Node:
    """
    One run of characters in the prefix tree.
    Children are keyed by the first character of their segment, so a node
    never holds two children starting with the same character.
    """

    __slots__ = ("segment", "children", "is_terminal")

    def __init__(self, segment: str = "", is_terminal: bool = False) -> None:
        self.segment = segment
        self.children: Dict[str, Node] = {}
        self.is_terminal = is_terminal

    def __repr__(self) -> str:
        flag = "*" if self.is_terminal else ""
        return f"Node({self.segment!r}{flag}, children={sorted(self.children)})"


@dataclass(frozen=True)
class WordPolicy:
    separator: Optional[str] = CFG.SEPARATOR
    case_fold: bool = CFG.CASE_FOLD
    fold_accents: bool = CFG.FOLD_ACCENTS
    punctuation: str = CFG.PUNCTUATION
    inclusions: FrozenSet[str] = field(default_factory=lambda: frozenset(CFG.INCLUSIONS))
    min_word_len: int = CFG.MIN_WORD_LEN

    def __post_init__(self) -> None:
        if self.separator is not None and self.separator == "":
            raise ValueError("separator must be a non-empty string or None (whitespace)")
        if self.punctuation not in CFG.PUNCTUATION_MODES:
            raise ValueError(
                f"punctuation must be one of {CFG.PUNCTUATION_MODES}, got {self.punctuation!r}"
            )
        if int(self.min_word_len) < 1:
            raise ValueError("min_word_len must be >= 1")
        # accept any iterable of characters, e.g. "-_" or ['-', '_']
        if not isinstance(self.inclusions, frozenset):
            object.__setattr__(self, "inclusions", frozenset(self.inclusions))


@dataclass(frozen=True)
class TreeStats:
    words: int
    nodes: int
    stored_chars: int     # characters held in node segments
    word_chars: int       # characters of all words laid out one by one


@dataclass(frozen=True)
class Completion:
    word: str
    completed_line: str
    rank: int             # 1-based position in lexicographic order


@dataclass(frozen=True)
class LoadReport:
    files: int
    lines: int
    words_added: int
    skipped_files: int = 0
