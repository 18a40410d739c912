from __future__ import annotations
import unicodedata
from dataclasses import replace
from typing import FrozenSet, Iterator, Optional, Tuple

from .models import WordPolicy


def _is_word_char(ch: str, inclusions: FrozenSet[str]) -> bool:
    """Letters and digits are word characters, plus whatever the policy includes."""
    return ch.isalnum() or ch in inclusions


def fold_accents(text: str) -> str:
    """Drop combining marks after NFKD decomposition ("café" -> "cafe")."""
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def normalize_word(word: str, policy: WordPolicy) -> str:
    """
    Apply the policy to a single word (or a prefix of one):
      * accent folding, then case folding
      * punctuation: "keep" leaves the word alone, "strip" removes non-word
        characters, "truncate" cuts the word at the first non-word character
    """
    if policy.fold_accents:
        word = fold_accents(word)
    if policy.case_fold:
        word = word.casefold()

    if policy.punctuation == "strip":
        return "".join(ch for ch in word if _is_word_char(ch, policy.inclusions))
    if policy.punctuation == "truncate":
        for i, ch in enumerate(word):
            if not _is_word_char(ch, policy.inclusions):
                return word[:i]
    return word


def normalize_prefix(prefix: str, policy: WordPolicy) -> Optional[str]:
    """
    Normalize a query prefix the way stored words were normalized.
    Returns None when no stored word can start with it: a non-empty prefix
    that normalizes to nothing, or (truncate) a prefix holding a non-word
    character, which stored words never contain.
    """
    key = normalize_word(prefix, policy)
    if prefix and not key:
        return None
    if policy.punctuation == "truncate":
        folded = normalize_word(prefix, replace(policy, punctuation="keep"))
        if key != folded:
            return None
    return key


def split_raw(text: str, policy: WordPolicy) -> list[str]:
    if policy.separator is None:
        return text.split()
    return text.split(policy.separator)


def split_words(text: str, policy: WordPolicy) -> Iterator[str]:
    """Yield normalized words of `text`, skipping empty and too-short ones."""
    for raw in split_raw(text, policy):
        word = normalize_word(raw, policy)
        if len(word) >= policy.min_word_len:
            yield word


def last_word(line: str, policy: WordPolicy) -> Tuple[str, str]:
    """
    Split a line into (head, last raw word).
    The last word is empty when the line is empty or ends on a separator.
    """
    if policy.separator is None:
        if not line or line[-1].isspace():
            return line, ""
        parts = line.split()
        tail = parts[-1]
    else:
        tail = line.rsplit(policy.separator, 1)[-1]
    return line[:len(line) - len(tail)], tail
