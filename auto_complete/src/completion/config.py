from __future__ import annotations

# how many completions the CLI / web API return by default
TOP_K: int = 10

# Word policy defaults (see models.WordPolicy)
SEPARATOR: str | None = None      # None -> any run of whitespace
CASE_FOLD: bool = False
FOLD_ACCENTS: bool = False
PUNCTUATION: str = "keep"         # "keep" | "strip" | "truncate"
INCLUSIONS: str = ""              # extra word characters for strip/truncate
MIN_WORD_LEN: int = 1

PUNCTUATION_MODES = ("keep", "strip", "truncate")

# Corpus loading
INCLUDE_EXTS = [".txt", ".md"]
EXCLUDE_DIRS = {".git", ".hg", ".svn", ".idea", ".vscode", "node_modules", "__pycache__"}
PROGRESS_EVERY_FILES: int = 500
