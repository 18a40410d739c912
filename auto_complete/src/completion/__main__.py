from __future__ import annotations
import argparse, json, os, sys
from dataclasses import asdict

from . import config as CFG
from .engine import Engine
from .models import WordPolicy

def _supports_color() -> bool:
    return sys.stdout.isatty() and os.environ.get("NO_COLOR", "") == ""

CSI = "\033["
def _c(text: str, code: str) -> str:
    if not _supports_color(): return text
    return f"{CSI}{code}m{text}{CSI}0m"

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Prefix-tree autocomplete CLI")
    p.add_argument("--roots", nargs="+", default=[], help="Folders (or files) to load words from")
    p.add_argument("--text", action="append", default=[], help="Inline text to insert (repeatable)")
    p.add_argument("--ext", action="append", default=None, help=f"File extension to load (default {CFG.INCLUDE_EXTS})")

    g = p.add_argument_group("word policy")
    g.add_argument("--separator", default=CFG.SEPARATOR, help="Word separator (default: whitespace)")
    g.add_argument("--case-fold", action="store_true", default=CFG.CASE_FOLD)
    g.add_argument("--fold-accents", action="store_true", default=CFG.FOLD_ACCENTS)
    g.add_argument("--punctuation", choices=list(CFG.PUNCTUATION_MODES), default=CFG.PUNCTUATION)
    g.add_argument("--include", default=CFG.INCLUSIONS, help="Extra word characters, e.g. '-_'")
    g.add_argument("--min-len", type=int, default=CFG.MIN_WORD_LEN, help="Skip shorter words")

    p.add_argument("-k", type=int, default=CFG.TOP_K, help="Max completions per query (0 = all)")
    p.add_argument("--q", action="append", default=[], help="Query to run once (repeatable)")
    p.add_argument("--repl", action="store_true", help="Interactive loop after loading")
    p.add_argument("--json", action="store_true", help="Emit JSON rows")
    p.add_argument("--stats", action="store_true", help="Print tree statistics after loading")
    p.add_argument("--verbose", action="store_true")
    return p

def main(argv: list[str] | None = None) -> int:
    p = build_parser()
    args = p.parse_args(argv)
    if not args.roots and not args.text:
        p.error("nothing to load: pass --roots and/or --text")

    try:
        policy = WordPolicy(
            separator=args.separator,
            case_fold=args.case_fold,
            fold_accents=args.fold_accents,
            punctuation=args.punctuation,
            inclusions=frozenset(args.include),
            min_word_len=args.min_len,
        )
    except ValueError as exc:
        p.error(str(exc))

    eng = Engine(policy)
    top_k = args.k if args.k > 0 else None
    try:
        if args.roots:
            try:
                eng.build(roots=args.roots, exts=args.ext, verbose=args.verbose)
            except FileNotFoundError as exc:
                p.error(f"root not found: {exc}")
        for text in args.text:
            eng.feed(text)

        if args.stats:
            st = eng.stats()
            if args.json:
                print(json.dumps(asdict(st)))
            else:
                ratio = (st.stored_chars / st.word_chars) if st.word_chars else 0.0
                print(f"words={st.words} nodes={st.nodes} stored_chars={st.stored_chars} "
                      f"word_chars={st.word_chars} ratio={ratio:.2f}")

        def run_query(q: str) -> None:
            rows = eng.complete(q, top_k=top_k)
            if args.json:
                print(json.dumps([asdict(r) for r in rows], ensure_ascii=False))
                return
            if not rows:
                print(_c("(no matches)", "2;37")); return
            for r in rows:
                print(f"{r.rank:<3} {r.completed_line}")

        for q in args.q:
            run_query(q)

        if args.repl:
            print("Type a prefix (empty line to exit).  ':add WORD' inserts a word, ':stats' shows the tree.")
            while True:
                try:
                    raw = input("> ")
                except (EOFError, KeyboardInterrupt):
                    print(); break
                if raw == "":
                    break
                if raw.startswith(":add "):
                    for word in raw[5:].split():
                        new = eng.add_word(word)
                        print(_c(f"({word}: {'added' if new else 'already known'})", "2;36"))
                    continue
                if raw.strip() == ":stats":
                    print(eng.stats()); continue
                run_query(raw)
        return 0
    finally:
        eng.shutdown()

if __name__ == "__main__":
    sys.exit(main())
