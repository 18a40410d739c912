from pathlib import Path
import pytest
from completion import config as CFG
from completion.engine import Engine

def _seed(tmp: Path) -> str:
    root = tmp / "Archive"; root.mkdir()
    words = " ".join(f"term{i:02d}" for i in range(30))
    (root / "t.txt").write_text(words + "\n" + words + "\n", encoding="utf-8")
    return str(root)

@pytest.mark.e2e
def test_topk_limit_and_result_types(tmp_path: Path):
    roots = _seed(tmp_path)
    eng = Engine()
    try:
        eng.build(roots=[roots])
        rows = eng.complete("term", top_k=2)
        assert [r.word for r in rows] == ["term00", "term01"]

        r = rows[0]
        assert isinstance(r.word, str) and r.word
        assert isinstance(r.completed_line, str)
        assert isinstance(r.rank, int) and r.rank == 1

        assert len(eng.complete("term")) == CFG.TOP_K
        assert len(eng.complete("term", top_k=None)) == 30
        assert eng.complete("term", top_k=0) == []
        assert eng.stats().words == 30
    finally:
        eng.shutdown()

def test_complete_splits_with_the_answering_tree_policy():
    from completion.tree import PrefixTree
    eng = Engine()
    try:
        eng.feed("unused")
        piped = PrefixTree(separator="|")
        piped.insert("batman|batcave|robin")
        eng.tree.swap(piped)
        assert eng.policy.separator is None

        rows = eng.complete("x|bat")
        assert [(r.word, r.completed_line) for r in rows] == [
            ("batcave", "x|batcave"),
            ("batman", "x|batman"),
        ]
        assert eng.complete("to the|ro")[0].word == "robin"
        assert eng.complete("to the|ro")[0].completed_line == "to the|robin"
    finally:
        eng.shutdown()
