from pathlib import Path
import pytest
from completion.engine import Engine

def _seed(tmp: Path) -> str:
    root = tmp / "Archive"; root.mkdir()
    (root / "short.txt").write_text("a line with a lone a\n", encoding="utf-8")
    return str(root)

@pytest.mark.e2e
def test_empty_and_single_char_query(tmp_path: Path):
    roots = _seed(tmp_path)
    eng = Engine()
    try:
        eng.build(roots=[roots])
        assert eng.complete("", top_k=5) == []
        assert eng.complete("   ", top_k=5) == []
        single = [r.word for r in eng.complete("a", top_k=5)]
        assert single == ["a"]
        assert [r.word for r in eng.complete("l", top_k=5)] == ["line", "lone"]
        assert eng.complete("q", top_k=5) == []
    finally:
        eng.shutdown()
