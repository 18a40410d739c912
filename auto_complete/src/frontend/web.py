from __future__ import annotations
import argparse
from dataclasses import asdict
from flask import Flask, request, jsonify, Response
from completion.engine import Engine
from completion.config import TOP_K, PUNCTUATION_MODES
from completion.models import WordPolicy

app = Flask(__name__)
_engine: Engine | None = None

# ---------- API ----------
@app.get("/api/complete")
def api_complete():
    if _engine is None or _engine.tree is None:
        return jsonify({"error": "engine not loaded"}), 503
    q = request.args.get("q", "", type=str)
    k = request.args.get("k", TOP_K, type=int)
    if not q:
        return jsonify([])
    rows = _engine.complete(q, top_k=max(0, k))
    return jsonify([asdict(r) for r in rows])

@app.get("/api/health")
def api_health():
    if _engine is None or _engine.tree is None:
        return jsonify({"ok": False, "words": 0, "nodes": 0}), 503
    st = _engine.stats()
    return jsonify({"ok": True, "words": st.words, "nodes": st.nodes})

# ---------- UI ----------
@app.get("/")
def home():
    # A tiny page: minimal CSS + JS, no external deps.
    html = r"""
<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8" />
<meta name="viewport" content="width=device-width,initial-scale=1" />
<title>Autocomplete • Prefix tree</title>
<style>
:root{ --bg:#0b0f14; --panel:#0f141b; --ink:#cfd8e3; --muted:#8a94a6; --accent:#6ee7ff; --border:#1c2530; }
*{box-sizing:border-box}
body{ margin:0; background:var(--bg); color:var(--ink);
  font:16px/1.45 system-ui,-apple-system,Segoe UI,Roboto,Ubuntu,"Helvetica Neue",Arial; }
.container{ max-width:720px; margin:24px auto; padding:0 16px; }
.card{ background:var(--panel); border:1px solid var(--border); border-radius:16px; padding:18px; }
h1{ font-size:20px; margin:0 0 8px 0; }
input{ width:100%; padding:12px 14px; border-radius:12px; border:1px solid var(--border);
  background:#0b1117; color:var(--ink); outline:none; font-size:16px; }
input:focus{ border-color:var(--accent) }
.meta{ color:var(--muted); font-size:13px; margin-top:6px; }
ol{ margin:14px 0 0 0; padding-left:1.6rem }
li{ padding:4px 0; font-family: ui-monospace, SFMono-Regular, Menlo, Consolas, monospace }
.mark{ color:var(--accent) }
</style>
</head>
<body>
  <div class="container">
    <div class="card">
      <h1>Autocomplete</h1>
      <input id="q" type="text" placeholder="Type a prefix…" autocomplete="off" autofocus />
      <div id="stats" class="meta">Ready.</div>
      <ol id="out"></ol>
    </div>
  </div>
<script>
const q = document.querySelector("#q"), out = document.querySelector("#out"), stats = document.querySelector("#stats");
let t;
function esc(s){ return s.replace(/[&<>"]/g, c => ({"&":"&amp;","<":"&lt;",">":"&gt;",'"':"&quot;"}[c])); }
async function search(){
  const query = q.value;
  if(!query){ out.innerHTML = ""; stats.textContent = "Ready."; return; }
  try{
    const resp = await fetch(`/api/complete?q=${encodeURIComponent(query)}&k=20`);
    if(!resp.ok) throw new Error(`HTTP ${resp.status}`);
    const data = await resp.json();
    stats.textContent = `Results: ${data.length}`;
    out.innerHTML = data.map(r => {
      const head = r.completed_line.slice(0, r.completed_line.length - r.word.length);
      return `<li>${esc(head)}<span class="mark">${esc(r.word)}</span></li>`;
    }).join("");
  }catch(e){
    stats.textContent = `Error: ${e.message ?? e}`;
  }
}
q.addEventListener("input", () => { clearTimeout(t); t = setTimeout(search, 120); });
</script>
</body>
</html>
"""
    return Response(html, mimetype="text/html")

def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Run Flask UI on top of Engine")
    ap.add_argument("--roots", nargs="+", required=True)
    ap.add_argument("--ext", action="append", default=None)
    ap.add_argument("--separator", default=None, help="Word separator (default: whitespace)")
    ap.add_argument("--case-fold", action="store_true")
    ap.add_argument("--fold-accents", action="store_true")
    ap.add_argument("--punctuation", choices=list(PUNCTUATION_MODES), default="keep")
    ap.add_argument("--include", default="")
    ap.add_argument("--min-len", type=int, default=1)
    ap.add_argument("--host", default="127.0.0.1")
    ap.add_argument("--port", type=int, default=8000)
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args(argv)

    global _engine
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
        ap.error(str(exc))
    _engine = Engine(policy)
    _engine.build(roots=args.roots, exts=args.ext, verbose=args.verbose)

    try:
        app.run(host=args.host, port=args.port, debug=args.verbose)
    finally:
        _engine.shutdown()
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
