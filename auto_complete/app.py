# app.py
# CustomTkinter GUI for the prefix-tree autocomplete (dark theme, ZIP-aware).
# - Load words from a folder OR a ZIP archive (ZIP extracted safely to a temp dir).
# - Background loading thread; the engine's GuardedTree keeps queries safe meanwhile.
# - Live completion with debounce; results & event log panes.

from __future__ import annotations
import os
import shutil
import threading
import zipfile
import tempfile
from typing import Optional

import tkinter.filedialog as fd
import tkinter.messagebox as mb
import customtkinter as ctk

from completion.engine import Engine
from completion.models import LoadReport, WordPolicy


# -------------------- small helpers --------------------

def shorten_path(p: str, max_chars: int = 60) -> str:
    """Shorten long paths neatly for labels."""
    if len(p) <= max_chars:
        return p
    keep = max_chars // 2 - 3
    return p[:keep] + "..." + p[-keep:]


def safe_extract_zip(zip_path: str, dest_dir: str) -> None:
    """
    Extract zip contents to dest_dir with basic zip-slip protection.
    Only ensures members stay within dest_dir (no absolute paths / .. traversal).
    """
    dest_abs = os.path.abspath(dest_dir)
    with zipfile.ZipFile(zip_path) as zf:
        for info in zf.infolist():
            target = os.path.abspath(os.path.join(dest_abs, info.filename))
            if target != dest_abs and not target.startswith(dest_abs + os.sep):
                raise RuntimeError(f"Unsafe zip entry: {info.filename!r}")
        zf.extractall(dest_abs)


# -------------------- main app --------------------

class AutocompleteApp(ctk.CTk):
    """Dark-themed GUI that loads words from a folder or ZIP and completes prefixes."""

    def __init__(self) -> None:
        super().__init__()

        ctk.set_appearance_mode("dark")
        ctk.set_default_color_theme("blue")

        self.title("Prefix Autocomplete")
        self.geometry("760x600")
        self.minsize(640, 480)

        # State
        self._engine = Engine()
        self._loading_thread: Optional[threading.Thread] = None
        self._search_after_id: Optional[str] = None
        self._tmpdir_path: Optional[str] = None  # holds extracted ZIP dir

        self.font_title = ctk.CTkFont(size=18, weight="bold")
        self.font_mono = ctk.CTkFont(family="Cascadia Mono, Menlo, Consolas, Courier New", size=13)

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(3, weight=1)  # results
        self.grid_rowconfigure(4, weight=1)  # log

        self._build_source_bar()
        self._build_options()
        self._build_search()
        self._build_results()
        self._build_log()

        self._set_status("Ready")
        self.protocol("WM_DELETE_WINDOW", self._on_close)

    # --------- UI sections ---------

    def _build_source_bar(self) -> None:
        bar = ctk.CTkFrame(self, corner_radius=10)
        bar.grid(row=0, column=0, sticky="ew", padx=12, pady=(12, 6))
        bar.grid_columnconfigure(3, weight=1)

        ctk.CTkLabel(bar, text="Prefix Autocomplete", font=self.font_title).grid(
            row=0, column=0, sticky="w", padx=12, pady=10
        )
        ctk.CTkButton(bar, text="Choose Folder", command=self._choose_folder).grid(row=0, column=1, padx=6)
        ctk.CTkButton(bar, text="Choose ZIP", command=self._choose_zip).grid(row=0, column=2, padx=6)

        self.lbl_status = ctk.CTkLabel(bar, text="Status: —", anchor="e")
        self.lbl_status.grid(row=0, column=3, sticky="e", padx=12, pady=10)

    def _build_options(self) -> None:
        box = ctk.CTkFrame(self, corner_radius=10)
        box.grid(row=1, column=0, sticky="ew", padx=12, pady=6)

        self.var_case = ctk.BooleanVar(value=True)
        self.var_accents = ctk.BooleanVar(value=False)
        self.var_punct = ctk.StringVar(value="strip")
        ctk.CTkCheckBox(box, text="Ignore case", variable=self.var_case).grid(row=0, column=0, padx=12, pady=8)
        ctk.CTkCheckBox(box, text="Ignore accents", variable=self.var_accents).grid(row=0, column=1, padx=12)
        ctk.CTkLabel(box, text="Punctuation:").grid(row=0, column=2, padx=(12, 4))
        ctk.CTkOptionMenu(box, variable=self.var_punct, values=["keep", "strip", "truncate"]).grid(
            row=0, column=3, padx=(0, 12)
        )

    def _build_search(self) -> None:
        self.entry_query = ctk.CTkEntry(self, placeholder_text="Start typing a prefix…")
        self.entry_query.grid(row=2, column=0, sticky="ew", padx=12, pady=6)
        self.entry_query.bind("<KeyRelease>", self._on_query_changed)

    def _build_results(self) -> None:
        self.txt_results = ctk.CTkTextbox(self, wrap="word", font=self.font_mono)
        self.txt_results.grid(row=3, column=0, sticky="nsew", padx=12, pady=6)
        self._set_results("(no results yet — load a folder or ZIP and start typing)")

    def _build_log(self) -> None:
        self.txt_log = ctk.CTkTextbox(self, height=110, wrap="word", font=ctk.CTkFont(size=12))
        self.txt_log.grid(row=4, column=0, sticky="nsew", padx=12, pady=(6, 12))
        self._log("GUI ready. Choose a folder or ZIP to begin.")

    # --------- source selection ---------

    def _choose_folder(self) -> None:
        path = fd.askdirectory(title="Choose corpus folder")
        if path:
            self._start_loading(mode="folder", source=path)

    def _choose_zip(self) -> None:
        path = fd.askopenfilename(
            title="Choose corpus ZIP",
            filetypes=[("ZIP archives", "*.zip"), ("All files", "*.*")]
        )
        if path:
            self._start_loading(mode="zip", source=path)

    # --------- loading pipeline (threaded) ---------

    def _current_policy(self) -> WordPolicy:
        return WordPolicy(
            case_fold=self.var_case.get(),
            fold_accents=self.var_accents.get(),
            punctuation=self.var_punct.get(),
        )

    def _start_loading(self, mode: str, source: str) -> None:
        if self._loading_thread and self._loading_thread.is_alive():
            mb.showinfo("Loading", "A corpus is already loading. Please wait.")
            return

        self._cleanup_tmpdir()
        tag = "ZIP" if mode == "zip" else "Folder"
        self._set_status(f"Loading {tag.lower()}: {shorten_path(source, 40)}")

        policy = self._current_policy()
        self._loading_thread = threading.Thread(
            target=self._load_worker, args=(mode, source, policy), daemon=True
        )
        self._loading_thread.start()

    def _load_worker(self, mode: str, source: str, policy: WordPolicy) -> None:
        try:
            root = source
            if mode == "zip":
                self.after(0, lambda: self._log(f"Extracting ZIP: {source}"))
                tmpdir = tempfile.mkdtemp(prefix="prefix_corpus_")
                try:
                    safe_extract_zip(source, tmpdir)
                except (OSError, RuntimeError, zipfile.BadZipFile):
                    shutil.rmtree(tmpdir, ignore_errors=True)
                    raise
                self._tmpdir_path = tmpdir
                root = tmpdir
            report = self._engine.build([root], policy=policy)
        except (OSError, RuntimeError, ValueError, zipfile.BadZipFile) as exc:
            self.after(0, lambda err=exc: self._on_load_error(err))
            return

        self.after(0, lambda: self._on_load_ok(report))

    def _on_load_ok(self, report: LoadReport) -> None:
        st = self._engine.stats()
        self._set_status(f"{st.words:,} words in {st.nodes:,} nodes")
        self._log(f"Loaded {report.files} files ({report.lines} lines, {report.words_added} words).")
        if report.skipped_files:
            self._log(f"Skipped {report.skipped_files} unreadable files.")
        self.entry_query.focus_set()
        self._do_search()

    def _on_load_error(self, exc: Exception) -> None:
        self._set_status("Error while loading corpus.")
        self._log(f"ERROR: {exc!r}")
        mb.showerror("Load error", "Failed to load corpus.\nSee event log for details.")

    # --------- search ---------

    def _on_query_changed(self, _ev=None) -> None:
        if self._search_after_id is not None:
            self.after_cancel(self._search_after_id)
        self._search_after_id = self.after(120, self._do_search)

    def _do_search(self) -> None:
        self._search_after_id = None
        q = self.entry_query.get()
        if not q.strip():
            self._set_results("")
            return
        if self._engine.tree is None:
            self._set_results("error: please load a corpus before searching.")
            return

        rows = self._engine.complete(q, top_k=50)
        if not rows:
            self._set_results("(no matches)")
            return
        self._set_results("\n".join(f"{r.rank:<3} {r.completed_line}" for r in rows))

    # --------- misc UI helpers ---------

    def _set_status(self, text: str) -> None:
        self.lbl_status.configure(text=f"Status: {text}")

    def _set_results(self, text: str) -> None:
        self.txt_results.configure(state="normal")
        self.txt_results.delete("0.0", "end")
        if text:
            self.txt_results.insert("end", text)
        self.txt_results.configure(state="disabled")

    def _log(self, msg: str) -> None:
        self.txt_log.insert("end", msg + "\n")
        self.txt_log.see("end")

    # --------- lifecycle ---------

    def _cleanup_tmpdir(self) -> None:
        if self._tmpdir_path and os.path.isdir(self._tmpdir_path):
            try:
                shutil.rmtree(self._tmpdir_path, ignore_errors=True)
            finally:
                self._tmpdir_path = None

    def _on_close(self) -> None:
        self._engine.shutdown()
        self._cleanup_tmpdir()
        self.destroy()


def main() -> None:
    app = AutocompleteApp()
    app.mainloop()


if __name__ == "__main__":
    main()
