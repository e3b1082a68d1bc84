import queue
import threading
import asyncio
import tkinter as tk
from tkinter import ttk, messagebox, simpledialog
from typing import Callable

from sqlbuilder.core.exceptions import MissingCredentialError, SQLBuilderError
from sqlbuilder.db.schema import list_columns, table_names
from sqlbuilder.repositories.query_repository import SavedQueryRepository
from sqlbuilder.services.draft_service import DraftService
from sqlbuilder.state.current_query import CurrentQuery
from sqlbuilder.state.query_builder_state import (
    Condition,
    LIMIT_PRESETS,
    OPERATORS,
    QueryBuilderState,
)


class TabBuilder(ttk.Frame):
    """
    Вкладка 2: Конструктор SELECT
    - таблица, поля SELECT, WHERE (AND-only), GROUP BY, ORDER BY, LIMIT
    - редактируемое превью SQL (общий CurrentQuery)
    - Run / Save / Export / Copy
    - AI: черновик запроса по описанию
    """

    def __init__(
        self,
        parent: ttk.Notebook,
        state: QueryBuilderState,
        current: CurrentQuery,
        query_repo: SavedQueryRepository,
        draft_service: DraftService,
        on_run: Callable[[str], None],
        on_saved: Callable[[], None],
        on_export: Callable[[str], None],
    ):
        super().__init__(parent)
        self.builder = state
        self.current = current
        self.query_repo = query_repo
        self.draft_service = draft_service
        self.on_run = on_run
        self.on_saved = on_saved
        self.on_export = on_export
        self._draft_results: "queue.Queue" = queue.Queue()
        # ставится синхронно в _generate, снимается в _poll_draft
        self._generating = False

        self._build_ai_panel()

        # верхняя панель
        top = ttk.Frame(self)
        top.pack(fill="x", padx=10, pady=8)

        ttk.Label(top, text="Table:").pack(side="left")
        self.cmb_table = ttk.Combobox(top, values=table_names(), state="readonly", width=20)
        self.cmb_table.set(self.builder.from_table)
        self.cmb_table.pack(side="left", padx=6)
        self.cmb_table.bind("<<ComboboxSelected>>", self._on_table_change)

        ttk.Label(top, text="Limit:").pack(side="left", padx=(16, 0))
        self.var_limit = tk.StringVar(value=self.builder.limit)
        cmb_limit = ttk.Combobox(top, values=LIMIT_PRESETS, textvariable=self.var_limit, width=6)
        cmb_limit.pack(side="left", padx=6)
        self.var_limit.trace_add("write", lambda *_: self.builder.set_limit(self.var_limit.get()))

        ttk.Label(top, text="Order:").pack(side="left", padx=(16, 0))
        self.var_dir = tk.StringVar(value=self.builder.order_direction)
        for d in ("DESC", "ASC"):
            ttk.Radiobutton(
                top, text=d, value=d, variable=self.var_dir,
                command=lambda: self.builder.set_order_direction(self.var_dir.get()),
            ).pack(side="left", padx=2)

        mid = ttk.Panedwindow(self, orient="horizontal")
        mid.pack(fill="both", expand=True, padx=10, pady=4)

        # SELECT
        left = ttk.Labelframe(mid, text="SELECT fields")
        mid.add(left, weight=1)
        self.select_rows = ttk.Frame(left)
        self.select_rows.pack(fill="both", expand=True, padx=8, pady=8)
        ttk.Button(left, text="+ Add field", command=lambda: self._add_select_row("")).pack(
            anchor="w", padx=8, pady=(0, 8))
        for f in self.builder.select_fields:
            self._add_select_row(f, notify=False)

        # WHERE
        right = ttk.Labelframe(mid, text="WHERE (AND)")
        mid.add(right, weight=2)
        self.where_rows = ttk.Frame(right)
        self.where_rows.pack(fill="both", expand=True, padx=8, pady=8)
        ttk.Button(right, text="+ Add condition", command=self._add_where_row).pack(
            anchor="w", padx=8, pady=(0, 8))

        # GROUP BY / ORDER BY — через запятую
        grp = ttk.Frame(self)
        grp.pack(fill="x", padx=10, pady=4)
        ttk.Label(grp, text="GROUP BY:").pack(side="left")
        self.var_group = tk.StringVar()
        ttk.Entry(grp, textvariable=self.var_group, width=30).pack(side="left", padx=6)
        self.var_group.trace_add("write", lambda *_: self.builder.set_group_by(self.var_group.get()))
        ttk.Label(grp, text="ORDER BY:").pack(side="left", padx=(16, 0))
        self.var_order = tk.StringVar()
        ttk.Entry(grp, textvariable=self.var_order, width=30).pack(side="left", padx=6)
        self.var_order.trace_add("write", lambda *_: self.builder.set_order_by(self.var_order.get()))

        # SQL превью (можно править руками)
        self.txt_preview = tk.Text(self, height=7)
        self.txt_preview.pack(fill="both", expand=True, padx=10, pady=4)
        self.txt_preview.bind("<KeyRelease>", self._on_preview_edited)
        self.current.subscribe(self._on_current_changed)
        self._set_preview(self.current.text)

        btns = ttk.Frame(self)
        btns.pack(fill="x", padx=10, pady=(0, 10))
        ttk.Button(btns, text="Run", command=lambda: self.on_run(self.current.text)).pack(side="left")
        ttk.Button(btns, text="Save", command=self._save_query).pack(side="left", padx=6)
        ttk.Button(btns, text="Export", command=lambda: self.on_export(self.current.text)).pack(side="left")
        ttk.Button(btns, text="Copy", command=self._copy_query).pack(side="left", padx=6)

    # --- AI panel ---

    def _build_ai_panel(self):
        ai = ttk.Labelframe(self, text="Generate with AI")
        ai.pack(fill="x", padx=10, pady=(10, 0))

        row = ttk.Frame(ai)
        row.pack(fill="x", padx=8, pady=6)
        self.var_prompt = tk.StringVar()
        ent = ttk.Entry(row, textvariable=self.var_prompt)
        ent.pack(side="left", fill="x", expand=True)
        ent.bind("<Return>", lambda e: self._generate())
        self.btn_generate = ttk.Button(row, text="Generate", command=self._generate)
        self.btn_generate.pack(side="left", padx=6)
        ttk.Button(row, text="API key", command=self._toggle_key_row).pack(side="left")

        # ключ: скрыт, пока не нужен
        self.key_row = ttk.Frame(ai)
        self.var_key = tk.StringVar(value=self.query_repo.credential or "")
        ttk.Label(self.key_row, text="Claude API key:").pack(side="left")
        ttk.Entry(self.key_row, textvariable=self.var_key, show="*", width=40).pack(side="left", padx=6)
        ttk.Button(self.key_row, text="Save key", command=self._save_key).pack(side="left")

        self.err_row = ttk.Frame(ai)
        self.lbl_ai_error = tk.Label(self.err_row, text="", fg="#b00020", anchor="w")
        self.lbl_ai_error.pack(side="left", fill="x", expand=True)
        ttk.Button(self.err_row, text="×", width=3, command=self._clear_ai_error).pack(side="right")

    def _toggle_key_row(self, show: bool = None):
        visible = bool(self.key_row.winfo_manager())
        if show is None:
            show = not visible
        if show and not visible:
            self.key_row.pack(fill="x", padx=8, pady=(0, 6))
        elif not show and visible:
            self.key_row.pack_forget()

    def _save_key(self):
        self.query_repo.save_credential(self.var_key.get())
        self._toggle_key_row(False)

    def _show_ai_error(self, message: str):
        self.lbl_ai_error.configure(text=message)
        self.err_row.pack(fill="x", padx=8, pady=(0, 6))

    def _clear_ai_error(self):
        self.lbl_ai_error.configure(text="")
        self.err_row.pack_forget()

    def _generate(self):
        if self._generating:
            return
        self._generating = True
        prompt = self.var_prompt.get()
        credential = self.query_repo.credential
        self._clear_ai_error()
        self.btn_generate.configure(state="disabled", text="Generating...")

        def worker():
            try:
                sql = asyncio.run(self.draft_service.request_draft(prompt, credential))
                self._draft_results.put((True, sql))
            except Exception as e:
                self._draft_results.put((False, e))

        threading.Thread(target=worker, daemon=True).start()
        self.after(100, self._poll_draft)

    def _poll_draft(self):
        # tk трогаем только из главного потока: результат забираем из очереди
        try:
            ok, payload = self._draft_results.get_nowait()
        except queue.Empty:
            self.after(100, self._poll_draft)
            return

        self._generating = False
        self.btn_generate.configure(state="normal", text="Generate")
        if ok:
            self.current.from_draft(payload)
            self.var_prompt.set("")
            return
        if isinstance(payload, MissingCredentialError):
            self._toggle_key_row(True)
        self._show_ai_error(str(payload) or "Failed to generate query. Please check your API key and try again.")

    # --- builder rows ---

    def _on_table_change(self, _evt=None):
        self.builder.set_table(self.cmb_table.get())
        cols = list_columns(self.builder.from_table)
        for row in self.where_rows.winfo_children():
            row.winfo_children()[0]["values"] = cols

    def _add_select_row(self, value: str, notify: bool = True):
        row = ttk.Frame(self.select_rows)
        row.pack(fill="x", pady=2)
        var = tk.StringVar(value=value)
        ttk.Entry(row, textvariable=var, width=24).pack(side="left")

        def remove_row():
            idx = self._select_index(row)
            row.destroy()
            self.builder.remove_select_field(idx)
        ttk.Button(row, text="×", width=3, command=remove_row).pack(side="left", padx=4)

        var.trace_add("write", lambda *_: self.builder.update_select_field(self._select_index(row), var.get()))
        # начальные строки уже лежат в state.select_fields
        if notify:
            self.builder.add_select_field(value)

    def _select_index(self, row) -> int:
        return self.select_rows.winfo_children().index(row)

    def _add_where_row(self):
        row = ttk.Frame(self.where_rows)
        row.pack(fill="x", pady=2)

        cmb_col = ttk.Combobox(row, values=list_columns(self.builder.from_table), width=18)
        cmb_col.pack(side="left")
        cmb_op = ttk.Combobox(row, values=OPERATORS, state="readonly", width=6)
        cmb_op.set("=")
        cmb_op.pack(side="left", padx=4)
        ent_val = ttk.Entry(row, width=22)
        ent_val.pack(side="left", padx=4)

        def remove_row():
            row.destroy()
            self._collect_where()
        ttk.Button(row, text="×", width=3, command=remove_row).pack(side="left", padx=4)

        cmb_col.bind("<<ComboboxSelected>>", lambda e: self._collect_where())
        cmb_col.bind("<KeyRelease>", lambda e: self._collect_where())
        cmb_op.bind("<<ComboboxSelected>>", lambda e: self._collect_where())
        ent_val.bind("<KeyRelease>", lambda e: self._collect_where())
        self._collect_where()

    def _collect_where(self):
        conds = []
        for row in self.where_rows.winfo_children():
            cmb_col, cmb_op, ent_val = row.winfo_children()[:3]
            conds.append(Condition(cmb_col.get().strip(), cmb_op.get() or "=", ent_val.get()))
        self.builder.set_conditions(conds)

    # --- preview ---

    def _set_preview(self, sql: str):
        self.txt_preview.delete("1.0", "end")
        self.txt_preview.insert("1.0", sql)

    def _on_current_changed(self, sql: str, source: str):
        if source != "manual":
            self._set_preview(sql)

    def _on_preview_edited(self, _evt=None):
        self.current.set_text(self.txt_preview.get("1.0", "end-1c"))

    def _copy_query(self):
        self.clipboard_clear()
        self.clipboard_append(self.current.text)

    def _save_query(self):
        if not self.current.text.strip():
            messagebox.showwarning("Save query", "Build or generate a query first.")
            return
        name = simpledialog.askstring("Save query", "Query name:")
        if not name:
            return
        try:
            entry = self.query_repo.save_query(name, self.current.text)
            if self.on_saved:
                self.on_saved()
            messagebox.showinfo("Saved", f"Query saved successfully! ('{entry.name}')")
        except SQLBuilderError as e:
            messagebox.showerror("Save error", str(e))
