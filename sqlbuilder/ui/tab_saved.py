import tkinter as tk
from tkinter import ttk, messagebox
from typing import Callable

from sqlbuilder.repositories.query_repository import SavedQuery, SavedQueryRepository


class TabSaved(ttk.Frame):
    """
    Вкладка 3: сохранённые запросы
    - Load: в редактор конструктора
    - Run: выполнить
    - Delete
    """

    def __init__(
        self,
        parent: ttk.Notebook,
        query_repo: SavedQueryRepository,
        on_load: Callable[[SavedQuery], None],
        on_run: Callable[[str], None],
        on_changed: Callable[[], None],
    ):
        super().__init__(parent)
        self.query_repo = query_repo
        self.on_load = on_load
        self.on_run = on_run
        self.on_changed = on_changed
        self._saved_cache = []

        pan = ttk.Panedwindow(self, orient="horizontal")
        pan.pack(fill="both", expand=True, padx=10, pady=10)

        left = ttk.Labelframe(pan, text="Saved queries")
        pan.add(left, weight=1)
        self.list_saved = tk.Listbox(left, exportselection=False)
        self.list_saved.pack(fill="both", expand=True, padx=8, pady=8)
        self.list_saved.bind("<<ListboxSelect>>", lambda e: self._show_selected())

        btns = ttk.Frame(left)
        btns.pack(fill="x", padx=8, pady=(0, 8))
        ttk.Button(btns, text="Load", command=self._load_saved).pack(side="left")
        ttk.Button(btns, text="Run", command=self._run_saved).pack(side="left", padx=6)
        ttk.Button(btns, text="Delete", command=self._delete_saved).pack(side="left")

        right = ttk.Labelframe(pan, text="SQL")
        pan.add(right, weight=2)
        self.txt_sql = tk.Text(right, height=10, state="disabled")
        self.txt_sql.pack(fill="both", expand=True, padx=8, pady=8)

        self.refresh_list()

    # --- public ---

    def refresh_list(self):
        self._saved_cache = self.query_repo.list_saved()
        self.list_saved.delete(0, "end")
        for q in self._saved_cache:
            self.list_saved.insert("end", f"{q.name} • Saved {q.saved_date}")
        self._set_sql("")

    # --- private ---

    def _selected(self):
        sel = self.list_saved.curselection()
        return self._saved_cache[sel[0]] if sel else None

    def _set_sql(self, sql: str):
        self.txt_sql.configure(state="normal")
        self.txt_sql.delete("1.0", "end")
        self.txt_sql.insert("1.0", sql)
        self.txt_sql.configure(state="disabled")

    def _show_selected(self):
        q = self._selected()
        if q is not None:
            self._set_sql(q.query)

    def _load_saved(self):
        q = self._selected()
        if q is not None:
            self.on_load(q)

    def _run_saved(self):
        q = self._selected()
        if q is None:
            messagebox.showwarning("Run", "Select a saved query.")
            return
        self.on_run(q.query)

    def _delete_saved(self):
        q = self._selected()
        if q is None:
            return
        if messagebox.askyesno("Delete", f"Delete saved query '{q.name}'?"):
            self.query_repo.delete_saved_query(q.id)
            self.on_changed()
