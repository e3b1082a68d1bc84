import tkinter as tk
from tkinter import ttk
from typing import Callable, List

from sqlbuilder.services.templates import QueryTemplate


class TabTemplates(ttk.Frame):
    """
    Вкладка 1: готовые маркетинговые запросы
    - Run: выполнить сразу
    - Use: загрузить в редактор конструктора
    """

    def __init__(
        self,
        parent: ttk.Notebook,
        templates: List[QueryTemplate],
        on_run: Callable[[str], None],
        on_use: Callable[[QueryTemplate], None],
    ):
        super().__init__(parent)
        self.templates = templates
        self.on_run = on_run
        self.on_use = on_use

        ttk.Label(self, text="Common marketing queries ready to run").pack(anchor="w", padx=10, pady=(10, 0))

        pan = ttk.Panedwindow(self, orient="horizontal")
        pan.pack(fill="both", expand=True, padx=10, pady=10)

        left = ttk.Frame(pan)
        pan.add(left, weight=1)
        self.lst = tk.Listbox(left, exportselection=False)
        self.lst.pack(fill="both", expand=True)
        for t in self.templates:
            self.lst.insert("end", f"[{t.category}] {t.name}")
        self.lst.bind("<<ListboxSelect>>", lambda e: self._show_selected())

        right = ttk.Frame(pan)
        pan.add(right, weight=2)
        self.lbl_desc = ttk.Label(right, text="", wraplength=420)
        self.lbl_desc.pack(fill="x", pady=(0, 6))
        self.txt_sql = tk.Text(right, height=10, state="disabled")
        self.txt_sql.pack(fill="both", expand=True)

        btns = ttk.Frame(right)
        btns.pack(fill="x", pady=(6, 0))
        ttk.Button(btns, text="Run", command=self._run_selected).pack(side="left")
        ttk.Button(btns, text="Use in builder", command=self._use_selected).pack(side="left", padx=6)

    def _selected(self):
        sel = self.lst.curselection()
        return self.templates[sel[0]] if sel else None

    def _show_selected(self):
        t = self._selected()
        if t is None:
            return
        self.lbl_desc.configure(text=t.description)
        self.txt_sql.configure(state="normal")
        self.txt_sql.delete("1.0", "end")
        self.txt_sql.insert("1.0", t.query)
        self.txt_sql.configure(state="disabled")

    def _run_selected(self):
        t = self._selected()
        if t is not None:
            self.on_run(t.query)

    def _use_selected(self):
        t = self._selected()
        if t is not None:
            self.on_use(t)
