import tkinter as tk
from tkinter import ttk


class ResultsView(ttk.Labelframe):
    """
    Область результатов: таблица либо текст ошибки (никогда оба сразу).
    """

    def __init__(self, parent):
        super().__init__(parent, text="Result")

        self.lbl_status = ttk.Label(self, text="Run a query to see results.")
        self.lbl_status.pack(fill="x", padx=8, pady=(6, 0))

        self.lbl_error = tk.Label(self, text="", fg="#b00020", anchor="w", justify="left")

        body = ttk.Frame(self)
        body.pack(fill="both", expand=True, padx=8, pady=8)
        self.tree = ttk.Treeview(body, show="headings", height=8)
        vsb = ttk.Scrollbar(body, orient="vertical", command=self.tree.yview)
        hsb = ttk.Scrollbar(body, orient="horizontal", command=self.tree.xview)
        self.tree.configure(yscrollcommand=vsb.set, xscrollcommand=hsb.set)
        vsb.pack(side="right", fill="y")
        hsb.pack(side="bottom", fill="x")
        self.tree.pack(side="left", fill="both", expand=True)

    def show(self, res: dict):
        """res — словарь из QueryService.run()."""
        if res.get("ok"):
            self._show_rows(res.get("columns", []), res.get("rows", []))
            self.lbl_status.configure(
                text=f"Rows: {len(res.get('rows', []))}, duration: {res.get('duration_ms', 0)} ms"
            )
        else:
            self._show_error(res.get("error") or "Unknown error")

    def _clear(self):
        self.tree.delete(*self.tree.get_children())
        self.tree["columns"] = []

    def _show_error(self, message: str):
        self._clear()
        self.lbl_status.configure(text="Query failed")
        self.lbl_error.configure(text=message)
        self.lbl_error.pack(fill="x", padx=8, after=self.lbl_status)

    def _show_rows(self, columns, rows):
        self.lbl_error.pack_forget()
        self._clear()
        self.tree["columns"] = columns or []
        for c in columns:
            self.tree.heading(c, text=c)
            self.tree.column(c, width=max(80, len(str(c)) * 8), stretch=True)
        for r in rows:
            self.tree.insert("", "end", values=["NULL" if v is None else v for v in r])
