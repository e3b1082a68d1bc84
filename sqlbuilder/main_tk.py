import logging
import tkinter as tk
from tkinter import ttk, messagebox

from sqlbuilder.core.config import Settings, get_settings
from sqlbuilder.core.exceptions import SQLBuilderError
from sqlbuilder.core.logger import setup_logging
from sqlbuilder.db.connections import get_engine, get_store_engine, test_connection
from sqlbuilder.repositories.kv_store import KeyValueStore
from sqlbuilder.repositories.query_repository import SavedQuery, SavedQueryRepository
from sqlbuilder.services.draft_service import DraftService
from sqlbuilder.services.export import export_query
from sqlbuilder.services.query_service import QueryService
from sqlbuilder.services.templates import TEMPLATES, QueryTemplate
from sqlbuilder.state.current_query import CurrentQuery
from sqlbuilder.state.query_builder_state import QueryBuilderState

# вкладки
from sqlbuilder.ui.results_view import ResultsView
from sqlbuilder.ui.tab_builder import TabBuilder
from sqlbuilder.ui.tab_saved import TabSaved
from sqlbuilder.ui.tab_templates import TabTemplates

log = logging.getLogger(__name__)


class App(tk.Tk):
    def __init__(self, settings: Settings, query_service: QueryService,
                 query_repo: SavedQueryRepository, draft_service: DraftService):
        super().__init__()
        self.title("SQL Query Builder")
        self.geometry("1100x800")

        # зависимости/сервисы
        self.settings = settings
        self.query_service = query_service
        self.query_repo = query_repo
        self.draft_service = draft_service

        # общий текст запроса: пишут конструктор, AI, шаблоны, сохранённые
        self.current = CurrentQuery()
        self.builder_state = QueryBuilderState(on_change=self.current.from_builder)
        self.current.from_builder(self.builder_state.build_sql())

        pan = ttk.Panedwindow(self, orient="vertical")
        pan.pack(fill="both", expand=True)

        self.nb = ttk.Notebook(pan)
        pan.add(self.nb, weight=3)

        self.results = ResultsView(pan)
        pan.add(self.results, weight=1)

        self.tab_templates = TabTemplates(
            parent=self.nb,
            templates=TEMPLATES,
            on_run=self.run_query,
            on_use=self._use_template,
        )
        self.nb.add(self.tab_templates, text="Templates")

        self.tab_builder = TabBuilder(
            parent=self.nb,
            state=self.builder_state,
            current=self.current,
            query_repo=self.query_repo,
            draft_service=self.draft_service,
            on_run=self.run_query,
            on_saved=self._on_saved_changed,
            on_export=self._export,
        )
        self.nb.add(self.tab_builder, text="Custom Query")

        self.tab_saved = TabSaved(
            parent=self.nb,
            query_repo=self.query_repo,
            on_load=self._use_saved,
            on_run=self.run_query,
            on_changed=self._on_saved_changed,
        )
        self.nb.add(self.tab_saved, text=self._saved_title())

    # --- callbacks wiring ---

    def run_query(self, sql: str):
        self.results.show(self.query_service.run(sql))

    def _use_template(self, template: QueryTemplate):
        self.current.from_template(template)
        self.nb.select(self.tab_builder)

    def _use_saved(self, saved: SavedQuery):
        self.current.from_saved(saved)
        self.nb.select(self.tab_builder)

    def _saved_title(self) -> str:
        n = len(self.query_repo.list_saved())
        return f"Saved Queries ({n})" if n else "Saved Queries"

    def _on_saved_changed(self):
        self.tab_saved.refresh_list()
        self.nb.tab(self.tab_saved, text=self._saved_title())

    def _export(self, sql: str):
        try:
            path = export_query(sql, self.settings.export_dir)
            messagebox.showinfo("Export", f"Query exported to {path}")
        except (SQLBuilderError, OSError) as e:
            messagebox.showerror("Export error", str(e))


def main():
    settings = get_settings()
    setup_logging(settings.log_level)

    engine = get_engine()
    if not test_connection(engine):
        raise RuntimeError("demo database is not available")

    store = KeyValueStore(get_store_engine(settings.store_path))
    query_repo = SavedQueryRepository(store)
    app = App(settings, QueryService(engine), query_repo, DraftService(settings))
    log.info("started with %d saved quer(ies)", len(query_repo.list_saved()))
    app.mainloop()


if __name__ == "__main__":
    main()
