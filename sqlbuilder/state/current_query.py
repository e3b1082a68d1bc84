from typing import Callable, List


class CurrentQuery:
    """
    Текущий текст запроса — одно значение, несколько источников.
    Каждый источник перезаписывает текст целиком (кто последний — тот и прав).
    """

    def __init__(self, text: str = ""):
        self.text = text
        self.source = "initial"
        self._listeners: List[Callable[[str, str], None]] = []

    def subscribe(self, cb: Callable[[str, str], None]) -> None:
        self._listeners.append(cb)

    def _write(self, text: str, source: str) -> None:
        self.text = text
        self.source = source
        for cb in list(self._listeners):
            cb(text, source)

    # --- producers ---

    def from_builder(self, sql: str) -> None:
        self._write(sql, "builder")

    def from_draft(self, sql: str) -> None:
        self._write(sql, "draft")

    def from_template(self, template) -> None:
        self._write(template.query, "template")

    def from_saved(self, saved) -> None:
        self._write(saved.query, "saved")

    def set_text(self, text: str) -> None:
        """Ручная правка в редакторе."""
        self._write(text, "manual")
