# sqlbuilder/repositories/query_repository.py
import json
import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlbuilder.core.exceptions import ValidationError
from sqlbuilder.repositories.kv_store import KeyValueStore

log = logging.getLogger(__name__)

SAVED_QUERIES_KEY = "savedQueries"
CREDENTIAL_KEY = "claudeApiKey"


@dataclass(frozen=True)
class SavedQuery:
    id: int
    name: str
    query: str
    saved_at: str  # ISO-8601, UTC

    @property
    def saved_date(self) -> str:
        """'November 1, 2024' в локальной зоне; нераспознанная дата возвращается как есть."""
        try:
            d = datetime.fromisoformat(self.saved_at).astimezone()
        except ValueError:
            return self.saved_at
        return f"{d:%B} {d.day}, {d.year}"

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "query": self.query, "savedAt": self.saved_at}

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "SavedQuery":
        return cls(id=int(d["id"]), name=str(d["name"]), query=str(d["query"]), saved_at=str(d["savedAt"]))


class SavedQueryRepository:
    """
    Сохранённые запросы + API-ключ в key-value хранилище.
    Список читается один раз в конструкторе и после каждой мутации
    целиком перезаписывается в хранилище.
    """

    def __init__(self, store: KeyValueStore):
        self.store = store
        self._saved: List[SavedQuery] = self.load_saved_queries()
        self._credential: Optional[str] = self.load_credential()

    # ---------- saved queries ----------

    def load_saved_queries(self) -> List[SavedQuery]:
        """
        Нет ключа -> [].
        Битые данные -> [] + warning; сами байты в хранилище не трогаем,
        они перезапишутся только при следующем save/delete.
        """
        raw = self.store.get(SAVED_QUERIES_KEY)
        if raw is None:
            return []
        try:
            data = json.loads(raw)
            if not isinstance(data, list):
                raise ValueError(f"expected a list, got {type(data).__name__}")
            return [SavedQuery.from_dict(d) for d in data]
        except (ValueError, KeyError, TypeError) as e:
            log.warning("stored saved queries are unreadable, starting empty: %s", e)
            return []

    def list_saved(self) -> List[SavedQuery]:
        return list(self._saved)

    def save_query(self, name: str, sql_text: str) -> SavedQuery:
        if not name or not name.strip():
            raise ValidationError("Query name is empty")
        if not sql_text or not sql_text.strip():
            raise ValidationError("Query text is empty")

        entry = SavedQuery(
            id=self._next_id(),
            name=name,
            query=sql_text,
            saved_at=datetime.now(timezone.utc).isoformat(),
        )
        self._saved.append(entry)
        self._persist()
        log.info("saved query %r (id=%s)", name, entry.id)
        return entry

    def delete_saved_query(self, saved_id: int) -> None:
        before = len(self._saved)
        self._saved = [q for q in self._saved if q.id != saved_id]
        self._persist()
        if len(self._saved) != before:
            log.info("deleted saved query id=%s", saved_id)

    def _next_id(self) -> int:
        # id = epoch ms; при совпадении (два сохранения за 1 ms) сдвигаем вперёд
        new_id = int(time.time() * 1000)
        if self._saved:
            new_id = max(new_id, max(q.id for q in self._saved) + 1)
        return new_id

    def _persist(self) -> None:
        self.store.set(SAVED_QUERIES_KEY, json.dumps([q.to_dict() for q in self._saved]))

    # ---------- credential ----------

    def load_credential(self) -> Optional[str]:
        return self.store.get(CREDENTIAL_KEY)

    def save_credential(self, value: str) -> None:
        self.store.set(CREDENTIAL_KEY, value)
        self._credential = value
        log.info("API key updated")

    @property
    def credential(self) -> Optional[str]:
        return self._credential
