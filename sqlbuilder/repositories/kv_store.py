from typing import Optional

from sqlalchemy import text
from sqlalchemy.engine import Engine


class KeyValueStore:
    """
    Простое строковое key-value хранилище поверх одной таблицы SQLite.
    Таблица создаётся при первом обращении.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        with self.engine.begin() as conn:
            conn.execute(text("""
                CREATE TABLE IF NOT EXISTS kv_store (
                    key   TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
            """))

    def get(self, key: str) -> Optional[str]:
        with self.engine.connect() as conn:
            row = conn.execute(
                text("SELECT value FROM kv_store WHERE key = :k"),
                {"k": key},
            ).fetchone()
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        with self.engine.begin() as conn:
            conn.execute(
                text("""
                    INSERT INTO kv_store (key, value)
                    VALUES (:k, :v)
                    ON CONFLICT (key) DO UPDATE SET value = excluded.value
                """),
                {"k": key, "v": value},
            )
