import logging
import sqlite3
import time
from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

from sqlalchemy.engine import Engine

from sqlbuilder.db.connections import get_engine

log = logging.getLogger(__name__)


def split_statements(sql: str) -> List[str]:
    """
    Режет текст на отдельные statement'ы по ';'.
    ';' внутри строк и комментариев не режет (проверка через sqlite3.complete_statement).
    """
    stmts, buf = [], ""
    for part in sql.split(";"):
        buf += part
        if sqlite3.complete_statement(buf + ";"):
            if buf.strip():
                stmts.append(buf.strip())
            buf = ""
        else:
            buf += ";"
    if buf.strip():
        stmts.append(buf.strip())
    return stmts


@dataclass
class QueryResult:
    columns: List[str] = field(default_factory=list)
    rows: List[Tuple[Any, ...]] = field(default_factory=list)


class QueryService:
    """
    Выполняет SQL в демо-БД.
    last_result и last_error взаимоисключающие: после каждого run заполнено ровно одно.
    """

    def __init__(self, engine: Optional[Engine] = None):
        self.engine = engine or get_engine()
        self.last_result: Optional[QueryResult] = None
        self.last_error: Optional[str] = None

    def run(self, sql: str):
        if not sql or not sql.strip():
            self.last_result, self.last_error = None, "Nothing to run"
            return {"ok": False, "rows": [], "columns": [], "duration_ms": 0, "error": self.last_error}

        t0 = time.perf_counter()
        ok, rows, cols, err = True, [], [], None
        try:
            with self.engine.begin() as conn:
                # все statement'ы в одной транзакции; показываем первый набор строк
                got_rows = False
                for stmt in split_statements(sql):
                    # сырой SQL в драйвер: ":name" внутри литералов не считается bind-параметром
                    res = conn.exec_driver_sql(stmt)
                    if res.returns_rows and not got_rows:
                        cols = list(res.keys())
                        rows = [tuple(r) for r in res]
                        got_rows = True
                    else:
                        res.close()
        except Exception as e:
            ok, err = False, self._message(e)
        dt = round((time.perf_counter() - t0) * 1000)

        if ok:
            self.last_result, self.last_error = QueryResult(cols, rows), None
            log.info("query ok: %d row(s) in %d ms", len(rows), dt)
        else:
            self.last_result, self.last_error = None, err
            log.warning("query failed in %d ms: %s", dt, err)

        return {"ok": ok, "rows": rows, "columns": cols, "duration_ms": dt, "error": err}

    @staticmethod
    def _message(exc: Exception) -> str:
        # у DBAPIError текст драйвера лежит в .orig, без SQL и ссылки на доку
        orig = getattr(exc, "orig", None)
        return str(orig) if orig is not None else str(exc)
