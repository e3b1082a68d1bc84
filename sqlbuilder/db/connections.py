import logging
import time
from pathlib import Path
from typing import Dict, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from sqlbuilder.db.seed import SEED_STATEMENTS

log = logging.getLogger(__name__)

# демо-БД в памяти: одна на процесс
_demo_engine: Optional[Engine] = None
# кеш движков хранилища по пути файла
_store_engines: Dict[str, Engine] = {}


def get_engine() -> Engine:
    """
    Возвращает (или создаёт) движок демо-БД.
    sqlite:// + StaticPool: все соединения видят одну и ту же in-memory базу.
    При создании сразу заливается seed.
    """
    global _demo_engine
    if _demo_engine is not None:
        return _demo_engine

    t0 = time.perf_counter()
    engine = create_engine(
        "sqlite://",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    with engine.begin() as conn:
        for stmt in SEED_STATEMENTS:
            conn.execute(text(stmt))
    dt = (time.perf_counter() - t0) * 1000
    log.info("demo database ready (%.1f ms)", dt)
    _demo_engine = engine
    return engine


def reset_engine() -> None:
    """Сбросить демо-БД (следующий get_engine() пересоздаст её с нуля)."""
    global _demo_engine
    if _demo_engine is not None:
        _demo_engine.dispose()
    _demo_engine = None


def get_store_engine(path: Path) -> Engine:
    """
    Движок SQLite-файла для key-value хранилища.
    Каталог создаётся при необходимости.
    """
    key = str(path)
    if key in _store_engines:
        return _store_engines[key]

    path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_engine(f"sqlite:///{path}", echo=False)
    log.debug("store engine created for %s", path)
    _store_engines[key] = engine
    return engine


def test_connection(engine: Engine) -> bool:
    """
    Пинг: SELECT 1. Возвращает True/False.
    """
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        log.error("connection check failed: %s", e)
        return False
