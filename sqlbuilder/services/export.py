import logging
import time
from pathlib import Path

from sqlbuilder.core.exceptions import ValidationError

log = logging.getLogger(__name__)


def export_query(sql_text: str, directory: Path) -> Path:
    """
    Пишет текст запроса как есть в <directory>/query_<epoch-ms>.sql.
    """
    if not sql_text or not sql_text.strip():
        raise ValidationError("Nothing to export")
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"query_{int(time.time() * 1000)}.sql"
    path.write_text(sql_text, encoding="utf-8")
    log.info("query exported to %s", path)
    return path
