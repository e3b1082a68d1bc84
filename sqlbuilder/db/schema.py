from __future__ import annotations
from typing import List, TypedDict


class TableInfo(TypedDict):
    name: str
    description: str
    columns: List[str]


# статический каталог демо-таблиц: для выбора таблицы в UI и для промпта AI
TABLES: List[TableInfo] = [
    {
        "name": "customers",
        "description": "Customer contacts and signup info",
        "columns": ["customer_id", "customer_name", "email", "signup_date", "last_purchase_date"],
    },
    {
        "name": "orders",
        "description": "Order history and revenue data",
        "columns": ["order_id", "customer_id", "order_total", "order_date"],
    },
    {
        "name": "email_campaigns",
        "description": "Email performance metrics",
        "columns": ["campaign_id", "campaign_name", "sent_date", "opened", "clicked"],
    },
    {
        "name": "leads",
        "description": "Lead sources and conversions",
        "columns": ["lead_id", "lead_source", "converted", "revenue"],
    },
]

# флаги 0/1 подсказываем модели отдельно
_COLUMN_HINTS = {
    "opened": "opened (0 or 1)",
    "clicked": "clicked (0 or 1)",
    "converted": "converted (0 or 1)",
}


def table_names() -> List[str]:
    return [t["name"] for t in TABLES]


def list_columns(table: str) -> List[str]:
    for t in TABLES:
        if t["name"] == table:
            return list(t["columns"])
    return []


def describe_for_prompt() -> str:
    """
    '- customers: customer_id, customer_name, ...' — по строке на таблицу.
    """
    lines = []
    for t in TABLES:
        cols = ", ".join(_COLUMN_HINTS.get(c, c) for c in t["columns"])
        lines.append(f"- {t['name']}: {cols}")
    return "\n".join(lines)
