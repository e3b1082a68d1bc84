from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, List, Optional

OPERATORS = ["=", "!=", ">", "<", ">=", "<=", "LIKE"]
DIRECTIONS = ("ASC", "DESC")
LIMIT_PRESETS = ["10", "25", "50", "100"]


@dataclass
class Condition:
    field: str = ""
    operator: str = "="
    value: str = ""


def _non_blank(items: List[str]) -> List[str]:
    return [f for f in items if f and f.strip()]


def _literal(value: str) -> str:
    # значение с кавычкой уже считается литералом и идёт как есть (без экранирования)
    if "'" in value:
        return value
    return f"'{value}'"


def split_fields(raw: str) -> List[str]:
    """'a, b,, c' -> ['a', 'b', 'c'] (как поле ввода GROUP BY / ORDER BY)."""
    return [f.strip() for f in raw.split(",") if f.strip()]


def assemble(state: "QueryBuilderState") -> Optional[str]:
    """
    Собирает SELECT из состояния конструктора.
    Чистая функция; без таблицы возвращает None (текст не строится).
    """
    if not state.from_table:
        return None

    # SELECT
    cols = ", ".join(_non_blank(state.select_fields)) or "*"
    lines = [f"SELECT {cols}", f"FROM {state.from_table}"]

    # WHERE: только условия с полем и значением
    conds = [c for c in state.conditions if c.field and c.value]
    if conds:
        lines.append("WHERE " + " AND ".join(
            f"{c.field} {c.operator} {_literal(c.value)}" for c in conds
        ))

    group_by = _non_blank(state.group_by_fields)
    if group_by:
        lines.append("GROUP BY " + ", ".join(group_by))

    order_by = _non_blank(state.order_by_fields)
    if order_by:
        lines.append("ORDER BY " + ", ".join(order_by) + " " + state.order_direction)

    if state.limit:
        lines.append(f"LIMIT {state.limit}")

    return "\n".join(lines)


class QueryBuilderState:
    """
    Состояние конструктора запроса.
    Любой сеттер пересобирает SQL целиком и отдаёт его в on_change.
    """

    def __init__(self, on_change: Optional[Callable[[Optional[str]], None]] = None):
        self.select_fields: List[str] = ["*"]
        self.from_table = "customers"
        self.conditions: List[Condition] = []
        self.group_by_fields: List[str] = []
        self.order_by_fields: List[str] = []
        self.order_direction = "DESC"
        self.limit = "10"
        self.on_change = on_change

    def build_sql(self) -> Optional[str]:
        return assemble(self)

    def _changed(self) -> None:
        sql = self.build_sql()
        cb = self.on_change
        # без таблицы текст не строим и предыдущий не трогаем
        if callable(cb) and sql is not None:
            cb(sql)

    # --- FROM ---

    def set_table(self, table: str) -> None:
        self.from_table = (table or "").strip()
        self._changed()

    # --- SELECT ---

    def set_select_fields(self, fields: List[str]) -> None:
        self.select_fields = list(fields)
        self._changed()

    def add_select_field(self, name: str = "") -> None:
        self.select_fields.append(name)
        self._changed()

    def update_select_field(self, index: int, name: str) -> None:
        self.select_fields[index] = name
        self._changed()

    def remove_select_field(self, index: int) -> None:
        del self.select_fields[index]
        self._changed()

    # --- WHERE ---

    def add_condition(self, field: str = "", operator: str = "=", value: str = "") -> None:
        if operator not in OPERATORS:
            raise ValueError(f"Unsupported operator: {operator}")
        self.conditions.append(Condition(field, operator, value))
        self._changed()

    def update_condition(self, index: int, *, field: Optional[str] = None,
                         operator: Optional[str] = None, value: Optional[str] = None) -> None:
        cond = self.conditions[index]
        if field is not None:
            cond.field = field
        if operator is not None:
            if operator not in OPERATORS:
                raise ValueError(f"Unsupported operator: {operator}")
            cond.operator = operator
        if value is not None:
            cond.value = value
        self._changed()

    def remove_condition(self, index: int) -> None:
        del self.conditions[index]
        self._changed()

    def set_conditions(self, conditions: List[Condition]) -> None:
        for c in conditions:
            if c.operator not in OPERATORS:
                raise ValueError(f"Unsupported operator: {c.operator}")
        self.conditions = list(conditions)
        self._changed()

    # --- GROUP BY / ORDER BY / LIMIT ---

    def set_group_by(self, raw: str) -> None:
        self.group_by_fields = split_fields(raw)
        self._changed()

    def set_order_by(self, raw: str) -> None:
        self.order_by_fields = split_fields(raw)
        self._changed()

    def set_order_direction(self, direction: str) -> None:
        direction = (direction or "").upper()
        if direction not in DIRECTIONS:
            raise ValueError(f"Order direction must be ASC or DESC, got {direction!r}")
        self.order_direction = direction
        self._changed()

    def set_limit(self, limit: str) -> None:
        self.limit = (limit or "").strip()
        self._changed()
