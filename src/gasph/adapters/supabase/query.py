"""PostgREST query builder."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


def _format_value(value: Any) -> str:
    """Render a filter value the way PostgREST expects it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    return str(value)


def _quote_list_item(value: Any) -> str:
    """Quote list members that contain PostgREST reserved characters."""
    text = _format_value(value)
    if any(ch in text for ch in ',()" '):
        escaped = text.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    return text


@dataclass
class Query:
    """Fluent builder for a PostgREST table read.

    Filters on the same column may be repeated (e.g. a gte and an lte on
    latitude), so parameters are kept as an ordered list of pairs.
    """

    table: str
    columns: str = "*"
    filters: list[tuple[str, str]] = field(default_factory=list)
    order_by: list[str] = field(default_factory=list)
    row_limit: int | None = None

    def eq(self, column: str, value: Any) -> Query:
        self.filters.append((column, f"eq.{_format_value(value)}"))
        return self

    def neq(self, column: str, value: Any) -> Query:
        self.filters.append((column, f"neq.{_format_value(value)}"))
        return self

    def gte(self, column: str, value: Any) -> Query:
        self.filters.append((column, f"gte.{_format_value(value)}"))
        return self

    def lte(self, column: str, value: Any) -> Query:
        self.filters.append((column, f"lte.{_format_value(value)}"))
        return self

    def in_(self, column: str, values: list[Any]) -> Query:
        items = ",".join(_quote_list_item(v) for v in values)
        self.filters.append((column, f"in.({items})"))
        return self

    def order(self, column: str, ascending: bool = True) -> Query:
        self.order_by.append(f"{column}.{'asc' if ascending else 'desc'}")
        return self

    def limit(self, count: int) -> Query:
        self.row_limit = count
        return self

    def to_params(self) -> list[tuple[str, str]]:
        """Render the query as URL parameters."""
        params: list[tuple[str, str]] = [("select", self.columns)]
        params.extend(self.filters)
        if self.order_by:
            params.append(("order", ",".join(self.order_by)))
        if self.row_limit is not None:
            params.append(("limit", str(self.row_limit)))
        return params

    def filter_params(self) -> list[tuple[str, str]]:
        """Only the row filters, as used by update and delete."""
        return list(self.filters)
