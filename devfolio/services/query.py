"""Query helpers shared by the resource services: text search, tag matching, pagination."""

import json
import math
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from sqlalchemy import String, cast, or_
from sqlalchemy.orm import Query

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100


@dataclass
class Page:
    """One page of a filtered, sorted result set."""

    items: list[Any]
    total: int
    page: int
    limit: int

    @property
    def count(self) -> int:
        return len(self.items)

    @property
    def pages(self) -> int:
        return math.ceil(self.total / self.limit)


def paginate(query: Query, page: int = DEFAULT_PAGE, limit: int = DEFAULT_LIMIT) -> Page:
    """Apply offset/limit to an ordered query and count the full match set."""
    total = query.order_by(None).count()
    items = query.offset((page - 1) * limit).limit(limit).all()
    return Page(items=items, total=total, page=page, limit=limit)


def search_filter(term: str, *columns, json_columns: Iterable = ()):
    """Case-insensitive substring match across text columns and JSON string lists.

    `%` and `_` in the term match literally.
    """
    clauses = [column.icontains(term, autoescape=True) for column in columns]
    # JSON text holds the term in its escaped form
    encoded = json.dumps(term, ensure_ascii=False)[1:-1]
    clauses.extend(
        cast(column, String).icontains(encoded, autoescape=True) for column in json_columns
    )
    return or_(*clauses)


def contains_any(json_column, values: Iterable[str]):
    """Match rows whose JSON string list contains at least one of `values`."""
    text = cast(json_column, String)
    return or_(
        *(
            text.contains(json.dumps(value, ensure_ascii=False), autoescape=True)
            for value in values
        )
    )


def split_csv(raw: str | None) -> list[str]:
    """Parse a comma-separated query parameter."""
    if not raw:
        return []
    return [part.strip() for part in raw.split(",") if part.strip()]


def distinct_json_values(rows: Iterable[tuple[list | None]]) -> list[str]:
    """Flatten single-column rows of JSON lists into sorted unique values."""
    values: set[str] = set()
    for (items,) in rows:
        values.update(items or [])
    return sorted(values)
