"""Unit -> department grouping used by the compliance registers."""
from __future__ import annotations

from typing import Iterable, TypeVar

T = TypeVar("T")


def group_by_unit(rows: Iterable[T]) -> dict[str, dict[str, list[T]]]:
    """Nest rows by ``unit_name`` then ``department_name``, keeping row order."""

    grouped: dict[str, dict[str, list[T]]] = {}
    for row in rows:
        unit = getattr(row, "unit_name", None) or "Unassigned"
        dept = getattr(row, "department_name", None) or "Unassigned"
        grouped.setdefault(unit, {}).setdefault(dept, []).append(row)
    return grouped


def flatten(grouped: dict[str, dict[str, list[T]]]) -> list[T]:
    return [row for depts in grouped.values() for rows in depts.values() for row in rows]
