"""Helpers for mapping child entities onto ORM relationship collections."""

from collections.abc import Callable, Iterable
from typing import Any, TypeVar

TOrm = TypeVar("TOrm")


def sync_collection(
    current: Iterable[TOrm],
    entities: Iterable[Any],
    build: Callable[[Any], TOrm],
    update: Callable[[Any, TOrm], None],
) -> list[TOrm]:
    """
    Return the ORM rows for ``entities``.

    Rows are matched by id. Entities with the placeholder id 0 get a new row
    from ``build``; rows whose entity is gone are left out so that the
    delete-orphan cascade removes them once the list is assigned back.
    """
    by_id = {row.id: row for row in current}  # type: ignore[attr-defined]
    rows: list[TOrm] = []
    for entity in entities:
        row = by_id.get(entity.id.value) if entity.id.value else None
        if row is None:
            row = build(entity)
        update(entity, row)
        rows.append(row)
    return rows
