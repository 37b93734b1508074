"""Many-to-many link maintenance for junction tables.

Links are always replaced wholesale: the existing rows for the owner are
deleted and the provided set is inserted, inside the caller's session so the
change commits or rolls back with the rest of the write.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from sqlalchemy import Table, and_, delete, insert, select
from sqlalchemy.orm import Session

from ..db.models import Base
from ..errors import BadRequest


@dataclass(frozen=True)
class Association:
    """A junction-table relation owned by a catalog row.

    Attributes:
        field: Payload field carrying the list of linked ids
        table: Junction table
        owner_column: Junction column referencing the owner
        other_column: Junction column referencing the linked row
        other_model: ORM model of the linked rows
        label: Human readable name of the linked rows, for errors
    """

    field: str
    table: Table
    owner_column: str
    other_column: str
    other_model: type[Base]
    label: str


def _unique(ids: Iterable[str]) -> list[str]:
    """Drop duplicate ids while keeping first-seen order."""
    seen: dict[str, None] = {}
    for value in ids:
        seen.setdefault(str(value), None)
    return list(seen)


def check_in_series(
    session: Session, association: Association, ids: list[str], series_id: str
) -> None:
    """Ensure every id exists and belongs to ``series_id``.

    Raises:
        BadRequest: If any id is unknown or scoped to another series
    """
    if not ids:
        return

    model = association.other_model
    found = set(
        session.execute(
            select(model.id).where(model.id.in_(ids), model.series_id == series_id)
        ).scalars()
    )
    missing = [value for value in ids if value not in found]
    if missing:
        raise BadRequest(
            f"{association.label} not found in this series: {', '.join(missing)}"
        )


def replace_links(
    session: Session,
    association: Association,
    owner_id: str,
    ids: Optional[Iterable[str]],
    series_id: Optional[str] = None,
) -> list[str]:
    """Replace every link of ``owner_id`` with ``ids``.

    Args:
        session: Open session; the caller owns the transaction
        association: Relation to rewrite
        owner_id: Id of the owning row
        ids: New set of linked ids. An empty list clears all links.
        series_id: When given, every linked row must belong to this series

    Returns:
        The de-duplicated list of ids now linked
    """
    if ids is None:
        raise BadRequest(f"{association.field} must be a list")

    new_ids = _unique(ids)
    if series_id is not None:
        check_in_series(session, association, new_ids, series_id)

    table = association.table
    session.execute(delete(table).where(table.c[association.owner_column] == owner_id))
    if new_ids:
        session.execute(
            insert(table),
            [
                {association.owner_column: owner_id, association.other_column: other_id}
                for other_id in new_ids
            ],
        )
    return new_ids


def add_link(
    session: Session,
    association: Association,
    owner_id: str,
    other_id: str,
    series_id: Optional[str] = None,
) -> bool:
    """Link a single row. Returns False if the link already existed."""
    if series_id is not None:
        check_in_series(session, association, [other_id], series_id)

    table = association.table
    exists = session.execute(
        select(table).where(
            and_(
                table.c[association.owner_column] == owner_id,
                table.c[association.other_column] == other_id,
            )
        )
    ).first()
    if exists:
        return False

    session.execute(
        insert(table).values(
            {association.owner_column: owner_id, association.other_column: other_id}
        )
    )
    return True


def remove_link(
    session: Session, association: Association, owner_id: str, other_id: str
) -> bool:
    """Unlink a single row. Returns False if there was no such link."""
    table = association.table
    result = session.execute(
        delete(table).where(
            table.c[association.owner_column] == owner_id,
            table.c[association.other_column] == other_id,
        )
    )
    return result.rowcount > 0
