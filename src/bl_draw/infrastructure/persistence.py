"""DrawRepository: append-only draw storage (raw SQL, no ORM)."""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.bl_draw.domain.models import Draw

_INSERT_DRAW_SQL = text("""
    INSERT INTO draws (id, numbers, name, created_at)
    VALUES (:id, :numbers, :name, :created_at)
""")

_LIST_DRAWS_SQL = text("""
    SELECT id, numbers, name, created_at
    FROM draws
    ORDER BY created_at DESC, id DESC
""")

_DELETE_DRAW_SQL = text("DELETE FROM draws WHERE id = :draw_id RETURNING id")

_DELETE_ALL_DRAWS_SQL = text("DELETE FROM draws")


def _row_to_draw(row: object) -> Draw:
    return Draw(
        id=row.id,  # type: ignore[attr-defined]
        numbers=tuple(row.numbers),  # type: ignore[attr-defined]
        name=row.name,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
    )


class DrawRepository:
    async def insert(self, db: AsyncSession, draw: Draw) -> None:
        await db.execute(
            _INSERT_DRAW_SQL,
            {
                "id": draw.id,
                "numbers": list(draw.numbers),
                "name": draw.name,
                "created_at": draw.created_at,
            },
        )

    async def list_all(self, db: AsyncSession) -> list[Draw]:
        result = await db.execute(_LIST_DRAWS_SQL)
        return [_row_to_draw(row) for row in result.fetchall()]

    async def delete(self, db: AsyncSession, draw_id: str) -> bool:
        row = (await db.execute(_DELETE_DRAW_SQL, {"draw_id": draw_id})).fetchone()
        return row is not None

    async def delete_all(self, db: AsyncSession) -> int:
        result = await db.execute(_DELETE_ALL_DRAWS_SQL)
        return result.rowcount  # type: ignore[attr-defined]
