"""Public ranking snapshot storage: one row, replaced whole on every write."""

import json

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.bl_ranking.domain.models import PublicRanking, PublicRankingEntry

_SNAPSHOT_ID = 1

_REPLACE_SNAPSHOT_SQL = text("""
    INSERT INTO public_ranking (id, ranking, last_updated)
    VALUES (:id, CAST(:ranking AS JSONB), :last_updated)
    ON CONFLICT (id) DO UPDATE
        SET ranking = EXCLUDED.ranking,
            last_updated = EXCLUDED.last_updated
""")

_GET_SNAPSHOT_SQL = text(
    "SELECT ranking, last_updated FROM public_ranking WHERE id = :id"
)


class PublicRankingStore:
    async def replace(self, db: AsyncSession, snapshot: PublicRanking) -> None:
        payload = [
            {"initials": e.initials, "matches": e.matches, "ticketId": e.ticket_id}
            for e in snapshot.ranking
        ]
        await db.execute(
            _REPLACE_SNAPSHOT_SQL,
            {
                "id": _SNAPSHOT_ID,
                "ranking": json.dumps(payload),
                "last_updated": snapshot.last_updated,
            },
        )

    async def get(self, db: AsyncSession) -> PublicRanking:
        row = (await db.execute(_GET_SNAPSHOT_SQL, {"id": _SNAPSHOT_ID})).fetchone()
        if row is None:
            return PublicRanking()
        entries = row.ranking
        if isinstance(entries, str):
            entries = json.loads(entries)
        return PublicRanking(
            ranking=[
                PublicRankingEntry(
                    initials=e["initials"], matches=e["matches"], ticket_id=e["ticketId"]
                )
                for e in entries
            ],
            last_updated=row.last_updated,
        )
