"""PostgreSQL category repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from instruks.domain.entities import Category


class PostgresCategoryRepository:
    """Category repository implementation (read only)."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, category_id: UUID) -> Category | None:
        """Get category by id."""
        cur = await self._conn.execute(
            "SELECT id, name, parent_id FROM category WHERE id = %s",
            (category_id,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return Category(id=r[0], name=r[1], parent_id=r[2])

    async def list(self) -> list[Category]:
        """List all categories by name."""
        cur = await self._conn.execute(
            "SELECT id, name, parent_id FROM category ORDER BY name, id"
        )
        rows = await cur.fetchall()
        return [Category(id=r[0], name=r[1], parent_id=r[2]) for r in rows]
