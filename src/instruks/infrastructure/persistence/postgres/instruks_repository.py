"""PostgreSQL instruks repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from instruks.domain.entities import Instruks

_COLUMNS = (
    "id, document_id, version_number, is_latest, previous_version_id, "
    "title, description, content, category_id, created_at, updated_at"
)


def _row_to_instruks(r: tuple) -> Instruks:
    return Instruks(
        id=r[0],
        document_id=r[1],
        version_number=r[2],
        is_latest=r[3],
        previous_version_id=r[4],
        title=r[5],
        description=r[6],
        content=r[7],
        category_id=r[8],
        created_at=r[9],
        updated_at=r[10],
    )


class PostgresInstruksRepository:
    """Instruks repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, instruks_id: UUID, for_update: bool = False) -> Instruks | None:
        """Get version by id, optionally locking the row until commit."""
        lock = " FOR UPDATE" if for_update else ""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM instruks WHERE id = %s{lock}",
            (instruks_id,),
        )
        r = await cur.fetchone()
        return _row_to_instruks(r) if r else None

    async def get_latest_by_document_id(self, document_id: UUID) -> Instruks | None:
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM instruks WHERE document_id = %s AND is_latest",
            (document_id,),
        )
        r = await cur.fetchone()
        return _row_to_instruks(r) if r else None

    async def get_successor(self, instruks_id: UUID) -> Instruks | None:
        """Get the version whose previous_version_id points at instruks_id."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM instruks WHERE previous_version_id = %s FOR UPDATE",
            (instruks_id,),
        )
        r = await cur.fetchone()
        return _row_to_instruks(r) if r else None

    async def list_latest(self) -> list[Instruks]:
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM instruks WHERE is_latest ORDER BY title, id"
        )
        rows = await cur.fetchall()
        return [_row_to_instruks(r) for r in rows]

    async def list_latest_by_category(self, category_id: UUID) -> list[Instruks]:
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM instruks WHERE category_id = %s AND is_latest "
            "ORDER BY title, id",
            (category_id,),
        )
        rows = await cur.fetchall()
        return [_row_to_instruks(r) for r in rows]

    async def list_versions(self, document_id: UUID) -> list[Instruks]:
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM instruks WHERE document_id = %s ORDER BY version_number",
            (document_id,),
        )
        rows = await cur.fetchall()
        return [_row_to_instruks(r) for r in rows]

    async def create(self, instruks: Instruks) -> Instruks:
        """Insert version."""
        await self._conn.execute(
            f"INSERT INTO instruks ({_COLUMNS}) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)",
            (
                instruks.id,
                instruks.document_id,
                instruks.version_number,
                instruks.is_latest,
                instruks.previous_version_id,
                instruks.title,
                instruks.description,
                instruks.content,
                instruks.category_id,
                instruks.created_at,
                instruks.updated_at,
            ),
        )
        return instruks

    async def update(self, instruks: Instruks) -> None:
        """Write back mutable columns. document_id, version_number and created_at never change."""
        await self._conn.execute(
            """UPDATE instruks SET is_latest = %s, previous_version_id = %s, title = %s,
               description = %s, content = %s, category_id = %s, updated_at = %s
               WHERE id = %s""",
            (
                instruks.is_latest,
                instruks.previous_version_id,
                instruks.title,
                instruks.description,
                instruks.content,
                instruks.category_id,
                instruks.updated_at,
                instruks.id,
            ),
        )

    async def delete(self, instruks_id: UUID) -> None:
        await self._conn.execute("DELETE FROM instruks WHERE id = %s", (instruks_id,))
