"""Post Repository — SQLAlchemy implementation of the PostRepository protocol.

Invariants:
    - Every write commits or rolls back before returning (one record, all-or-nothing)
    - Unique violations raise UniqueViolation; every other SQLAlchemy error raises StoreFailure
    - Rows leave this module as core.post.Post snapshots with timezone-aware timestamps
    - update_fields/delete report "no row matched" from rowcount, not from absence of errors

Design Decisions:
    - Unique violation recognised from the driver's structured signal
      (SQLSTATE 23505 on PostgreSQL, SQLITE_CONSTRAINT_UNIQUE on SQLite);
      the error text check only covers SQLite builds without sqlite_errorname
    - list_window orders by created_at, id: stable pages across requests
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain_types import PostId, UserId
from app.core.post import Post
from app.core.repository_protocols import StoreFailure, UniqueViolation
from app.models.post import Post as PostModel

logger = logging.getLogger(__name__)

_UNIQUE_SQLSTATE = "23505"


def is_unique_violation(exc: IntegrityError) -> bool:
    """True when the IntegrityError comes from a unique constraint."""
    orig = exc.orig
    if getattr(orig, "sqlstate", None) == _UNIQUE_SQLSTATE:
        return True
    if getattr(orig, "pgcode", None) == _UNIQUE_SQLSTATE:
        return True
    if getattr(orig, "sqlite_errorname", None) == "SQLITE_CONSTRAINT_UNIQUE":
        return True
    return "UNIQUE constraint failed" in str(orig)


def _as_utc(value: datetime) -> datetime:
    # SQLite drops tzinfo on round trip
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class SqlAlchemyPostRepository:
    """Post persistence over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    @asynccontextmanager
    async def _write(self, operation: str):
        """Run a write; roll back and translate SQLAlchemy errors."""
        try:
            yield
        except IntegrityError as e:
            await self.db.rollback()
            if is_unique_violation(e):
                raise UniqueViolation(operation, "title", str(e.orig)) from e
            raise StoreFailure(operation, "integrity constraint violated") from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StoreFailure(operation, type(e).__name__) from e

    async def create(self, values: dict) -> Post:
        row = PostModel(**values)
        async with self._write("create"):
            self.db.add(row)
            await self.db.commit()
            await self.db.refresh(row)
        return self._to_domain(row)

    async def get_by_id(self, post_id: PostId) -> Post | None:
        try:
            result = await self.db.execute(
                select(PostModel)
                .where(PostModel.id == post_id)
                .execution_options(populate_existing=True),
            )
        except SQLAlchemyError as e:
            raise StoreFailure("read", type(e).__name__) from e
        row = result.scalar_one_or_none()
        return self._to_domain(row) if row else None

    async def list_window(self, offset: int, limit: int) -> list[Post]:
        try:
            result = await self.db.execute(
                select(PostModel)
                .order_by(PostModel.created_at.asc(), PostModel.id.asc())
                .offset(offset)
                .limit(limit),
            )
        except SQLAlchemyError as e:
            raise StoreFailure("list", type(e).__name__) from e
        return [self._to_domain(row) for row in result.scalars().all()]

    async def update_fields(self, post_id: PostId, values: dict) -> Post | None:
        async with self._write("update"):
            result = await self.db.execute(
                update(PostModel)
                .where(PostModel.id == post_id)
                .values(**values),
            )
            await self.db.commit()
        if result.rowcount == 0:
            return None
        return await self.get_by_id(post_id)

    async def delete(self, post_id: PostId) -> bool:
        async with self._write("delete"):
            result = await self.db.execute(
                delete(PostModel).where(PostModel.id == post_id),
            )
            await self.db.commit()
        return result.rowcount > 0

    def _to_domain(self, row: PostModel) -> Post:
        return Post(
            id=PostId(row.id),
            title=row.title,
            content=row.content,
            image=row.image or "",
            owner=UserId(row.owner),
            created_at=_as_utc(row.created_at),
            updated_at=_as_utc(row.updated_at),
        )
