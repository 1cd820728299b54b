"""Post ORM — persists the single managed resource.

Invariants:
    - id is UUID primary key generated on insert
    - title is unique (uq_posts_title): the only uniqueness constraint
    - owner holds the creator's user id; there is no users table here
    - created_at / updated_at are timezone-aware

Design Decisions:
    - No FK on owner: identity is owned by an external provider
    - image non-nullable with empty default: "no image" is the empty string
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from app.db.base import Base


class Post(Base):
    """Post row."""
    __tablename__ = "posts"
    __table_args__ = (UniqueConstraint("title", name="uq_posts_title"),)

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    image: Mapped[str] = mapped_column(
        String(2048), nullable=False, default="",
    )
    owner: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
