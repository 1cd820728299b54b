"""Post Entity — pure domain representation and lifecycle rules for a Post.

Invariants:
    - id is assigned by the store, never by the core
    - created_at is set once on creation and never mutated
    - created_at <= updated_at (update stamps max(now, previous updated_at))
    - owner is the creator; update never reassigns it
    - PostChanges fields left as None keep their stored value

Design Decisions:
    - Frozen dataclasses: the manager returns snapshots, not live ORM rows
    - Explicit PostFields/PostChanges contracts instead of loose dicts
    - can_modify is a predicate over (requester, post): the manager decides
      whether to apply it
"""

from dataclasses import dataclass
from datetime import datetime

from app.core.domain_types import PostId, Requester, UserId


@dataclass(frozen=True)
class Post:
    """Stored Post snapshot."""
    id: PostId
    title: str
    content: str
    image: str
    owner: UserId
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class PostFields:
    """Fields supplied on creation."""
    title: str
    content: str
    image: str = ""


@dataclass(frozen=True)
class PostChanges:
    """Fields supplied on update. None means 'keep the stored value'."""
    title: str | None = None
    content: str | None = None
    image: str | None = None

    def as_values(self) -> dict:
        return {
            name: value
            for name, value in (
                ("title", self.title),
                ("content", self.content),
                ("image", self.image),
            )
            if value is not None
        }


def build_new_post(requester: Requester, fields: PostFields, now: datetime) -> dict:
    """Column values for a new Post. Pure — the store assigns id."""
    return {
        "title": fields.title,
        "content": fields.content,
        "image": fields.image or "",
        "owner": requester.id,
        "created_at": now,
        "updated_at": now,
    }


def merge_update(existing: Post, changes: PostChanges, now: datetime) -> dict:
    """Column values to write for an update of existing.

    Only supplied fields and updated_at are returned; owner and created_at are
    carried by the stored record untouched.
    """
    values = changes.as_values()
    values["updated_at"] = max(now, existing.updated_at)
    return values


def can_modify(requester: Requester, post: Post) -> bool:
    """True when requester may update or delete post."""
    return requester.id == post.owner
