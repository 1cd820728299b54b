"""Post Schemas — Pydantic contracts for the Post endpoints.

Invariants:
    - PostCreate requires title and content; image defaults to ""
    - PostUpdate fields are all optional; null/omitted means "keep"
    - PostUpdate rejects an empty content: "" clears image only
    - Unknown fields are rejected (extra="forbid")
    - Response envelopes: {"status": "success", "data": ...}

Design Decisions:
    - Shape checks only (types, presence, lengths matching the columns);
      content rules are out of scope
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.core.post import Post, PostChanges, PostFields


class PostCreate(BaseModel):
    """Create payload."""
    model_config = ConfigDict(extra="forbid")

    title: str = Field(min_length=1, max_length=255)
    content: str
    image: str = Field("", max_length=2048)

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("title cannot be empty or whitespace")
        return v

    def to_fields(self) -> PostFields:
        return PostFields(title=self.title, content=self.content, image=self.image)


class PostUpdate(BaseModel):
    """Partial update payload."""
    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(None, min_length=1, max_length=255)
    content: str | None = Field(None, min_length=1)
    image: str | None = Field(None, max_length=2048)

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("title cannot be empty or whitespace")
        return v

    def to_changes(self) -> PostChanges:
        return PostChanges(title=self.title, content=self.content, image=self.image)


class PostResponse(BaseModel):
    """Public-facing Post."""
    id: UUID
    title: str
    content: str
    image: str
    owner: UUID
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_post(cls, post: Post) -> "PostResponse":
        return cls(
            id=post.id,
            title=post.title,
            content=post.content,
            image=post.image,
            owner=post.owner,
            created_at=post.created_at,
            updated_at=post.updated_at,
        )


class PostEnvelope(BaseModel):
    status: str = "success"
    data: PostResponse


class PostListEnvelope(BaseModel):
    status: str = "success"
    results: int
    page: int
    limit: int
    data: list[PostResponse]
