"""Post Manager — lifecycle operations for the Post resource.

Invariants:
    - Stateless beyond the repository handle: safe for concurrent use
    - Every store outcome is mapped to a Post or a typed PostServiceError:
        UniqueViolation -> ConflictError, StoreFailure -> UpstreamError,
        missing row -> ResourceNotFoundError
    - Update on a missing post performs no write
    - Delete that matched no row is NotFound, never a silent success
    - No retries: every failure is terminal for its invocation

Design Decisions:
    - Update returns the post-update state read back from the store
    - Owner is the creator; update keeps it
    - Ownership enforcement is opt-in (enforce_ownership) and uses core.post.can_modify
    - clock injected: tests pin timestamps without patching datetime
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable

from app.core.domain_types import PostId, Requester, parse_post_id
from app.core.errors import (
    ConflictError, ErrorContext, ForbiddenError, ResourceNotFoundError,
    UpstreamError,
)
from app.core.pagination import (
    DEFAULT_LIMIT, DEFAULT_PAGE, MAX_LIMIT, PageWindow, resolve_window,
)
from app.core.post import (
    Post, PostChanges, PostFields, build_new_post, can_modify, merge_update,
)
from app.core.repository_protocols import (
    PostRepository, StoreFailure, UniqueViolation,
)

logger = logging.getLogger(__name__)

RESOURCE = "Post"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class PostPage:
    """One page of posts. count is the size of this page, not the total."""
    posts: list[Post]
    window: PageWindow

    @property
    def count(self) -> int:
        return len(self.posts)


class PostManager:
    """Create, read, list, update and delete Posts against a PostRepository."""

    def __init__(
        self,
        repository: PostRepository,
        *,
        default_page: int = DEFAULT_PAGE,
        default_limit: int = DEFAULT_LIMIT,
        max_limit: int = MAX_LIMIT,
        enforce_ownership: bool = False,
        clock: Callable[[], datetime] = _utc_now,
    ):
        self.repository = repository
        self.default_page = default_page
        self.default_limit = default_limit
        self.max_limit = max_limit
        self.enforce_ownership = enforce_ownership
        self.clock = clock

    async def create_post(self, requester: Requester, fields: PostFields) -> Post:
        values = build_new_post(requester, fields, self.clock())
        try:
            post = await self.repository.create(values)
        except UniqueViolation as e:
            logger.warning(
                f"Duplicate {e.field} on create",
                extra={"owner_id": requester.id, "operation": "create"},
            )
            raise ConflictError(RESOURCE, e.field)
        except StoreFailure as e:
            raise self._upstream(e)
        logger.info(
            "Post created",
            extra={"post_id": post.id, "owner_id": post.owner},
        )
        return post

    async def get_post(self, raw_id: str) -> Post:
        post_id = self._parse_id(raw_id)
        return await self._get_or_404(post_id, raw_id)

    async def list_posts(
        self, page: str | int | None = None, limit: str | int | None = None,
    ) -> PostPage:
        window = resolve_window(
            page, limit,
            default_page=self.default_page,
            default_limit=self.default_limit,
            max_limit=self.max_limit,
        )
        try:
            posts = await self.repository.list_window(window.offset, window.limit)
        except StoreFailure as e:
            raise self._upstream(e)
        return PostPage(posts=posts, window=window)

    async def update_post(
        self, raw_id: str, requester: Requester, changes: PostChanges,
    ) -> Post:
        post_id = self._parse_id(raw_id)
        existing = await self._get_or_404(post_id, raw_id)
        self._check_can_modify(requester, existing)

        values = merge_update(existing, changes, self.clock())
        try:
            updated = await self.repository.update_fields(post_id, values)
        except UniqueViolation as e:
            logger.warning(
                f"Duplicate {e.field} on update",
                extra={"post_id": post_id, "operation": "update"},
            )
            raise ConflictError(RESOURCE, e.field)
        except StoreFailure as e:
            raise self._upstream(e)
        if updated is None:
            # Deleted between read and write
            raise self._not_found(raw_id)
        logger.info(
            "Post updated",
            extra={"post_id": post_id, "owner_id": requester.id},
        )
        return updated

    async def delete_post(self, raw_id: str, requester: Requester) -> None:
        post_id = self._parse_id(raw_id)
        if self.enforce_ownership:
            existing = await self._get_or_404(post_id, raw_id)
            self._check_can_modify(requester, existing)
        try:
            deleted = await self.repository.delete(post_id)
        except StoreFailure as e:
            raise self._upstream(e)
        if not deleted:
            raise self._not_found(raw_id)
        logger.info(
            "Post deleted",
            extra={"post_id": post_id, "owner_id": requester.id},
        )

    # ─── helpers ────────────────────────────────────────────────

    def _parse_id(self, raw_id: str) -> PostId:
        post_id = parse_post_id(raw_id)
        if post_id is None:
            raise self._not_found(raw_id)
        return post_id

    async def _get_or_404(self, post_id: PostId, raw_id: str) -> Post:
        try:
            post = await self.repository.get_by_id(post_id)
        except StoreFailure as e:
            raise self._upstream(e)
        if post is None:
            raise self._not_found(raw_id)
        return post

    def _check_can_modify(self, requester: Requester, post: Post) -> None:
        if self.enforce_ownership and not can_modify(requester, post):
            logger.warning(
                "Modification by non-owner rejected",
                extra={"post_id": post.id, "owner_id": post.owner},
            )
            raise ForbiddenError(RESOURCE, str(post.id))

    def _not_found(self, raw_id: str) -> ResourceNotFoundError:
        logger.debug("Post not found", extra={"post_id": raw_id})
        return ResourceNotFoundError(RESOURCE, str(raw_id))

    def _upstream(self, e: StoreFailure) -> UpstreamError:
        logger.error(
            f"Store failure: {e.message}",
            extra={"operation": e.operation},
        )
        return UpstreamError(
            e.message, e.operation, ErrorContext(operation=e.operation),
        )
