"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - PostId and UserId wrap UUIDs: never use bare UUID in domain logic
    - Requester is the already-authenticated caller; the core never re-validates it

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - Requester frozen: identity is resolved once per request and never mutated
"""

from dataclasses import dataclass
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

PostId = NewType("PostId", UUID)
UserId = NewType("UserId", UUID)


def parse_post_id(raw: str | UUID) -> PostId | None:
    """Parse an opaque path identifier. Returns None when it is not a UUID."""
    if isinstance(raw, UUID):
        return PostId(raw)
    try:
        return PostId(UUID(str(raw)))
    except ValueError:
        return None


@dataclass(frozen=True)
class Requester:
    """Authenticated caller context, established upstream of the core."""
    id: UserId
