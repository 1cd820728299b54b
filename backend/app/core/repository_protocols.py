"""Boundary Protocols — contracts between core and the persistence shell.

Invariants:
    - Core NEVER imports from shell: dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Store failures surface as UniqueViolation or StoreFailure, never as
      driver-specific exceptions

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - UniqueViolation names the violated field: the manager maps it to a
      Conflict without reading error text
"""

from typing import Protocol

from app.core.domain_types import PostId
from app.core.post import Post


class StoreFailure(Exception):
    """Any persistence failure that is not a uniqueness violation."""

    def __init__(self, operation: str, message: str):
        super().__init__(f"{operation}: {message}")
        self.operation = operation
        self.message = message


class UniqueViolation(StoreFailure):
    """A unique constraint rejected the write."""

    def __init__(self, operation: str, field: str, message: str = ""):
        super().__init__(operation, message or f"duplicate {field}")
        self.field = field


class PostRepository(Protocol):
    """Contract for Post persistence — implemented by shell."""
    async def create(self, values: dict) -> Post: ...
    async def get_by_id(self, post_id: PostId) -> Post | None: ...
    async def list_window(self, offset: int, limit: int) -> list[Post]: ...
    async def update_fields(self, post_id: PostId, values: dict) -> Post | None: ...
    async def delete(self, post_id: PostId) -> bool: ...
