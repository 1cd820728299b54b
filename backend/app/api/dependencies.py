"""Request Dependencies — requester identity and PostManager wiring for routes.

Invariants:
    - get_current_user never authenticates: it reads the identity an upstream
      gateway already verified, from settings.identity_header
    - Missing or non-UUID identity -> UnauthenticatedError (401)
    - One PostManager per request, bound to that request's AsyncSession

Design Decisions:
    - Identity resolution is a dependency: deployments override it
      (app.dependency_overrides) to plug in their own provider
"""

from uuid import UUID

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings, get_settings
from app.core.domain_types import Requester, UserId
from app.core.errors import UnauthenticatedError
from app.infrastructure.database import get_db
from app.infrastructure.post_repository import SqlAlchemyPostRepository
from app.services.post_manager import PostManager


def get_current_user(
    request: Request, settings: Settings = Depends(get_settings),
) -> Requester:
    """Resolve the authenticated requester from the identity header."""
    raw = request.headers.get(settings.identity_header)
    if not raw:
        raise UnauthenticatedError("Missing requester identity")
    try:
        return Requester(id=UserId(UUID(raw.strip())))
    except ValueError:
        raise UnauthenticatedError("Invalid requester identity")


def get_post_manager(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> PostManager:
    """Build a PostManager bound to the request's DB session."""
    return PostManager(
        SqlAlchemyPostRepository(db),
        default_page=settings.post_list_default_page,
        default_limit=settings.post_list_default_limit,
        max_limit=settings.post_list_max_limit,
        enforce_ownership=settings.enforce_post_ownership,
    )
