"""Request Dependencies - injection points between routes and the owned resources.

Invariants:
    - The DatabaseSessionManager comes from app.state, set once by create_app
    - require_ready runs before the body is read: an unready store answers 503
      for any input, valid or not
    - ClientMeta is derived from the connection and headers only
"""

import json
from typing import Any

from fastapi import Depends, Request

from app.config import Settings
from app.core.domain_types import ClientMeta
from app.core.errors import ErrorContext, PayloadValidationError, ServiceNotReadyError
from app.infrastructure.database import DatabaseSessionManager
from app.infrastructure.repositories import LeadRepository, QuizAttemptRepository


def get_settings_from_app(request: Request) -> Settings:
    return request.app.state.settings


def get_db_manager(request: Request) -> DatabaseSessionManager:
    return request.app.state.db


def require_ready(
    request: Request,
    db: DatabaseSessionManager = Depends(get_db_manager),
) -> DatabaseSessionManager:
    """Reject writes until the startup probe has succeeded."""
    if not db.is_ready:
        raise ServiceNotReadyError(
            db.state.value, ErrorContext(path=request.url.path),
        )
    return db


def get_lead_repository(
    db: DatabaseSessionManager = Depends(require_ready),
) -> LeadRepository:
    return LeadRepository(db)


def get_quiz_repository(
    db: DatabaseSessionManager = Depends(require_ready),
) -> QuizAttemptRepository:
    return QuizAttemptRepository(db)


async def read_json_payload(request: Request) -> Any:
    """Parse the request body as JSON. Malformed or empty bodies are a 400."""
    try:
        return await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise PayloadValidationError(
            "Malformed JSON body",
            [{"field": "body", "message": str(e), "type": "json_invalid"}],
            ErrorContext(path=request.url.path),
        ) from e


def get_client_meta(
    request: Request,
    settings: Settings = Depends(get_settings_from_app),
) -> ClientMeta:
    """Client ip and user agent from the request context."""
    ip = request.client.host if request.client else None
    if settings.trust_proxy:
        forwarded = request.headers.get("x-forwarded-for", "")
        first = forwarded.split(",")[0].strip()
        if first:
            ip = first
    return ClientMeta(
        ip=ip,
        user_agent=request.headers.get("user-agent") or None,
    )
