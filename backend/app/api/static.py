"""Static Frontend - single-page-app fallback for unmatched routes.

Invariants:
    - Mounted after API routes so /api/* routes take precedence
    - Existing files are served as-is; any other GET path gets index.html
    - Paths under /api never fall back: they answer 404
    - Methods other than GET/HEAD that miss every route answer 404, as without a frontend
    - Without a frontend directory nothing is mounted and unmatched routes 404
"""

import logging
import os
from pathlib import PurePath

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException
from starlette.responses import Response
from starlette.types import Scope

logger = logging.getLogger(__name__)

INDEX_FILE = "index.html"


def _is_api_path(path: str) -> bool:
    parts = PurePath(path).parts
    return bool(parts) and parts[0] == "api"


class SPAStaticFiles(StaticFiles):
    """StaticFiles that answers unknown paths with the SPA index."""

    async def get_response(self, path: str, scope: Scope) -> Response:
        if _is_api_path(path) or scope["method"] not in ("GET", "HEAD"):
            raise HTTPException(status_code=404)
        try:
            return await super().get_response(path, scope)
        except HTTPException as exc:
            if exc.status_code != 404:
                raise
            return await super().get_response(INDEX_FILE, scope)


def mount_frontend(app: FastAPI, static_dir: str) -> bool:
    """Mount the frontend build at / if present. Returns whether it was mounted."""
    if not os.path.isdir(static_dir):
        logger.info(f"No frontend build at {static_dir}; static fallback disabled")
        return False
    app.mount(
        "/", SPAStaticFiles(directory=static_dir, html=True), name="frontend",
    )
    return True
