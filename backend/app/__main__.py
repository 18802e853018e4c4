"""Process entry point - `python -m app`.

Invariants:
    - The server starts listening before the database is verified; writes
      answer 503 until verify() succeeds
    - A failed verification stops the server and surfaces as StartupError here,
      where it is logged and turned into exit status 1
"""

import asyncio
import logging
import sys

import uvicorn

from app.config import get_settings
from app.core.errors import StartupError
from app.infrastructure.database import DatabaseSessionManager
from app.main import create_app

logger = logging.getLogger("app")


async def serve() -> None:
    """Run uvicorn and the readiness probe side by side."""
    settings = get_settings()
    db = DatabaseSessionManager.from_settings(settings)
    app = create_app(settings, db, verify_on_startup=False)
    server = uvicorn.Server(uvicorn.Config(
        app, host=settings.host, port=settings.port, log_config=None,
    ))
    server_task = asyncio.create_task(server.serve())
    try:
        await db.verify()
    except StartupError:
        server.should_exit = True
        raise
    finally:
        await server_task
        await db.dispose()


def main() -> int:
    try:
        asyncio.run(serve())
    except StartupError as e:
        logger.critical(f"Startup aborted: {e.message}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
