"""ASGI target - `uvicorn app.asgi:app`.

Builds the app from process settings at import time. Nothing else imports this
module, so importing the factory never creates an engine.
"""

from app.main import create_app

app = create_app()
