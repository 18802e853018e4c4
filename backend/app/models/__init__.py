"""ORM Models - SQLAlchemy declarative models for both record kinds.

Invariants:
    - All models inherit from Base (db/base.py)
    - Tables are pre-provisioned; the API never creates or alters schema

Design Decisions:
    - One file per entity
    - All models imported here so Base.metadata is complete for test fixtures
"""

from app.models.lead import Lead  # noqa: F401
from app.models.quiz_attempt import QuizAttempt  # noqa: F401
