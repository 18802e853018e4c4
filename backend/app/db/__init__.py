"""Database Declarations - SQLAlchemy Base shared by all ORM models.

Invariants:
    - One engine per process, owned by DatabaseSessionManager (infrastructure/database.py)
    - All sessions are async (AsyncSession)

Design Decisions:
    - asyncpg driver for PostgreSQL, aiosqlite in tests
"""
