"""Infrastructure Layer - database access and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from api/
    - All database calls wrapped with rollback and error mapping
"""
