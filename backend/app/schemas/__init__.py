"""Pydantic Schemas - request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (request bodies, API responses)
    - Domain types from core/ used for identifiers

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
