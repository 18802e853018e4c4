"""Repositories - single-statement inserts with store-generated ids."""

import json

from app.core.domain_types import ClientMeta
from app.infrastructure.repositories import LeadRepository, QuizAttemptRepository


async def test_lead_add_returns_increasing_ids(ready_db):
    repo = LeadRepository(ready_db)
    first = await repo.add("Ana", "ana@example.com", None)
    second = await repo.add("Bo", "bo@example.com", "hi")
    assert 0 < first < second


async def test_lead_get_missing_returns_none(ready_db):
    assert await LeadRepository(ready_db).get(12345) is None


async def test_quiz_add_returns_id_and_created_at(ready_db):
    repo = QuizAttemptRepository(ready_db)
    attempt_id, created_at = await repo.add(
        user_email=None, score=7, total=10,
        answers=json.dumps(["a", "b"]),
        client=ClientMeta(ip="10.0.0.1", user_agent=None),
    )
    assert attempt_id > 0
    assert created_at is not None
    stored = await repo.get(attempt_id)
    assert stored.ip == "10.0.0.1"
    assert stored.user_agent is None
    assert json.loads(stored.answers) == ["a", "b"]
