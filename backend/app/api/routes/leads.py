"""Lead Submission - POST /api/leads.

Invariants:
    - Readiness is checked before the body is read (503 for any input)
    - name and email required (non-empty); failures are 400 and write nothing
    - One INSERT per accepted request; the generated id is returned with 201
    - Persistence failures are a generic 500; the cause is only logged
"""

import logging

from fastapi import APIRouter, Depends, Request, status

from app.api.dependencies import get_lead_repository, read_json_payload
from app.core.domain_types import RecordKind
from app.core.errors import ErrorContext, PayloadValidationError
from app.core.validation import validate_lead
from app.infrastructure.repositories import LeadRepository
from app.schemas.lead import LeadCreated

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["leads"])


@router.post(
    "/leads", response_model=LeadCreated,
    status_code=status.HTTP_201_CREATED,
)
async def create_lead(
    request: Request,
    repo: LeadRepository = Depends(get_lead_repository),
):
    """Store a contact-form submission."""
    payload = await read_json_payload(request)
    result = validate_lead(payload)
    if not result.ok:
        raise PayloadValidationError(
            result.message, result.details,
            ErrorContext(path=request.url.path, record_kind=RecordKind.LEAD.value),
        )
    lead = result.value
    lead_id = await repo.add(lead.name, lead.email, lead.message)
    logger.info(
        "Lead saved",
        extra={"record_kind": RecordKind.LEAD.value, "record_id": lead_id},
    )
    return LeadCreated(id=lead_id)
