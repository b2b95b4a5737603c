"""
Ticket issuance and lifecycle endpoints.

- POST /api/tickets/batch                       issue N tickets for a type
- POST /api/tickets/redeem                      redeem a scanned code
- POST /api/tickets/{id}/void                   void an unused ticket
- GET  /api/ticket-types/{id}/tickets           list issued tickets
- POST /api/ticket-types/{id}/artifacts/retry   regenerate missing QR images
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from eventdesk.api.deps import get_current_user_id, get_object_store
from eventdesk.core.config import settings
from eventdesk.core.database import get_db
from eventdesk.schemas.ticket import (
    ArtifactRetryResponse,
    FailedSlot,
    TicketActionResponse,
    TicketBatchCreate,
    TicketBatchResponse,
    TicketListResponse,
    TicketRedeem,
    TicketResponse,
)
from eventdesk.services.ticket_issuance_service import SlotFailure, TicketIssuanceService
from eventdesk.services.ticket_service import TicketService
from eventdesk.storage.object_store import ObjectStore

router = APIRouter(prefix="/api", tags=["Tickets"])


def get_issuance_service(
    db: Session = Depends(get_db),
    object_store: ObjectStore = Depends(get_object_store)
) -> TicketIssuanceService:
    return TicketIssuanceService(db, object_store)


def get_ticket_service(db: Session = Depends(get_db)) -> TicketService:
    return TicketService(db)


def _failed_slot(failure: SlotFailure) -> FailedSlot:
    return FailedSlot(
        index=failure.index,
        reason=failure.reason,
        error=failure.error,
        ticketId=failure.ticket_id
    )


@router.get("/tickets/health")
def health_check():
    return {
        "status": "healthy",
        "service": f"{settings.PROJECT_NAME} Tickets",
        "version": settings.VERSION
    }


@router.post("/tickets/batch", response_model=TicketBatchResponse)
def create_tickets_batch(
    batch_data: TicketBatchCreate,
    current_user_id: str = Depends(get_current_user_id),
    service: TicketIssuanceService = Depends(get_issuance_service)
):
    result = service.issue(current_user_id, batch_data)

    created = len(result.created_instances)
    message = f"Successfully created {created} tickets"
    if result.failures:
        message += f"; {len(result.failures)} without QR artifact"

    return TicketBatchResponse(
        message=message,
        tickets=[TicketResponse(**t.to_dict()) for t in result.created_instances],
        failedSlots=[_failed_slot(f) for f in result.failures]
    )


@router.post("/tickets/redeem", response_model=TicketActionResponse)
def redeem_ticket(
    redeem_data: TicketRedeem,
    current_user_id: str = Depends(get_current_user_id),
    service: TicketService = Depends(get_ticket_service)
):
    ticket = service.redeem(current_user_id, redeem_data.code)
    return TicketActionResponse(
        message="Ticket redeemed",
        ticket=TicketResponse(**ticket.to_dict())
    )


@router.post("/tickets/{ticket_id}/void", response_model=TicketActionResponse)
def void_ticket(
    ticket_id: str,
    current_user_id: str = Depends(get_current_user_id),
    service: TicketService = Depends(get_ticket_service)
):
    ticket = service.void(current_user_id, ticket_id)
    return TicketActionResponse(
        message="Ticket voided",
        ticket=TicketResponse(**ticket.to_dict())
    )


@router.get("/ticket-types/{ticket_type_id}/tickets", response_model=TicketListResponse)
def list_tickets(
    ticket_type_id: str,
    status: Optional[str] = Query(None, description="available | redeemed | void"),
    current_user_id: str = Depends(get_current_user_id),
    service: TicketService = Depends(get_ticket_service)
):
    tickets = service.list_tickets(current_user_id, ticket_type_id, status_filter=status)
    return TicketListResponse(
        tickets=[TicketResponse(**t.to_dict()) for t in tickets],
        total=len(tickets)
    )


@router.post("/ticket-types/{ticket_type_id}/artifacts/retry", response_model=ArtifactRetryResponse)
def retry_artifacts(
    ticket_type_id: str,
    current_user_id: str = Depends(get_current_user_id),
    service: TicketIssuanceService = Depends(get_issuance_service)
):
    result = service.retry_artifacts(current_user_id, ticket_type_id)
    return ArtifactRetryResponse(
        message=f"Regenerated {len(result.repaired)} artifact(s)",
        repaired=[TicketResponse(**t.to_dict()) for t in result.repaired],
        failedSlots=[_failed_slot(f) for f in result.failures]
    )
