"""
Event, ticket type and budget endpoints. Every route is owner-scoped.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from eventdesk.api.deps import get_current_user_id
from eventdesk.core.database import get_db
from eventdesk.schemas.budget import (
    BudgetAnalysisResponse,
    BudgetItemCreate,
    BudgetItemCreateResponse,
    BudgetItemResponse,
    BudgetItemsListResponse,
)
from eventdesk.schemas.event import (
    EventCreate,
    EventCreateResponse,
    EventDetailResponse,
    EventResponse,
    EventsListResponse,
    EventUpdate,
    TicketTypeCreate,
    TicketTypeCreateResponse,
    TicketTypeDetailResponse,
    TicketTypeResponse,
    TicketTypeStatusUpdate,
    TicketTypesListResponse,
)
from eventdesk.services.budget_service import BudgetService
from eventdesk.services.event_service import EventService

router = APIRouter(prefix="/api/events", tags=["Events"])


def get_event_service(db: Session = Depends(get_db)) -> EventService:
    return EventService(db)


def get_budget_service(db: Session = Depends(get_db)) -> BudgetService:
    return BudgetService(db)


@router.post("", response_model=EventCreateResponse, status_code=status.HTTP_201_CREATED)
def create_event(
    event_data: EventCreate,
    current_user_id: str = Depends(get_current_user_id),
    service: EventService = Depends(get_event_service)
):
    event = service.create_event(current_user_id, event_data)
    return EventCreateResponse(event=EventResponse(**event.to_dict()))


@router.get("", response_model=EventsListResponse)
def list_my_events(
    current_user_id: str = Depends(get_current_user_id),
    service: EventService = Depends(get_event_service)
):
    events = service.get_owner_events(current_user_id)
    return EventsListResponse(events=[EventResponse(**e.to_dict()) for e in events])


@router.get("/{event_id}", response_model=EventDetailResponse)
def get_event(
    event_id: str,
    current_user_id: str = Depends(get_current_user_id),
    service: EventService = Depends(get_event_service)
):
    event = service.get_event(current_user_id, event_id)
    return EventDetailResponse(event=EventResponse(**event.to_dict()))


@router.patch("/{event_id}", response_model=EventDetailResponse)
def update_event(
    event_id: str,
    event_data: EventUpdate,
    current_user_id: str = Depends(get_current_user_id),
    service: EventService = Depends(get_event_service)
):
    event = service.update_event(current_user_id, event_id, event_data)
    return EventDetailResponse(event=EventResponse(**event.to_dict()))


@router.post(
    "/{event_id}/ticket-types",
    response_model=TicketTypeCreateResponse,
    status_code=status.HTTP_201_CREATED
)
def create_ticket_type(
    event_id: str,
    ticket_type_data: TicketTypeCreate,
    current_user_id: str = Depends(get_current_user_id),
    service: EventService = Depends(get_event_service)
):
    ticket_type = service.create_ticket_type(current_user_id, event_id, ticket_type_data)
    return TicketTypeCreateResponse(ticketType=TicketTypeResponse(**ticket_type.to_dict()))


@router.get("/{event_id}/ticket-types", response_model=TicketTypesListResponse)
def list_ticket_types(
    event_id: str,
    current_user_id: str = Depends(get_current_user_id),
    service: EventService = Depends(get_event_service)
):
    ticket_types = service.get_ticket_types(current_user_id, event_id)
    return TicketTypesListResponse(
        ticketTypes=[TicketTypeResponse(**t.to_dict()) for t in ticket_types]
    )


@router.patch("/{event_id}/ticket-types/{ticket_type_id}/status", response_model=TicketTypeDetailResponse)
def update_ticket_type_status(
    event_id: str,
    ticket_type_id: str,
    status_data: TicketTypeStatusUpdate,
    current_user_id: str = Depends(get_current_user_id),
    service: EventService = Depends(get_event_service)
):
    ticket_type = service.set_ticket_type_status(
        current_user_id, event_id, ticket_type_id, status_data.status
    )
    return TicketTypeDetailResponse(ticketType=TicketTypeResponse(**ticket_type.to_dict()))


@router.post(
    "/{event_id}/budget-items",
    response_model=BudgetItemCreateResponse,
    status_code=status.HTTP_201_CREATED
)
def create_budget_item(
    event_id: str,
    item_data: BudgetItemCreate,
    current_user_id: str = Depends(get_current_user_id),
    service: BudgetService = Depends(get_budget_service)
):
    item = service.create_budget_item(current_user_id, event_id, item_data)
    return BudgetItemCreateResponse(budgetItem=BudgetItemResponse(**item.to_dict()))


@router.get("/{event_id}/budget-items", response_model=BudgetItemsListResponse)
def list_budget_items(
    event_id: str,
    current_user_id: str = Depends(get_current_user_id),
    service: BudgetService = Depends(get_budget_service)
):
    items = service.get_budget_items(current_user_id, event_id)
    return BudgetItemsListResponse(budgetItems=[BudgetItemResponse(**i.to_dict()) for i in items])


@router.get("/{event_id}/budget/analysis", response_model=BudgetAnalysisResponse)
def get_budget_analysis(
    event_id: str,
    current_user_id: str = Depends(get_current_user_id),
    service: BudgetService = Depends(get_budget_service)
):
    analysis = service.build_analysis(current_user_id, event_id)
    return BudgetAnalysisResponse(
        analysis=analysis,
        generated_at=datetime.now(timezone.utc).isoformat()
    )
