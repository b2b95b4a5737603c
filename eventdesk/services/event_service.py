from typing import List
from sqlalchemy.orm import Session
from eventdesk.core.exceptions import InvalidRequest, TicketTypeNotFound
from eventdesk.models.event import Event, EventStatus
from eventdesk.models.ticket_type import TicketType, TicketTypeStatus
from eventdesk.repositories.event_repository import EventRepository
from eventdesk.repositories.ticket_type_repository import TicketTypeRepository
from eventdesk.schemas.event import EventCreate, EventUpdate, TicketTypeCreate
from eventdesk.services.ownership import require_owned_event


class EventService:

    def __init__(self, db: Session):
        self.db = db
        self.event_repo = EventRepository(db)
        self.ticket_type_repo = TicketTypeRepository(db)

    def create_event(self, owner_id: str, event_data: EventCreate) -> Event:
        return self.event_repo.create(
            owner_id=owner_id,
            title=event_data.title,
            description=event_data.description,
            event_type=event_data.eventType,
            venue=event_data.venue,
            starts_at=event_data.startsAt,
            budget_total=event_data.budgetTotal,
            max_capacity=event_data.maxCapacity
        )

    def get_owner_events(self, owner_id: str) -> List[Event]:
        return self.event_repo.get_by_owner(owner_id)

    def get_event(self, owner_id: str, event_id: str) -> Event:
        return require_owned_event(self.event_repo, owner_id, event_id)

    def update_event(self, owner_id: str, event_id: str, event_data: EventUpdate) -> Event:
        event = require_owned_event(self.event_repo, owner_id, event_id)

        field_map = {
            "title": "title",
            "description": "description",
            "eventType": "event_type",
            "venue": "venue",
            "startsAt": "starts_at",
            "budgetTotal": "budget_total",
            "maxCapacity": "max_capacity",
        }
        updates = {}
        for field, value in event_data.model_dump(exclude_unset=True).items():
            if value is None and field in ("title", "status", "budgetTotal"):
                continue
            if field == "status":
                updates["status"] = EventStatus(value)
            elif field in field_map:
                updates[field_map[field]] = value

        if not updates:
            raise InvalidRequest("No fields to update")

        return self.event_repo.update(event, **updates)

    def create_ticket_type(
        self,
        owner_id: str,
        event_id: str,
        ticket_type_data: TicketTypeCreate
    ) -> TicketType:
        event = require_owned_event(self.event_repo, owner_id, event_id)

        if event.status == EventStatus.CANCELLED:
            raise InvalidRequest("Cannot add ticket types to a cancelled event")

        return self.ticket_type_repo.create(
            event_id=event.id,
            name=ticket_type_data.name.strip(),
            price=ticket_type_data.price,
            quantity_total=ticket_type_data.quantityTotal
        )

    def get_ticket_types(self, owner_id: str, event_id: str) -> List[TicketType]:
        event = require_owned_event(self.event_repo, owner_id, event_id)
        return self.ticket_type_repo.get_by_event(event.id)

    def set_ticket_type_status(
        self,
        owner_id: str,
        event_id: str,
        ticket_type_id: str,
        new_status: str
    ) -> TicketType:
        """Pause or resume sales. Capacity counters are left untouched."""
        event = require_owned_event(self.event_repo, owner_id, event_id)

        ticket_type = self.ticket_type_repo.get_by_id(ticket_type_id)
        if not ticket_type or ticket_type.event_id != event.id:
            raise TicketTypeNotFound(ticket_type_id)

        if new_status == TicketTypeStatus.PAUSED.value:
            return self.ticket_type_repo.pause(ticket_type)

        if event.status == EventStatus.CANCELLED:
            raise InvalidRequest("Cannot resume sales for a cancelled event")
        return self.ticket_type_repo.resume(ticket_type)
