from eventdesk.core.exceptions import EventNotFound, TicketTypeNotFound, Unauthorized
from eventdesk.models.event import Event
from eventdesk.models.ticket_type import TicketType
from eventdesk.repositories.event_repository import EventRepository
from eventdesk.repositories.ticket_type_repository import TicketTypeRepository


def require_owned_event(event_repo: EventRepository, caller_id: str, event_id: str) -> Event:
    event = event_repo.get_by_id(event_id)
    if not event:
        raise EventNotFound(event_id)

    if event.owner_id != caller_id:
        raise Unauthorized("You can only manage your own events")

    return event


def require_owned_ticket_type(
    ticket_type_repo: TicketTypeRepository,
    caller_id: str,
    ticket_type_id: str
) -> TicketType:
    ticket_type = ticket_type_repo.get_by_id(ticket_type_id, include_event=True)
    if not ticket_type:
        raise TicketTypeNotFound(ticket_type_id)

    if ticket_type.event is None or ticket_type.event.owner_id != caller_id:
        raise Unauthorized("You can only manage tickets for your own events")

    return ticket_type
