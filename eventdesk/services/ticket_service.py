import logging
from typing import List, Optional
from sqlalchemy.orm import Session
from eventdesk.core.exceptions import InvalidRequest, TicketNotFound, TicketStateConflict, Unauthorized
from eventdesk.models.ticket_instance import TicketInstance, TicketStatus
from eventdesk.repositories.event_repository import EventRepository
from eventdesk.repositories.ticket_instance_repository import TicketInstanceRepository
from eventdesk.repositories.ticket_type_repository import TicketTypeRepository
from eventdesk.services.ownership import require_owned_ticket_type

logger = logging.getLogger(__name__)


class TicketService:
    """Read access and status transitions for issued tickets."""

    def __init__(self, db: Session):
        self.db = db
        self.event_repo = EventRepository(db)
        self.ticket_type_repo = TicketTypeRepository(db)
        self.instance_repo = TicketInstanceRepository(db)

    def list_tickets(
        self,
        owner_id: str,
        ticket_type_id: str,
        status_filter: Optional[str] = None
    ) -> List[TicketInstance]:
        require_owned_ticket_type(self.ticket_type_repo, owner_id, ticket_type_id)

        status_enum = None
        if status_filter:
            try:
                status_enum = TicketStatus(status_filter)
            except ValueError:
                raise InvalidRequest(
                    f"status must be one of: {', '.join(s.value for s in TicketStatus)}"
                )

        return self.instance_repo.get_by_ticket_type(ticket_type_id, status=status_enum)

    def redeem(self, owner_id: str, code: str) -> TicketInstance:
        ticket = self.instance_repo.get_by_code(code.strip())
        if not ticket:
            raise TicketNotFound(code)

        self._require_event_owner(owner_id, ticket)

        if ticket.status == TicketStatus.REDEEMED:
            raise TicketStateConflict("Ticket has already been redeemed")

        if ticket.status == TicketStatus.VOID:
            raise TicketStateConflict("Ticket has been voided")

        redeemed = self.instance_repo.redeem(ticket)
        logger.info(f"Redeemed ticket {ticket.id} for event {ticket.event_id}")
        return redeemed

    def void(self, owner_id: str, ticket_id: str) -> TicketInstance:
        ticket = self.instance_repo.get_by_id(ticket_id)
        if not ticket:
            raise TicketNotFound(ticket_id)

        self._require_event_owner(owner_id, ticket)

        if ticket.status == TicketStatus.VOID:
            raise TicketStateConflict("Ticket is already void")

        if ticket.status == TicketStatus.REDEEMED:
            raise TicketStateConflict("Redeemed tickets cannot be voided")

        # Voiding keeps the capacity consumed: the ticket was sold
        voided = self.instance_repo.void(ticket)
        logger.info(f"Voided ticket {ticket.id} for event {ticket.event_id}")
        return voided

    def _require_event_owner(self, owner_id: str, ticket: TicketInstance) -> None:
        event = self.event_repo.get_by_id(ticket.event_id)
        if not event or event.owner_id != owner_id:
            raise Unauthorized("You can only manage tickets for your own events")
