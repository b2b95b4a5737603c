"""Capacity ledger: the single writer of TicketType.quantity_sold."""

import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from eventdesk.core.exceptions import CapacityExceeded, InvalidRequest, TicketTypeNotFound
from eventdesk.models.ticket_type import TicketTypeStatus
from eventdesk.repositories.ticket_type_repository import TicketTypeRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Reservation:
    """Provisional claim against a ticket type's remaining capacity."""

    ticket_type_id: str
    quantity: int


class CapacityLedger:
    """
    Tracks total/sold per ticket type and enforces 0 <= sold <= total.

    reserve() is one conditional UPDATE committed on its own, so concurrent
    callers can never jointly oversell. release() is the compensating
    action for a reservation whose tickets never became visible.
    """

    def __init__(self, db: Session):
        self.db = db
        self.ticket_type_repo = TicketTypeRepository(db)

    def reserve(self, ticket_type_id: str, quantity: int) -> Reservation:
        """
        Raises:
            InvalidRequest: If quantity is not positive or the type is paused.
            TicketTypeNotFound: If the ticket type does not exist.
            CapacityExceeded: If fewer than quantity tickets remain.
        """
        if quantity <= 0:
            raise InvalidRequest("Quantity must be greater than zero")

        try:
            reserved = self.ticket_type_repo.try_increment_sold(ticket_type_id, quantity)
            if reserved:
                self.db.commit()
            else:
                self.db.rollback()
        except Exception:
            self.db.rollback()
            raise

        if reserved:
            logger.info(f"Reserved {quantity} ticket(s) on type {ticket_type_id}")
            return Reservation(ticket_type_id=ticket_type_id, quantity=quantity)

        ticket_type = self.ticket_type_repo.get_by_id(ticket_type_id)
        if not ticket_type:
            raise TicketTypeNotFound(ticket_type_id)

        if ticket_type.status == TicketTypeStatus.PAUSED:
            raise InvalidRequest("Ticket type is paused")

        remaining = max(ticket_type.quantity_total - ticket_type.quantity_sold, 0)
        logger.info(
            f"Rejected reservation of {quantity} on type {ticket_type_id}: {remaining} remaining"
        )
        raise CapacityExceeded(remaining=remaining, requested=quantity)

    def release(self, reservation: Reservation) -> None:
        try:
            released = self.ticket_type_repo.decrement_sold(
                reservation.ticket_type_id,
                reservation.quantity
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        if released:
            logger.info(
                f"Released {reservation.quantity} ticket(s) on type {reservation.ticket_type_id}"
            )
        else:
            logger.error(
                f"Release of {reservation.quantity} on type {reservation.ticket_type_id} "
                "matched no row; counter left unchanged"
            )

    def remaining(self, ticket_type_id: str) -> int:
        ticket_type = self.ticket_type_repo.get_by_id(ticket_type_id)
        if not ticket_type:
            raise TicketTypeNotFound(ticket_type_id)
        return ticket_type.remaining
