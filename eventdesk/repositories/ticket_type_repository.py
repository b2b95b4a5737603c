from typing import Optional, List
from sqlalchemy import update
from sqlalchemy.orm import Session, joinedload
from sqlalchemy.exc import IntegrityError
from eventdesk.models.ticket_type import TicketType, TicketTypeStatus
import uuid


class TicketTypeRepository:
    """
    Persistence for ticket types.

    try_increment_sold / decrement_sold are the only writers of
    quantity_sold and are meant to be called by CapacityLedger, which owns
    the surrounding transaction.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, ticket_type_id: str, include_event: bool = False) -> Optional[TicketType]:
        query = self.db.query(TicketType).filter(TicketType.id == ticket_type_id)
        if include_event:
            query = query.options(joinedload(TicketType.event))
        return query.first()

    def get_by_event(self, event_id: str) -> List[TicketType]:
        return self.db.query(TicketType).filter(
            TicketType.event_id == event_id
        ).order_by(TicketType.created_at, TicketType.name).all()

    def create(
        self,
        event_id: str,
        name: str,
        price: float,
        quantity_total: int
    ) -> TicketType:
        ticket_type = TicketType(
            id=str(uuid.uuid4()),
            event_id=event_id,
            name=name,
            price=price,
            quantity_total=quantity_total,
            quantity_sold=0,
            status=TicketTypeStatus.SOLD_OUT if quantity_total == 0 else TicketTypeStatus.ACTIVE
        )

        try:
            self.db.add(ticket_type)
            self.db.commit()
            self.db.refresh(ticket_type)
            return ticket_type
        except IntegrityError:
            self.db.rollback()
            raise

    def try_increment_sold(self, ticket_type_id: str, quantity: int) -> bool:
        """
        Conditionally add quantity to quantity_sold in a single statement.
        Returns False when the row is missing, paused or lacks capacity.
        """
        result = self.db.execute(
            update(TicketType)
            .where(
                TicketType.id == ticket_type_id,
                TicketType.status != TicketTypeStatus.PAUSED,
                TicketType.quantity_sold + quantity <= TicketType.quantity_total
            )
            .values(quantity_sold=TicketType.quantity_sold + quantity)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            return False

        self.db.execute(
            update(TicketType)
            .where(
                TicketType.id == ticket_type_id,
                TicketType.quantity_sold == TicketType.quantity_total
            )
            .values(status=TicketTypeStatus.SOLD_OUT)
            .execution_options(synchronize_session=False)
        )
        return True

    def decrement_sold(self, ticket_type_id: str, quantity: int) -> bool:
        result = self.db.execute(
            update(TicketType)
            .where(
                TicketType.id == ticket_type_id,
                TicketType.quantity_sold >= quantity
            )
            .values(quantity_sold=TicketType.quantity_sold - quantity)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            return False

        self.db.execute(
            update(TicketType)
            .where(
                TicketType.id == ticket_type_id,
                TicketType.status == TicketTypeStatus.SOLD_OUT,
                TicketType.quantity_sold < TicketType.quantity_total
            )
            .values(status=TicketTypeStatus.ACTIVE)
            .execution_options(synchronize_session=False)
        )
        return True

    def pause(self, ticket_type: TicketType) -> TicketType:
        self.db.execute(
            update(TicketType)
            .where(
                TicketType.id == ticket_type.id,
                TicketType.status != TicketTypeStatus.PAUSED
            )
            .values(status=TicketTypeStatus.PAUSED)
            .execution_options(synchronize_session=False)
        )
        self.db.commit()
        self.db.refresh(ticket_type)
        return ticket_type

    def resume(self, ticket_type: TicketType) -> TicketType:
        """Reopen a paused type; it comes back sold_out when no seats remain."""
        self.db.execute(
            update(TicketType)
            .where(
                TicketType.id == ticket_type.id,
                TicketType.status == TicketTypeStatus.PAUSED,
                TicketType.quantity_sold < TicketType.quantity_total
            )
            .values(status=TicketTypeStatus.ACTIVE)
            .execution_options(synchronize_session=False)
        )
        self.db.execute(
            update(TicketType)
            .where(
                TicketType.id == ticket_type.id,
                TicketType.status == TicketTypeStatus.PAUSED
            )
            .values(status=TicketTypeStatus.SOLD_OUT)
            .execution_options(synchronize_session=False)
        )
        self.db.commit()
        self.db.refresh(ticket_type)
        return ticket_type
