from typing import Optional, List
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from datetime import datetime, timezone
from eventdesk.models.ticket_instance import TicketInstance, TicketStatus


class TicketInstanceRepository:

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, ticket_id: str) -> Optional[TicketInstance]:
        return self.db.query(TicketInstance).filter(TicketInstance.id == ticket_id).first()

    def get_by_code(self, code_payload: str) -> Optional[TicketInstance]:
        return self.db.query(TicketInstance).filter(
            TicketInstance.code_payload == code_payload
        ).first()

    def get_by_ticket_type(
        self,
        ticket_type_id: str,
        status: Optional[TicketStatus] = None
    ) -> List[TicketInstance]:
        query = self.db.query(TicketInstance).filter(
            TicketInstance.ticket_type_id == ticket_type_id
        )

        if status:
            query = query.filter(TicketInstance.status == status)

        return query.order_by(TicketInstance.created_at, TicketInstance.id).all()

    def get_missing_artifacts(self, ticket_type_id: str) -> List[TicketInstance]:
        return self.db.query(TicketInstance).filter(
            TicketInstance.ticket_type_id == ticket_type_id,
            TicketInstance.artifact_locator.is_(None)
        ).order_by(TicketInstance.created_at, TicketInstance.id).all()

    def create_many(self, instances: List[TicketInstance]) -> List[TicketInstance]:
        """
        Persist a whole batch in one commit. Nothing is visible on failure,
        and nothing runs after the commit, so an error here always means the
        batch was not written.
        """
        try:
            self.db.add_all(instances)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        return instances

    def redeem(self, instance: TicketInstance) -> TicketInstance:
        instance.status = TicketStatus.REDEEMED
        instance.redeemed_at = datetime.now(timezone.utc)
        self.db.commit()
        self.db.refresh(instance)
        return instance

    def void(self, instance: TicketInstance) -> TicketInstance:
        instance.status = TicketStatus.VOID
        self.db.commit()
        self.db.refresh(instance)
        return instance
