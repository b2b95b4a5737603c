from typing import Optional, List
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from datetime import datetime
from eventdesk.models.event import Event, EventStatus
import uuid


class EventRepository:

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, event_id: str) -> Optional[Event]:
        return self.db.query(Event).filter(Event.id == event_id).first()

    def get_by_owner(
        self,
        owner_id: str,
        status: Optional[EventStatus] = None
    ) -> List[Event]:
        query = self.db.query(Event).filter(Event.owner_id == owner_id)

        if status:
            query = query.filter(Event.status == status)

        return query.order_by(Event.created_at.desc()).all()

    def create(
        self,
        owner_id: str,
        title: str,
        description: Optional[str] = None,
        event_type: Optional[str] = None,
        venue: Optional[str] = None,
        starts_at: Optional[datetime] = None,
        budget_total: float = 0,
        max_capacity: Optional[int] = None,
        status: EventStatus = EventStatus.DRAFT
    ) -> Event:
        event = Event(
            id=str(uuid.uuid4()),
            owner_id=owner_id,
            title=title,
            description=description,
            event_type=event_type,
            venue=venue,
            starts_at=starts_at,
            budget_total=budget_total,
            max_capacity=max_capacity,
            status=status
        )

        try:
            self.db.add(event)
            self.db.commit()
            self.db.refresh(event)
            return event
        except IntegrityError:
            self.db.rollback()
            raise

    def update(self, event: Event, **kwargs) -> Event:
        for key, value in kwargs.items():
            if hasattr(event, key) and key not in ['id', 'owner_id', 'created_at']:
                setattr(event, key, value)

        self.db.commit()
        self.db.refresh(event)
        return event
