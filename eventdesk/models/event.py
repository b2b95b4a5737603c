from sqlalchemy import Column, String, DateTime, Integer, Float, Text, Enum as SQLEnum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
import enum
from eventdesk.core.database import Base


class EventStatus(str, enum.Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    CANCELLED = "cancelled"


class Event(Base):
    """
    Event owned by a single caller identity.
    The owner is the only one allowed to manage ticket types, issue
    tickets and track the budget for the event.
    """
    __tablename__ = "events"

    id = Column(String(36), primary_key=True, index=True)

    owner_id = Column(String(36), nullable=False, index=True, comment="Token subject of the creator")

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    event_type = Column(String(100), nullable=True)
    venue = Column(String(255), nullable=True)
    starts_at = Column(DateTime(timezone=True), nullable=True)

    status = Column(
        SQLEnum(EventStatus),
        nullable=False,
        default=EventStatus.DRAFT,
        index=True
    )

    budget_total = Column(Float, nullable=False, default=0)
    max_capacity = Column(Integer, nullable=True)

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now()
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now()
    )

    ticket_types = relationship("TicketType", back_populates="event", cascade="all, delete-orphan")
    budget_items = relationship("BudgetItem", back_populates="event", cascade="all, delete-orphan")

    def __repr__(self) -> str:
        return f"<Event(id={self.id}, title={self.title}, owner_id={self.owner_id})>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "ownerId": self.owner_id,
            "title": self.title,
            "description": self.description,
            "eventType": self.event_type,
            "venue": self.venue,
            "startsAt": self.starts_at.isoformat() if self.starts_at else None,
            "status": self.status.value,
            "budgetTotal": self.budget_total,
            "maxCapacity": self.max_capacity,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
