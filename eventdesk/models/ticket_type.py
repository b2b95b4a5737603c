from sqlalchemy import Column, String, DateTime, Integer, Float, ForeignKey, CheckConstraint, Enum as SQLEnum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
import enum
from eventdesk.core.database import Base


class TicketTypeStatus(str, enum.Enum):
    ACTIVE = "active"
    PAUSED = "paused"
    SOLD_OUT = "sold_out"


class TicketType(Base):
    """
    Sellable category of admission with a fixed total capacity.

    quantity_sold is written only through CapacityLedger; the check
    constraint is the last line against overselling.
    """
    __tablename__ = "ticket_types"
    __table_args__ = (
        CheckConstraint("quantity_sold >= 0", name="ck_ticket_types_sold_non_negative"),
        CheckConstraint("quantity_sold <= quantity_total", name="ck_ticket_types_sold_within_total"),
    )

    id = Column(String(36), primary_key=True, index=True)

    event_id = Column(String(36), ForeignKey("events.id"), nullable=False, index=True)

    name = Column(String(100), nullable=False)
    price = Column(Float, nullable=False, default=0)

    quantity_total = Column(Integer, nullable=False)
    quantity_sold = Column(Integer, nullable=False, default=0)

    status = Column(
        SQLEnum(TicketTypeStatus),
        nullable=False,
        default=TicketTypeStatus.ACTIVE
    )

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

    event = relationship("Event", back_populates="ticket_types")
    instances = relationship("TicketInstance", back_populates="ticket_type", lazy="dynamic")

    @property
    def remaining(self) -> int:
        return self.quantity_total - self.quantity_sold

    def __repr__(self) -> str:
        return f"<TicketType(id={self.id}, name={self.name}, sold={self.quantity_sold}/{self.quantity_total})>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "eventId": self.event_id,
            "name": self.name,
            "price": self.price,
            "quantityTotal": self.quantity_total,
            "quantitySold": self.quantity_sold,
            "remaining": self.remaining,
            "status": self.status.value,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
