from sqlalchemy import Column, String, DateTime, ForeignKey, Enum as SQLEnum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
import enum
from eventdesk.core.database import Base


class TicketStatus(str, enum.Enum):
    AVAILABLE = "available"
    REDEEMED = "redeemed"
    VOID = "void"


class TicketInstance(Base):
    __tablename__ = "ticket_instances"

    id = Column(String(36), primary_key=True, index=True)

    ticket_type_id = Column(String(36), ForeignKey("ticket_types.id"), nullable=False, index=True)
    event_id = Column(String(36), ForeignKey("events.id"), nullable=False, index=True)

    code_payload = Column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
        comment="Scan identifier, also the QR payload"
    )
    artifact_locator = Column(String(500), nullable=True)

    status = Column(
        SQLEnum(TicketStatus),
        nullable=False,
        default=TicketStatus.AVAILABLE,
        index=True
    )

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now()
    )
    redeemed_at = Column(DateTime(timezone=True), nullable=True)

    ticket_type = relationship("TicketType", back_populates="instances")

    def __repr__(self) -> str:
        return f"<TicketInstance(id={self.id}, ticket_type_id={self.ticket_type_id}, status={self.status})>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "ticketTypeId": self.ticket_type_id,
            "eventId": self.event_id,
            "codePayload": self.code_payload,
            "artifactLocator": self.artifact_locator,
            "status": self.status.value if self.status else TicketStatus.AVAILABLE.value,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "redeemedAt": self.redeemed_at.isoformat() if self.redeemed_at else None,
        }
