from sqlalchemy import Column, String, DateTime, Float, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from eventdesk.core.database import Base


class BudgetItem(Base):
    __tablename__ = "budget_items"

    id = Column(String(36), primary_key=True, index=True)

    event_id = Column(String(36), ForeignKey("events.id"), nullable=False, index=True)

    category = Column(String(100), nullable=False)
    item_name = Column(String(255), nullable=False)
    estimated_cost = Column(Float, nullable=False, default=0)
    actual_cost = Column(Float, nullable=True)
    vendor_name = Column(String(255), nullable=True)

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now()
    )

    event = relationship("Event", back_populates="budget_items")

    def __repr__(self) -> str:
        return f"<BudgetItem(id={self.id}, item_name={self.item_name}, event_id={self.event_id})>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "eventId": self.event_id,
            "category": self.category,
            "itemName": self.item_name,
            "estimatedCost": self.estimated_cost,
            "actualCost": self.actual_cost,
            "vendorName": self.vendor_name,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
