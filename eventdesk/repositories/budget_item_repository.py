from typing import Optional, List
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from eventdesk.models.budget_item import BudgetItem
import uuid


class BudgetItemRepository:

    def __init__(self, db: Session):
        self.db = db

    def get_by_event(self, event_id: str) -> List[BudgetItem]:
        return self.db.query(BudgetItem).filter(
            BudgetItem.event_id == event_id
        ).order_by(BudgetItem.category, BudgetItem.item_name).all()

    def create(
        self,
        event_id: str,
        category: str,
        item_name: str,
        estimated_cost: float,
        actual_cost: Optional[float] = None,
        vendor_name: Optional[str] = None
    ) -> BudgetItem:
        item = BudgetItem(
            id=str(uuid.uuid4()),
            event_id=event_id,
            category=category,
            item_name=item_name,
            estimated_cost=estimated_cost,
            actual_cost=actual_cost,
            vendor_name=vendor_name
        )

        try:
            self.db.add(item)
            self.db.commit()
            self.db.refresh(item)
            return item
        except IntegrityError:
            self.db.rollback()
            raise
