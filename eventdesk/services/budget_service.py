from typing import List
from sqlalchemy.orm import Session
from eventdesk.models.budget_item import BudgetItem
from eventdesk.models.ticket_type import TicketType
from eventdesk.repositories.budget_item_repository import BudgetItemRepository
from eventdesk.repositories.event_repository import EventRepository
from eventdesk.repositories.ticket_type_repository import TicketTypeRepository
from eventdesk.schemas.budget import BudgetItemCreate
from eventdesk.services.ownership import require_owned_event


class BudgetService:

    def __init__(self, db: Session):
        self.db = db
        self.event_repo = EventRepository(db)
        self.budget_repo = BudgetItemRepository(db)
        self.ticket_type_repo = TicketTypeRepository(db)

    def create_budget_item(
        self,
        owner_id: str,
        event_id: str,
        item_data: BudgetItemCreate
    ) -> BudgetItem:
        event = require_owned_event(self.event_repo, owner_id, event_id)
        return self.budget_repo.create(
            event_id=event.id,
            category=item_data.category.strip(),
            item_name=item_data.itemName.strip(),
            estimated_cost=item_data.estimatedCost,
            actual_cost=item_data.actualCost,
            vendor_name=item_data.vendorName
        )

    def get_budget_items(self, owner_id: str, event_id: str) -> List[BudgetItem]:
        event = require_owned_event(self.event_repo, owner_id, event_id)
        return self.budget_repo.get_by_event(event.id)

    def build_analysis(self, owner_id: str, event_id: str) -> dict:
        """
        Shape an event's budget and ticket sales into the analysis payload
        handed to the budget optimizer.
        """
        event = require_owned_event(self.event_repo, owner_id, event_id)
        budget_items = self.budget_repo.get_by_event(event.id)
        ticket_types = self.ticket_type_repo.get_by_event(event.id)

        return {
            "event": {
                "title": event.title,
                "type": event.event_type,
                "budget_total": event.budget_total or 0,
                "capacity": event.max_capacity,
            },
            "financials": summarize_financials(ticket_types, budget_items),
            "budget_items": [
                {
                    "category": item.category,
                    "name": item.item_name,
                    "estimated": item.estimated_cost,
                    "actual": item.actual_cost or 0,
                    "overspend": (item.actual_cost or 0) - item.estimated_cost,
                    "vendor": item.vendor_name,
                }
                for item in budget_items
            ],
            "overspend_items": [
                {
                    "category": item.category,
                    "name": item.item_name,
                    "overspend_amount": (item.actual_cost or 0) - item.estimated_cost,
                    "percentage_over": percentage_over(item),
                }
                for item in budget_items
                if (item.actual_cost or 0) > item.estimated_cost
            ],
        }


def summarize_financials(ticket_types: List[TicketType], budget_items: List[BudgetItem]) -> dict:
    total_revenue = sum(t.price * (t.quantity_sold or 0) for t in ticket_types)
    total_budget = sum(item.estimated_cost for item in budget_items)
    total_spent = sum(item.actual_cost or 0 for item in budget_items)
    margin = total_revenue - total_spent

    return {
        "total_revenue": total_revenue,
        "total_budget": total_budget,
        "total_spent": total_spent,
        "margin": margin,
        "margin_percentage": (margin / total_revenue) * 100 if total_revenue > 0 else 0,
    }


def percentage_over(item: BudgetItem) -> float:
    if not item.estimated_cost:
        return 0
    return ((item.actual_cost or 0) / item.estimated_cost - 1) * 100
