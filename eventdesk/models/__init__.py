from eventdesk.models.event import Event, EventStatus
from eventdesk.models.ticket_type import TicketType, TicketTypeStatus
from eventdesk.models.ticket_instance import TicketInstance, TicketStatus
from eventdesk.models.budget_item import BudgetItem

__all__ = [
    "Event",
    "EventStatus",
    "TicketType",
    "TicketTypeStatus",
    "TicketInstance",
    "TicketStatus",
    "BudgetItem",
]
