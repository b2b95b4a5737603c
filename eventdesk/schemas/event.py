from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime


class EventCreate(BaseModel):
    title: str = Field(..., min_length=3, max_length=255)
    description: Optional[str] = Field(None, max_length=5000)
    eventType: Optional[str] = Field(None, max_length=100)
    venue: Optional[str] = Field(None, max_length=255)
    startsAt: Optional[datetime] = None
    budgetTotal: float = Field(0, ge=0)
    maxCapacity: Optional[int] = Field(None, ge=0)

    @field_validator('title')
    @classmethod
    def strip_title(cls, v):
        v = v.strip()
        if len(v) < 3:
            raise ValueError('Title must be at least 3 characters')
        return v


class EventUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=3, max_length=255)
    description: Optional[str] = Field(None, max_length=5000)
    eventType: Optional[str] = Field(None, max_length=100)
    venue: Optional[str] = Field(None, max_length=255)
    startsAt: Optional[datetime] = None
    status: Optional[str] = Field(None, pattern="^(draft|published|cancelled)$")
    budgetTotal: Optional[float] = Field(None, ge=0)
    maxCapacity: Optional[int] = Field(None, ge=0)


class EventResponse(BaseModel):
    id: str
    ownerId: str
    title: str
    description: Optional[str] = None
    eventType: Optional[str] = None
    venue: Optional[str] = None
    startsAt: Optional[str] = None
    status: str
    budgetTotal: float
    maxCapacity: Optional[int] = None
    createdAt: Optional[str] = None
    updatedAt: Optional[str] = None


class EventCreateResponse(BaseModel):
    success: bool = True
    message: str = "Event created successfully"
    event: EventResponse


class EventDetailResponse(BaseModel):
    success: bool = True
    event: EventResponse


class EventsListResponse(BaseModel):
    success: bool = True
    events: List[EventResponse]


class TicketTypeCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    price: float = Field(0, ge=0)
    quantityTotal: int = Field(..., ge=0)


class TicketTypeResponse(BaseModel):
    id: str
    eventId: str
    name: str
    price: float
    quantityTotal: int
    quantitySold: int
    remaining: int
    status: str
    createdAt: Optional[str] = None
    updatedAt: Optional[str] = None


class TicketTypeCreateResponse(BaseModel):
    success: bool = True
    message: str = "Ticket type created successfully"
    ticketType: TicketTypeResponse


class TicketTypesListResponse(BaseModel):
    success: bool = True
    ticketTypes: List[TicketTypeResponse]


class TicketTypeStatusUpdate(BaseModel):
    status: str = Field(..., pattern="^(active|paused)$")


class TicketTypeDetailResponse(BaseModel):
    success: bool = True
    ticketType: TicketTypeResponse
