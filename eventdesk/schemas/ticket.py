from pydantic import BaseModel, Field
from typing import Optional, List


class TicketBatchCreate(BaseModel):
    # Presence and range are checked by the issuance service; type errors
    # are rendered as InvalidRequest by the app's validation handler
    ticketTypeId: Optional[str] = None
    quantity: Optional[int] = None


class TicketRedeem(BaseModel):
    code: str = Field(..., min_length=1, max_length=255)


class TicketResponse(BaseModel):
    id: str
    ticketTypeId: str
    eventId: str
    codePayload: str
    artifactLocator: Optional[str] = None
    status: str
    createdAt: Optional[str] = None
    redeemedAt: Optional[str] = None


class FailedSlot(BaseModel):
    index: int
    reason: str
    error: str = "ArtifactStorageFailure"
    ticketId: Optional[str] = None


class TicketBatchResponse(BaseModel):
    success: bool = True
    message: str
    tickets: List[TicketResponse]
    failedSlots: List[FailedSlot] = []


class TicketListResponse(BaseModel):
    success: bool = True
    tickets: List[TicketResponse]
    total: int


class TicketActionResponse(BaseModel):
    success: bool = True
    message: str
    ticket: TicketResponse


class ArtifactRetryResponse(BaseModel):
    success: bool = True
    message: str
    repaired: List[TicketResponse]
    failedSlots: List[FailedSlot] = []
