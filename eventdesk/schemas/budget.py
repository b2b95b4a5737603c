from pydantic import BaseModel, Field
from typing import Optional, List


class BudgetItemCreate(BaseModel):
    category: str = Field(..., min_length=1, max_length=100)
    itemName: str = Field(..., min_length=1, max_length=255)
    estimatedCost: float = Field(..., ge=0)
    actualCost: Optional[float] = Field(None, ge=0)
    vendorName: Optional[str] = Field(None, max_length=255)


class BudgetItemResponse(BaseModel):
    id: str
    eventId: str
    category: str
    itemName: str
    estimatedCost: float
    actualCost: Optional[float] = None
    vendorName: Optional[str] = None
    createdAt: Optional[str] = None


class BudgetItemCreateResponse(BaseModel):
    success: bool = True
    message: str = "Budget item created successfully"
    budgetItem: BudgetItemResponse


class BudgetItemsListResponse(BaseModel):
    success: bool = True
    budgetItems: List[BudgetItemResponse]


class AnalysisEvent(BaseModel):
    title: str
    type: Optional[str] = None
    budget_total: float
    capacity: Optional[int] = None


class AnalysisFinancials(BaseModel):
    total_revenue: float
    total_budget: float
    total_spent: float
    margin: float
    margin_percentage: float


class AnalysisBudgetItem(BaseModel):
    category: str
    name: str
    estimated: float
    actual: float
    overspend: float
    vendor: Optional[str] = None


class AnalysisOverspendItem(BaseModel):
    category: str
    name: str
    overspend_amount: float
    percentage_over: float


class BudgetAnalysis(BaseModel):
    event: AnalysisEvent
    financials: AnalysisFinancials
    budget_items: List[AnalysisBudgetItem]
    overspend_items: List[AnalysisOverspendItem]


class BudgetAnalysisResponse(BaseModel):
    success: bool = True
    analysis: BudgetAnalysis
    generated_at: str
