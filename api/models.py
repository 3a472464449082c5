"""
API Request and Response Models.

Pydantic models for validating API requests and serializing responses.
Field names are camelCase because they mirror the stored lead records.
"""

from typing import Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

from domain.lead import Lead

T = TypeVar("T")


# ============================================================================
# Envelope
# ============================================================================

class ApiResponse(BaseModel, Generic[T]):
    """Uniform response envelope for every /api endpoint."""
    success: bool
    data: Optional[T] = None
    error: Optional[str] = None


# ============================================================================
# Lead Models
# ============================================================================

class ScoreSummaryModel(BaseModel):
    areaA: float = 0
    areaB: float = 0
    areaC: float = 0
    average: float = 0
    answers: Optional[Dict[str, str]] = None
    discountConsent: Optional[bool] = None


class LeadModel(BaseModel):
    """Lead as returned by the API."""
    id: str
    createdAt: int = Field(..., description="Creation time in epoch milliseconds")
    company: str
    contact: str
    employeesRange: str
    email: str
    phone: str
    role: str = ""
    notes: str = ""
    consent: bool
    processed: bool = False
    firewallProvider: str = ""
    vpnProvider: str = ""
    scoreSummary: ScoreSummaryModel

    class Config:
        json_schema_extra = {
            "example": {
                "id": "5b0c8f7e-3f0a-4b6e-9a51-0c2d8f1e4a77",
                "createdAt": 1735689600000,
                "company": "Muster GmbH",
                "contact": "Max Mustermann",
                "employeesRange": "21-50",
                "email": "max@muster.de",
                "phone": "+49 123 456789",
                "role": "IT-Leitung",
                "notes": "",
                "consent": True,
                "processed": False,
                "firewallProvider": "",
                "vpnProvider": "",
                "scoreSummary": {"areaA": 4, "areaB": 3, "areaC": 2, "average": 3.0},
            }
        }

    @classmethod
    def from_domain(cls, lead: Lead) -> "LeadModel":
        return cls(**lead.to_record())


class LeadPageModel(BaseModel):
    """One page of leads, newest first."""
    items: List[LeadModel]
    next: Optional[str] = Field(None, description="Opaque cursor for the next page, null on the last page")


class DeleteResultModel(BaseModel):
    deleted: bool


class LeadStatsModel(BaseModel):
    """Number of leads per overall maturity level."""
    total: int
    low: int
    medium: int
    high: int


# ============================================================================
# Quiz Models
# ============================================================================

class AnswerOptionModel(BaseModel):
    id: str
    text: str
    score: int


class QuestionModel(BaseModel):
    id: str
    text: str
    subtext: Optional[str] = None
    options: List[AnswerOptionModel]


class AnswersRequest(BaseModel):
    """Selected option id per question id. Missing or empty means unanswered."""
    answers: Dict[str, str] = Field(default_factory=dict)
    lang: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "answers": {"L1-A": "L1-A-1", "L1-B": "L1-B-3", "L1-C": "L1-C-2"},
                "lang": "de",
            }
        }


class VisibleQuestionsModel(BaseModel):
    """Question ids per quiz level for the given answers."""
    level1: List[str]
    level2: List[str]
    level3: List[str]


class AreaResultModel(BaseModel):
    key: str
    title: str
    description: str
    score: int
    level: str
    label: str
    text: str
    color: str
    bgColor: str


class ResultsModel(BaseModel):
    lang: str
    areaA: int
    areaB: int
    areaC: int
    average: float
    level: str
    headline: str
    summary: str
    areas: List[AreaResultModel]
    answeredCount: int
    totalQuestions: int
