from typing import Optional

from pydantic import BaseModel, Field

from app.services.grammar.grammar_models import (
    AnalysisResult,
    CorrectionError,
    DismissalState,
    Issue,
)


class AnalyzeRequest(BaseModel):
    """
    Request-Body für den /analyze-Endpoint.
    Dismissal-State gehört dem Client und wird bei jedem Aufruf mitgeschickt.
    """
    text: str
    dismissal_state: Optional[DismissalState] = None


class CorrectRequest(BaseModel):
    """
    Request-Body für den /correct-Endpoint.
    expected_original: optional, sonst wird nur der Bereich geprüft.
    """
    text: str
    start_index: int
    end_index: int
    correction: str
    expected_original: Optional[str] = None
    dismissal_state: Optional[DismissalState] = None


class CorrectResponse(BaseModel):
    success: bool
    text: str
    result: AnalysisResult
    error: Optional[CorrectionError] = None
    message: Optional[str] = None


class DismissRequest(BaseModel):
    text: str
    issue: Issue
    dismissal_state: Optional[DismissalState] = None


class UndismissRequest(BaseModel):
    text: str
    key: str
    dismissal_state: DismissalState = Field(default_factory=DismissalState)


class DismissResponse(BaseModel):
    """
    Response für /dismiss und /undismiss: neuer State + gefiltertes Ergebnis.
    """
    key: str
    changed: bool = True
    dismissal_state: DismissalState
    result: AnalysisResult
