import logging
from typing import Optional

from app.models.pydantic import (
    AnalyzeRequest,
    CorrectRequest,
    CorrectResponse,
    DismissRequest,
    DismissResponse,
    UndismissRequest,
)
from app.services.grammar.analyzer import analyze_after_correction, analyze_text
from app.services.grammar.corrections import validate_correction
from app.services.grammar.dismissals import DismissalManager
from app.services.grammar.grammar_models import AnalysisResult, DismissalState

logger = logging.getLogger(__name__)


class GrammarService:
    """
    Zustandslose Fassade für die HTTP-Schicht.

    Pro Request wird ein eigener DismissalManager aus dem mitgeschickten State
    gebaut; zwischen Requests wird nichts im Server gehalten.
    """

    def _manager(self, state: Optional[DismissalState]) -> DismissalManager:
        manager = DismissalManager()
        if state is not None:
            manager.import_state(state)
        return manager

    def analyze(self, req: AnalyzeRequest) -> AnalysisResult:
        return analyze_text(req.text, self._manager(req.dismissal_state))

    def correct(self, req: CorrectRequest) -> CorrectResponse:
        manager = self._manager(req.dismissal_state)
        check = validate_correction(req.text, req.start_index, req.end_index, req.expected_original)
        if not check.is_valid:
            logger.warning("Korrektur abgelehnt: %s", check.message)
            return CorrectResponse(
                success=False,
                text=req.text,
                result=analyze_text(req.text, manager),
                error=check.error,
                message=check.message,
            )

        new_text, result = analyze_after_correction(
            req.text, req.start_index, req.end_index, req.correction, manager
        )
        return CorrectResponse(success=True, text=new_text, result=result)

    def dismiss(self, req: DismissRequest) -> DismissResponse:
        manager = self._manager(req.dismissal_state)
        key = manager.dismiss(req.issue)
        return DismissResponse(
            key=key,
            dismissal_state=manager.export_state(),
            result=analyze_text(req.text, manager),
        )

    def undismiss(self, req: UndismissRequest) -> DismissResponse:
        manager = self._manager(req.dismissal_state)
        changed = manager.undismiss_by_key(req.key)
        return DismissResponse(
            key=req.key,
            changed=changed,
            dismissal_state=manager.export_state(),
            result=analyze_text(req.text, manager),
        )
