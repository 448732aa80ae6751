"""
Grammatik-Analyse-Engine.

Unterstützt:
- Regel-Engine (Tippfehler, Apostrophe, Verwechslungen, Mechanik, Stil)
- Advanced Checks (Passiv, Phrasen, Klischees, Zahlenformat)
- Lesbarkeit (Flesch-Kincaid), Tonalität, Statistiken
- Writing-Score, Dismissal-Speicher, Korrekturen mit Undo
"""

from app.services.grammar.analyzer import (
    AnalysisEngine,
    analyze_after_correction,
    analyze_text,
    create_analysis_engine,
    create_empty_analysis_result,
)
from app.services.grammar.correction_handler import (
    CorrectionHandler,
    apply_correction_from_issue,
    apply_multiple_corrections,
    create_correction_handler,
)
from app.services.grammar.dismissals import DismissalManager, create_dismissal_manager
from app.services.grammar.grammar_models import CATEGORY_COLORS, AnalysisResult, Issue

__all__ = [
    "AnalysisEngine",
    "AnalysisResult",
    "CATEGORY_COLORS",
    "CorrectionHandler",
    "DismissalManager",
    "Issue",
    "analyze_after_correction",
    "analyze_text",
    "apply_correction_from_issue",
    "apply_multiple_corrections",
    "create_analysis_engine",
    "create_correction_handler",
    "create_dismissal_manager",
    "create_empty_analysis_result",
]
