import logging

from fastapi import APIRouter, HTTPException

from app.models.pydantic import (
    AnalyzeRequest,
    CorrectRequest,
    CorrectResponse,
    DismissRequest,
    DismissResponse,
    UndismissRequest,
)
from app.services.grammar.grammar_models import AnalysisResult
from app.services.grammar_service import GrammarService

logger = logging.getLogger(__name__)

router = APIRouter()
grammar_service = GrammarService()


# einfacher Health-Check
@router.get("/health")
async def health():
    return {"status": "ok"}


# Volle Analyse eines Textes (Issues, Score, Lesbarkeit, Ton, Statistik)
@router.post("/analyze", response_model=AnalysisResult)
def analyze(req: AnalyzeRequest):
    try:
        return grammar_service.analyze(req)
    except Exception as e:
        logger.exception("analyze fehlgeschlagen")
        raise HTTPException(status_code=500, detail=str(e))


# Korrektur anwenden + Neu-Analyse; ungültige Bereiche -> success=false, kein HTTP-Fehler
@router.post("/correct", response_model=CorrectResponse)
def correct(req: CorrectRequest):
    try:
        return grammar_service.correct(req)
    except Exception as e:
        logger.exception("correct fehlgeschlagen")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/dismiss", response_model=DismissResponse)
def dismiss(req: DismissRequest):
    try:
        return grammar_service.dismiss(req)
    except Exception as e:
        logger.exception("dismiss fehlgeschlagen")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/undismiss", response_model=DismissResponse)
def undismiss(req: UndismissRequest):
    try:
        return grammar_service.undismiss(req)
    except Exception as e:
        logger.exception("undismiss fehlgeschlagen")
        raise HTTPException(status_code=500, detail=str(e))
