"""
Satz-Segmentierung für Tonalität und Passiv-Erkennung.

Die Analyse braucht nur Satz-Spans (start, end, text) im Originaltext. Welche
Bibliothek segmentiert, ist austauschbar (SentenceSplitter-Protocol):

- SpacySentenceSplitter: spaCy blank-Pipeline + regelbasierter "sentencizer".
  Braucht kein statistisches Modell.
- RegexSentenceSplitter: trennt an Satzzeichen-Läufen (.!?).

Vertrag für alle Implementierungen: Spans überlappen nicht, sind aufsteigend
sortiert, ohne führenden/abschließenden Whitespace, nie leer, und es gilt
text[span.start:span.end] == span.text.
"""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from typing import List, Optional, Protocol

import spacy

from app.core.config import settings
from app.services.grammar.grammar_models import SentenceSpan

logger = logging.getLogger(__name__)

_SENTENCE_CHUNK = re.compile(r"[^.!?]+[.!?]*")


class SentenceSplitter(Protocol):
    def split(self, text: str) -> List[SentenceSpan]:
        ...


def _trimmed_span(text: str, start: int, end: int) -> Optional[SentenceSpan]:
    chunk = text[start:end]
    stripped = chunk.strip()
    if not stripped:
        return None
    lead = len(chunk) - len(chunk.lstrip())
    s = start + lead
    return SentenceSpan(start=s, end=s + len(stripped), text=stripped)


class RegexSentenceSplitter:
    def split(self, text: str) -> List[SentenceSpan]:
        spans: List[SentenceSpan] = []
        for m in _SENTENCE_CHUNK.finditer(text or ""):
            span = _trimmed_span(text, m.start(), m.end())
            if span is not None:
                spans.append(span)
        return spans


class SpacySentenceSplitter:
    """
    spaCy-basierte Segmentierung.

    Die Pipeline wird beim ersten Aufruf gebaut und pro Instanz gehalten.
    """

    def __init__(self, language: str = "en"):
        self.language = language
        self._nlp = None

    def _pipeline(self):
        if self._nlp is None:
            nlp = spacy.blank(self.language)
            nlp.add_pipe("sentencizer")
            self._nlp = nlp
            logger.debug("spaCy sentencizer geladen (lang=%s)", self.language)
        return self._nlp

    def split(self, text: str) -> List[SentenceSpan]:
        if not text or not text.strip():
            return []
        nlp = self._pipeline()
        # max_length schützt nur Parser/NER; der sentencizer braucht die Grenze nicht
        if len(text) >= nlp.max_length:
            nlp.max_length = len(text) + 1
        doc = nlp(text)
        spans: List[SentenceSpan] = []
        for sent in doc.sents:
            span = _trimmed_span(text, sent.start_char, sent.end_char)
            if span is not None:
                spans.append(span)
        return spans


@lru_cache(maxsize=None)
def _build_splitter(kind: str, language: str) -> SentenceSplitter:
    if kind == "regex":
        return RegexSentenceSplitter()
    if kind == "spacy":
        return SpacySentenceSplitter(language=language)
    raise ValueError(f"Unbekannter sentence_splitter: {kind!r}")


def get_sentence_splitter() -> SentenceSplitter:
    """Liefert den konfigurierten Default-Splitter (prozessweit gecacht)."""
    return _build_splitter(settings.sentence_splitter, settings.spacy_language)


def resolve_splitter(splitter: Optional[SentenceSplitter]) -> SentenceSplitter:
    return splitter if splitter is not None else get_sentence_splitter()
