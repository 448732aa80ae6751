"""
Tonalitäts-Analyse.

Ablauf:
1) Indikator-Zählung pro Lexikon (ganze Wörter, case-insensitive)
2) neutral = 1 nur wenn keine anderen Indikatoren gefunden wurden
3) dominanter Ton = höchster Score, Gleichstand -> feste Reihenfolge
4) Prozent-Breakdown, Summe ist immer exakt 100
5) Satz-Ebene: Abweichungen vom dominanten Ton -> Inkonsistenzen

Eine Inkonsistenz wird nur gemeldet, wenn das Signal im Satz stärker ist als
der dominante Ton im selben Satz. Neutral ist mit allem kompatibel.
"""

from __future__ import annotations

import logging
import math
import re
from typing import Dict, List, Optional, Sequence

from app.services.grammar.grammar_models import (
    TONE_TYPES,
    Correction,
    Issue,
    IssueCategory,
    ToneAnalysis,
    ToneBreakdown,
    ToneInconsistency,
    ToneType,
)
from app.services.grammar.ids import IdGenerator, resolve_id_generator
from app.services.grammar.sentences import SentenceSplitter, resolve_splitter

logger = logging.getLogger(__name__)

ToneScores = Dict[ToneType, int]

FORMAL_INDICATORS = [
    "therefore", "consequently", "furthermore", "moreover", "nevertheless",
    "notwithstanding", "henceforth", "hereby", "whereas", "whereby",
    "accordingly", "subsequently", "thus", "hence", "regarding",
    "concerning", "pertaining", "pursuant", "aforementioned", "herein",
    "shall", "ought", "must", "require", "necessitate",
    "demonstrate", "indicate", "illustrate", "establish", "constitute",
    "facilitate", "implement", "utilize", "endeavor", "commence",
    "terminate", "ascertain", "procure", "substantiate", "corroborate",
]

INFORMAL_INDICATORS = [
    "gonna", "wanna", "gotta", "kinda", "sorta", "dunno", "lemme",
    "yeah", "yep", "nope", "okay", "ok", "cool", "awesome", "stuff",
    "things", "lots", "tons", "super", "really", "pretty", "kind of",
    "sort of", "like", "basically", "actually", "literally", "totally",
    "absolutely", "definitely", "honestly", "seriously", "obviously",
    "hey", "hi", "bye", "thanks", "cheers", "lol", "omg", "btw",
    "don't", "won't", "can't", "shouldn't", "wouldn't", "couldn't",
    "isn't", "aren't", "wasn't", "weren't", "haven't", "hasn't",
]

CONFIDENT_INDICATORS = [
    "will", "must", "certainly", "definitely", "absolutely", "clearly",
    "undoubtedly", "unquestionably", "without doubt", "assuredly",
    "guaranteed", "proven", "established", "confirmed", "verified",
    "know", "believe", "confident", "sure", "certain", "convinced",
    "determined", "committed", "dedicated", "focused", "driven",
    "achieve", "accomplish", "succeed", "excel", "lead", "dominate",
    "best", "top", "premier", "leading", "superior", "exceptional",
    "always", "never", "every", "all", "none", "complete", "total",
]

FRIENDLY_INDICATORS = [
    "please", "thank", "thanks", "appreciate", "grateful", "welcome",
    "glad", "happy", "delighted", "pleased", "excited", "thrilled",
    "wonderful", "great", "fantastic", "amazing", "lovely", "nice",
    "help", "support", "assist", "guide", "share", "together",
    "we", "us", "our", "team", "community", "family", "friends",
    "hope", "wish", "look forward", "enjoy", "love", "care",
    "feel free", "no problem", "of course", "happy to", "glad to",
    "smile", "laugh", "fun", "joy", "warm", "kind", "gentle",
]


def _compile(indicators: Sequence[str]) -> List[re.Pattern]:
    return [re.compile(rf"\b{re.escape(term)}\b", re.IGNORECASE) for term in indicators]


_LEXICONS: Dict[ToneType, List[re.Pattern]] = {
    ToneType.formal: _compile(FORMAL_INDICATORS),
    ToneType.informal: _compile(INFORMAL_INDICATORS),
    ToneType.confident: _compile(CONFIDENT_INDICATORS),
    ToneType.friendly: _compile(FRIENDLY_INDICATORS),
}


def _count_indicators(text: str, patterns: Sequence[re.Pattern]) -> int:
    return sum(len(p.findall(text)) for p in patterns)


def calculate_tone_scores(text: str) -> ToneScores:
    scores: ToneScores = {tone: 0 for tone in TONE_TYPES}
    for tone, patterns in _LEXICONS.items():
        scores[tone] = _count_indicators(text or "", patterns)
    # neutral gewinnt nie gegen ein echtes Signal
    scores[ToneType.neutral] = 1 if sum(scores.values()) == 0 else 0
    return scores


def get_dominant_tone(scores: ToneScores) -> ToneType:
    best = ToneType.neutral
    best_score = -1
    for tone in TONE_TYPES:
        value = scores.get(tone, 0)
        if value > best_score:
            best, best_score = tone, value
    return best


def _neutral_breakdown() -> List[ToneBreakdown]:
    return [
        ToneBreakdown(tone=tone, percentage=100 if tone == ToneType.neutral else 0)
        for tone in TONE_TYPES
    ]


def normalize_to_percentages(scores: ToneScores) -> List[ToneBreakdown]:
    total = sum(scores.get(t, 0) for t in TONE_TYPES)
    if total <= 0:
        return _neutral_breakdown()

    percentages = [int(math.floor(scores.get(t, 0) / total * 100 + 0.5)) for t in TONE_TYPES]

    # Rundungsrest auf den (ersten) größten Eintrag
    diff = 100 - sum(percentages)
    if diff:
        largest = max(range(len(percentages)), key=lambda i: percentages[i])
        percentages[largest] += diff

    return [ToneBreakdown(tone=t, percentage=p) for t, p in zip(TONE_TYPES, percentages)]


def create_neutral_tone_analysis() -> ToneAnalysis:
    return ToneAnalysis(
        dominant=ToneType.neutral,
        breakdown=_neutral_breakdown(),
        is_consistent=True,
        inconsistencies=[],
    )


def analyze_sentence_tone(sentence: str) -> dict:
    scores = calculate_tone_scores(sentence)
    return {
        "tone": get_dominant_tone(scores),
        "scores": scores,
        "breakdown": normalize_to_percentages(scores),
    }


def _sentence_tones(text: str, splitter: Optional[SentenceSplitter]) -> List[dict]:
    out = []
    for span in resolve_splitter(splitter).split(text):
        scores = calculate_tone_scores(span.text)
        out.append(
            {
                "start": span.start,
                "end": span.end,
                "tone": get_dominant_tone(scores),
                "scores": scores,
            }
        )
    return out


def _detect_inconsistencies(sentence_tones: List[dict], dominant: ToneType) -> List[ToneInconsistency]:
    if dominant == ToneType.neutral:
        return []

    found: List[ToneInconsistency] = []
    for s in sentence_tones:
        tone = s["tone"]
        if tone == dominant or tone == ToneType.neutral:
            continue
        if s["scores"][tone] > s["scores"][dominant]:
            found.append(
                ToneInconsistency(
                    start_index=s["start"],
                    end_index=s["end"],
                    detected_tone=tone,
                    expected_tone=dominant,
                )
            )
    return found


def analyze_tone(text: str, splitter: Optional[SentenceSplitter] = None) -> ToneAnalysis:
    if not text or not text.strip():
        return create_neutral_tone_analysis()

    scores = calculate_tone_scores(text)
    dominant = get_dominant_tone(scores)
    inconsistencies = _detect_inconsistencies(_sentence_tones(text, splitter), dominant)

    return ToneAnalysis(
        dominant=dominant,
        breakdown=normalize_to_percentages(scores),
        is_consistent=not inconsistencies,
        inconsistencies=inconsistencies,
    )


def get_tone_suggestions(current: ToneType, target: ToneType) -> List[Correction]:
    if current == ToneType.informal and target == ToneType.formal:
        return [Correction(
            text="[rephrase formally]",
            confidence=0.6,
            description="Replace contractions and casual words with formal alternatives",
        )]
    if current == ToneType.formal and target == ToneType.informal:
        return [Correction(
            text="[rephrase casually]",
            confidence=0.6,
            description="Use contractions and simpler words for a more casual tone",
        )]
    if current == ToneType.confident and target != ToneType.confident:
        return [Correction(
            text="[soften language]",
            confidence=0.6,
            description='Use hedging words like "may", "might", "could" to soften assertions',
        )]
    if target == ToneType.friendly:
        return [Correction(
            text="[add warmth]",
            confidence=0.6,
            description="Add personal pronouns and positive language",
        )]
    return [Correction(
        text="[adjust tone]",
        confidence=0.5,
        description=f"Rephrase to match the {target.value} tone of the rest of the text",
    )]


def generate_tone_issues(
    text: str,
    splitter: Optional[SentenceSplitter] = None,
    id_generator: Optional[IdGenerator] = None,
    analysis: Optional[ToneAnalysis] = None,
) -> List[Issue]:
    analysis = analysis if analysis is not None else analyze_tone(text, splitter)
    if not analysis.inconsistencies:
        return []

    next_id = resolve_id_generator(id_generator)
    dominant = analysis.dominant.value
    issues: List[Issue] = []
    for inc in analysis.inconsistencies:
        detected = inc.detected_tone.value
        issues.append(
            Issue(
                id=next_id(),
                category=IssueCategory.delivery,
                severity="suggestion",
                message=f"Tone inconsistency: {detected} tone in {dominant} text",
                description=(
                    f"This sentence has a {detected} tone, but the overall text is {dominant}. "
                    "Consider adjusting for consistency."
                ),
                start_index=inc.start_index,
                end_index=inc.end_index,
                original_text=text[inc.start_index:inc.end_index],
                suggestions=get_tone_suggestions(inc.detected_tone, inc.expected_tone),
                rule="tone-inconsistency",
            )
        )

    logger.debug("tone: %d Inkonsistenzen (dominant=%s)", len(issues), dominant)
    return issues


def has_mixed_tones(text: str, splitter: Optional[SentenceSplitter] = None) -> bool:
    """True, wenn mindestens zwei Sätze unterschiedliche nicht-neutrale Töne haben."""
    tones = _sentence_tones(text or "", splitter)
    if len(tones) < 2:
        return False
    distinct = {s["tone"] for s in tones if s["tone"] != ToneType.neutral}
    return len(distinct) > 1


def is_valid_tone_analysis(analysis: ToneAnalysis) -> bool:
    if analysis.dominant not in TONE_TYPES:
        return False
    if len(analysis.breakdown) != len(TONE_TYPES):
        return False
    if {b.tone for b in analysis.breakdown} != set(TONE_TYPES):
        return False
    if any(b.percentage < 0 for b in analysis.breakdown):
        return False
    return sum(b.percentage for b in analysis.breakdown) == 100
