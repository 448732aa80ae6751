"""
Lesbarkeit: Silben-Heuristik, Flesch-Kincaid-Grade, Bildungsstufe,
lange Sätze und komplexes Vokabular.

Satzgrenzen hier bewusst einfach: Split an [.!?]+ (wie Statistik), damit
Satz-Indizes in difficult_sentences reproduzierbar bleiben.
"""

from __future__ import annotations

import math
import re
from typing import List, Optional

from app.services.grammar.grammar_models import (
    GRADE_LEVELS,
    Issue,
    IssueCategory,
    ReadabilityMetrics,
)
from app.services.grammar.ids import IdGenerator, resolve_id_generator

DIFFICULT_SENTENCE_THRESHOLD = 25
COMPLEX_WORD_LENGTH_THRESHOLD = 6

_VOWELS = "aeiouy"
_SENTENCE_BREAK = re.compile(r"[.!?]+")
_NON_ALPHA = re.compile(r"[^a-z]")
_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]")


def _round_half_up(value: float, digits: int = 0) -> float:
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def count_syllables(word: str) -> int:
    clean = _NON_ALPHA.sub("", (word or "").lower())
    if not clean:
        return 0
    if len(clean) <= 3:
        return 1

    count = 0
    previous_was_vowel = False
    for ch in clean:
        is_vowel = ch in _VOWELS
        if is_vowel and not previous_was_vowel:
            count += 1
        previous_was_vowel = is_vowel

    # stummes e
    if clean.endswith("e") and count > 1:
        count -= 1
    # "-le" nach Konsonant ist eine eigene Silbe (table, simple)
    if clean.endswith("le") and clean[-3] not in _VOWELS:
        count += 1

    return max(1, count)


def get_words(text: str) -> List[str]:
    return (text or "").split()


def count_total_syllables(text: str) -> int:
    return sum(count_syllables(w) for w in get_words(text))


def get_sentences(text: str) -> List[str]:
    if not text or not text.strip():
        return []
    parts = (p.strip() for p in _SENTENCE_BREAK.split(text))
    return [p for p in parts if p]


def calculate_flesch_kincaid_grade(text: str) -> float:
    words = get_words(text)
    sentences = get_sentences(text)
    if not words or not sentences:
        return 0.0

    syllables = count_total_syllables(text)
    grade = 0.39 * (len(words) / len(sentences)) + 11.8 * (syllables / len(words)) - 15.59
    return _round_half_up(grade, 1)


def get_education_level(grade: float) -> str:
    level = int(_round_half_up(grade)) if math.isfinite(grade) else 1
    level = max(1, min(17, level))
    return GRADE_LEVELS[level]


def calculate_average_word_length(text: str) -> float:
    words = get_words(text)
    if not words:
        return 0.0
    total = sum(len(_NON_ALNUM.sub("", w)) for w in words)
    return total / len(words)


def find_difficult_sentences(text: str) -> List[int]:
    return [
        idx
        for idx, sentence in enumerate(get_sentences(text))
        if len(get_words(sentence)) > DIFFICULT_SENTENCE_THRESHOLD
    ]


def calculate_readability(text: str) -> ReadabilityMetrics:
    words = get_words(text)
    sentences = get_sentences(text)
    grade = calculate_flesch_kincaid_grade(text)

    return ReadabilityMetrics(
        flesch_kincaid_grade=grade,
        education_level=get_education_level(grade),
        average_sentence_length=len(words) / len(sentences) if sentences else 0.0,
        average_word_length=calculate_average_word_length(text),
        difficult_sentences=find_difficult_sentences(text),
    )


def generate_readability_issues(text: str, id_generator: Optional[IdGenerator] = None) -> List[Issue]:
    """
    - Sätze mit > 25 Wörtern -> clarity/warning über den ganzen Satz
    - durchschnittliche Wortlänge > 6 -> ein clarity/suggestion über den ganzen Text
    """
    if not text or not text.strip():
        return []

    next_id = resolve_id_generator(id_generator)
    issues: List[Issue] = []

    cursor = 0
    for sentence in get_sentences(text):
        start = text.find(sentence, cursor)
        end = start + len(sentence)
        cursor = end

        word_count = len(get_words(sentence))
        if word_count > DIFFICULT_SENTENCE_THRESHOLD:
            issues.append(
                Issue(
                    id=next_id(),
                    category=IssueCategory.clarity,
                    severity="warning",
                    message="Long sentence detected",
                    description=(
                        f"This sentence has {word_count} words. Consider breaking it into "
                        "shorter sentences for better readability."
                    ),
                    start_index=start,
                    end_index=end,
                    original_text=sentence,
                    suggestions=[],
                    rule="long-sentence",
                )
            )

    avg = calculate_average_word_length(text)
    if avg > COMPLEX_WORD_LENGTH_THRESHOLD:
        issues.append(
            Issue(
                id=next_id(),
                category=IssueCategory.clarity,
                severity="suggestion",
                message="Complex vocabulary detected",
                description=(
                    f"The average word length is {avg:.1f} characters. Consider using "
                    "simpler words for better readability."
                ),
                start_index=0,
                end_index=len(text),
                original_text=text,
                suggestions=[],
                rule="complex-vocabulary",
            )
        )

    return issues
