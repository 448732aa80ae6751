"""Text-Statistiken: reine Funktionen über den Rohtext."""

from __future__ import annotations

import math
import re
from typing import Optional

from app.core.config import settings
from app.services.grammar.grammar_models import TextStatistics

_SENTENCE_END = re.compile(r"[.!?]+")
_PARAGRAPH_BREAK = re.compile(r"\n\s*\n")
_WHITESPACE = re.compile(r"\s")


def count_words(text: str) -> int:
    return len((text or "").split())


def count_characters(text: str) -> int:
    return len(text or "")


def count_characters_no_spaces(text: str) -> int:
    return len(_WHITESPACE.sub("", text or ""))


def count_sentences(text: str) -> int:
    if not text or not text.strip():
        return 0
    return len(_SENTENCE_END.findall(text))


def count_paragraphs(text: str) -> int:
    if not text or not text.strip():
        return 0
    paragraphs = [p for p in _PARAGRAPH_BREAK.split(text) if p.strip()]
    return max(1, len(paragraphs))


def calculate_average_sentence_length(text: str) -> float:
    sentences = count_sentences(text)
    return count_words(text) / sentences if sentences else 0.0


def calculate_reading_time(text: str, words_per_minute: Optional[int] = None) -> int:
    wpm = words_per_minute or settings.reading_speed_wpm
    words = count_words(text)
    return math.ceil(words / wpm) if words else 0


def calculate_statistics(text: str, words_per_minute: Optional[int] = None) -> TextStatistics:
    words = count_words(text)
    sentences = count_sentences(text)
    return TextStatistics(
        word_count=words,
        character_count=count_characters(text),
        character_count_no_spaces=count_characters_no_spaces(text),
        sentence_count=sentences,
        paragraph_count=count_paragraphs(text),
        average_sentence_length=words / sentences if sentences else 0.0,
        reading_time_minutes=calculate_reading_time(text, words_per_minute),
    )
