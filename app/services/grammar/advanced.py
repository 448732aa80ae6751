"""
Zweite Regel-Ebene mit mehr Kontext als die Basis-Regeln:

- Passiv (Hilfsverb + Partizip, pro Satz gematcht)
- weitschweifige Phrasen (Phrase -> Alternativen)
- Klischees (Phrase -> Alternativen)
- uneinheitliche Zahlenschreibweise (Ziffern vs. Zahlwörter, dokumentweit)

Alle Treffer tragen exakte Offsets aus dem Regex-Match; kein indexOf-Suchen
nach dem Treffertext.
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional, Sequence, Tuple

from app.services.grammar.grammar_models import Correction, Issue, IssueCategory
from app.services.grammar.ids import IdGenerator, resolve_id_generator
from app.services.grammar.sentences import SentenceSplitter, resolve_splitter

logger = logging.getLogger(__name__)

# ---------- Passiv ---------- #

_IRREGULAR_PARTICIPLES = [
    "written", "done", "made", "taken", "given", "shown", "known", "seen",
    "found", "told", "thought", "felt", "left", "kept", "held", "brought",
    "bought", "caught", "taught", "sought", "fought", "meant", "sent",
    "spent", "built", "lent", "lost", "met", "paid", "said", "sold",
    "stood", "understood", "won", "wound", "woken", "worn", "woven",
    "eaten", "driven", "broken", "chosen", "spoken", "stolen", "forgotten",
    "hidden", "beaten", "bitten", "frozen", "drawn", "grown", "thrown",
    "begun", "sung", "put", "set", "cut", "hit", "read",
]

_AUXILIARY = (
    r"(?:(?:am|is|are|was|were)(?:\s+being)?"
    r"|(?:has|have|had)\s+been"
    r"|(?:will|would|shall|should|can|could|may|might|must)\s+be"
    r"|been|being|be)"
)
_PARTICIPLE = r"(?:\w{2,}ed|" + "|".join(_IRREGULAR_PARTICIPLES) + ")"

PASSIVE_PATTERN = re.compile(rf"\b{_AUXILIARY}\s+{_PARTICIPLE}\b", re.IGNORECASE)


def detect_passive_voice(
    text: str,
    splitter: Optional[SentenceSplitter] = None,
    id_generator: Optional[IdGenerator] = None,
) -> List[Issue]:
    if not text or not text.strip():
        return []

    next_id = resolve_id_generator(id_generator)
    issues: List[Issue] = []
    for span in resolve_splitter(splitter).split(text):
        for m in PASSIVE_PATTERN.finditer(span.text):
            start = span.start + m.start()
            end = span.start + m.end()
            issues.append(
                Issue(
                    id=next_id(),
                    category=IssueCategory.delivery,
                    severity="suggestion",
                    message="Consider using active voice",
                    description=(
                        "Passive voice can make writing less direct. "
                        "Consider rephrasing with active voice."
                    ),
                    start_index=start,
                    end_index=end,
                    original_text=text[start:end],
                    suggestions=[
                        Correction(
                            text="[rephrase with active voice]",
                            confidence=0.5,
                            description="Identify the actor and make them the subject",
                        )
                    ],
                    rule="passive-voice-nlp",
                )
            )
    return issues


# ---------- Phrasen-Tabellen ---------- #

WORDY_PHRASES: List[Tuple[str, List[str]]] = [
    ("in order to", ["to"]),
    ("due to the fact that", ["because"]),
    ("at this point in time", ["now"]),
    ("in the event that", ["if"]),
    ("for the purpose of", ["to", "for"]),
    ("in spite of the fact that", ["although", "despite"]),
    ("with regard to", ["about", "regarding"]),
    ("in the near future", ["soon"]),
    ("at the present time", ["now", "currently"]),
    ("in close proximity to", ["near"]),
    ("a large number of", ["many"]),
    ("a small number of", ["few"]),
    ("on a daily basis", ["daily"]),
    ("on a regular basis", ["regularly"]),
    ("in the process of", ["currently"]),
    ("has the ability to", ["can"]),
    ("is able to", ["can"]),
    ("make a decision", ["decide"]),
    ("take into consideration", ["consider"]),
    ("give consideration to", ["consider"]),
]

CLICHES: List[Tuple[str, List[str]]] = [
    ("at the end of the day", ["ultimately", "in conclusion"]),
    ("think outside the box", ["be creative", "innovate"]),
    ("low-hanging fruit", ["easy wins", "quick opportunities"]),
    ("move the needle", ["make progress", "have impact"]),
    ("hit the ground running", ["start quickly", "begin immediately"]),
    ("take it to the next level", ["improve", "advance"]),
    ("give 110 percent", ["work hard", "do your best"]),
    ("push the envelope", ["innovate", "challenge limits"]),
    ("circle back", ["revisit", "return to"]),
    ("touch base", ["contact", "check in"]),
    ("deep dive", ["thorough analysis", "detailed examination"]),
    ("bandwidth", ["capacity", "availability"]),
    ("leverage", ["use", "utilize"]),
    ("synergy", ["collaboration", "combined effort"]),
    ("paradigm shift", ["fundamental change", "transformation"]),
    ("game changer", ["breakthrough", "significant development"]),
    ("best practices", ["recommended approaches", "proven methods"]),
    ("win-win", ["mutually beneficial", "advantageous for all"]),
    ("on the same page", ["in agreement", "aligned"]),
    ("drill down", ["examine closely", "analyze in detail"]),
]


def _phrase_rule_id(prefix: str, phrase: str) -> str:
    slug = re.sub(r"\s+", "-", phrase)
    return f"{prefix}-{slug}"


def _scan_phrases(
    text: str,
    table: Sequence[Tuple[str, List[str]]],
    *,
    prefix: str,
    category: IssueCategory,
    confidence: float,
    next_id: IdGenerator,
) -> List[Issue]:
    issues: List[Issue] = []
    for phrase, alternatives in table:
        quoted = "' or '".join(alternatives)
        if category == IssueCategory.clarity:
            message = f"Wordy phrase: consider using '{alternatives[0]}'"
            description = f"'{phrase}' can be simplified to '{quoted}'."
        else:
            message = f"Cliché detected: '{phrase}'"
            description = f"Consider a more original expression like '{quoted}'."

        # finditer: nicht überlappend, links nach rechts, weiter direkt nach Match-Ende
        for m in re.finditer(re.escape(phrase), text, re.IGNORECASE):
            issues.append(
                Issue(
                    id=next_id(),
                    category=category,
                    severity="suggestion",
                    message=message,
                    description=description,
                    start_index=m.start(),
                    end_index=m.end(),
                    original_text=m.group(0),
                    suggestions=[Correction(text=alt, confidence=confidence) for alt in alternatives],
                    rule=_phrase_rule_id(prefix, phrase),
                )
            )
    return issues


def detect_wordy_phrases(text: str, id_generator: Optional[IdGenerator] = None) -> List[Issue]:
    return _scan_phrases(
        text or "",
        WORDY_PHRASES,
        prefix="wordy",
        category=IssueCategory.clarity,
        confidence=0.8,
        next_id=resolve_id_generator(id_generator),
    )


def detect_cliches(text: str, id_generator: Optional[IdGenerator] = None) -> List[Issue]:
    return _scan_phrases(
        text or "",
        CLICHES,
        prefix="cliche",
        category=IssueCategory.engagement,
        confidence=0.7,
        next_id=resolve_id_generator(id_generator),
    )


# ---------- Zahlenschreibweise ---------- #

NUMBER_WORDS = [
    "zero", "one", "two", "three", "four", "five", "six", "seven", "eight", "nine",
    "ten", "eleven", "twelve", "thirteen", "fourteen", "fifteen", "sixteen",
    "seventeen", "eighteen", "nineteen", "twenty",
]

_DIGIT_PATTERN = re.compile(r"\b([1-9]|1[0-9]|20)\b")
_WORD_PATTERN = re.compile(r"\b(" + "|".join(NUMBER_WORDS) + r")\b", re.IGNORECASE)


def number_to_word(value: int) -> str:
    if 0 <= value < len(NUMBER_WORDS):
        return NUMBER_WORDS[value]
    return str(value)


def detect_inconsistent_number_formatting(
    text: str, id_generator: Optional[IdGenerator] = None
) -> List[Issue]:
    """
    Ziffern (1-20) und Zahlwörter (zero-twenty) gemischt -> die seltenere Form
    wird markiert. Gleichstand: Ziffern werden markiert.
    """
    text = text or ""
    digits = list(_DIGIT_PATTERN.finditer(text))
    words = list(_WORD_PATTERN.finditer(text))
    if not digits or not words:
        return []

    flag_digits = len(digits) <= len(words)
    next_id = resolve_id_generator(id_generator)
    issues: List[Issue] = []
    for m in digits if flag_digits else words:
        if flag_digits:
            suggestion = number_to_word(int(m.group(0)))
        else:
            suggestion = str(NUMBER_WORDS.index(m.group(0).casefold()))
        issues.append(
            Issue(
                id=next_id(),
                category=IssueCategory.delivery,
                severity="suggestion",
                message="Inconsistent number formatting detected",
                description=(
                    "Consider using consistent number formatting (all digits or all words) "
                    "throughout your text."
                ),
                start_index=m.start(),
                end_index=m.end(),
                original_text=m.group(0),
                suggestions=[Correction(text=suggestion, confidence=0.6)],
                rule="inconsistent-number-format",
            )
        )
    return issues


def run_advanced_checks(
    text: str,
    splitter: Optional[SentenceSplitter] = None,
    id_generator: Optional[IdGenerator] = None,
) -> List[Issue]:
    next_id = resolve_id_generator(id_generator)
    issues = [
        *detect_passive_voice(text, splitter, next_id),
        *detect_wordy_phrases(text, next_id),
        *detect_cliches(text, next_id),
        *detect_inconsistent_number_formatting(text, next_id),
    ]
    logger.debug("advanced: %d Treffer", len(issues))
    return sorted(issues, key=lambda i: i.start_index)
