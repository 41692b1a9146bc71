"""Splitting generated report text into the four named report sections.

The prompt asks the model for four plain-text sections introduced by the
headers in ``SECTION_HEADERS``. Models do not always comply, so extraction
walks a fallback ladder:

1. ``STRUCTURED``: every header found, in any order; each body runs to the next header.
2. ``PARTIAL``: some headers found; missing sections get default text.
3. ``FULL_TEXT``: no headers at all; the whole text becomes the behavioral
   analysis and the other three sections get default text.
4. ``DEFAULT``: nothing usable; all four sections get default text.

Extraction never raises. A header repeated at the start of a line inside a
section body ends that body early; this is a known limitation.
"""
import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Tuple

from .models import NarrativeSections


logger = logging.getLogger(__name__)


# Shared by the prompt builder and the extractor. Keys are NarrativeSections fields.
SECTION_HEADERS: Dict[str, str] = {
    "behavioral_analysis": "BEHAVIORAL ANALYSIS",
    "context_analysis": "CONTEXT ANALYSIS",
    "recommended_actions": "RECOMMENDED ACTIONS",
    "communication_strategies": "COMMUNICATION STRATEGIES",
}

DEFAULT_SECTION_TEXT: Dict[str, str] = {
    "behavioral_analysis": (
        "The behavior changes you described can have many possible explanations. "
        "Stress at work, health concerns, personal struggles or shifting priorities "
        "often show up as distance or changes in routine. These patterns alone do "
        "not point to any single cause."
    ),
    "context_analysis": (
        "Every relationship moves through phases, and the length of your relationship, "
        "your life circumstances and outside pressures all shape how partners relate "
        "to each other. Changes like these are worth paying attention to without "
        "assuming the worst."
    ),
    "recommended_actions": (
        "Choose a calm, private moment to talk about how you have been feeling. "
        "Focus on your own experience rather than on accusations, and consider "
        "speaking with a licensed couples counselor who can help you both work "
        "through what is happening."
    ),
    "communication_strategies": (
        "Use \"I\" statements such as \"I have been feeling disconnected lately\" "
        "instead of statements that assign blame. Listen openly to your partner's "
        "perspective, ask open questions, and give the conversation time. Honest, "
        "non-judgmental communication is the best way to understand what is going on."
    ),
}

_SPELLING_VARIANTS = {
    "BEHAVIORAL": r"BEHAVIOU?RAL",
}


class ExtractionStrategy(str, Enum):
    STRUCTURED = "structured"
    PARTIAL = "partial"
    FULL_TEXT = "full_text"
    DEFAULT = "default"


@dataclass(frozen=True)
class SectionSpan:
    key: str
    start: int
    end: int
    body: str


def _header_pattern(header: str) -> re.Pattern:
    # A header must end its line or be followed by a colon or dash separator.
    words = [_SPELLING_VARIANTS.get(w, re.escape(w)) for w in header.split()]
    return re.compile(
        r"^[ \t>#*_`]*"
        r"(?:(?:\d+[.)]|[-•+])[ \t]+)?"
        r"[ \t#*_`]*"
        + r"[ \t_-]+".join(words)
        + r"(?![A-Za-z])[ \t]*[*_`]*[ \t]*(?:[:\-–—][ \t]*[*_`]*|(?=\r?$))",
        re.IGNORECASE | re.MULTILINE,
    )


_HEADER_PATTERNS: List[Tuple[str, re.Pattern]] = [
    (key, _header_pattern(header)) for key, header in SECTION_HEADERS.items()
]

_HEADING_RE = re.compile(r"^[ \t]*#{1,6}(?=[ \t]|$)[ \t]*", re.MULTILINE)
_BULLET_RE = re.compile(r"^[ \t]*[-*•+][ \t]+", re.MULTILINE)
_ENUMERATION_RE = re.compile(r"^[ \t]*\d+[.)][ \t]+", re.MULTILINE)
_EMPHASIS_RE = re.compile(r"\*+|_{2,}|`+")
_BLANK_RUN_RE = re.compile(r"\n{3,}")


def tokenize_sections(raw: str) -> List[SectionSpan]:
    """Locate the canonical headers and slice the text between them.

    Every header match is a boundary, whatever order the model wrote the
    sections in. Only the first match of each header opens a section.
    """
    matches: List[Tuple[int, int, str]] = []
    for key, pattern in _HEADER_PATTERNS:
        for match in pattern.finditer(raw):
            matches.append((match.start(), match.end(), key))
    matches.sort()

    spans: List[SectionSpan] = []
    seen = set()
    for i, (start, body_start, key) in enumerate(matches):
        end = matches[i + 1][0] if i + 1 < len(matches) else len(raw)
        if key in seen:
            continue
        seen.add(key)
        spans.append(SectionSpan(key=key, start=start, end=end, body=raw[body_start:end]))
    return spans


def clean_section(text: str) -> str:
    """Remove markdown leftovers and list markers from one section's text."""
    if not text:
        return ""
    text = text.replace("\r\n", "\n")
    text = _HEADING_RE.sub("", text)
    text = _BULLET_RE.sub("", text)
    text = _ENUMERATION_RE.sub("", text)
    text = _EMPHASIS_RE.sub("", text)
    lines = [line.strip() for line in text.split("\n")]
    text = _BLANK_RUN_RE.sub("\n\n", "\n".join(lines))
    return text.strip()


def extract_sections_with_strategy(raw: str) -> Tuple[NarrativeSections, ExtractionStrategy]:
    raw = raw or ""
    values = dict(DEFAULT_SECTION_TEXT)

    if not raw.strip():
        logger.warning("Generated text is empty; using default text for all sections")
        return NarrativeSections(**values), ExtractionStrategy.DEFAULT

    spans = tokenize_sections(raw)
    if not spans:
        body = clean_section(raw)
        if not body:
            logger.warning("Generated text has no usable content; using default text")
            return NarrativeSections(**values), ExtractionStrategy.DEFAULT
        logger.warning("No section headers found; using the full text as the behavioral analysis")
        values["behavioral_analysis"] = body
        return NarrativeSections(**values), ExtractionStrategy.FULL_TEXT

    for span in spans:
        body = clean_section(span.body)
        if body:
            values[span.key] = body
        else:
            logger.info("Section %s is empty; using default text", span.key)

    if len(spans) == len(SECTION_HEADERS):
        strategy = ExtractionStrategy.STRUCTURED
    else:
        strategy = ExtractionStrategy.PARTIAL
        missing = [key for key in SECTION_HEADERS if key not in {s.key for s in spans}]
        logger.warning("Missing section headers %s; using default text for them", missing)
    return NarrativeSections(**values), strategy


def extract_sections(raw: str) -> NarrativeSections:
    sections, strategy = extract_sections_with_strategy(raw)
    logger.info("Extracted report sections using %s strategy", strategy.value)
    return sections
