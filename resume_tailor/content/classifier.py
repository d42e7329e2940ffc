from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Literal

DocumentCategory = Literal["resume", "job_posting", "unknown"]

STRONG_WEIGHT = 2
MODERATE_WEIGHT = 1
SIMILARITY_WINDOW = 500

_I = re.IGNORECASE
_IM = re.IGNORECASE | re.MULTILINE

STRONG_RESUME_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\b(resume|cv|curriculum vitae)\b", _I),
    # Name-like opening line ("Jane Doe"); deliberately case-sensitive.
    re.compile(r"\A\s*[A-Z][a-z]+\s+[A-Z][a-z]+"),
    re.compile(r"\b(objective|summary|profile)\s*:?\s*$", _IM),
    re.compile(r"\b(references\s*(available|upon\s*request)|references\s*:)", _I),
    re.compile(r"\b(professional\s*summary|executive\s*summary)", _I),
    re.compile(r"\b(work\s*experience|employment\s*history|professional\s*experience)\s*:?", _I),
    re.compile(r"\b(phone|email|address|contact)\s*:?\s*[^\n]{5,}", _I),
)

MODERATE_RESUME_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\b(certifications|awards|honors|publications)\s*:?", _I),
    re.compile(r"\b(education\s*background|academic\s*background)", _I),
    re.compile(r"\b(technical\s*skills|core\s*competencies)\s*:?", _I),
)

STRONG_JOB_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(
        r"\b(job\s*(posting|description|ad|listing|opening)|position\s*description|role\s*description)\b",
        _I,
    ),
    re.compile(r"\b(we\s*are\s*(looking|seeking|hiring|recruiting)|we\s*have\s*an?\s*opening)", _I),
    re.compile(r"\b(apply\s*(now|today|online)|submit\s*your\s*(application|resume)|send\s*resume)", _I),
    re.compile(r"\b(qualifications?\s*(required|needed)|requirements?\s*(for|of))", _I),
    re.compile(r"\b(responsibilities?\s*(include|are)|key\s*duties|essential\s*functions)", _I),
    re.compile(r"\b(salary\s*(range|package)|compensation\s*package|competitive\s*salary)", _I),
    re.compile(r"\b(benefits\s*(package|include|offered)|employee\s*benefits)", _I),
    re.compile(r"\b(about\s*(the\s*company|us)|company\s*overview|who\s*we\s*are)", _I),
    re.compile(r"\b(job\s*title|position\s*title|role\s*title)\s*:?", _I),
    re.compile(r"\b(reporting\s*to|manager|supervisor)", _I),
    re.compile(r"\b(team|department|division)", _I),
    re.compile(r"\b(immediate\s*start|start\s*date|available\s*immediately)", _I),
    re.compile(r"\b(remote|hybrid|onsite|work\s*from\s*home)", _I),
    re.compile(r"\b(hourly\s*rate|per\s*hour|\$\s*\d+|\d+\s*per\s*hour)", _I),
)

MODERATE_JOB_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\b(location\s*:?\s*[^\n]+|work\s*location|office\s*location)", _I),
    re.compile(r"\b(employment\s*type|job\s*type|full\s*time|part\s*time|contract)", _I),
    re.compile(r"\b(equal\s*opportunity|eoe|diversity|inclusion)", _I),
    re.compile(r"\b(must\s*have|required\s*skills|preferred\s*qualifications)", _I),
    re.compile(r"\b(years?\s*of\s*experience|minimum\s*experience)", _I),
    re.compile(r"\b(bachelor|master|phd|degree)\s*(required|preferred)", _I),
    re.compile(r"\b(candidate|applicant|we\s*want|looking\s*for)", _I),
    re.compile(r"\b(join\s*our|become\s*part|work\s*with\s*us)", _I),
)


@dataclass(frozen=True)
class ClassifiedText:
    raw_text: str
    category: DocumentCategory
    resume_score: int
    job_score: int


# Ordered, first match wins. Job postings need less evidence than resumes so
# that the job-posting field is the one protected on ties.
CATEGORY_RULES: tuple[tuple[Callable[[int, int], bool], DocumentCategory], ...] = (
    (lambda resume, job: resume > job and resume >= 2, "resume"),
    (lambda resume, job: job > resume and job >= 1, "job_posting"),
    (lambda resume, job: job >= 1 and resume < 2, "job_posting"),
    (lambda resume, job: resume >= 2, "resume"),
)


def _score(text: str, strong: tuple[re.Pattern[str], ...], moderate: tuple[re.Pattern[str], ...]) -> int:
    score = sum(STRONG_WEIGHT for pattern in strong if pattern.search(text))
    score += sum(MODERATE_WEIGHT for pattern in moderate if pattern.search(text))
    return score


def decide_category(resume_score: int, job_score: int) -> DocumentCategory:
    for rule, category in CATEGORY_RULES:
        if rule(resume_score, job_score):
            return category
    return "unknown"


def classify(text: str | None) -> ClassifiedText:
    raw_text = text if isinstance(text, str) else ""
    if not raw_text.strip():
        return ClassifiedText(raw_text=raw_text, category="unknown", resume_score=0, job_score=0)

    resume_score = _score(raw_text, STRONG_RESUME_PATTERNS, MODERATE_RESUME_PATTERNS)
    job_score = _score(raw_text, STRONG_JOB_PATTERNS, MODERATE_JOB_PATTERNS)
    return ClassifiedText(
        raw_text=raw_text,
        category=decide_category(resume_score, job_score),
        resume_score=resume_score,
        job_score=job_score,
    )


def _word_set(text: str) -> set[str]:
    return set(text[:SIMILARITY_WINDOW].lower().split())


def similarity(a: str | None, b: str | None) -> float:
    """Jaccard index of the word sets in the first 500 characters of each text."""
    if not a or not b:
        return 0.0
    words_a = _word_set(a)
    words_b = _word_set(b)
    union = words_a | words_b
    if not union:
        # Whitespace-only on both sides.
        return 1.0 if a[:SIMILARITY_WINDOW] == b[:SIMILARITY_WINDOW] else 0.0
    return len(words_a & words_b) / len(union)
