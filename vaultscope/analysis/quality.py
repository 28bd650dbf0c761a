"""Zettelkasten content-quality scoring.

Each note gets five factor scores in [0, 1]:

- readability: Flesch Reading Ease of the prose, divided by 100
- link density: outbound links per 100 words, peaking at 3-4
- completeness: title, summary, and enough body text
- atomicity: one concept per note (length, heading structure, topic focus)
- recency: how recently the note was modified

The overall note score is their unweighted mean. ``analyze_content_quality``
aggregates scores over the vault and derives issues and suggestions.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Iterable

from ..models import NoteRecord
from . import text_metrics
from .timeutil import as_aware, local_now

SUMMARY_FIELDS = ("summary", "description", "abstract", "excerpt")

# Overall score thresholds, highest first.
SCORE_BUCKETS = (
    ("excellent", 0.9),
    ("good", 0.75),
    ("fair", 0.6),
    ("poor", 0.4),
    ("critical", 0.0),
)

# (max days since modification, score)
RECENCY_STEPS = (
    (7, 1.0),
    (30, 0.9),
    (90, 0.7),
    (150, 0.5),
    (365, 0.3),
)
RECENCY_FLOOR = 0.1

ATOMIC_WORD_LIMIT = 500


@dataclass
class FileQualityScore:
    path: str
    score: float  # mean of the five factors, 0..1
    readability_score: float
    link_density_score: float
    completeness_score: float
    atomicity_score: float
    recency_score: float
    suggested_fixes: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class ContentAnalysis:
    overall_score: float = 0.0  # mean file score, 0..1
    score_distribution: dict[str, int] = field(default_factory=dict)
    avg_content_length: float = 0.0
    avg_word_count: float = 0.0
    files_with_frontmatter: int = 0
    files_with_headings: int = 0
    files_with_links: int = 0
    quality_issues: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)
    file_scores: list[FileQualityScore] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))


# -----------------------------------------------------------------------------
# Factor scores
# -----------------------------------------------------------------------------

def readability_score(note: NoteRecord) -> float:
    if not note.body:
        return 0.0

    text = text_metrics.extract_readable_text(note.body)
    if not text:
        return 0.0

    flesch = text_metrics.flesch_reading_ease(text)
    if flesch is None:
        return 0.0
    return _clamp(flesch / 100.0)


def link_density_score(note: NoteRecord) -> float:
    words = text_metrics.word_count(note.body)
    if words == 0:
        return 0.0
    return link_density_for_rate(len(note.links) / words * 100.0)


def link_density_for_rate(links_per_100_words: float) -> float:
    """Piecewise score for a links-per-100-words rate; 3 to 4 is optimal."""
    x = links_per_100_words
    if 3.0 <= x <= 4.0:
        score = 1.0
    elif 2.0 <= x < 3.0:
        score = 0.8 + (x - 2.0) * 0.2
    elif 4.0 < x <= 6.0:
        score = 1.0 - (x - 4.0) * 0.1
    elif x > 6.0:
        # too many links, probably not focused
        score = 0.5
    elif x >= 1.0:
        score = x * 0.4
    else:
        score = 0.0
    return min(score, 1.0)


def _has_text(note: NoteRecord, field_name: str) -> bool:
    value = note.get(field_name)
    return value is not None and value.is_string and bool(value.value.strip())


def completeness_score(note: NoteRecord) -> float:
    score = 0.0
    if _has_text(note, "title"):
        score += 0.4
    if any(_has_text(note, f) for f in SUMMARY_FIELDS):
        score += 0.3

    words = text_metrics.word_count(note.body)
    if words >= 50:
        score += 0.3
    elif words >= 30:
        score += 0.2
    elif words >= 15:
        score += 0.1

    return _clamp(score)


def _heading_counts(note: NoteRecord) -> tuple[int, int]:
    h1 = sum(1 for h in note.headings if h.level == 1)
    h2 = sum(1 for h in note.headings if h.level == 2)
    return h1, h2


def atomicity_score(note: NoteRecord) -> float:
    score = 1.0

    words = text_metrics.word_count(note.body)
    if words > ATOMIC_WORD_LIMIT:
        score -= (words - ATOMIC_WORD_LIMIT) / 1000.0

    h1, h2 = _heading_counts(note)
    if h1 > 1:
        score -= (h1 - 1) * 0.3
    if h2 > 3:
        score -= (h2 - 3) * 0.1

    if words > 0:
        score *= text_metrics.topic_coherence(note.body)

    return _clamp(score)


def days_since_modified(note: NoteRecord, now: datetime | None = None) -> float:
    now = as_aware(now) if now is not None else local_now()
    return (now - as_aware(note.modified_at)).total_seconds() / 86400.0


def recency_score(note: NoteRecord, now: datetime | None = None) -> float:
    return recency_for_days(days_since_modified(note, now))


def recency_for_days(days: float) -> float:
    for limit, score in RECENCY_STEPS:
        if days <= limit:
            return score
    return RECENCY_FLOOR


# -----------------------------------------------------------------------------
# Per-file and vault-wide scoring
# -----------------------------------------------------------------------------

def score_file(note: NoteRecord, now: datetime | None = None) -> FileQualityScore:
    readability = readability_score(note)
    density = link_density_score(note)
    completeness = completeness_score(note)
    atomicity = atomicity_score(note)
    recency = recency_score(note, now)

    overall = (readability + density + completeness + atomicity + recency) / 5.0

    return FileQualityScore(
        path=note.relative_path,
        score=overall,
        readability_score=readability,
        link_density_score=density,
        completeness_score=completeness,
        atomicity_score=atomicity,
        recency_score=recency,
        suggested_fixes=suggest_fixes(note, readability, density, completeness, atomicity, recency),
    )


def score_bucket(score: float) -> str:
    for name, threshold in SCORE_BUCKETS:
        if score >= threshold:
            return name
    return "critical"


def analyze_content_quality(notes: Iterable[NoteRecord], now: datetime | None = None) -> ContentAnalysis:
    notes = list(notes)
    analysis = ContentAnalysis(score_distribution={name: 0 for name, _ in SCORE_BUCKETS})
    if not notes:
        return analysis

    now = as_aware(now) if now is not None else local_now()
    total_score = 0.0
    total_length = 0
    total_words = 0

    for note in notes:
        scored = score_file(note, now)
        analysis.file_scores.append(scored)
        analysis.score_distribution[score_bucket(scored.score)] += 1
        total_score += scored.score

        total_length += len(note.body)
        total_words += text_metrics.word_count(note.body)

        if note.frontmatter:
            analysis.files_with_frontmatter += 1
        if note.headings:
            analysis.files_with_headings += 1
        if note.links:
            analysis.files_with_links += 1

    n = len(notes)
    analysis.overall_score = total_score / n
    analysis.avg_content_length = total_length / n
    analysis.avg_word_count = total_words / n
    analysis.quality_issues, analysis.suggestions = quality_insights(analysis, n)

    analysis.file_scores.sort(key=lambda s: (-s.score, s.path))
    return analysis


def quality_insights(analysis: ContentAnalysis, total_files: int) -> tuple[list[str], list[str]]:
    """Vault-level issues and suggestions from aggregate counts."""
    issues: list[str] = []
    suggestions: list[str] = []
    if total_files == 0:
        return issues, suggestions

    # Integer thresholds, matching "fewer than half / a third / a quarter of files".
    if analysis.files_with_frontmatter < total_files // 2:
        missing = (total_files - analysis.files_with_frontmatter) / total_files * 100
        issues.append(f"{missing:.0f}% of files lack frontmatter")
        suggestions.append("Add frontmatter to files (title, tags, summary)")

    if analysis.files_with_headings < total_files // 3:
        missing = (total_files - analysis.files_with_headings) / total_files * 100
        issues.append(f"{missing:.0f}% of files lack heading structure")
        suggestions.append("Add headings to improve content structure")

    if analysis.files_with_links < total_files // 4:
        issues.append("Low interconnectivity between files")
        suggestions.append("Add more links between related content")

    if analysis.avg_word_count < 100:
        issues.append("Many files have very short content")
        suggestions.append("Consider expanding content or combining related short files")

    weak = analysis.score_distribution.get("critical", 0) + analysis.score_distribution.get("poor", 0)
    if weak > total_files // 4:
        issues.append(f"{weak} files have poor quality scores")
        suggestions.append("Focus on improving content structure and completeness")

    return issues, suggestions


def suggest_fixes(
    note: NoteRecord,
    readability: float,
    link_density: float,
    completeness: float,
    atomicity: float,
    recency: float,
) -> list[str]:
    """Targeted fixes for whichever factors are weak."""
    fixes: list[str] = []

    if readability < 0.4:
        fixes.append("Simplify sentence structure for better readability")
        fixes.append("Use shorter sentences and common vocabulary")

    if link_density < 0.3:
        fixes.append("Add more links to related concepts (aim for 2-4 links per 100 words)")
    elif link_density < 0.6:
        fixes.append("Consider adding a few more relevant links")

    words = text_metrics.word_count(note.body)

    if completeness < 0.7:
        if "title" not in note.frontmatter:
            fixes.append("Add a descriptive title in frontmatter")
        if not any(f in note.frontmatter for f in SUMMARY_FIELDS):
            fixes.append("Add a summary or description in frontmatter")
        if words < 50:
            fixes.append("Expand content - add more detail and context")

    if atomicity < 0.6:
        if words > ATOMIC_WORD_LIMIT:
            fixes.append("Consider breaking this into smaller, more focused notes")
        h1, _ = _heading_counts(note)
        if h1 > 1:
            fixes.append("Split multiple main topics into separate notes")

    if recency < 0.5:
        fixes.append("Review and update this note - it hasn't been modified recently")
        fixes.append("Add current date to track when content was last reviewed")

    if not fixes:
        fixes.append("This note has good quality - consider linking it to related concepts")

    return fixes
