"""Overall vault health from a stats snapshot."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .stats import VaultStats

FRONTMATTER_WEIGHT = 30
ORPHAN_WEIGHT = 20
BROKEN_LINK_WEIGHT = 25
DUPLICATE_PENALTY = 5


class HealthLevel(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"
    CRITICAL = "critical"


HEALTH_THRESHOLDS = (
    (HealthLevel.EXCELLENT, 90),
    (HealthLevel.GOOD, 75),
    (HealthLevel.FAIR, 60),
    (HealthLevel.POOR, 40),
)


@dataclass
class HealthScore:
    level: HealthLevel
    score: float  # 0..100
    issues: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "level": self.level.value,
            "score": self.score,
            "issues": list(self.issues),
            "suggestions": list(self.suggestions),
        }


def health_level(score: float) -> HealthLevel:
    for level, threshold in HEALTH_THRESHOLDS:
        if score >= threshold:
            return level
    return HealthLevel.CRITICAL


def get_health_score(stats: VaultStats) -> HealthScore:
    """Score a vault out of 100.

    ``stats.broken_links_count`` and ``stats.duplicate_count`` are not
    computed by ``generate_stats``; callers fill them in beforehand.
    """
    score = 100.0
    issues: list[str] = []
    suggestions: list[str] = []

    if stats.files_without_frontmatter > 0 and stats.total_files > 0:
        score -= stats.files_without_frontmatter / stats.total_files * FRONTMATTER_WEIGHT
        issues.append(f"{stats.files_without_frontmatter} files missing frontmatter")
        suggestions.append("Add frontmatter (title, tags, summary) to files that have none")

    orphans = len(stats.orphaned_files)
    # a lone note is always an orphan
    if orphans > 0 and stats.total_files > 1:
        score -= orphans / stats.total_files * ORPHAN_WEIGHT
        issues.append(f"{orphans} orphaned files")
        suggestions.append("Review orphaned files and add links to integrate them")

    if stats.broken_links_count > 0:
        ratio = stats.broken_links_count / stats.total_links if stats.total_links else 1.0
        score -= ratio * BROKEN_LINK_WEIGHT
        issues.append(f"{stats.broken_links_count} broken links")
        suggestions.append("Fix broken links ('vaultscope analyze links' lists link targets)")

    if stats.duplicate_count > 0:
        score -= stats.duplicate_count * DUPLICATE_PENALTY
        issues.append(f"{stats.duplicate_count} duplicate entries")
        suggestions.append("Review and resolve duplicate content")

    score = max(score, 0.0)
    return HealthScore(level=health_level(score), score=score, issues=issues, suggestions=suggestions)
