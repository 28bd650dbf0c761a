"""
Analytics over loaded vault notes.

Every function here takes a list of read-only note records and returns a
fresh result object; nothing touches the filesystem. Organized by role:
- stats: vault-wide counts and per-field distributions
- duplicates: field-value and body-content duplicates
- links: link graph, orphans, centrality
- quality: five-factor note quality model (uses text_metrics)
- trends: activity over time
- conflicts: sync-conflict files and Obsidian numbered copies
- inbox: unprocessed INBOX sections
- health: single score from a stats snapshot
"""

from .conflicts import (
    ObsidianCopy,
    SyncConflictFile,
    find_obsidian_copies,
    find_sync_conflict_files,
)
from .duplicates import (
    ContentDuplicate,
    Duplicate,
    MatchType,
    find_content_duplicates,
    find_duplicates,
)
from .health import HealthLevel, HealthScore, get_health_score
from .inbox import InboxAnalysis, InboxSection, analyze_inbox
from .links import CentralFile, LinkAnalysis, LinkGraph, analyze_links, find_orphaned_files
from .quality import ContentAnalysis, FileQualityScore, analyze_content_quality, score_file
from .stats import FieldAnalysis, VaultStats, analyze_field, generate_stats
from .trends import TagTrend, TimelinePoint, TrendsAnalysis, analyze_trends

__all__ = [
    # Stats
    "VaultStats",
    "FieldAnalysis",
    "generate_stats",
    "analyze_field",
    # Duplicates
    "Duplicate",
    "ContentDuplicate",
    "MatchType",
    "find_duplicates",
    "find_content_duplicates",
    # Links
    "LinkGraph",
    "LinkAnalysis",
    "CentralFile",
    "analyze_links",
    "find_orphaned_files",
    # Quality
    "ContentAnalysis",
    "FileQualityScore",
    "analyze_content_quality",
    "score_file",
    # Trends
    "TrendsAnalysis",
    "TimelinePoint",
    "TagTrend",
    "analyze_trends",
    # Conflicts
    "SyncConflictFile",
    "ObsidianCopy",
    "find_sync_conflict_files",
    "find_obsidian_copies",
    # Inbox
    "InboxAnalysis",
    "InboxSection",
    "analyze_inbox",
    # Health
    "HealthLevel",
    "HealthScore",
    "get_health_score",
]
