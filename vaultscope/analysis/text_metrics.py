"""
Text metrics for note bodies.

Sentence, word, and syllable counting plus Markdown stripping, used by
readability and topic-coherence scoring.

All functions are pure (stateless) and operate on text input.
"""

from __future__ import annotations

import re
from collections import Counter


# -----------------------------------------------------------------------------
# Stoplist
# -----------------------------------------------------------------------------

# Common words of four letters or more that say nothing about a note's topic.
COMMON_WORDS = frozenset({
    "that", "with", "have", "this", "will", "your", "from", "they", "know", "want",
    "been", "good", "much", "some", "time", "very", "when", "come", "here", "just",
    "like", "long", "make", "many", "over", "such", "take", "than", "them", "well",
    "were", "also", "back", "call", "came", "each", "find", "give", "hand", "high",
    "keep", "last", "left", "life", "live", "look", "made", "most", "move", "must",
    "name", "need", "next", "open", "part", "play", "said", "same", "seem", "show",
    "side", "tell", "turn", "used", "ways", "week", "went", "what", "work", "year",
    "years", "about", "after", "again", "before", "being", "could", "every", "first",
    "found", "great", "group", "might", "never", "often", "other", "place", "right",
    "should", "small", "still", "their", "there", "these", "think", "three", "through",
    "under", "until", "water", "where", "which", "while", "world", "would", "write",
    "young",
})


# -----------------------------------------------------------------------------
# Markdown stripping
# -----------------------------------------------------------------------------

CODE_BLOCK_PATTERN = re.compile(r"```[\s\S]*?```")
INLINE_CODE_PATTERN = re.compile(r"`[^`]+`")
MARKDOWN_LINK_PATTERN = re.compile(r"\[([^\]]+)\]\([^)]+\)")
WIKI_LINK_PATTERN = re.compile(r"\[\[([^|\]]+)(\|[^\]]+)?\]\]")
HEADING_MARKER_PATTERN = re.compile(r"^#+\s*")
LIST_MARKER_PATTERN = re.compile(r"^(\s*[-*+]\s*|\s*\d+\.\s*)")

SENTENCE_END_PATTERN = re.compile(r"[.!?]+")
NON_LETTER_PATTERN = re.compile(r"[^a-z]")
VOWEL_GROUP_PATTERN = re.compile(r"[aeiouy]+")


def extract_readable_text(markdown: str) -> str:
    """Remove Markdown formatting, keeping the prose.

    Code blocks and inline code are dropped; links and wiki-links are reduced
    to their text; heading and list markers are stripped line by line.
    """
    text = CODE_BLOCK_PATTERN.sub("", markdown)
    text = INLINE_CODE_PATTERN.sub("", text)
    text = MARKDOWN_LINK_PATTERN.sub(r"\1", text)
    text = WIKI_LINK_PATTERN.sub(r"\1", text)

    lines = [HEADING_MARKER_PATTERN.sub("", line) for line in text.split("\n")]
    lines = [LIST_MARKER_PATTERN.sub("", line) for line in lines]
    return "\n".join(lines)


# -----------------------------------------------------------------------------
# Counting
# -----------------------------------------------------------------------------

def words(text: str) -> list[str]:
    """Whitespace-separated tokens."""
    return text.split()


def word_count(text: str) -> int:
    return len(text.split())


def count_sentences(text: str) -> int:
    """Count runs of sentence-ending punctuation; at least 1 for non-blank text."""
    count = len(SENTENCE_END_PATTERN.findall(text))
    if count == 0 and text.strip():
        count = 1
    return count


def estimate_syllables(word: str) -> int:
    """Estimate syllables in one lowercase word from its vowel groups."""
    if not word:
        return 0

    clean = NON_LETTER_PATTERN.sub("", word)
    if not clean:
        return 1

    syllables = len(VOWEL_GROUP_PATTERN.findall(clean))
    # silent trailing e
    if clean.endswith("e") and syllables > 1:
        syllables -= 1

    return max(syllables, 1)


def count_syllables(text: str) -> int:
    return sum(estimate_syllables(w) for w in text.lower().split())


def flesch_reading_ease(text: str) -> float | None:
    """Flesch Reading Ease of ``text``; None when there are no words."""
    sentences = count_sentences(text)
    n_words = word_count(text)
    if sentences == 0 or n_words == 0:
        return None

    asl = n_words / sentences
    asw = count_syllables(text) / n_words
    return 206.835 - (1.015 * asl) - (84.6 * asw)


def topic_coherence(text: str) -> float:
    """How much of the significant vocabulary the five most frequent terms cover.

    Returns a factor in [0.5, 1.0]. Short texts (under 10 tokens) count as
    fully coherent; texts without any significant token return 0.5.
    """
    tokens = text.lower().split()
    if len(tokens) < 10:
        return 1.0

    freq = Counter(t for t in tokens if len(t) >= 4 and t not in COMMON_WORDS)
    if not freq:
        return 0.5

    total = sum(freq.values())
    top = sum(count for _, count in freq.most_common(5))

    return min(1.0, 0.5 + (top / total) * 0.5)
