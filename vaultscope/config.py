"""Load ``.vaultscope.toml`` settings."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .analysis.duplicates import DEFAULT_SIMILARITY_THRESHOLD
from .analysis.inbox import DEFAULT_INBOX_HEADINGS
from .analysis.trends import DEFAULT_GRANULARITY, DEFAULT_TIMESPAN
from .vault.loader import DEFAULT_IGNORE_PATTERNS

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".vaultscope.toml"


@dataclass
class Config:
    vault_path: Path | None = None
    ignore_patterns: list[str] = field(default_factory=lambda: list(DEFAULT_IGNORE_PATTERNS))
    similarity_threshold: float = DEFAULT_SIMILARITY_THRESHOLD
    timespan: str = DEFAULT_TIMESPAN
    granularity: str = DEFAULT_GRANULARITY
    inbox_headings: list[str] = field(default_factory=lambda: list(DEFAULT_INBOX_HEADINGS))
    inbox_min_items: int = 1
    source: Path | None = None  # file the settings came from, if any


def _coerce_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _string(section: dict[str, Any], key: str, default: str, name: str) -> str:
    value = section.get(key, default)
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{name} must be a non-empty string")
    return value.strip()


def _string_list(section: dict[str, Any], key: str, default: list[str], name: str) -> list[str]:
    value = section.get(key, default)
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValueError(f"{name} must be a list of strings")
    return list(value)


def parse_config(data: dict[str, Any], base_dir: Path | None = None) -> Config:
    """Build a Config from parsed TOML. Unknown keys are ignored.

    A relative ``vault.path`` is resolved against ``base_dir``.
    """
    vault = _coerce_dict(data.get("vault"))
    analyze = _coerce_dict(data.get("analyze"))
    config = Config()

    raw_path = vault.get("path")
    if raw_path is not None:
        if not isinstance(raw_path, str) or not raw_path.strip():
            raise ValueError("vault.path must be a non-empty string")
        path = Path(raw_path).expanduser()
        if not path.is_absolute() and base_dir is not None:
            path = base_dir / path
        config.vault_path = path

    config.ignore_patterns = _string_list(vault, "ignore_patterns", config.ignore_patterns, "vault.ignore_patterns")

    threshold = analyze.get("similarity_threshold", config.similarity_threshold)
    if isinstance(threshold, bool) or not isinstance(threshold, (int, float)):
        raise ValueError("analyze.similarity_threshold must be a number")
    if not 0 < threshold <= 1:
        raise ValueError("analyze.similarity_threshold must be in (0, 1]")
    config.similarity_threshold = float(threshold)

    config.timespan = _string(analyze, "timespan", config.timespan, "analyze.timespan")
    config.granularity = _string(analyze, "granularity", config.granularity, "analyze.granularity")
    config.inbox_headings = _string_list(analyze, "inbox_headings", config.inbox_headings, "analyze.inbox_headings")

    min_items = analyze.get("inbox_min_items", config.inbox_min_items)
    if isinstance(min_items, bool) or not isinstance(min_items, int) or min_items < 0:
        raise ValueError("analyze.inbox_min_items must be a non-negative integer")
    config.inbox_min_items = min_items

    return config


def load_config(path: Path | None = None, vault_path: Path | None = None) -> Config:
    """Load settings from ``path``, or from the vault's ``.vaultscope.toml``.

    An explicit ``path`` must exist. Without one, a missing vault config file
    means built-in defaults.
    """
    import tomllib

    if path is None:
        candidate = (vault_path or Path(".")) / CONFIG_FILENAME
        if not candidate.is_file():
            logger.debug("No config file at %s, using defaults", candidate)
            return Config()
        path = candidate
    elif not path.is_file():
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ValueError(f"Invalid TOML in {path}: {e}") from e

    config = parse_config(data, base_dir=path.parent)
    config.source = path
    logger.debug("Loaded config from %s", path)
    return config
