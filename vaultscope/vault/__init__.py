"""Vault loading and parsing utilities."""

from .loader import load_vault, Vault
from .parser import extract_headings, extract_links
from .resolve import LinkParser, MarkdownLinkParser, count_broken_links, resolve_links

__all__ = [
    "load_vault",
    "Vault",
    "extract_headings",
    "extract_links",
    "LinkParser",
    "MarkdownLinkParser",
    "count_broken_links",
    "resolve_links",
]
