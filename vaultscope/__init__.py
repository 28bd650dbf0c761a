"""vaultscope - analytics for Markdown note vaults."""

__version__ = "0.3.0"
