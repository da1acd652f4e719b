"""
SQL text rewriting helpers.
"""

from .rewriter import DEFAULT_PLACEHOLDER, ScanState, find_closing_quote, replace_prefix

__all__ = ["DEFAULT_PLACEHOLDER", "ScanState", "find_closing_quote", "replace_prefix"]
