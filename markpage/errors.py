"""
Base exception for user-facing errors.

Expected problems the user can fix (bad config, unreadable input) inherit
from MarkpageUserError and are reported by the CLI as clean messages.
Programming errors must NOT inherit from it and propagate with tracebacks.
"""

from __future__ import annotations


class MarkpageUserError(Exception):
    """Base class for all user-facing errors in markpage."""
    pass


class ConfigError(MarkpageUserError):
    """Invalid or unreadable lexer configuration."""
    pass


__all__ = ["MarkpageUserError", "ConfigError"]
