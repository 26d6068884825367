"""
Configuration loading for markpage.
"""

from __future__ import annotations

from .load import load_config
from ..markdown.model import LexerCfg

__all__ = ["LexerCfg", "load_config"]
