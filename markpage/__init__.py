"""
markpage: component-aware markdown tokenizer.
"""

from __future__ import annotations

from .errors import ConfigError, MarkpageUserError
from .markdown import ComponentLexer, ComponentOccurrence, LexerCfg, Node, lex

__all__ = ["ComponentLexer", "ComponentOccurrence", "LexerCfg", "Node", "lex", "ConfigError", "MarkpageUserError"]
