"""
Protocols for the component tokenizer.

Defines the capability the tokenizer needs from the host lexer to
re-tokenize nested content.
"""

from __future__ import annotations

from typing import List, Protocol, runtime_checkable

from .model import AnyNode


@runtime_checkable
class LexerCapability(Protocol):
    """
    Re-entrant access to the active lexer.

    Both calls must go through the same configured lexer instance so that every
    registered extension (including the component one) applies to nested content.
    """

    def lex(self, text: str) -> List[AnyNode]:
        """
        Tokenizes text with block and inline rules.

        Args:
            text: Markdown source

        Returns:
            Top-level nodes in source order
        """
        ...

    def lex_inline(self, text: str) -> List[AnyNode]:
        """
        Tokenizes text as inline-only content.

        Args:
            text: Markdown source of a single inline run

        Returns:
            Inline nodes in source order
        """
        ...


__all__ = ["LexerCapability"]
