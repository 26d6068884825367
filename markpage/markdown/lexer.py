"""
Component-aware markdown lexer on top of markdown-it-py.

The lexer owns one configured MarkdownIt instance and installs the component
extension descriptors as markdown-it ruler rules:

  • block rules run before `html_block`, so generic HTML blocks never swallow
    a component line; they do not interrupt an open paragraph
  • inline rules run before `autolink`, so `<Docs:Button/>` is not read as a link
    and generic inline HTML never sees a component tag

Code fences, indented code and code spans are consumed by markdown-it's own
rules first, so tags inside code never reach the component tokenizer.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from markdown_it import MarkdownIt
from markdown_it.rules_block import StateBlock
from markdown_it.rules_inline import StateInline
from markdown_it.token import Token

from .extensions import ExtensionLevel, ExtensionSet, ExtensionSpec, component_extensions
from .model import AnyNode, LexerCfg
from .tree import OCCURRENCE_META, tokens_to_nodes

logger = logging.getLogger(__name__)


def _remaining_lines(state: StateBlock, start_line: int, end_line: int) -> str:
    """Source of lines [start_line, end_line) with container markers and indentation removed."""
    if state.parentType == "root" and state.blkIndent == 0 and end_line == state.lineMax:
        return state.src[state.bMarks[start_line]:]
    return state.getLines(start_line, end_line, state.blkIndent, True)


def make_block_rule(ext: ExtensionSpec):
    """Adapts a block-level descriptor to a markdown-it block rule."""

    def rule(state: StateBlock, start_line: int, end_line: int, silent: bool) -> bool:
        # indented code
        if state.sCount[start_line] - state.blkIndent >= 4:
            return False

        first = state.bMarks[start_line] + state.tShift[start_line]
        if ext.start(state.src[first:state.eMarks[start_line]]) != 0:
            return False

        occurrence = ext.tokenizer(_remaining_lines(state, start_line, end_line))
        if occurrence is None:
            return False
        if silent:
            return True

        lines = occurrence.raw.count("\n") + (0 if occurrence.raw.endswith("\n") else 1)
        next_line = min(start_line + lines, end_line)

        token = state.push(ext.token_type, "", 0)
        token.map = [start_line, next_line]
        token.content = occurrence.raw
        token.meta[OCCURRENCE_META] = occurrence

        if occurrence.trailing:
            # inline content is parsed later by the core `inline` rule
            closer_line = [max(start_line, next_line - 1), next_line]
            token = state.push("paragraph_open", "p", 1)
            token.map = closer_line
            token = state.push("inline", "", 0)
            token.content = occurrence.trailing
            token.map = closer_line
            token.children = []
            state.push("paragraph_close", "p", -1)

        state.line = next_line
        return True

    return rule


def make_inline_rule(ext: ExtensionSpec):
    """Adapts an inline-level descriptor to a markdown-it inline rule."""

    def rule(state: StateInline, silent: bool) -> bool:
        pos = state.pos
        end = state.posMax if ext.window is None else min(pos + ext.window, state.posMax)
        if ext.start(state.src[pos:end]) != 0:
            return False

        occurrence = ext.tokenizer(state.src[pos:state.posMax])
        if occurrence is None:
            return False

        if not silent:
            token = state.push(ext.token_type, "", 0)
            token.content = occurrence.raw
            token.meta[OCCURRENCE_META] = occurrence

        state.pos += len(occurrence.raw)
        return True

    return rule


def install_extensions(md: MarkdownIt, extensions: ExtensionSet) -> None:
    """Registers every descriptor of the set on the MarkdownIt rulers, preserving order."""
    for ext in extensions.for_level(ExtensionLevel.BLOCK):
        md.block.ruler.before("html_block", ext.name, make_block_rule(ext))
    for ext in extensions.for_level(ExtensionLevel.INLINE):
        md.inline.ruler.before("autolink", ext.name, make_inline_rule(ext))
    logger.debug("Installed tokenizer extensions: %s", ", ".join(extensions.names()) or "<none>")


class ComponentLexer:
    """
    Markdown lexer that recognizes capitalized component tags.

    Nested component content is lexed by this same instance (it is handed to the
    tokenizer as its LexerCapability), so nesting of any depth is recognized.
    Instances keep no per-document state and can be shared between callers.
    """

    def __init__(self, cfg: Optional[LexerCfg] = None):
        self.cfg = cfg or LexerCfg()
        try:
            self.md = MarkdownIt(self.cfg.preset)
        except KeyError:
            raise ValueError(f"Unknown markdown-it preset: {self.cfg.preset!r}") from None
        if self.cfg.enable:
            self.md.enable(list(self.cfg.enable))

        self.extensions = component_extensions(
            self,
            dialect=self.cfg.attribute_dialect,
            block=self.cfg.block_components,
            inline=self.cfg.inline_components,
        )
        install_extensions(self.md, self.extensions)

    def parse(self, text: str) -> List[Token]:
        """Raw markdown-it token stream (component tokens carry the occurrence in `meta`)."""
        return self.md.parse(text, {})

    def lex(self, text: str) -> List[AnyNode]:
        return tokens_to_nodes(self.parse(text))

    def lex_inline(self, text: str) -> List[AnyNode]:
        return tokens_to_nodes(self.md.parseInline(text, {}))


def lex(text: str, cfg: Optional[LexerCfg] = None) -> List[AnyNode]:
    """One-shot helper: lexes a document with a fresh ComponentLexer."""
    return ComponentLexer(cfg).lex(text)


__all__ = ["ComponentLexer", "install_extensions", "make_block_rule", "make_inline_rule", "lex"]
