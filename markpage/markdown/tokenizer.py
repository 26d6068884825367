"""
Component tokenizer.

Recognizes one component occurrence at the start of the remaining input:

  • self-closing   <Name attrs/>
  • paired         <Name attrs>...</Name>   (children re-tokenized)
  • unterminated   <Name attrs>             (no closer: degrades to self-closing)

Block and inline variants differ only in how much of the source they consume.
"""

from __future__ import annotations

import logging
import re
import textwrap
from dataclasses import dataclass
from typing import List, Optional

from .attributes import parse_attributes
from .boundary import match_closing_tag
from .model import AnyNode, AttributeDialect, ComponentOccurrence, Node, TagSpan
from .protocols import LexerCapability
from .tags import TAG_NAME, scan_tag

logger = logging.getLogger(__name__)

_INDENT = re.compile(r"[ \t]*")


@dataclass(frozen=True)
class _Candidate:
    name: str
    attrs: str
    tag_end: int                    # offset after the opening (or self-closing) tag
    self_closing: bool
    close: Optional[TagSpan] = None  # matching closer of a paired tag

    @property
    def end(self) -> int:
        return self.close.end if self.close is not None else self.tag_end

    @property
    def unterminated(self) -> bool:
        return not self.self_closing and self.close is None


def _rest_of_line_blank(src: str, pos: int) -> bool:
    line_end = src.find("\n", pos)
    return not (src[pos:] if line_end < 0 else src[pos:line_end]).strip()


def flatten_paragraphs(nodes: List[AnyNode]) -> List[AnyNode]:
    """Splices the children of top-level paragraphs into the sequence."""
    out: List[AnyNode] = []
    for node in nodes:
        if isinstance(node, Node) and node.type == "paragraph":
            out.extend(node.children)
        else:
            out.append(node)
    return out


class ComponentTokenizer:
    """
    Turns a component occurrence at the start of the input into a node.

    Nested content is re-tokenized through the injected lexer capability, so
    components nested at any depth are recognized by the same configuration.
    """

    def __init__(self, lexer: LexerCapability, dialect: AttributeDialect = AttributeDialect.BRACED):
        self.lexer = lexer
        self.dialect = AttributeDialect(dialect)

    # ---- public API ----

    def tokenize_block(self, src: str) -> Optional[ComponentOccurrence]:
        """
        Block-level variant: the tag must start the line (indentation allowed).

        Consumes through the end of the line holding the closing tag, including
        its line break. Declines when text follows the opening tag on its line
        so the inline variant handles it inside a paragraph. Text after a closer
        that sits on a later line is kept in `trailing`.

        Args:
            src: Remaining input starting at the beginning of a line

        Returns:
            Occurrence whose `raw` covers everything consumed after the indentation,
            or None when no component can be taken here
        """
        indent = _INDENT.match(src).end()
        cand = self._match(src, indent)
        if cand is None:
            return None

        line_end = src.find("\n", cand.end)
        if line_end < 0:
            line_end = len(src)

        trailing = src[cand.end:line_end].strip()
        if trailing and (cand.close is None or not _rest_of_line_blank(src, cand.tag_end)):
            return None

        consumed = line_end + 1 if line_end < len(src) else line_end

        children = None
        if cand.close is not None:
            children = self._children(src[cand.tag_end:cand.close.start], inline=False)
        elif cand.unterminated:
            logger.debug("No closing tag for <%s>, treating it as self-closing", cand.name)

        return ComponentOccurrence(
            name=cand.name,
            raw=src[indent:consumed],
            attributes=parse_attributes(cand.attrs, self.dialect),
            children=children,
            trailing=trailing,
        )

    def tokenize_inline(self, src: str) -> Optional[ComponentOccurrence]:
        """
        Inline-level variant: consumes only up to the end of the closing tag.

        Args:
            src: Remaining inline input starting at `<`

        Returns:
            Occurrence or None when the input does not start with a component tag
        """
        cand = self._match(src, 0)
        if cand is None:
            return None

        children = None
        if cand.close is not None:
            children = self._children(src[cand.tag_end:cand.close.start], inline=True)
        elif cand.unterminated:
            logger.debug("No closing tag for inline <%s>, treating it as self-closing", cand.name)

        return ComponentOccurrence(
            name=cand.name,
            raw=src[:cand.end],
            attributes=parse_attributes(cand.attrs, self.dialect),
            children=children,
        )

    # ---- internals ----

    def _match(self, src: str, pos: int) -> Optional[_Candidate]:
        tag = scan_tag(src, pos)
        if tag is None:
            return None
        if tag.self_closing:
            return _Candidate(tag.name, tag.attrs, tag.end, self_closing=True)
        close = match_closing_tag(src, tag.name, tag.end)
        return _Candidate(tag.name, tag.attrs, tag.end, self_closing=False, close=close)

    def _children(self, inner: str, *, inline: bool) -> List[AnyNode]:
        text = textwrap.dedent(inner).strip()
        if not text:
            return []
        try:
            nodes = self.lexer.lex_inline(text) if inline else self.lexer.lex(text)
        except Exception:
            logger.warning("Failed to tokenize component content, keeping it as text", exc_info=True)
            return [Node(type="text", content=text)]
        return flatten_paragraphs(nodes)


__all__ = ["ComponentTokenizer", "flatten_paragraphs", "TAG_NAME"]
