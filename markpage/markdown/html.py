"""
Component detection in already rendered HTML.

Works on the output of a first markdown-to-HTML pass: capitalized tags are
left untouched by the renderer and are picked up here. Tags inside `<pre>` or
`<code>` elements are kept as literal text.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, Union

from .attributes import parse_attributes
from .boundary import match_closing_tag
from .model import AttributeDialect, AttributeValue, CodeRange
from .tags import scan_tag

logger = logging.getLogger(__name__)

_CODE_ELEMENTS = (
    re.compile(r"<pre[\s\S]*?</pre>", re.IGNORECASE),
    re.compile(r"<code[\s\S]*?</code>", re.IGNORECASE),
)

_CANDIDATE = re.compile(r"<[A-Z]")


def code_ranges(html: str) -> Tuple[CodeRange, ...]:
    """
    Collects the spans of `<pre>` and `<code>` elements.

    Args:
        html: Rendered HTML document

    Returns:
        Ranges sorted by start offset
    """
    ranges = [
        CodeRange(m.start(), m.end())
        for pattern in _CODE_ELEMENTS
        for m in pattern.finditer(html)
    ]
    return tuple(sorted(ranges, key=lambda r: (r.start, r.end)))


def in_code(ranges: Tuple[CodeRange, ...], start: int, end: int) -> bool:
    return any(r.contains(start, end) for r in ranges)


@dataclass(frozen=True)
class HtmlComponent:
    name: str
    attributes: Dict[str, AttributeValue] = field(default_factory=dict)
    children: Optional[str] = None    # trimmed inner HTML; None when self-closing
    position: CodeRange = CodeRange(0, 0)

    @property
    def props(self) -> Dict[str, object]:
        return {key: val.value for key, val in self.attributes.items()}


@dataclass(frozen=True)
class TextPart:
    content: str
    type: str = "text"


@dataclass(frozen=True)
class ComponentPart:
    component: HtmlComponent
    type: str = "component"


ParsedContent = Union[TextPart, ComponentPart]


class HtmlComponentParser:
    """
    Splits rendered HTML into literal text and component parts.

    Paired tags are depth-balanced; an opening tag without a closer stays
    literal text and scanning continues right after it.
    """

    def __init__(self, dialect: AttributeDialect = AttributeDialect.LEGACY):
        self.dialect = AttributeDialect(dialect)

    def parse(self, html: str) -> List[ParsedContent]:
        """
        Args:
            html: Rendered HTML document

        Returns:
            Text and component parts in document order; consecutive literal
            text is merged into one part
        """
        ranges = code_ranges(html)
        parts: List[ParsedContent] = []
        last = 0
        pos = 0

        while True:
            m = _CANDIDATE.search(html, pos)
            if m is None:
                break
            start = m.start()

            component = self._component_at(html, start)
            if component is None:
                pos = start + 1
                continue

            end = component.position.end
            if in_code(ranges, start, end):
                logger.debug("Skipping <%s> inside a code element at %d", component.name, start)
                pos = end
                continue

            if start > last:
                parts.append(TextPart(html[last:start]))
            parts.append(ComponentPart(component))
            last = pos = end

        if last < len(html):
            parts.append(TextPart(html[last:]))
        return parts

    def extract_components(self, html: str) -> List[HtmlComponent]:
        return [part.component for part in self.parse(html) if isinstance(part, ComponentPart)]

    def has_components(self, html: str) -> bool:
        if _CANDIDATE.search(html) is None:
            return False
        return bool(self.extract_components(html))

    # ---- internals ----

    def _component_at(self, html: str, start: int) -> Optional[HtmlComponent]:
        tag = scan_tag(html, start)
        if tag is None:
            return None
        attributes = parse_attributes(tag.attrs, self.dialect)
        if tag.self_closing:
            return HtmlComponent(tag.name, attributes, position=CodeRange(start, tag.end))

        close = match_closing_tag(html, tag.name, tag.end)
        if close is None:
            logger.debug("No closing tag for <%s> at %d, keeping it as text", tag.name, start)
            return None
        return HtmlComponent(
            name=tag.name,
            attributes=attributes,
            children=html[tag.end:close.start].strip(),
            position=CodeRange(start, close.end),
        )


__all__ = [
    "code_ranges",
    "in_code",
    "HtmlComponent",
    "TextPart",
    "ComponentPart",
    "ParsedContent",
    "HtmlComponentParser",
]
