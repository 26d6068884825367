from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import load_config
from .errors import MarkpageUserError
from .jsonic import dumps as jdumps
from .markdown import (
    AttributeDialect,
    ComponentLexer,
    ComponentPart,
    HtmlComponentParser,
    LexerCfg,
    find_components,
    node_to_dict,
)
from .version import tool_version

logger = logging.getLogger(__name__)

_DIALECTS = [d.value for d in AttributeDialect]


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="markpage",
        description="Component-aware markdown tokenizer",
        add_help=True,
    )
    p.add_argument("-V", "--version", action="version", version=f"%(prog)s {tool_version()}")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging to stderr")
    sub = p.add_subparsers(dest="cmd", required=True)

    def add_source(sp: argparse.ArgumentParser) -> None:
        sp.add_argument("source", metavar="SOURCE", help="input file, or - for stdin")
        sp.add_argument(
            "--dialect",
            choices=_DIALECTS,
            help="attribute syntax (overrides the config file)",
        )

    def add_lexer_opts(sp: argparse.ArgumentParser) -> None:
        add_source(sp)
        sp.add_argument("--config", metavar="PATH", help="YAML file with lexer settings")
        sp.add_argument("--indent", type=int, default=None, help="pretty-print JSON")

    sp_tokens = sub.add_parser("tokens", help="node tree of a markdown document (JSON)")
    add_lexer_opts(sp_tokens)

    sp_comp = sub.add_parser("components", help="component occurrences only, nested ones included (JSON)")
    add_lexer_opts(sp_comp)

    sp_html = sub.add_parser("scan-html", help="text and component parts of rendered HTML (JSON)")
    add_source(sp_html)
    sp_html.add_argument("--indent", type=int, default=None, help="pretty-print JSON")

    return p


def _setup_logging(verbose: bool) -> None:
    root = logging.getLogger("markpage")
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not root.handlers:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        root.addHandler(h)


def _read_source(source: str) -> str:
    """Reads a file path or stdin for `-`."""
    if source == "-":
        return sys.stdin.read()
    path = Path(source)
    if not path.is_file():
        raise MarkpageUserError(f"Source file not found: {path}")
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise MarkpageUserError(f"Failed to read {path}: {e}") from e


def _lexer_cfg(ns: argparse.Namespace) -> LexerCfg:
    cfg = load_config(ns.config) if ns.config else LexerCfg()
    if ns.dialect:
        cfg = replace(cfg, attribute_dialect=AttributeDialect(ns.dialect))
    return cfg


def _parts_to_json(parser: HtmlComponentParser, html: str) -> List[Dict[str, Any]]:
    out: List[Dict[str, Any]] = []
    for part in parser.parse(html):
        if isinstance(part, ComponentPart):
            comp = part.component
            out.append({
                "type": part.type,
                "name": comp.name,
                "props": comp.props,
                "children": comp.children,
                "position": {"start": comp.position.start, "end": comp.position.end},
            })
        else:
            out.append({"type": part.type, "content": part.content})
    return out


def main(argv: Optional[List[str]] = None) -> int:
    ns = _build_parser().parse_args(argv)
    _setup_logging(ns.verbose)

    try:
        text = _read_source(ns.source)

        if ns.cmd == "scan-html":
            dialect = ns.dialect or AttributeDialect.LEGACY.value
            data: Any = _parts_to_json(HtmlComponentParser(AttributeDialect(dialect)), text)
            sys.stdout.write(jdumps(data, indent=ns.indent) + "\n")
            return 0

        lexer = ComponentLexer(_lexer_cfg(ns))
        nodes = lexer.lex(text)
        logger.debug("Lexed %d top-level node(s)", len(nodes))

        if ns.cmd == "tokens":
            data = [node_to_dict(node) for node in nodes]
        elif ns.cmd == "components":
            data = [node_to_dict(comp) for comp in find_components(nodes)]
        else:
            raise ValueError(f"Unknown command: {ns.cmd}")
        sys.stdout.write(jdumps(data, indent=ns.indent) + "\n")
        return 0

    except MarkpageUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2
    except ValueError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
