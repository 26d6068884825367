import os
import subprocess
import sys
from pathlib import Path
from typing import List

import pytest

from markpage.markdown import AttributeDialect, ComponentLexer, LexerCfg, Node

REPO_ROOT = Path(__file__).resolve().parent.parent


@pytest.fixture
def lexer() -> ComponentLexer:
    return ComponentLexer()


@pytest.fixture
def legacy_lexer() -> ComponentLexer:
    return ComponentLexer(LexerCfg(attribute_dialect=AttributeDialect.LEGACY))


class StubLexer:
    """
    LexerCapability that records calls and wraps the text into plain nodes.
    `lex` mimics the host by returning a paragraph.
    """

    def __init__(self):
        self.calls: List[tuple] = []

    def lex(self, text: str):
        self.calls.append(("lex", text))
        return [Node(type="paragraph", tag="p", children=[Node(type="text", content=text)])]

    def lex_inline(self, text: str):
        self.calls.append(("lex_inline", text))
        return [Node(type="text", content=text)]


class FailingLexer:
    def lex(self, text: str):
        raise RuntimeError("boom")

    def lex_inline(self, text: str):
        raise RuntimeError("boom")


@pytest.fixture
def stub_lexer() -> StubLexer:
    return StubLexer()


@pytest.fixture
def failing_lexer() -> FailingLexer:
    return FailingLexer()


def _run_cli(cwd: Path, *args: str, stdin: str | None = None) -> subprocess.CompletedProcess:
    env = os.environ.copy()
    env["PYTHONIOENCODING"] = "utf-8"
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(REPO_ROOT), env.get("PYTHONPATH")]))
    return subprocess.run(
        [sys.executable, "-m", "markpage.cli", *args],
        cwd=cwd, env=env, input=stdin, capture_output=True, text=True, encoding="utf-8"
    )


@pytest.fixture
def run_cli():
    """Runs `python -m markpage.cli` in a subprocess: run_cli(cwd, *args, stdin=None)."""
    return _run_cli
