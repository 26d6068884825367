import logging

from markpage.markdown import (
    AttributeDialect,
    BooleanValue,
    ComponentTokenizer,
    LexerCapability,
    Node,
    NumberValue,
    StringValue,
)
from markpage.markdown.tokenizer import flatten_paragraphs


def test_stub_satisfies_capability(stub_lexer):
    assert isinstance(stub_lexer, LexerCapability)


# ========= block variant =========

def test_block_self_closing(stub_lexer):
    tok = ComponentTokenizer(stub_lexer)
    occ = tok.tokenize_block('<Button variant="primary" count={1} disabled />\nnext line')
    assert occ is not None
    assert occ.name == "Button"
    assert occ.raw == '<Button variant="primary" count={1} disabled />\n'
    assert occ.children is None
    assert occ.self_closing
    assert occ.attributes == {
        "variant": StringValue("primary"),
        "count": NumberValue(1),
        "disabled": BooleanValue(True),
    }
    assert stub_lexer.calls == []


def test_block_paired_relexes_dedented_inner_text(stub_lexer):
    src = "<Alert>\n    line one\n    line two\n</Alert>\nrest\n"
    occ = ComponentTokenizer(stub_lexer).tokenize_block(src)
    assert occ.raw == "<Alert>\n    line one\n    line two\n</Alert>\n"
    assert stub_lexer.calls == [("lex", "line one\nline two")]
    # paragraph wrapper is spliced away
    assert occ.children == [Node(type="text", content="line one\nline two")]
    assert not occ.self_closing


def test_block_skips_indentation(stub_lexer):
    occ = ComponentTokenizer(stub_lexer).tokenize_block("   <Note/>\nnext")
    assert occ.raw == "<Note/>\n"


def test_block_without_trailing_newline(stub_lexer):
    occ = ComponentTokenizer(stub_lexer).tokenize_block("<Note/>")
    assert occ.raw == "<Note/>"


def test_block_declines_when_text_follows(stub_lexer):
    tok = ComponentTokenizer(stub_lexer)
    assert tok.tokenize_block("<Badge/> and text") is None
    assert tok.tokenize_block("<Badge>new</Badge> is here") is None


def test_block_closer_followed_by_text_stays_paired(stub_lexer):
    src = "<Alert>\nbody\n</Alert> trailing *text*\nnext\n"
    occ = ComponentTokenizer(stub_lexer).tokenize_block(src)
    assert occ.raw == "<Alert>\nbody\n</Alert> trailing *text*\n"
    assert occ.children == [Node(type="text", content="body")]
    assert occ.trailing == "trailing *text*"
    assert stub_lexer.calls == [("lex", "body")]


def test_block_attribute_value_with_angle_bracket(stub_lexer):
    occ = ComponentTokenizer(stub_lexer).tokenize_block('<Note title="a > b" when={{"gt": ">"}}>\nbody\n</Note>\n')
    assert occ.props == {"title": "a > b", "when": {"gt": ">"}}
    assert stub_lexer.calls == [("lex", "body")]


def test_block_unterminated_consumes_opening_line_only(stub_lexer):
    occ = ComponentTokenizer(stub_lexer).tokenize_block('<Unknown some="x">\n\n# Heading\n')
    assert occ.name == "Unknown"
    assert occ.raw == '<Unknown some="x">\n'
    assert occ.children is None
    assert occ.attributes == {"some": StringValue("x")}


def test_block_empty_paired_has_empty_children(stub_lexer):
    occ = ComponentTokenizer(stub_lexer).tokenize_block("<Spacer>   </Spacer>\n")
    assert occ.children == []
    assert not occ.self_closing
    assert stub_lexer.calls == []


def test_block_rejects_non_components(stub_lexer):
    tok = ComponentTokenizer(stub_lexer)
    assert tok.tokenize_block("<div>ok</div>\n") is None
    assert tok.tokenize_block("plain text\n") is None
    assert tok.tokenize_block("<1Bad/>\n") is None


def test_block_namespaced_name(stub_lexer):
    occ = ComponentTokenizer(stub_lexer).tokenize_block("<Ui:Button_x-1 size={2}/>\n")
    assert occ.name == "Ui:Button_x-1"
    assert occ.props == {"size": 2}


# ========= inline variant =========

def test_inline_paired_consumes_through_closer(stub_lexer):
    occ = ComponentTokenizer(stub_lexer).tokenize_inline("<Badge>new</Badge> tail")
    assert occ.raw == "<Badge>new</Badge>"
    assert stub_lexer.calls == [("lex_inline", "new")]
    assert occ.children == [Node(type="text", content="new")]


def test_inline_self_closing(stub_lexer):
    occ = ComponentTokenizer(stub_lexer).tokenize_inline('<Icon name="star"/> rest')
    assert occ.raw == '<Icon name="star"/>'
    assert occ.children is None


def test_inline_unterminated(stub_lexer):
    occ = ComponentTokenizer(stub_lexer).tokenize_inline('<Icon name="x"> tail')
    assert occ.raw == '<Icon name="x">'
    assert occ.children is None


def test_inline_requires_tag_at_offset_zero(stub_lexer):
    assert ComponentTokenizer(stub_lexer).tokenize_inline(" <Icon/>") is None


def test_legacy_dialect(stub_lexer):
    tok = ComponentTokenizer(stub_lexer, AttributeDialect.LEGACY)
    occ = tok.tokenize_inline("<Counter start=5 loop=true label='go'/>")
    assert occ.props == {"start": 5, "loop": True, "label": "go"}


# ========= nested failures =========

def test_nested_failure_falls_back_to_text(failing_lexer, caplog):
    tok = ComponentTokenizer(failing_lexer)
    with caplog.at_level(logging.WARNING, logger="markpage.markdown.tokenizer"):
        occ = tok.tokenize_block("<Alert>\n  broken **\n</Alert>\n")
    assert occ.children == [Node(type="text", content="broken **")]
    assert any("Failed to tokenize" in r.getMessage() for r in caplog.records)


def test_nested_inline_failure_falls_back_to_text(failing_lexer):
    occ = ComponentTokenizer(failing_lexer).tokenize_inline("<B> x </B>")
    assert occ.children == [Node(type="text", content="x")]


# ========= helpers =========

def test_flatten_paragraphs_keeps_other_nodes():
    heading = Node(type="heading", tag="h1", children=[Node(type="text", content="T")])
    para = Node(type="paragraph", tag="p", children=[Node(type="text", content="a"), Node(type="softbreak")])
    assert flatten_paragraphs([heading, para]) == [heading, Node(type="text", content="a"), Node(type="softbreak")]
