from markpage.markdown import TagMatch, scan_tag


def test_opening_and_self_closing():
    assert scan_tag("<Alert>x", 0) == TagMatch("Alert", "", 7, self_closing=False)
    assert scan_tag("<Button/>", 0) == TagMatch("Button", "", 9, self_closing=True)
    assert scan_tag('<Icon name="x" />', 0) == TagMatch("Icon", ' name="x" ', 17, self_closing=True)


def test_scan_starts_at_offset():
    src = "ab <Badge>"
    assert scan_tag(src, 3).end == len(src)
    assert scan_tag(src, 0) is None


def test_angle_bracket_inside_quoted_value():
    src = '<Note title="a > b">rest'
    tag = scan_tag(src, 0)
    assert tag.attrs == ' title="a > b"'
    assert src[tag.end:] == "rest"


def test_angle_bracket_inside_braced_literal():
    src = '<Chart when={{"op": ">", "v": {"n": 1}}}/>tail'
    tag = scan_tag(src, 0)
    assert tag.self_closing
    assert tag.attrs == ' when={{"op": ">", "v": {"n": 1}}}'
    assert src[tag.end:] == "tail"


def test_unbalanced_quote_ends_at_next_bracket():
    tag = scan_tag('<Open title="x> body', 0)
    assert tag.attrs == ' title="x'
    assert tag.end == len('<Open title="x>')


def test_not_a_component_tag():
    assert scan_tag("<div>", 0) is None
    assert scan_tag("<Foo.bar>", 0) is None
    assert scan_tag("<Alert", 0) is None
