"""
Tests for the structural template parser.
"""

import pytest

from lq.errors import TemplateSyntaxError
from lq.expressions.model import VariableExpr
from lq.parser import ParserConfig, TemplateParser
from lq.parser.nodes import ASTBlock, ASTObject, ASTRaw, ASTSeq, ASTTag, ASTText
from lq.parser.tokens import SourceLoc
from lq.render.config import RenderConfig


@pytest.fixture
def grammar_config() -> RenderConfig:
    """Grammar-only config: blocks are declared, compilers are irrelevant to parsing."""
    config = RenderConfig()
    config.add_block("if").clause("elsif").clause("else")
    config.add_block("unless").clause("else")
    config.add_block("for").clause("else")
    config.add_block("case").clause("when").clause("else")
    config.add_block("comment")
    config.add_block("raw")
    return config


@pytest.fixture
def parser(grammar_config) -> TemplateParser:
    return TemplateParser(grammar_config)


class TestStructure:

    def test_text_and_objects(self, parser):
        root = parser.parse("Hello {{ name }}!")

        assert isinstance(root, ASTSeq)
        assert [type(n) for n in root.children] == [ASTText, ASTObject, ASTText]
        assert root.children[0].text == "Hello "
        assert root.children[1].expr == VariableExpr("name")

    def test_unregistered_tag_is_plain_tag(self, parser):
        root = parser.parse("{% assign x = 1 %}")

        tag = root.children[0]
        assert isinstance(tag, ASTTag)
        assert tag.name == "assign"
        assert tag.args == "x = 1"

    def test_block_with_clauses(self, parser):
        root = parser.parse("{% if a %}A{% elsif b %}B{% else %}C{% endif %}after")

        assert len(root.children) == 2
        block = root.children[0]
        assert isinstance(block, ASTBlock)
        assert block.name == "if"
        assert block.args == "a"
        assert [n.text for n in block.body] == ["A"]
        assert [c.name for c in block.clauses] == ["elsif", "else"]
        assert block.clauses[0].args == "b"
        assert [n.text for n in block.clauses[0].body] == ["B"]
        assert [n.text for n in block.clauses[1].body] == ["C"]
        assert root.children[1].text == "after"

    def test_nested_blocks(self, parser):
        root = parser.parse("{% for x in xs %}{% if x %}{{ x }}{% endif %}{% else %}none{% endfor %}")

        loop = root.children[0]
        inner = loop.body[0]
        assert inner.name == "if"
        assert isinstance(inner.body[0], ASTObject)
        assert loop.clauses[0].name == "else"
        assert loop.clauses[0].body[0].text == "none"

    def test_shared_clause_name(self, parser):
        """else is legal in both if and for"""
        parser.parse("{% if a %}{% else %}{% endif %}{% for a in b %}{% else %}{% endfor %}")

    def test_deep_nesting_uses_no_recursion(self, parser):
        depth = 3000
        root = parser.parse("{% if a %}" * depth + "x" + "{% endif %}" * depth)

        node = root.children[0]
        for _ in range(depth - 1):
            node = node.body[0]
        assert node.body[0].text == "x"

    def test_without_grammar_every_tag_is_plain(self):
        root = TemplateParser(ParserConfig()).parse("{% if a %}{% endif %}")

        assert [type(n) for n in root.children] == [ASTTag, ASTTag]


class TestStructuralErrors:

    def test_unterminated_block(self, parser):
        with pytest.raises(TemplateSyntaxError, match='unterminated "if" block'):
            parser.parse("{% if syntax error %}")

    def test_unterminated_inner_block(self, parser):
        with pytest.raises(TemplateSyntaxError, match='unterminated "for" block'):
            parser.parse("{% if a %}{% for x in y %}{% endif %}")

    def test_clause_outside_block(self, parser):
        with pytest.raises(TemplateSyntaxError) as exc:
            parser.parse("{% elsif a %}")

        assert exc.value.message == "elsif not inside if"

    def test_clause_lists_all_parents(self, parser):
        with pytest.raises(TemplateSyntaxError, match="else not inside case or for or if or unless"):
            parser.parse("{% else %}")

    def test_end_tag_with_wrong_parent(self, parser):
        with pytest.raises(TemplateSyntaxError) as exc:
            parser.parse("line1\n{% if a %}\n{% endfor %}")

        assert exc.value.message == "endfor not inside for; immediate parent is if"
        assert exc.value.line_no == 3

    def test_clause_in_wrong_block(self, parser):
        with pytest.raises(TemplateSyntaxError, match="when not inside case; immediate parent is if"):
            parser.parse("{% if a %}{% when b %}{% endif %}")

    def test_empty_tag_name(self, parser):
        with pytest.raises(TemplateSyntaxError, match="tag name is missing"):
            parser.parse("{% %}")

    def test_object_syntax_error(self, parser):
        with pytest.raises(TemplateSyntaxError) as exc:
            parser.parse("ok\n{{ a | }}", SourceLoc(pathname="page.html", line_no=1))

        err = exc.value
        assert "syntax error" in str(err)
        assert err.path == "page.html"
        assert err.line_no == 2
        assert str(err).startswith("Syntax error in page.html (line 2): ")
        assert err.cause is not None


class TestCommentAndRaw:

    def test_comment_discards_everything(self, parser):
        root = parser.parse("a{% comment %}{{ x }}{% undefined_tag %}{% if %}{% endcomment %}b")

        assert [n.text for n in root.children] == ["a", "b"]

    def test_nested_comment_tag_is_not_counted(self, parser):
        root = parser.parse("{% comment %}{% comment %}{% endcomment %}tail")

        assert [n.text for n in root.children] == ["tail"]

    def test_raw_keeps_sources(self, parser):
        root = parser.parse("pre{% raw %}{{ a }}{% undefined_tag %}{% if false %}{% endraw %}post")

        raw = root.children[1]
        assert isinstance(raw, ASTRaw)
        assert "".join(raw.slices) == "{{ a }}{% undefined_tag %}{% if false %}"
        assert root.children[2].text == "post"

    @pytest.mark.parametrize("body", [
        "a {{- b -}} c",
        " x {%- if y -%} z ",
        "\n  keep  \n",
    ])
    def test_raw_ignores_trim_markers(self, parser, body):
        root = parser.parse("{% raw -%}" + body + "{%- endraw %}")

        assert "".join(root.children[0].slices) == body

    def test_trim_around_raw_block(self, parser):
        root = parser.parse("a  {%- raw %} b {% endraw -%}  c")

        assert root.children[0].text == "a"
        assert "".join(root.children[1].slices) == " b "
        assert root.children[2].text == "c"

    def test_unterminated_comment(self, parser):
        with pytest.raises(TemplateSyntaxError, match='unterminated "comment" block'):
            parser.parse("{% comment %} never closed")

    def test_unterminated_raw(self, parser):
        with pytest.raises(TemplateSyntaxError, match='unterminated "raw" block'):
            parser.parse("{% raw %}{{ x }}")

    def test_comment_only_special_when_registered(self):
        root = TemplateParser(ParserConfig()).parse("{% comment %}x{% endcomment %}")

        assert [type(n) for n in root.children] == [ASTTag, ASTText, ASTTag]


class TestWhitespaceControl:

    @pytest.mark.parametrize("source,expected", [
        ("a  {{- x }}  b", ["a", "  b"]),
        ("a  {{ x -}}  b", ["a  ", "b"]),
        ("a \n {{- x -}} \n b", ["a", "b"]),
        ("a  {%- assign x = 1 -%}\n  b", ["a", "b"]),
    ])
    def test_trim_adjacent_text(self, parser, source, expected):
        root = parser.parse(source)

        assert [n.text for n in root.children if isinstance(n, ASTText)] == expected

    def test_fully_trimmed_text_is_dropped(self, parser):
        root = parser.parse("{{ a -}}   \n  {{- b }}")

        assert [type(n) for n in root.children] == [ASTObject, ASTObject]

    def test_trim_inside_block(self, parser):
        root = parser.parse("{% if a -%}\n  yes\n{%- endif %}")

        assert root.children[0].body[0].text == "yes"
