#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_scrapbox_parser.py
"""Unit tests for ScrapboxParser.

Tests cover:
- Title, line, code block and table recognition
- Inline rule precedence and nesting restrictions
- Decoration mark normalization
- Input types and options validation

"""

from io import BytesIO, StringIO
from pathlib import Path

import pytest

from scrapbox2review.ast import (
    Blank,
    Code,
    CodeBlock,
    CommandLine,
    Decoration,
    Formula,
    HashTag,
    Helpfeel,
    Icon,
    Image,
    Line,
    Link,
    NumberList,
    Plain,
    Quote,
    Strong,
    StrongIcon,
    StrongImage,
    Table,
    Title,
)
from scrapbox2review.exceptions import FileNotFoundError, InvalidOptionsError
from scrapbox2review.options import ReviewRendererOptions, ScrapboxParserOptions
from scrapbox2review.parsers import ScrapboxParser, decoration_marks


def parse_line(text):
    return ScrapboxParser().parse_inline(text)


@pytest.mark.unit
class TestBlockParsing:
    """Tests for block-level recognition."""

    def test_title_is_first_line(self) -> None:
        """Test that the first line becomes the stripped title."""
        blocks = ScrapboxParser().parse("  My Page \nbody")
        assert blocks[0] == Title(text="My Page", raw="  My Page ")
        assert isinstance(blocks[1], Line)

    def test_without_title(self) -> None:
        """Test that has_title=False keeps the first line as a line."""
        blocks = ScrapboxParser(ScrapboxParserOptions(has_title=False)).parse("first")
        assert len(blocks) == 1
        assert blocks[0] == Line(indent=0, nodes=[Plain(text="first", raw="first")], raw="first", line_number=1)

    def test_indent_counts_whitespace(self) -> None:
        """Test that spaces, tabs and ideographic spaces each count as one."""
        blocks = ScrapboxParser(ScrapboxParserOptions(has_title=False)).parse(" a\n\t\tb\n　c")
        assert [block.indent for block in blocks] == [1, 2, 1]

    def test_empty_line(self) -> None:
        """Test that an empty line has no inline nodes."""
        blocks = ScrapboxParser(ScrapboxParserOptions(has_title=False)).parse("")
        assert blocks == [Line(indent=0, nodes=[], raw="", line_number=1)]

    def test_code_block(self) -> None:
        """Test that a code block absorbs deeper-indented lines."""
        source = "code:a.js\n function a() {\n   return 1;\n }\nafter"
        blocks = ScrapboxParser(ScrapboxParserOptions(has_title=False)).parse(source)
        assert len(blocks) == 2
        code = blocks[0]
        assert isinstance(code, CodeBlock)
        assert code.file_name == "a.js"
        assert code.indent == 0
        assert code.content == "function a() {\n  return 1;\n}"
        assert code.line_number == 1
        assert blocks[1].raw == "after"

    def test_indented_code_block(self) -> None:
        """Test that an indented code block strips indent plus one characters."""
        source = " code:py\n  print(1)\n x"
        blocks = ScrapboxParser(ScrapboxParserOptions(has_title=False)).parse(source)
        assert isinstance(blocks[0], CodeBlock)
        assert blocks[0].indent == 1
        assert blocks[0].content == "print(1)"
        assert isinstance(blocks[1], Line)
        assert blocks[1].indent == 1

    def test_table(self) -> None:
        """Test that table rows are split on tabs and cells are parsed."""
        source = "table:t\n a\t[* b]\n c\td"
        blocks = ScrapboxParser(ScrapboxParserOptions(has_title=False)).parse(source)
        table = blocks[0]
        assert isinstance(table, Table)
        assert table.file_name == "t"
        assert len(table.cells) == 2
        assert table.cells[0][0] == [Plain(text="a", raw="a")]
        assert isinstance(table.cells[0][1][0], Decoration)
        assert table.cells[1][1] == [Plain(text="d", raw="d")]

    def test_table_cells_are_not_at_line_head(self) -> None:
        """Test that line-head constructs are not recognized in table cells."""
        blocks = ScrapboxParser(ScrapboxParserOptions(has_title=False)).parse("table:t\n >x\t$ y")
        assert blocks[0].cells[0] == [[Plain(text=">x", raw=">x")], [Plain(text="$ y", raw="$ y")]]

    def test_crlf_normalized(self) -> None:
        """Test that CRLF line endings are normalized."""
        blocks = ScrapboxParser(ScrapboxParserOptions(has_title=False)).parse("a\r\nb")
        assert [block.raw for block in blocks] == ["a", "b"]


@pytest.mark.unit
class TestLineHeadRules:
    """Tests for constructs recognized only at the start of a line."""

    def test_quote(self) -> None:
        """Test a quote with nested decoration."""
        nodes = parse_line(">hoge[* fuga]")
        assert len(nodes) == 1
        quote = nodes[0]
        assert isinstance(quote, Quote)
        assert quote.raw == ">hoge[* fuga]"
        assert quote.nodes[0] == Plain(text="hoge", raw="hoge")
        assert isinstance(quote.nodes[1], Decoration)

    def test_quote_not_nested(self) -> None:
        """Test that a quote body does not start another quote."""
        quote = parse_line(">>x")[0]
        assert quote.nodes == [Plain(text=">x", raw=">x")]

    def test_quote_only_at_head(self) -> None:
        """Test that > in the middle of a line is plain text."""
        assert parse_line("a >b") == [Plain(text="a >b", raw="a >b")]

    def test_command_line(self) -> None:
        """Test $ and % command lines."""
        assert parse_line("$ ls -la") == [CommandLine(symbol="$", text="ls -la", raw="$ ls -la")]
        assert parse_line("% make")[0].symbol == "%"

    def test_helpfeel(self) -> None:
        """Test a helpfeel line."""
        assert parse_line("? question") == [Helpfeel(text="question", raw="? question")]

    def test_number_list(self) -> None:
        """Test a numbered item with inline content."""
        nodes = parse_line("2. `code`")
        assert nodes == [NumberList(number=2, nodes=[Code(text="code", raw="`code`")], raw="2. `code`")]

    def test_number_requires_space(self) -> None:
        """Test that a number without a following space is plain."""
        assert parse_line("1.5") == [Plain(text="1.5", raw="1.5")]


@pytest.mark.unit
class TestInlineRules:
    """Tests for inline construct recognition."""

    def test_plain(self) -> None:
        """Test text without markup."""
        assert parse_line("just text") == [Plain(text="just text", raw="just text")]

    def test_code_splits_text(self) -> None:
        """Test that a match splits the surrounding text."""
        assert parse_line("a `b` c") == [
            Plain(text="a ", raw="a "),
            Code(text="b", raw="`b`"),
            Plain(text=" c", raw=" c"),
        ]

    def test_code_wins_over_brackets(self) -> None:
        """Test that brackets inside inline code are not parsed."""
        assert parse_line("`[* x]`") == [Code(text="[* x]", raw="`[* x]`")]

    def test_formula(self) -> None:
        """Test a formula with braces."""
        assert parse_line("[$ \\frac{1}{2}]") == [Formula(formula="\\frac{1}{2}", raw="[$ \\frac{1}{2}]")]

    def test_formula_with_trailing_space(self) -> None:
        """Test a formula written with a space before the closing bracket."""
        assert parse_line("[$ a^2 ]")[0].formula == "a^2"

    def test_blank(self) -> None:
        """Test whitespace-only brackets."""
        assert parse_line("[  ]") == [Blank(text="  ", raw="[  ]")]

    def test_decoration(self) -> None:
        """Test decoration marks and body."""
        node = parse_line("[**/- text]")[0]
        assert isinstance(node, Decoration)
        assert node.raw_decos == "**/-"
        assert node.decos == ["/", "-", "*-2"]
        assert node.nodes == [Plain(text="text", raw="text")]

    def test_decoration_with_image(self) -> None:
        """Test a decoration whose body is an image."""
        node = parse_line("[*** [https://example.com/a.png]]")[0]
        assert isinstance(node, Decoration)
        assert node.nodes == [Image(src="https://example.com/a.png", raw="[https://example.com/a.png]")]

    def test_decoration_with_unmatched_bracket(self) -> None:
        """Test that a lone opening bracket stays in the decoration body."""
        node = parse_line("[* 1[2]")[0]
        assert isinstance(node, Decoration)
        assert node.nodes == [Plain(text="1[2", raw="1[2")]

    def test_no_decoration_inside_decoration(self) -> None:
        """Test that decorations do not nest."""
        node = parse_line("[* a [/ b]]")[0]
        assert isinstance(node, Decoration)
        assert not any(isinstance(child, Decoration) for child in node.nodes)

    def test_strong(self) -> None:
        """Test double-bracket strong text."""
        assert parse_line("[[Bold]]") == [Strong(nodes=[Plain(text="Bold", raw="Bold")], raw="[[Bold]]")]

    def test_strong_image(self) -> None:
        """Test a double-bracket image."""
        assert parse_line("[[https://example.com/a.jpg]]") == [
            StrongImage(src="https://example.com/a.jpg", raw="[[https://example.com/a.jpg]]")
        ]

    def test_strong_icon(self) -> None:
        """Test a double-bracket icon."""
        assert parse_line("[[fuga.icon]]") == [StrongIcon(path="fuga", path_type="relative", raw="[[fuga.icon]]")]

    def test_strong_icon_repeated(self) -> None:
        """Test that a repetition suffix yields one strong icon per repetition."""
        assert parse_line("[[fuga.icon*2]]") == [
            StrongIcon(path="fuga", path_type="relative", raw="[[fuga.icon*2]]"),
            StrongIcon(path="fuga", path_type="relative", raw="[[fuga.icon*2]]"),
        ]

    def test_image_with_link(self) -> None:
        """Test an image wrapped in a link."""
        node = parse_line("[https://example.com https://example.com/a.gif]")[0]
        assert node == Image(
            src="https://example.com/a.gif",
            link="https://example.com",
            raw="[https://example.com https://example.com/a.gif]",
        )

    def test_gyazo_image(self) -> None:
        """Test a Gyazo page URL recognized as an image."""
        src = "https://gyazo.com/0123456789abcdef0123456789abcdef"
        assert parse_line(f"[{src}]") == [Image(src=src, raw=f"[{src}]")]

    @pytest.mark.parametrize(
        "text,href,content",
        [
            ("https://google.com", "https://google.com", ""),
            ("[https://google.com]", "https://google.com", ""),
            ("[https://google.com Google]", "https://google.com", "Google"),
            ("[Google https://google.com]", "https://google.com", "Google"),
        ],
    )
    def test_external_links(self, text, href, content) -> None:
        """Test the external link forms."""
        assert parse_line(text) == [Link(path_type="absolute", href=href, content=content, raw=text)]

    def test_icon(self) -> None:
        """Test relative and root icons."""
        assert parse_line("[hoge.icon]") == [Icon(path="hoge", path_type="relative", raw="[hoge.icon]")]
        assert parse_line("[/help-jp/Scrapbox.icon]")[0].path_type == "root"

    def test_icon_repeated(self) -> None:
        """Test that [name.icon*N] yields N icons."""
        nodes = parse_line("a[hoge.icon*3]b")

        assert nodes[0] == Plain(text="a", raw="a")
        assert nodes[1:4] == [Icon(path="hoge", path_type="relative", raw="[hoge.icon*3]")] * 3
        assert nodes[4] == Plain(text="b", raw="b")

    def test_internal_links(self) -> None:
        """Test links within and across projects."""
        assert parse_line("[page]") == [Link(path_type="relative", href="page", raw="[page]")]
        assert parse_line("[/project/page]") == [Link(path_type="root", href="/project/page", raw="[/project/page]")]

    def test_hashtag(self) -> None:
        """Test a hash tag after whitespace."""
        assert parse_line("a #tag") == [Plain(text="a ", raw="a "), HashTag(href="tag", raw="#tag")]

    def test_hash_inside_word_is_plain(self) -> None:
        """Test that # inside a word is not a tag."""
        assert parse_line("C#") == [Plain(text="C#", raw="C#")]


@pytest.mark.unit
class TestDecorationMarks:
    """Tests for decoration_marks."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("*", ["*-1"]),
            ("***", ["*-3"]),
            ("/", ["/"]),
            ("-/", ["-", "/"]),
            ("**/-", ["/", "-", "*-2"]),
            ("//", ["/"]),
            ("*" * 15, ["*-10"]),
        ],
    )
    def test_marks(self, raw, expected) -> None:
        """Test normalization of mark runs."""
        assert decoration_marks(raw) == expected


@pytest.mark.unit
class TestParserInputs:
    """Tests for the accepted input types."""

    def test_bytes(self) -> None:
        """Test UTF-8 bytes input."""
        blocks = ScrapboxParser().parse("タイトル\n本文".encode("utf-8"))
        assert blocks[0].text == "タイトル"

    def test_binary_stream(self) -> None:
        """Test a binary stream."""
        blocks = ScrapboxParser().parse(BytesIO(b"Title\nbody"))
        assert blocks[0].text == "Title"

    def test_text_stream(self) -> None:
        """Test a text stream."""
        blocks = ScrapboxParser().parse(StringIO("Title\nbody"))
        assert blocks[1].raw == "body"

    def test_path(self, tmp_path) -> None:
        """Test reading a file path."""
        page = tmp_path / "page.txt"
        page.write_text("Title\n[* x]", encoding="utf-8")
        blocks = ScrapboxParser().parse(page)
        assert blocks[0].text == "Title"

    def test_missing_path(self, tmp_path) -> None:
        """Test that a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            ScrapboxParser().parse(Path(tmp_path / "missing.txt"))

    def test_wrong_options_type(self) -> None:
        """Test that renderer options are rejected."""
        with pytest.raises(InvalidOptionsError):
            ScrapboxParser(ReviewRendererOptions())
