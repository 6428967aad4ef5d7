"""Tests for markdown synthesis of classified blocks."""

from unittest.mock import MagicMock

from bs4 import BeautifulSoup
from sixslides.conversion.blocks import MARKDOWN_RULES, NOTION_RULES, Block, BlockClassifier, BlockKind
from sixslides.conversion.inline import InlineFormatter
from sixslides.conversion.synthesizer import (
    MarkdownSynthesizer,
    escape_cell,
    heading_markdown,
    table_rows_to_markdown,
)


def render(html: str, rules=MARKDOWN_RULES, synthesizer=None) -> str:
    """Classify and synthesize the first element of an HTML fragment."""
    node = BeautifulSoup(html, "html.parser").find(True)
    block = BlockClassifier(rules).classify(node)
    return (synthesizer or MarkdownSynthesizer()).synthesize(node, block)


class TestHeadings:
    """Tests for heading synthesis."""

    def test_heading_prefixes(self):
        """Test levels 1-3 get one to three '#'."""
        assert render("<h1>  Intro  </h1>") == "# Intro"
        assert render("<h2>Part</h2>") == "## Part"
        assert render("<h3>Detail</h3>") == "### Detail"

    def test_empty_heading_text(self):
        """Test an empty heading yields no line."""
        assert heading_markdown(1, "   ") == ""


class TestLists:
    """Tests for list synthesis."""

    def test_notion_list_is_one_bullet(self):
        """Test a Notion list block flattens to a single bullet line."""
        html = '<div class="notion-bulleted_list-block">First item<div>nested child</div></div>'
        assert render(html, NOTION_RULES) == "- First item nested child"

    def test_native_list_flattened_by_default(self):
        """Test <ul> flattens unless native expansion is enabled."""
        assert render("<ul><li>one</li><li>two</li></ul>") == "- one two"

    def test_native_list_expanded(self):
        """Test native list expansion for rendered markdown."""
        synthesizer = MarkdownSynthesizer(expand_native_lists=True)
        assert render("<ul><li>one</li><li>two</li></ul>", synthesizer=synthesizer) == "- one\n- two"
        assert render("<ol><li>one</li><li>two</li></ol>", synthesizer=synthesizer) == "1. one\n2. two"


class TestCode:
    """Tests for fenced code synthesis."""

    def test_language_from_class(self):
        """Test the language tag comes from a language- class."""
        html = '<pre><code class="language-python">print("hi")</code></pre>'
        assert render(html) == '```python\nprint("hi")\n```'

    def test_no_language(self):
        """Test the language tag may be empty."""
        assert render("<pre>x = 1\ny = 2</pre>") == "```\nx = 1\ny = 2\n```"

    def test_notion_language_label(self):
        """Test Notion's language label is used and not copied into the code."""
        html = (
            '<div class="notion-code-block"><div class="notion-code-language">Python</div>'
            "<pre><code>x = 1</code></pre></div>"
        )
        assert render(html, NOTION_RULES) == "```python\nx = 1\n```"


class TestQuotes:
    """Tests for quote synthesis."""

    def test_three_line_quote(self):
        """Test every line of a quote is prefixed."""
        result = render("<blockquote>Line one<br>Line two<br>Line three</blockquote>")
        lines = result.split("\n")
        assert len(lines) == 3
        assert all(line.startswith("> ") for line in lines)

    def test_single_line_quote(self):
        """Test a one-line quote gives one line."""
        assert render("<blockquote>Just this</blockquote>") == "> Just this"

    def test_blank_lines_dropped(self):
        """Test empty lines inside a quote are not prefixed."""
        assert render("<blockquote><p>a</p><p>b</p></blockquote>") == "> a\n> b"


class TestDividerAndImage:
    """Tests for divider and image synthesis."""

    def test_divider(self):
        """Test dividers become '---'."""
        assert render("<hr>") == "---"

    def test_image_alt_attribute(self):
        """Test alt text falls back to the alt attribute."""
        assert render('<img src="a.png" alt="Diagram">') == "![Diagram](a.png)"

    def test_image_caption_preferred(self):
        """Test an explicit caption wins over the alt attribute."""
        html = '<figure><img src="a.png" alt="alt"><figcaption>The caption</figcaption></figure>'
        assert render(html) == "![The caption](a.png)"

    def test_image_without_alt(self):
        """Test alt text defaults to empty."""
        assert render('<img src="a.png">') == "![](a.png)"

    def test_image_without_url_dropped(self):
        """Test an image with no URL contributes nothing."""
        assert render('<img alt="nothing">') == ""

    def test_relative_url_resolution(self):
        """Test relative image URLs are joined against an http(s) base."""
        synthesizer = MarkdownSynthesizer(base_url="https://example.com/docs/page")
        assert render('<img src="img/a.png">', synthesizer=synthesizer) == "![](https://example.com/docs/img/a.png)"

    def test_file_base_url_ignored(self):
        """Test non-http base URLs are not used for resolution."""
        synthesizer = MarkdownSynthesizer(base_url="file:///tmp/deck.html")
        assert render('<img src="a.png">', synthesizer=synthesizer) == "![](a.png)"


class TestTables:
    """Tests for table synthesis."""

    def test_header_separator(self):
        """Test the separator row follows the header with the same cell count."""
        html = "<table><tr><th>Name</th><th>Value</th></tr><tr><td>a</td><td>1</td></tr></table>"
        lines = render(html).split("\n")
        assert lines == ["| Name | Value |", "| --- | --- |", "| a | 1 |"]

    def test_pipe_escaped(self):
        """Test literal pipes in cells are escaped."""
        html = "<table><tr><th>Expr</th><th>Note</th></tr><tr><td>a|b</td><td>ok</td></tr></table>"
        lines = render(html).split("\n")
        assert "a\\|b" in lines[2]
        assert lines[0].count(" | ") == lines[1].count(" | ")

    def test_div_grid(self):
        """Test Notion div-grid tables."""
        html = (
            '<div class="notion-table-block">'
            "<div><div>H1</div><div>H2</div></div>"
            "<div><div>x</div><div>y</div></div>"
            "</div>"
        )
        assert render(html, NOTION_RULES) == "| H1 | H2 |\n| --- | --- |\n| x | y |"

    def test_helpers(self):
        """Test the row helpers directly."""
        assert escape_cell(" a | b ") == "a \\| b"
        assert table_rows_to_markdown([]) == ""
        assert table_rows_to_markdown([["A", "B"], ["1"]]) == "| A | B |\n| --- | --- |\n| 1 |   |"


class TestParagraphs:
    """Tests for paragraph synthesis."""

    def test_trimmed_text(self):
        """Test paragraph text is trimmed."""
        assert render("<p>   Hello world   </p>") == "Hello world"

    def test_inline_formatting(self):
        """Test inline markup survives with the inline formatter."""
        synthesizer = MarkdownSynthesizer(inline_formatter=InlineFormatter())
        assert render("<p>Hello <strong>world</strong></p>", synthesizer=synthesizer) == "Hello **world**"

    def test_failing_block_degrades_to_empty(self):
        """Test a block that fails to render contributes nothing."""
        formatter = MagicMock()
        formatter.format.side_effect = RuntimeError("broken markup")
        synthesizer = MarkdownSynthesizer(inline_formatter=formatter)
        node = BeautifulSoup("<p>text</p>", "html.parser").p

        assert synthesizer.synthesize(node, Block(BlockKind.PARAGRAPH)) == ""

    def test_skip_has_no_fragment(self):
        """Test SKIP blocks synthesize to nothing."""
        node = BeautifulSoup("<p>text</p>", "html.parser").p
        assert MarkdownSynthesizer().synthesize(node, Block(BlockKind.SKIP)) == ""
