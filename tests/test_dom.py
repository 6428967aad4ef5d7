"""Tests for document wrapping and text helpers."""

from bs4 import BeautifulSoup
from sixslides.conversion.dom import (
    SourceDocument,
    decode_bytes,
    has_class,
    inner_text,
    is_descendant,
    looks_like_markup,
    single_line_text,
)


class TestSourceDocument:
    """Tests for SourceDocument.from_input."""

    def test_markdown_text(self):
        """Test plain text is kept as text."""
        document = SourceDocument.from_input("# Title\n\nBody", "deck.md")
        assert not document.is_markup
        assert document.body_text() == "# Title\n\nBody"

    def test_html_string(self):
        """Test HTML strings are parsed."""
        document = SourceDocument.from_input("<html><body><h1>Hi</h1></body></html>", "https://example.com")
        assert document.is_markup
        assert document.tree.h1.get_text() == "Hi"

    def test_parsed_tree_reused(self):
        """Test a BeautifulSoup tree is used as-is."""
        soup = BeautifulSoup("<p>x</p>", "html.parser")
        assert SourceDocument.from_input(soup, "").tree is soup

    def test_raw_markdown_in_pre(self):
        """Test a browser-rendered raw .md file yields its text."""
        html = "<html><body><pre># Deck\n\n- one\n- two</pre></body></html>"
        document = SourceDocument.from_input(html, "https://example.com/deck.md")
        assert document.body_text() == "# Deck\n\n- one\n- two"

    def test_markdown_locator_keeps_leading_html_as_text(self):
        """Test a .md file opening with inline HTML is not parsed as a page."""
        text = '<p align="center"><img src="logo.png"></p>\n\n# Title\n\n    indented'
        document = SourceDocument.from_input(text, "file:///repo/README.md")
        assert not document.is_markup
        assert document.body_text() == text

    def test_markdown_locator_full_page_parsed(self):
        """Test a whole HTML page at a .md URL (a rendered README) is parsed."""
        html = "<!DOCTYPE html><html><body><article class='markdown-body'><h1>Readme</h1></article></body></html>"
        assert SourceDocument.from_input(html, "https://github.com/org/repo/blob/main/README.md").is_markup

    def test_markdown_content_type(self):
        """Test a Markdown or plain-text media type keeps inline HTML as text."""
        text = "<div>badge</div>\n\n# Title"
        assert not SourceDocument.from_input(text, "https://example.com/raw", content_type="text/markdown").is_markup
        assert not SourceDocument.from_input(text, "https://example.com/raw", "text/plain; charset=utf-8").is_markup
        assert SourceDocument.from_input(text, "https://example.com/raw", content_type="text/html").is_markup

    def test_bytes_with_charset(self):
        """Test bytes are decoded with the declared charset."""
        data = '<html><head><meta charset="iso-8859-1"></head><body>café</body></html>'.encode("iso-8859-1")
        assert "café" in decode_bytes(data)

    def test_charset_only_sniffed_in_markup(self):
        """Test Markdown mentioning a charset is still decoded as UTF-8."""
        data = "# Encodings\n\nSet `charset=utf-16` in the header. Café.".encode("utf-8")
        assert decode_bytes(data) == "# Encodings\n\nSet `charset=utf-16` in the header. Café."

    def test_http_equiv_charset(self):
        """Test the http-equiv form of the charset declaration."""
        data = (
            '<html><head><meta http-equiv="Content-Type" content="text/html; charset=iso-8859-1">'
            "</head><body>café</body></html>"
        ).encode("iso-8859-1")
        assert "café" in decode_bytes(data)


class TestTextHelpers:
    """Tests for inner_text and friends."""

    def test_inner_text_blocks_and_breaks(self):
        """Test block tags and <br> become line breaks."""
        node = BeautifulSoup("<div><p>One   two</p><p>Three<br>Four</p></div>", "html.parser").div
        assert inner_text(node) == "One two\nThree\nFour"

    def test_inner_text_skips_scripts(self):
        """Test script and style text is ignored."""
        node = BeautifulSoup("<div>Shown<script>var x;</script><style>p{}</style></div>", "html.parser").div
        assert inner_text(node) == "Shown"

    def test_single_line_text(self):
        """Test text is flattened to one line."""
        node = BeautifulSoup("<h1>Quarterly<br>Review</h1>", "html.parser").h1
        assert single_line_text(node) == "Quarterly Review"

    def test_looks_like_markup(self):
        """Test markup sniffing."""
        assert looks_like_markup("  <!DOCTYPE html><html></html>")
        assert looks_like_markup("<div>x</div>")
        assert not looks_like_markup("# Heading\n<div>x</div>")
        assert not looks_like_markup("a < b")

    def test_identity_helpers(self):
        """Test class matching and identity-based ancestry."""
        soup = BeautifulSoup('<div class="notion-text-block"><p>x</p></div><div><p>x</p></div>', "html.parser")
        first, second = soup.find_all("p")
        assert has_class(first.parent, "text-block")
        assert not has_class(None, "text-block")
        assert is_descendant(first, soup.find_all("div")[0])
        assert not is_descendant(second, soup.find_all("div")[0])
