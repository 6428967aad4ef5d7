"""Tests for the Notion page extractor."""

from sixslides.conversion.dom import SourceDocument
from sixslides.extractors.notion import NotionExtractor, clean_subslide_title
from sixslides.models.config import ExtractionConfig
from sixslides.models.slide import SourceType

NOTION_URL = "https://www.notion.so/team/Quarterly-Review-0123456789abcdef"


def notion_page(blocks: str) -> str:
    """Wrap block markup in a Notion page skeleton."""
    return f"""<html><body><div class="notion-frame">
        <div class="notion-page-block"><h1>Quarterly Review</h1></div>
        <div class="notion-page-content">{blocks}</div>
    </div></body></html>"""


def header(text: str) -> str:
    return f'<div class="notion-selectable notion-header-block"><h2 class="notranslate">{text}</h2></div>'


def text_block(text: str) -> str:
    return f'<div class="notion-selectable notion-text-block"><div class="notranslate">{text}</div></div>'


class TestNotionExtractor:
    """Tests for NotionExtractor."""

    def extract(self, blocks: str, config=None):
        document = SourceDocument.from_input(notion_page(blocks), NOTION_URL)
        return NotionExtractor(config).extract(document)

    def test_header_blocks_are_boundaries(self):
        """Test Notion header blocks start slides."""
        slides = self.extract(header("Intro") + text_block("Hello") + header("Next") + text_block("More"))

        assert [s.title for s in slides] == ["Intro", "Next"]
        assert slides[0].content == "Hello"
        assert all(s.source_type == SourceType.NOTION for s in slides)

    def test_page_title_not_a_slide(self):
        """Test the page title outside the content area is ignored."""
        slides = self.extract(header("Intro") + text_block("Hello"))
        assert "Quarterly Review" not in [s.title for s in slides]

    def test_mixed_blocks(self):
        """Test each Notion block type in one slide."""
        blocks = (
            header("Agenda")
            + '<div class="notion-selectable notion-bulleted_list-block">Goals</div>'
            + '<div class="notion-selectable notion-to_do-block">Ship it</div>'
            + '<div class="notion-selectable notion-quote-block">Stay curious</div>'
            + '<div class="notion-selectable notion-divider-block"><div role="separator"></div></div>'
            + '<div class="notion-selectable notion-image-block"><img src="https://img.example/a.png" alt="Chart"></div>'
            + '<div class="notion-selectable notion-code-block"><div class="notion-code-language">JavaScript</div>'
            + "<pre><code>let x = 1;</code></pre></div>"
        )
        slides = self.extract(blocks)

        assert slides[0].content == "\n\n".join(
            [
                "- Goals",
                "- Ship it",
                "> Stay curious",
                "---",
                "![Chart](https://img.example/a.png)",
                "```javascript\nlet x = 1;\n```",
            ]
        )

    def test_no_headers(self):
        """Test a page without header blocks yields no slides."""
        assert self.extract(text_block("Just text")) == []

    def test_subslides(self):
        """Test sub-header blocks become subslides when enabled."""
        blocks = (
            header("Intro")
            + text_block("Overview")
            + '<div class="notion-selectable notion-sub_header-block"><h3>Heading 2: Details</h3></div>'
            + text_block("Detail text")
        )
        slides = self.extract(blocks, ExtractionConfig(split_subslides=True))

        assert slides[0].content == "Overview"
        assert len(slides[0].subslides) == 1
        assert slides[0].subslides[0].title == "Details"
        assert slides[0].subslides[0].content == "Detail text"

    def test_sub_headers_inline_by_default(self):
        """Test sub-headers stay in the slide body by default."""
        blocks = header("Intro") + '<div class="notion-selectable notion-sub_header-block">Part</div>' + text_block("x")
        slides = self.extract(blocks)
        assert slides[0].content == "## Part\n\nx"

    def test_without_content_wrapper(self):
        """Test pages saved without the content wrapper are walked whole."""
        html = "<div>" + header("Only") + text_block("Body") + "</div>"
        slides = NotionExtractor().extract(SourceDocument.from_input(html, NOTION_URL))
        assert [s.title for s in slides] == ["Only"]


class TestCleanSubslideTitle:
    """Tests for clean_subslide_title."""

    def test_strips_label(self):
        """Test the accessible heading label is removed."""
        assert clean_subslide_title("Heading 2: Results") == "Results"
        assert clean_subslide_title("heading 2:Results") == "Results"

    def test_leaves_plain_titles(self):
        """Test titles without the label are unchanged."""
        assert clean_subslide_title("Results") == "Results"
