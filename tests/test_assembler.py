"""Tests for slide assembly."""

import pytest
from bs4 import BeautifulSoup
from sixslides.conversion.blocks import MARKDOWN_RULES, BlockClassifier
from sixslides.conversion.synthesizer import MarkdownSynthesizer
from sixslides.extractors.assembler import SlideAssembler
from sixslides.extractors.base import FragmentAccumulator
from sixslides.models.slide import SourceType


@pytest.fixture
def assembler():
    """Assembler with native-tag rules."""
    return SlideAssembler(BlockClassifier(MARKDOWN_RULES), MarkdownSynthesizer(), SourceType.MARKDOWN)


def assemble(assembler, html):
    return assembler.assemble(BeautifulSoup(html, "html.parser"))


class TestFragmentAccumulator:
    """Tests for FragmentAccumulator."""

    def test_joins_with_blank_lines(self):
        """Test fragments are blank-line separated."""
        acc = FragmentAccumulator("# Title")
        acc.add("one")
        acc.add("two")
        assert acc.content == "one\n\ntwo"
        assert acc.body == "# Title\n\none\n\ntwo"

    def test_duplicate_suppressed(self):
        """Test an identical fragment is added once."""
        acc = FragmentAccumulator("# Title")
        assert acc.add("same") is True
        assert acc.add("same") is False
        assert acc.fragments == ["same"]

    def test_title_line_never_added(self):
        """Test a fragment equal to the title line is suppressed."""
        acc = FragmentAccumulator("# Title")
        assert acc.add("# Title") is False
        assert acc.content == ""

    def test_subset_fragment_kept(self):
        """Test a fragment contained in a longer one is still added."""
        acc = FragmentAccumulator("# Title")
        acc.add("Hello world")
        assert acc.add("Hello") is True
        assert acc.fragments == ["Hello world", "Hello"]

    def test_blank_fragments_ignored(self):
        """Test empty fragments are never appended."""
        acc = FragmentAccumulator("")
        assert acc.add("") is False
        assert acc.add("  \n ") is False
        assert acc.is_empty()


class TestSlideAssembler:
    """Tests for SlideAssembler."""

    def test_order_preserved(self, assembler):
        """Test N boundaries give N slides with their own fragments in order."""
        html = (
            "<h1>One</h1><p>1a</p><p>1b</p>"
            "<h1>Two</h1><p>2a</p><p>2b</p>"
            "<h1>Three</h1><p>3a</p><p>3b</p>"
        )
        slides = assemble(assembler, html)

        assert [s.title for s in slides] == ["One", "Two", "Three"]
        assert [s.content for s in slides] == ["1a\n\n1b", "2a\n\n2b", "3a\n\n3b"]

    def test_duplicate_block_appears_once(self, assembler):
        """Test the same block twice in a row yields one fragment."""
        slides = assemble(assembler, "<h1>One</h1><p>Repeated</p><p>Repeated</p><p>Other</p>")
        assert slides[0].content == "Repeated\n\nOther"

    def test_content_excludes_title_line(self, assembler):
        """Test content does not repeat the heading."""
        slides = assemble(assembler, "<h1>One</h1><p>Body</p>")
        assert not slides[0].content.startswith("# One")

    def test_no_boundaries(self, assembler):
        """Test a document without level-1 headings gives no slides."""
        assert assemble(assembler, "<h2>Sub</h2><p>text</p>") == []

    def test_heading_only_slide_kept(self, assembler):
        """Test a slide with a title but no content is kept."""
        slides = assemble(assembler, "<h1>Lonely</h1>")
        assert len(slides) == 1
        assert slides[0].content == ""

    def test_empty_slide_discarded(self, assembler):
        """Test a slide with no title and no content is dropped."""
        slides = assemble(assembler, "<h1></h1><h1>Real</h1><p>x</p>")
        assert [s.title for s in slides] == ["Real"]

    def test_skipped_nodes_contribute_nothing(self, assembler):
        """Test empty nodes and literal heading text add no fragments."""
        slides = assemble(assembler, "<h1>One</h1><p></p><p># fake</p><p>real</p>")
        assert slides[0].content == "real"

    def test_stops_at_container_of_next_boundary(self, assembler):
        """Test a sibling holding the next heading ends the slide."""
        html = "<h1>One</h1><p>a</p><section><h1>Two</h1><p>b</p></section>"
        slides = assemble(assembler, html)

        assert [s.title for s in slides] == ["One", "Two"]
        assert slides[0].content == "a"
        assert slides[1].content == "b"

    def test_h2_inline_without_subslides(self, assembler):
        """Test level-2 headings stay in the body by default."""
        slides = assemble(assembler, "<h1>One</h1><h2>Part</h2><p>x</p>")
        assert slides[0].content == "## Part\n\nx"
        assert slides[0].subslides == ()

    def test_source_type_stamped(self, assembler):
        """Test slides carry the extractor's source type."""
        slides = assemble(assembler, "<h1>One</h1><p>x</p>")
        assert slides[0].source_type == SourceType.MARKDOWN


class TestSubslides:
    """Tests for level-2 subslide grouping."""

    @pytest.fixture
    def splitter(self):
        return SlideAssembler(
            BlockClassifier(MARKDOWN_RULES),
            MarkdownSynthesizer(),
            SourceType.MARKDOWN,
            split_subslides=True,
        )

    def test_subslides_created(self, splitter):
        """Test level-2 headings open subslides under their slide."""
        html = "<h1>One</h1><p>intro</p><h2>A</h2><p>a1</p><h2>B</h2><p>b1</p><h1>Two</h1><p>x</p>"
        slides = assemble(splitter, html)

        assert len(slides) == 2
        assert slides[0].content == "intro"
        assert [s.title for s in slides[0].subslides] == ["A", "B"]
        assert [s.content for s in slides[0].subslides] == ["a1", "b1"]
        assert slides[1].subslides == ()

    def test_dedup_is_per_subslide(self, splitter):
        """Test the same text may appear in the slide and in a subslide."""
        html = "<h1>One</h1><p>same</p><h2>A</h2><p>same</p>"
        slides = assemble(splitter, html)

        assert slides[0].content == "same"
        assert slides[0].subslides[0].content == "same"

    def test_title_cleaner_applied(self):
        """Test subslide titles go through the cleaner."""
        splitter = SlideAssembler(
            BlockClassifier(MARKDOWN_RULES),
            MarkdownSynthesizer(),
            SourceType.NOTION,
            split_subslides=True,
            subslide_title=lambda text: text.upper(),
        )
        slides = assemble(splitter, "<h1>One</h1><h2>part</h2><p>x</p>")
        assert slides[0].subslides[0].title == "PART"
