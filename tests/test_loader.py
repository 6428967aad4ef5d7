"""Tests for document loading."""

from unittest.mock import AsyncMock

import pytest
from sixslides.core.loader import LoadedDocument, is_url, load_document
from sixslides.http.protocols import HttpResponse
from sixslides.models.config import NetworkConfig


class TestIsUrl:
    """Tests for is_url."""

    def test_urls_and_paths(self):
        """Test only http(s) sources count as URLs."""
        assert is_url("https://www.notion.so/page")
        assert is_url("http://example.com/a.md")
        assert not is_url("deck.md")
        assert not is_url("/tmp/deck.md")
        assert not is_url("file:///tmp/deck.md")


class TestLoadDocument:
    """Tests for load_document."""

    @pytest.mark.asyncio
    async def test_local_file(self, tmp_path):
        """Test a local file gets a file URI locator."""
        path = tmp_path / "deck.md"
        path.write_text("# Hello\n\nWorld", encoding="utf-8")

        loaded = await load_document(str(path))

        assert loaded.content == b"# Hello\n\nWorld"
        assert loaded.locator.startswith("file://")
        assert loaded.locator.endswith("/deck.md")
        assert loaded.content_type == ""

    @pytest.mark.asyncio
    async def test_missing_file(self, tmp_path):
        """Test a missing path raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            await load_document(str(tmp_path / "nope.md"))

    @pytest.mark.asyncio
    async def test_url_uses_final_url(self):
        """Test the locator is the URL after redirects."""
        client = AsyncMock()
        client.get.return_value = HttpResponse(
            status_code=200,
            content=b"<html></html>",
            content_type="text/html; charset=utf-8",
            url="https://www.notion.so/team/Deck-abc",
        )

        loaded = await load_document("https://notion.so/Deck-abc", client=client, network=NetworkConfig(timeout=5))

        assert isinstance(loaded, LoadedDocument)
        assert loaded.locator == "https://www.notion.so/team/Deck-abc"
        assert loaded.content_type == "text/html"
        client.get.assert_awaited_once_with("https://notion.so/Deck-abc", timeout=5)

    @pytest.mark.asyncio
    async def test_url_without_final_url(self):
        """Test the requested URL is kept when the response has none."""
        client = AsyncMock()
        client.get.return_value = HttpResponse(status_code=200, content=b"# A", content_type="text/markdown", url="")

        loaded = await load_document("https://example.com/a.md", client=client)

        assert loaded.locator == "https://example.com/a.md"
        client.get.assert_awaited_once_with("https://example.com/a.md", timeout=None)
