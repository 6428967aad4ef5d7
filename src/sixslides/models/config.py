"""Pydantic configuration models for sixslides."""

from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field


class SourceConfig(BaseModel):
    """Configuration for source detection."""

    notion_domains: list[str] = Field(
        default_factory=lambda: ["notion.so", "notion.site"],
        description="Hosts served by the Notion page extractor (subdomains included)",
    )
    markdown_extensions: list[str] = Field(
        default_factory=lambda: [".md", ".markdown"],
        description="Locator path suffixes treated as raw Markdown files",
    )
    markdown_containers: list[str] = Field(
        default_factory=lambda: [".markdown-body", ".md-content", ".wiki-content", ".markdown"],
        description="CSS selectors of rendered-markdown containers, most specific first",
    )

    model_config = {"extra": "forbid"}


class ExtractionConfig(BaseModel):
    """Configuration for block conversion and slide assembly."""

    split_subslides: bool = Field(
        False,
        description="Promote level-2 headings to subslides under their level-1 slide",
    )
    inline_formatting: bool = Field(
        False,
        description="Keep bold/italic/inline code/links in paragraphs (via html2text)",
    )
    resolve_relative_urls: bool = Field(
        False,
        description="Resolve relative image URLs against an http(s) locator",
    )
    delimiter_fallback: bool = Field(
        False,
        description="Split heading-less Markdown on ---/***/<!-- slide --> separators",
    )

    model_config = {"extra": "forbid"}


class FreeTierConfig(BaseModel):
    """Configuration for the free-plan slide cap."""

    max_slides: int = Field(6, ge=1, description="Maximum slides for users without entitlement")
    upgrade_url: str = Field(
        "https://notion-slides.com/pricing",
        description="Link shown on the upgrade slide",
    )

    model_config = {"extra": "forbid"}


class EntitlementConfig(BaseModel):
    """Configuration for the entitlement check."""

    pro: bool = Field(False, description="Static entitlement flag used by the CLI")
    timeout: float = Field(5.0, gt=0, description="Seconds to wait for the entitlement check")

    model_config = {"extra": "forbid"}


class NetworkConfig(BaseModel):
    """Configuration for loading documents from URLs."""

    user_agent: Optional[str] = Field(None, description="Custom User-Agent header")
    timeout: float = Field(30.0, gt=0, description="Request timeout in seconds")
    max_retries: int = Field(3, ge=0, description="Maximum retry attempts for failed requests")

    model_config = {"extra": "forbid"}


class SixSlidesConfig(BaseModel):
    """
    Root configuration model for sixslides.

    Example:
        config = SixSlidesConfig(
            extraction=ExtractionConfig(split_subslides=True),
            free_tier=FreeTierConfig(max_slides=10),
        )

    YAML format:
        extraction:
          split_subslides: true
        free_tier:
          max_slides: 10
        entitlement:
          pro: false
    """

    source: SourceConfig = Field(default_factory=SourceConfig)
    extraction: ExtractionConfig = Field(default_factory=ExtractionConfig)
    free_tier: FreeTierConfig = Field(default_factory=FreeTierConfig)
    entitlement: EntitlementConfig = Field(default_factory=EntitlementConfig)
    network: NetworkConfig = Field(default_factory=NetworkConfig)

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        "INFO",
        description="Logging level",
    )
    log_file: Optional[Path] = Field(None, description="Log file path")

    model_config = {"extra": "forbid"}

    def to_yaml(self) -> str:
        """Serialize config to YAML string."""
        import yaml

        return yaml.dump(self.model_dump(mode="json", exclude_none=True), default_flow_style=False)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "SixSlidesConfig":
        """Load config from YAML string."""
        import yaml

        data = yaml.safe_load(yaml_str) or {}
        return cls.model_validate(data)

    @classmethod
    def from_yaml_file(cls, path: Path) -> "SixSlidesConfig":
        """Load config from YAML file."""
        return cls.from_yaml(path.read_text())
