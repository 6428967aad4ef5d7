"""Command-line interface for sixslides."""

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from . import __version__
from .core.controller import ContentController
from .core.loader import load_document
from .logging_config import setup_logging
from .models.config import SixSlidesConfig
from .models.events import EventType, ExtractionEvent
from .models.presentation import Presentation


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog="sixslides",
        description="Turn a Notion page or Markdown document into presentation slides",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Markdown file to JSON on stdout
  sixslides talk.md

  # Saved Notion page, with its original URL for detection
  sixslides page.html --locator https://www.notion.so/team/My-Deck-abc123

  # Level-2 headings as subslides, written as markdown
  sixslides README.md --subslides --format markdown -o deck.md

  # No free-plan cap
  sixslides https://example.com/slides.md --pro
        """,
    )

    parser.add_argument(
        "source",
        nargs="?",
        help="File path or http(s) URL of the document",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "--locator",
        type=str,
        metavar="URL",
        help="Origin URL used for source detection (default: the file URI or fetched URL)",
    )

    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        metavar="FILE",
        help="YAML configuration file",
    )

    # Extraction settings
    extraction_group = parser.add_argument_group("extraction settings")
    extraction_group.add_argument(
        "--subslides",
        action="store_true",
        help="Promote level-2 headings to subslides",
    )
    extraction_group.add_argument(
        "--inline-formatting",
        action="store_true",
        help="Keep bold, italic, inline code and links in paragraphs",
    )
    extraction_group.add_argument(
        "--resolve-urls",
        action="store_true",
        help="Resolve relative image URLs against the locator",
    )
    extraction_group.add_argument(
        "--delimiter-fallback",
        action="store_true",
        help="Split heading-less Markdown on --- / *** / <!-- slide --> separators",
    )

    # Plan settings
    plan_group = parser.add_argument_group("plan settings")
    plan_group.add_argument(
        "--pro",
        action="store_true",
        help="Treat the user as entitled (no slide cap)",
    )
    plan_group.add_argument(
        "--max-slides",
        type=int,
        default=None,
        metavar="N",
        help="Free-plan slide cap (default: 6)",
    )

    # Output control
    output_group = parser.add_argument_group("output control")
    output_group.add_argument(
        "--format",
        "-f",
        choices=["json", "markdown"],
        default="json",
        help="Output format (default: json)",
    )
    output_group.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        metavar="FILE",
        help="Write the presentation to FILE instead of stdout",
    )
    output_group.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Verbose output",
    )
    output_group.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Suppress output",
    )

    return parser


def build_config(args: argparse.Namespace) -> SixSlidesConfig:
    """
    Build configuration from an optional YAML file plus CLI overrides.

    Raises:
        ValidationError: If the merged configuration is invalid
        OSError: If the config file cannot be read
    """
    base = SixSlidesConfig.from_yaml_file(args.config) if args.config else SixSlidesConfig()
    data: dict[str, Any] = base.model_dump()

    extraction = data["extraction"]
    if args.subslides:
        extraction["split_subslides"] = True
    if args.inline_formatting:
        extraction["inline_formatting"] = True
    if args.resolve_urls:
        extraction["resolve_relative_urls"] = True
    if args.delimiter_fallback:
        extraction["delimiter_fallback"] = True

    if args.max_slides is not None:
        data["free_tier"]["max_slides"] = args.max_slides
    if args.pro:
        data["entitlement"]["pro"] = True

    # Log level
    if args.verbose:
        data["log_level"] = "DEBUG"
    elif args.quiet:
        data["log_level"] = "ERROR"

    return SixSlidesConfig.model_validate(data)


def render_output(presentation: Presentation, output_format: str) -> str:
    """Serialize the extracted presentation."""
    if output_format == "markdown":
        return presentation.to_markdown()
    return json.dumps(presentation.to_dict(), indent=2, ensure_ascii=False) + "\n"


def print_summary(console: Console, presentation: Presentation) -> None:
    table = Table(title=presentation.title, show_lines=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Title", style="bold")
    table.add_column("Source")
    table.add_column("Subslides", justify="right")
    table.add_column("Chars", justify="right")

    for index, slide in enumerate(presentation.slides, start=1):
        table.add_row(
            str(index),
            slide.title,
            slide.source_type.value if slide.source_type else "",
            str(len(slide.subslides)) if slide.subslides else "",
            str(len(slide.content or "")),
        )

    console.print(table)
    console.print(f"[green]{presentation.slide_count} slides[/green] ({presentation.source_type.value})")


def run_extraction(args: argparse.Namespace) -> int:
    """Run an extraction with the given arguments."""
    # Status output goes to stderr; stdout may carry the deck itself
    console = Console(stderr=True)

    if not args.source:
        console.print("[red]Error:[/red] Please provide a file path or URL")
        return 1

    try:
        config = build_config(args)
    except (ValidationError, OSError, yaml.YAMLError) as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        return 1

    setup_logging(config.log_level, config.log_file)

    async def run() -> int:
        if not args.quiet:
            console.print(f"[bold blue]sixslides[/bold blue] v{__version__}")
            console.print(f"Source: {args.source}")
            console.print()

        try:
            loaded = await load_document(args.source, network=config.network)
        except Exception as e:
            console.print(f"[red]Error:[/red] could not load {args.source}: {e}")
            if args.verbose:
                console.print_exception()
            return 1

        controller = ContentController(config)
        locator = args.locator or loaded.locator

        if args.quiet:
            result = await controller.extract_content(loaded.content, locator, content_type=loaded.content_type)
        else:
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                console=console,
                transient=True,
            ) as progress:
                task = progress.add_task("Starting...", total=None)

                def on_event(event: ExtractionEvent) -> None:
                    if event.type == EventType.SOURCE_DETECTED and event.source_type:
                        progress.update(task, description=f"[cyan]Detected {event.source_type.value} source")
                    elif event.type == EventType.SLIDES_EXTRACTED:
                        progress.update(task, description=f"[cyan]Extracted {event.slide_count} slides")
                    elif event.type == EventType.LIMIT_APPLIED:
                        progress.update(task, description=f"[cyan]Slide cap: {event.message}")
                    elif event.type == EventType.COMPLETED:
                        progress.update(task, description="[green]Done")
                    if args.verbose:
                        console.print(f"[dim]{event.type.value}[/dim] {event.message or event.error or ''}")

                result = await controller.extract_content(
                    loaded.content, locator, emit=on_event, content_type=loaded.content_type
                )

        presentation = result.presentation
        if presentation is None:
            console.print(f"[red]Error:[/red] {result.error}")
            return 1

        output = render_output(presentation, args.format)
        if args.output:
            args.output.write_text(output, encoding="utf-8")
            if not args.quiet:
                console.print(f"Wrote {args.output}")
        else:
            sys.stdout.write(output)

        if not args.quiet:
            print_summary(console, presentation)
        return 0

    return asyncio.run(run())


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)
    return run_extraction(args)


if __name__ == "__main__":
    sys.exit(main())
