#!/usr/bin/env python3
"""
Main Entry Point

Topic Map - turn a document or a topic JSON file into a flowchart,
a JSON tree and a radial mind map.
"""

import argparse
import asyncio
import json
import os
import sys
from pathlib import Path

from dotenv import load_dotenv
from rich.console import Console
from rich.rule import Rule
from rich.syntax import Syntax
from rich.table import Table

from topicmap.analysis import HttpAnalyzer, TopicSource
from topicmap.config import load_settings
from topicmap.exceptions import GraphConstructionError, SettingsError
from topicmap.models import OutputFormat
from topicmap.pipeline import PipelineResult, process_content, process_topics
from topicmap.preprocessing import open_spell_checker
from topicmap.utils.logging_config import LogLevel, get_logger, setup_logging

logger = get_logger("cli")

console = Console()

# Load environment variables from .env file
load_dotenv()


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Topic Map - flowchart, JSON tree and mind-map generation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument("input", type=str, help="Document text file, or topics JSON with --topics")

    parser.add_argument(
        "--topics",
        action="store_true",
        help="Treat the input as a JSON array of topics instead of document text",
    )

    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to settings file (default: $TOPICMAP_SETTINGS or config/settings.yaml)",
    )

    parser.add_argument(
        "--format",
        "-f",
        dest="formats",
        action="append",
        choices=[fmt.value for fmt in OutputFormat],
        help="Output format; repeat for several (default: from settings)",
    )

    parser.add_argument("--language", "-l", type=str, default=None, help="Content language code")

    parser.add_argument(
        "--output",
        "-o",
        type=str,
        default=None,
        help="Write the full result as JSON to this path",
    )

    parser.add_argument(
        "--correct-spelling",
        action="store_true",
        help="Spell-correct text before heuristic extraction (needs a dictionary in settings)",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output (detailed logging)",
    )

    parser.add_argument(
        "--debug",
        "-d",
        action="store_true",
        help="Enable debug mode (full logging with all details)",
    )

    parser.add_argument(
        "--verbose-level",
        type=str,
        choices=[level.value for level in LogLevel],
        default="normal",
        help="Set verbose level: minimal, normal, detailed, or full (default: normal)",
    )

    parser.add_argument(
        "--log-file",
        type=str,
        nargs="?",
        const="logs/topicmap.log",
        default=None,
        help="Enable file logging. Use --log-file for logs/topicmap.log or --log-file <path>",
    )

    return parser.parse_args(argv)


def _print_summary(result: PipelineResult) -> None:
    table = Table(title="Topic map", show_header=False)
    table.add_row("Language", result.language)
    if result.origin is not None:
        table.add_row("Topics from", str(getattr(result.origin, "value", result.origin)))
    table.add_row("Topics", str(len(result.topics)))
    table.add_row("Nodes", str(len(result.graph.nodes)))
    table.add_row("Edges", str(len(result.graph.edges)))
    console.print(table)
    for note in result.notes:
        console.print(f"[yellow]{note}[/yellow]")


def _print_artifacts(result: PipelineResult) -> None:
    if result.flowchart is not None:
        console.print(Rule("[bold cyan]Flowchart[/bold cyan]", style="cyan"))
        console.print(result.flowchart, markup=False, highlight=False)
    if result.json_tree is not None:
        console.print(Rule("[bold cyan]JSON tree[/bold cyan]", style="cyan"))
        console.print(Syntax(json.dumps(result.json_tree.to_wire(), indent=2, ensure_ascii=False), "json"))
    if result.mind_map is not None:
        console.print(Rule("[bold cyan]Mind map[/bold cyan]", style="cyan"))
        console.print(Syntax(json.dumps(result.mind_map.to_wire(), indent=2, ensure_ascii=False), "json"))


async def _run(args, settings) -> PipelineResult:
    raw = Path(args.input).read_text(encoding="utf-8")
    if args.topics:
        return process_topics(json.loads(raw), language=args.language, settings=settings, formats=args.formats)

    if args.correct_spelling:
        settings.preprocessing.correct_spelling = True
    spell_checker = await open_spell_checker(settings.preprocessing)
    try:
        source = TopicSource(
            analyzer=HttpAnalyzer.from_env(language=args.language or settings.language),
            settings=settings.analysis,
            spell_checker=spell_checker,
        )
        return await process_content(
            raw,
            source=source,
            language=args.language,
            settings=settings,
            formats=args.formats,
        )
    finally:
        if spell_checker is not None:
            spell_checker.close()


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)

    if args.debug:
        level = LogLevel.FULL
    elif args.verbose:
        level = LogLevel.DETAILED
    else:
        level = LogLevel(args.verbose_level)

    setup_logging(
        level=level,
        log_to_file=args.log_file is not None,
        log_file=args.log_file,
        verbose=args.verbose,
        debug=args.debug,
    )

    console.print()
    console.print(Rule("[bold cyan]Topic Map[/bold cyan]", style="cyan"))
    if args.debug:
        console.print("[bold yellow]DEBUG MODE ENABLED[/bold yellow]")
    elif args.verbose:
        console.print("[bold cyan]VERBOSE MODE ENABLED[/bold cyan]")
    console.print()

    if not args.topics and not os.getenv("TOPICMAP_ANALYSIS_URL"):
        console.print("[yellow]No analysis service configured (TOPICMAP_ANALYSIS_URL).[/yellow]")
        console.print("[yellow]Continuing with heuristic (keyword-based) extraction...[/yellow]\n")

    try:
        settings = load_settings(args.config)
        result = asyncio.run(_run(args, settings))
    except (FileNotFoundError, SettingsError) as e:
        logger.debug("Run aborted before processing", exc_info=True)
        console.print(f"[bold red]Error:[/bold red] {e}")
        sys.exit(2)
    except json.JSONDecodeError as e:
        console.print(f"[bold red]Error:[/bold red] input is not valid topics JSON: {e}")
        sys.exit(2)
    except GraphConstructionError as e:
        logger.debug("Topic map construction failed", exc_info=True)
        console.print(f"[bold red]Error:[/bold red] could not build a topic map: {e}")
        sys.exit(1)

    _print_summary(result)
    _print_artifacts(result)

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(json.dumps(result.to_dict(), indent=2, ensure_ascii=False), encoding="utf-8")
        logger.info("Wrote %s", output_path)
        console.print(f"\n[green]Wrote {output_path}[/green]")


if __name__ == "__main__":
    main()
