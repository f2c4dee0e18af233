"""Command line interface of the music news curation pipeline."""
from __future__ import annotations

import argparse
import asyncio
import logging
import re
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Sequence
from zoneinfo import ZoneInfo

from rich.console import Console
from rich.logging import RichHandler
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table

from newsstream.application import ResultNormalizer, RunReport
from newsstream.container import build_http_client, build_pipeline_container, build_sources
from newsstream.curation import parse_recency
from newsstream.domain import SearchBudget, SubjectConfig
from newsstream.infrastructure import FeedStoreError, JsonFeedRepository, load_subjects
from newsstream.settings import ConfigurationError, PipelineSettings

_SUBJECT_DONE_RE = re.compile(r"^.+: \d+ curated, \d+ new, \d+ duplicates$")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Music news stream curator")
    subparsers = parser.add_subparsers(dest="command", required=True)

    curate = subparsers.add_parser(
        "curate", help="Search, curate and append news for every configured artist"
    )
    curate.add_argument("--subjects", type=Path, help="Path to the artists JSON file")
    curate.add_argument("--feed", type=Path, help="Path to the feed JSON file")
    curate.add_argument(
        "--only",
        action="append",
        metavar="NAME",
        help="Process only the named artist (repeatable; matches any known name)",
    )
    curate.add_argument(
        "--replace-history",
        action="store_true",
        help="Ignore the stored feed and write only this run's items",
    )
    curate.add_argument(
        "--images",
        dest="images",
        action="store_true",
        default=None,
        help="Generate illustrations for items without an image",
    )
    curate.add_argument(
        "--no-images",
        dest="images",
        action="store_false",
        help="Do not generate illustrations",
    )
    curate.add_argument(
        "--max-items", type=int, default=None, help="Maximum number of items kept in the feed"
    )

    preview = subparsers.add_parser(
        "preview", help="Show the filtered search results of one artist without curating"
    )
    preview.add_argument("name", help="Artist name as listed in the subjects file")
    preview.add_argument("--subjects", type=Path, help="Path to the artists JSON file")

    show_feed = subparsers.add_parser("show-feed", help="Print the stored feed")
    show_feed.add_argument("--feed", type=Path, help="Path to the feed JSON file")
    show_feed.add_argument("--artist", help="Only items of this artist")
    show_feed.add_argument("--category", help="Only items of this category")
    show_feed.add_argument("--limit", type=int, default=20, help="Number of items shown")

    for sp in (curate, preview, show_feed):
        sp.add_argument(
            "--log-level",
            default=None,
            help="Log level: DEBUG, INFO, WARNING, ERROR (default from NEWSSTREAM_LOG_LEVEL)",
        )

    return parser.parse_args(argv)


def select_subjects(
    subjects: Sequence[SubjectConfig], names: Sequence[str] | None
) -> List[SubjectConfig]:
    """Subjects matching any of ``names`` (case-insensitive); all when empty."""

    if not names:
        return list(subjects)
    wanted = {name.strip().casefold() for name in names}
    return [
        subject
        for subject in subjects
        if any(name.casefold() in wanted for name in subject.search_names())
    ]


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    console = Console()
    try:
        settings = PipelineSettings.from_env()
    except ConfigurationError as exc:
        console.print(f"[red]{exc}[/red]")
        sys.exit(1)

    level_name = getattr(args, "log_level", None) or settings.log_level
    handler = RichHandler(console=console, markup=False, rich_tracebacks=True)
    logging.basicConfig(
        level=getattr(logging, str(level_name).upper(), logging.INFO),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)

    if getattr(args, "subjects", None):
        settings.subjects_file = args.subjects
    if getattr(args, "feed", None):
        settings.feed_file = args.feed

    try:
        if args.command == "curate":
            _run_curate(args, settings, console)
        elif args.command == "preview":
            _run_preview(args, settings, console)
        elif args.command == "show-feed":
            _run_show_feed(args, settings, console)
        else:
            raise ValueError(f"Unknown command: {args.command}")
    except ConfigurationError as exc:
        console.print(f"[red]Configuration error: {exc}[/red]")
        sys.exit(1)
    except FeedStoreError as exc:
        console.print(f"[red]{exc}[/red]")
        sys.exit(1)


def _run_curate(
    args: argparse.Namespace, settings: PipelineSettings, console: Console
) -> None:
    settings.validate()
    subjects = select_subjects(load_subjects(settings.subjects_file), args.only)
    if not subjects:
        console.print("[yellow]No matching artists to process.[/yellow]")
        return

    progress_columns = (
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        TimeElapsedColumn(),
    )
    with Progress(*progress_columns, console=console, transient=True) as progress:
        task_id = progress.add_task("[cyan]Curating news", total=len(subjects))

        def status_handler(message: str) -> None:
            if _SUBJECT_DONE_RE.match(message):
                progress.advance(task_id)

        container = build_pipeline_container(
            settings,
            replace_history=args.replace_history,
            generate_images=args.images,
            max_items=args.max_items,
            status_publisher=status_handler,
        )

        async def run() -> RunReport:
            try:
                return await container.pipeline.run(subjects)
            finally:
                await container.aclose()

        report = asyncio.run(run())

    _print_run_report(report, console)


def _print_run_report(report: RunReport, console: Console) -> None:
    table = Table(title="Curation summary")
    for column in ("Artist", "Raw", "Unique", "Filtered", "Curated", "New", "Error"):
        table.add_column(column)
    for item in report.subjects:
        table.add_row(
            item.subject,
            str(item.raw),
            str(item.deduped),
            str(item.filtered),
            str(item.curated),
            str(item.new),
            item.error or "",
        )
    console.print(table)
    if report.feed_size is None:
        console.print("[yellow]No new items; the feed was not modified.[/yellow]")
    else:
        console.print(
            f"[green]{report.total_new} new items saved; "
            f"the feed holds {report.feed_size} items.[/green]"
        )
    if report.failed_subjects:
        console.print(
            f"[yellow]{len(report.failed_subjects)} artist(s) failed: "
            f"{', '.join(report.failed_subjects)}[/yellow]"
        )


def _run_preview(
    args: argparse.Namespace, settings: PipelineSettings, console: Console
) -> None:
    matches = select_subjects(load_subjects(settings.subjects_file), [args.name])
    if not matches:
        raise ConfigurationError(f"Artist '{args.name}' is not in {settings.subjects_file}")
    subject = matches[0]
    tz = ZoneInfo(settings.timezone)

    async def collect():
        client = build_http_client(settings)
        try:
            sources = build_sources(settings, client)
            raw = []
            for source in sources:
                raw.extend(await source.search(subject, SearchBudget()))
            return raw
        finally:
            await client.aclose()

    with console.status(f"Searching news for {subject.canonical_name}...", spinner="dots"):
        raw = asyncio.run(collect())
    outcome = ResultNormalizer().normalize(raw)
    now = datetime.now(tz)

    table = Table(
        title=f"{subject.canonical_name}: {outcome.raw_count} raw, "
        f"{outcome.deduped_count} unique, {outcome.filtered_count} kept"
    )
    table.add_column("#", justify="right")
    table.add_column("Date")
    table.add_column("Age")
    table.add_column("Host")
    table.add_column("Title")
    for index, result in enumerate(outcome.results, start=1):
        computed = parse_recency(result.recency_hint, now)
        table.add_row(
            str(index),
            computed.isoformat() if computed else "?",
            result.recency_hint or "",
            result.resolved_hostname(),
            result.title,
        )
    console.print(table)


def _run_show_feed(
    args: argparse.Namespace, settings: PipelineSettings, console: Console
) -> None:
    items = JsonFeedRepository(settings.feed_file).load()
    if args.artist:
        wanted = args.artist.casefold()
        items = [item for item in items if item.subject.casefold() == wanted]
    if args.category:
        wanted = args.category.casefold()
        items = [item for item in items if item.category.casefold() == wanted]
    if not items:
        console.print("[yellow]No items found for the given filters.[/yellow]")
        return

    table = Table(title=f"{settings.feed_file} ({len(items)} items)")
    table.add_column("Date")
    table.add_column("Artist")
    table.add_column("Category")
    table.add_column("Imp.", justify="right")
    table.add_column("Title")
    table.add_column("Source")
    for item in items[: max(args.limit, 0)]:
        table.add_row(
            item.date,
            item.subject,
            item.category,
            str(item.importance),
            item.title,
            item.source,
        )
    console.print(table)


if __name__ == "__main__":  # pragma: no cover - manual execution
    main()
