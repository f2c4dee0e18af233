"""Orchestration of a curation run over every configured subject."""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field, replace
from typing import Awaitable, Callable, List, Optional, Sequence

from newsstream.domain import (
    Category,
    ImageGenerator,
    NewsCurator,
    PersistedItem,
    SearchBudget,
    SearchResult,
    SearchSource,
    SubjectConfig,
)

from .feed_store import FeedStore
from .normalizer import ResultNormalizer
from .post_processor import PostProcessor


@dataclass(slots=True)
class SubjectReport:
    """Counters collected while processing one subject."""

    subject: str
    raw: int = 0
    deduped: int = 0
    filtered: int = 0
    curated: int = 0
    new: int = 0
    #: Message of the failure that aborted the subject, if any.
    error: Optional[str] = None


@dataclass(slots=True)
class RunReport:
    """Summary of a whole run."""

    subjects: List[SubjectReport] = field(default_factory=list)
    new_items: List[PersistedItem] = field(default_factory=list)
    #: Size of the feed after the commit; ``None`` when it was left untouched.
    feed_size: Optional[int] = None

    @property
    def total_new(self) -> int:
        return len(self.new_items)

    @property
    def failed_subjects(self) -> List[str]:
        return [report.subject for report in self.subjects if report.error]


class CurationPipeline:
    """Runs search, filtering, curation and post-processing per subject.

    Subjects are processed sequentially. A failure while handling one subject
    is logged and recorded in its report; the run continues with the next
    subject. The feed is written once, after the last subject.
    """

    def __init__(
        self,
        sources: Sequence[SearchSource],
        normalizer: ResultNormalizer,
        curator: NewsCurator,
        post_processor: PostProcessor,
        feed_store: FeedStore,
        image_generator: ImageGenerator | None = None,
        *,
        budget: SearchBudget | None = None,
        subject_delay: float = 2.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        status_publisher: Callable[[str], None] | None = None,
    ) -> None:
        """Wire the pipeline stages.

        Args:
            sources: Adapters queried for every subject, in order.
            normalizer: Dedup and coarse filter applied to the merged results.
            curator: Generative step turning results into news items.
            post_processor: Cross-run duplicate check and identity stamping.
            feed_store: Reads the history and writes the merged feed.
            image_generator: Optional illustrator for items without an image.
            budget: Result budget passed to every adapter.
            subject_delay: Seconds to wait after each subject.
            sleep: Coroutine used to wait; replaced in tests.
            status_publisher: Optional callback receiving progress messages.
        """

        self._sources = list(sources)
        self._normalizer = normalizer
        self._curator = curator
        self._post_processor = post_processor
        self._feed_store = feed_store
        self._image_generator = image_generator
        self._budget = budget or SearchBudget()
        self._subject_delay = subject_delay
        self._sleep = sleep
        self._status_publisher = status_publisher
        self._log = logging.getLogger("newsstream.pipeline")

    def _publish(self, message: str) -> None:
        self._log.info(message)
        if self._status_publisher:
            self._status_publisher(message)

    async def gather_results(self, subject: SubjectConfig) -> List[SearchResult]:
        """Concatenate the output of every source; a failing source adds nothing."""

        collected: List[SearchResult] = []
        for source in self._sources:
            try:
                found = await source.search(subject, self._budget)
            except Exception:
                self._log.exception(
                    "Source '%s' failed for %s", getattr(source, "name", source), subject.canonical_name
                )
                continue
            self._log.debug(
                "%s: %d results from %s", subject.canonical_name, len(found), getattr(source, "name", source)
            )
            collected.extend(found)
        return collected

    async def run(self, subjects: Sequence[SubjectConfig]) -> RunReport:
        """Process ``subjects`` and commit the new items to the feed.

        Raises:
            FeedStoreError: When the final feed write fails.
        """

        history = self._feed_store.load_history()
        seen_urls = {item.url for item in history}
        report = RunReport()
        self._publish(
            f"Starting curation of {len(subjects)} subjects ({len(history)} items in history)"
        )

        for position, subject in enumerate(subjects, start=1):
            subject_report = SubjectReport(subject=subject.canonical_name)
            report.subjects.append(subject_report)
            self._publish(f"[{position}/{len(subjects)}] {subject.canonical_name}")
            try:
                accepted = await self._process_subject(subject, seen_urls, subject_report)
            except Exception as exc:
                self._log.exception("Processing failed for %s", subject.canonical_name)
                subject_report.error = str(exc) or type(exc).__name__
            else:
                report.new_items.extend(accepted)
            if self._subject_delay > 0:
                await self._sleep(self._subject_delay)

        merged = self._feed_store.commit(history, report.new_items)
        if merged is None:
            self._publish("No new items; the feed was left untouched")
        else:
            report.feed_size = len(merged)
            self._publish(
                f"Saved {report.total_new} new items; the feed now holds {len(merged)} items"
            )
        return report

    async def _process_subject(
        self,
        subject: SubjectConfig,
        seen_urls: set[str],
        subject_report: SubjectReport,
    ) -> List[PersistedItem]:
        raw = await self.gather_results(subject)
        outcome = self._normalizer.normalize(raw)
        subject_report.raw = outcome.raw_count
        subject_report.deduped = outcome.deduped_count
        subject_report.filtered = outcome.filtered_count
        self._publish(
            f"{subject.canonical_name}: {outcome.raw_count} results, "
            f"{outcome.deduped_count} unique, {outcome.filtered_count} after filtering"
        )

        curated = await self._curator.curate(subject, outcome.results)
        subject_report.curated = len(curated)

        processed = self._post_processor.process(subject, curated, seen_urls)
        accepted = [await self._illustrate(item) for item in processed.accepted]
        subject_report.new = len(accepted)
        self._publish(
            f"{subject.canonical_name}: {len(curated)} curated, {len(accepted)} new, "
            f"{len(processed.duplicates)} duplicates"
        )
        return accepted

    async def _illustrate(self, item: PersistedItem) -> PersistedItem:
        if self._image_generator is None or item.image_url:
            return item
        try:
            category = Category(item.category)
        except ValueError:
            category = Category.OTHER
        try:
            image_url = await self._image_generator.generate(
                title=item.title, summary=item.summary, category=category
            )
        except Exception:
            self._log.warning(
                "Image generation failed for %s; keeping the item without an image",
                item.url,
                exc_info=True,
            )
            return item
        if not image_url:
            return item
        return replace(item, image_url=image_url)


__all__ = ["CurationPipeline", "RunReport", "SubjectReport"]
