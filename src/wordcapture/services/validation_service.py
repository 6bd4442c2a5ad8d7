"""Drive word candidates through the dictionary port.

Pipeline: candidates → DictionaryPort.lookup() (one at a time by default)
→ validated entries. Invalid words and failed lookups are dropped, never
raised, so a dead dictionary service yields an empty result rather than
an error. validate_word() is the single-word check for interactive adds.
"""

import asyncio
import logging
from collections.abc import AsyncIterator, Callable, Sequence
from dataclasses import dataclass, field

from wordcapture.domain.model.entry import (
    Candidate,
    Entry,
    LookupResult,
    is_valid_headword,
    normalize_headword,
)
from wordcapture.domain.model.errors import InvalidWordError
from wordcapture.port.dictionary import DictionaryPort

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationStep:
    """Outcome of one candidate. ``entry`` is None when it was dropped."""
    index: int
    entry: Entry | None
    completed: int
    total: int

    @property
    def progress(self) -> float:
        return self.completed / self.total if self.total else 1.0


@dataclass
class ValidationReport:
    """Aggregated result of a validation run."""
    entries: list[Entry] = field(default_factory=list)
    total: int = 0
    processed: int = 0
    completed: bool = True

    @property
    def dropped(self) -> int:
        return self.processed - len(self.entries)


class ValidationOrchestrator:
    """Validates candidates against a dictionary with bounded concurrency.

    With the default ``max_concurrency=1`` lookups are strictly sequential:
    the next lookup is only issued after the previous step has been
    consumed. Larger values issue ordered windows of concurrent lookups;
    steps are still yielded in candidate order.
    """

    def __init__(self, dictionary: DictionaryPort, max_concurrency: int = 1):
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        self.dictionary = dictionary
        self.max_concurrency = max_concurrency

    async def stream(
        self,
        candidates: Sequence[Candidate],
        cancel_event: asyncio.Event | None = None,
    ) -> AsyncIterator[ValidationStep]:
        """Yield one ValidationStep per processed candidate, in order.

        Cancellation is checked before each lookup (or window of lookups);
        once ``cancel_event`` is set no further lookups are issued.
        """
        total = len(candidates)
        completed = 0

        for start in range(0, total, self.max_concurrency):
            if cancel_event is not None and cancel_event.is_set():
                logger.info("Validation cancelled", extra={"completed": completed, "total": total})
                return

            window = candidates[start:start + self.max_concurrency]
            if len(window) == 1:
                entries = [await self._validate_one(window[0])]
            else:
                entries = await asyncio.gather(*(self._validate_one(c) for c in window))

            for offset, entry in enumerate(entries):
                completed += 1
                yield ValidationStep(
                    index=start + offset,
                    entry=entry,
                    completed=completed,
                    total=total,
                )

    async def validate_all(
        self,
        candidates: Sequence[Candidate],
        on_progress: Callable[[float], None] | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> ValidationReport:
        """Run the whole pipeline and collect surviving entries.

        Args:
            candidates: Extracted candidates, in display order.
            on_progress: Called with ``completed / total`` after each candidate.
            cancel_event: When set, stops the run between lookups.

        Returns:
            ValidationReport; ``completed`` is False if the run was cancelled
            before every candidate was processed.
        """
        report = ValidationReport(total=len(candidates))

        async for step in self.stream(candidates, cancel_event=cancel_event):
            report.processed = step.completed
            if step.entry is not None:
                report.entries.append(step.entry)
            if on_progress is not None:
                on_progress(step.progress)

        report.completed = report.processed == report.total
        logger.info("Validation finished", extra={
            "total": report.total,
            "processed": report.processed,
            "valid": len(report.entries),
            "completed": report.completed,
        })
        return report

    async def _validate_one(self, candidate: Candidate) -> Entry | None:
        """Look up one candidate. Returns None for anything but a valid word."""
        try:
            result: LookupResult = await self.dictionary.lookup(candidate.headword)
        except Exception as e:
            logger.error(
                "Dictionary lookup raised, dropping candidate",
                extra={"word": candidate.headword, "error": str(e)},
                exc_info=True,
            )
            return None

        if not result.valid:
            logger.debug("Candidate rejected by dictionary", extra={"word": candidate.headword})
            return None

        try:
            return Entry.from_lookup(result, annotation=candidate.annotation)
        except InvalidWordError:
            logger.warning(
                "Dictionary returned an unusable headword",
                extra={"word": candidate.headword, "returned": result.word},
            )
            return None


async def validate_word(dictionary: DictionaryPort, headword: str) -> Entry:
    """Check one typed word against the grammar and the dictionary.

    Unlike the batch pipeline this raises, so an interactive caller can tell
    the user why the word was refused.

    Raises:
        InvalidWordError: Fails the word grammar or the dictionary lookup.
    """
    headword = normalize_headword(headword)
    if not is_valid_headword(headword):
        raise InvalidWordError(headword, "does not look like a word")

    result = await dictionary.lookup(headword)
    if not result.valid:
        logger.info("Word rejected by dictionary", extra={"word": headword})
        raise InvalidWordError(headword, "not found in dictionary")
    return Entry.from_lookup(result)
