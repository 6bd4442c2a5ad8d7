"""Bulk import: paste or load a word list and commit it as a new collection.

Pipeline: text → extract() → ValidationOrchestrator → preview → commit()
"""

import asyncio
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from wordcapture.domain.model.collection import Collection
from wordcapture.domain.model.entry import Entry
from wordcapture.port.dictionary import DictionaryPort
from wordcapture.services.collection_store import CollectionStore
from wordcapture.services.extraction import extract
from wordcapture.services.validation_service import ValidationOrchestrator, ValidationReport

logger = logging.getLogger(__name__)


@dataclass
class ImportPreview:
    """Validated entries ready for review before committing."""
    candidate_count: int
    report: ValidationReport

    @property
    def entries(self) -> list[Entry]:
        return self.report.entries

    @property
    def rejected_count(self) -> int:
        return self.report.dropped


class ImportService:
    def __init__(
        self,
        dictionary: DictionaryPort,
        store: CollectionStore,
        max_concurrency: int = 1,
    ):
        self.store = store
        self.orchestrator = ValidationOrchestrator(dictionary, max_concurrency=max_concurrency)

    async def preview(
        self,
        text: str,
        on_progress: Callable[[float], None] | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> ImportPreview:
        candidates = extract(text)
        logger.info("Import candidates extracted", extra={"candidate_count": len(candidates)})
        report = await self.orchestrator.validate_all(
            candidates, on_progress=on_progress, cancel_event=cancel_event,
        )
        return ImportPreview(candidate_count=len(candidates), report=report)

    def commit(self, entries: Sequence[Entry], title: str = "") -> Collection | None:
        """Save the selected entries as a new word list.

        Returns None (and saves nothing) when no entries are selected.
        """
        if not entries:
            return None
        return self.store.save(Collection.new(title=title, entries=entries))
