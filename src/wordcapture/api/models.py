"""Pydantic models for API request/response."""

from datetime import datetime
from typing import Optional, Literal
from pydantic import BaseModel, Field

from wordcapture.domain.model.collection import Collection
from wordcapture.domain.model.entry import Entry


class EntryResponse(BaseModel):
    """Response model for a word entry."""
    id: str = Field(..., description="Entry ID")
    headword: str = Field(..., description="Lowercase headword")
    definition: str = ""
    annotation: str = Field("", description="User note, e.g. a translation")
    phonetic: str = ""
    audio_url: str = ""
    created_at: datetime

    @classmethod
    def from_domain(cls, entry: Entry) -> 'EntryResponse':
        return cls(
            id=entry.id,
            headword=entry.headword,
            definition=entry.definition,
            annotation=entry.annotation,
            phonetic=entry.phonetic,
            audio_url=entry.audio_url,
            created_at=entry.created_at,
        )


class EntryPayload(BaseModel):
    """A previously validated entry sent back for commit."""
    id: str
    headword: str = Field(..., min_length=1, max_length=100)
    definition: str = ""
    annotation: str = ""
    phonetic: str = ""
    audio_url: str = ""
    created_at: datetime

    def to_domain(self) -> Entry:
        return Entry(**self.model_dump())


class CollectionResponse(BaseModel):
    """Response model for a word list (or the draft)."""
    id: str = Field(..., description="Collection ID")
    title: str
    entries: list[EntryResponse]
    entry_count: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, collection: Collection) -> 'CollectionResponse':
        return cls(
            id=collection.id,
            title=collection.title,
            entries=[EntryResponse.from_domain(e) for e in collection.entries],
            entry_count=len(collection.entries),
            created_at=collection.created_at,
            updated_at=collection.updated_at,
        )


class CollectionGroupResponse(BaseModel):
    """A labelled group of word lists (by recency bucket or month)."""
    label: str
    collections: list[CollectionResponse]


class DraftResponse(BaseModel):
    state: str = Field(..., description="empty, capturing, committing or discarding")
    draft: CollectionResponse


class RenameRequest(BaseModel):
    title: str = Field(..., max_length=200)


class AddWordRequest(BaseModel):
    word: str = Field(..., min_length=1, max_length=100, description="Word to capture")


class AnnotationRequest(BaseModel):
    annotation: str = Field(..., max_length=2000)


class DeleteCollectionsRequest(BaseModel):
    ids: list[str] = Field(..., min_length=1)


class ImportTextRequest(BaseModel):
    text: str = Field(..., min_length=1, max_length=200_000, description="One word per line")


class ImportPreviewResponse(BaseModel):
    candidate_count: int
    processed: int
    rejected_count: int
    completed: bool
    entries: list[EntryResponse]


class ImportCommitRequest(BaseModel):
    title: str = Field("", max_length=200)
    entries: list[EntryPayload]


class ContainingResponse(BaseModel):
    headword: str
    title: Optional[str] = Field(None, description="Title of the word list containing it")


GroupBy = Literal["recency", "month"]
