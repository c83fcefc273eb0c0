from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class Document:
    """Single document item."""

    id: Optional[str]
    text: str
    meta: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Offset:
    """Position of a mention within its source text."""

    index: int
    start: int
    length: int

    def __post_init__(self) -> None:
        if self.start < 0:
            raise ValueError(f"Offset start must be >= 0, got {self.start}")
        if self.length <= 0:
            raise ValueError(f"Offset length must be > 0, got {self.length}")

    @property
    def end(self) -> int:
        return self.start + self.length


@dataclass(frozen=True)
class EntityMention:
    """Candidate surface form recognized in text."""

    text: str
    offset: Offset
    label: Optional[str] = None

    def within(self, text_length: int) -> bool:
        return self.offset.end <= text_length


@dataclass(frozen=True)
class SearchHit:
    """Candidate subject returned by a search index."""

    subject: str
    score: float
    predicate: Optional[str] = None
    object: Optional[str] = None


@dataclass(frozen=True)
class SearchResponse:
    """Ranked, deduplicated candidates for one mention text."""

    text: str
    hits: List[SearchHit] = field(default_factory=list)


@dataclass(frozen=True)
class LinkedEntity:
    """Mention paired with its resolved subject.

    ``hit`` is the matching search hit, or ``None`` when no existing graph
    entity was selected. ``subject`` is set whenever a policy produced an
    identifier, including minted or manually entered ones that have no hit.
    """

    entity: EntityMention
    hit: Optional[SearchHit]
    subject: Optional[str] = None

    @property
    def is_linked(self) -> bool:
        return self.hit is not None

    @property
    def is_minted(self) -> bool:
        return self.hit is None and self.subject is not None


@dataclass(frozen=True)
class Triple:
    """RDF triple as stored in the search-backed triple store."""

    subject: str
    predicate: str
    object: str


@dataclass(frozen=True)
class ExtractedEntity:
    """Entity slot read out of a placeholder-laden Turtle fragment.

    ``named`` is false when the fragment gives no ``schema:name`` and
    ``entity_name`` is only a stand-in label.
    """

    placeholder_id: str
    entity_type: str
    entity_name: str
    named: bool = True
