"""
Candidate search adapter.

Turns a raw mention string into a ``SearchResponse``: one hit per subject,
keeping the best-scoring match, sorted by descending score. Index failures
are surfaced as ``SearchFailure`` so that callers can tell an outage apart
from a genuine "no match".
"""

import asyncio
import logging
from typing import Dict, List, Optional

from kg_linker.errors import SearchFailure
from kg_linker.search.base import SearchIndex
from kg_linker.types import SearchHit, SearchResponse

logger = logging.getLogger(__name__)


def dedupe_hits(hits: List[SearchHit]) -> List[SearchHit]:
    """Merge hits per subject, keeping the max score and its predicate/object.

    The result is sorted by descending score. Equal scores keep the order in
    which subjects were first seen.
    """
    best: Dict[str, SearchHit] = {}
    for hit in hits:
        existing = best.get(hit.subject)
        if existing is None or hit.score > existing.score:
            best[hit.subject] = hit
    # dict keeps first-seen order for subjects, even when the value is replaced
    return sorted(best.values(), key=lambda h: h.score, reverse=True)


class CandidateSearchAdapter:
    """Queries a search index on behalf of the entity linker."""

    def __init__(self, index: SearchIndex, timeout: Optional[float] = None):
        if index is None:
            raise ValueError("Candidate search requires a search index.")
        self.index = index
        self.timeout = timeout

    async def search(self, text: str) -> SearchResponse:
        try:
            if self.timeout is None:
                raw = await self.index.search(text)
            else:
                raw = await asyncio.wait_for(self.index.search(text), self.timeout)
        except SearchFailure:
            raise
        except asyncio.TimeoutError as exc:
            raise SearchFailure(
                text, f"Search for {text!r} timed out after {self.timeout}s"
            ) from exc
        except Exception as exc:
            raise SearchFailure(text, f"Search for {text!r} failed: {exc}") from exc

        hits = dedupe_hits(list(raw))
        logger.debug(f"Search {text!r}: {len(raw)} raw hits, {len(hits)} subjects")
        return SearchResponse(text=text, hits=hits)
