from typing import List, Optional

from rapidfuzz import fuzz, process, utils

from kg_linker.registry import search_indexes
from kg_linker.triple_stores.base import TripleStore
from kg_linker.types import SearchHit, Triple


@search_indexes.register("fuzzy")
class FuzzySearchIndex:
    """Fuzzy string matching against triple object literals."""

    def __init__(self, store: TripleStore, top_k: int = 20, score_cutoff: float = 70.0):
        if store is None:
            raise ValueError("Fuzzy search requires a triple store.")
        self.store = store
        self.top_k = top_k
        self.score_cutoff = score_cutoff
        self._version: Optional[int] = None
        self._triples: List[Triple] = []
        self._objects: List[str] = []

    def _ensure_index(self) -> None:
        if self._version == self.store.version:
            return
        self._triples = list(self.store.triples())
        self._objects = [t.object for t in self._triples]
        self._version = self.store.version

    async def search(self, query: str) -> List[SearchHit]:
        self._ensure_index()
        if not query.strip() or not self._objects:
            return []
        results = process.extract(
            query,
            self._objects,
            scorer=fuzz.WRatio,
            processor=utils.default_process,
            limit=self.top_k,
            score_cutoff=self.score_cutoff,
        )
        hits: List[SearchHit] = []
        for _, score, idx in results:
            triple = self._triples[idx]
            hits.append(
                SearchHit(
                    subject=triple.subject,
                    score=float(score),
                    predicate=triple.predicate,
                    object=triple.object,
                )
            )
        return hits
