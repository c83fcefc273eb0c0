import re
from typing import List, Optional, Set

from rank_bm25 import BM25Plus

from kg_linker.registry import search_indexes
from kg_linker.triple_stores.base import TripleStore
from kg_linker.types import SearchHit, Triple

_WORD = re.compile(r"\w+")


def _tokenize(text: str) -> List[str]:
    return _WORD.findall(text.lower())


@search_indexes.register("bm25")
class BM25SearchIndex:
    """BM25+ over triple object literals.

    Only triples sharing at least one token with the query are returned.
    BM25+ keeps scores positive on tiny corpora, where plain BM25 IDF goes
    negative.
    """

    def __init__(self, store: TripleStore, top_k: int = 20):
        if store is None:
            raise ValueError("BM25 search requires a triple store.")
        self.store = store
        self.top_k = top_k
        self._version: Optional[int] = None
        self._triples: List[Triple] = []
        self._token_sets: List[Set[str]] = []
        self._bm25: Optional[BM25Plus] = None

    def _ensure_index(self) -> None:
        if self._version == self.store.version:
            return
        triples = []
        corpus = []
        for triple in self.store.triples():
            tokens = _tokenize(triple.object)
            if tokens:
                triples.append(triple)
                corpus.append(tokens)
        self._triples = triples
        self._token_sets = [set(tokens) for tokens in corpus]
        self._bm25 = BM25Plus(corpus) if corpus else None
        self._version = self.store.version

    async def search(self, query: str) -> List[SearchHit]:
        self._ensure_index()
        tokens = _tokenize(query)
        if not tokens or self._bm25 is None:
            return []
        query_tokens = set(tokens)
        scores = self._bm25.get_scores(tokens)
        matched = [
            (idx, float(scores[idx]))
            for idx, doc_tokens in enumerate(self._token_sets)
            if query_tokens & doc_tokens
        ]
        # sort is stable, ties keep store order
        matched.sort(key=lambda pair: pair[1], reverse=True)
        hits: List[SearchHit] = []
        for idx, score in matched[: self.top_k]:
            triple = self._triples[idx]
            hits.append(
                SearchHit(
                    subject=triple.subject,
                    score=score,
                    predicate=triple.predicate,
                    object=triple.object,
                )
            )
        return hits
