from typing import List, Protocol

from kg_linker.types import SearchHit


class SearchIndex(Protocol):
    """Scored full-text search over the objects of stored triples.

    May return several hits for the same subject (one per matching triple).
    Reads must be safe to run concurrently.
    """

    async def search(self, query: str) -> List[SearchHit]:
        ...
